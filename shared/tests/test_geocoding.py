"""Tests for advisory reverse geocoding."""

import httpx
import pytest
from shefa.config import Settings
from shefa.errors import ErrorKind
from shefa.services.geocoding import reverse_geocode

SETTINGS = Settings(_env_file=None)


@pytest.mark.asyncio
async def test_reverse_geocode_builds_place_name():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["lat"] == "31.77"
        assert request.headers["User-Agent"] == SETTINGS.geocoding_user_agent
        return httpx.Response(200, json={"address": {"town": "Safed", "country": "Israel"}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await reverse_geocode(31.77, 35.21, settings=SETTINGS, client=client)

    assert result.value == "Safed, Israel"
    assert result.ok


@pytest.mark.asyncio
async def test_reverse_geocode_falls_back_to_display_name():
    def handler(request):
        return httpx.Response(200, json={"display_name": " Open sea "})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await reverse_geocode(0.0, -30.0, settings=SETTINGS, client=client)

    assert result.value == "Open sea"


@pytest.mark.asyncio
async def test_reverse_geocode_failure_is_an_issue():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await reverse_geocode(31.77, 35.21, settings=SETTINGS, client=client)

    assert result.value is None
    assert result.issues[0].kind == ErrorKind.GEOCODING_FAILURE


@pytest.mark.asyncio
async def test_reverse_geocode_empty_body_is_an_issue():
    def handler(request):
        return httpx.Response(200, json={})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await reverse_geocode(31.77, 35.21, settings=SETTINGS, client=client)

    assert result.value is None
    assert result.issues[0].message == "No place name in response"
