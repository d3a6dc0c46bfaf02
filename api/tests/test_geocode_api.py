"""Tests for the reverse geocoding endpoint."""

import pytest
from api.routers import geocode
from shefa.errors import ErrorKind, Result


@pytest.mark.asyncio
async def test_reverse_geocode(client, monkeypatch):
    async def fake_reverse(latitude, longitude, *, settings=None):
        return Result(value="Jerusalem, Israel")

    monkeypatch.setattr(geocode, "reverse_geocode", fake_reverse)
    resp = await client.get("/v1/geocode/reverse", params={"latitude": 31.77, "longitude": 35.21})
    assert resp.status_code == 200
    assert resp.json()["place_name"] == "Jerusalem, Israel"


@pytest.mark.asyncio
async def test_reverse_geocode_failure_is_advisory(client, monkeypatch):
    async def fake_reverse(latitude, longitude, *, settings=None):
        result = Result(value=None)
        result.add_issue(ErrorKind.GEOCODING_FAILURE, "geocode", "timeout")
        return result

    monkeypatch.setattr(geocode, "reverse_geocode", fake_reverse)
    resp = await client.get("/v1/geocode/reverse", params={"latitude": 31.77, "longitude": 35.21})
    assert resp.status_code == 200
    body = resp.json()
    assert body["place_name"] is None
    assert body["issues"][0]["kind"] == "geocoding_failure"
