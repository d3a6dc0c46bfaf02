"""API test configuration."""

import json

import pytest
from api.dependencies import get_ephemeris_provider, get_llm_client
from api.main import create_app
from httpx import ASGITransport, AsyncClient
from shefa.enums import Planet
from shefa.errors import LLMResponseError
from shefa.schemas.chart import CelestialPosition

SKY_LONGITUDES = {
    Planet.SUN: 15.0,
    Planet.MOON: 135.0,
    Planet.MERCURY: 20.0,
    Planet.VENUS: 75.0,
    Planet.MARS: 195.0,
    Planet.JUPITER: 255.0,
    Planet.SATURN: 322.0,
    Planet.URANUS: 48.0,
    Planet.NEPTUNE: 357.0,
    Planet.PLUTO: 300.0,
}


def fixed_provider(body, jd_ut):
    speed = -0.2 if body == Planet.MERCURY else 1.0
    return CelestialPosition(
        body=body,
        longitude=SKY_LONGITUDES[body],
        speed_deg_day=speed,
        retrograde=speed < 0,
    )


class FakeLLMClient:
    """Minimal stand-in for LLMClient replaying queued responses."""

    def __init__(self):
        self.responses = []
        self.calls = []

    async def generate(self, messages, *, temperature=None, max_tokens=None, response_format=None):
        self.calls.append(messages)
        if not self.responses:
            raise LLMResponseError("LLM API request failed (503)")
        response = self.responses.pop(0)
        return json.dumps(response) if isinstance(response, dict) else response

    async def close(self):
        return None


@pytest.fixture
def llm():
    return FakeLLMClient()


@pytest.fixture
def app(llm):
    a = create_app()
    a.dependency_overrides[get_ephemeris_provider] = lambda: fixed_provider
    a.dependency_overrides[get_llm_client] = lambda: llm
    return a


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
