"""Shared fixtures for reading tests."""

import json

import pytest
from ephemeris.bodies import longitude_to_sign
from shefa.errors import LLMResponseError
from shefa.schemas.chart import PlanetPlacement


def placement(body, longitude, house=None, retrograde=False):
    sign, degree = longitude_to_sign(longitude)
    return PlanetPlacement(
        body=body,
        sign=sign,
        degree_in_sign=degree,
        longitude=longitude,
        retrograde=retrograde,
        house=house,
    )


class FakeLLMClient:
    """Replays canned responses; an exception in the queue is raised instead."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def generate(self, messages, *, temperature=None, max_tokens=None, response_format=None):
        self.calls.append({"messages": messages, "response_format": response_format})
        if not self.responses:
            raise LLMResponseError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response

    async def close(self):
        return None


@pytest.fixture
def make_placement():
    return placement


@pytest.fixture
def fake_llm():
    return FakeLLMClient
