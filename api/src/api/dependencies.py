"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from ephemeris.calculator import EphemerisProvider, swisseph_provider
from shefa.config import Settings, get_settings
from shefa.services.llm_client import LLMClient


def get_app_settings() -> Settings:
    return get_settings()


def get_ephemeris_provider() -> EphemerisProvider:
    return swisseph_provider


async def get_llm_client() -> AsyncGenerator[LLMClient, None]:
    client = LLMClient.from_settings()
    try:
        yield client
    finally:
        await client.close()
