"""Reverse geocoding for display-only place names."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from shefa.config import Settings, get_settings
from shefa.errors import ErrorKind, Result

logger = logging.getLogger(__name__)


def _place_name(body: dict[str, Any]) -> str | None:
    address = body.get("address")
    if isinstance(address, dict):
        locality = (
            address.get("city")
            or address.get("town")
            or address.get("village")
            or address.get("hamlet")
            or address.get("county")
            or address.get("state")
        )
        country = address.get("country")
        parts = [str(p) for p in (locality, country) if p]
        if parts:
            return ", ".join(parts)
    display = body.get("display_name")
    if isinstance(display, str) and display.strip():
        return display.strip()
    return None


async def reverse_geocode(
    latitude: float,
    longitude: float,
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Result[str | None]:
    """Look up a human-readable place name for coordinates.

    The name is advisory; any failure yields ``None`` plus a
    ``geocoding_failure`` issue.
    """
    settings = settings or get_settings()
    result: Result[str | None] = Result(value=None)
    params = {"lat": latitude, "lon": longitude, "format": "jsonv2", "zoom": 10}
    headers = {"User-Agent": settings.geocoding_user_agent}

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=settings.geocoding_timeout_seconds)
    try:
        response = await http.get(settings.geocoding_url, params=params, headers=headers)
        response.raise_for_status()
        body = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Reverse geocoding failed for %.4f,%.4f: %s", latitude, longitude, exc)
        result.add_issue(ErrorKind.GEOCODING_FAILURE, "geocode", str(exc) or type(exc).__name__)
        return result
    finally:
        if owns_client:
            await http.aclose()

    name = _place_name(body) if isinstance(body, dict) else None
    if name is None:
        result.add_issue(ErrorKind.GEOCODING_FAILURE, "geocode", "No place name in response")
    result.value = name
    return result
