"""Writes computed records to the external keyed-record store.

The store is a collaborator: anything with async ``put`` and ``append``
methods. A failed write never alters the record that was computed; the
caller gets it back together with a ``persistence_failure`` issue.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from shefa.errors import ErrorKind, RecordStoreError, Result
from shefa.schemas.records import BirthChartRecord, TransitReadingRecord

logger = logging.getLogger(__name__)

BIRTH_CHARTS = "birth_charts"
TRANSIT_READINGS = "transit_readings"


class RecordStore(Protocol):
    async def put(self, collection: str, key: str, record: dict[str, Any]) -> None: ...

    async def append(self, collection: str, record: dict[str, Any]) -> None: ...


async def save_birth_chart(store: RecordStore, record: BirthChartRecord) -> Result[BirthChartRecord]:
    """Upsert the one birth chart record kept per user."""
    result = Result(value=record)
    try:
        await store.put(BIRTH_CHARTS, record.user_id, record.model_dump(mode="json"))
    except RecordStoreError as exc:
        logger.error("Saving birth chart for %s failed: %s", record.user_id, exc)
        result.add_issue(ErrorKind.PERSISTENCE_FAILURE, BIRTH_CHARTS, str(exc))
    return result


async def log_transit_reading(store: RecordStore, record: TransitReadingRecord) -> Result[TransitReadingRecord]:
    """Append a transit reading to the user's log."""
    result = Result(value=record)
    try:
        await store.append(TRANSIT_READINGS, record.model_dump(mode="json"))
    except RecordStoreError as exc:
        logger.error("Logging transit reading for %s failed: %s", record.user_id, exc)
        result.add_issue(ErrorKind.PERSISTENCE_FAILURE, TRANSIT_READINGS, str(exc))
    return result
