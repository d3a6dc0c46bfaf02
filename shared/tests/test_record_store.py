"""Tests for writing records to the external store."""

import pytest
from shefa.enums import Planet, Sign
from shefa.errors import ErrorKind, RecordStoreError
from shefa.schemas.records import BirthChartRecord, StoredPlacement, TransitReadingRecord
from shefa.services.record_store import BIRTH_CHARTS, TRANSIT_READINGS, log_transit_reading, save_birth_chart


class MemoryStore:
    def __init__(self, fail=False):
        self.fail = fail
        self.rows = {}
        self.log = []

    async def put(self, collection, key, record):
        if self.fail:
            raise RecordStoreError("store unavailable")
        self.rows[(collection, key)] = record

    async def append(self, collection, record):
        if self.fail:
            raise RecordStoreError("store unavailable")
        self.log.append((collection, record))


def _birth_record():
    return BirthChartRecord(
        user_id="user-1",
        birth_date_time="1992-11-25T14:42:00-05:00",
        latitude=33.04,
        longitude=-85.03,
        timezone="America/New_York",
        natal_planets={Planet.SUN: StoredPlacement(sign=Sign.SAGITTARIUS, degree=3.4, house=9)},
        ascendant_sign=Sign.ARIES,
        ascendant_degree=12.5,
        midheaven_sign=Sign.CAPRICORN,
        midheaven_degree=3.0,
        house_cusps=[(12.5 + 30 * i) % 360 for i in range(12)],
    )


@pytest.mark.asyncio
async def test_save_birth_chart_writes_json_record():
    store = MemoryStore()
    record = _birth_record()

    result = await save_birth_chart(store, record)

    assert result.ok
    assert result.value is record
    saved = store.rows[(BIRTH_CHARTS, "user-1")]
    assert saved["natal_planets"]["Sun"] == {"sign": "Sagittarius", "degree": 3.4, "house": 9}


@pytest.mark.asyncio
async def test_failed_save_keeps_the_computed_record():
    record = _birth_record()
    before = record.model_dump()

    result = await save_birth_chart(MemoryStore(fail=True), record)

    assert result.value.model_dump() == before
    assert [issue.kind for issue in result.issues] == [ErrorKind.PERSISTENCE_FAILURE]
    assert result.issues[0].message == "store unavailable"


@pytest.mark.asyncio
async def test_log_transit_reading():
    record = TransitReadingRecord(
        user_id="user-1",
        reading_date="2026-10-17",
        transit_positions={Planet.MOON: StoredPlacement(sign=Sign.TAURUS, degree=20.0)},
        message_title="Your Personal Sky Today",
    )
    store = MemoryStore()

    result = await log_transit_reading(store, record)
    assert result.ok
    assert store.log == [(TRANSIT_READINGS, record.model_dump(mode="json"))]

    failed = await log_transit_reading(MemoryStore(fail=True), record)
    assert failed.issues[0].subject == TRANSIT_READINGS
