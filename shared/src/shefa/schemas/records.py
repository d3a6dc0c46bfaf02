"""Records exchanged with the external keyed-record store.

One birth chart record per user and an append-only log of transit readings.
The store itself is not part of Shefa; these models only fix the JSON shape.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from shefa.enums import Planet, Sign
from shefa.schemas.chart import NatalChart, TransitReport
from shefa.schemas.readings import TransitMessage


class StoredPlacement(BaseModel):
    sign: Sign
    degree: float
    house: int | None = None


class BirthChartRecord(BaseModel):
    user_id: str
    birth_date_time: str
    birth_city: str = ""
    birth_country: str = ""
    latitude: float
    longitude: float
    timezone: str
    natal_planets: dict[Planet, StoredPlacement]
    ascendant_sign: Sign
    ascendant_degree: float
    midheaven_sign: Sign
    midheaven_degree: float
    house_cusps: list[float] = Field(min_length=12, max_length=12)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_natal_chart(cls, user_id: str, natal: NatalChart) -> BirthChartRecord:
        chart = natal.chart
        return cls(
            user_id=user_id,
            birth_date_time=natal.calculation_metadata.birth_datetime_local,
            birth_city=natal.request.city,
            birth_country=natal.request.country,
            latitude=natal.request.latitude,
            longitude=natal.request.longitude,
            timezone=natal.calculation_metadata.timezone,
            natal_planets={
                p.body: StoredPlacement(sign=p.sign, degree=p.degree_in_sign, house=p.house)
                for p in chart.placements
            },
            ascendant_sign=chart.ascendant.sign,
            ascendant_degree=chart.ascendant.degree,
            midheaven_sign=chart.midheaven.sign,
            midheaven_degree=chart.midheaven.degree,
            house_cusps=list(chart.house_cusps),
        )


class TransitReadingRecord(BaseModel):
    user_id: str
    reading_date: str
    transit_positions: dict[Planet, StoredPlacement]
    active_houses: list[int] = Field(default_factory=list)
    message_title: str = ""
    key_transits: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_report(cls, user_id: str, report: TransitReport, message: TransitMessage) -> TransitReadingRecord:
        return cls(
            user_id=user_id,
            reading_date=report.transit.instant.date().isoformat(),
            transit_positions={
                p.body: StoredPlacement(sign=p.sign, degree=p.degree_in_sign, house=p.house)
                for p in report.transit.placements
            },
            active_houses=list(report.active_houses),
            message_title=message.title,
            key_transits=list(message.key_transits),
        )
