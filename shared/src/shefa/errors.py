"""Error taxonomy shared by every Shefa component.

Invalid input is rejected with an exception before any computation starts.
Everything else (an unknown timezone, a planet the ephemeris could not
compute, a failed LLM call) is recoverable: the operation returns what it
could compute together with a list of ``CalculationIssue`` records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(StrEnum):
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED_TIMEZONE = "unsupported_timezone"
    POLAR_LATITUDE = "polar_latitude"
    EPHEMERIS_FAILURE = "ephemeris_failure"
    LLM_FAILURE = "llm_failure"
    GEOCODING_FAILURE = "geocoding_failure"
    PERSISTENCE_FAILURE = "persistence_failure"


class ShefaError(Exception):
    """Base class for errors raised to callers."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class InvalidInputError(ShefaError):
    """A required field is missing or malformed."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, field_name: str, message: str | None = None) -> None:
        self.field = field_name
        super().__init__(message or f"'{field_name}' is missing or invalid")


class LLMResponseError(ShefaError):
    """The LLM endpoint failed or returned something we could not use."""

    kind = ErrorKind.LLM_FAILURE


class RecordStoreError(ShefaError):
    """The external record store rejected or failed a write."""

    kind = ErrorKind.PERSISTENCE_FAILURE


class CalculationIssue(BaseModel):
    """A recoverable failure of one independent unit of work."""

    kind: ErrorKind
    subject: str
    message: str


@dataclass
class Result(Generic[T]):
    """A value plus the recoverable issues met while computing it."""

    value: T
    issues: list[CalculationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def add_issue(self, kind: ErrorKind, subject: str, message: str) -> None:
        self.issues.append(CalculationIssue(kind=kind, subject=subject, message=message))
