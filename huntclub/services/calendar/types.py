from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from huntclub.domain.schemas.calendar import CalendarEvent

DEFAULT_API_BASE_URL = "https://www.googleapis.com/calendar/v3"


@dataclass(frozen=True)
class CalendarSource:
    id: str
    display_name: str


class FailureKind(str, Enum):
    UNREACHABLE = "unreachable"
    REJECTED = "rejected"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class SourceFailure:
    kind: FailureKind
    message: str
    status_code: int | None = None
    source_id: str = ""
    calendar_name: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "sourceId": self.source_id,
            "calendarName": self.calendar_name,
            "kind": self.kind.value,
            "message": self.message,
            "statusCode": self.status_code,
        }


@dataclass(frozen=True)
class SourceReport:
    source: CalendarSource
    event_count: int = 0
    failure: SourceFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class AggregationResult:
    events: list[CalendarEvent] = field(default_factory=list)
    reports: list[SourceReport] = field(default_factory=list)
    skipped: int = 0

    @property
    def failures(self) -> list[SourceFailure]:
        return [report.failure for report in self.reports if report.failure is not None]


@dataclass(frozen=True)
class CalendarConfig:
    """Everything the aggregator needs, resolved once from settings.

    The aggregation core only ever sees this struct; it never reads the
    environment itself.
    """

    api_key: str | None
    sources: tuple[CalendarSource, ...] = ()
    api_base_url: str = DEFAULT_API_BASE_URL
    max_results: int = 100
    timeout_s: float = 10.0
    sort_chronologically: bool = True

    @property
    def enabled(self) -> bool:
        return bool(self.api_key) and bool(self.sources)

    @classmethod
    def from_settings(cls, settings: Any) -> "CalendarConfig":
        candidates = [
            (settings.GOOGLE_CALENDAR_ID, settings.GOOGLE_CALENDAR_NAME),
            (settings.GOOGLE_CALENDAR_HOLIDAYS_ID, settings.GOOGLE_CALENDAR_HOLIDAYS_NAME),
            (settings.GOOGLE_CALENDAR_ID_2, settings.GOOGLE_CALENDAR_NAME_2),
        ]
        sources = tuple(
            CalendarSource(id=source_id.strip(), display_name=name)
            for source_id, name in candidates
            if source_id and source_id.strip()
        )
        return cls(
            api_key=settings.GOOGLE_CALENDAR_API_KEY or None,
            sources=sources,
            api_base_url=settings.GOOGLE_CALENDAR_API_BASE_URL,
            max_results=settings.GOOGLE_CALENDAR_MAX_RESULTS,
            timeout_s=settings.CALENDAR_REQUEST_TIMEOUT_S,
            sort_chronologically=settings.CALENDAR_SORT_CHRONOLOGICAL,
        )
