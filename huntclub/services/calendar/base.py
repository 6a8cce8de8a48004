from typing import Any, Protocol

from huntclub.services.calendar.types import SourceFailure


class CalendarSourceClient(Protocol):
    def fetch_events(
        self,
        source_id: str,
        range_start: str,
        range_end: str,
    ) -> list[Any] | SourceFailure:
        ...
