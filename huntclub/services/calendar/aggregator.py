from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timezone
import logging
from typing import Any

from huntclub.domain.schemas.calendar import CalendarEvent
from huntclub.services.calendar.base import CalendarSourceClient
from huntclub.services.calendar.google_calendar_service import GoogleCalendarClient
from huntclub.services.calendar.mapper import provider_event_to_calendar_event
from huntclub.services.calendar.types import (
    AggregationResult,
    CalendarConfig,
    CalendarSource,
    FailureKind,
    SourceFailure,
    SourceReport,
)

logger = logging.getLogger(__name__)


class CalendarAggregator:
    """Fan out to every configured calendar and merge what comes back.

    A source that fails contributes nothing and never affects the other
    sources. Failures are logged and returned as ``SourceReport`` entries;
    ``get_events`` hides them from callers entirely.
    """

    def __init__(
        self,
        config: CalendarConfig,
        client: CalendarSourceClient | None = None,
    ) -> None:
        self.config = config
        if client is None and config.api_key:
            client = GoogleCalendarClient(
                api_key=config.api_key,
                base_url=config.api_base_url,
                max_results=config.max_results,
                timeout=config.timeout_s,
            )
        self.client = client

    def get_events(self, range_start: str, range_end: str) -> list[CalendarEvent]:
        return self.collect(range_start, range_end).events

    def collect(self, range_start: str, range_end: str) -> AggregationResult:
        if not self.config.api_key or self.client is None:
            logger.info("Calendar aggregation disabled: api key not configured")
            return AggregationResult()
        sources = list(self.config.sources)
        if not sources:
            logger.info("Calendar aggregation disabled: no calendar sources configured")
            return AggregationResult()

        outcomes = self._fetch_all(sources, range_start, range_end)

        result = AggregationResult()
        for source, outcome in zip(sources, outcomes):
            if isinstance(outcome, SourceFailure):
                failure = replace(outcome, source_id=source.id, calendar_name=source.display_name)
                _log_failure(failure)
                result.reports.append(SourceReport(source=source, failure=failure))
                continue

            events = [
                provider_event_to_calendar_event(raw, source.display_name)
                for raw in outcome
                if isinstance(raw, dict)
            ]
            usable = [event for event in events if event.start]
            dropped = len(outcome) - len(usable)
            if dropped:
                logger.debug(
                    "Dropped provider records source=%s not_object=%s no_start=%s",
                    source.id,
                    len(outcome) - len(events),
                    len(events) - len(usable),
                )
            result.skipped += dropped
            result.events.extend(usable)
            result.reports.append(SourceReport(source=source, event_count=len(usable)))

        if self.config.sort_chronologically:
            result.events.sort(key=_start_sort_key)

        logger.info(
            "Calendar aggregation range=%s..%s sources=%s failed=%s events=%s",
            range_start,
            range_end,
            len(sources),
            len(result.failures),
            len(result.events),
        )
        return result

    def _fetch_all(
        self,
        sources: list[CalendarSource],
        range_start: str,
        range_end: str,
    ) -> list[list[Any] | SourceFailure]:
        with ThreadPoolExecutor(max_workers=len(sources), thread_name_prefix="calendar-source") as pool:
            futures = [
                pool.submit(self._fetch_one, source, range_start, range_end)
                for source in sources
            ]
            return [future.result() for future in futures]

    def _fetch_one(
        self,
        source: CalendarSource,
        range_start: str,
        range_end: str,
    ) -> list[Any] | SourceFailure:
        try:
            return self.client.fetch_events(source.id, range_start, range_end)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Calendar source raised source=%s", source.id, exc_info=True)
            return SourceFailure(
                kind=FailureKind.UNREACHABLE,
                message=str(exc) or type(exc).__name__,
            )


def parse_event_start(value: str) -> datetime | None:
    """Parse an event start; bare dates are read as midnight UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _start_sort_key(event: CalendarEvent) -> tuple[int, datetime]:
    parsed = parse_event_start(event.start)
    if parsed is None:
        return 1, datetime.min.replace(tzinfo=timezone.utc)
    return 0, parsed


def _log_failure(failure: SourceFailure) -> None:
    logger.warning(
        "Calendar source failed source=%s calendar=%r kind=%s status=%s message=%r",
        failure.source_id,
        failure.calendar_name,
        failure.kind.value,
        failure.status_code,
        failure.message,
        extra={"calendar_failure": failure.as_dict()},
    )
