import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from huntclub.config import settings
from huntclub.domain.schemas.calendar import CalendarEvent
from huntclub.services.calendar.aggregator import CalendarAggregator
from huntclub.services.calendar.types import CalendarConfig

logger = logging.getLogger(__name__)

RANGE_REQUIRED_MESSAGE = "Start and end dates are required"

router = APIRouter(prefix="/calendar-events")


def get_calendar_aggregator() -> CalendarAggregator:
    return CalendarAggregator(CalendarConfig.from_settings(settings))


def _missing_range(start: str | None, end: str | None) -> bool:
    return not (start and start.strip() and end and end.strip())


def _range_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": RANGE_REQUIRED_MESSAGE},
    )


@router.get("", response_model=list[CalendarEvent])
def list_calendar_events(
    start: str | None = None,
    end: str | None = None,
    aggregator: CalendarAggregator = Depends(get_calendar_aggregator),
):
    if _missing_range(start, end):
        return _range_error()
    try:
        return aggregator.get_events(start.strip(), end.strip())
    except Exception:  # noqa: BLE001
        logger.exception("Calendar aggregation failed range=%s..%s", start, end)
        return []


@router.get("/diagnostics")
def calendar_diagnostics(
    start: str | None = None,
    end: str | None = None,
    aggregator: CalendarAggregator = Depends(get_calendar_aggregator),
) -> Any:
    """Per-source outcome of one aggregation run, for operators."""
    if _missing_range(start, end):
        return _range_error()
    try:
        result = aggregator.collect(start.strip(), end.strip())
    except Exception as exc:  # noqa: BLE001
        logger.exception("Calendar diagnostics failed range=%s..%s", start, end)
        return {
            "configured": aggregator.config.enabled,
            "eventCount": 0,
            "skipped": 0,
            "sources": [],
            "error": str(exc) or type(exc).__name__,
        }
    return {
        "configured": aggregator.config.enabled,
        "eventCount": len(result.events),
        "skipped": result.skipped,
        "sources": [
            {
                "calendarName": report.source.display_name,
                "ok": report.ok,
                "eventCount": report.event_count,
                "failure": report.failure.as_dict() if report.failure else None,
            }
            for report in result.reports
        ],
    }
