import hashlib
from typing import Any

from huntclub.domain.schemas.calendar import CalendarEvent

UNTITLED_EVENT = "Untitled Event"


def provider_event_to_calendar_event(
    raw: dict[str, Any],
    calendar_name: str | None = None,
) -> CalendarEvent:
    """Map a Google Calendar event resource onto the canonical event shape.

    Total: missing or malformed optional fields fall back to defaults.
    An event is all-day exactly when its start carries no ``dateTime``.
    """
    start = _as_dict(raw.get("start"))
    end = _as_dict(raw.get("end"))
    title = _as_text(raw.get("summary")) or UNTITLED_EVENT
    start_value = _as_text(start.get("dateTime")) or _as_text(start.get("date"))
    end_value = _as_text(end.get("dateTime")) or _as_text(end.get("date"))

    return CalendarEvent(
        id=_as_text(raw.get("id")) or _fallback_id(title, start_value),
        title=title,
        start=start_value,
        end=end_value,
        description=_as_text(raw.get("description")),
        location=_as_text(raw.get("location")),
        is_all_day=not _as_text(start.get("dateTime")),
        is_public=raw.get("visibility") != "private",
        source="google",
        calendar_name=calendar_name,
    )


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _fallback_id(title: str, start: str) -> str:
    digest = hashlib.sha1(f"{title}:{start}".encode("utf-8")).hexdigest()
    return f"generated-{digest[:16]}"
