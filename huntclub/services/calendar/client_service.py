import logging

import httpx
from pydantic import ValidationError

from huntclub.config import settings
from huntclub.domain.schemas.calendar import CalendarEvent

logger = logging.getLogger(__name__)


class ClientCalendarService:
    """HTTP caller for ``/calendar-events`` that always yields a list.

    Any failure along the way (transport, status, body) ends in ``[]`` so
    callers only ever branch on empty versus non-empty.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 10.0) -> None:
        self.base_url = (base_url or settings.CALENDAR_API_BASE_URL).rstrip("/")
        self.timeout = timeout

    def get_events(self, range_start: str, range_end: str) -> list[CalendarEvent]:
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(
                    f"{self.base_url}/calendar-events",
                    params={"start": range_start, "end": range_end},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Calendar events request failed status=%s", exc.response.status_code)
            return []
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Calendar events request failed: %s", exc)
            return []

        if not isinstance(payload, list):
            if payload is not None:
                logger.error("Calendar events response is not a list: %s", type(payload).__name__)
            return []

        try:
            return [CalendarEvent.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.error("Calendar events response failed validation: %s", exc)
            return []
