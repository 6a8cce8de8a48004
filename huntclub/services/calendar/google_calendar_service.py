from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, unquote

import httpx

from huntclub.services.calendar.base import CalendarSourceClient
from huntclub.services.calendar.types import (
    DEFAULT_API_BASE_URL,
    FailureKind,
    SourceFailure,
)

logger = logging.getLogger(__name__)


class GoogleCalendarClient(CalendarSourceClient):
    """Read-only client for public Google calendars, authenticated by API key.

    One request per call, no retries. Transport and provider errors are
    returned as a ``SourceFailure`` instead of being raised.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        max_results: int = 100,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.max_results = max_results
        self.timeout = timeout

    def fetch_events(
        self,
        source_id: str,
        range_start: str,
        range_end: str,
    ) -> list[Any] | SourceFailure:
        if not source_id:
            raise ValueError("source_id must be non-empty")

        time_min, time_max = _build_time_window(range_start, range_end)
        params: dict[str, Any] = {
            "key": self.api_key,
            "timeMin": time_min,
            "timeMax": time_max,
            "maxResults": self.max_results,
            "singleEvents": "true",
            "orderBy": "startTime",
        }

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(self.events_url(source_id), params=params)
        except httpx.HTTPError as exc:
            return SourceFailure(kind=FailureKind.UNREACHABLE, message=str(exc) or type(exc).__name__)

        if not response.is_success:
            return SourceFailure(
                kind=FailureKind.REJECTED,
                message=_provider_error_message(response),
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            return SourceFailure(
                kind=FailureKind.MALFORMED,
                message=f"Response body is not JSON: {exc}",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            return SourceFailure(
                kind=FailureKind.MALFORMED,
                message="Response body is not a JSON object",
                status_code=response.status_code,
            )
        items = payload.get("items", [])
        if not isinstance(items, list):
            return SourceFailure(
                kind=FailureKind.MALFORMED,
                message="Response field 'items' is not a list",
                status_code=response.status_code,
            )

        logger.debug("Fetched %s raw events source=%s", len(items), source_id)
        return items

    def events_url(self, source_id: str) -> str:
        # Configured ids are sometimes stored already percent-encoded.
        calendar_id = quote(unquote(source_id), safe="")
        return f"{self.base_url}/calendars/{calendar_id}/events"


def _build_time_window(range_start: str, range_end: str) -> tuple[str, str]:
    return f"{range_start}T00:00:00Z", f"{range_end}T23:59:59Z"


def _provider_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return f"HTTP {response.status_code}"
