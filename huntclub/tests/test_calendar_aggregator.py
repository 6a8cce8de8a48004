import logging
import threading

from huntclub.services.calendar.aggregator import CalendarAggregator, parse_event_start
from huntclub.services.calendar.types import (
    CalendarConfig,
    CalendarSource,
    FailureKind,
    SourceFailure,
)

CLUB = CalendarSource(id="club-id", display_name="Club Calendar")
HOLIDAYS = CalendarSource(id="holiday-id", display_name="Holidays")
EXTRA = CalendarSource(id="extra-id", display_name="Additional Calendar")


def _timed(event_id: str, start: str, summary: str = "Event") -> dict:
    return {"id": event_id, "summary": summary, "start": {"dateTime": start}, "end": {"dateTime": start}}


class _FakeSourceClient:
    def __init__(self, responses: dict) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def fetch_events(self, source_id: str, range_start: str, range_end: str):
        with self._lock:
            self.calls.append((source_id, range_start, range_end))
        response = self.responses[source_id]
        if isinstance(response, Exception):
            raise response
        return response


def _config(*sources: CalendarSource, sort: bool = True, api_key: str | None = "key") -> CalendarConfig:
    return CalendarConfig(api_key=api_key, sources=tuple(sources), sort_chronologically=sort)


def test_no_api_key_returns_empty_without_calls() -> None:
    client = _FakeSourceClient({"club-id": [_timed("a", "2025-06-01T10:00:00Z")]})
    aggregator = CalendarAggregator(_config(CLUB, api_key=None), client=client)

    assert aggregator.get_events("2025-06-01", "2025-06-30") == []
    assert client.calls == []


def test_no_sources_returns_empty_without_calls() -> None:
    client = _FakeSourceClient({})
    aggregator = CalendarAggregator(_config(), client=client)

    result = aggregator.collect("2025-06-01", "2025-06-30")

    assert result.events == []
    assert result.reports == []
    assert client.calls == []


def test_default_client_is_not_built_without_api_key() -> None:
    assert CalendarAggregator(_config(CLUB, api_key=None)).client is None
    assert CalendarAggregator(_config(CLUB)).client is not None


def test_each_source_is_fetched_once_with_range() -> None:
    client = _FakeSourceClient({"club-id": [], "holiday-id": [], "extra-id": []})
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS, EXTRA), client=client)

    aggregator.get_events("2025-06-01", "2025-06-30")

    assert sorted(client.calls) == sorted(
        [
            ("club-id", "2025-06-01", "2025-06-30"),
            ("holiday-id", "2025-06-01", "2025-06-30"),
            ("extra-id", "2025-06-01", "2025-06-30"),
        ]
    )


def test_failed_source_does_not_affect_others(caplog) -> None:
    caplog.set_level(logging.WARNING)
    client = _FakeSourceClient(
        {
            "club-id": [_timed("a1", "2025-06-02T10:00:00Z"), _timed("a2", "2025-06-03T10:00:00Z")],
            "holiday-id": SourceFailure(kind=FailureKind.REJECTED, message="Forbidden", status_code=403),
        }
    )
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS), client=client)

    result = aggregator.collect("2025-06-01", "2025-06-30")

    assert [event.id for event in result.events] == ["a1", "a2"]
    assert {event.calendar_name for event in result.events} == {"Club Calendar"}
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.source_id == "holiday-id"
    assert failure.calendar_name == "Holidays"
    assert failure.status_code == 403
    records = [rec for rec in caplog.records if "Calendar source failed" in rec.message]
    assert len(records) == 1
    assert "kind=rejected" in records[0].message
    assert "source=holiday-id calendar='Holidays'" in records[0].message
    assert records[0].calendar_failure["statusCode"] == 403


def test_raising_client_is_isolated_as_unreachable() -> None:
    client = _FakeSourceClient(
        {
            "club-id": RuntimeError("socket closed"),
            "holiday-id": [{"id": "h1", "summary": "Labor Day", "start": {"date": "2025-09-01"}}],
        }
    )
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS), client=client)

    result = aggregator.collect("2025-09-01", "2025-09-30")

    assert [event.id for event in result.events] == ["h1"]
    assert result.failures[0].kind is FailureKind.UNREACHABLE
    assert result.failures[0].message == "socket closed"


def test_all_sources_failing_yields_empty_list() -> None:
    failure = SourceFailure(kind=FailureKind.UNREACHABLE, message="down")
    client = _FakeSourceClient({"club-id": failure, "holiday-id": failure})
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS), client=client)

    result = aggregator.collect("2025-06-01", "2025-06-30")

    assert result.events == []
    assert [f.calendar_name for f in result.failures] == ["Club Calendar", "Holidays"]


def test_event_count_is_sum_of_reachable_sources() -> None:
    client = _FakeSourceClient(
        {
            "club-id": [_timed(f"c{i}", f"2025-06-0{i + 1}T09:00:00Z") for i in range(3)],
            "holiday-id": SourceFailure(kind=FailureKind.MALFORMED, message="bad body"),
            "extra-id": [_timed("x1", "2025-06-05T09:00:00Z")],
        }
    )
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS, EXTRA), client=client)

    result = aggregator.collect("2025-06-01", "2025-06-30")

    assert len(result.events) == 4
    assert [report.event_count for report in result.reports] == [3, 0, 1]
    assert [report.ok for report in result.reports] == [True, False, True]


def test_merge_is_chronological_across_sources() -> None:
    client = _FakeSourceClient(
        {
            "club-id": [_timed("c1", "2025-06-10T12:00:00Z"), _timed("c2", "2025-06-20T12:00:00Z")],
            "holiday-id": [
                {"id": "h1", "start": {"date": "2025-06-15"}},
                {"id": "h2", "start": {"date": "2025-06-10"}},
            ],
        }
    )
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS), client=client)

    events = aggregator.get_events("2025-06-01", "2025-06-30")

    assert [event.id for event in events] == ["h2", "c1", "h1", "c2"]


def test_merge_can_keep_source_order() -> None:
    client = _FakeSourceClient(
        {
            "club-id": [_timed("c1", "2025-06-20T12:00:00Z")],
            "holiday-id": [{"id": "h1", "start": {"date": "2025-06-01"}}],
        }
    )
    aggregator = CalendarAggregator(_config(CLUB, HOLIDAYS, sort=False), client=client)

    assert [event.id for event in aggregator.get_events("2025-06-01", "2025-06-30")] == ["c1", "h1"]


def test_duplicates_across_sources_are_kept() -> None:
    shared = _timed("same", "2025-06-10T12:00:00Z")
    client = _FakeSourceClient({"club-id": [shared], "extra-id": [shared]})
    aggregator = CalendarAggregator(_config(CLUB, EXTRA), client=client)

    events = aggregator.get_events("2025-06-01", "2025-06-30")

    assert [(event.id, event.calendar_name) for event in events] == [
        ("same", "Club Calendar"),
        ("same", "Additional Calendar"),
    ]


def test_events_without_start_are_skipped() -> None:
    client = _FakeSourceClient({"club-id": [{"id": "nostart", "summary": "?"}, _timed("ok", "2025-06-10T12:00:00Z")]})
    aggregator = CalendarAggregator(_config(CLUB), client=client)

    result = aggregator.collect("2025-06-01", "2025-06-30")

    assert [event.id for event in result.events] == ["ok"]
    assert result.skipped == 1


def test_parse_event_start_handles_dates_and_offsets() -> None:
    assert parse_event_start("2025-06-10").isoformat() == "2025-06-10T00:00:00+00:00"
    assert parse_event_start("2025-06-10T08:00:00-04:00") == parse_event_start("2025-06-10T12:00:00Z")
    assert parse_event_start("not a date") is None


def test_non_object_records_are_skipped_and_counted() -> None:
    client = _FakeSourceClient(
        {"club-id": ["x", None, 7, {"id": "nostart"}, _timed("ok", "2025-06-10T12:00:00Z")]}
    )
    aggregator = CalendarAggregator(_config(CLUB), client=client)

    result = aggregator.collect("2025-06-01", "2025-06-30")

    assert [event.id for event in result.events] == ["ok"]
    assert result.skipped == 4
    assert result.reports[0].event_count == 1
