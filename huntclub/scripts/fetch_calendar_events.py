from __future__ import annotations

import argparse
import json

from huntclub.config import settings
from huntclub.core.env import load_env
from huntclub.logging import configure_logging
from huntclub.services.calendar.aggregator import CalendarAggregator
from huntclub.services.calendar.types import AggregationResult, CalendarConfig


def run_fetch_calendar_events(
    aggregator: CalendarAggregator,
    start: str,
    end: str,
    as_json: bool = False,
) -> AggregationResult:
    result = aggregator.collect(start, end)

    if not aggregator.config.enabled:
        print("Calendar feeds not configured: set GOOGLE_CALENDAR_API_KEY and at least one calendar id")

    for report in result.reports:
        if report.failure is None:
            print(f"source={report.source.display_name} ok events={report.event_count}")
        else:
            print(
                f"source={report.source.display_name} failed kind={report.failure.kind.value} "
                f"status={report.failure.status_code} message={report.failure.message}"
            )

    if as_json:
        print(json.dumps([event.model_dump(by_alias=True) for event in result.events], indent=2))
    else:
        for event in result.events:
            marker = "all-day" if event.is_all_day else "timed"
            print(f"- {event.start} [{marker}] {event.title} ({event.calendar_name})")
    print(f"events_total={len(result.events)} skipped={result.skipped}")
    return result


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch merged club calendar events for a date range.")
    parser.add_argument("--start", required=True, help="First day, YYYY-MM-DD")
    parser.add_argument("--end", required=True, help="Last day, YYYY-MM-DD")
    parser.add_argument("--json", action="store_true", help="Print events as a JSON array")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    load_env()
    configure_logging(args.log_level)
    aggregator = CalendarAggregator(CalendarConfig.from_settings(settings))
    run_fetch_calendar_events(aggregator, args.start, args.end, as_json=args.json)


if __name__ == "__main__":
    main()
