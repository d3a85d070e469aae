#!/usr/bin/env python3
"""
Basic Usage Example - Fearspike Signal Engine

This script runs one live query against the chart source through the
configured relays. It shows how to:
- Initialize the engine
- Derive a display window from a preset
- Run a query and handle a failed query
- Read signal events and return averages

Run: python examples/basic_usage.py [1Y|2Y|5Y|10Y|20Y|50Y]
"""

import sys

from fearspike_app.data.models import QueryFailure
from fearspike_app.engine import SignalQueryEngine
from fearspike_app.logging import configure_logging


def format_return(value) -> str:
    return "Pending" if value is None else f"{value:.2f}%"


def main() -> int:
    configure_logging(level="INFO")

    preset = sys.argv[1] if len(sys.argv) > 1 else "1Y"
    engine = SignalQueryEngine()
    query_range = engine.resolve_query(preset)

    print(f"📊 Querying {preset}: {query_range.display_start} → {query_range.display_end}")
    outcome = engine.run_query_safe(query_range)

    if isinstance(outcome, QueryFailure):
        print(f"❌ {outcome.status}: {outcome.message}")
        return 1

    print(f"🚦 Status: {outcome.status.value}")
    print(f"📈 Samples in window: {len(outcome.display_series)}")
    print(f"🔔 Signal events: {len(outcome.signal_events)}")

    for event in outcome.signal_events:
        print(
            f"  {event.date}  SPX {event.primary_at_signal:>9.2f}  VIX {event.secondary_at_signal:>6.2f}"
            f"  6M {format_return(event.six_month_return):>9}  12M {format_return(event.twelve_month_return):>9}"
        )

    print(f"Average 6M return after signal:  {format_return(outcome.average_six_month_return)}")
    print(f"Average 12M return after signal: {format_return(outcome.average_twelve_month_return)}")
    print(f"Benchmark 12M return:            {format_return(outcome.benchmark_average_return)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
