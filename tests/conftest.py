"""Pytest configuration and shared fixtures."""

import json
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

from fearspike_app.data.models import CombinedSample
from fearspike_app.retrieval.client import AttemptOutcome, RetrievalAttempt
from fearspike_app.retrieval.relays import RelayDescriptor


def to_timestamp(day: date, hour: int = 14, minute: int = 30) -> int:
    """Unix seconds at market open of day, as the chart source reports it."""
    return int(datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc).timestamp())


def build_chart_payload(points: Sequence[tuple], **result_extra: Any) -> Dict[str, Any]:
    """Chart payload for (date, close) points; close may be None."""
    result = {
        "meta": {"currency": "USD", "symbol": "TEST"},
        "timestamp": [to_timestamp(day) for day, _ in points],
        "indicators": {"quote": [{"close": [close for _, close in points]}]},
    }
    result.update(result_extra)
    return {"chart": {"result": [result], "error": None}}


class ScriptedClient:
    """SourceClient stand-in that replays scripted outcomes per target symbol."""

    def __init__(self, scripts: Dict[str, List[Any]]):
        # scripts maps a substring of the target URL to a list of outcomes:
        # a str body for success, or an AttemptOutcome (with optional status) for failure.
        self.scripts = {key: list(outcomes) for key, outcomes in scripts.items()}
        self.calls: List[tuple] = []

    def get(self, relay: RelayDescriptor, target_url: str,
            cancelled: Optional[Callable[[], bool]] = None) -> RetrievalAttempt:
        self.calls.append((relay.id, target_url))
        key = next(key for key in self.scripts if key in target_url)
        outcome = self.scripts[key].pop(0)
        url = relay.build_url(target_url)

        if isinstance(outcome, str) and not isinstance(outcome, AttemptOutcome):
            return RetrievalAttempt(relay_id=relay.id, url=url, outcome=AttemptOutcome.SUCCESS,
                                    duration_ms=1, status_code=200, body=outcome)
        if isinstance(outcome, tuple):
            outcome, status = outcome
        else:
            status = None
        return RetrievalAttempt(relay_id=relay.id, url=url, outcome=outcome,
                                duration_ms=1, status_code=status, detail=outcome.value)


@pytest.fixture
def chart_payload() -> Callable[..., str]:
    """Factory producing a raw chart payload string from (date, close) points."""
    def factory(points: Sequence[tuple], **result_extra: Any) -> str:
        return json.dumps(build_chart_payload(points, **result_extra))
    return factory


@pytest.fixture
def combined() -> Callable[[Sequence[tuple]], List[CombinedSample]]:
    """Factory producing combined samples from (date, primary, secondary) tuples."""
    def factory(rows: Sequence[tuple]) -> List[CombinedSample]:
        return [CombinedSample(date=day, primary=primary, secondary=secondary)
                for day, primary, secondary in rows]
    return factory


@pytest.fixture
def relays() -> List[RelayDescriptor]:
    """Three test relays, the last one without target encoding."""
    return [
        RelayDescriptor(id="relay-a", template="https://relay-a.test/?url={target}"),
        RelayDescriptor(id="relay-b", template="https://relay-b.test/proxy?quest={target}"),
        RelayDescriptor(id="relay-c", template="https://relay-c.test/{target}", encode_target=False),
    ]


@pytest.fixture
def scripted_client() -> Callable[[Dict[str, List[Any]]], ScriptedClient]:
    """Factory for ScriptedClient instances."""
    return ScriptedClient


@pytest.fixture
def business_days() -> Callable[[date, int], List[date]]:
    """Factory for consecutive weekday dates starting at a given date."""
    def factory(start: date, count: int) -> List[date]:
        days = []
        current = start
        while len(days) < count:
            if current.weekday() < 5:
                days.append(current)
            current += timedelta(days=1)
        return days
    return factory
