"""Integration tests for repeatable query results."""

from datetime import date, datetime, timezone

from fearspike_app.config.defaults import get_default_config
from fearspike_app.data.models import QueryRange
from fearspike_app.engine import SignalQueryEngine
from fearspike_app.retrieval.chain import RelayChain

NOW = datetime(2024, 1, 10, 21, 0, tzinfo=timezone.utc)


class TestQueryIdempotency:
    """Identical raw inputs produce identical results."""

    def setup_method(self):
        """Set up shared raw inputs."""
        self.window = QueryRange(date(2022, 1, 1), date(2022, 12, 31))

    def _points(self, business_days):
        days = business_days(date(2022, 1, 3), 300)
        spx = [(day, 4000 + (i % 37) * 3.25) for i, day in enumerate(days)]
        vix = [(day, 20 + (i % 11) * 2.5) for i, day in enumerate(days)]
        return spx, vix

    def _run(self, relays, scripted_client, spx_body, vix_body):
        client = scripted_client({"GSPC": [spx_body], "VIX": [vix_body]})
        engine = SignalQueryEngine(config=get_default_config(), relay_chain=RelayChain(relays, client))
        return engine.run_query(self.window, now=NOW)

    def test_repeated_queries_match(self, relays, scripted_client, chart_payload, business_days):
        spx, vix = self._points(business_days)
        spx_body, vix_body = chart_payload(spx), chart_payload(vix)

        first = self._run(relays, scripted_client, spx_body, vix_body)
        second = self._run(relays, scripted_client, spx_body, vix_body)

        assert first == second
        assert repr(first) == repr(second)
        assert first.signal_events

    def test_queries_share_no_state(self, relays, scripted_client, chart_payload, business_days):
        spx, vix = self._points(business_days)
        calm_vix = [(day, 12.0) for day, _ in vix]

        stressed = self._run(relays, scripted_client, chart_payload(spx), chart_payload(vix))
        calm = self._run(relays, scripted_client, chart_payload(spx), chart_payload(calm_vix))

        assert stressed.signal_events
        assert calm.signal_events == ()
        assert calm.display_series is not stressed.display_series
