"""Tests for relay descriptors."""

from fearspike_app.config.defaults import RelayEntry
from fearspike_app.retrieval.relays import RelayDescriptor, default_relays, relays_from_config

TARGET = "https://query1.finance.yahoo.com/v8/finance/chart/%5EVIX?period1=1&period2=2&interval=1d"


class TestRelayDescriptor:
    """Test URL building per relay."""

    def test_encodes_full_target(self):
        relay = RelayDescriptor(id="corsproxy", template="https://corsproxy.io/?{target}")

        url = relay.build_url(TARGET)

        assert url == (
            "https://corsproxy.io/?https%3A%2F%2Fquery1.finance.yahoo.com%2Fv8%2Ffinance%2Fchart"
            "%2F%255EVIX%3Fperiod1%3D1%26period2%3D2%26interval%3D1d"
        )

    def test_raw_target_when_encoding_disabled(self):
        relay = RelayDescriptor(id="raw", template="https://relay.test/{target}", encode_target=False)

        assert relay.build_url(TARGET) == f"https://relay.test/{TARGET}"

    def test_host(self):
        relay = RelayDescriptor(id="codetabs", template="https://api.codetabs.com/v1/proxy/?quest={target}")

        assert relay.host == "api.codetabs.com"


class TestRelayTable:
    """Test relay table construction."""

    def test_default_order(self):
        assert [relay.id for relay in default_relays()] == ["codetabs", "corsproxy", "corssh"]

    def test_defaults_all_encode(self):
        assert all(relay.encode_target for relay in default_relays())

    def test_from_config_preserves_order(self):
        entries = [
            RelayEntry(id="second", template="https://b.test/?{target}"),
            RelayEntry(id="first", template="https://a.test/?{target}", encode_target=False),
        ]

        relays = relays_from_config(entries)

        assert [relay.id for relay in relays] == ["second", "first"]
        assert relays[1].encode_target is False
