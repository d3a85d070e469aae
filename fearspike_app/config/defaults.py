"""Default configuration parameters for the signal query engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceParams:
    """Upstream chart source parameters."""
    base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    primary_symbol: str = "^GSPC"                    # Equity benchmark index
    secondary_symbol: str = "^VIX"                   # Volatility index
    interval: str = "1d"
    events: str = "history"


@dataclass(frozen=True)
class RelayEntry:
    """Single relay as stored in configuration."""
    id: str
    template: str                                    # Must contain {target}
    encode_target: bool = True


def _default_relays() -> tuple[RelayEntry, ...]:
    return (
        RelayEntry(id="codetabs", template="https://api.codetabs.com/v1/proxy/?quest={target}"),
        RelayEntry(id="corsproxy", template="https://corsproxy.io/?{target}"),
        RelayEntry(id="corssh", template="https://proxy.cors.sh/?{target}"),
    )


@dataclass(frozen=True)
class RelayParams:
    """Relay chain parameters."""
    relays: tuple[RelayEntry, ...] = field(default_factory=_default_relays)
    timeout_seconds: float = 30.0                    # Per-attempt timeout
    user_agent: str = "fearspike-app/1.0"


@dataclass(frozen=True)
class SignalParams:
    """Signal detection and forward return parameters."""
    fear_threshold: float = 30.0                     # Prior secondary must exceed this
    short_horizon_months: int = 6
    long_horizon_months: int = 12


@dataclass(frozen=True)
class QueryParams:
    """Query window parameters."""
    default_preset: str = "1Y"
    overfetch_years: int = 1                         # Forward data past display end


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    source: SourceParams
    relay: RelayParams
    signal: SignalParams
    query: QueryParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        source=SourceParams(),
        relay=RelayParams(),
        signal=SignalParams(),
        query=QueryParams(),
    )
