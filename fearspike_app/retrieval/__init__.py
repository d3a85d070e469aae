"""
Source retrieval module.

Fetches raw chart payloads through an ordered chain of forwarding relays,
falling back to the next relay on timeouts, HTTP errors, transport errors
and non-JSON bodies.
"""
from .chain import FetchResult, RelayChain
from .client import AttemptOutcome, RetrievalAttempt, SourceClient
from .relays import RelayDescriptor, default_relays, relays_from_config

__all__ = [
    "FetchResult",
    "RelayChain",
    "AttemptOutcome",
    "RetrievalAttempt",
    "SourceClient",
    "RelayDescriptor",
    "default_relays",
    "relays_from_config",
]
