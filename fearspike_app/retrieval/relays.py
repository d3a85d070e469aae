"""Relay descriptors and the default relay table."""

from dataclasses import dataclass
from typing import Iterable
from urllib.parse import quote

from ..config.defaults import RelayEntry, RelayParams


@dataclass(frozen=True)
class RelayDescriptor:
    """Forwarding intermediary that embeds the target URL into its own."""
    id: str
    template: str                # Contains {target}
    encode_target: bool = True   # Percent-encode the full target URL

    def build_url(self, target_url: str) -> str:
        """Relay URL that forwards to target_url."""
        target = quote(target_url, safe="") if self.encode_target else target_url
        return self.template.format(target=target)

    @property
    def host(self) -> str:
        """Host part of the template, used in diagnostics."""
        parts = self.template.split("/")
        return parts[2] if len(parts) > 2 else self.template

    @classmethod
    def from_entry(cls, entry: RelayEntry) -> "RelayDescriptor":
        return cls(id=entry.id, template=entry.template, encode_target=entry.encode_target)


def relays_from_config(entries: Iterable[RelayEntry]) -> tuple[RelayDescriptor, ...]:
    """Build the ordered relay table from configuration entries."""
    return tuple(RelayDescriptor.from_entry(entry) for entry in entries)


def default_relays() -> tuple[RelayDescriptor, ...]:
    """Relay table used when no configuration overrides it."""
    return relays_from_config(RelayParams().relays)
