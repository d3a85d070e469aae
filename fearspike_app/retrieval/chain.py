"""Sequential relay fallback for one series fetch."""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..errors import QueryCancelledError, RetrievalFailedError
from ..logging.config import get_retrieval_logger, log_relay_attempt
from .client import RetrievalAttempt, SourceClient
from .relays import RelayDescriptor, default_relays

logger = get_retrieval_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Body from the first successful relay and the attempts that failed before it."""
    body: str
    relay_id: str
    failures: tuple[RetrievalAttempt, ...] = ()


class RelayChain:
    """
    Ordered relay fallback.

    Relays are tried strictly one after another; the next relay starts only
    after the previous attempt failed or timed out. The first successful
    body is returned.
    """

    def __init__(self, relays: Optional[Sequence[RelayDescriptor]] = None,
                 client: Optional[SourceClient] = None):
        self.relays = tuple(relays) if relays is not None else default_relays()
        self.client = client or SourceClient()

    def fetch(self, target_url: str,
              cancelled: Optional[Callable[[], bool]] = None,
              label: str = "series") -> FetchResult:
        """
        Fetch target_url through the first relay that answers with a usable body.

        Args:
            target_url: Absolute source URL to forward
            cancelled: Checked before each attempt and passed to the client; a true
                result abandons the fetch
            label: Series name used in logs and errors

        Returns:
            FetchResult with the body and any failed attempts before it

        Raises:
            RetrievalFailedError: If every relay failed, carrying each attempt
            QueryCancelledError: If cancelled before a relay succeeded
        """
        failures: list[RetrievalAttempt] = []
        total = len(self.relays)

        for position, relay in enumerate(self.relays, start=1):
            if cancelled is not None and cancelled():
                logger.info("Fetch cancelled", series=label, attempts_made=len(failures))
                raise QueryCancelledError(
                    f"{label} fetch cancelled after {len(failures)} relay attempt(s)",
                    attempts=failures,
                )

            attempt = self.client.get(relay, target_url, cancelled)
            context = {"series": label}
            if attempt.detail:
                context["detail"] = attempt.detail
            log_relay_attempt(
                logger,
                relay_id=relay.id,
                outcome=attempt.outcome.value,
                duration_ms=attempt.duration_ms,
                position=position,
                total=total,
                context=context,
            )

            if attempt.succeeded:
                return FetchResult(body=attempt.body, relay_id=relay.id, failures=tuple(failures))

            failures.append(attempt)

        if cancelled is not None and cancelled():
            raise QueryCancelledError(
                f"{label} fetch cancelled after {len(failures)} relay attempt(s)",
                attempts=failures,
            )

        logger.error(
            "All relay attempts failed",
            series=label,
            failures=[failure.describe() for failure in failures]
        )
        raise RetrievalFailedError(
            f"All relay attempts failed for {label}",
            attempts=failures,
            failures_by_series={label: failures},
        )

    def fetch_series(self, target_url: str,
                     cancelled: Optional[Callable[[], bool]] = None,
                     label: str = "series") -> str:
        """Raw body of target_url, see fetch()."""
        return self.fetch(target_url, cancelled, label).body
