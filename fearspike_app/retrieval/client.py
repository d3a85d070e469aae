"""Single HTTP GET through one relay."""

import time
from dataclasses import dataclass
from enum import Enum
from http.client import HTTPException
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..data.parsers import looks_like_json
from ..logging.config import get_retrieval_logger
from .relays import RelayDescriptor

logger = get_retrieval_logger(__name__)

READ_CHUNK_BYTES = 64 * 1024


class AttemptOutcome(str, Enum):
    """Outcome of one relay attempt."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class RetrievalAttempt:
    """Result of requesting a target URL through one relay."""
    relay_id: str
    url: str
    outcome: AttemptOutcome
    duration_ms: int
    status_code: Optional[int] = None
    body: Optional[str] = None
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.outcome == AttemptOutcome.SUCCESS

    def describe(self) -> str:
        """Short human-readable summary for error messages."""
        summary = f"{self.relay_id}: {self.outcome.value}"
        if self.status_code is not None:
            summary = f"{summary} ({self.status_code})"
        if self.detail:
            summary = f"{summary} - {self.detail}"
        return summary


def _is_timeout(error: BaseException) -> bool:
    if isinstance(error, TimeoutError):
        return True
    return isinstance(error, URLError) and isinstance(error.reason, TimeoutError)


class SourceClient:
    """Issues one GET through a relay and classifies the outcome."""

    def __init__(self, timeout_seconds: float = 30.0, user_agent: str = "fearspike-app/1.0"):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    def get(self, relay: RelayDescriptor, target_url: str,
            cancelled: Optional[Callable[[], bool]] = None) -> RetrievalAttempt:
        """
        Request target_url through relay.

        Never raises for transport problems; every failure is returned as a
        RetrievalAttempt with a non-success outcome. The body is read in
        chunks and cancelled is checked between them; a true result closes
        the connection and returns a NETWORK_ERROR attempt.
        """
        url = relay.build_url(target_url)
        headers = {
            'Accept': 'application/json',
            'User-Agent': self.user_agent,
        }
        req = Request(url, headers=headers, method='GET')
        start_time = time.monotonic()

        def attempt(outcome: AttemptOutcome, **kwargs) -> RetrievalAttempt:
            return RetrievalAttempt(
                relay_id=relay.id,
                url=url,
                outcome=outcome,
                duration_ms=int((time.monotonic() - start_time) * 1000),
                **kwargs
            )

        try:
            # Closing the response releases the socket whether or not the read finished
            with urlopen(req, timeout=self.timeout_seconds) as response:
                status_code = response.getcode()
                chunks = []
                while True:
                    if cancelled is not None and cancelled():
                        return attempt(AttemptOutcome.NETWORK_ERROR,
                                       detail="Read abandoned, query stopped")
                    chunk = response.read(READ_CHUNK_BYTES)
                    if not chunk:
                        break
                    chunks.append(chunk)
                body = b"".join(chunks).decode('utf-8', errors='replace')

        except HTTPError as e:
            e.close()
            return attempt(AttemptOutcome.HTTP_ERROR, status_code=e.code,
                           detail=f"HTTP {e.code}: {e.reason}")

        except (OSError, URLError, HTTPException) as e:
            if _is_timeout(e):
                return attempt(AttemptOutcome.TIMEOUT,
                               detail=f"No response within {self.timeout_seconds}s")
            return attempt(AttemptOutcome.NETWORK_ERROR, detail=f"Network error: {e}")

        if not 200 <= status_code < 300:
            return attempt(AttemptOutcome.HTTP_ERROR, status_code=status_code,
                           detail=f"HTTP {status_code}")

        if not looks_like_json(body):
            logger.warning(
                "Relay returned a non-JSON body",
                relay_id=relay.id,
                body_preview=body[:200]
            )
            return attempt(AttemptOutcome.MALFORMED_RESPONSE, status_code=status_code,
                           detail=f"Non-JSON body starting with {body[:50]!r}")

        return attempt(AttemptOutcome.SUCCESS, status_code=status_code, body=body)
