"""
Main signal query coordinator.

Orchestrates one query: concurrent retrieval of both series through the
relay chain, parsing, date alignment, signal detection, forward return
calculation and restriction of the results to the display window.
"""

import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import quote, urlencode

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.aligner import combine_series, filter_window
from .data.models import QueryFailure, QueryRange, QueryResult, ResultSet
from .data.parsers import parse_chart_payload
from .errors import (
    ConfigurationError,
    DataQualityError,
    QueryCancelledError,
    RetrievalFailedError,
    SystemFailureError,
)
from .logging.config import get_logger
from .metrics.returns import ReturnCalculator, average_return
from .retrieval.chain import RelayChain
from .retrieval.client import SourceClient
from .retrieval.relays import relays_from_config
from .signals.detector import EntryStatus, classify_status, detect_signals
from .utils.time import fetch_range, resolve_window, validate_window

logger = get_logger(__name__)

PRIMARY = "primary"
SECONDARY = "secondary"

# How often a running fetch checks for cancellation or a failed sibling
CANCEL_POLL_SECONDS = 0.05


class SignalQueryEngine:
    """
    Coordinator for fear-spike signal queries.

    Manages the query pipeline:
    Relays → Parse → Align → Detect → Forward Returns → Display Window

    Each call to run_query builds its own series from scratch; nothing is
    cached or shared between queries.
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        config_dir: Optional[Union[str, Path]] = None,
        relay_chain: Optional[RelayChain] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize the engine from explicit config or the config directory."""
        self.logger = logger

        if config is None:
            config = ConfigLoader.create(config_dir).load(overrides)

        validation_errors = ConfigValidator.validate_config(asdict(config))
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error(
                "Configuration validation failed",
                errors=error_msgs
            )
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(error_msgs)}",
                errors=validation_errors,
            )
        self.config = config

        if relay_chain is None:
            relay_chain = RelayChain(
                relays=relays_from_config(config.relay.relays),
                client=SourceClient(
                    timeout_seconds=config.relay.timeout_seconds,
                    user_agent=config.relay.user_agent,
                ),
            )
        self.relay_chain = relay_chain

        self.logger.info(
            "Signal query engine initialized",
            relays=[relay.id for relay in self.relay_chain.relays],
            fear_threshold=config.signal.fear_threshold,
        )

    def resolve_query(
        self,
        preset: Optional[str] = None,
        today: Optional[date] = None,
        custom_start: Optional[date] = None,
        custom_end: Optional[date] = None,
    ) -> QueryRange:
        """Build a QueryRange from a preset window name or a custom range."""
        start, end = resolve_window(
            preset or self.config.query.default_preset,
            today=today,
            custom_start=custom_start,
            custom_end=custom_end,
        )
        return QueryRange(display_start=start, display_end=end)

    def build_source_url(self, symbol: str, period1: int, period2: int) -> str:
        """Chart source URL for symbol over [period1, period2] unix seconds."""
        source = self.config.source
        params = urlencode({
            "period1": period1,
            "period2": period2,
            "interval": source.interval,
            "events": source.events,
        })
        return f"{source.base_url}/{quote(symbol, safe='')}?{params}"

    def run_query(
        self,
        query_range: QueryRange,
        cancel_event: Optional[threading.Event] = None,
        now: Optional[datetime] = None,
    ) -> QueryResult:
        """
        Run one fetch-compute cycle for a display window.

        Args:
            query_range: Inclusive display window
            cancel_event: Set by the caller to abandon the query, in-flight requests included
            now: Reference moment that caps the fetch range, defaults to current UTC time

        Returns:
            QueryResult restricted to the display window

        Raises:
            InvalidRangeError: If the window is missing a bound or reversed
            RetrievalFailedError: If either series exhausted its relays
            QueryCancelledError: If cancel_event was set before retrieval finished
            MalformedPayloadError: If a fetched body does not have the chart shape
        """
        if query_range is None:
            validate_window(None, None)
        start, end = query_range.display_start, query_range.display_end
        validate_window(start, end)

        period1, period2 = fetch_range(start, end, self.config.query.overfetch_years, now)
        targets = {
            PRIMARY: self.build_source_url(self.config.source.primary_symbol, period1, period2),
            SECONDARY: self.build_source_url(self.config.source.secondary_symbol, period1, period2),
        }

        self.logger.info(
            "Starting query",
            display_start=start.isoformat(),
            display_end=end.isoformat(),
            period1=period1,
            period2=period2,
        )

        bodies = self._fetch_all(targets, cancel_event)

        primary = parse_chart_payload(bodies[PRIMARY])
        secondary = parse_chart_payload(bodies[SECONDARY])
        combined = combine_series(primary, secondary)

        result = self._compute(combined, start, end, (period1, period2))

        self.logger.info(
            "Query complete",
            combined_samples=len(combined),
            display_samples=len(result.display_series),
            signal_events=len(result.signal_events),
            status=result.status.value,
        )
        return result

    def run_query_safe(
        self,
        query_range: QueryRange,
        cancel_event: Optional[threading.Event] = None,
        now: Optional[datetime] = None,
    ) -> Union[QueryResult, QueryFailure]:
        """Run a query, turning any terminal query error into a QueryFailure."""
        try:
            return self.run_query(query_range, cancel_event=cancel_event, now=now)
        except (DataQualityError, SystemFailureError) as e:
            self.logger.error(
                "Query failed",
                error_type=type(e).__name__,
                error=str(e)
            )
            return QueryFailure(message=str(e), error=e, status=EntryStatus.ERROR.value)

    def _fetch_all(self, targets: dict[str, str],
                   cancel_event: Optional[threading.Event]) -> dict[str, str]:
        """
        Fetch every target concurrently, all-or-nothing.

        Returns as soon as one chain is exhausted or the caller cancels. The
        other chains are told to stop and their in-flight requests are
        abandoned rather than joined.
        """
        abort = threading.Event()

        def stopped() -> bool:
            return abort.is_set() or (cancel_event is not None and cancel_event.is_set())

        def failed(future) -> bool:
            return future.done() and future.exception() is not None

        executor = ThreadPoolExecutor(max_workers=len(targets), thread_name_prefix="fearspike-fetch")
        try:
            futures = {
                executor.submit(self.relay_chain.fetch_series, url, stopped, name): name
                for name, url in targets.items()
            }
            pending = set(futures)
            while pending and not stopped():
                _, pending = wait(pending, timeout=CANCEL_POLL_SECONDS, return_when=FIRST_EXCEPTION)
                if any(failed(future) for future in futures):
                    break
        finally:
            abort.set()
            executor.shutdown(wait=False, cancel_futures=True)

        bodies: dict[str, str] = {}
        failures: dict[str, list] = {}
        cancelled: dict[str, QueryCancelledError] = {}

        for future, name in futures.items():
            if not future.done() or future.cancelled():
                continue
            error = future.exception()
            if error is None:
                bodies[name] = future.result()
            elif isinstance(error, RetrievalFailedError):
                failures[name] = error.attempts
            elif isinstance(error, QueryCancelledError):
                cancelled[name] = error
            else:
                raise error

        if failures:
            # Siblings that stopped in time still report the relays they already tried
            for name, error in cancelled.items():
                if error.attempts:
                    failures[name] = error.attempts
            failed_names = ", ".join(name for name in targets if name in failures)
            retrieval_error = RetrievalFailedError(
                f"All relay attempts failed ({failed_names})",
                attempts=[attempt for attempts in failures.values() for attempt in attempts],
                failures_by_series=failures,
            )
            self.logger.error(
                "Retrieval failed",
                failures=retrieval_error.describe_failures(),
                abandoned=[name for name in targets if name not in failures and name not in bodies]
            )
            raise retrieval_error

        if len(bodies) < len(targets) or (cancel_event is not None and cancel_event.is_set()):
            self.logger.info("Query cancelled", completed=sorted(bodies))
            raise QueryCancelledError(
                "Query cancelled before retrieval finished",
                attempts=[attempt for error in cancelled.values() for attempt in error.attempts],
            )

        return bodies

    def _compute(self, combined, start: date, end: date,
                 fetch_period: tuple[int, int]) -> QueryResult:
        """Detect signals over the full series and restrict results to [start, end]."""
        signal_config = self.config.signal
        display_series = filter_window(combined, start, end)

        calculator = ReturnCalculator(
            combined,
            short_horizon_months=signal_config.short_horizon_months,
            long_horizon_months=signal_config.long_horizon_months,
        )
        events = calculator.with_returns(detect_signals(combined, signal_config.fear_threshold))
        display_events = filter_window(events, start, end)

        result_set = ResultSet(
            display_series=tuple(display_series),
            signal_events=tuple(display_events),
            benchmark_average_return=calculator.benchmark_average(display_series),
        )

        return QueryResult(
            result_set=result_set,
            status=classify_status(display_series, signal_config.fear_threshold),
            average_six_month_return=average_return([e.six_month_return for e in display_events]),
            average_twelve_month_return=average_return([e.twelve_month_return for e in display_events]),
            fetch_period=fetch_period,
        )
