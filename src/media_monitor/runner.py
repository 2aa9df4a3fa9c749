"""Runs monitor checks with per-monitor serialisation and bookkeeping."""

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from .config import Config, get_config
from .logging import configure_logging
from .content.snapshot import ContentSnapshot
from .monitors.base import ContentMonitor
from .version import get_version_string

log = structlog.get_logger()


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one successful check."""

    snapshot: ContentSnapshot
    diff: ContentSnapshot | None = None

    @property
    def has_changes(self) -> bool:
        """True when a diff was computed and it holds items."""
        return self.diff is not None and not self.diff.is_empty()


class MonitorRunner:
    """Checks monitors, never running two checks of one monitor at once.

    Checks of different monitors may run concurrently from several threads.
    """

    def __init__(self, config: Config | None = None) -> None:
        self._config = config or get_config()
        self._locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()
        log.debug("monitor_runner_created", version=get_version_string())

    def _monitor_lock(self, guid: str) -> threading.Lock:
        with self._lock:
            lock = self._locks.get(guid)
            if lock is None:
                lock = self._locks[guid] = threading.Lock()
            return lock

    def run(
        self,
        monitor: ContentMonitor,
        previous: ContentSnapshot | None = None,
        max_results: int | None = None,
        use_cache: bool | None = None,
        debug: bool | None = None,
    ) -> CheckResult:
        """Check a monitor and compare the result with its previous snapshot.

        Settings left as None are taken from the configuration.

        Args:
            monitor: The monitor to check.
            previous: The last stored snapshot, if any.
            max_results: Maximum number of teasers to fetch.
            use_cache: Allow crawlers to reuse detail lookups.
            debug: Log verbose diagnostics.

        Returns:
            The new snapshot and, when previous was given, the changed items.

        Raises:
            Exception: Any error from the check or comparison, after it has
                been recorded on the monitor.
        """
        if max_results is None:
            max_results = self._config.max_results
        if use_cache is None:
            use_cache = self._config.use_cache
        if debug is None:
            debug = self._config.debug

        with self._monitor_lock(monitor.guid):
            monitor.executed_at = datetime.now(timezone.utc)
            started = time.monotonic()
            try:
                snapshot = monitor.check(max_results, use_cache=use_cache, debug=debug)
                diff = None
                if previous is not None:
                    diff = monitor.compare_snapshot(
                        previous, snapshot, threshold=self._config.decrease_threshold
                    )
            except Exception as e:
                monitor.execution_time_ms = int((time.monotonic() - started) * 1000)
                monitor.error_message = str(e)
                log.error(
                    "monitor_check_failed",
                    monitor=monitor.guid,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            monitor.execution_time_ms = int((time.monotonic() - started) * 1000)
            monitor.success_at = datetime.now(timezone.utc)
            monitor.error_message = ""

        result = CheckResult(snapshot, diff)
        log.info(
            "monitor_run_complete",
            monitor=monitor.guid,
            items=snapshot.count,
            changes=diff.count if diff is not None else None,
            execution_time_ms=monitor.execution_time_ms,
        )
        return result


def create_runner(config: Config | None = None) -> MonitorRunner:
    """Create a runner for the monitor process and configure its logging.

    Args:
        config: Optional configuration; defaults to the process configuration.

    Returns:
        A MonitorRunner using the configuration.
    """
    config = config or get_config()
    configure_logging(config.json_logging, config.log_level)
    return MonitorRunner(config)
