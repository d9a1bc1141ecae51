"""
Refresh loop for Kubeglance.

This module runs fetch+render cycles, either once or repeatedly in watch mode.
A cycle prints the header, queries pods and StatefulSets, and renders either
the report or the "nothing found" notice.

Key Components:
- Monitor: Runs cycles for one MonitorConfig
- Monitor.run_cycle: One fetch+render cycle
- Monitor.run_once: Single-shot mode, returns the process exit code
- Monitor.watch: Watch mode, repeats until cancelled

Cycles never overlap: the wait starts only after a cycle (including its
fetch) has completed. In watch mode a failed cycle is reported and the loop
continues on the next tick.

Example:
    ```python
    monitor = Monitor(MonitorConfig(namespace="jenkins", label_selector="app=jenkins"))
    exit_code = asyncio.run(monitor.run_once())
    ```
"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from rich.console import Console

from .constants import ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL, LOG_FORMAT
from .kube import KubeContext, load_kube, fetch_resources
from .models import MonitorConfig
from .render import (
    render_header, render_searching, render_report, render_nothing_found,
    render_error, render_refresh_footer
)
from .summary_processing import build_report

# Logging setup (level via KUBEGLANCE_LOG_LEVEL env or default WARNING)
logging.basicConfig(
    level=getattr(logging, os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(), logging.WARNING),
    format=LOG_FORMAT
)
log = logging.getLogger('kubeglance')


def _log_exception(msg: str, exc: Exception, level: int = logging.WARNING):
    """Log an exception with proper formatting."""
    log.log(level, f"{msg}: {exc.__class__.__name__}: {exc}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Monitor:
    """
    Runs fetch+render cycles for one monitoring target.

    The Kubernetes client is loaded on the first cycle and reused afterwards;
    if loading fails, the next cycle tries again.

    Attributes:
        config: Monitoring target and refresh settings
        console: Console the report is printed to
        clock: Returns the reference time for a cycle
    """

    def __init__(
        self,
        config: MonitorConfig,
        console: Optional[Console] = None,
        clock: Callable[[], datetime] = _utcnow,
        kube_loader: Callable[[Optional[str], Optional[str]], Awaitable[KubeContext]] = load_kube,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.console = console or Console()
        self.clock = clock
        self._kube_loader = kube_loader
        self._sleep = sleep
        self._kube: Optional[KubeContext] = None

    async def _client(self) -> KubeContext:
        if self._kube is None:
            self._kube = await self._kube_loader(self.config.kubeconfig, self.config.context)
        return self._kube

    async def run_cycle(self) -> bool:
        """
        Fetch and render once.

        Returns:
            bool: True if a report was rendered, False if nothing was found

        Raises:
            ClientUnavailableError: If the Kubernetes client cannot be loaded
            ClusterQueryError: If either query fails
        """
        namespace, selector = self.config.namespace, self.config.label_selector
        render_header(self.console, namespace, selector, self.clock())

        kube = await self._client()
        render_searching(self.console)
        pods, statefulsets = await fetch_resources(kube, namespace, selector)

        if not pods and not statefulsets:
            log.info(f"[monitor] no resources namespace={namespace} selector={selector}")
            render_nothing_found(self.console, namespace, selector)
            return False

        report = build_report(pods, statefulsets, self.config, self.clock())
        log.info(
            f"[monitor] rendered pods={report.summary.total} "
            f"statefulsets={report.summary.statefulset_count} verdict={report.summary.verdict}"
        )
        render_report(self.console, report)
        return True

    async def run_once(self) -> int:
        """Single-shot mode: one cycle, returns 0 on success and 1 on any failure."""
        try:
            await self.run_cycle()
        except Exception as e:
            _log_exception("[monitor] cycle failed", e, logging.ERROR)
            render_error(self.console, e)
            return 1
        return 0

    async def watch(self, max_cycles: Optional[int] = None) -> None:
        """
        Watch mode: clear, run a cycle, wait, repeat.

        A failed cycle is rendered as an error line and logged; the next
        cycle runs after the usual interval. Runs until cancelled unless
        `max_cycles` is given.
        """
        interval = self.config.refresh_interval
        log.info(f"[monitor] watch mode, refresh interval={interval}s")
        cycles = 0
        while True:
            self.console.clear()
            try:
                await self.run_cycle()
            except Exception as e:
                _log_exception("[monitor] cycle failed, retrying on next refresh", e)
                render_error(self.console, e)
            cycles += 1
            render_refresh_footer(self.console, interval)
            if max_cycles is not None and cycles >= max_cycles:
                return
            await self._sleep(interval)
