import asyncio
import logging
from collections.abc import Iterable

from .collector import RoundCollector
from .models import Emitter, MetricsCallback, RoundOutcome, Summary
from .reporter import StatsReporter
from .transport import TransportConfig
from .utils import GracefulKiller, IntervalTicker, format_duration

logger = logging.getLogger(__name__)


class RoundRunner:
    def __init__(
        self,
        urls: Iterable[str],
        transport: TransportConfig | None = None,
        count: int = 1,
        timeout_s: float = 1.0,
        wait_s: float = 0.5,
        report_interval_s: float = 5.0,
        quiet: bool = False,
        cancel_pending: bool = True,
        emit: Emitter = print,
        metrics_callback: MetricsCallback | None = None,
        handle_signals: bool = False,
    ) -> None:
        self.urls = [u.strip() for u in urls]
        if not self.urls:
            raise ValueError("at least one url is required")

        self.count = count
        self.timeout_s = timeout_s
        self.wait_s = wait_s
        self.report_interval_s = report_interval_s
        self.quiet = quiet
        self.emit = emit
        self.handle_signals = handle_signals

        self.collector = RoundCollector(transport, cancel_pending=cancel_pending)
        self.reporter = StatsReporter(emit=emit, metrics_callback=metrics_callback)

        logger.info(
            f"Initialized runner with {len(self.urls)} URLs, count={count}, "
            f"timeout={timeout_s:.3f}s, wait={wait_s:.3f}s"
        )

    # ────────────────────────────────
    # Per-round Handling
    # ────────────────────────────────

    def _display(self, outcome: RoundOutcome) -> None:
        if self.quiet:
            return
        for result in outcome.results:
            line = f"{result.url}: {format_duration(result.duration)}"
            if result.error is not None:
                line += f" (error: {result.error})"
            self.emit(line)

    def _classify(self, outcome: RoundOutcome) -> None:
        if outcome.complete:
            self.reporter.record_complete(outcome.mean_duration)
        else:
            self.reporter.record_timeout()

    async def _pause(self, killer: GracefulKiller | None) -> None:
        if killer is None:
            await asyncio.sleep(self.wait_s)
            return
        try:
            await asyncio.wait_for(killer.killed.wait(), timeout=self.wait_s)
        except TimeoutError:
            pass  # waited the full interval

    # ────────────────────────────────
    # Main Runner
    # ────────────────────────────────

    async def run(self) -> Summary:
        logger.info("Starting run...")
        killer = GracefulKiller(asyncio.get_running_loop()) if self.handle_signals else None
        ticker = IntervalTicker(self.report_interval_s)

        try:
            for i in range(self.count):
                if killer and killer.kill_now:
                    logger.info(f"Graceful shutdown requested after {i} rounds")
                    break

                outcome = await self.collector.collect(self.urls, self.timeout_s)
                self._display(outcome)
                self._classify(outcome)

                if ticker.poll():
                    self.reporter.report()

                # no wait after the last round
                if i != self.count - 1:
                    await self._pause(killer)
        finally:
            if killer:
                killer.restore()
            await self.collector.aclose()

        return self.reporter.report_final()
