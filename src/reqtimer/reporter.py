import logging
from dataclasses import asdict
from datetime import timedelta

from .metrics import compute_summary
from .models import Emitter, MetricsCallback, RunningCounters, Summary
from .utils import format_duration

logger = logging.getLogger(__name__)


def format_summary(summary: Summary) -> str:
    return (
        f"{summary.ok}/{summary.attempts} ok, {summary.timeouts} timeout "
        f"({summary.timeout_pct:.2f}%) "
        f"{format_duration(summary.min)}/{format_duration(summary.avg)}/"
        f"{format_duration(summary.max)}"
    )


class StatsReporter:
    """Run-lifetime counters and round samples, plus the summary lines built from them."""

    def __init__(
        self,
        emit: Emitter = print,
        metrics_callback: MetricsCallback | None = None,
    ) -> None:
        self.emit = emit
        self.metrics_callback = metrics_callback
        self.counters = RunningCounters()
        self.samples: list[timedelta] = []

    def record_complete(self, sample: timedelta) -> None:
        self.counters.ok += 1
        self.samples.append(sample)

    def record_timeout(self) -> None:
        self.counters.timeout += 1

    def summarize(self) -> Summary:
        return compute_summary(self.samples, self.counters)

    def _publish(self, summary: Summary) -> Summary:
        self.emit(format_summary(summary))
        if self.metrics_callback:
            self.metrics_callback(asdict(summary))
        return summary

    def report(self) -> Summary:
        """Periodic line; like the final one it divides timeouts by rounds attempted so far."""
        return self._publish(self.summarize())

    def report_final(self) -> Summary:
        summary = self.summarize()
        self.emit("Summary:")
        logger.info(
            f"Run completed: {summary.ok} complete, {summary.timeouts} timed out "
            f"out of {summary.attempts} rounds"
        )
        return self._publish(summary)
