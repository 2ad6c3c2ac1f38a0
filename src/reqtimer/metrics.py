import logging
from collections.abc import Sequence
from datetime import timedelta

from .models import RunningCounters, Summary
from .utils import truncate

logger = logging.getLogger(__name__)

ZERO = timedelta()


def min_of(samples: Sequence[timedelta]) -> timedelta:
    if not samples:
        return ZERO
    return truncate(min(samples))


def max_of(samples: Sequence[timedelta]) -> timedelta:
    if not samples:
        return ZERO
    return truncate(max(samples))


def avg_of(samples: Sequence[timedelta]) -> timedelta:
    if not samples:
        return ZERO
    # floor division: the sub-microsecond remainder is dropped, not rounded
    return truncate(sum(samples, ZERO) // len(samples))


def percentile_of(samples: Sequence[timedelta], p: float) -> timedelta:
    if not samples:
        return ZERO
    sl = sorted(samples)
    n = len(sl)
    return truncate(sl[max(0, min(n - 1, int(p * (n - 1))))])


def compute_summary(samples: Sequence[timedelta], counters: RunningCounters) -> Summary:
    attempts = counters.attempts
    timeout_pct = counters.timeout * 100 / attempts if attempts else 0.0
    logger.debug(
        f"Computing summary: attempts={attempts}, ok={counters.ok}, "
        f"timeout={counters.timeout}, samples={len(samples)}"
    )
    return Summary(
        ok=counters.ok,
        attempts=attempts,
        timeouts=counters.timeout,
        timeout_pct=timeout_pct,
        min=min_of(samples),
        avg=avg_of(samples),
        max=max_of(samples),
        p50=percentile_of(samples, 0.50),
        p95=percentile_of(samples, 0.95),
    )
