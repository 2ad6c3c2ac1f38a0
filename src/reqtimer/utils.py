import asyncio
import logging
import signal
import time
from datetime import timedelta

logger = logging.getLogger(__name__)

MILLISECOND = timedelta(milliseconds=1)

# ────────────────────────────────
# Time Helpers
# ────────────────────────────────


def now() -> float:
    return time.perf_counter()


def since(start: float) -> timedelta:
    return timedelta(seconds=now() - start)


def truncate(d: timedelta, unit: timedelta = MILLISECOND) -> timedelta:
    """Drop the sub-``unit`` remainder of ``d`` (never rounds up)."""
    return (d // unit) * unit


def _fraction(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    digits = len(str(scale)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(d: timedelta) -> str:
    """Render a duration the way Go prints time.Duration: 0s, 850µs, 12.5ms, 1m30s."""
    us = d // timedelta(microseconds=1)
    if us == 0:
        return "0s"
    sign = "-" if us < 0 else ""
    us = abs(us)
    if us < 1000:
        return f"{sign}{us}µs"
    if us < 1_000_000:
        return f"{sign}{_fraction(us, 1000)}ms"

    hours, rem = divmod(us, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{_fraction(rem, 1_000_000)}s"


# ────────────────────────────────
# Periodic Reporting
# ────────────────────────────────


class IntervalTicker:
    """Polled replacement for a periodic timer.

    ``poll()`` never blocks: it returns True once per elapsed interval
    boundary. Boundaries missed while nobody polled collapse into a single
    tick, and the next tick stays aligned to the start time.
    """

    def __init__(self, interval_s: float, clock=now):
        if interval_s <= 0:
            raise ValueError("report interval must be positive")
        self.interval_s = interval_s
        self._clock = clock
        self._start = clock()
        self._next = self._start + interval_s

    def poll(self) -> bool:
        t = self._clock()
        if t < self._next:
            return False
        elapsed_ticks = int((t - self._start) // self.interval_s)
        self._next = self._start + (elapsed_ticks + 1) * self.interval_s
        return True


# ────────────────────────────────
# Signal Handling
# ────────────────────────────────


class GracefulKiller:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self.kill_now = False
        self.killed = asyncio.Event()
        self._loop = loop
        self._previous = {
            signal.SIGINT: signal.signal(signal.SIGINT, self.exit_gracefully),
            signal.SIGTERM: signal.signal(signal.SIGTERM, self.exit_gracefully),
        }

    def exit_gracefully(self, signum, frame):
        logger.warning("Received shutdown signal. Stopping after the current round...")
        self.kill_now = True
        if self._loop is not None:
            # wakes the loop out of an inter-round sleep
            self._loop.call_soon_threadsafe(self.killed.set)

    def restore(self):
        for signum, handler in self._previous.items():
            if handler is not None:
                signal.signal(signum, handler)
