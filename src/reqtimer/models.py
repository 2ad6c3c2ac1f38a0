from dataclasses import dataclass
from datetime import timedelta
from typing import Any
from collections.abc import Callable


@dataclass(frozen=True)
class ProbeResult:
    url: str
    duration: timedelta
    error: Exception | None = None
    status: int | None = None
    size: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RoundOutcome:
    results: tuple[ProbeResult, ...]
    url_count: int

    @property
    def complete(self) -> bool:
        return len(self.results) == self.url_count

    @property
    def mean_duration(self) -> timedelta | None:
        if not self.results:
            return None
        total = sum((r.duration for r in self.results), timedelta())
        return total // len(self.results)


@dataclass
class RunningCounters:
    ok: int = 0
    timeout: int = 0

    @property
    def attempts(self) -> int:
        return self.ok + self.timeout


@dataclass
class Summary:
    ok: int
    attempts: int
    timeouts: int
    timeout_pct: float
    min: timedelta
    avg: timedelta
    max: timedelta
    p50: timedelta
    p95: timedelta


# Metrics callback: callable accepting summary dict
MetricsCallback = Callable[[dict[str, Any]], None]

# Line sink for report output
Emitter = Callable[[str], None]
