from collections.abc import Sequence
from datetime import timedelta


def render_latency_histogram(samples: Sequence[timedelta], bins: int = 20) -> str:
    if not samples:
        return "No latency data."
    values = [s / timedelta(milliseconds=1) for s in samples]
    lo, hi = min(values), max(values)
    if hi <= lo:
        return f"Histogram: single value {lo:.3f}ms"

    width = 40
    counts = [0] * bins
    for x in values:
        j = int((x - lo) / (hi - lo) * bins)
        if j == bins:
            j -= 1
        counts[j] += 1

    peak = max(counts)
    lines = []
    for i, c in enumerate(counts):
        left = lo + (hi - lo) * (i / bins)
        right = lo + (hi - lo) * ((i + 1) / bins)
        bar = "#" * max(1, int((c / peak) * width)) if c else ""
        lines.append(f"{left:9.3f}ms - {right:9.3f}ms | {bar} ({c})")
    return "Round Latency Histogram\n" + "\n".join(lines)
