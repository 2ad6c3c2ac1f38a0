__all__ = [
    "ProbeResult",
    "RoundOutcome",
    "Summary",
    "TransportConfig",
    "probe",
    "RoundCollector",
    "RoundRunner",
    "StatsReporter",
    "render_latency_histogram",
]


from .models import ProbeResult, RoundOutcome, Summary
from .transport import TransportConfig
from .prober import probe
from .collector import RoundCollector
from .runner import RoundRunner
from .reporter import StatsReporter
from .rendering import render_latency_histogram
