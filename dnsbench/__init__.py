"""
dnsbench - DNS resolver latency benchmarking tool.

Resolves a list of domains against a list of DNS servers, one query at a
time, and ranks the servers by average response time.
"""

__version__ = "1.0.0"

from .models import BenchmarkResult, BenchmarkSummary, ExceededEvent, RunConfig, Server
from .query_engine import DNSQueryEngine
from .runner import BenchmarkRunner
from .sampler import ServerSampler
from .statistics import StatisticsEngine

__all__ = [
    "__version__",
    "BenchmarkResult",
    "BenchmarkSummary",
    "ExceededEvent",
    "RunConfig",
    "Server",
    "DNSQueryEngine",
    "BenchmarkRunner",
    "ServerSampler",
    "StatisticsEngine",
]
