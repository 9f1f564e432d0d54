"""
Data models for dnsbench.

Defines structured types for servers, run configuration, single query
results, per-server benchmark results and the final ranked summary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .exceptions import ConfigurationError


EXCEEDED_REASON = "Exceeded response limit"


class Transport(Enum):
    """DNS transport protocols."""
    UDP = "udp"
    TCP = "tcp"


class QueryStatus(Enum):
    """Result status of a DNS query."""
    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class Server:
    """A DNS resolver under test."""
    name: str
    address: str
    description: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class RunConfig:
    """
    Benchmark parameters for one invocation.

    Attributes:
        runs: Full passes over the domain list per server
        timeout_ms: Per-query wall-clock bound in milliseconds
        max_timeouts: Failed queries tolerated before a server is abandoned
        inter_run_delay: Pause between runs in seconds
        transport: Transport used for every query
    """
    runs: int = 10
    timeout_ms: int = 800
    max_timeouts: int = 1
    inter_run_delay: float = 0.1
    transport: Transport = Transport.UDP

    def __post_init__(self):
        for attr in ("runs", "timeout_ms", "max_timeouts"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(
                    f"{attr} must be a positive integer, got {value!r}"
                )
        if self.inter_run_delay < 0:
            raise ConfigurationError(
                f"inter_run_delay must be >= 0, got {self.inter_run_delay!r}"
            )


@dataclass
class QueryResult:
    """Result of a single DNS query."""
    domain: str
    server: Server
    status: QueryStatus
    latency_ms: Optional[float] = None
    timestamp: datetime = field(default_factory=datetime.now)
    answers: list[str] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if query produced a latency sample."""
        return self.status == QueryStatus.SUCCESS


@dataclass(frozen=True)
class ExceededEvent:
    """Marks the query at which a server ran out of timeout budget."""
    name: str
    server: str
    domain: str
    run: int
    threshold_ms: int
    reason: str = EXCEEDED_REASON


@dataclass(frozen=True)
class LatencyStats:
    """Latency summary of one server's samples, in milliseconds."""
    avg_ms: float
    median_ms: float
    p95_ms: float
    min_ms: float
    max_ms: float


@dataclass(frozen=True)
class BenchmarkResult:
    """Latency statistics for one server that produced at least one sample."""
    name: str
    server: str
    samples: int
    avg_ms: float
    median_ms: float
    p95_ms: float
    min_ms: float
    max_ms: float

    @classmethod
    def from_stats(cls, server: Server, samples: int, stats: LatencyStats) -> "BenchmarkResult":
        return cls(
            name=server.name,
            server=server.address,
            samples=samples,
            avg_ms=stats.avg_ms,
            median_ms=stats.median_ms,
            p95_ms=stats.p95_ms,
            min_ms=stats.min_ms,
            max_ms=stats.max_ms,
        )


@dataclass(frozen=True)
class SamplerOutcome:
    """What sampling one server produced."""
    result: Optional[BenchmarkResult]
    exceeded: list[ExceededEvent] = field(default_factory=list)


@dataclass
class BenchmarkSummary:
    """Complete benchmark output for all servers."""
    started_at: datetime
    completed_at: datetime
    config: RunConfig
    servers_tested: int
    domains_tested: int

    # Ranked ascending by avg_ms
    results: list[BenchmarkResult] = field(default_factory=list)
    exceeded: list[ExceededEvent] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Total benchmark duration in seconds."""
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def winner(self) -> Optional[BenchmarkResult]:
        """Fastest server by average latency (if any produced samples)."""
        return self.results[0] if self.results else None

    def top(self, count: int = 5) -> list[BenchmarkResult]:
        """First ``count`` entries of the ranking."""
        return self.results[:count]
