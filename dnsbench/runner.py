"""
Benchmark runner for DNS resolvers.

Orchestrates a benchmark:
- Servers are sampled strictly one after another, in input order
- Servers that produced no samples are dropped from the ranking
- Results are ranked by average latency
- Exceeded events from every server are gathered into one log
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from .models import (
    BenchmarkResult,
    BenchmarkSummary,
    ExceededEvent,
    RunConfig,
    Server,
)
from .query_engine import DNSQueryEngine
from .sampler import ServerSampler


logger = logging.getLogger(__name__)

# Type for progress callback
ProgressCallback = Callable[[str, int, int], None]


def rank_results(results: list[BenchmarkResult]) -> list[BenchmarkResult]:
    """Sort ascending by average latency, ties keep input order."""
    return sorted(results, key=lambda r: r.avg_ms)


class BenchmarkRunner:
    """
    Orchestrates DNS latency benchmarks.

    Every server gets the identical domain list and run configuration so
    the ranking compares like with like.
    """

    def __init__(
        self,
        config: Optional[RunConfig] = None,
        engine: Optional[DNSQueryEngine] = None,
    ):
        """
        Initialize the runner.

        Args:
            config: Run parameters (defaults to RunConfig())
            engine: Query engine to use (built from config if omitted)
        """
        self.config = config or RunConfig()
        self.engine = engine or DNSQueryEngine(transport=self.config.transport)
        self.sampler = ServerSampler(self.engine)

    async def run(
        self,
        servers: list[Server],
        domains: list[str],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> BenchmarkSummary:
        """
        Benchmark every server against every domain.

        Args:
            servers: Validated, non-empty server list
            domains: Validated, non-empty domain list
            progress_callback: Optional callback for progress updates

        Returns:
            BenchmarkSummary with ranked results and the exceeded log
        """
        started_at = datetime.now()
        results: list[BenchmarkResult] = []
        exceeded: list[ExceededEvent] = []

        logger.info(
            "Benchmarking %d servers against %d domains (runs=%d, timeout=%dms, max_timeouts=%d)",
            len(servers), len(domains), self.config.runs,
            self.config.timeout_ms, self.config.max_timeouts,
        )

        for index, server in enumerate(servers, start=1):
            if progress_callback:
                progress_callback(
                    f"Testing {server.name} ({server.address})",
                    index,
                    len(servers),
                )

            outcome = await self.sampler.sample(server, domains, self.config)
            exceeded.extend(outcome.exceeded)
            if outcome.result is not None:
                results.append(outcome.result)

        summary = BenchmarkSummary(
            started_at=started_at,
            completed_at=datetime.now(),
            config=self.config,
            servers_tested=len(servers),
            domains_tested=len(domains),
            results=rank_results(results),
            exceeded=exceeded,
        )
        logger.info(
            "Benchmark finished in %.1fs: %d ranked, %d exceeded",
            summary.duration_seconds, len(summary.results), len(summary.exceeded),
        )
        return summary

    async def close(self):
        """Clean up resources."""
        await self.engine.close()
