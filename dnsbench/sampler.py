"""
Per-server sampling.

Drives the query engine over every (run, domain) pair for one server and
applies the timeout budget: once the number of failed queries reaches
``max_timeouts`` the server is abandoned for the rest of the benchmark.
"""

import asyncio
import logging

from .models import (
    BenchmarkResult,
    ExceededEvent,
    RunConfig,
    SamplerOutcome,
    Server,
)
from .query_engine import DNSQueryEngine
from .statistics import StatisticsEngine


logger = logging.getLogger(__name__)


class ServerSampler:
    """Collects latency samples for one server at a time."""

    def __init__(self, engine: DNSQueryEngine):
        self.engine = engine

    async def sample(
        self,
        server: Server,
        domains: list[str],
        config: RunConfig,
    ) -> SamplerOutcome:
        """
        Sample one server across all runs and domains.

        The timeout counter is cumulative for the whole server: a success
        does not reset it.

        Args:
            server: Server to benchmark
            domains: Domains to resolve, in order
            config: Run parameters

        Returns:
            SamplerOutcome with the result (None if no samples were
            collected) and any exceeded event raised
        """
        samples: list[float] = []
        exceeded: list[ExceededEvent] = []
        timeouts = 0

        for run in range(1, config.runs + 1):
            for domain in domains:
                query = await self.engine.execute(server, domain, config.timeout_ms)

                if query.is_success:
                    samples.append(query.latency_ms)
                    continue

                timeouts += 1
                if timeouts >= config.max_timeouts:
                    event = ExceededEvent(
                        name=server.name,
                        server=server.address,
                        domain=domain,
                        run=run,
                        threshold_ms=config.timeout_ms,
                    )
                    exceeded.append(event)
                    logger.warning(
                        "%s (%s) exceeded response limit at run %d on %s after %d failed queries",
                        server.name, server.address, run, domain, timeouts,
                    )
                    return self._finish(server, samples, exceeded)

            if run < config.runs and config.inter_run_delay > 0:
                await asyncio.sleep(config.inter_run_delay)

        return self._finish(server, samples, exceeded)

    @staticmethod
    def _finish(
        server: Server,
        samples: list[float],
        exceeded: list[ExceededEvent],
    ) -> SamplerOutcome:
        if not samples:
            logger.warning("%s (%s) produced no samples and is excluded from the ranking", server.name, server.address)
            return SamplerOutcome(result=None, exceeded=exceeded)

        stats = StatisticsEngine.summarize(samples)
        result = BenchmarkResult.from_stats(server, len(samples), stats)
        logger.info(
            "%s (%s): %d samples, avg %.2fms",
            server.name, server.address, result.samples, result.avg_ms,
        )
        return SamplerOutcome(result=result, exceeded=exceeded)
