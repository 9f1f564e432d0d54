"""
Statistical summary of DNS latency samples.

The median and p95 definitions here are deliberately not the textbook
ones and must stay as they are so rankings remain comparable with
earlier benchmark runs:

- median: the element at index ``floor(n / 2)`` of the sorted samples,
  i.e. the upper middle element for even ``n``.
- p95: the maximum of the top ``ceil(5% of n)`` sorted samples, which
  always equals the overall maximum.
"""

import math

import numpy as np

from .models import LatencyStats


P95_TOP_FRACTION = 0.05
PRECISION = 2


class StatisticsEngine:
    """Reduces latency samples to a fixed summary."""

    @staticmethod
    def median(sorted_samples: np.ndarray) -> float:
        return float(sorted_samples[len(sorted_samples) // 2])

    @staticmethod
    def p95(sorted_samples: np.ndarray) -> float:
        top_count = math.ceil(P95_TOP_FRACTION * len(sorted_samples))
        return float(np.max(sorted_samples[-top_count:]))

    @staticmethod
    def summarize(samples: list[float]) -> LatencyStats:
        """
        Calculate the latency summary for one server.

        Args:
            samples: Non-empty list of latencies in milliseconds

        Returns:
            LatencyStats with every value rounded to 2 decimals

        Raises:
            ValueError: If samples is empty
        """
        if not samples:
            raise ValueError("Cannot summarize an empty sample list")

        latencies = np.sort(np.asarray(samples, dtype=float))

        return LatencyStats(
            avg_ms=round(float(np.mean(latencies)), PRECISION),
            median_ms=round(StatisticsEngine.median(latencies), PRECISION),
            p95_ms=round(StatisticsEngine.p95(latencies), PRECISION),
            min_ms=round(float(latencies[0]), PRECISION),
            max_ms=round(float(latencies[-1]), PRECISION),
        )
