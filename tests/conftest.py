"""Shared test configuration and fixtures for all tests."""

from datetime import datetime, timedelta

import pytest

from dnsbench.models import (
    BenchmarkResult,
    BenchmarkSummary,
    ExceededEvent,
    RunConfig,
    Server,
)

from .fakes import ScriptedEngine


@pytest.fixture
def scripted_engine():
    """Factory for ScriptedEngine instances."""
    return ScriptedEngine


@pytest.fixture
def fast_config():
    """RunConfig without the inter-run pause."""
    def factory(runs=1, timeout_ms=800, max_timeouts=1):
        return RunConfig(runs=runs, timeout_ms=timeout_ms, max_timeouts=max_timeouts, inter_run_delay=0)
    return factory


@pytest.fixture
def server():
    return Server(name="Cloudflare", address="1.1.1.1")


@pytest.fixture
def sample_summary():
    """A finished summary with two ranked servers and one exceeded event."""
    started = datetime(2024, 5, 1, 12, 0, 0)
    return BenchmarkSummary(
        started_at=started,
        completed_at=started + timedelta(seconds=4),
        config=RunConfig(runs=2, timeout_ms=500, max_timeouts=1),
        servers_tested=3,
        domains_tested=2,
        results=[
            BenchmarkResult("Cloudflare", "1.1.1.1", 4, 9.5, 10.0, 12.0, 7.0, 12.0),
            BenchmarkResult("Google", "8.8.8.8", 4, 14.25, 15.0, 20.0, 10.0, 20.0),
        ],
        exceeded=[
            ExceededEvent("Broken", "192.0.2.1", "example.com", 1, 500),
        ],
    )
