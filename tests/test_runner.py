"""Unit tests for the benchmark runner."""

from unittest.mock import MagicMock

import pytest

from dnsbench.models import BenchmarkResult, RunConfig, Server
from dnsbench.runner import BenchmarkRunner, rank_results

from .fakes import TIMEOUT


DOMAINS = ["example.com", "example.org"]


def make_runner(engine, runs=1, max_timeouts=1):
    config = RunConfig(runs=runs, max_timeouts=max_timeouts, inter_run_delay=0)
    return BenchmarkRunner(config=config, engine=engine)


class TestBenchmarkRunner:
    """Test BenchmarkRunner.run."""

    @pytest.mark.asyncio
    async def test_ranks_by_average_latency(self, scripted_engine):
        servers = [Server("Slow", "10.0.0.1"), Server("Fast", "10.0.0.2"), Server("Mid", "10.0.0.3")]
        engine = scripted_engine({
            "10.0.0.1": [15.0, 15.0],
            "10.0.0.2": [5.0, 5.0],
            "10.0.0.3": [10.0, 10.0],
        })
        summary = await make_runner(engine).run(servers, DOMAINS)

        assert [r.avg_ms for r in summary.results] == [5.0, 10.0, 15.0]
        assert [r.name for r in summary.results] == ["Fast", "Mid", "Slow"]
        assert summary.winner.name == "Fast"

    @pytest.mark.asyncio
    async def test_ties_keep_input_order(self, scripted_engine):
        servers = [Server("First", "10.0.0.1"), Server("Second", "10.0.0.2"), Server("Third", "10.0.0.3")]
        engine = scripted_engine({
            "10.0.0.1": [7.0, 7.0],
            "10.0.0.2": [3.0, 3.0],
            "10.0.0.3": [7.0, 7.0],
        })
        summary = await make_runner(engine).run(servers, DOMAINS)

        assert [r.name for r in summary.results] == ["Second", "First", "Third"]

    @pytest.mark.asyncio
    async def test_servers_sampled_sequentially_in_input_order(self, scripted_engine):
        servers = [Server("B", "10.0.0.2"), Server("A", "10.0.0.1")]
        engine = scripted_engine()
        await make_runner(engine).run(servers, DOMAINS)

        assert [address for address, _, _ in engine.calls] == ["10.0.0.2", "10.0.0.2", "10.0.0.1", "10.0.0.1"]

    @pytest.mark.asyncio
    async def test_exhausted_server_dropped_and_run_continues(self, scripted_engine):
        servers = [Server("Dead", "192.0.2.1"), Server("Alive", "10.0.0.1")]
        engine = scripted_engine({"192.0.2.1": [TIMEOUT]})
        summary = await make_runner(engine, runs=2).run(servers, DOMAINS)

        assert [r.name for r in summary.results] == ["Alive"]
        assert summary.results[0].samples == 4
        assert len(summary.exceeded) == 1
        assert summary.exceeded[0].name == "Dead"
        assert summary.exceeded[0].run == 1

    @pytest.mark.asyncio
    async def test_exceeded_log_collects_events_in_server_order(self, scripted_engine):
        servers = [Server("A", "10.0.0.1"), Server("B", "10.0.0.2"), Server("C", "10.0.0.3")]
        engine = scripted_engine({
            "10.0.0.1": [1.0, TIMEOUT],
            "10.0.0.3": [TIMEOUT],
        })
        summary = await make_runner(engine).run(servers, DOMAINS)

        assert [e.name for e in summary.exceeded] == ["A", "C"]
        assert [r.name for r in summary.results] == ["A", "B"]
        assert summary.results[0].samples == 1

    @pytest.mark.asyncio
    async def test_every_server_failing_gives_empty_ranking(self, scripted_engine):
        servers = [Server("A", "10.0.0.1"), Server("B", "10.0.0.2")]
        engine = scripted_engine({"10.0.0.1": [TIMEOUT], "10.0.0.2": [TIMEOUT]})
        summary = await make_runner(engine).run(servers, DOMAINS)

        assert summary.results == []
        assert summary.winner is None
        assert len(summary.exceeded) == 2

    @pytest.mark.asyncio
    async def test_summary_metadata(self, scripted_engine):
        servers = [Server("A", "10.0.0.1")]
        runner = make_runner(scripted_engine(), runs=3)
        summary = await runner.run(servers, DOMAINS)

        assert summary.servers_tested == 1
        assert summary.domains_tested == 2
        assert summary.config.runs == 3
        assert summary.completed_at >= summary.started_at

    @pytest.mark.asyncio
    async def test_progress_callback_called_per_server(self, scripted_engine):
        servers = [Server("A", "10.0.0.1"), Server("B", "10.0.0.2")]
        callback = MagicMock()
        await make_runner(scripted_engine()).run(servers, DOMAINS, progress_callback=callback)

        assert callback.call_count == 2
        callback.assert_any_call("Testing A (10.0.0.1)", 1, 2)
        callback.assert_any_call("Testing B (10.0.0.2)", 2, 2)

    @pytest.mark.asyncio
    async def test_close_closes_engine(self, scripted_engine):
        engine = scripted_engine()
        await make_runner(engine).close()
        assert engine.closed

    @pytest.mark.asyncio
    async def test_p95_matches_max_for_every_result(self, scripted_engine):
        servers = [Server(f"S{i}", f"10.0.0.{i}") for i in range(1, 4)]
        engine = scripted_engine({
            "10.0.0.1": [3.0, 9.0, 1.0, 4.0],
            "10.0.0.2": [20.0, 2.0, 2.5, 8.0],
            "10.0.0.3": [6.0, 6.0, 6.5, 5.5],
        })
        summary = await make_runner(engine, runs=2).run(servers, DOMAINS)

        for result in summary.results:
            assert result.p95_ms == result.max_ms


def test_rank_results_is_stable():
    a = BenchmarkResult("A", "1", 1, 2.0, 2.0, 2.0, 2.0, 2.0)
    b = BenchmarkResult("B", "2", 1, 1.0, 1.0, 1.0, 1.0, 1.0)
    c = BenchmarkResult("C", "3", 1, 2.0, 2.0, 2.0, 2.0, 2.0)
    assert rank_results([a, b, c]) == [b, a, c]
