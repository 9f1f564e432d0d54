"""
Output formatting for DNS benchmark results.

Provides multiple output formats:
- JSON: Machine-readable ranked results and exceeded events
- CSV: Spreadsheet-compatible tables
- Human-readable: Rich terminal tables and summaries
"""

import csv
import json
import logging
from dataclasses import asdict
from io import StringIO
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import BenchmarkResult, BenchmarkSummary, ExceededEvent


logger = logging.getLogger(__name__)

DEFAULT_TOP = 5

RESULT_COLUMNS = [
    "Name", "Server", "Samples", "Avg_ms", "Median_ms", "P95_ms", "Min_ms", "Max_ms",
]
EXCEEDED_COLUMNS = ["Name", "Server", "Domain", "Run", "ThresholdMs", "Reason"]


def _result_row(result: BenchmarkResult) -> list:
    return [
        result.name,
        result.server,
        result.samples,
        result.avg_ms,
        result.median_ms,
        result.p95_ms,
        result.min_ms,
        result.max_ms,
    ]


def _exceeded_row(event: ExceededEvent) -> list:
    return [
        event.name,
        event.server,
        event.domain,
        event.run,
        event.threshold_ms,
        event.reason,
    ]


class JSONOutput:
    """JSON output formatter."""

    @staticmethod
    def format_results(results: list[BenchmarkResult], indent: int = 2) -> str:
        return json.dumps([dict(zip(RESULT_COLUMNS, _result_row(r))) for r in results], indent=indent)

    @staticmethod
    def format_exceeded(events: list[ExceededEvent], indent: int = 2) -> str:
        return json.dumps([dict(zip(EXCEEDED_COLUMNS, _exceeded_row(e))) for e in events], indent=indent)

    @staticmethod
    def format(summary: BenchmarkSummary, indent: int = 2) -> str:
        """
        Format the whole summary as JSON.

        Args:
            summary: BenchmarkSummary to format
            indent: JSON indentation level

        Returns:
            JSON string
        """
        data = {
            "metadata": {
                "started_at": summary.started_at.isoformat(),
                "completed_at": summary.completed_at.isoformat(),
                "duration_seconds": round(summary.duration_seconds, 3),
                "servers_tested": summary.servers_tested,
                "domains_tested": summary.domains_tested,
                "runs": summary.config.runs,
                "timeout_ms": summary.config.timeout_ms,
                "max_timeouts": summary.config.max_timeouts,
                "transport": summary.config.transport.value,
            },
            "results": [asdict(r) for r in summary.results],
            "exceeded": [asdict(e) for e in summary.exceeded],
        }
        if summary.winner:
            data["winner"] = summary.winner.name
        return json.dumps(data, indent=indent)


class CSVOutput:
    """CSV output formatter."""

    @staticmethod
    def _format_rows(header: list[str], rows: list[list]) -> str:
        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(header)
        writer.writerows(rows)
        return output.getvalue()

    @staticmethod
    def format_results(results: list[BenchmarkResult]) -> str:
        """Format ranked results as CSV."""
        return CSVOutput._format_rows(RESULT_COLUMNS, [_result_row(r) for r in results])

    @staticmethod
    def format_exceeded(events: list[ExceededEvent]) -> str:
        """Format exceeded events as CSV."""
        return CSVOutput._format_rows(EXCEEDED_COLUMNS, [_exceeded_row(e) for e in events])


FORMATTERS = {
    "csv": CSVOutput,
    "json": JSONOutput,
}


def save_artifacts(
    summary: BenchmarkSummary,
    output_dir: Path,
    fmt: str = "csv",
    top: int = DEFAULT_TOP,
) -> list[Path]:
    """
    Write the benchmark artifacts to ``output_dir``.

    Writes results.<fmt> with the full ranking, top_performers.<fmt> with
    the first ``top`` entries and, only when there are any, exceeded.<fmt>.

    Returns:
        Paths written, in that order
    """
    formatter = FORMATTERS.get(fmt)
    if formatter is None:
        raise ValueError(f"Unknown output format: {fmt}. Available: {list(FORMATTERS)}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    artifacts = [
        (output_dir / f"results.{fmt}", formatter.format_results(summary.results)),
        (output_dir / f"top_performers.{fmt}", formatter.format_results(summary.top(top))),
    ]
    if summary.exceeded:
        artifacts.append((output_dir / f"exceeded.{fmt}", formatter.format_exceeded(summary.exceeded)))

    written = []
    for path, content in artifacts:
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(content)
        logger.info("Saved %s", path)
        written.append(path)
    return written


class RichConsoleOutput:
    """Rich library console output with colors and tables."""

    @staticmethod
    def results_table(results: list[BenchmarkResult], title: str) -> Table:
        table = Table(
            title=title,
            box=box.ROUNDED,
            header_style="bold magenta",
        )

        table.add_column("#", justify="right", style="dim")
        table.add_column("Resolver", style="cyan")
        table.add_column("Server", style="dim")
        table.add_column("Samples", justify="right")
        table.add_column("Avg (ms)", justify="right", style="green")
        table.add_column("Median (ms)", justify="right")
        table.add_column("P95 (ms)", justify="right", style="yellow")
        table.add_column("Min (ms)", justify="right")
        table.add_column("Max (ms)", justify="right", style="red")

        for rank, result in enumerate(results, start=1):
            table.add_row(
                str(rank),
                result.name,
                result.server,
                str(result.samples),
                f"{result.avg_ms:.2f}",
                f"{result.median_ms:.2f}",
                f"{result.p95_ms:.2f}",
                f"{result.min_ms:.2f}",
                f"{result.max_ms:.2f}",
            )
        return table

    @staticmethod
    def exceeded_table(events: list[ExceededEvent]) -> Table:
        table = Table(
            title="Exceeded Response Limit",
            box=box.ROUNDED,
            header_style="bold yellow",
        )
        table.add_column("Resolver", style="cyan")
        table.add_column("Server", style="dim")
        table.add_column("Domain")
        table.add_column("Run", justify="right")
        table.add_column("Threshold (ms)", justify="right")
        table.add_column("Reason", style="yellow")

        for event in events:
            table.add_row(
                event.name,
                event.server,
                event.domain,
                str(event.run),
                str(event.threshold_ms),
                event.reason,
            )
        return table

    @staticmethod
    def print(
        summary: BenchmarkSummary,
        top: int = DEFAULT_TOP,
        console: Optional[Console] = None,
    ) -> None:
        """Print the benchmark summary using rich."""
        console = console or Console()
        config = summary.config

        console.print()
        console.print(Panel.fit(
            "[bold blue]DNS RESOLVER BENCHMARK RESULTS[/bold blue]",
            border_style="blue",
        ))
        console.print()

        console.print(f"  [dim]Duration:[/dim] {summary.duration_seconds:.1f}s")
        console.print(f"  [dim]Servers:[/dim] {summary.servers_tested} | "
                      f"[dim]Domains:[/dim] {summary.domains_tested} | "
                      f"[dim]Runs:[/dim] {config.runs} | "
                      f"[dim]Timeout:[/dim] {config.timeout_ms}ms | "
                      f"[dim]Max timeouts:[/dim] {config.max_timeouts} | "
                      f"[dim]Transport:[/dim] {config.transport.value.upper()}")
        console.print()

        if summary.results:
            console.print(RichConsoleOutput.results_table(summary.results, "Resolver Performance"))
            console.print()
            console.print(RichConsoleOutput.results_table(summary.top(top), f"Top {top} Performers"))
            console.print()

        if summary.exceeded:
            console.print(RichConsoleOutput.exceeded_table(summary.exceeded))
            console.print()

        winner = summary.winner
        if winner:
            console.print(Panel(
                f"[bold green]WINNER: {winner.name} ({winner.server})[/bold green]\n"
                f"Average Latency: {winner.avg_ms:.2f}ms | "
                f"Samples: {winner.samples}",
                border_style="green",
            ))
        else:
            console.print(Panel(
                "[bold yellow]No server produced a successful query - cannot determine winner[/bold yellow]",
                border_style="yellow",
            ))

        console.print()
