"""
Command-line interface for dnsbench.

Loads and validates the server and domain lists, runs the benchmark and
hands the ranked summary to the console and file writers.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .exceptions import DNSBenchError
from .loader import load_domains, load_servers, validate_domains, validate_servers
from .logging_utils import LoggingManager
from .models import RunConfig, Transport
from .output import DEFAULT_TOP, JSONOutput, RichConsoleOutput, save_artifacts
from .resolvers import (
    DEFAULT_RESOLVERS,
    RESOLVERS,
    create_custom_resolver,
    get_resolver,
    list_resolvers,
)
from .runner import BenchmarkRunner
from .workload import default_domains


logger = LoggingManager.get_logger(__name__)

_defaults = RunConfig()


def create_progress_callback():
    """Create a rich progress bar and a callback driving it."""
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=Console(stderr=True),
        transient=True,
    )

    task_id = None

    def callback(message: str, current: int, total: int):
        nonlocal task_id
        if task_id is None:
            task_id = progress.add_task(message, total=total)
        # current is the server about to be sampled
        progress.update(task_id, description=message, completed=current - 1)

    return progress, callback


def _collect_servers(servers_file, resolver, custom_resolver):
    servers = []
    if servers_file:
        servers.extend(load_servers(servers_file))

    for name in resolver:
        try:
            servers.append(get_resolver(name))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--resolver")

    for address in custom_resolver:
        servers.append(create_custom_resolver(address))

    if not servers:
        servers = [get_resolver(name) for name in DEFAULT_RESOLVERS]

    return validate_servers(servers)


def _collect_domains(domains_file, domains_count):
    if domains_file:
        domains = load_domains(domains_file)
        return domains[:domains_count] if domains_count else domains
    return validate_domains(default_domains(domains_count))


@click.group()
@click.version_option(__version__)
def main():
    """
    dnsbench - DNS resolver latency benchmarking.

    Resolves every domain against every server, one query at a time,
    and ranks the servers by average response time.
    """
    pass


@main.command()
@click.option(
    "--servers-file", "-s",
    type=click.Path(dir_okay=False, path_type=Path),
    help="CSV (Name,Address) or JSON file listing servers to test",
)
@click.option(
    "--domains-file", "-d",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Text file with one domain per line",
)
@click.option(
    "--resolver", "-r",
    multiple=True,
    help="Built-in resolver to test (can specify multiple). Options: " + ", ".join(list_resolvers()),
)
@click.option(
    "--custom-resolver", "-c",
    multiple=True,
    help="Custom resolver IP address",
)
@click.option(
    "--domains-count",
    type=click.IntRange(min=1),
    help="Only use the first N domains",
)
@click.option(
    "--runs", "-n",
    type=click.IntRange(min=1),
    default=_defaults.runs,
    show_default=True,
    envvar="DNSBENCH_RUNS",
    help="Passes over the domain list per server",
)
@click.option(
    "--timeout-ms",
    type=click.IntRange(min=1),
    default=_defaults.timeout_ms,
    show_default=True,
    envvar="DNSBENCH_TIMEOUT_MS",
    help="Per-query timeout in milliseconds",
)
@click.option(
    "--max-timeouts",
    type=click.IntRange(min=1),
    default=_defaults.max_timeouts,
    show_default=True,
    envvar="DNSBENCH_MAX_TIMEOUTS",
    help="Failed queries tolerated before a server is abandoned",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=_defaults.inter_run_delay,
    show_default=True,
    help="Pause between runs in seconds",
)
@click.option(
    "--transport", "-t",
    type=click.Choice([t.value for t in Transport]),
    default=_defaults.transport.value,
    show_default=True,
    help="Transport protocol to use",
)
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write result files into",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["csv", "json"]),
    default="csv",
    show_default=True,
    help="Format of the result files",
)
@click.option(
    "--top",
    type=click.IntRange(min=1),
    default=DEFAULT_TOP,
    show_default=True,
    help="Number of entries in the top performers table",
)
@click.option(
    "--json",
    is_flag=True,
    help="Output results as JSON to stdout",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress progress and table output",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="DNSBENCH_LOG_LEVEL",
    help="Logging verbosity (logs go to stderr)",
)
def run(
    servers_file: Optional[Path],
    domains_file: Optional[Path],
    resolver: tuple,
    custom_resolver: tuple,
    domains_count: Optional[int],
    runs: int,
    timeout_ms: int,
    max_timeouts: int,
    delay: float,
    transport: str,
    output_dir: Optional[Path],
    fmt: str,
    top: int,
    json: bool,
    quiet: bool,
    log_level: str,
):
    """
    Run the DNS latency benchmark.

    Examples:

    \b
      # Quick test with default resolvers and domains
      dnsbench run

    \b
      # Servers and domains from files, results written to ./out
      dnsbench run -s servers.csv -d domains.txt -o out

    \b
      # Tolerate three failed queries per server
      dnsbench run -r cloudflare -r google --max-timeouts 3
    """
    LoggingManager.setup_logging(log_level)

    try:
        servers = _collect_servers(servers_file, resolver, custom_resolver)
        domains = _collect_domains(domains_file, domains_count)
        config = RunConfig(
            runs=runs,
            timeout_ms=timeout_ms,
            max_timeouts=max_timeouts,
            inter_run_delay=delay,
            transport=Transport(transport),
        )
    except DNSBenchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    runner = BenchmarkRunner(config=config)

    progress_ctx, progress_callback = None, None
    if not quiet and not json:
        progress_ctx, progress_callback = create_progress_callback()

    async def run_benchmark():
        try:
            return await runner.run(servers, domains, progress_callback=progress_callback)
        finally:
            await runner.close()

    if progress_ctx:
        with progress_ctx:
            summary = asyncio.run(run_benchmark())
    else:
        summary = asyncio.run(run_benchmark())

    if json:
        click.echo(JSONOutput.format(summary))
    elif not quiet:
        RichConsoleOutput.print(summary, top=top)

    if output_dir:
        written = save_artifacts(summary, output_dir, fmt=fmt, top=top)
        if not quiet and not json:
            for path in written:
                click.echo(f"Results saved to {path}")


@main.command()
def list_available():
    """List all built-in DNS resolvers."""
    console = Console()
    table = Table(
        title="Available DNS Resolvers",
        box=box.ROUNDED,
        header_style="bold cyan",
    )

    table.add_column("Name", style="green")
    table.add_column("Address", style="cyan")
    table.add_column("Description")

    for name, server in sorted(RESOLVERS.items()):
        table.add_row(name, server.address, server.description or "")

    console.print(table)
    console.print()
    console.print("[dim]Default resolvers:[/dim]", ", ".join(DEFAULT_RESOLVERS))


if __name__ == "__main__":
    main()
