"""Summary rendering for benchmark runs."""

from rich import box
from rich.console import Console
from rich.table import Table

from gcsbench.core.benchmark.runner import BenchmarkResult
from gcsbench.core.utils.byte_sizes import format_bytes, format_rate


def print_summary_table(console: Console, result: BenchmarkResult) -> None:
    """Render the aggregate throughput of a run."""
    stats = result.stats
    table = Table(
        title=f"{result.scenario} upload",
        box=box.MINIMAL,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Repetitions", justify="right")
    table.add_column("Object size", justify="right")
    table.add_column("Mean", justify="right", style="green")
    table.add_column("Std dev", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_row(
        str(stats.count),
        format_bytes(result.bytes_per_repetition),
        format_rate(stats.mean),
        format_rate(stats.stddev),
        format_rate(stats.minimum),
        format_rate(stats.maximum),
    )
    console.print(table)
