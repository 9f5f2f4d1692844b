"""gcsbench CLI entry point."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import requests
import typer
from rich.console import Console

from gcsbench import __version__
from gcsbench.core.auth import build_authorized_session
from gcsbench.core.benchmark.runner import BenchmarkRunner
from gcsbench.core.cli.display import print_summary_table
from gcsbench.core.config import BenchConfig, resolve_config
from gcsbench.core.const import (
    DEFAULT_CHUNK_COUNT,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_OBJECT_SIZE,
)
from gcsbench.core.exceptions import GcsBenchError
from gcsbench.core.storage.gcs_client import GcsClient
from gcsbench.core.utils.byte_sizes import parse_bytes
from gcsbench.core.utils.logging_utils import configure_logging

app = typer.Typer(
    add_completion=False, help="Upload throughput benchmarks for Cloud Storage."
)
console = Console()
logger = logging.getLogger(__name__)

BUCKET_OPTION = typer.Option("", "--bucket", "-b", help="Destination bucket.")
REPEAT_OPTION = typer.Option(
    None, "--repeat", "-r", help="Repetitions (default 5, env GCSBENCH_REPEAT)."
)
NAME_OPTION = typer.Option(
    None, "--name", "-n", help="Object name (default x, env GCSBENCH_OBJECT_NAME)."
)
TIMEOUT_OPTION = typer.Option(
    None, "--timeout", help="Per-request timeout in seconds (env GCSBENCH_TIMEOUT)."
)


def _version_callback(value: bool) -> bool:
    if value:
        typer.echo(__version__)
        raise typer.Exit()
    return value


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show the gcsbench version and exit.",
        callback=_version_callback,
        is_eager=True,
        is_flag=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Log every request at debug level."
    ),
) -> None:
    """Handle global CLI options."""
    configure_logging(logging.DEBUG if verbose else logging.INFO)


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Turn benchmark failures into a logged error and exit code 1."""
    try:
        yield
    except (GcsBenchError, requests.RequestException) as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc


def _parse_size(value: str, option: str) -> int:
    try:
        return parse_bytes(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=option) from exc


def _client_factory(config: BenchConfig) -> Callable[[], GcsClient]:
    def build() -> GcsClient:
        return GcsClient(
            build_authorized_session(),
            storage_host=config.storage_host,
            timeout=config.timeout,
        )

    return build


@app.command("obj")
def upload_obj(
    bucket: str = BUCKET_OPTION,
    size: str = typer.Option(
        DEFAULT_OBJECT_SIZE, "--size", "-s", help="Object size, e.g. 4KB or 1MB."
    ),
    repeat: int | None = REPEAT_OPTION,
    name: str | None = NAME_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
) -> None:
    """Benchmark single-request uploads."""
    size_bytes = _parse_size(size, "--size")
    with _exit_on_error():
        config = resolve_config(
            {"repeat": repeat, "object_name": name, "timeout": timeout}
        )
        runner = BenchmarkRunner(
            _client_factory(config),
            bucket,
            object_name=config.object_name,
            echo=typer.echo,
        )
        result = runner.run_simple(size_bytes, config.repeat)
    print_summary_table(console, result)


@app.command("mobj")
def upload_multipart_obj(
    bucket: str = BUCKET_OPTION,
    chunk: str = typer.Option(
        DEFAULT_CHUNK_SIZE,
        "--chunk",
        "-c",
        help="Chunk size, a multiple of 256KB.",
    ),
    chunks: int = typer.Option(
        DEFAULT_CHUNK_COUNT, "--chunks", help="Number of chunks per upload."
    ),
    repeat: int | None = REPEAT_OPTION,
    name: str | None = NAME_OPTION,
    timeout: float | None = TIMEOUT_OPTION,
) -> None:
    """Benchmark resumable uploads made of several chunks."""
    chunk_bytes = _parse_size(chunk, "--chunk")
    with _exit_on_error():
        config = resolve_config(
            {"repeat": repeat, "object_name": name, "timeout": timeout}
        )
        runner = BenchmarkRunner(
            _client_factory(config),
            bucket,
            object_name=config.object_name,
            echo=typer.echo,
        )
        result = runner.run_resumable(chunk_bytes, config.repeat, chunks=chunks)
    print_summary_table(console, result)


@app.command("offset")
def resume_offset(
    session_url: str = typer.Argument(..., help="Resumable session URL."),
    timeout: float | None = TIMEOUT_OPTION,
) -> None:
    """Show how many bytes a resumable session has stored."""
    with _exit_on_error():
        config = resolve_config({"timeout": timeout})
        state = _client_factory(config)().get_resume_offset(session_url)
    typer.echo(f"offset={state.offset} complete={str(state.complete).lower()}")


@app.command("cancel")
def cancel(
    session_url: str = typer.Argument(..., help="Resumable session URL."),
    timeout: float | None = TIMEOUT_OPTION,
) -> None:
    """Cancel a resumable session."""
    with _exit_on_error():
        config = resolve_config({"timeout": timeout})
        _client_factory(config)().cancel_upload(session_url)
    typer.echo("cancelled")


def main() -> None:
    """CLI entrypoint for the gcsbench command."""
    app()


if __name__ == "__main__":
    main()
