"""Repeated, timed upload scenarios.

Each repetition runs one complete upload, strictly sequentially. The first
failure aborts the run and propagates; there are no partial results and no
retries.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from gcsbench.core.benchmark.stats import (
    ThroughputSample,
    ThroughputStats,
    compute_throughput_stats,
)
from gcsbench.core.const import DEFAULT_CHUNK_COUNT, DEFAULT_OBJECT_NAME
from gcsbench.core.exceptions import ValidationError
from gcsbench.core.storage.content_range import validate_chunk_size
from gcsbench.core.storage.gcs_client import GcsClient
from gcsbench.core.utils.byte_sizes import format_rate
from gcsbench.core.utils.payload import make_random_buffer

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Samples and aggregate statistics of a finished run."""

    scenario: str
    bytes_per_repetition: int
    samples: list[ThroughputSample] = field(default_factory=list)

    @property
    def stats(self) -> ThroughputStats:
        """Throughput statistics over all samples."""
        return compute_throughput_stats([s.bytes_per_second for s in self.samples])


class BenchmarkRunner:
    """Time simple and resumable uploads to a bucket."""

    def __init__(
        self,
        client_factory: Callable[[], GcsClient],
        bucket: str,
        object_name: str = DEFAULT_OBJECT_NAME,
        echo: Callable[[str], None] = print,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the runner.

        Args:
            client_factory: Builds the client used by one repetition. A fresh
                client is built per repetition, outside the timed region.
            bucket: Destination bucket.
            object_name: Object overwritten by every repetition.
            echo: Receives one human-readable line per event.
            clock: Monotonic clock in seconds.

        Raises:
            ValidationError: If bucket or object name is empty.
        """
        if not bucket:
            raise ValidationError("destination bucket must be specified")
        if not object_name:
            raise ValidationError("object name must be specified")

        self._client_factory = client_factory
        self._bucket = bucket
        self._object_name = object_name
        self._echo = echo
        self._clock = clock

    def run_simple(self, size: int, repeat: int) -> BenchmarkResult:
        """Time ``repeat`` single-request uploads of ``size`` random bytes."""
        if size < 0:
            raise ValidationError(f"object size must be non-negative, got {size}")
        _require_repeat(repeat)

        result = BenchmarkResult(scenario="simple", bytes_per_repetition=size)
        for repetition in range(1, repeat + 1):
            client = self._client_factory()
            payload = make_random_buffer(size)

            start = self._clock()
            client.upload_object(self._bucket, self._object_name, payload)
            elapsed = self._clock() - start

            self._record(result, repetition, elapsed)

        self._report(result)
        return result

    def run_resumable(
        self, chunk_size: int, repeat: int, chunks: int = DEFAULT_CHUNK_COUNT
    ) -> BenchmarkResult:
        """Time ``repeat`` resumable uploads of ``chunks`` chunks each.

        After every chunk the session's resume offset is queried and echoed,
        so the status queries are part of the measured time.

        Args:
            chunk_size: Size of each chunk, a positive multiple of
                ``MIN_UPLOAD_CHUNK_SIZE``.
            repeat: Number of repetitions.
            chunks: Number of chunks per upload.

        Returns:
            The finished run.

        Raises:
            ValidationError: If any argument is out of range.
        """
        validate_chunk_size(chunk_size)
        if chunks < 1:
            raise ValidationError(f"chunk count must be at least 1, got {chunks}")
        _require_repeat(repeat)

        total_size = chunks * chunk_size
        result = BenchmarkResult(scenario="resumable", bytes_per_repetition=total_size)
        for repetition in range(1, repeat + 1):
            client = self._client_factory()
            payload = make_random_buffer(total_size)

            start = self._clock()
            self._upload_in_chunks(client, payload, chunk_size, chunks)
            elapsed = self._clock() - start

            self._record(result, repetition, elapsed)

        self._report(result)
        return result

    def _upload_in_chunks(
        self, client: GcsClient, payload: bytes, chunk_size: int, chunks: int
    ) -> None:
        session_url = client.new_upload_session(self._bucket, self._object_name)

        offset = 0
        for index in range(chunks):
            chunk = payload[offset : offset + chunk_size]
            client.upload_object_part(
                session_url, offset, chunk, is_last=index == chunks - 1
            )
            offset += len(chunk)

            state = client.get_resume_offset(session_url)
            self._echo(f"get_resume_offset() = {state.offset}, {state.complete}")

    def _record(
        self, result: BenchmarkResult, repetition: int, elapsed: float
    ) -> None:
        sample = ThroughputSample(
            elapsed_seconds=elapsed, num_bytes=result.bytes_per_repetition
        )
        result.samples.append(sample)
        logger.debug(
            "%s repetition %d: %d bytes in %.6fs",
            result.scenario,
            repetition,
            sample.num_bytes,
            elapsed,
        )
        self._echo(
            f"repetition {repetition}\ttime {elapsed:.3f}s\t"
            f"speed {format_rate(sample.bytes_per_second)}"
        )

    def _report(self, result: BenchmarkResult) -> None:
        stats = result.stats
        self._echo(
            f"avg speed {format_rate(stats.mean)}\tstddev {format_rate(stats.stddev)}"
        )


def _require_repeat(repeat: int) -> None:
    if repeat < 1:
        raise ValidationError(f"repeat count must be at least 1, got {repeat}")
