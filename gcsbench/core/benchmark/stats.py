"""Throughput samples and their aggregate statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ThroughputSample:
    """One timed repetition."""

    elapsed_seconds: float
    num_bytes: int

    @property
    def bytes_per_second(self) -> float:
        """Throughput of the repetition; infinite if no time elapsed."""
        if self.elapsed_seconds <= 0:
            return float("inf")
        return self.num_bytes / self.elapsed_seconds


@dataclass(frozen=True)
class ThroughputStats:
    """Aggregate throughput over a run, in bytes per second.

    Attributes:
        mean: arithmetic mean of the samples.
        stddev: population standard deviation of the samples.
        minimum: slowest sample.
        maximum: fastest sample.
        count: number of samples.
    """

    mean: float
    stddev: float
    minimum: float
    maximum: float
    count: int


def compute_throughput_stats(rates: Sequence[float]) -> ThroughputStats:
    """Aggregate per-repetition throughputs.

    Args:
        rates: Throughput of each repetition in bytes per second.

    Returns:
        Mean, population standard deviation and range of ``rates``.

    Raises:
        ValueError: If ``rates`` is empty.
    """
    if len(rates) == 0:
        raise ValueError("at least one throughput sample is required")

    values = np.asarray(rates, dtype=np.float64)
    return ThroughputStats(
        mean=float(values.mean()),
        stddev=float(values.std()),
        minimum=float(values.min()),
        maximum=float(values.max()),
        count=int(values.size),
    )
