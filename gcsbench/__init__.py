"""Upload throughput benchmarks for Google Cloud Storage."""

from .core.benchmark.runner import BenchmarkResult, BenchmarkRunner
from .core.exceptions import (
    AuthenticationError,
    ConfigError,
    GcsBenchError,
    ProtocolError,
    ValidationError,
)
from .core.storage.gcs_client import GcsClient
from .core.storage.offset_parser import ResumeState

__version__ = "0.3.0"

__all__ = [
    "AuthenticationError",
    "BenchmarkResult",
    "BenchmarkRunner",
    "ConfigError",
    "GcsBenchError",
    "GcsClient",
    "ProtocolError",
    "ResumeState",
    "ValidationError",
]
