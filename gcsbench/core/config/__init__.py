from .bench_config import BenchConfig
from .config import resolve_config

__all__ = ["BenchConfig", "resolve_config"]
