"""Resolve benchmark configuration from defaults, environment, and CLI."""

from __future__ import annotations

import os
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from gcsbench.core.config.bench_config import BenchConfig
from gcsbench.core.exceptions import ConfigError

_ENV_MAP: dict[str, str] = {
    "storage_host": "GCSBENCH_STORAGE_HOST",
    "timeout": "GCSBENCH_TIMEOUT",
    "object_name": "GCSBENCH_OBJECT_NAME",
    "repeat": "GCSBENCH_REPEAT",
}


def _read_env_overrides() -> dict[str, Any]:
    """Read configuration overrides from environment variables.

    Returns:
        A dictionary of configuration field names to raw override values.
    """
    overrides: dict[str, Any] = {}
    for field_name, env_var_name in _ENV_MAP.items():
        env_value = os.getenv(env_var_name)
        if env_value is None or env_value == "":
            continue
        overrides[field_name] = env_value
    return overrides


def resolve_config(cli_config: dict[str, Any] | None = None) -> BenchConfig:
    """Resolve the effective configuration for this run.

    Environment variables override the defaults and non-``None`` CLI values
    override the environment.

    Args:
        cli_config: Optional CLI-provided configuration overrides.

    Returns:
        The validated ``BenchConfig``.

    Raises:
        ConfigError: If a value fails validation.
    """
    merged: dict[str, Any] = _read_env_overrides()
    if cli_config is not None:
        merged.update({k: v for k, v in cli_config.items() if v is not None})

    try:
        return BenchConfig.model_validate(merged)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
