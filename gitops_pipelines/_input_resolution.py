"""Resolve command inputs from CLI flags, environment variables, or defaults."""

from __future__ import annotations

import os
from collections import abc as cabc
from dataclasses import dataclass
from pathlib import Path

from gitops_pipelines._manifest_errors import ManifestValidationError

__all__ = ["InputResolution", "parse_bool", "resolve_input"]


@dataclass(frozen=True, slots=True)
class InputResolution:
    """Where to look for an input that was not given on the command line."""

    env_key: str
    default: str | Path | None = None
    required: bool = False
    as_path: bool = False


def resolve_input(
    param_value: str | Path | None,
    resolution: InputResolution,
    env: cabc.Mapping[str, str] | None = None,
) -> str | Path | None:
    """Resolve input from parameter, environment variable, or default.

    Examples
    --------
    >>> resolve_input(None, InputResolution("ENV_NAME"), env={"ENV_NAME": "dev"})
    'dev'
    >>> resolve_input("stage", InputResolution("ENV_NAME"), env={"ENV_NAME": "dev"})
    'stage'
    """
    if param_value is not None:
        return param_value

    env_value = (os.environ if env is None else env).get(resolution.env_key)
    if env_value:
        return Path(env_value) if resolution.as_path else env_value

    if resolution.required:
        msg = f"{resolution.env_key} is required"
        raise ManifestValidationError(msg)

    if resolution.as_path and isinstance(resolution.default, str):
        return Path(resolution.default)
    return resolution.default


def parse_bool(value: str | None, *, default: bool = False) -> bool:
    """Parse a boolean-like string.

    Examples
    --------
    >>> parse_bool("yes")
    True
    >>> parse_bool(None)
    False
    """
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")
