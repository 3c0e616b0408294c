"""Resolve and validate inputs for adding an environment.

Values given on the command line win over environment variables, which win
over defaults. The resolved inputs are checked here so the manifest logic
only ever sees a usable request.

Classes
-------
EnvironmentInputs
    Immutable dataclass holding resolved inputs.
RawEnvironmentInputs
    Dataclass representing unvalidated inputs from the CLI.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from gitops_pipelines._environment import EnvironmentParameters
from gitops_pipelines._input_resolution import (
    InputResolution,
    parse_bool,
    resolve_input,
)
from gitops_pipelines._manifest_errors import ManifestValidationError

__all__ = [
    "EnvironmentInputs",
    "RawEnvironmentInputs",
    "resolve_environment_inputs",
    "validate_environment_name",
]

_DNS_LABEL = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
_DNS_LABEL_MAX = 63


@dataclass(frozen=True, slots=True)
class EnvironmentInputs:
    """Inputs for the add-environment command.

    Attributes
    ----------
    pipelines_folder_path : Path
        Directory holding ``pipelines.yaml`` and the generated tree.
    env_name : str
        Name of the new environment.
    cluster : str | None
        Optional target cluster.
    dry_run, verbose : bool
        Skip writing files; enable debug logging.
    """

    pipelines_folder_path: Path
    env_name: str
    cluster: str | None
    dry_run: bool
    verbose: bool

    def to_parameters(self) -> EnvironmentParameters:
        return EnvironmentParameters(env_name=self.env_name, cluster=self.cluster)


@dataclass(frozen=True, slots=True)
class RawEnvironmentInputs:
    """Raw inputs from the CLI; ``None`` means "not given"."""

    pipelines_folder_path: Path | None = None
    env_name: str | None = None
    cluster: str | None = None
    dry_run: str | None = None
    verbose: str | None = None


def validate_environment_name(name: str) -> str:
    """Validate an environment name as a DNS-1123 label.

    Environment names become namespace names, so they follow the Kubernetes
    rules. Names are not lower-cased: ``Dev`` is rejected rather than turned
    into ``dev``.

    Raises
    ------
    ManifestValidationError
        If the name is blank, too long, or contains invalid characters.

    Examples
    --------
    >>> validate_environment_name(" dev ")
    'dev'
    """
    name = name.strip()
    if not name:
        msg = "env-name must not be blank"
        raise ManifestValidationError(msg)
    if len(name) > _DNS_LABEL_MAX:
        msg = f"env-name must be at most {_DNS_LABEL_MAX} characters"
        raise ManifestValidationError(msg)
    if not _DNS_LABEL.match(name):
        msg = "env-name must contain only lowercase letters, numbers, and hyphens"
        raise ManifestValidationError(msg)
    return name


def resolve_environment_inputs(raw: RawEnvironmentInputs) -> EnvironmentInputs:
    """Resolve add-environment inputs from CLI and environment.

    Parameters
    ----------
    raw : RawEnvironmentInputs
        Raw inputs from the CLI.

    Returns
    -------
    EnvironmentInputs
        Validated inputs.

    Raises
    ------
    ManifestValidationError
        If the environment name is missing or invalid.
    """
    folder = resolve_input(
        raw.pipelines_folder_path,
        InputResolution(env_key="PIPELINES_FOLDER_PATH", default=".", as_path=True),
    )
    env_name = resolve_input(
        raw.env_name, InputResolution(env_key="ENV_NAME", required=True)
    )
    cluster = resolve_input(raw.cluster, InputResolution(env_key="CLUSTER"))
    dry_run_raw = resolve_input(
        raw.dry_run, InputResolution(env_key="DRY_RUN", default="false")
    )
    verbose_raw = resolve_input(
        raw.verbose, InputResolution(env_key="VERBOSE", default="false")
    )

    cluster_value = str(cluster).strip() if cluster else ""
    return EnvironmentInputs(
        pipelines_folder_path=folder if isinstance(folder, Path) else Path(str(folder)),
        env_name=validate_environment_name(str(env_name)),
        cluster=cluster_value or None,
        dry_run=parse_bool(str(dry_run_raw) if dry_run_raw else None),
        verbose=parse_bool(str(verbose_raw) if verbose_raw else None),
    )
