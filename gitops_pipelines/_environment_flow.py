"""Add an environment to a pipelines manifest on disk.

This module loads ``pipelines.yaml`` from the pipelines folder, adds the
requested environment, renders its kustomize tree, and writes both back. All
validation happens before the first write, so a rejected request leaves the
folder exactly as it was.

Examples
--------
>>> from pathlib import Path
>>> result = add_environment_to_folder(Path("gitops"), EnvironmentParameters(env_name="dev"))
>>> sorted(result.files)[0]
'environments/dev/env/base/dev-environment.yaml'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from gitops_pipelines._environment import EnvironmentParameters, add_environment
from gitops_pipelines._kustomize import project_environment
from gitops_pipelines._manifest_io import (
    PIPELINES_FILE,
    load_manifest,
    save_manifest,
    write_files,
)
from gitops_pipelines._manifest_models import Environment, Manifest

__all__ = ["AddEnvironmentResult", "add_environment_to_folder"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddEnvironmentResult:
    """Outcome of adding an environment.

    Attributes
    ----------
    environment
        The environment that was added.
    manifest
        The updated manifest.
    files
        Generated files, keyed by path relative to the pipelines folder.
    written
        Number of generated files written, ``0`` for a dry run.
    """

    environment: Environment
    manifest: Manifest
    files: dict[str, str]
    written: int


def add_environment_to_folder(
    folder: Path, params: EnvironmentParameters, *, dry_run: bool = False
) -> AddEnvironmentResult:
    """Add ``params.env_name`` to the manifest in *folder*.

    Parameters
    ----------
    folder : Path
        Pipelines folder holding ``pipelines.yaml`` and the generated tree.
    params : EnvironmentParameters
        Environment request.
    dry_run : bool, optional
        Validate and render without writing anything.

    Returns
    -------
    AddEnvironmentResult
        The added environment, updated manifest, and rendered files.

    Raises
    ------
    ManifestError
        If the manifest is missing or malformed, the environment already
        exists, or a generated path is unsafe.
    """
    manifest_path = folder / PIPELINES_FILE
    manifest = load_manifest(manifest_path)

    environment = add_environment(manifest, params)
    files = project_environment(environment)

    if dry_run:
        logger.debug("dry run: skipping writes for %s", environment.name)
        return AddEnvironmentResult(environment, manifest, files, 0)

    written = write_files(folder, files)
    save_manifest(manifest_path, manifest)
    logger.info(
        "environment %s added to %s (%d files)", environment.name, manifest_path, written
    )
    return AddEnvironmentResult(environment, manifest, files, written)
