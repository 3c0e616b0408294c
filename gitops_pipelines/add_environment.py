#!/usr/bin/env -S uv run python
# /// script
# requires-python = ">=3.11"
# dependencies = ["cyclopts>=2.9", "PyYAML>=6"]
# ///
"""Add an environment to the GitOps pipelines manifest.

This script:
- loads ``pipelines.yaml`` from the pipelines folder;
- adds the environment, attaching CI pipelines when the manifest has a GitOps
  URL and a CI/CD namespace;
- writes the environment's kustomize base and overlay; and
- writes the updated manifest.

Examples
--------
>>> python -m gitops_pipelines.add_environment --env-name dev --cluster testing.cluster
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from gitops_pipelines._environment_flow import add_environment_to_folder
from gitops_pipelines._environment_inputs import (
    RawEnvironmentInputs,
    resolve_environment_inputs,
)
from gitops_pipelines._manifest_errors import ManifestError

app = App(help="Add a new environment to the GitOps pipelines manifest.")


# CLI parameters are declared for cyclopts but resolved via
# resolve_environment_inputs() so environment variables apply too.
@app.default
def main(
    pipelines_folder_path: Annotated[
        Path | None, Parameter(help="Folder containing pipelines.yaml.")
    ] = None,
    env_name: Annotated[
        str | None, Parameter(help="Name of the environment to add.")
    ] = None,
    cluster: Annotated[
        str | None,
        Parameter(help="Deployment cluster, e.g. https://kubernetes.local.svc."),
    ] = None,
    dry_run: Annotated[str | None, Parameter(help="Render without writing files.")] = None,
    verbose: Annotated[str | None, Parameter(help="Enable debug logging.")] = None,
) -> int:
    """Add an environment to the pipelines manifest.

    Parameters
    ----------
    pipelines_folder_path : Path | None
        Folder holding ``pipelines.yaml``; defaults to ``PIPELINES_FOLDER_PATH``
        or the current directory.
    env_name : str | None
        Environment name; defaults to ``ENV_NAME``.
    cluster : str | None
        Target cluster; defaults to ``CLUSTER``.
    dry_run, verbose : str | None
        Boolean-like overrides for ``DRY_RUN`` and ``VERBOSE``.

    Returns
    -------
    int
        Exit code (0 for success).
    """
    raw_inputs = RawEnvironmentInputs(
        pipelines_folder_path=pipelines_folder_path,
        env_name=env_name,
        cluster=cluster,
        dry_run=dry_run,
        verbose=verbose,
    )
    try:
        inputs = resolve_environment_inputs(raw_inputs)
        if inputs.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

        print(f"Adding environment '{inputs.env_name}'...")
        print(f"  Pipelines folder: {inputs.pipelines_folder_path}")
        if inputs.cluster:
            print(f"  Cluster: {inputs.cluster}")

        result = add_environment_to_folder(
            inputs.pipelines_folder_path,
            inputs.to_parameters(),
            dry_run=inputs.dry_run,
        )
    except ManifestError as exc:
        print(f"error: failed to add environment: {exc}", file=sys.stderr)
        return 1

    for path in result.files:
        print(f"  {path}")
    if inputs.dry_run:
        print("Dry run mode - no files written")
        return 0

    print(f"\nEnvironment {result.environment.name} has been created.")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    raise SystemExit(app())
