"""Kustomize layout for a pipelines environment.

Every environment gets a base holding its namespace and an overlay that
builds on the base. The layout is fixed:

``environments/<name>/env/base/kustomization.yaml``
``environments/<name>/env/base/<name>-environment.yaml``
``environments/<name>/env/overlays/kustomization.yaml``

Examples
--------
>>> from gitops_pipelines._manifest_models import Environment
>>> sorted(project_environment(Environment(name="dev")))[0]
'environments/dev/env/base/dev-environment.yaml'
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

import yaml

from gitops_pipelines._manifest_models import Environment

__all__ = [
    "CLUSTER_ANNOTATION",
    "MANAGED_BY_LABEL",
    "environment_paths",
    "project_environment",
]

ENVIRONMENTS_DIR = PurePosixPath("environments")
KUSTOMIZATION_FILE = "kustomization.yaml"
MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
MANAGED_BY_VALUE = "gitops-pipelines"
CLUSTER_ANNOTATION = "gitops-pipelines/cluster"


def _dump(document: dict[str, Any]) -> str:
    return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)


def _environment_file(name: str) -> str:
    return f"{name}-environment.yaml"


def environment_paths(name: str) -> tuple[str, str, str]:
    """Return the base kustomization, namespace, and overlay paths for *name*.

    Examples
    --------
    >>> environment_paths("dev")[2]
    'environments/dev/env/overlays/kustomization.yaml'
    """
    env_root = ENVIRONMENTS_DIR / name / "env"
    base = env_root / "base"
    return (
        str(base / KUSTOMIZATION_FILE),
        str(base / _environment_file(name)),
        str(env_root / "overlays" / KUSTOMIZATION_FILE),
    )


def _namespace(environment: Environment) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "name": environment.name,
        "labels": {MANAGED_BY_LABEL: MANAGED_BY_VALUE},
    }
    if environment.cluster:
        metadata["annotations"] = {CLUSTER_ANNOTATION: environment.cluster}
    return {"apiVersion": "v1", "kind": "Namespace", "metadata": metadata}


def project_environment(environment: Environment) -> dict[str, str]:
    """Render the kustomize files for *environment*.

    Parameters
    ----------
    environment
        Environment to render; only its name and cluster are used.

    Returns
    -------
    dict[str, str]
        Map of repository-relative POSIX paths to YAML content, always
        exactly three entries.
    """
    base_path, namespace_path, overlay_path = environment_paths(environment.name)
    return {
        base_path: _dump(
            {
                "apiVersion": "kustomize.config.k8s.io/v1beta1",
                "kind": "Kustomization",
                "resources": [_environment_file(environment.name)],
            }
        ),
        namespace_path: _dump(_namespace(environment)),
        overlay_path: _dump(
            {
                "apiVersion": "kustomize.config.k8s.io/v1beta1",
                "kind": "Kustomization",
                "bases": ["../base"],
            }
        ),
    }
