"""Derive new environments and add them to a pipelines manifest.

Derivation is pure construction: it reads the manifest's GitOps URL and CI/CD
configuration and builds an :class:`Environment`. Adding enforces the set
invariants of the manifest (unique names, append-only order) and mutates the
manifest only once every check has passed.

Examples
--------
>>> from gitops_pipelines._manifest_models import Manifest
>>> manifest = Manifest()
>>> add_environment(manifest, EnvironmentParameters(env_name="dev")).name
'dev'
>>> [env.name for env in manifest.environments]
['dev']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from gitops_pipelines._git_hosts import push_bindings
from gitops_pipelines._manifest_errors import (
    DuplicateEnvironmentError,
    ManifestValidationError,
)
from gitops_pipelines._manifest_models import (
    Environment,
    Manifest,
    Pipelines,
    TemplateBinding,
)

__all__ = [
    "APP_CI_TEMPLATE_NAME",
    "EnvironmentParameters",
    "add_environment",
    "derive_environment",
]

logger = logging.getLogger(__name__)

APP_CI_TEMPLATE_NAME = "app-ci-template"


@dataclass(frozen=True, slots=True)
class EnvironmentParameters:
    """Request to add an environment.

    Attributes
    ----------
    env_name : str
        Name of the new environment.
    cluster : str | None
        Optional target cluster for the environment.
    """

    env_name: str
    cluster: str | None = None


def derive_environment(manifest: Manifest, name: str) -> Environment:
    """Build the environment called *name* for *manifest*.

    CI pipelines are attached only when the manifest has both a GitOps URL
    and a CI/CD name. The push binding comes from the URL's host; an
    unrecognised host gives an integration with no bindings.

    Parameters
    ----------
    manifest : Manifest
        Manifest the environment is derived for; it is not modified.
    name : str
        Environment name.

    Returns
    -------
    Environment
        The derived environment.

    Raises
    ------
    ManifestValidationError
        If *name* is empty.
    """
    if not name:
        msg = "environment name must not be empty"
        raise ManifestValidationError(msg)

    environment = Environment(name=name)
    if not manifest.gitops_url:
        return environment
    if manifest.cicd_name() is None:
        return environment

    bindings = push_bindings(manifest.gitops_url)
    if not bindings:
        logger.debug("no push binding registered for %s", manifest.gitops_url)
    environment.pipelines = Pipelines(
        integration=TemplateBinding(template=APP_CI_TEMPLATE_NAME, bindings=bindings)
    )
    return environment


def add_environment(manifest: Manifest, params: EnvironmentParameters) -> Environment:
    """Append a new environment to *manifest*.

    Parameters
    ----------
    manifest : Manifest
        Manifest to mutate in place.
    params : EnvironmentParameters
        Name and optional cluster of the new environment.

    Returns
    -------
    Environment
        The environment appended to ``manifest.environments``.

    Raises
    ------
    DuplicateEnvironmentError
        If an environment with the same name exists; *manifest* is unchanged.
    ManifestValidationError
        If the name is empty; *manifest* is unchanged.
    """
    if manifest.get_environment(params.env_name) is not None:
        raise DuplicateEnvironmentError(params.env_name)

    environment = derive_environment(manifest, params.env_name)
    if params.cluster:
        environment = replace(environment, cluster=params.cluster)

    manifest.environments.append(environment)
    logger.info("added environment %s", environment.name)
    return environment
