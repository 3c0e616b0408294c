"""Data models for the pipelines manifest.

These models mirror the ``pipelines.yaml`` document: a GitOps repository URL,
optional CI/CD configuration, and an ordered list of environments. Each model
converts to and from the plain mappings produced by ``yaml.safe_load`` so the
YAML layer never leaks into the mutation logic.

Keys the models do not know about are kept in ``extra`` and written back
unchanged.

Examples
--------
>>> manifest = Manifest.from_mapping({"environments": [{"name": "dev"}]})
>>> [env.name for env in manifest.environments]
['dev']
>>> manifest.to_mapping()
{'environments': [{'name': 'dev'}]}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from gitops_pipelines._manifest_errors import ManifestFormatError

__all__ = [
    "ArgoCDConfig",
    "Config",
    "Environment",
    "Manifest",
    "Pipelines",
    "PipelinesConfig",
    "TemplateBinding",
]


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    """Return *value* when it is a mapping, treating ``None`` as empty.

    Examples
    --------
    >>> _require_mapping(None, "config")
    {}
    """
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        msg = f"{where} must be a mapping, got {type(value).__name__}"
        raise ManifestFormatError(msg)
    return value


def _optional_str(value: Any, where: str) -> str | None:
    """Validate an optional string field.

    Examples
    --------
    >>> _optional_str("https://github.com/foo/bar", "gitOpsURL")
    'https://github.com/foo/bar'
    >>> _optional_str(None, "gitOpsURL") is None
    True
    """
    if value is not None and not isinstance(value, str):
        msg = f"{where} must be a string, got {type(value).__name__}"
        raise ManifestFormatError(msg)
    return value


def _str_list(value: Any, where: str) -> list[str]:
    """Validate a list of strings, treating ``None`` as empty."""
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"{where} must be a list of strings"
        raise ManifestFormatError(msg)
    return list(value)


_ENVIRONMENT_KEYS = ("name", "cluster", "pipelines")


def _extra(payload: Mapping[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if key not in known}


@dataclass(slots=True)
class TemplateBinding:
    """A pipeline template paired with the trigger bindings that start it.

    Attributes
    ----------
    template
        Name of the Tekton trigger template.
    bindings
        Ordered trigger binding names.
    """

    template: str
    bindings: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "template": self.template,
            "bindings": list(self.bindings),
        }
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any, where: str) -> TemplateBinding:
        data = _require_mapping(payload, where)
        template = _optional_str(data.get("template"), f"{where}.template")
        return cls(
            template=template or "",
            bindings=_str_list(data.get("bindings"), f"{where}.bindings"),
            extra=_extra(data, ("template", "bindings")),
        )


@dataclass(slots=True)
class Pipelines:
    """Pipelines attached to an environment."""

    integration: TemplateBinding | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.integration is not None:
            payload["integration"] = self.integration.to_mapping()
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any, where: str) -> Pipelines:
        data = _require_mapping(payload, where)
        integration = data.get("integration")
        return cls(
            integration=(
                TemplateBinding.from_mapping(integration, f"{where}.integration")
                if integration is not None
                else None
            ),
            extra=_extra(data, ("integration",)),
        )


@dataclass(slots=True)
class Environment:
    """A named deployment environment.

    Attributes
    ----------
    name
        Environment name, unique within a manifest.
    cluster
        Target cluster API URL, when the environment is not on the default
        cluster.
    pipelines
        CI pipelines for the environment's applications, if any.
    extra
        Unmodelled keys (``apps``, ``services``...) carried through verbatim.
    """

    name: str
    cluster: str | None = None
    pipelines: Pipelines | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        """Return the YAML mapping for this environment.

        Examples
        --------
        >>> Environment(name="dev", cluster="testing.cluster").to_mapping()
        {'name': 'dev', 'cluster': 'testing.cluster'}
        """
        payload: dict[str, Any] = {"name": self.name}
        if self.cluster:
            payload["cluster"] = self.cluster
        if self.pipelines is not None:
            payload["pipelines"] = self.pipelines.to_mapping()
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any, where: str = "environment") -> Environment:
        data = _require_mapping(payload, where)
        name = data.get("name")
        if not isinstance(name, str) or not name:
            msg = f"{where}.name must be a non-empty string"
            raise ManifestFormatError(msg)
        pipelines = data.get("pipelines")
        return cls(
            name=name,
            cluster=_optional_str(data.get("cluster"), f"{where}.cluster") or None,
            pipelines=(
                Pipelines.from_mapping(pipelines, f"{where}.pipelines")
                if pipelines is not None
                else None
            ),
            extra=_extra(data, _ENVIRONMENT_KEYS),
        )
@dataclass(frozen=True, slots=True)
class PipelinesConfig:
    """CI/CD configuration; ``name`` is the CI/CD namespace."""

    name: str
    extra: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any) -> PipelinesConfig:
        data = _require_mapping(payload, "config.pipelines")
        name = _optional_str(data.get("name"), "config.pipelines.name")
        return cls(name=name or "", extra=_extra(data, ("name",)))


@dataclass(frozen=True, slots=True)
class ArgoCDConfig:
    """Argo CD configuration."""

    namespace: str
    extra: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"namespace": self.namespace}
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any) -> ArgoCDConfig:
        data = _require_mapping(payload, "config.argocd")
        namespace = _optional_str(data.get("namespace"), "config.argocd.namespace")
        return cls(namespace=namespace or "", extra=_extra(data, ("namespace",)))


@dataclass(slots=True)
class Config:
    """Cluster-wide configuration for the pipelines and Argo CD installs."""

    pipelines: PipelinesConfig | None = None
    argocd: ArgoCDConfig | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.pipelines is not None:
            payload["pipelines"] = self.pipelines.to_mapping()
        if self.argocd is not None:
            payload["argocd"] = self.argocd.to_mapping()
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any) -> Config | None:
        """Build the config section, or ``None`` when it is empty.

        An empty section is written back as no section at all, so it loads
        as absent too.
        """
        data = _require_mapping(payload, "config")
        if not data:
            return None
        pipelines = data.get("pipelines")
        argocd = data.get("argocd")
        return cls(
            pipelines=(
                PipelinesConfig.from_mapping(pipelines)
                if pipelines is not None
                else None
            ),
            argocd=ArgoCDConfig.from_mapping(argocd) if argocd is not None else None,
            extra=_extra(data, ("pipelines", "argocd")),
        )


@dataclass(slots=True)
class Manifest:
    """The root ``pipelines.yaml`` document.

    Attributes
    ----------
    gitops_url
        URL of the GitOps repository (YAML key ``gitOpsURL``).
    config
        Optional CI/CD and Argo CD configuration.
    environments
        Ordered environments; names are unique.
    extra
        Unmodelled top-level keys carried through verbatim.
    """

    gitops_url: str | None = None
    config: Config | None = None
    environments: list[Environment] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def get_environment(self, name: str) -> Environment | None:
        """Return the environment called *name*, matching case-sensitively."""
        for environment in self.environments:
            if environment.name == name:
                return environment
        return None

    def cicd_name(self) -> str | None:
        """Return the CI/CD namespace name, or ``None`` when any level is absent.

        Examples
        --------
        >>> Manifest().cicd_name() is None
        True
        >>> Manifest(config=Config(pipelines=PipelinesConfig("cicd"))).cicd_name()
        'cicd'
        """
        if self.config is None:
            return None
        if self.config.pipelines is None:
            return None
        return self.config.pipelines.name or None

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.gitops_url:
            payload["gitOpsURL"] = self.gitops_url
        if self.config is not None:
            config = self.config.to_mapping()
            if config:
                payload["config"] = config
        payload["environments"] = [env.to_mapping() for env in self.environments]
        payload.update(self.extra)
        return payload

    @classmethod
    def from_mapping(cls, payload: Any) -> Manifest:
        """Build a manifest from a ``yaml.safe_load`` result.

        Raises
        ------
        ManifestFormatError
            If the document does not have the expected shape.
        """
        data = _require_mapping(payload, "manifest")
        raw_environments = data.get("environments")
        if raw_environments is None:
            raw_environments = []
        if not isinstance(raw_environments, list):
            msg = "environments must be a list"
            raise ManifestFormatError(msg)
        environments = [
            Environment.from_mapping(item, f"environments[{index}]")
            for index, item in enumerate(raw_environments)
        ]
        return cls(
            gitops_url=_optional_str(data.get("gitOpsURL"), "gitOpsURL") or None,
            config=Config.from_mapping(data.get("config")),
            environments=environments,
            extra=_extra(data, ("gitOpsURL", "config", "environments")),
        )
