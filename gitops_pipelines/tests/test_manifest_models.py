"""Unit tests for the pipelines manifest models."""

from __future__ import annotations

import pytest

from gitops_pipelines._manifest_errors import ManifestFormatError
from gitops_pipelines._manifest_models import (
    ArgoCDConfig,
    Config,
    Environment,
    Manifest,
    Pipelines,
    PipelinesConfig,
    TemplateBinding,
)


def test_from_mapping_full_document() -> None:
    manifest = Manifest.from_mapping(
        {
            "gitOpsURL": "https://github.com/foo/bar",
            "config": {
                "pipelines": {"name": "cicd"},
                "argocd": {"namespace": "argocd"},
            },
            "environments": [
                {
                    "name": "dev",
                    "cluster": "testing.cluster",
                    "pipelines": {
                        "integration": {
                            "template": "app-ci-template",
                            "bindings": ["github-push-binding"],
                        }
                    },
                }
            ],
        }
    )
    assert manifest.gitops_url == "https://github.com/foo/bar", "URL should parse"
    assert manifest.config == Config(
        pipelines=PipelinesConfig("cicd"), argocd=ArgoCDConfig("argocd")
    ), "Config should parse"
    assert manifest.environments == [
        Environment(
            name="dev",
            cluster="testing.cluster",
            pipelines=Pipelines(
                integration=TemplateBinding(
                    template="app-ci-template", bindings=["github-push-binding"]
                )
            ),
        )
    ], "Environments should parse"


@pytest.mark.parametrize("payload", [None, {}, {"environments": None}])
def test_from_mapping_empty_documents(payload: object) -> None:
    manifest = Manifest.from_mapping(payload)
    assert manifest.environments == [], "Empty documents have no environments"
    assert manifest.config is None, "Empty documents have no config"


def test_cicd_name_absent_at_each_level() -> None:
    assert Manifest().cicd_name() is None, "No config means no CI/CD"
    assert Manifest(config=Config()).cicd_name() is None, "No pipelines config"
    assert (
        Manifest(config=Config(pipelines=PipelinesConfig(""))).cicd_name() is None
    ), "Blank CI/CD name counts as absent"


def test_to_mapping_omits_empty_values() -> None:
    manifest = Manifest(
        config=Config(), environments=[Environment(name="dev", cluster="")]
    )
    assert manifest.to_mapping() == {
        "environments": [{"name": "dev"}]
    }, "Empty values should be omitted"


def test_unknown_keys_round_trip() -> None:
    payload = {
        "environments": [
            {"name": "dev", "apps": [{"name": "taxi", "services": ["svc"]}]},
        ],
        "version": 1,
    }
    manifest = Manifest.from_mapping(payload)
    assert manifest.environments[0].extra == {
        "apps": [{"name": "taxi", "services": ["svc"]}]
    }, "Unknown environment keys should be kept"
    assert manifest.to_mapping() == payload, "Unknown keys should be written back"


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        (["not", "a", "mapping"], "manifest must be a mapping"),
        ({"environments": {"name": "dev"}}, "environments must be a list"),
        ({"environments": [{"cluster": "c"}]}, r"environments\[0\]\.name"),
        ({"environments": [{"name": "dev", "cluster": 3}]}, "cluster must be a string"),
        ({"gitOpsURL": 42}, "gitOpsURL must be a string"),
        (
            {
                "environments": [
                    {"name": "dev", "pipelines": {"integration": {"bindings": "x"}}}
                ]
            },
            "bindings must be a list of strings",
        ),
    ],
)
def test_from_mapping_rejects_bad_shapes(payload: object, message: str) -> None:
    with pytest.raises(ManifestFormatError, match=message):
        Manifest.from_mapping(payload)


def test_get_environment_is_case_sensitive() -> None:
    manifest = Manifest(environments=[Environment(name="dev")])
    assert manifest.get_environment("dev") is not None, "Exact match should be found"
    assert manifest.get_environment("Dev") is None, "Match should be case-sensitive"


def test_nested_unknown_keys_round_trip() -> None:
    payload = {
        "config": {
            "pipelines": {"name": "cicd", "serviceAccount": "robot"},
            "argocd": {"namespace": "argocd", "syncWave": 2},
        },
        "environments": [
            {
                "name": "dev",
                "pipelines": {
                    "integration": {
                        "template": "app-ci-template",
                        "bindings": ["github-push-binding"],
                        "params": {"verbose": True},
                    },
                    "delivery": "cd",
                },
            }
        ],
    }
    manifest = Manifest.from_mapping(payload)
    assert manifest.config is not None, "Config should parse"
    assert manifest.config.pipelines == PipelinesConfig(
        name="cicd", extra={"serviceAccount": "robot"}
    ), "Unknown CI/CD keys should be kept"
    assert (
        Manifest.from_mapping(manifest.to_mapping()).to_mapping() == payload
    ), "Nested unknown keys should be written back"


def test_blank_values_load_as_absent() -> None:
    manifest = Manifest.from_mapping(
        {"gitOpsURL": "", "config": {}, "environments": [{"name": "dev", "cluster": ""}]}
    )
    assert manifest.gitops_url is None, "Blank URL should load as None"
    assert manifest.config is None, "Empty config should load as None"
    assert manifest.environments[0].cluster is None, "Blank cluster should load as None"
    assert Manifest.from_mapping(manifest.to_mapping()) == manifest, "Should round trip"
