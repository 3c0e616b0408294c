"""Unit tests for the Git host binding registry."""

from __future__ import annotations

import pytest

from gitops_pipelines._git_hosts import push_bindings, register_git_host, resolve_host


@pytest.mark.parametrize(
    ("url", "binding"),
    [
        ("https://github.com/foo/bar", "github-push-binding"),
        ("https://gitlab.com/foo/bar", "gitlab-push-binding"),
        ("https://GitHub.com/foo/bar.git", "github-push-binding"),
        ("https://token@gitlab.com:443/foo/bar", "gitlab-push-binding"),
    ],
)
def test_resolve_host_known(url: str, binding: str) -> None:
    assert resolve_host(url) == binding, f"Unexpected binding for {url}"


@pytest.mark.parametrize(
    "url", ["", "https://bitbucket.org/foo/bar", "not a url", "https://[::1"]
)
def test_unknown_hosts_have_no_bindings(url: str) -> None:
    assert resolve_host(url) is None, "Unknown host should not resolve"
    assert push_bindings(url) == [], "Unknown host should yield no bindings"


def test_push_bindings_single_element() -> None:
    assert push_bindings("https://github.com/foo/bar") == [
        "github-push-binding"
    ], "Known host should yield one binding"


def test_register_git_host_extends_table() -> None:
    register_git_host("Gitea.Example.com", "gitea-push-binding")
    assert push_bindings("https://gitea.example.com/foo/bar") == [
        "gitea-push-binding"
    ], "Registered host should resolve"


def test_register_git_host_rejects_blank() -> None:
    with pytest.raises(ValueError, match="must not be blank"):
        register_git_host(" ", "binding")
