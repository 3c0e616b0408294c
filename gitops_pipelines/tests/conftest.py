from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[2]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _restore_git_hosts() -> Iterator[None]:
    from gitops_pipelines._git_hosts import GIT_HOST_BINDINGS

    saved = dict(GIT_HOST_BINDINGS)
    yield
    GIT_HOST_BINDINGS.clear()
    GIT_HOST_BINDINGS.update(saved)
