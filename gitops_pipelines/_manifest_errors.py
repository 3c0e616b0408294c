"""Shared pipelines manifest error types.

This module defines the exception hierarchy used when reading, mutating, and
writing the pipelines manifest, covering invalid requests, duplicate
environments, malformed manifest files, and missing manifests.

Exceptions
----------
ManifestError
ManifestValidationError
DuplicateEnvironmentError
ManifestFormatError
ManifestNotFoundError
"""

from __future__ import annotations


class ManifestError(Exception):
    """Base error for pipelines manifest operations."""


class ManifestValidationError(ManifestError):
    """Raised when a request or output path is invalid."""


class DuplicateEnvironmentError(ManifestValidationError):
    """Raised when an environment name is already present in the manifest."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"environment {name} already exists")


class ManifestFormatError(ManifestError):
    """Raised when a manifest document cannot be parsed or has the wrong shape."""


class ManifestNotFoundError(ManifestError):
    """Raised when the pipelines manifest file does not exist."""
