"""Read and write the pipelines manifest and generated files.

Examples
--------
>>> manifest = load_manifest(Path("gitops/pipelines.yaml"))
>>> save_manifest(Path("gitops/pipelines.yaml"), manifest)
>>> write_files(Path("gitops"), {"environments/dev/env/base/kustomization.yaml": "..."})
1
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path

import yaml

from gitops_pipelines._manifest_errors import (
    ManifestFormatError,
    ManifestNotFoundError,
    ManifestValidationError,
)
from gitops_pipelines._manifest_models import Manifest

__all__ = [
    "PIPELINES_FILE",
    "dump_manifest",
    "load_manifest",
    "parse_manifest",
    "save_manifest",
    "write_files",
]

logger = logging.getLogger(__name__)

PIPELINES_FILE = "pipelines.yaml"


def parse_manifest(text: str, source: str = "<string>") -> Manifest:
    """Parse manifest YAML.

    Parameters
    ----------
    text
        YAML document.
    source
        Name used in error messages.

    Returns
    -------
    Manifest
        The parsed manifest.

    Raises
    ------
    ManifestFormatError
        If the YAML is invalid or has the wrong shape.

    Examples
    --------
    >>> parse_manifest("environments:").environments
    []
    """
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {source}: {exc}"
        raise ManifestFormatError(msg) from exc
    try:
        return Manifest.from_mapping(payload)
    except ManifestFormatError as exc:
        msg = f"Invalid manifest {source}: {exc}"
        raise ManifestFormatError(msg) from exc


def dump_manifest(manifest: Manifest) -> str:
    """Serialise *manifest* to YAML.

    Examples
    --------
    >>> from gitops_pipelines._manifest_models import Environment
    >>> print(dump_manifest(Manifest(environments=[Environment(name="dev")])), end="")
    environments:
    - name: dev
    """
    return yaml.safe_dump(
        manifest.to_mapping(), default_flow_style=False, sort_keys=False
    )


def load_manifest(path: Path) -> Manifest:
    """Load the manifest stored at *path*.

    Raises
    ------
    ManifestNotFoundError
        If *path* does not exist.
    ManifestFormatError
        If the file cannot be parsed.
    """
    logger.debug("loading manifest from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"failed to open {path}: no such file"
        raise ManifestNotFoundError(msg) from exc
    return parse_manifest(text, str(path))


def save_manifest(path: Path, manifest: Manifest) -> None:
    """Write *manifest* to ``path`` atomically."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    payload = dump_manifest(manifest)

    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
    except Exception:
        with suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise

    tmp_path.replace(path)
    logger.debug("wrote manifest %s", path)


def _resolve_destination(output_root: Path, output_dir: Path, rel_path: str) -> Path:
    rel = Path(rel_path)
    if rel.is_absolute() or ".." in rel.parts:
        msg = f"Refusing to write file outside {output_dir}: {rel_path}"
        raise ManifestValidationError(msg)
    dest = output_dir / rel
    if not dest.resolve().is_relative_to(output_root):
        msg = f"Refusing to write file outside {output_dir}: {rel_path}"
        raise ManifestValidationError(msg)
    return dest


def write_files(output_dir: Path, files: Mapping[str, str]) -> int:
    """Write generated files below *output_dir*.

    Every destination is checked before anything is written, so an unsafe
    path leaves the directory untouched.

    Parameters
    ----------
    output_dir
        Root of the GitOps repository checkout.
    files
        Map of relative paths to file content.

    Returns
    -------
    int
        Number of files written.

    Raises
    ------
    ManifestValidationError
        If a path is absolute or escapes *output_dir*.
    """
    output_root = output_dir.resolve()
    destinations = {
        _resolve_destination(output_root, output_dir, rel_path): content
        for rel_path, content in files.items()
    }
    for dest, content in destinations.items():
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
        logger.debug("wrote %s", dest)
    return len(destinations)
