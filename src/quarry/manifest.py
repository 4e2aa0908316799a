"""Read-modify-write helpers for the template's ``package.json``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import ManifestError

__all__ = ["load_manifest", "rewrite_manifest", "update_manifest", "write_manifest"]


LOGGER = logging.getLogger(__name__)


def load_manifest(path: str | Path) -> dict[str, Any]:
    """Parse the manifest at ``path``.

    Raises
    ------
    ManifestError
        If the file is missing, is not valid JSON or does not hold an object.
    """

    manifest_path = Path(path)
    if not manifest_path.is_file():
        raise ManifestError(f"manifest not found: {manifest_path}")

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"invalid JSON in {manifest_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path} must contain a JSON object")
    return data


def update_manifest(manifest: dict[str, Any], *, name: str, version: str) -> dict[str, Any]:
    """Return a copy of ``manifest`` with a new identity and no author.

    The remaining keys keep their original order.
    """

    updated = dict(manifest)
    updated["name"] = name
    updated["version"] = version
    updated.pop("author", None)
    return updated


def write_manifest(path: str | Path, manifest: dict[str, Any]) -> None:
    """Replace the file at ``path`` with ``manifest`` serialised as JSON."""

    text = json.dumps(manifest, indent=2, ensure_ascii=False)
    Path(path).write_text(f"{text}\n", encoding="utf-8")


def rewrite_manifest(path: str | Path, *, name: str, version: str = "0.0.0") -> dict[str, Any]:
    """Stamp ``name`` and ``version`` into the manifest at ``path``."""

    manifest = update_manifest(load_manifest(path), name=name, version=version)
    write_manifest(path, manifest)
    LOGGER.info("rewrote manifest path=%s name=%s version=%s", path, name, version)
    return manifest
