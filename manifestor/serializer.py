"""JSON encoding of manifests for the dispatching backend."""

from __future__ import annotations

import json
from pathlib import Path

from .exceptions import ManifestFormatError, SchemaValidationError
from .manifest import Manifest
from .schema import MANIFEST_SCHEMA, validate


def dumps_manifest(manifest: Manifest, indent: int | None = None) -> str:
    """Serialise *manifest* into its wire representation."""

    return json.dumps(manifest.as_dict(), indent=indent, ensure_ascii=False)


def loads_manifest(text: str | bytes) -> Manifest:
    """Parse wire text produced by :func:`dumps_manifest`."""

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestFormatError(f"Manifest is not valid JSON: {exc}") from exc
    try:
        validate(data, MANIFEST_SCHEMA)
    except SchemaValidationError as exc:
        raise ManifestFormatError(f"Invalid manifest: {exc}") from exc
    return Manifest.from_dict(data)


def write_manifest_text(text: str, path: str | Path) -> Path:
    """Write serialised manifest *text* to *path*, creating parent directories."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    return path


def write_manifest(manifest: Manifest, path: str | Path, indent: int | None = 2) -> Path:
    return write_manifest_text(dumps_manifest(manifest, indent=indent), path)
