from __future__ import annotations

import json
from pathlib import Path

import pytest

from manifestor.exceptions import ManifestFormatError
from manifestor.manifest import (
    EntityKeyword,
    Manifest,
    ManifestAction,
    ManifestEntity,
    ManifestErrorHandler,
    ManifestParameter,
)
from manifestor.serializer import dumps_manifest, loads_manifest, write_manifest, write_manifest_text


def _manifest() -> Manifest:
    color = ManifestParameter(
        name="color",
        entity_type="Color",
        internal_name="color",
        qualified_name="app.paint.color",
        qualified_type_name="app.Color",
        type_module="app",
        aliases=("hue",),
        examples=("red",),
    )
    return Manifest(
        id="app-1",
        domain="painter",
        entities=[
            ManifestEntity(
                id="Color",
                namespace="app",
                name="Color",
                values=[EntityKeyword("RED", ("crimson",)), EntityKeyword("BLUE")],
                module="app",
            )
        ],
        actions=[ManifestAction(name="paint", parameters=[color], id="app.paint", module="app", aliases=["colour"])],
        error_handlers=[ManifestErrorHandler(id="app.on_failure", name="on_failure", module="app")],
    )


def test_dumps_uses_wire_field_names() -> None:
    payload = json.loads(dumps_manifest(_manifest()))

    assert list(payload) == ["id", "version", "domain", "entities", "actions", "errorHandlers"]
    parameter = payload["actions"][0]["parameters"][0]
    assert parameter["entityType"] == "Color"
    assert parameter["qualifiedTypeName"] == "app.Color"
    assert payload["entities"][0]["values"][0] == {"keyword": "RED", "synonyms": ["crimson"]}


def test_loads_restores_manifest() -> None:
    manifest = _manifest()

    assert loads_manifest(dumps_manifest(manifest, indent=2)) == manifest


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"id": "x", "version": "0.1", "domain": "d", "entities": [], "actions": []}),
        json.dumps(
            {
                "id": "x",
                "version": "0.1",
                "domain": "d",
                "entities": [],
                "actions": [{"name": "a", "parameters": [{"name": "p"}]}],
                "errorHandlers": [],
            }
        ),
        json.dumps({"id": 1, "version": "0.1", "domain": "d", "entities": [], "actions": [], "errorHandlers": []}),
    ],
)
def test_loads_rejects_malformed_manifest(text: str) -> None:
    with pytest.raises(ManifestFormatError):
        loads_manifest(text)


def test_write_manifest(tmp_path: Path) -> None:
    target = tmp_path / "out" / "manifest.json"

    written = write_manifest(_manifest(), target)

    assert written == target
    assert loads_manifest(target.read_text(encoding="utf-8")) == _manifest()


def test_write_manifest_text_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "manifest.json"
    text = dumps_manifest(_manifest())

    assert write_manifest_text(text, target) == target
    assert target.read_text(encoding="utf-8") == text + "\n"
