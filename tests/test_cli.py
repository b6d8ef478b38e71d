from __future__ import annotations

import json
from pathlib import Path
import sys
import textwrap
import types

import pytest

from manifestor.cli import main
from manifestor.manifest import MANIFEST_VERSION
from manifestor.serializer import loads_manifest

MODULE_NAME = "manifestor_cli_sample"

SAMPLE_SOURCE = textwrap.dedent(
    """
    import enum

    from manifestor import action, entity, error_handler


    @entity
    class Direction(enum.Enum):
        LEFT = "left"
        RIGHT = "right"


    @entity
    class Orphan(enum.Enum):
        NONE = 0


    @action(aliases=["go"])
    def turn(direction: Direction) -> None:
        pass


    @action(name="Turn")
    def turn_again(direction: Direction) -> None:
        pass


    @error_handler
    def on_failure(message: str) -> None:
        pass
    """
)


@pytest.fixture(autouse=True)
def sample_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    module = types.ModuleType(MODULE_NAME)
    exec(compile(SAMPLE_SOURCE, MODULE_NAME, "exec"), module.__dict__)
    monkeypatch.setitem(sys.modules, MODULE_NAME, module)
    monkeypatch.setattr("manifestor.cli.configure_logging", lambda level: None)
    return module


def test_generate_prints_manifest(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["generate", "--module", MODULE_NAME, "--domain", "robot", "--id", "app-7"])

    assert exit_code == 0
    manifest = loads_manifest(capsys.readouterr().out)
    assert manifest.domain == "robot"
    assert manifest.id == "app-7"
    assert manifest.version == MANIFEST_VERSION
    assert [action.name for action in manifest.actions] == ["turn", "Turn"]
    assert [entity.id for entity in manifest.entities] == ["Direction"]
    assert [handler.name for handler in manifest.error_handlers] == ["on_failure"]


def test_generate_empty_writes_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "manifest.json"

    exit_code = main(
        ["generate", "--empty", "--domain", "robot", "--id", "app-7", "--output", str(target), "--indent", "2"]
    )

    assert exit_code == 0
    assert "manifest_written=" in capsys.readouterr().out
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["entities"] == payload["actions"] == payload["errorHandlers"] == []
    assert payload["domain"] == "robot"


def test_generate_from_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "manifestor.json"
    config_path.write_text(json.dumps({"domain": "robot", "id": "app-7", "modules": [MODULE_NAME]}))

    exit_code = main(["generate", "--config", str(config_path), "--id", "override"])

    assert exit_code == 0
    manifest = loads_manifest(capsys.readouterr().out)
    assert manifest.id == "override"
    assert len(manifest.actions) == 2


def test_actions_lists_distinct_names(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["actions", "--module", MODULE_NAME])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["Turn", "turn"]


def test_generate_requires_domain_and_id(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["generate", "--module", MODULE_NAME])

    assert exit_code == 1
    assert "error=" in capsys.readouterr().err


def test_unknown_module_reports_error(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["generate", "--module", "manifestor_missing_cli_module", "--domain", "d", "--id", "1"])

    assert exit_code == 1
    assert "manifestor_missing_cli_module" in capsys.readouterr().err


def test_generate_accepts_log_level_after_subcommand(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    levels: list[str] = []
    monkeypatch.setattr("manifestor.cli.configure_logging", levels.append)

    exit_code = main(
        ["generate", "--module", MODULE_NAME, "--domain", "d", "--id", "1", "--log-level", "DEBUG"]
    )

    assert exit_code == 0
    assert levels == ["DEBUG"]
    assert loads_manifest(capsys.readouterr().out).domain == "d"


def test_top_level_log_level_is_kept(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[str] = []
    monkeypatch.setattr("manifestor.cli.configure_logging", levels.append)

    assert main(["--log-level", "WARNING", "actions", "--module", MODULE_NAME]) == 0
    assert levels == ["WARNING"]


def test_generate_output_matches_printed_manifest(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "nested" / "manifest.json"

    assert main(["generate", "--module", MODULE_NAME, "--domain", "d", "--id", "1", "--output", str(target)]) == 0
    assert main(["generate", "--module", MODULE_NAME, "--domain", "d", "--id", "1"]) == 0

    printed = capsys.readouterr().out.splitlines()[-1]
    assert target.read_text(encoding="utf-8") == printed + "\n"
