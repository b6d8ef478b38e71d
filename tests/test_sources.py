from __future__ import annotations

import sys
import types

import pytest

from manifestor.exceptions import SourceError
from manifestor.sources import MANIFEST_MARKER, MarkedModuleSource, SourceEnumerator, SourceRegistry


def test_registry_preserves_registration_order() -> None:
    first = types.ModuleType("first_module")
    second = types.ModuleType("second_module")
    registry = SourceRegistry([second, first])

    assert registry.get_target_modules() == [second, first]
    assert registry.names() == ["second_module", "first_module"]
    assert len(registry) == 2
    assert first in registry
    assert "second_module" in registry
    assert isinstance(registry, SourceEnumerator)


def test_registry_imports_names_lazily() -> None:
    registry = SourceRegistry(["json", "manifestor.manifest"])

    modules = registry.get_target_modules()

    assert [module.__name__ for module in modules] == ["json", "manifestor.manifest"]


def test_registry_rejects_duplicates() -> None:
    registry = SourceRegistry(["json"])

    with pytest.raises(SourceError):
        registry.register("json")


def test_registry_reports_unimportable_module() -> None:
    registry = SourceRegistry(["manifestor_missing_module_for_tests"])

    with pytest.raises(SourceError):
        registry.get_target_modules()


def test_marked_source_selects_marked_modules(monkeypatch: pytest.MonkeyPatch) -> None:
    marked_b = types.ModuleType("zz_marked_b")
    setattr(marked_b, MANIFEST_MARKER, True)
    marked_a = types.ModuleType("zz_marked_a")
    setattr(marked_a, MANIFEST_MARKER, True)
    unmarked = types.ModuleType("zz_unmarked")
    monkeypatch.setitem(sys.modules, marked_b.__name__, marked_b)
    monkeypatch.setitem(sys.modules, marked_a.__name__, marked_a)
    monkeypatch.setitem(sys.modules, unmarked.__name__, unmarked)

    modules = MarkedModuleSource(prefix="zz_").get_target_modules()

    assert modules == [marked_a, marked_b]


def test_marked_source_honours_custom_marker(monkeypatch: pytest.MonkeyPatch) -> None:
    module = types.ModuleType("zz_custom_marker")
    module.__voice_app__ = True
    monkeypatch.setitem(sys.modules, module.__name__, module)

    assert MarkedModuleSource(prefix="zz_custom", marker="__voice_app__").get_target_modules() == [module]
    assert MarkedModuleSource(prefix="zz_custom").get_target_modules() == []
