"""Source enumerators deciding which modules are scanned for declarations."""

from __future__ import annotations

import importlib
import sys
import types
from typing import Iterable, List, Protocol, Sequence, Union, runtime_checkable

from .exceptions import SourceError

MANIFEST_MARKER = "__manifest_source__"

ModuleRef = Union[types.ModuleType, str]


@runtime_checkable
class SourceEnumerator(Protocol):
    """Anything able to list the modules eligible for scanning, in order."""

    def get_target_modules(self) -> Sequence[types.ModuleType]:
        ...


class SourceRegistry:
    """Ordered, explicit list of modules or importable module names."""

    def __init__(self, modules: Iterable[ModuleRef] = ()) -> None:
        self._entries: List[ModuleRef] = []
        self.register_many(modules)

    def register(self, module: ModuleRef) -> None:
        name = _module_name(module)
        if name in self:
            raise SourceError(f"Module {name!r} already registered")
        self._entries.append(module)

    def register_many(self, modules: Iterable[ModuleRef]) -> None:
        for module in modules:
            self.register(module)

    def get_target_modules(self) -> List[types.ModuleType]:
        resolved: List[types.ModuleType] = []
        for entry in self._entries:
            if isinstance(entry, str):
                try:
                    entry = importlib.import_module(entry)
                except ImportError as exc:
                    raise SourceError(f"Cannot import module {entry!r}") from exc
            resolved.append(entry)
        return resolved

    def names(self) -> List[str]:
        return [_module_name(entry) for entry in self._entries]

    def __contains__(self, module: object) -> bool:
        return _module_name(module) in self.names()

    def __len__(self) -> int:
        return len(self._entries)


class MarkedModuleSource:
    """Enumerate imported modules carrying a truthy :data:`MANIFEST_MARKER`.

    Modules are returned sorted by name so that repeated calls see the same
    order regardless of import history.
    """

    def __init__(self, prefix: str | None = None, marker: str = MANIFEST_MARKER) -> None:
        self.prefix = prefix
        self.marker = marker

    def get_target_modules(self) -> List[types.ModuleType]:
        selected: List[types.ModuleType] = []
        for name, module in sorted(list(sys.modules.items()), key=lambda item: item[0]):
            if module is None or (self.prefix and not name.startswith(self.prefix)):
                continue
            if getattr(module, self.marker, False):
                selected.append(module)
        return selected


def _module_name(module: object) -> str:
    if isinstance(module, str):
        return module
    return getattr(module, "__name__", None) or repr(module)
