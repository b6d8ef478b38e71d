"""Decorators that tag functions and enums for the module miner.

Example::

    @entity(synonyms={"RED": ["crimson"]})
    class Color(enum.Enum):
        RED = "red"
        BLUE = "blue"

    @action(name="paint", aliases=["colour"], examples={"color": ["red"]})
    def paint(color: Color) -> None:
        ...

    @error_handler
    def on_failure(message: str) -> None:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
import enum
from typing import Any, Callable, Iterable, Mapping, Tuple, TypeVar, overload

ACTION_ATTRIBUTE = "__manifest_action__"
ENTITY_ATTRIBUTE = "__manifest_entity__"
ERROR_HANDLER_ATTRIBUTE = "__manifest_error_handler__"

F = TypeVar("F", bound=Callable[..., Any])
E = TypeVar("E", bound=type)


def _freeze(mapping: Mapping[str, Iterable[str]] | None) -> Mapping[str, Tuple[str, ...]]:
    return {str(key): tuple(str(item) for item in values) for key, values in (mapping or {}).items()}


@dataclass(frozen=True)
class ActionDeclaration:
    name: str | None = None
    aliases: Tuple[str, ...] = ()
    parameter_aliases: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    examples: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class EntityDeclaration:
    id: str | None = None
    synonyms: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class ErrorHandlerDeclaration:
    name: str | None = None


@overload
def action(func: F) -> F:
    ...


@overload
def action(
    func: None = None,
    *,
    name: str | None = None,
    aliases: Iterable[str] = (),
    parameter_aliases: Mapping[str, Iterable[str]] | None = None,
    examples: Mapping[str, Iterable[str]] | None = None,
) -> Callable[[F], F]:
    ...


def action(
    func: F | None = None,
    *,
    name: str | None = None,
    aliases: Iterable[str] = (),
    parameter_aliases: Mapping[str, Iterable[str]] | None = None,
    examples: Mapping[str, Iterable[str]] | None = None,
) -> F | Callable[[F], F]:
    """Mark *func* as an action. Usable bare or with keyword arguments."""

    declaration = ActionDeclaration(
        name=name,
        aliases=tuple(aliases),
        parameter_aliases=_freeze(parameter_aliases),
        examples=_freeze(examples),
    )

    def decorator(target: F) -> F:
        setattr(target, ACTION_ATTRIBUTE, declaration)
        return target

    if func is not None:
        return decorator(func)
    return decorator


def entity(
    cls: E | None = None,
    *,
    id: str | None = None,
    synonyms: Mapping[str, Iterable[str]] | None = None,
) -> E | Callable[[E], E]:
    """Mark an :class:`enum.Enum` subclass as an entity."""

    declaration = EntityDeclaration(id=id, synonyms=_freeze(synonyms))

    def decorator(target: E) -> E:
        if not (isinstance(target, type) and issubclass(target, enum.Enum)):
            raise TypeError("@entity can only decorate Enum subclasses")
        setattr(target, ENTITY_ATTRIBUTE, declaration)
        return target

    if cls is not None:
        return decorator(cls)
    return decorator


def error_handler(func: F | None = None, *, name: str | None = None) -> F | Callable[[F], F]:
    """Mark *func* as the error handler of its module."""

    declaration = ErrorHandlerDeclaration(name=name)

    def decorator(target: F) -> F:
        setattr(target, ERROR_HANDLER_ATTRIBUTE, declaration)
        return target

    if func is not None:
        return decorator(func)
    return decorator
