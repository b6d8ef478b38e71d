"""Declaration miners turning module contents into manifest records."""

from __future__ import annotations

from dataclasses import dataclass, field
import enum
import inspect
import types
import typing
from typing import Any, Callable, Dict, Generic, Iterator, Mapping, Protocol, Sequence, Tuple, TypeVar, runtime_checkable

from .declarations import (
    ACTION_ATTRIBUTE,
    ENTITY_ATTRIBUTE,
    ERROR_HANDLER_ATTRIBUTE,
    ActionDeclaration,
    EntityDeclaration,
    ErrorHandlerDeclaration,
)
from .exceptions import MiningError
from .manifest import EntityKeyword, ManifestAction, ManifestEntity, ManifestErrorHandler, ManifestParameter

T = TypeVar("T")

_IMPLICIT_PARAMETERS = frozenset({"self", "cls"})
_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@runtime_checkable
class DeclarationMiner(Protocol):
    """Protocol describing what the aggregator expects from a miner."""

    def initialize(self) -> None:
        ...

    def extract_actions(self, module: Any) -> Sequence[ManifestAction]:
        ...

    def extract_entities(self, module: Any) -> Sequence[ManifestEntity]:
        ...

    def extract_error_handlers(self, module: Any) -> Sequence[ManifestErrorHandler]:
        ...


@dataclass(frozen=True)
class ExtractionResult(Generic[T]):
    """Outcome of a single extraction call: either items or the mining error."""

    items: Tuple[T, ...] = ()
    error: MiningError | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Tuple[T, ...]:
        """Return the items or re-raise the original error."""

        if self.error is not None:
            raise self.error
        return self.items


def attempt(extract: Callable[[Any], Sequence[T]], module: Any) -> ExtractionResult[T]:
    """Run *extract* on *module*, capturing a :class:`MiningError` as a result."""

    try:
        return ExtractionResult(items=tuple(extract(module)))
    except MiningError as exc:
        return ExtractionResult(error=exc)


@dataclass
class ModuleMiner:
    """Mine functions and enums tagged with the :mod:`manifestor.declarations` decorators.

    Only objects defined in the scanned module are considered, in namespace
    definition order.  Methods of classes defined in the module are mined as
    well.
    """

    _hints: Dict[Any, Dict[str, Any]] = field(default_factory=dict, init=False, repr=False)
    initialized: bool = field(default=False, init=False)

    def initialize(self) -> None:
        self._hints = {}
        self.initialized = True

    def extract_entities(self, module: Any) -> list[ManifestEntity]:
        module = self._require_module(module)
        entities: list[ManifestEntity] = []
        for obj in self._own_members(module):
            if not isinstance(obj, type):
                continue
            declaration = obj.__dict__.get(ENTITY_ATTRIBUTE)
            if not isinstance(declaration, EntityDeclaration):
                continue
            if not issubclass(obj, enum.Enum):
                raise MiningError(f"Entity {obj.__qualname__!r} in {module.__name__!r} is not an Enum")
            entities.append(
                ManifestEntity(
                    id=declaration.id or obj.__name__,
                    namespace=module.__name__,
                    name=obj.__name__,
                    values=tuple(
                        EntityKeyword(keyword=member.name, synonyms=declaration.synonyms.get(member.name, ()))
                        for member in obj
                    ),
                    module=module.__name__,
                )
            )
        return entities

    def extract_actions(self, module: Any) -> list[ManifestAction]:
        module = self._require_module(module)
        actions: list[ManifestAction] = []
        for func in self._own_callables(module):
            declaration = getattr(func, ACTION_ATTRIBUTE, None)
            if not isinstance(declaration, ActionDeclaration):
                continue
            action_id = f"{module.__name__}.{func.__qualname__}"
            actions.append(
                ManifestAction(
                    id=action_id,
                    module=module.__name__,
                    name=func.__name__ if declaration.name is None else declaration.name,
                    parameters=self._parameters(
                        func,
                        action_id,
                        aliases=declaration.parameter_aliases,
                        examples=declaration.examples,
                    ),
                    aliases=declaration.aliases,
                )
            )
        return actions

    def extract_error_handlers(self, module: Any) -> list[ManifestErrorHandler]:
        module = self._require_module(module)
        handlers: list[ManifestErrorHandler] = []
        for func in self._own_callables(module):
            declaration = getattr(func, ERROR_HANDLER_ATTRIBUTE, None)
            if not isinstance(declaration, ErrorHandlerDeclaration):
                continue
            handler_id = f"{module.__name__}.{func.__qualname__}"
            handlers.append(
                ManifestErrorHandler(
                    id=handler_id,
                    name=declaration.name or func.__name__,
                    module=module.__name__,
                    parameters=self._parameters(func, handler_id),
                )
            )
        if not handlers:
            raise MiningError(f"No error handlers declared in {module.__name__!r}")
        return handlers

    def _require_module(self, module: Any) -> types.ModuleType:
        if not isinstance(module, types.ModuleType):
            raise MiningError(f"Cannot mine {module!r}: not a module")
        return module

    def _own_members(self, module: types.ModuleType) -> Iterator[Any]:
        for obj in list(vars(module).values()):
            if getattr(obj, "__module__", None) == module.__name__:
                yield obj

    def _own_callables(self, module: types.ModuleType) -> Iterator[Callable[..., Any]]:
        for obj in self._own_members(module):
            if inspect.isfunction(obj):
                yield obj
            elif isinstance(obj, type):
                for member in list(vars(obj).values()):
                    if isinstance(member, (staticmethod, classmethod)):
                        member = member.__func__
                    if inspect.isfunction(member):
                        yield member

    def _type_hints(self, func: Callable[..., Any]) -> Dict[str, Any]:
        if func not in self._hints:
            try:
                self._hints[func] = typing.get_type_hints(func)
            except Exception as exc:
                raise MiningError(f"Cannot resolve annotations of {func.__qualname__!r}: {exc}") from exc
        return self._hints[func]

    def _parameters(
        self,
        func: Callable[..., Any],
        owner_id: str,
        *,
        aliases: Mapping[str, Tuple[str, ...]] | None = None,
        examples: Mapping[str, Tuple[str, ...]] | None = None,
    ) -> Tuple[ManifestParameter, ...]:
        hints = self._type_hints(func)
        aliases = aliases or {}
        examples = examples or {}
        parameters: list[ManifestParameter] = []
        for parameter in inspect.signature(func).parameters.values():
            if parameter.name in _IMPLICIT_PARAMETERS or parameter.kind in _SKIPPED_KINDS:
                continue
            annotation = _unwrap_optional(hints.get(parameter.name, str), f"{owner_id}.{parameter.name}")
            type_module = getattr(annotation, "__module__", "")
            type_name = getattr(annotation, "__qualname__", None) or str(annotation)
            parameters.append(
                ManifestParameter(
                    name=parameter.name,
                    entity_type=_entity_type(annotation),
                    internal_name=parameter.name,
                    qualified_name=f"{owner_id}.{parameter.name}",
                    qualified_type_name=f"{type_module}.{type_name}" if type_module else type_name,
                    type_module=type_module,
                    aliases=aliases.get(parameter.name, ()),
                    examples=examples.get(parameter.name, ()),
                )
            )
        return tuple(parameters)


def _unwrap_optional(annotation: Any, where: str) -> Any:
    """Return ``X`` for ``Optional[X]``; reject every other generic annotation."""

    origin = typing.get_origin(annotation)
    if origin is None:
        return annotation
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _unwrap_optional(members[0], where)
    raise MiningError(f"Unsupported annotation {annotation!r} for {where!r}")


def _entity_type(annotation: Any) -> str:
    declaration = getattr(annotation, ENTITY_ATTRIBUTE, None)
    if isinstance(declaration, EntityDeclaration):
        return declaration.id or annotation.__name__
    return getattr(annotation, "__name__", None) or str(annotation)
