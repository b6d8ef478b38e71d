"""Manifest data structures exchanged with the dispatching backend.

Every record mirrors one object of the wire format.  ``as_dict`` returns the
JSON-serialisable representation with the camelCase keys the backend
expects, and ``from_dict`` is its inverse.  The key names are a
compatibility contract: changing any of them requires bumping
:data:`MANIFEST_VERSION`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

MANIFEST_VERSION = "0.1"


def _strings(values: Iterable[Any] | None) -> Tuple[str, ...]:
    return tuple(str(value) for value in values or ())


@dataclass(frozen=True)
class EntityKeyword:
    """A single value of an entity domain with its synonyms."""

    keyword: str
    synonyms: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "synonyms", _strings(self.synonyms))

    def as_dict(self) -> Dict[str, Any]:
        return {"keyword": self.keyword, "synonyms": list(self.synonyms)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EntityKeyword":
        return cls(keyword=data["keyword"], synonyms=data.get("synonyms", ()))


@dataclass(frozen=True)
class ManifestEntity:
    """Parameter-type domain that actions refer to by ``id``."""

    id: str
    type: str = "Enum"
    namespace: str = ""
    name: str = ""
    values: Tuple[EntityKeyword, ...] = ()
    module: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "namespace": self.namespace,
            "name": self.name,
            "values": [value.as_dict() for value in self.values],
            "module": self.module,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestEntity":
        return cls(
            id=data["id"],
            type=data.get("type", "Enum"),
            namespace=data.get("namespace", ""),
            name=data.get("name", ""),
            values=tuple(EntityKeyword.from_dict(value) for value in data.get("values", ())),
            module=data.get("module", ""),
        )


@dataclass(frozen=True)
class ManifestParameter:
    """Typed parameter of an action or error handler."""

    name: str
    entity_type: str
    internal_name: str = ""
    qualified_name: str = ""
    qualified_type_name: str = ""
    type_module: str = ""
    aliases: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", _strings(self.aliases))
        object.__setattr__(self, "examples", _strings(self.examples))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "internalName": self.internal_name,
            "qualifiedName": self.qualified_name,
            "entityType": self.entity_type,
            "qualifiedTypeName": self.qualified_type_name,
            "typeModule": self.type_module,
            "aliases": list(self.aliases),
            "examples": list(self.examples),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestParameter":
        return cls(
            name=data["name"],
            entity_type=data["entityType"],
            internal_name=data.get("internalName", ""),
            qualified_name=data.get("qualifiedName", ""),
            qualified_type_name=data.get("qualifiedTypeName", ""),
            type_module=data.get("typeModule", ""),
            aliases=data.get("aliases", ()),
            examples=data.get("examples", ()),
        )


@dataclass(frozen=True)
class ManifestAction:
    """Invocable operation exposed to the backend."""

    name: str | None
    parameters: Tuple[ManifestParameter, ...] = ()
    id: str = ""
    module: str = ""
    aliases: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "aliases", _strings(self.aliases))

    @property
    def entity_types(self) -> Tuple[str, ...]:
        """Return the entity ids referenced by the parameters, in order."""

        return tuple(parameter.entity_type for parameter in self.parameters)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "module": self.module,
            "name": self.name,
            "parameters": [parameter.as_dict() for parameter in self.parameters],
            "aliases": list(self.aliases),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestAction":
        return cls(
            name=data.get("name"),
            parameters=tuple(ManifestParameter.from_dict(item) for item in data.get("parameters", ())),
            id=data.get("id", ""),
            module=data.get("module", ""),
            aliases=data.get("aliases", ()),
        )


@dataclass(frozen=True)
class ManifestErrorHandler:
    """Per-module declaration describing how failures are reported."""

    id: str
    name: str = ""
    module: str = ""
    parameters: Tuple[ManifestParameter, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "module": self.module,
            "name": self.name,
            "parameters": [parameter.as_dict() for parameter in self.parameters],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestErrorHandler":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            module=data.get("module", ""),
            parameters=tuple(ManifestParameter.from_dict(item) for item in data.get("parameters", ())),
        )


@dataclass(frozen=True)
class Manifest:
    """Declarative description of a domain's actions, entities and error handlers."""

    id: str
    domain: str
    version: str = MANIFEST_VERSION
    entities: Tuple[ManifestEntity, ...] = field(default_factory=tuple)
    actions: Tuple[ManifestAction, ...] = field(default_factory=tuple)
    error_handlers: Tuple[ManifestErrorHandler, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", tuple(self.entities))
        object.__setattr__(self, "actions", tuple(self.actions))
        object.__setattr__(self, "error_handlers", tuple(self.error_handlers))

    def as_dict(self) -> Dict[str, Any]:
        """Return the wire representation of the manifest."""

        return {
            "id": self.id,
            "version": self.version,
            "domain": self.domain,
            "entities": [entity.as_dict() for entity in self.entities],
            "actions": [action.as_dict() for action in self.actions],
            "errorHandlers": [handler.as_dict() for handler in self.error_handlers],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Manifest":
        return cls(
            id=data["id"],
            domain=data["domain"],
            version=data["version"],
            entities=tuple(ManifestEntity.from_dict(item) for item in data.get("entities", ())),
            actions=tuple(ManifestAction.from_dict(item) for item in data.get("actions", ())),
            error_handlers=tuple(
                ManifestErrorHandler.from_dict(item) for item in data.get("errorHandlers", ())
            ),
        )
