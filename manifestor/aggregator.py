"""Aggregation of mined declarations across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Iterable, Sequence, Tuple

from .manifest import ManifestAction, ManifestEntity, ManifestErrorHandler
from .miner import DeclarationMiner, attempt
from .trace import traced

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedData:
    """Flat, pruned declarations collected from every scanned module."""

    entities: Tuple[ManifestEntity, ...] = field(default_factory=tuple)
    actions: Tuple[ManifestAction, ...] = field(default_factory=tuple)
    error_handlers: Tuple[ManifestErrorHandler, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", tuple(self.entities))
        object.__setattr__(self, "actions", tuple(self.actions))
        object.__setattr__(self, "error_handlers", tuple(self.error_handlers))


def aggregate(modules: Iterable[Any], miner: DeclarationMiner) -> ExtractedData:
    """Mine *modules* in order and concatenate their declarations.

    A :class:`~manifestor.exceptions.MiningError` raised while extracting
    actions or entities aborts the whole call.  The same error raised while
    extracting error handlers only drops that module's handlers: a warning
    is logged and the next module is processed.
    """

    with traced(logger, "Initializing declaration miner"):
        miner.initialize()

    entities: list[ManifestEntity] = []
    actions: list[ManifestAction] = []
    error_handlers: list[ManifestErrorHandler] = []

    for module in modules:
        actions.extend(attempt(miner.extract_actions, module).unwrap())
        entities.extend(attempt(miner.extract_entities, module).unwrap())

        handlers = attempt(miner.extract_error_handlers, module)
        if handlers.ok:
            error_handlers.extend(handlers.items)
        else:
            logger.warning(
                "No error handlers found in %s: %s",
                getattr(module, "__name__", module),
                handlers.error,
            )

    return ExtractedData(
        entities=prune_unreferenced_entities(entities, actions),
        actions=actions,
        error_handlers=error_handlers,
    )


def prune_unreferenced_entities(
    entities: Sequence[ManifestEntity], actions: Sequence[ManifestAction]
) -> Tuple[ManifestEntity, ...]:
    """Keep only entities whose id is the entity type of some action parameter.

    Relative order is preserved and duplicates are left alone.
    """

    referenced = {parameter.entity_type for action in actions for parameter in action.parameters}
    return tuple(entity for entity in entities if entity.id in referenced)
