"""Manifest generation from the declarations of the target modules.

The manifest captures everything the backend needs to dispatch incoming
requests to the right action with the right typed parameters.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Sequence

from .aggregator import ExtractedData, aggregate
from .manifest import MANIFEST_VERSION, Manifest, ManifestAction, ManifestEntity, ManifestErrorHandler
from .miner import DeclarationMiner
from .serializer import dumps_manifest
from .sources import SourceEnumerator
from .trace import traced

logger = logging.getLogger(__name__)


def build_manifest(
    entities: Sequence[ManifestEntity],
    actions: Sequence[ManifestAction],
    error_handlers: Sequence[ManifestErrorHandler],
    domain: str,
    id: str,
) -> Manifest:
    """Assemble a :class:`Manifest` stamped with :data:`MANIFEST_VERSION`."""

    return Manifest(
        id=id,
        version=MANIFEST_VERSION,
        domain=domain,
        entities=entities,
        actions=actions,
        error_handlers=error_handlers,
    )


class ManifestGenerator:
    """Generate manifests for the modules listed by a source enumerator."""

    def __init__(self, source: SourceEnumerator, miner: DeclarationMiner, indent: int | None = None) -> None:
        self.source = source
        self.miner = miner
        self.indent = indent

    def generate_manifest(self, domain: str, id: str) -> str:
        """Return the JSON manifest for every target module."""

        logger.debug("Generate manifest: %s", domain)
        return dumps_manifest(self.build(domain, id), indent=self.indent)

    def generate_empty_manifest(self, domain: str, id: str) -> str:
        """Return a manifest with no entities, actions or error handlers."""

        return dumps_manifest(self._build_from(domain, id, []), indent=self.indent)

    def build(self, domain: str, id: str) -> Manifest:
        """Run the generation pipeline without serialising the result."""

        return self._build_from(domain, id, self.source.get_target_modules())

    def extract_manifest_data(self) -> List[str]:
        """Return the distinct, non-empty action names of the target modules.

        The order of the returned names is not significant.
        """

        logger.debug("Extracting manifest actions and entities.")
        data = aggregate(self.source.get_target_modules(), self.miner)
        logger.debug("Extracted %d actions and %d entities.", len(data.actions), len(data.entities))
        return list({action.name for action in data.actions if action.name})

    def _build_from(self, domain: str, id: str, modules: Iterable[Any]) -> Manifest:
        logger.debug("Generating manifest.")
        with traced(logger, "Extract module data") as span:
            data: ExtractedData = aggregate(modules, self.miner)
            span.extra.update(
                entities=len(data.entities),
                actions=len(data.actions),
                error_handlers=len(data.error_handlers),
            )
        return build_manifest(data.entities, data.actions, data.error_handlers, domain, id)
