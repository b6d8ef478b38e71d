"""Generate declarative action manifests from annotated Python modules.

Modules are listed by a source enumerator, mined for actions, entities and
error handlers, and the results are assembled into a single versioned
manifest that a backend uses to dispatch requests to the right action.
"""

from .aggregator import ExtractedData, aggregate, prune_unreferenced_entities
from .config import GeneratorConfig, load_config_from_dict, load_config_from_path
from .declarations import action, entity, error_handler
from .exceptions import (
    ConfigError,
    ManifestFormatError,
    ManifestorError,
    MiningError,
    SchemaValidationError,
    SourceError,
)
from .generator import ManifestGenerator, build_manifest
from .manifest import (
    MANIFEST_VERSION,
    EntityKeyword,
    Manifest,
    ManifestAction,
    ManifestEntity,
    ManifestErrorHandler,
    ManifestParameter,
)
from .miner import DeclarationMiner, ExtractionResult, ModuleMiner
from .serializer import dumps_manifest, loads_manifest, write_manifest
from .sources import MANIFEST_MARKER, MarkedModuleSource, SourceEnumerator, SourceRegistry
from .trace import Span, traced

__all__ = [
    "ConfigError",
    "DeclarationMiner",
    "EntityKeyword",
    "ExtractedData",
    "ExtractionResult",
    "GeneratorConfig",
    "MANIFEST_MARKER",
    "MANIFEST_VERSION",
    "Manifest",
    "ManifestAction",
    "ManifestEntity",
    "ManifestErrorHandler",
    "ManifestFormatError",
    "ManifestGenerator",
    "ManifestParameter",
    "ManifestorError",
    "MarkedModuleSource",
    "MiningError",
    "ModuleMiner",
    "SchemaValidationError",
    "SourceEnumerator",
    "SourceError",
    "SourceRegistry",
    "Span",
    "action",
    "aggregate",
    "build_manifest",
    "dumps_manifest",
    "entity",
    "error_handler",
    "load_config_from_dict",
    "load_config_from_path",
    "loads_manifest",
    "prune_unreferenced_entities",
    "traced",
    "write_manifest",
]
