"""Utilities for loading generator settings from declarative files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .exceptions import ConfigError, SchemaValidationError
from .schema import validate
from .sources import MarkedModuleSource, SourceEnumerator, SourceRegistry

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["domain", "id"],
    "additionalProperties": False,
    "properties": {
        "domain": {"type": "string"},
        "id": {"type": "string"},
        "modules": {"type": "array", "items": {"type": "string"}, "default": []},
        "scan_marked": {"type": "boolean", "default": False},
        "prefix": {"type": ["string", "null"], "default": None},
        "output": {"type": ["string", "null"], "default": None},
        "indent": {"type": ["integer", "null"], "minimum": 0, "default": None},
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            "default": "INFO",
        },
    },
}


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for one manifest generation run."""

    domain: str
    app_id: str
    modules: Tuple[str, ...] = field(default_factory=tuple)
    scan_marked: bool = False
    prefix: Optional[str] = None
    output: Optional[Path] = None
    indent: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", tuple(self.modules))
        if self.output is not None and not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))

    def build_source(self) -> SourceEnumerator:
        """Return the enumerator selected by this configuration."""

        if self.scan_marked:
            return MarkedModuleSource(prefix=self.prefix)
        return SourceRegistry(self.modules)


def load_config_from_path(path: str | Path) -> GeneratorConfig:
    """Load generator settings from a JSON or YAML file."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file '{path}': {exc}") from exc
    return load_config_from_dict(_parse(text, path))


def load_config_from_dict(data: Mapping[str, Any]) -> GeneratorConfig:
    """Validate *data* and build a :class:`GeneratorConfig`."""

    if not isinstance(data, Mapping):
        raise ConfigError("Generator configuration must be a mapping")
    try:
        values = validate(data, CONFIG_SCHEMA)
    except SchemaValidationError as exc:
        raise ConfigError(f"Invalid generator configuration: {exc}") from exc
    if values["scan_marked"] and values["modules"]:
        raise ConfigError("'modules' and 'scan_marked' are mutually exclusive")

    return GeneratorConfig(
        domain=values["domain"],
        app_id=values["id"],
        modules=tuple(values["modules"]),
        scan_marked=values["scan_marked"],
        prefix=values["prefix"],
        output=Path(values["output"]) if values["output"] else None,
        indent=values["indent"],
        log_level=values["log_level"],
    )


def _parse(text: str, path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix in {".yml", ".yaml"}:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed YAML in '{path}': {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Unsupported configuration format for '{path}'") from exc
