"""Custom exception types used by the manifest generator."""

class ManifestorError(Exception):
    """Base class for all errors raised by the package."""


class MiningError(ManifestorError, RuntimeError):
    """Raised when a miner cannot extract declarations from a module."""


class SourceError(ManifestorError, LookupError):
    """Raised when a source module cannot be resolved."""


class SchemaValidationError(ManifestorError, ValueError):
    """Raised when a mapping does not match a JSON schema."""


class ManifestFormatError(SchemaValidationError):
    """Raised when serialized text cannot be decoded into a manifest."""


class ConfigError(ManifestorError, ValueError):
    """Raised when the generator configuration is invalid."""
