"""Exceptions raised by gql-freeze."""

from pathlib import Path


class GqlFreezeError(Exception):
    """Base class for all gql-freeze errors."""


class SchemaParseError(GqlFreezeError):
    """Raised when raw schema text cannot be parsed.

    `locations` holds (line, column) pairs for SDL input or JSON paths
    such as "data.__schema.types.3.kind" for introspection input.
    """

    def __init__(self, message: str, locations: list | None = None):
        self.message = message
        self.locations = list(locations or [])
        super().__init__(message)


class UnknownTypeReference(GqlFreezeError):
    """Raised when a named type resolves to no scalar, enum or object."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unknown type {type_name}")


# Emitter bugs, not caught by the CLI


class UnsupportedConstruct(RuntimeError):
    """Raised when the emitter is asked for code it cannot express."""


class IndentationUnderflow(RuntimeError):
    """Raised when a code block is closed at indentation level 0."""


class OutputWriteError(GqlFreezeError):
    """Raised when a generated file or directory cannot be written."""

    def __init__(self, action: str, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"{action} {path}: {cause}")


class ConfigError(GqlFreezeError):
    """Raised for a missing, unreadable or invalid configuration."""


class FetchError(GqlFreezeError):
    """Raised when raw schema text cannot be obtained."""
