"""Exceptions raised by the schema compiler."""
from __future__ import annotations

from typing import Optional


class ModelQLError(Exception):
    """Base exception for all modelql errors."""
    pass


class UnknownModelError(ModelQLError, LookupError):
    """Raised when a model or component reference cannot be resolved."""

    def __init__(self, name: str, plugin: Optional[str] = None):
        self.name = name
        self.plugin = plugin
        where = f" in plugin '{plugin}'" if plugin else ""
        super().__init__(f"Unknown model '{name}'{where}")


class DuplicateTypeError(ModelQLError, ValueError):
    """Raised when two models would derive the same GraphQL type name."""

    def __init__(self, global_id: str, first: str, second: str):
        self.global_id = global_id
        super().__init__(f"GraphQL type '{global_id}' is derived by both '{first}' and '{second}'")


class SchemaSyntaxError(ModelQLError, ValueError):
    """Raised when SDL text cannot be parsed."""
    pass


class EmptySchemaError(ModelQLError, RuntimeError):
    """Raised when an executable schema is requested from an empty compilation."""
    pass
