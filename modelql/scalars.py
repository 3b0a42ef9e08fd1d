"""Custom scalars every generated schema declares.

Codecs come from Strawberry; ``Long`` (64-bit integers, which GraphQL's ``Int``
cannot carry) is declared here the same way Strawberry declares its own.
"""
from __future__ import annotations

from typing import Any, Dict, NewType

import strawberry
from strawberry.file_uploads import Upload
from strawberry.scalars import JSON
from strawberry.schema.types.base_scalars import Date, DateTime, Time

__all__ = ['Long', 'SCALARS', 'get_scalars', 'scalar_definition', 'scalar_definitions_sdl']


def _parse_long(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Long cannot represent a boolean: {value!r}")
    return int(value)


Long = strawberry.scalar(
    NewType('Long', int),
    name='Long',
    description='64-bit signed integer',
    serialize=_parse_long,
    parse_value=_parse_long,
)

# GraphQL name -> Strawberry scalar wrapper, in declaration order
SCALARS: Dict[str, Any] = {
    'JSON': JSON,
    'DateTime': DateTime,
    'Time': Time,
    'Date': Date,
    'Long': Long,
    'Upload': Upload,
}


def scalar_definition(wrapper: Any) -> Any:
    """Return the ``ScalarDefinition`` (name, serialize, parse_value, parse_literal) of a wrapper."""
    return getattr(wrapper, '_scalar_definition', wrapper)


def get_scalars() -> Dict[str, Any]:
    """Scalar registration table: GraphQL name -> Strawberry ``ScalarDefinition``."""
    return {name: scalar_definition(wrapper) for name, wrapper in SCALARS.items()}


def scalar_definitions_sdl() -> str:
    return '\n'.join(f"scalar {name}" for name in SCALARS)
