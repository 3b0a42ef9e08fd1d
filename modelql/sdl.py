"""Rendering of field maps into GraphQL SDL text.

Two block kinds are supported:

- ``fields``: ``name: Type`` lines of object and input types.
- ``operation``: Query/Mutation fields, whose values are either a type string
  or a descriptor ``{'args': {...}, 'type': 'T'}``.

Output order always follows the input mapping order.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Union

from .core.models import Model

__all__ = [
    'FIELDS',
    'OPERATION',
    'to_sdl',
    'fields_to_sdl',
    'operation_to_sdl',
    'arguments_to_sdl',
    'apply_metadata',
    'get_type_description',
    'render_block',
]

FIELDS = 'fields'
OPERATION = 'operation'

_OPERATION_BLOCKS = frozenset({OPERATION, 'query', 'mutation'})

FieldValue = Union[str, Mapping[str, Any]]


def _base_name(key: str) -> str:
    # 'articles(where: JSON)' -> 'articles'
    return key.split('(', 1)[0].strip()


def _description_block(text: str) -> str:
    escaped = str(text).replace('"""', '\\"""')
    return f'"""\n{escaped}\n"""\n'


def _metadata_for(config: Any) -> dict:
    if isinstance(config, str):
        return {'description': config}
    if isinstance(config, Mapping):
        return {'description': config.get('description'), 'deprecated': config.get('deprecated')}
    return {}


def apply_metadata(definition: str, metadata: Optional[Mapping[str, Any]] = None) -> str:
    """Attach a description block and a ``@deprecated`` directive to a field line."""
    metadata = metadata or {}
    description = metadata.get('description')
    deprecated = metadata.get('deprecated')
    out = definition
    if description:
        out = f"{_description_block(description)}{out}"
    if deprecated:
        out = f"{out} @deprecated(reason: {json.dumps(str(deprecated))})"
    return out


def arguments_to_sdl(args: Optional[Mapping[str, str]]) -> str:
    """Render an argument map as ``(a: T, b: U)``; an empty map renders as ''."""
    if not args:
        return ''
    inner = ', '.join(f"{name}: {type_}" for name, type_ in args.items())
    return f"({inner})"


def fields_to_sdl(
    fields: Mapping[str, str],
    configurations: Optional[Mapping[str, Any]] = None,
    model: Optional[Model] = None,
) -> str:
    configurations = configurations or {}
    lines = []
    for key, value in fields.items():
        name = _base_name(key)
        override = _metadata_for(configurations.get(name))
        attribute = model.attributes.get(name) if model is not None else None
        description = override.get('description') or (attribute.description if attribute else None)
        deprecated = override.get('deprecated') or (attribute.deprecated if attribute else None)
        lines.append(apply_metadata(f"{key}: {value}", {'description': description, 'deprecated': deprecated}))
    return '\n'.join(lines)


def operation_to_sdl(
    fields: Mapping[str, FieldValue],
    configurations: Optional[Mapping[str, Any]] = None,
) -> str:
    configurations = configurations or {}
    lines = []
    for key, value in fields.items():
        metadata = _metadata_for(configurations.get(_base_name(key)))
        if isinstance(value, str):
            lines.append(apply_metadata(f"{key}: {value}", metadata))
            continue
        args = value.get('args') or {}
        lines.append(apply_metadata(f"{key}{arguments_to_sdl(args)}: {value['type']}", metadata))
    return '\n'.join(lines)


def to_sdl(
    fields: Mapping[str, FieldValue],
    configurations: Optional[Mapping[str, Any]] = None,
    model: Optional[Model] = None,
    block: str = FIELDS,
) -> str:
    """Render a field map as SDL lines.

    Args:
        fields: Field name -> type string (or operation descriptor).
        configurations: Per-field overrides. A string value is a description,
            a mapping may carry ``description`` and ``deprecated``.
        model: The model owning the fields; its attribute metadata is the
            fallback for descriptions and deprecations (fields mode only).
        block: ``'fields'`` or ``'operation'`` (``'query'``/``'mutation'``
            are accepted as aliases).
    """
    if block in _OPERATION_BLOCKS:
        return operation_to_sdl(fields, configurations)
    return fields_to_sdl(fields, configurations, model)


def get_type_description(type_config: Optional[Mapping[str, Any]] = None, model: Optional[Model] = None) -> str:
    """Description block of a whole type: ``_description`` override, then the model's own."""
    text = None
    if isinstance(type_config, Mapping):
        text = type_config.get('_description')
    if not text and model is not None:
        text = model.description
    return _description_block(text) if text else ''


def render_block(keyword: str, name: str, body: str, description: str = '') -> str:
    """Render ``<keyword> <name> { ... }`` with the body indented."""
    indented = '\n'.join(f"  {line}" if line else line for line in body.splitlines())
    return f"{description}{keyword} {name} {{\n{indented}\n}}"
