"""Bridge from a :class:`~modelql.builder.CompiledSchema` to an executable graphql-core schema.

Serving requests is left to whatever server hosts the schema; this module only
registers scalar codecs, resolvers and type-resolution rules on the schema
graphql-core builds from the SDL.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from graphql import (
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLSyntaxError,
    GraphQLUnionType,
    build_schema,
)

from .errors import EmptySchemaError, SchemaSyntaxError

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .builder import CompiledSchema

__all__ = ['build_executable_schema']

_logger = logging.getLogger('modelql')

RESOLVE_TYPE = '__resolveType'


def _resolver_callable(entry: Any) -> Optional[Callable[..., Any]]:
    """Accept a plain callable or a mapping carrying one under ``resolve``/``resolver``."""
    if callable(entry):
        return entry
    if isinstance(entry, Mapping):
        for key in ('resolve', 'resolver'):
            fn = entry.get(key)
            if callable(fn):
                return fn
    return None


def _type_resolver(fn: Callable[[Any], Optional[str]]):
    def resolve_type(value, info, abstract_type):
        return fn(value)
    return resolve_type


def _bind_scalars(schema: GraphQLSchema, scalars: Mapping[str, Any]) -> None:
    for name, definition in scalars.items():
        gql_type = schema.type_map.get(name)
        if not isinstance(gql_type, GraphQLScalarType):
            continue
        for attr in ('serialize', 'parse_value', 'parse_literal'):
            codec = getattr(definition, attr, None)
            if codec is not None:
                setattr(gql_type, attr, codec)
        description = getattr(definition, 'description', None)
        if description and not gql_type.description:
            gql_type.description = description


def _bind_resolvers(schema: GraphQLSchema, resolvers: Mapping[str, Any]) -> None:
    for type_name, entries in resolvers.items():
        if not isinstance(entries, Mapping):
            continue
        gql_type = schema.type_map.get(type_name)
        if gql_type is None:
            _logger.warning(f"Resolvers declared for unknown type {type_name}, skipping")
            continue
        for field_name, entry in entries.items():
            fn = _resolver_callable(entry)
            if fn is None:
                continue
            if field_name == RESOLVE_TYPE:
                if isinstance(gql_type, (GraphQLUnionType, GraphQLInterfaceType)):
                    gql_type.resolve_type = _type_resolver(fn)
                continue
            if not isinstance(gql_type, (GraphQLObjectType, GraphQLInterfaceType)) or field_name not in gql_type.fields:
                _logger.warning(f"Resolver {type_name}.{field_name} has no matching field, skipping")
                continue
            gql_type.fields[field_name].resolve = fn


def build_executable_schema(compiled: 'CompiledSchema') -> GraphQLSchema:
    """Build a graphql-core schema with scalars, resolvers and type resolvers bound.

    Field resolvers use graphql-core's ``(source, info, **args)`` signature;
    ``__resolveType`` rules receive only the value.

    Raises:
        EmptySchemaError: The compilation produced no query fields.
        SchemaSyntaxError: The compiled SDL does not parse.
    """
    if compiled.is_empty:
        raise EmptySchemaError("The GraphQL schema is empty; refusing to build an executable schema")
    try:
        schema = build_schema(compiled.sdl)
    except GraphQLSyntaxError as exc:
        raise SchemaSyntaxError(f"Invalid SDL: {exc.message}") from exc
    _bind_scalars(schema, compiled.scalars)
    _bind_resolvers(schema, compiled.resolvers)
    return schema
