"""modelql public API.

Compiles declarative model definitions into GraphQL SDL plus resolver
metadata, and merges schema fragments contributed by several sources.

Exposes:
- ModelRegistry, Model, Attribute: the source model description
- TypeMapper, to_sdl, InputGenerator: the per-attribute/per-type renderers
- SchemaFragment, merge_schemas, collect_fragments: fragment handling
- build_morph_union: the polymorphic ``Morph`` union
- SchemaBuilder, CompiledSchema: end-to-end compilation
"""
from __future__ import annotations

from .builder import CompiledSchema, SchemaBuilder
from .config import FieldVisibility, SchemaConfig
from .core.models import Attribute, Model, ModelRegistry
from .errors import DuplicateTypeError, EmptySchemaError, ModelQLError, SchemaSyntaxError, UnknownModelError
from .fragments import ResolverSource, SchemaFragment, attach_metadata_to_resolvers, collect_fragments, merge_schemas
from .inputs import INPUT_ID, InputGenerator
from .morph import MorphUnion, build_morph_union, collect_object_types, resolve_morph_type
from .scalars import get_scalars
from .sdl import to_sdl
from .types import TypeMapper, convert_enum_type

__all__ = [
    'Attribute', 'Model', 'ModelRegistry',
    'FieldVisibility', 'SchemaConfig',
    'TypeMapper', 'convert_enum_type',
    'to_sdl',
    'INPUT_ID', 'InputGenerator',
    'MorphUnion', 'build_morph_union', 'collect_object_types', 'resolve_morph_type',
    'ResolverSource', 'SchemaFragment', 'attach_metadata_to_resolvers', 'collect_fragments', 'merge_schemas',
    'get_scalars',
    'CompiledSchema', 'SchemaBuilder',
    'ModelQLError', 'UnknownModelError', 'DuplicateTypeError', 'SchemaSyntaxError', 'EmptySchemaError',
]
