"""Schema builder: registry + contributed fragments -> complete GraphQL schema.

Flow:
    1. merge the contributed fragments (their ``type`` map drives field
       visibility and descriptions)
    2. render one fragment per component and per model (object type, enums,
       dynamic zones, inputs and shadow CRUD operations)
    3. merge generated fragments followed by contributed ones
    4. build the ``Morph`` union from the merged object type names
    5. assemble the final SDL

Usage:
    registry = ModelRegistry.from_definitions(models={...}, components={...})
    compiled = SchemaBuilder(registry, collect_fragments(apis=..., plugins=...)).build()
    print(compiled.sdl)
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .config import FieldVisibility, SchemaConfig, field_configurations
from .core.models import Attribute, Model, ModelRegistry
from .core.naming import to_plural, to_singular, upper_first
from .fragments import SchemaFragment, merge_schemas
from .inputs import INPUT_ID, InputGenerator, mutation_input_name, payload_name
from .morph import MorphUnion, build_morph_union
from .scalars import get_scalars, scalar_definitions_sdl
from .sdl import OPERATION, get_type_description, render_block, to_sdl
from .types import CREATE, DELETE, UPDATE, TypeMapper, convert_enum_type, dynamic_zone_name

__all__ = ['CompiledSchema', 'SchemaBuilder']

_logger = logging.getLogger('modelql')

_enum_value_pattern = re.compile(r'^[_A-Za-z][_0-9A-Za-z]*$')
_reserved_enum_values = frozenset({'true', 'false', 'null'})


def _component_type_resolver(members: Mapping[str, str]) -> Callable[[Any], Optional[str]]:
    """``__resolveType`` of a dynamic zone: the ``__component`` uid picks the type."""

    def resolve_type(obj: Any) -> Optional[str]:
        if isinstance(obj, Mapping):
            uid = obj.get('__component')
        else:
            uid = getattr(obj, '__component', None)
        return members.get(uid) if uid else None

    return resolve_type


@dataclass
class CompiledSchema:
    """Output of :meth:`SchemaBuilder.build`, ready for an execution server."""

    sdl: str
    fragment: SchemaFragment
    morph: MorphUnion
    scalars: Dict[str, Any] = field(default_factory=dict)
    resolvers: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        # GraphQL requires a Query type with at least one field
        return not self.fragment.query

    def to_graphql_schema(self):
        from .executable import build_executable_schema
        return build_executable_schema(self)


class SchemaBuilder:
    """Builds the GraphQL schema of every model in a registry.

    Args:
        registry: Populated model registry (read only during the build).
        fragments: Contributed fragments in merge order (see
            :func:`modelql.fragments.collect_fragments`).
        visibility: Field visibility; defaults to the ``False`` entries of
            the contributed ``type`` map.
        config: Shadow CRUD options.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        fragments: Iterable[SchemaFragment] = (),
        *,
        visibility: Optional[FieldVisibility] = None,
        config: Optional[SchemaConfig] = None,
    ):
        self.registry = registry
        self.config = config or SchemaConfig()
        self.contributed = merge_schemas(fragments)
        self.visibility = visibility or FieldVisibility.from_type_config(self.contributed.type)
        self.type_mapper = TypeMapper(registry)
        self.inputs = InputGenerator(self.type_mapper, self.visibility)
        self._emitted_enums: Dict[str, List[str]] = {}

    # ---------- per-model pieces ----------
    def exposed_attributes(self, model: Model) -> List[str]:
        return self.inputs.eligible_attributes(model)

    def build_type_definition(self, model: Model) -> str:
        """``type <GlobalId> { ... }`` with descriptions and deprecations applied."""
        fields: Dict[str, str] = {}
        exposed = self.exposed_attributes(model)
        if 'id' not in exposed:
            fields['id'] = 'ID!'
        for name in exposed:
            fields[name] = self.type_mapper.convert_type(
                model.attributes[name],
                model_name=model.global_id,
                attribute_name=name,
            )
        overrides = field_configurations(self.contributed.type, model.global_id)
        description = get_type_description(overrides, model)
        return render_block('type', model.global_id, to_sdl(fields, overrides, model), description)

    def _enum_definition(self, name: str, attribute: Attribute) -> Optional[str]:
        declared = [str(value) for value in attribute.enum]
        if name in self._emitted_enums:
            if self._emitted_enums[name] != declared:
                _logger.warning(
                    f"Enum {name} is already declared with values {self._emitted_enums[name]}, "
                    f"ignoring values {declared}"
                )
            return None
        self._emitted_enums[name] = declared
        values = []
        for value in attribute.enum:
            if _enum_value_pattern.match(str(value)) and str(value) not in _reserved_enum_values:
                values.append(str(value))
            else:
                _logger.warning(f"Skipping enum value {value!r} of {name}: not a valid GraphQL name")
        if not values:
            # an enum without values is invalid SDL
            _logger.warning(f"Enum {name} has no usable values, declaring it as a scalar")
            return f"scalar {name}"
        return render_block('enum', name, '\n'.join(values))

    def build_enums(self, model: Model) -> List[str]:
        out = []
        for name in self.exposed_attributes(model):
            attribute = model.attributes[name]
            if attribute.kind != 'enumeration':
                continue
            definition = self._enum_definition(convert_enum_type(attribute, model.global_id, name), attribute)
            if definition:
                out.append(definition)
        return out

    def build_dynamic_zones(self, model: Model) -> tuple[List[str], Dict[str, Dict[str, Any]]]:
        """Union (plus input scalar) and ``__resolveType`` rule per dynamic zone."""
        definitions: List[str] = []
        resolvers: Dict[str, Dict[str, Any]] = {}
        for name in self.exposed_attributes(model):
            attribute = model.attributes[name]
            if attribute.kind != 'dynamiczone':
                continue
            union_name = dynamic_zone_name(model.global_id, name)
            members = {uid: self.registry.get_component(uid).global_id for uid in attribute.components}
            if members:
                definitions.append(f"union {union_name} = {' | '.join(members.values())}")
                resolvers[union_name] = {'__resolveType': _component_type_resolver(members)}
            else:
                definitions.append(f"scalar {union_name}")
            definitions.append(f"scalar {union_name}Input")
        return definitions, resolvers

    def _is_suppressed(self, root: str, name: str) -> bool:
        return self.contributed.resolvers_for(root).get(name) is False

    def build_operations(self, model: Model) -> SchemaFragment:
        """Shadow CRUD queries, mutations and their argument/payload types."""
        global_id = model.global_id
        singular = to_singular(global_id)
        queries: Dict[str, Any] = {}
        if model.is_single_type:
            queries[singular] = global_id
            actions = [UPDATE, DELETE]
        else:
            queries[singular] = {'args': {'id': 'ID!'}, 'type': global_id}
            plural = to_plural(global_id)
            if plural == singular:
                # uncountable names, e.g. 'news(id: ID!)' next to 'newsList'
                plural = f"{singular}List"
            queries[plural] = {'args': dict(self.config.default_list_arguments), 'type': f"[{global_id}]"}
            actions = [CREATE, UPDATE, DELETE]
        queries = {name: value for name, value in queries.items() if not self._is_suppressed('Query', name)}

        mutations: Dict[str, Any] = {}
        definitions: List[str] = []
        object_types: List[str] = []
        for action in actions:
            mutation_name = f"{action}{upper_first(singular)}"
            if self._is_suppressed('Mutation', mutation_name):
                continue
            definitions.append(self.inputs.generate_input_payload_arguments(model, global_id, mutation_name, action))
            object_types.append(payload_name(mutation_name))
            args = {} if (model.is_single_type and action == DELETE) else {'input': mutation_input_name(mutation_name)}
            mutations[mutation_name] = {'args': args, 'type': payload_name(mutation_name)}
        if mutations:
            definitions.insert(0, self.inputs.generate_input_model(model, global_id))

        fragment = SchemaFragment(definition=definitions, object_types=object_types)
        if queries:
            fragment.query.append(to_sdl(queries, self.contributed.resolvers_for('Query'), block=OPERATION))
        if mutations:
            fragment.mutation.append(to_sdl(mutations, self.contributed.resolvers_for('Mutation'), block=OPERATION))
        return fragment

    def build_component_fragment(self, component: Model) -> SchemaFragment:
        _logger.debug(f"Building GraphQL types for component {component.uid} ({component.global_id})")
        definitions = [
            self.build_type_definition(component),
            *self.build_enums(component),
            self.inputs.generate_input_model(component, component.global_id, allow_ids=True),
        ]
        return SchemaFragment(definition=definitions, object_types=[component.global_id])

    def build_model_fragment(self, model: Model) -> SchemaFragment:
        _logger.debug(f"Building GraphQL types for model {model.name} ({model.global_id})")
        zones, zone_resolvers = self.build_dynamic_zones(model)
        fragment = SchemaFragment(
            definition=[self.build_type_definition(model), *self.build_enums(model), *zones],
            resolver=zone_resolvers,
            object_types=[model.global_id],
        )
        if not self.config.shadow_crud:
            return fragment
        return merge_schemas([fragment, self.build_operations(model)])

    # ---------- assembly ----------
    def build(self) -> CompiledSchema:
        """Compile the registry and contributed fragments into a :class:`CompiledSchema`."""
        self._emitted_enums = {}
        generated = [self.build_component_fragment(c) for c in self.registry.components()]
        generated.extend(self.build_model_fragment(m) for m in self.registry.models())
        merged = merge_schemas([*generated, self.contributed])
        morph = build_morph_union(merged)

        blocks = [scalar_definitions_sdl(), INPUT_ID, *merged.definition]
        if morph.definition:
            blocks.append(morph.definition)
        if merged.query:
            blocks.append(render_block('type', 'Query', '\n'.join(merged.query)))
        if merged.mutation:
            blocks.append(render_block('type', 'Mutation', '\n'.join(merged.mutation)))

        resolvers = dict(merged.resolver)
        resolvers.update(morph.resolvers)
        compiled = CompiledSchema(
            sdl='\n\n'.join(blocks) + '\n',
            fragment=merged,
            morph=morph,
            scalars=get_scalars(),
            resolvers=resolvers,
        )
        if compiled.is_empty:
            _logger.warning("The GraphQL schema has not been generated because it is empty")
        else:
            _logger.info(
                f"Compiled GraphQL schema: {len(merged.object_types)} object types, "
                f"{len(merged.query)} query and {len(merged.mutation)} mutation entries"
            )
        return compiled
