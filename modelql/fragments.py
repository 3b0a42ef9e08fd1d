"""Schema fragments and their merge.

A fragment is the unit contributed by one source (an API module, a plugin, an
extension, or the builder itself). Definitions and operations are kept as
ordered lists of SDL entries and only joined into text at the boundary.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .morph import collect_object_types, unique_type_names

__all__ = [
    'ResolverSource',
    'SchemaFragment',
    'attach_metadata_to_resolvers',
    'collect_fragments',
    'merge_schemas',
]

_logger = logging.getLogger('modelql')

SEPARATOR = ' '


@dataclass(frozen=True)
class ResolverSource:
    """Identity of the source that contributed a resolver (diagnostics only)."""

    api: Optional[str] = None
    plugin: Optional[str] = None

    def __str__(self) -> str:
        if self.api:
            return f"api:{self.api}"
        if self.plugin:
            return f"plugin:{self.plugin}"
        return 'generated'


def _as_entries(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return [entry for entry in value if entry and entry.strip()]


@dataclass
class SchemaFragment:
    """Definitions, operations, type overrides and resolvers of one source.

    Attributes:
        definition: SDL blocks (types, inputs, enums, unions, scalars).
        query: Query field lines.
        mutation: Mutation field lines.
        type: Per-type field overrides ``{GlobalId: {field: False | str | {...}}}``.
        resolver: Resolver map ``{TypeName: {field: resolver}}``.
        object_types: Object type names defined by ``definition``, in order.
        sources: ``'Type.field'`` -> contributing :class:`ResolverSource`.
    """

    definition: List[str] = field(default_factory=list)
    query: List[str] = field(default_factory=list)
    mutation: List[str] = field(default_factory=list)
    type: Dict[str, Any] = field(default_factory=dict)
    resolver: Dict[str, Any] = field(default_factory=dict)
    object_types: List[str] = field(default_factory=list)
    sources: Dict[str, ResolverSource] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        mapping: Optional[Mapping[str, Any]],
        *,
        api: Optional[str] = None,
        plugin: Optional[str] = None,
    ) -> 'SchemaFragment':
        """Build a fragment from a configuration object.

        The object has the shape ``{query?, mutation?, definition?, resolver?, type?}``
        with SDL given as text. The definition text is parsed once to record its
        object types; invalid SDL raises :class:`modelql.errors.SchemaSyntaxError`.
        """
        mapping = mapping or {}
        definition = _as_entries(mapping.get('definition'))
        object_types: List[str] = []
        for entry in definition:
            object_types.extend(collect_object_types(entry))
        fragment = cls(
            definition=definition,
            query=_as_entries(mapping.get('query')),
            mutation=_as_entries(mapping.get('mutation')),
            type=dict(mapping.get('type') or {}),
            resolver=dict(mapping.get('resolver') or {}),
            object_types=unique_type_names(object_types),
        )
        if api is None and plugin is None:
            return fragment
        return attach_metadata_to_resolvers(fragment, api=api, plugin=plugin)

    @property
    def definition_text(self) -> str:
        return SEPARATOR.join(self.definition)

    @property
    def query_text(self) -> str:
        return SEPARATOR.join(self.query)

    @property
    def mutation_text(self) -> str:
        return SEPARATOR.join(self.mutation)

    def resolvers_for(self, type_name: str) -> Dict[str, Any]:
        entries = self.resolver.get(type_name)
        return dict(entries) if isinstance(entries, Mapping) else {}

    def is_empty(self) -> bool:
        return not (self.definition or self.query or self.mutation or self.type or self.resolver)


def attach_metadata_to_resolvers(
    fragment: SchemaFragment,
    *,
    api: Optional[str] = None,
    plugin: Optional[str] = None,
) -> SchemaFragment:
    """Return a copy of ``fragment`` whose resolvers are attributed to a source.

    The resolver values themselves are left untouched.
    """
    source = ResolverSource(api=api, plugin=plugin)
    sources = dict(fragment.sources)
    for type_name, entries in fragment.resolver.items():
        if not isinstance(entries, Mapping):
            continue
        for resolver_name in entries:
            sources[f"{type_name}.{resolver_name}"] = source
    return SchemaFragment(
        definition=list(fragment.definition),
        query=list(fragment.query),
        mutation=list(fragment.mutation),
        type=dict(fragment.type),
        resolver=dict(fragment.resolver),
        object_types=list(fragment.object_types),
        sources=sources,
    )


def _merge_entries(acc: Dict[str, Any], other: Mapping[str, Any], label: str) -> Dict[str, Any]:
    # two levels: per type, then last writer wins per entry
    out = dict(acc)
    for key, value in other.items():
        current = out.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged = dict(current)
            for name, entry in value.items():
                if name in merged and merged[name] is not entry:
                    _logger.debug(f"{label} entry {key}.{name} overridden by a later fragment")
                merged[name] = entry
            out[key] = merged
        else:
            out[key] = value
    return out


def merge_schemas(fragments: Iterable[SchemaFragment]) -> SchemaFragment:
    """Fold fragments into one, in order.

    Text entries are concatenated; ``type`` and ``resolver`` maps are merged
    per type with the later fragment winning each colliding entry entirely.
    Collisions are not reported as errors.
    """
    merged = SchemaFragment()
    object_types: List[str] = []
    for fragment in fragments:
        merged.definition.extend(fragment.definition)
        merged.query.extend(fragment.query)
        merged.mutation.extend(fragment.mutation)
        merged.type = _merge_entries(merged.type, fragment.type, 'type')
        merged.resolver = _merge_entries(merged.resolver, fragment.resolver, 'resolver')
        merged.sources.update(fragment.sources)
        object_types.extend(fragment.object_types)
    merged.object_types = unique_type_names(object_types)
    return merged


def _fragments_of(sources: Optional[Mapping[str, Any]], kind: str) -> List[SchemaFragment]:
    out: List[SchemaFragment] = []
    for key, mapping in (sources or {}).items():
        if isinstance(mapping, SchemaFragment):
            out.append(attach_metadata_to_resolvers(mapping, **{kind: key}))
        else:
            out.append(SchemaFragment.from_mapping(mapping, **{kind: key}))
    return out


def collect_fragments(
    *,
    apis: Optional[Mapping[str, Any]] = None,
    plugins: Optional[Mapping[str, Any]] = None,
    extensions: Optional[Mapping[str, Any]] = None,
) -> Sequence[SchemaFragment]:
    """Turn per-source configuration objects into fragments in merge order.

    Order is plugins, then extensions, then application APIs, so that an API
    overriding a plugin resolver wins reproducibly. Extensions are attributed
    as plugins.
    """
    return [
        *_fragments_of(plugins, 'plugin'),
        *_fragments_of(extensions, 'plugin'),
        *_fragments_of(apis, 'api'),
    ]
