"""Catch-all ``Morph`` union for polymorphic relations.

The union members are every object type of the final schema except the root
``Query`` type. Names normally come from the ``object_types`` side channel of
a merged :class:`~modelql.fragments.SchemaFragment`; raw SDL text is parsed
with graphql-core only when no fragment is at hand.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

from graphql import GraphQLSyntaxError, ObjectTypeDefinitionNode, parse

from .errors import SchemaSyntaxError

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .fragments import SchemaFragment

__all__ = [
    'MORPH',
    'MorphUnion',
    'build_morph_union',
    'collect_object_types',
    'resolve_morph_type',
    'unique_type_names',
]

MORPH = 'Morph'
ROOT_QUERY = 'Query'


def unique_type_names(names: Iterable[str]) -> List[str]:
    """Order-preserving de-duplication that drops the root Query type."""
    seen = set()
    out: List[str] = []
    for name in names:
        if name == ROOT_QUERY or name in seen:
            continue
        seen.add(name)
        out.append(name)
    return out


def collect_object_types(definition: str) -> List[str]:
    """Names of the object types defined in an SDL document (``Query`` excluded).

    Raises:
        SchemaSyntaxError: The text is not valid SDL.
    """
    if not definition or not definition.strip():
        return []
    try:
        document = parse(definition)
    except GraphQLSyntaxError as exc:
        raise SchemaSyntaxError(f"Invalid SDL: {exc.message}") from exc
    return unique_type_names(
        node.name.value for node in document.definitions
        if isinstance(node, ObjectTypeDefinitionNode)
    )


def resolve_morph_type(obj: Any) -> Optional[str]:
    """Concrete type name of a polymorphic value.

    Reads the ``kind`` discriminator, then ``__contentType``. ``None`` means the
    type cannot be resolved; the execution layer reports it as a resolution
    failure.
    """
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get('kind') or obj.get('__contentType') or None
    return getattr(obj, 'kind', None) or getattr(obj, '__contentType', None) or None


@dataclass
class MorphUnion:
    """Union definition plus its resolver map (both empty when there are no members)."""

    definition: str = ''
    resolvers: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    members: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.members)


def build_morph_union(source: Union[str, 'SchemaFragment']) -> MorphUnion:
    """Build ``union Morph = A | B | ...`` and its ``__resolveType`` rule.

    Args:
        source: Merged SDL text, or a merged schema fragment whose recorded
            object type names are used directly.
    """
    if isinstance(source, str):
        members = collect_object_types(source)
    else:
        members = unique_type_names(source.object_types)
    if not members:
        return MorphUnion()
    return MorphUnion(
        definition=f"union {MORPH} = {' | '.join(members)}",
        resolvers={MORPH: {'__resolveType': resolve_morph_type}},
        members=members,
    )
