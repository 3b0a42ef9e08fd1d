"""Explicit configuration objects for the schema builder.

Nothing here is read from a process-wide object: callers construct these and
pass them to :class:`modelql.builder.SchemaBuilder`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .core.models import Model

__all__ = ['FieldVisibility', 'SchemaConfig', 'field_configurations']

VisibilityPredicate = Callable[[Model, str], bool]


def _default_list_arguments() -> Dict[str, str]:
    return {'sort': 'String', 'limit': 'Int', 'start': 'Int', 'where': 'JSON'}


@dataclass
class SchemaConfig:
    """Options of the generated shadow CRUD.

    Attributes:
        shadow_crud: Generate queries and mutations for every registered model.
            When False only object/input types are generated and all
            operations come from contributed fragments.
        default_list_arguments: Argument map of generated plural queries.
    """

    shadow_crud: bool = True
    default_list_arguments: Dict[str, str] = field(default_factory=_default_list_arguments)


class FieldVisibility:
    """Answers "is this attribute exposed" for a (model, attribute) pair.

    Wraps a predicate supplied by the configuration collaborator. The usual
    source is the merged ``type`` mapping of schema fragments, where an entry
    set to ``False`` hides the field:

        FieldVisibility.from_type_config({'Article': {'secret': False}})
    """

    def __init__(self, predicate: Optional[VisibilityPredicate] = None):
        self._predicate = predicate

    @classmethod
    def all(cls) -> 'FieldVisibility':
        return cls(None)

    @classmethod
    def from_type_config(cls, type_config: Optional[Mapping[str, Any]]) -> 'FieldVisibility':
        config = dict(type_config or {})

        def predicate(model: Model, attribute_name: str) -> bool:
            entries = config.get(model.global_id)
            if not isinstance(entries, Mapping):
                return True
            return entries.get(attribute_name) is not False

        return cls(predicate)

    def is_enabled(self, model: Model, attribute_name: str) -> bool:
        if self._predicate is None:
            return True
        return bool(self._predicate(model, attribute_name))

    __call__ = is_enabled


def field_configurations(type_config: Optional[Mapping[str, Any]], global_id: str) -> Dict[str, Union[str, Mapping[str, Any]]]:
    """Per-field description/deprecation overrides of one type.

    Returns an empty mapping when the type has no (or malformed) overrides.
    """
    entries = (type_config or {}).get(global_id)
    if not isinstance(entries, Mapping):
        return {}
    return dict(entries)
