"""Attribute -> GraphQL type reference conversion.

Mutations address relations by identifier and components through dedicated
input types; reads expose the full nested shape.
"""
from __future__ import annotations

from typing import Dict

from .core.models import WILDCARD, Attribute, ModelRegistry
from .core.naming import to_singular, upper_camel, upper_first

__all__ = [
    'QUERY',
    'MUTATION',
    'CREATE',
    'UPDATE',
    'DELETE',
    'SCALAR_TYPE_MAP',
    'TypeMapper',
    'convert_enum_type',
    'dynamic_zone_name',
]

QUERY = 'query'
MUTATION = 'mutation'

CREATE = 'create'
UPDATE = 'update'
DELETE = 'delete'

SCALAR_TYPE_MAP: Dict[str, str] = {
    'boolean': 'Boolean',
    'integer': 'Int',
    'biginteger': 'Long',
    'float': 'Float',
    'decimal': 'Float',
    'json': 'JSON',
    'date': 'Date',
    'time': 'Time',
    'datetime': 'DateTime',
    'timestamp': 'DateTime',
}


def convert_enum_type(attribute: Attribute, model_name: str, field_name: str) -> str:
    """Enum type name of an enumeration attribute.

    Uses the explicit ``enum_name`` when set, otherwise ``ENUM_<MODEL>_<FIELD>``.
    """
    if attribute.enum_name:
        return attribute.enum_name
    return f"ENUM_{model_name.upper()}_{field_name.upper()}"


def dynamic_zone_name(model_name: str, attribute_name: str) -> str:
    return f"{model_name}{upper_camel(attribute_name)}DynamicZone"


class TypeMapper:
    """Resolves the GraphQL type of model attributes.

    Args:
        registry: Model registry used to resolve component and relation
            targets. Lookup misses raise :class:`modelql.errors.UnknownModelError`.
    """

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def convert_type(
        self,
        attribute: Attribute,
        model_name: str = '',
        attribute_name: str = '',
        root_type: str = QUERY,
        action: str = '',
    ) -> str:
        """Convert an attribute into a GraphQL type reference such as ``[Tag]`` or ``Int!``.

        Args:
            attribute: The attribute definition.
            model_name: GraphQL name of the owning model (used for enum and
                dynamic zone names).
            attribute_name: Name of the attribute on the model.
            root_type: ``'query'`` for read types, ``'mutation'`` for inputs.
            action: ``''``, ``'create'``, ``'update'`` or ``'delete'``.
        """
        if attribute.type and attribute.type not in ('component', 'dynamiczone'):
            return self._convert_scalar(attribute, model_name, attribute_name, root_type, action)
        if attribute.type == 'component':
            return self._convert_component(attribute, root_type, action)
        if attribute.type == 'dynamiczone':
            type_name = dynamic_zone_name(model_name, attribute_name)
            if root_type == MUTATION:
                type_name = f"{type_name}Input!"
            return f"[{type_name}]{'!' if attribute.required else ''}"
        return self._convert_relation(attribute, root_type)

    def _convert_scalar(self, attribute: Attribute, model_name: str, attribute_name: str, root_type: str, action: str) -> str:
        if attribute.type == 'enumeration':
            type_name = convert_enum_type(attribute, model_name, attribute_name)
        else:
            type_name = SCALAR_TYPE_MAP.get(attribute.type, 'String')
        if attribute.required:
            # partial updates and defaulted fields stay optional in inputs
            if root_type != MUTATION or (action != UPDATE and not attribute.has_default):
                type_name += '!'
        return type_name

    def _convert_component(self, attribute: Attribute, root_type: str, action: str) -> str:
        global_id = self.registry.get_component(attribute.component).global_id
        # read side ignores required: nested objects may be partially populated
        type_name = global_id
        if root_type == MUTATION:
            input_base = upper_first(to_singular(global_id))
            if action == UPDATE:
                type_name = f"edit{input_base}Input"
            else:
                type_name = f"{input_base}Input{'!' if attribute.required else ''}"
        if attribute.repeatable:
            return f"[{type_name}]"
        return type_name

    def _convert_relation(self, attribute: Attribute, root_type: str) -> str:
        ref = attribute.target
        if ref and ref != WILDCARD:
            global_id = self.registry.get_model(ref, attribute.plugin).global_id
            if attribute.is_plural:
                return '[ID]' if root_type == MUTATION else f"[{global_id}]"
            return 'ID' if root_type == MUTATION else global_id
        if root_type == MUTATION:
            return 'ID' if attribute.model else '[ID]'
        return 'Morph' if attribute.model else '[Morph]'
