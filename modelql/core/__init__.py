# Core subpackage: model definitions, registry and naming helpers.
from .models import MISSING, SCALAR_TYPES, WILDCARD, Attribute, Model, ModelRegistry
from .naming import camel_case, global_id_for, lower_first, to_input_name, to_plural, to_singular, upper_camel, upper_first

__all__ = [
    'MISSING', 'SCALAR_TYPES', 'WILDCARD', 'Attribute', 'Model', 'ModelRegistry',
    'camel_case', 'global_id_for', 'lower_first', 'to_input_name', 'to_plural', 'to_singular',
    'upper_camel', 'upper_first',
]
