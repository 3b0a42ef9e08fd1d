from __future__ import annotations

from .sqlalchemy import attribute_type_for, model_from_mapper, models_from_declarative

__all__ = [
    'attribute_type_for',
    'model_from_mapper',
    'models_from_declarative',
]
