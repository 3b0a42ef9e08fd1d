"""Build registry models from SQLAlchemy declarative classes.

Columns become scalar/enumeration attributes and relationships become
``model``/``collection`` relations. Primary keys are skipped (generated types
always expose ``id: ID!``), as are foreign-key columns that back a many-to-one
relationship.

Example:
    class Base(DeclarativeBase):
        pass

    class Article(Base):
        \"\"\"Blog articles\"\"\"
        __tablename__ = 'articles'
        id = mapped_column(Integer, primary_key=True)
        title = mapped_column(String, nullable=False, comment='Headline')

    registry = models_from_declarative(Base)
    registry.get_model('article').attributes['title'].required  # True
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, Optional, Set

import inflection
from sqlalchemy import JSON, BigInteger, Boolean, Date, DateTime, Float, Integer, Numeric, String, Time
from sqlalchemy import Enum as SAEnumType
from sqlalchemy.types import TypeDecorator

from ..core.models import MISSING, Attribute, Model, ModelRegistry

__all__ = ['attribute_type_for', 'model_from_mapper', 'models_from_declarative']

_logger = logging.getLogger('modelql')


def model_name_for(cls: type) -> str:
    return inflection.underscore(cls.__name__)


def attribute_type_for(sqlatype: Any) -> str:
    """Map a SQLAlchemy column type to an attribute type name ('string' for unknown types)."""
    if isinstance(sqlatype, TypeDecorator):
        impl = getattr(sqlatype, 'impl', None)
        if impl is not None and impl is not sqlatype:
            return attribute_type_for(impl)
    # Enum subclasses String, BigInteger subclasses Integer, Float subclasses Numeric
    if isinstance(sqlatype, SAEnumType):
        return 'enumeration'
    if isinstance(sqlatype, Boolean):
        return 'boolean'
    if isinstance(sqlatype, BigInteger):
        return 'biginteger'
    if isinstance(sqlatype, Integer):
        return 'integer'
    if isinstance(sqlatype, Float):
        return 'float'
    if isinstance(sqlatype, Numeric):
        return 'decimal'
    if isinstance(sqlatype, JSON):
        return 'json'
    if isinstance(sqlatype, DateTime):
        return 'datetime'
    if isinstance(sqlatype, Date):
        return 'date'
    if isinstance(sqlatype, Time):
        return 'time'
    if isinstance(sqlatype, String):
        return 'string'
    return 'string'


def _column_default(column: Any) -> Any:
    default = getattr(column, 'default', None)
    if default is not None and getattr(default, 'is_scalar', False):
        return default.arg
    if default is not None or getattr(column, 'server_default', None) is not None:
        # callable/server defaults: value unknown here, but the field is still optional on create
        return None
    return MISSING


def _column_attribute(column: Any) -> Attribute:
    attr_type = attribute_type_for(column.type)
    attribute = Attribute(
        type=attr_type,
        required=not column.nullable,
        default=_column_default(column),
        description=getattr(column, 'comment', None) or None,
    )
    info = getattr(column, 'info', None) or {}
    attribute.deprecated = info.get('deprecated')
    attribute.private = bool(info.get('private', False))
    if attr_type == 'enumeration':
        enum_cls = getattr(column.type, 'enum_class', None)
        if enum_cls is not None:
            attribute.enum = [member.name for member in enum_cls]
            attribute.enum_name = info.get('enum_name') or enum_cls.__name__
        else:
            attribute.enum = list(getattr(column.type, 'enums', []) or [])
            attribute.enum_name = info.get('enum_name')
    return attribute


def model_from_mapper(mapper: Any) -> Model:
    """Convert one SQLAlchemy mapper into a :class:`Model`."""
    cls = mapper.class_
    relationship_columns: Set[str] = set()
    for rel in mapper.relationships:
        if rel.direction.name == 'MANYTOONE':
            relationship_columns.update(col.key for col in rel.local_columns)

    attributes: Dict[str, Attribute] = {}
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        if getattr(column, 'primary_key', False) or column.key in relationship_columns:
            continue
        attributes[prop.key] = _column_attribute(column)

    for rel in mapper.relationships:
        target = model_name_for(rel.mapper.class_)
        if rel.uselist:
            attributes[rel.key] = Attribute(collection=target)
        else:
            attributes[rel.key] = Attribute(model=target)

    doc = inspect.getdoc(cls) if cls.__doc__ else None
    info = {'description': doc} if doc else {}
    return Model(
        name=model_name_for(cls),
        global_id=getattr(cls, '__modelql_global_id__', cls.__name__),
        kind=getattr(cls, '__modelql_kind__', 'collectionType'),
        attributes=attributes,
        info=info,
    )


def models_from_declarative(base: Any, registry: Optional[ModelRegistry] = None) -> ModelRegistry:
    """Register every mapped class of a declarative base into a registry.

    Args:
        base: A ``DeclarativeBase`` subclass (or anything exposing ``.registry.mappers``).
        registry: Registry to extend; a new one is created when omitted.
    """
    registry = registry or ModelRegistry()
    for mapper in sorted(base.registry.mappers, key=lambda m: m.class_.__name__):
        model = model_from_mapper(mapper)
        _logger.debug(f"Registered SQLAlchemy model {mapper.class_.__name__} as {model.global_id}")
        registry.register(model)
    return registry
