"""Model and attribute definitions plus the read-only model registry.

The registry is populated once at start-up (from declarative dicts, or via
:mod:`modelql.adapters.sqlalchemy`) and is only read while a schema compiles.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..errors import DuplicateTypeError, UnknownModelError
from .naming import global_id_for

__all__ = [
    'MISSING',
    'SCALAR_TYPES',
    'WILDCARD',
    'Attribute',
    'Model',
    'ModelRegistry',
]

# Relation target that denotes a polymorphic ("morph") association.
WILDCARD = '*'

SCALAR_TYPES = frozenset({
    'boolean', 'integer', 'biginteger', 'float', 'decimal', 'json',
    'date', 'time', 'datetime', 'timestamp', 'string', 'text', 'richtext',
    'email', 'password', 'uid', 'enumeration',
})


class _Missing:
    """Sentinel for "no default value" (``None`` is a legitimate default)."""

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass
class Attribute:
    """A single declared attribute of a model.

    The ``kind`` property tags the variant: ``scalar``, ``enumeration``,
    ``component``, ``dynamiczone``, ``relation`` or ``unknown``.
    Scalar types outside :data:`SCALAR_TYPES` are still ``scalar`` and render
    as ``String``.
    """

    type: Optional[str] = None
    required: bool = False
    default: Any = MISSING
    enum: List[str] = field(default_factory=list)
    enum_name: Optional[str] = None
    component: Optional[str] = None
    repeatable: bool = False
    components: List[str] = field(default_factory=list)
    model: Optional[str] = None
    collection: Optional[str] = None
    plugin: Optional[str] = None
    description: Optional[str] = None
    deprecated: Optional[str] = None
    private: bool = False

    @classmethod
    def from_dict(cls, definition: Mapping[str, Any]) -> 'Attribute':
        """Build an attribute from the host system's declarative shape."""
        return cls(
            type=definition.get('type'),
            required=bool(definition.get('required', False)),
            default=definition['default'] if 'default' in definition else MISSING,
            enum=list(definition.get('enum') or []),
            enum_name=definition.get('enumName') or definition.get('enum_name'),
            component=definition.get('component'),
            repeatable=bool(definition.get('repeatable', False)),
            components=list(definition.get('components') or []),
            model=definition.get('model'),
            collection=definition.get('collection'),
            plugin=definition.get('plugin'),
            description=definition.get('description'),
            deprecated=definition.get('deprecated'),
            private=bool(definition.get('private', False)),
        )

    @property
    def kind(self) -> str:
        if self.type == 'component':
            return 'component'
        if self.type == 'dynamiczone':
            return 'dynamiczone'
        if self.type == 'enumeration':
            return 'enumeration'
        if self.type:
            return 'scalar'
        if self.model or self.collection:
            return 'relation'
        return 'unknown'

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def is_plural(self) -> bool:
        return bool(self.collection)

    @property
    def target(self) -> Optional[str]:
        return self.model or self.collection


@dataclass
class Model:
    """A named entity of the host data-modeling system."""

    name: str
    global_id: str
    kind: str = 'collectionType'
    attributes: Dict[str, Attribute] = field(default_factory=dict)
    plugin: Optional[str] = None
    info: Dict[str, Any] = field(default_factory=dict)
    uid: Optional[str] = None

    @classmethod
    def from_dict(cls, name: str, definition: Mapping[str, Any], *, plugin: Optional[str] = None) -> 'Model':
        attrs = {
            attr_name: attr if isinstance(attr, Attribute) else Attribute.from_dict(attr)
            for attr_name, attr in (definition.get('attributes') or {}).items()
        }
        return cls(
            name=name,
            global_id=definition.get('globalId') or global_id_for(name),
            kind=definition.get('kind') or 'collectionType',
            attributes=attrs,
            plugin=plugin,
            info=dict(definition.get('info') or {}),
            uid=definition.get('uid'),
        )

    @property
    def is_single_type(self) -> bool:
        return self.kind == 'singleType'

    @property
    def description(self) -> Optional[str]:
        return self.info.get('description')


class ModelRegistry:
    """Registry of models and components keyed by name.

    Models may be namespaced by plugin so that relations can point at e.g.
    the ``user`` model of the ``users-permissions`` plugin.

    Example:
        registry = ModelRegistry.from_definitions(
            models={'article': {'attributes': {'title': {'type': 'string'}}}},
            components={'shared.link': {'attributes': {'url': {'type': 'string'}}}},
        )
        registry.get_model('article').global_id  # 'Article'
    """

    def __init__(self):
        self._models: Dict[Tuple[Optional[str], str], Model] = {}
        self._components: Dict[str, Model] = {}
        self._global_ids: Dict[str, str] = {}

    @classmethod
    def from_definitions(
        cls,
        *,
        models: Optional[Mapping[str, Mapping[str, Any]]] = None,
        components: Optional[Mapping[str, Mapping[str, Any]]] = None,
        plugins: Optional[Mapping[str, Mapping[str, Mapping[str, Any]]]] = None,
    ) -> 'ModelRegistry':
        registry = cls()
        for uid, definition in (components or {}).items():
            comp = Model.from_dict(uid, {'kind': 'component', **definition})
            comp.uid = uid
            registry.register_component(comp)
        for plugin_name, plugin_models in (plugins or {}).items():
            for name, definition in plugin_models.items():
                registry.register(Model.from_dict(name, definition, plugin=plugin_name))
        for name, definition in (models or {}).items():
            registry.register(Model.from_dict(name, definition))
        return registry

    def _claim_global_id(self, model: Model, label: str) -> None:
        owner = self._global_ids.get(model.global_id)
        if owner is not None and owner != label:
            raise DuplicateTypeError(model.global_id, owner, label)
        self._global_ids[model.global_id] = label

    def register(self, model: Model) -> Model:
        label = f"{model.plugin}::{model.name}" if model.plugin else model.name
        self._claim_global_id(model, label)
        self._models[(model.plugin, model.name)] = model
        return model

    def register_component(self, component: Model) -> Model:
        uid = component.uid or component.name
        component.uid = uid
        self._claim_global_id(component, f"component::{uid}")
        self._components[uid] = component
        return component

    def get_model(self, name: str, plugin: Optional[str] = None) -> Model:
        if plugin is not None:
            found = self._models.get((plugin, name))
            if found is not None:
                return found
        found = self._models.get((None, name))
        if found is None:
            raise UnknownModelError(name, plugin)
        return found

    def get_component(self, uid: str) -> Model:
        found = self._components.get(uid)
        if found is None:
            raise UnknownModelError(uid)
        return found

    def models(self) -> Iterator[Model]:
        return iter(list(self._models.values()))

    def components(self) -> Iterator[Model]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._models) + len(self._components)
