"""Shared model definitions for modelql tests.

Mirrors a small blog: articles with components, a dynamic zone, plain and
polymorphic relations, a plugin-owned user model and a single type.
"""
from __future__ import annotations

from modelql import ModelRegistry

COMPONENTS = {
    'shared.link': {
        'info': {'description': 'External link'},
        'attributes': {
            'url': {'type': 'string', 'required': True},
            'label': {'type': 'string'},
        },
    },
    'shared.quote': {
        'attributes': {
            'text': {'type': 'text', 'required': True},
            'author': {'type': 'string'},
        },
    },
}

PLUGIN_MODELS = {
    'users-permissions': {
        'user': {
            'globalId': 'UsersPermissionsUser',
            'attributes': {
                'username': {'type': 'string', 'required': True},
                'password': {'type': 'password', 'private': True},
            },
        },
    },
}

MODELS = {
    'article': {
        'globalId': 'Article',
        'info': {'description': 'Blog articles'},
        'attributes': {
            'title': {'type': 'string', 'required': True, 'description': 'Headline'},
            'status': {'type': 'enumeration', 'enum': ['draft', 'published'], 'required': True, 'default': 'draft'},
            'rating': {'type': 'integer', 'required': True},
            'word_count': {'type': 'biginteger'},
            'body': {'type': 'richtext'},
            'published_at': {'type': 'datetime'},
            'legacy_code': {'type': 'string', 'deprecated': 'Use slug instead'},
            'links': {'type': 'component', 'component': 'shared.link', 'repeatable': True, 'required': True},
            'seo_link': {'type': 'component', 'component': 'shared.link'},
            'content': {'type': 'dynamiczone', 'components': ['shared.link', 'shared.quote']},
            'author': {'model': 'user', 'plugin': 'users-permissions'},
            'tags': {'collection': 'tag'},
            'related': {'model': '*'},
            'internal_notes': {'type': 'text', 'private': True},
        },
    },
    'tag': {
        'globalId': 'Tag',
        'attributes': {
            'name': {'type': 'string', 'required': True},
            'articles': {'collection': 'article'},
        },
    },
    'homepage': {
        'globalId': 'Homepage',
        'kind': 'singleType',
        'attributes': {
            'headline': {'type': 'string', 'required': True},
        },
    },
    'secret_box': {
        'globalId': 'SecretBox',
        'attributes': {
            'code': {'type': 'string', 'required': True},
        },
    },
}


def build_registry() -> ModelRegistry:
    return ModelRegistry.from_definitions(models=MODELS, components=COMPONENTS, plugins=PLUGIN_MODELS)


registry = build_registry()
