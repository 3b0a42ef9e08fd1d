import pytest

from modelql import Attribute, Model, UnknownModelError, convert_enum_type
from modelql.types import CREATE, MUTATION, QUERY, UPDATE


def _convert(type_mapper, definition, root_type=QUERY, action='', field='field', model='Article'):
    return type_mapper.convert_type(
        Attribute.from_dict(definition),
        model_name=model,
        attribute_name=field,
        root_type=root_type,
        action=action,
    )


@pytest.mark.parametrize('kind,expected', [
    ('boolean', 'Boolean'),
    ('integer', 'Int'),
    ('biginteger', 'Long'),
    ('float', 'Float'),
    ('decimal', 'Float'),
    ('json', 'JSON'),
    ('date', 'Date'),
    ('time', 'Time'),
    ('datetime', 'DateTime'),
    ('timestamp', 'DateTime'),
    ('string', 'String'),
    ('richtext', 'String'),
])
def test_scalar_mapping(type_mapper, kind, expected):
    assert _convert(type_mapper, {'type': kind}) == expected


def test_unknown_scalar_kind_falls_back_to_string(type_mapper):
    assert _convert(type_mapper, {'type': 'geo_point'}) == 'String'
    assert _convert(type_mapper, {'type': 'geo_point', 'required': True}) == 'String!'


def test_required_scalar_query_vs_update(type_mapper):
    attr = {'type': 'integer', 'required': True}
    assert _convert(type_mapper, attr) == 'Int!'
    assert _convert(type_mapper, attr, MUTATION, CREATE) == 'Int!'
    assert _convert(type_mapper, attr, MUTATION, '') == 'Int!'
    assert _convert(type_mapper, attr, MUTATION, UPDATE) == 'Int'


def test_default_relaxes_required_in_mutations(type_mapper):
    attr = {'type': 'integer', 'required': True, 'default': 0}
    assert _convert(type_mapper, attr, MUTATION, CREATE) == 'Int'
    assert _convert(type_mapper, attr, MUTATION, '') == 'Int'
    # read types still guarantee the value
    assert _convert(type_mapper, attr) == 'Int!'


def test_none_default_counts_as_default(type_mapper):
    attr = {'type': 'string', 'required': True, 'default': None}
    assert _convert(type_mapper, attr, MUTATION, CREATE) == 'String'


def test_enumeration_naming(type_mapper):
    assert _convert(type_mapper, {'type': 'enumeration'}, field='status') == 'ENUM_ARTICLE_STATUS'
    assert _convert(type_mapper, {'type': 'enumeration', 'required': True}, field='status') == 'ENUM_ARTICLE_STATUS!'
    assert _convert(type_mapper, {'type': 'enumeration', 'enumName': 'Status'}, field='status') == 'Status'


def test_convert_enum_type_direct():
    assert convert_enum_type(Attribute(type='enumeration'), 'blogPost', 'kind') == 'ENUM_BLOGPOST_KIND'


def test_component_repeatable_required(type_mapper):
    attr = {'type': 'component', 'component': 'shared.link', 'repeatable': True, 'required': True}
    assert _convert(type_mapper, attr, MUTATION, CREATE) == '[SharedLinkInput!]'
    assert _convert(type_mapper, attr, MUTATION, UPDATE) == '[editSharedLinkInput]'
    # read side never marks components as non-null
    assert _convert(type_mapper, attr) == '[SharedLink]'


def test_component_single(type_mapper):
    attr = {'type': 'component', 'component': 'shared.link', 'required': True}
    assert _convert(type_mapper, attr) == 'SharedLink'
    assert _convert(type_mapper, attr, MUTATION, CREATE) == 'SharedLinkInput!'
    assert _convert(type_mapper, {'type': 'component', 'component': 'shared.link'}, MUTATION) == 'SharedLinkInput'


def test_dynamic_zone(type_mapper):
    attr = {'type': 'dynamiczone', 'components': ['shared.link']}
    assert _convert(type_mapper, attr, field='content') == '[ArticleContentDynamicZone]'
    assert _convert(type_mapper, attr, MUTATION, field='content') == '[ArticleContentDynamicZoneInput!]'
    required = {'type': 'dynamiczone', 'required': True}
    assert _convert(type_mapper, required, field='hero_section') == '[ArticleHeroSectionDynamicZone]!'
    assert _convert(type_mapper, required, MUTATION, UPDATE, field='hero_section') == '[ArticleHeroSectionDynamicZoneInput!]!'


def test_relations(type_mapper):
    single = {'model': 'tag'}
    plural = {'collection': 'tag'}
    assert _convert(type_mapper, single) == 'Tag'
    assert _convert(type_mapper, plural) == '[Tag]'
    assert _convert(type_mapper, single, MUTATION, CREATE) == 'ID'
    assert _convert(type_mapper, plural, MUTATION, UPDATE) == '[ID]'


def test_plugin_scoped_relation(type_mapper):
    attr = {'model': 'user', 'plugin': 'users-permissions'}
    assert _convert(type_mapper, attr) == 'UsersPermissionsUser'
    assert _convert(type_mapper, attr, MUTATION) == 'ID'


def test_polymorphic_relations(type_mapper):
    assert _convert(type_mapper, {'model': '*'}) == 'Morph'
    assert _convert(type_mapper, {'collection': '*'}) == '[Morph]'
    assert _convert(type_mapper, {'model': '*'}, MUTATION) == 'ID'
    assert _convert(type_mapper, {'collection': '*'}, MUTATION) == '[ID]'


def test_shapeless_attribute_is_treated_as_plural_morph(type_mapper):
    assert _convert(type_mapper, {}) == '[Morph]'
    assert _convert(type_mapper, {}, MUTATION) == '[ID]'


def test_unknown_relation_target_is_fatal(type_mapper):
    with pytest.raises(UnknownModelError):
        _convert(type_mapper, {'model': 'nope'})
    with pytest.raises(UnknownModelError):
        _convert(type_mapper, {'type': 'component', 'component': 'shared.nope'})


def test_uncountable_component_keeps_its_name(registry, type_mapper):
    registry.register_component(Model.from_dict('shared.media', {
        'kind': 'component',
        'attributes': {'url': {'type': 'string'}},
    }))
    attr = {'type': 'component', 'component': 'shared.media', 'repeatable': True, 'required': True}
    assert _convert(type_mapper, attr, MUTATION, CREATE, field='media') == '[SharedMediaInput!]'
    assert _convert(type_mapper, attr, MUTATION, UPDATE, field='media') == '[editSharedMediaInput]'
    assert _convert(type_mapper, attr, field='media') == '[SharedMedia]'
