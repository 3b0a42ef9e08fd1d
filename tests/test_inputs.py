import pytest
from graphql import parse

from modelql import INPUT_ID, FieldVisibility, InputGenerator, Model


def _flat(text: str) -> str:
    return ' '.join(text.split())


def test_input_model_create_and_edit(registry, input_generator):
    out = input_generator.generate_input_model(registry.get_model('article'), 'Article')
    flat = _flat(out)
    assert flat.startswith('input ArticleInput { title: String! status: ENUM_ARTICLE_STATUS rating: Int!')
    assert 'links: [SharedLinkInput!]' in flat
    assert 'seo_link: SharedLinkInput' in flat
    assert 'content: [ArticleContentDynamicZoneInput!]' in flat
    assert 'author: ID' in flat
    assert 'tags: [ID]' in flat
    assert 'related: ID' in flat
    edit = flat.split('input editArticleInput {', 1)[1]
    assert edit.startswith(' title: String status: ENUM_ARTICLE_STATUS rating: Int ')
    assert 'links: [editSharedLinkInput]' in edit
    assert 'id: ID' not in edit


def test_private_attributes_are_not_inputs(registry, input_generator):
    out = input_generator.generate_input_model(registry.get_model('article'), 'Article')
    assert 'internal_notes' not in out


def test_allow_ids_adds_optional_id_to_edit_input(registry, input_generator):
    out = input_generator.generate_input_model(registry.get_component('shared.link'), 'SharedLink', allow_ids=True)
    assert _flat(out) == (
        'input SharedLinkInput { url: String! label: String } '
        'input editSharedLinkInput { id: ID url: String label: String }'
    )


def test_degenerate_model_when_all_fields_disabled(registry, type_mapper):
    generator = InputGenerator(type_mapper, FieldVisibility.from_type_config({'SecretBox': {'code': False}}))
    model = registry.get_model('secret_box')
    assert _flat(generator.generate_input_model(model, 'SecretBox')) == (
        'input SecretBoxInput { _: String } input editSecretBoxInput { _: String }'
    )
    assert _flat(generator.generate_input_model(model, 'SecretBox', allow_ids=True)) == (
        'input SecretBoxInput { _: String } input editSecretBoxInput { id: ID }'
    )


def test_degenerate_model_without_attributes(input_generator):
    out = input_generator.generate_input_model(Model(name='empty', global_id='Empty'), 'Empty')
    assert _flat(out) == 'input EmptyInput { _: String } input editEmptyInput { _: String }'
    parse(out)


def test_visibility_predicate(registry, type_mapper):
    generator = InputGenerator(type_mapper, FieldVisibility(lambda model, name: name != 'body'))
    out = generator.generate_input_model(registry.get_model('article'), 'Article')
    assert 'body' not in out
    assert 'title' in out


def test_payload_create(registry, input_generator):
    out = input_generator.generate_input_payload_arguments(registry.get_model('article'), 'Article', 'createArticle', 'create')
    assert _flat(out) == (
        'input createArticleInput { data: ArticleInput } '
        'type createArticlePayload { article: Article }'
    )


def test_payload_update_collection(registry, input_generator):
    out = input_generator.generate_input_payload_arguments(registry.get_model('article'), 'Article', 'updateArticle', 'update')
    assert _flat(out) == (
        'input updateArticleInput { where: InputID data: editArticleInput } '
        'type updateArticlePayload { article: Article }'
    )


def test_payload_update_single_type(registry, input_generator):
    out = input_generator.generate_input_payload_arguments(registry.get_model('homepage'), 'Homepage', 'updateHomepage', 'update')
    assert _flat(out) == (
        'input updateHomepageInput { data: editHomepageInput } '
        'type updateHomepagePayload { homepage: Homepage }'
    )


def test_payload_delete(registry, input_generator):
    out = input_generator.generate_input_payload_arguments(registry.get_model('article'), 'Article', 'deleteArticle', 'delete')
    assert _flat(out) == (
        'input deleteArticleInput { where: InputID } '
        'type deleteArticlePayload { article: Article }'
    )


def test_payload_delete_single_type_has_no_input(registry, input_generator):
    out = input_generator.generate_input_payload_arguments(registry.get_model('homepage'), 'Homepage', 'deleteHomepage', 'delete')
    assert _flat(out) == 'type deleteHomepagePayload { homepage: Homepage }'
    assert 'input' not in out


def test_payload_unknown_action(registry, input_generator):
    with pytest.raises(ValueError):
        input_generator.generate_input_payload_arguments(registry.get_model('article'), 'Article', 'publishArticle', 'publish')


def test_input_id_shape():
    assert _flat(INPUT_ID) == 'input InputID { id: ID! }'
