from graphql import GraphQLFloat, GraphQLInt, GraphQLString
from sqlalchemy import Column, Integer
from sqlalchemy.orm import DeclarativeBase

from ormgql import OrmGqlConfig, Types, api
from ormgql.scalars import GraphQLDateTime
from tests.models import Comment, Post, User


def _by_name(configurations):
    return {c['name']: c for c in configurations}


def test_getter_without_annotation():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(User))

    name = fields['name']
    assert str(name['type']) == 'String!'
    assert name['method'] == 'get_name'
    assert name['description'] == 'Public display name'
    assert name['args'] == {}


def test_prefixes_is_and_has_are_kept():
    types = Types()
    post_fields = _by_name(types.output_fields_factory.create(Post))
    assert 'isPublished' in post_fields
    assert 'hasComments' in post_fields
    assert str(post_fields['isPublished']['type']) == 'Boolean!'

    user_fields = _by_name(types.output_fields_factory.create(User))
    assert 'isAdministrator' in user_fields


def test_excluded_private_and_static_methods_are_skipped():
    types = Types()
    user_fields = _by_name(types.output_fields_factory.create(User))
    assert 'password' not in user_fields
    assert 'secret' not in user_fields

    post_fields = _by_name(types.output_fields_factory.create(Post))
    assert 'defaultTitle' not in post_fields


def test_fields_cover_inherited_getters():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(User))
    assert set(fields) == {'name', 'email', 'posts', 'isAdministrator', 'id', 'creationDate'}
    assert fields['creationDate']['type'] is GraphQLDateTime
    assert fields['creationDate']['description'] == 'When the record was created'


def test_identity_field_is_non_null_id():
    types = Types()
    for entity in (User, Post, Comment):
        fields = _by_name(types.output_fields_factory.create(entity))
        assert str(fields['id']['type']) == 'ID!'


def test_nullable_return_hint():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(User))
    assert fields['email']['type'] is GraphQLString


def test_collection_uses_association_target():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(Post))
    comments = fields['comments']['type']
    assert str(comments) == '[Comment!]!'
    assert comments.of_type.of_type.of_type is types.get_output(Comment)


def test_collection_without_association_uses_element_hint():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(Post))
    comments_by = fields['commentsBy']
    assert str(comments_by['type']) == '[Comment!]!'
    assert comments_by['description'] == 'Comments written by the given user.'


def test_entity_argument_becomes_entity_id():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(Post))
    user_arg = fields['commentsBy']['args']['user']
    assert user_arg['name'] == 'user'
    assert str(user_arg['type']) == 'UserID!'
    assert user_arg['type'].of_type is types.get_id(User)
    assert user_arg['description'] == 'Author of the comments'


def test_annotation_overrides_and_arguments():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(Post))
    assert 'content' not in fields

    summary = fields['summary']
    assert summary['description'] == 'Beginning of the content'
    assert summary['method'] == 'get_content'
    assert summary['type'] is GraphQLString
    assert list(summary['args']) == ['length', 'ellipsis']

    length = summary['args']['length']
    assert length == {
        'name': 'length',
        'type': GraphQLInt,
        'description': 'Maximum number of characters',
        'default_value': 50,
    }
    ellipsis = summary['args']['ellipsis']
    assert ellipsis['type'] is GraphQLString
    assert ellipsis['default_value'] == '...'
    assert ellipsis['description'] == 'Appended when the content is cut'


def test_annotation_only_overriding_name_keeps_resolution_chain():
    types = Types()
    summary = _by_name(types.output_fields_factory.create(Post))['summary']
    # Type comes from the return hint even though the annotation renames the field
    assert summary['type'] is GraphQLString


def test_docstring_return_type():
    types = Types()
    rating = _by_name(types.output_fields_factory.create(Post))['rating']
    assert rating['type'] is GraphQLFloat
    assert rating['description'] == 'Average rating given by readers.'


def test_enum_and_entity_return_types():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(Post))
    assert str(fields['status']['type']) == 'PostStatus!'
    assert fields['status']['type'].of_type is types.get('PostStatus')
    assert fields['user']['type'] is types.get_output(User)


def test_self_return_hint_resolves_to_entity():
    types = Types()
    fields = _by_name(types.output_fields_factory.create(Comment))
    assert fields['replyTo']['type'] is types.get_output(Comment)
    assert fields['post']['type'] is types.get_output(Post)


def test_names_are_kept_without_camel_case():
    types = Types(config=OrmGqlConfig(auto_camel_case=False))
    fields = _by_name(types.output_fields_factory.create(Post))
    assert 'is_published' in fields
    assert 'comments_by' in fields
    assert 'summary' in fields


def test_annotations_on_methods_are_not_mutated():
    Types().output_fields_factory.create(Post)
    annotation = Post.get_content.__ormgql_annotations__[0]
    assert annotation.type_instance is None
    assert isinstance(annotation.args, list)


class BadgeBase(DeclarativeBase):
    pass


class Badge(BadgeBase):
    __tablename__ = 'badges'

    id = Column(Integer, primary_key=True)

    @api.field(type='str', description='Number printed on the badge')
    def get_id(self) -> int:
        return self.id


def test_identity_field_ignores_annotation_type():
    badge_id = _by_name(Types().output_fields_factory.create(Badge))['id']
    assert str(badge_id['type']) == 'ID!'
    assert badge_id['description'] == 'Number printed on the badge'
