from graphql import GraphQLInt, Undefined

from ormgql import api
from ormgql.annotations import Argument, Field, Filters, Input
from tests.models import AbstractModel, ModuloOperatorType, Post, User


def test_default_value_is_tri_state():
    unset = Input()
    assert not unset.has_default_value()
    assert unset.default_value is None
    assert 'default_value' not in unset.to_dict()

    explicit_none = Input(default_value=None)
    assert explicit_none.has_default_value()
    assert explicit_none.to_dict()['default_value'] is None


def test_type_instance_is_preset_for_graphql_types():
    assert Argument(type=GraphQLInt).type_instance is GraphQLInt
    assert Argument(type='int').type_instance is None


def test_input_to_dict_defaults_updatable():
    data = Input(name='title', description='d').to_dict()
    assert data == {'name': 'title', 'type': None, 'description': 'd', 'method': None, 'updatable': True}
    assert Input(updatable=False).to_dict()['updatable'] is False


def test_field_to_dict_keys_args_by_name():
    field = Field(name='summary', args=[Argument(name='length', default_value=3)])
    data = field.to_dict()
    assert data['name'] == 'summary'
    assert data['args'] == {'length': {'name': 'length', 'type': None, 'description': None, 'default_value': 3}}
    assert data['method'] is None


def test_copy_does_not_share_arguments():
    field = Field(args=[Argument(name='length')])
    clone = field.copy()
    clone.args[0].description = 'changed'
    clone.name = 'other'
    assert field.args[0].description is None
    assert field.name is None


def test_decorators_attach_annotations():
    annotations = api.own_annotations(Post.get_content)
    assert len(annotations) == 1
    assert isinstance(annotations[0], Field)
    assert annotations[0].name == 'summary'
    assert [a.name for a in annotations[0].args] == ['length']

    assert isinstance(api.own_annotations(User.set_password)[0], Input)
    assert isinstance(api.own_annotations(User.get_password)[0], api.Exclude)


def test_stacked_filters_keep_declaration_order():
    filters = [a for a in api.own_annotations(Post) if isinstance(a, Filters)]
    assert len(filters) == 1
    assert [f.field for f in filters[0].filters] == ['custom', 'views']


def test_class_annotations_are_not_inherited():
    own = api.own_annotations(AbstractModel)
    assert [f.field for f in own[0].filters] == ['id']
    assert not api.own_annotations(User)


def test_filters_decorator_declares_several():
    @api.filters(
        api.Filter(field='a', operator=ModuloOperatorType, type='int'),
        api.Filter(field='b', operator=ModuloOperatorType, type='int'),
    )
    class Something:
        pass

    (declared,) = api.own_annotations(Something)
    assert [f.field for f in declared.filters] == ['a', 'b']


def test_info_builds_sqlalchemy_info_dict():
    exclude = api.Exclude()
    info = api.info(exclude, comment='kept')
    assert info == {'comment': 'kept', api.INFO_KEY: [exclude]}


def test_argument_helper():
    arg = api.argument('length', type='int', description='Max')
    assert isinstance(arg, Argument)
    assert (arg.name, arg.type, arg.description, arg.has_default_value()) == ('length', 'int', 'Max', False)
    assert api.argument('x', default_value=Undefined).has_default_value() is False
