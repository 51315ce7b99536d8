from ormgql import OrmGqlConfig, Types
from ormgql.naming import accessor_candidates, camel_to_snake, is_public_name, snake_to_camel
from tests.models import Post, User


def test_case_conversion():
    assert snake_to_camel('creation_date') == 'creationDate'
    assert snake_to_camel('creation_date', upper_first=True) == 'CreationDate'
    assert camel_to_snake('creationDate') == 'creation_date'
    assert camel_to_snake('creation_date') == 'creation_date'


def test_accessor_candidates_order():
    assert accessor_candidates('isValid')[:2] == ['is_is_valid', 'isIsValid']
    assert accessor_candidates('name') == [
        'is_name', 'isName', 'has_name', 'hasName', 'get_name', 'getName', 'name',
    ]


def test_public_names():
    assert is_public_name('name')
    assert not is_public_name('_name')
    assert not is_public_name('')


def test_name_converter():
    config = OrmGqlConfig(name_converter=lambda name: name.upper())
    assert config.apply_naming_config('is_published') == 'IS_PUBLISHED'
    assert OrmGqlConfig(auto_camel_case=False).apply_naming_config('is_published') == 'is_published'


def test_custom_suffixes():
    types = Types(config=OrmGqlConfig(input_suffix='CreateInput', id_suffix='Ref', filter_group_condition_suffix='Where'))
    assert types.get_input(Post).name == 'PostCreateInput'
    assert types.get_id(User).name == 'UserRef'
    assert types.get_filter_group_condition(Post).name == 'PostWhere'
    assert types.get_filter_group_condition(Post).fields['title'].type.name == 'PostWhereTitle'


def test_converted_names_in_conditions():
    types = Types(config=OrmGqlConfig(auto_camel_case=False))
    fields = types.get_filter_group_condition(Post).fields
    assert 'creation_date' in fields
    assert fields['creation_date'].type.name == 'PostFilterGroupConditionCreation_date'
