import pytest
from sqlalchemy import Column, Integer
from sqlalchemy.orm import DeclarativeBase

from ormgql import Types, api
from ormgql.exceptions import OrmGqlError


class ErrorBase(DeclarativeBase):
    pass


class NoReturnType(ErrorBase):
    __tablename__ = 'no_return_type'
    id = Column(Integer, primary_key=True)

    def get_thing(self):
        return None


class VagueCollection(ErrorBase):
    __tablename__ = 'vague_collection'
    id = Column(Integer, primary_key=True)

    def get_things(self) -> list:
        return []


class ExtraArgument(ErrorBase):
    __tablename__ = 'extra_argument'
    id = Column(Integer, primary_key=True)

    @api.field(args=[api.argument('limit'), api.argument('offset')])
    def get_things(self, limit: int = 10) -> int:
        return limit


class ArrayParameter(ErrorBase):
    __tablename__ = 'array_parameter'
    id = Column(Integer, primary_key=True)

    def set_options(self, options: dict) -> None:
        pass


class ArrayArgumentInDocstring(ErrorBase):
    __tablename__ = 'array_argument_in_docstring'
    id = Column(Integer, primary_key=True)

    def get_things(self, ids) -> int:
        """Things.

        :param list ids: The ids
        """
        return 0


class UntypedParameter(ErrorBase):
    __tablename__ = 'untyped_parameter'
    id = Column(Integer, primary_key=True)

    def set_value(self, value) -> None:
        pass


class OutputTypeAsInput(ErrorBase):
    __tablename__ = 'output_type_as_input'
    id = Column(Integer, primary_key=True)

    @api.input(type='OutputTypeAsInput')
    def set_parent(self, parent) -> None:
        pass


class UnresolvableHint(ErrorBase):
    __tablename__ = 'unresolvable_hint'
    id = Column(Integer, primary_key=True)

    def get_thing(self) -> 'DoesNotExist':  # noqa: F821
        return None


class UnknownDeclaration(ErrorBase):
    __tablename__ = 'unknown_declaration'
    id = Column(Integer, primary_key=True)

    @api.field(type='DoesNotExist')
    def get_thing(self):
        return None


class UnionDeclaration(ErrorBase):
    __tablename__ = 'union_declaration'
    id = Column(Integer, primary_key=True)

    @api.field(type='Union[int, str]')
    def get_thing(self):
        return None


class NotMapped:
    def get_thing(self) -> int:
        return 1


def output(entity):
    return Types().output_fields_factory.create(entity)


def inputs(entity):
    return Types().input_fields_factory.create(entity)


def test_missing_return_type():
    with pytest.raises(OrmGqlError, match=r'Could not find type for method `.*NoReturnType\.get_thing\(\)`. Either type hint the return value, or specify the type with `api\.field\(\)`'):
        output(NoReturnType)


def test_collection_without_entity():
    with pytest.raises(OrmGqlError, match=r'could not be automatically detected'):
        output(VagueCollection)


def test_extra_annotation_arguments():
    with pytest.raises(OrmGqlError, match=r'do not match actual parameter names .* offset$'):
        output(ExtraArgument)


def test_array_parameter():
    with pytest.raises(OrmGqlError, match=r'The parameter `options` .* is type hinted as `dict` and is not overridden via `api\.input\(\)`'):
        inputs(ArrayParameter)


def test_array_argument_from_docstring():
    with pytest.raises(OrmGqlError, match=r'The parameter `ids` .* is not overridden via `api\.argument\(\)`'):
        output(ArrayArgumentInDocstring)


def test_untyped_parameter():
    with pytest.raises(OrmGqlError, match=r'Could not find type for parameter `value`.*specify the type with `api\.input\(\)`'):
        inputs(UntypedParameter)


def test_output_type_used_as_input():
    with pytest.raises(OrmGqlError, match=r'must be an input type'):
        inputs(OutputTypeAsInput)


def test_unresolvable_hint():
    with pytest.raises(OrmGqlError, match=r'Cannot evaluate type hints'):
        output(UnresolvableHint)


def test_unknown_declaration():
    with pytest.raises(OrmGqlError, match=r'No type registered with key `DoesNotExist`'):
        output(UnknownDeclaration)


def test_union_declaration():
    with pytest.raises(OrmGqlError, match=r'Union types are not supported'):
        output(UnionDeclaration)


def test_unmapped_class():
    with pytest.raises(OrmGqlError, match=r'`NotMapped` is not a class mapped by SQLAlchemy'):
        output(NotMapped)
