"""Scalars beyond the GraphQL built-ins, and the mappings of Python and
SQLAlchemy types onto GraphQL leaf types."""
from __future__ import annotations

import uuid as _py_uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from graphql import (
    GraphQLBoolean,
    GraphQLError,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)
from graphql.language import ast as gql_ast
from sqlalchemy import Enum as SAEnumType
from sqlalchemy import Uuid as SAUuid
from sqlalchemy.sql.sqltypes import Boolean, Date, DateTime, Integer, Numeric, String, Time
from sqlalchemy.types import TypeDecorator, TypeEngine

__all__ = [
    "GraphQLDateTime",
    "GraphQLDate",
    "GraphQLTime",
    "GraphQLUUID",
    "BUILTIN_SCALARS",
    "PYTHON_SCALARS",
    "PYTHON_NAMES",
    "sa_python_type",
]


def _iso_serializer(kind: type, name: str) -> Callable[[Any], str]:
    def serialize(value: Any) -> str:
        if isinstance(value, kind):
            return value.isoformat()
        if isinstance(value, str):
            return value
        raise GraphQLError(f"{name} cannot represent value: {value!r}")

    return serialize


def _iso_parser(kind: Any, name: str) -> Callable[[Any], Any]:
    def parse_value(value: Any) -> Any:
        if isinstance(value, kind):
            return value
        if not isinstance(value, str):
            raise GraphQLError(f"{name} cannot represent non-string value: {value!r}")
        try:
            if kind is datetime and value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return kind.fromisoformat(value)
        except ValueError as e:
            raise GraphQLError(f"{name} cannot represent value: {value!r}") from e

    return parse_value


def _string_literal_parser(parse_value: Callable[[Any], Any], name: str):
    def parse_literal(ast: gql_ast.ValueNode, _variables: Optional[Dict[str, Any]] = None) -> Any:
        if isinstance(ast, gql_ast.StringValueNode):
            return parse_value(ast.value)
        raise GraphQLError(f"{name} cannot represent a non-string literal", ast)

    return parse_literal


def _scalar(name: str, kind: Any, description: str) -> GraphQLScalarType:
    parse_value = _iso_parser(kind, name)
    return GraphQLScalarType(
        name=name,
        description=description,
        serialize=_iso_serializer(kind, name),
        parse_value=parse_value,
        parse_literal=_string_literal_parser(parse_value, name),
    )


GraphQLDateTime = _scalar("DateTime", datetime, "An ISO 8601 encoded date and time, e.g. `2020-01-31T14:30:00+00:00`.")
GraphQLDate = _scalar("Date", date, "An ISO 8601 encoded date, e.g. `2020-01-31`.")
GraphQLTime = _scalar("Time", time, "An ISO 8601 encoded time, e.g. `14:30:00`.")


def _serialize_uuid(value: Any) -> str:
    if isinstance(value, (_py_uuid.UUID, str)):
        return str(value)
    raise GraphQLError(f"UUID cannot represent value: {value!r}")


def _parse_uuid(value: Any) -> _py_uuid.UUID:
    if isinstance(value, _py_uuid.UUID):
        return value
    try:
        return _py_uuid.UUID(str(value))
    except ValueError as e:
        raise GraphQLError(f"UUID cannot represent value: {value!r}") from e


GraphQLUUID = GraphQLScalarType(
    name="UUID",
    description="A UUID in its canonical textual representation.",
    serialize=_serialize_uuid,
    parse_value=_parse_uuid,
    parse_literal=_string_literal_parser(_parse_uuid, "UUID"),
)

# Scalars every registry starts with, keyed by their GraphQL name
BUILTIN_SCALARS = {
    t.name: t
    for t in (
        GraphQLID,
        GraphQLString,
        GraphQLInt,
        GraphQLFloat,
        GraphQLBoolean,
        GraphQLDateTime,
        GraphQLDate,
        GraphQLTime,
        GraphQLUUID,
    )
}

PYTHON_SCALARS: Dict[type, GraphQLScalarType] = {
    str: GraphQLString,
    int: GraphQLInt,
    float: GraphQLFloat,
    bool: GraphQLBoolean,
    Decimal: GraphQLFloat,
    datetime: GraphQLDateTime,
    date: GraphQLDate,
    time: GraphQLTime,
    _py_uuid.UUID: GraphQLUUID,
}

# Python type names usable in string declarations and docstrings
PYTHON_NAMES: Dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "Decimal": Decimal,
    "datetime": datetime,
    "date": date,
    "time": time,
}


def sa_python_type(sqltype: Any) -> Any:
    """Map a SQLAlchemy column type to a Python type.

    SQLAlchemy ``Enum`` columns map to their Python enum class when there is
    one. Unknown types map to ``str``.
    """
    if isinstance(sqltype, type) and issubclass(sqltype, TypeEngine):
        sqltype = sqltype()
    if isinstance(sqltype, TypeDecorator):
        return sa_python_type(sqltype.impl)
    # Enum is a String subclass, check it first
    if isinstance(sqltype, SAEnumType):
        return sqltype.enum_class or str
    if isinstance(sqltype, Boolean):
        return bool
    if isinstance(sqltype, Integer):
        return int
    if isinstance(sqltype, DateTime):
        return datetime
    if isinstance(sqltype, Date):
        return date
    if isinstance(sqltype, Time):
        return time
    if isinstance(sqltype, Numeric):
        return float
    if isinstance(sqltype, SAUuid):
        return _py_uuid.UUID
    if isinstance(sqltype, String):
        return str
    return str
