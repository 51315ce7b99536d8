from __future__ import annotations

from typing import Any, Dict, Optional, Type

from graphql import GraphQLError, GraphQLScalarType
from graphql.language import ast as gql_ast
from sqlalchemy import inspect as sa_inspect

__all__ = ["EntityID", "EntityIDType"]


class EntityID:
    """Reference to an entity by its identifier, loaded only when needed.

    Arguments typed with an ``<Entity>ID`` scalar are parsed into this class;
    the default field resolver calls :meth:`get_entity` before handing the
    value to the getter.
    """

    def __init__(self, session: Any, class_: Type[Any], id: Any):
        self.session = session
        self.class_ = class_
        self.id = id

    def get_id(self) -> Any:
        return self.id

    def get_entity(self) -> Any:
        if self.session is None:
            raise GraphQLError(
                f"Cannot load `{self.class_.__name__}` with ID `{self.id}`: no session was given to the type registry."
            )
        entity = self.session.get(self.class_, self._coerce_id(self.id))
        if entity is None:
            raise GraphQLError(f"Entity not found for class `{self.class_.__name__}` and ID `{self.id}`.")
        return entity

    def _coerce_id(self, value: Any) -> Any:
        mapper = sa_inspect(self.class_)
        column = mapper.primary_key[-1]
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return value
        if python_type in (int, float) and isinstance(value, str):
            return python_type(value)
        return value

    def __repr__(self) -> str:
        return f"EntityID({self.class_.__name__}, {self.id!r})"


class EntityIDType(GraphQLScalarType):
    """Scalar accepting the ID of an entity where an entity is expected as input."""

    def __init__(self, session: Any, class_: Type[Any], name: str):
        self.session = session
        self.class_ = class_
        super().__init__(
            name=name,
            description=f"Automatically generated type to be used as input where an object of type `{class_.__name__}` is needed",
        )

    def serialize(self, value: Any) -> str:
        if isinstance(value, EntityID):
            return str(value.get_id())
        if isinstance(value, self.class_):
            identity = sa_inspect(value).identity
            if not identity:
                raise GraphQLError(f"Cannot serialize a transient `{self.class_.__name__}` as `{self.name}`.")
            return str(identity[-1])
        return str(value)

    def parse_value(self, value: Any) -> EntityID:
        if not isinstance(value, (str, int)) or isinstance(value, bool):
            raise GraphQLError(f"{self.name} cannot represent value: {value!r}")
        return EntityID(self.session, self.class_, value)

    def parse_literal(self, value_node: gql_ast.ValueNode, _variables: Optional[Dict[str, Any]] = None) -> EntityID:
        if isinstance(value_node, (gql_ast.StringValueNode, gql_ast.IntValueNode)):
            return EntityID(self.session, self.class_, value_node.value)
        raise GraphQLError(f"{self.name} cannot represent a non-string and non-integer literal", value_node)
