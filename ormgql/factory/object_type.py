from __future__ import annotations

from typing import Any, Dict, Type

from graphql import GraphQLArgument, GraphQLField, GraphQLObjectType, Undefined

from ..docstrings import DocstringReader
from ..utils import get_type_name
from .base import AbstractFactory

__all__ = ["ObjectTypeFactory"]


class ObjectTypeFactory(AbstractFactory):
    """Create the output object type of an entity from its getters.

    Fields are resolved lazily so entities can reference each other. Each
    field records the getter it was generated from in its ``method``
    extension, which the default field resolver tries first.
    """

    def create(self, class_: Type[Any]) -> GraphQLObjectType:
        def fields() -> Dict[str, GraphQLField]:
            configurations = self.types.output_fields_factory.create(class_)
            return {c["name"]: self.to_field(c) for c in configurations}

        return GraphQLObjectType(
            name=get_type_name(class_),
            description=DocstringReader(class_).get_method_description(),
            fields=fields,
        )

    @staticmethod
    def to_field(configuration: Dict[str, Any]) -> GraphQLField:
        args = {
            arg["name"]: GraphQLArgument(
                arg["type"],
                default_value=arg.get("default_value", Undefined),
                description=arg["description"],
                out_name=parameter_name,
            )
            for parameter_name, arg in configuration["args"].items()
        }
        return GraphQLField(
            configuration["type"],
            args=args,
            description=configuration["description"],
            extensions={"method": configuration["method"]},
        )
