from __future__ import annotations

from typing import Any, Dict, List, Type

from graphql import GraphQLInputField, GraphQLInputObjectType, Undefined, get_nullable_type

from ..docstrings import DocstringReader
from ..utils import get_type_name
from .base import AbstractFactory

__all__ = ["InputTypeFactory", "PartialInputTypeFactory"]


class InputTypeFactory(AbstractFactory):
    """Create the input type of an entity from its setters, e.g. ``PostInput``."""

    def type_name(self, class_: Type[Any]) -> str:
        return get_type_name(class_) + self.types.config.input_suffix

    def create(self, class_: Type[Any]) -> GraphQLInputObjectType:
        def fields() -> Dict[str, GraphQLInputField]:
            configurations = self.select(self.types.input_fields_factory.create(class_))
            return {c["name"]: self.to_field(c) for c in configurations}

        return GraphQLInputObjectType(
            name=self.type_name(class_),
            description=DocstringReader(class_).get_method_description(),
            fields=fields,
        )

    def select(self, configurations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return configurations

    def to_field(self, configuration: Dict[str, Any]) -> GraphQLInputField:
        return GraphQLInputField(
            configuration["type"],
            default_value=configuration.get("default_value", Undefined),
            description=configuration["description"],
            extensions={"method": configuration["method"], "updatable": configuration["updatable"]},
        )


class PartialInputTypeFactory(InputTypeFactory):
    """Input type for updates of existing entities, e.g. ``PostPartialInput``.

    Every field is optional and has no default, so only the fields actually
    given are changed. Fields that are not updatable are left out.
    """

    def type_name(self, class_: Type[Any]) -> str:
        return get_type_name(class_) + self.types.config.partial_input_suffix

    def select(self, configurations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [c for c in configurations if c["updatable"]]

    def to_field(self, configuration: Dict[str, Any]) -> GraphQLInputField:
        return GraphQLInputField(
            get_nullable_type(configuration["type"]),
            description=configuration["description"],
            extensions={"method": configuration["method"], "updatable": True},
        )
