"""Operator input types exposed by condition types.

Each operator is an input object whose fields describe one comparison
against a leaf type. Operators are declarative only: applying them to a query
is left to the consumer.
"""
from __future__ import annotations

import abc
import re
from typing import Any, Dict, Type

from graphql import (
    GraphQLBoolean,
    GraphQLID,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLLeafType,
    GraphQLList,
    GraphQLNonNull,
)

from ..naming import lcfirst

__all__ = [
    "AbstractOperator",
    "BetweenOperatorType",
    "EmptyOperatorType",
    "EqualOperatorType",
    "GreaterOperatorType",
    "GreaterOrEqualOperatorType",
    "GroupOperatorType",
    "HaveOperatorType",
    "InOperatorType",
    "LessOperatorType",
    "LessOrEqualOperatorType",
    "LikeOperatorType",
    "NullOperatorType",
    "operator_type_name",
    "operator_field_name",
]


def operator_type_name(operator: Type["AbstractOperator"], leaf_type: GraphQLLeafType) -> str:
    """GraphQL name of an operator instance, e.g. ``EqualOperatorString``."""
    return re.sub(r"Type$", "", operator.__name__) + leaf_type.name


def operator_field_name(operator: Type["AbstractOperator"]) -> str:
    """Field name of an operator inside a condition, e.g. ``greaterOrEqual``."""
    return lcfirst(re.sub(r"OperatorType$", "", operator.__name__))


def _not_field() -> GraphQLInputField:
    return GraphQLInputField(GraphQLBoolean, default_value=False)


class AbstractOperator(GraphQLInputObjectType, abc.ABC):
    """Base class of all operators, built-in and custom.

    Subclasses return their fields from :meth:`get_configuration`. Custom
    operators are declared on entities with ``api.filter(...)``.
    """

    def __init__(self, types: Any, leaf_type: GraphQLLeafType):
        self.types = types
        self.leaf_type = leaf_type
        config = self.get_configuration(leaf_type)
        super().__init__(
            name=operator_type_name(type(self), leaf_type),
            fields=config["fields"],
            description=config.get("description"),
        )

    @abc.abstractmethod
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        """Return ``{"fields": {...}, "description": ...}`` for this leaf type."""


class _ValueOperator(AbstractOperator):
    summary = ""

    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": self.summary,
            "fields": {
                "value": GraphQLInputField(GraphQLNonNull(leaf_type)),
                "not": _not_field(),
            },
        }


class BetweenOperatorType(AbstractOperator):
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": "Value is within the inclusive range",
            "fields": {
                "from": GraphQLInputField(GraphQLNonNull(leaf_type)),
                "to": GraphQLInputField(GraphQLNonNull(leaf_type)),
                "not": _not_field(),
            },
        }


class EmptyOperatorType(AbstractOperator):
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": "Association has no related entity",
            "fields": {"not": _not_field()},
        }


class EqualOperatorType(_ValueOperator):
    summary = "Value is equal"


class GreaterOperatorType(_ValueOperator):
    summary = "Value is strictly greater"


class GreaterOrEqualOperatorType(_ValueOperator):
    summary = "Value is greater or equal"


class LessOperatorType(_ValueOperator):
    summary = "Value is strictly less"


class LessOrEqualOperatorType(_ValueOperator):
    summary = "Value is less or equal"


class LikeOperatorType(_ValueOperator):
    summary = "Value matches the pattern, `%` is a wildcard"


class GroupOperatorType(AbstractOperator):
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": "Group results by this field",
            "fields": {
                "value": GraphQLInputField(
                    GraphQLBoolean,
                    default_value=True,
                    description="This field is never used and can be ignored",
                ),
            },
        }


class HaveOperatorType(AbstractOperator):
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": "Association contains at least one of the given entities",
            "fields": {
                "values": GraphQLInputField(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLID)))),
                "not": _not_field(),
            },
        }


class InOperatorType(AbstractOperator):
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": "Value is one of the given values",
            "fields": {
                "values": GraphQLInputField(GraphQLNonNull(GraphQLList(GraphQLNonNull(leaf_type)))),
                "not": _not_field(),
            },
        }


class NullOperatorType(AbstractOperator):
    def get_configuration(self, leaf_type: GraphQLLeafType) -> Dict[str, Any]:
        return {
            "description": "Value is null",
            "fields": {"not": _not_field()},
        }
