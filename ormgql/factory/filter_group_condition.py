"""Condition input types, describing the filters available on an entity.

For an entity ``Post`` the generated ``PostFilterGroupCondition`` has one
field per mapped property and association, each an input object listing the
operators applicable to it::

    input PostFilterGroupCondition {
      title: PostFilterGroupConditionTitle
      author: PostFilterGroupConditionAuthor
      comments: PostFilterGroupConditionComments
    }

    input PostFilterGroupConditionTitle {
      like: LikeOperatorString
      equal: EqualOperatorString
      ...
    }
"""
from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, List, Tuple, Type

from graphql import (
    GraphQLID,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLLeafType,
    GraphQLList,
    GraphQLNonNull,
    get_named_type,
    is_leaf_type,
)

from ..annotations import Exclude, FilterGroupCondition, Filters
from ..definition.operators import (
    AbstractOperator,
    BetweenOperatorType,
    EmptyOperatorType,
    EqualOperatorType,
    GreaterOperatorType,
    GreaterOrEqualOperatorType,
    GroupOperatorType,
    HaveOperatorType,
    InOperatorType,
    LessOperatorType,
    LessOrEqualOperatorType,
    LikeOperatorType,
    NullOperatorType,
    operator_field_name,
)
from ..exceptions import OrmGqlError
from ..metadata import FieldMapping, get_class_metadata
from ..naming import ucfirst
from ..utils import full_name, get_recursive_class_annotations
from .base import AbstractFactory

logger = logging.getLogger(__name__)

__all__ = ["FilterGroupConditionTypeFactory"]

OperatorMap = Dict[Type[AbstractOperator], GraphQLLeafType]
CustomOperators = Dict[str, List[Tuple[Type[AbstractOperator], Any]]]

# Operators of scalars and single-valued associations
_COMPARISON_OPERATORS = (
    BetweenOperatorType,
    EqualOperatorType,
    GreaterOperatorType,
    GreaterOrEqualOperatorType,
    InOperatorType,
    LessOperatorType,
    LessOrEqualOperatorType,
    NullOperatorType,
    GroupOperatorType,
)


class FilterGroupConditionTypeFactory(AbstractFactory):
    """Create the condition input type of an entity."""

    def create(self, class_: Type[Any], type_name: str) -> GraphQLInputObjectType:
        def fields() -> Dict[str, GraphQLInputField]:
            configurations = self.get_field_configurations(class_, type_name)
            return {c["name"]: GraphQLInputField(c["type"]) for c in configurations}

        return GraphQLInputObjectType(
            name=type_name,
            description="Type to specify conditions on fields",
            fields=fields,
        )

    def get_field_configurations(self, class_: Type[Any], type_name: str) -> List[Dict[str, Any]]:
        """One ``{name, type}`` per filterable field of the entity."""
        metadata = get_class_metadata(class_)
        custom_operators = self.read_custom_operators(class_)
        configurations: List[Dict[str, Any]] = []

        for mapping in metadata.field_mappings.values():
            prop = metadata.get_property(mapping.field_name)
            if self.reader.get_property_annotation(prop, Exclude) is not None:
                continue
            leaf_type = self.get_leaf_type(prop, mapping)
            operators = self.get_operators(custom_operators, mapping.field_name, leaf_type, False, False)
            configurations.append(self.get_field_configuration(type_name, mapping.field_name, operators))

        for association in metadata.association_mappings.values():
            operators = self.get_operators(
                custom_operators, association.field_name, GraphQLID, True, association.is_collection
            )
            configurations.append(self.get_field_configuration(type_name, association.field_name, operators))

        # Whatever is left is declared on fields that are not mapped
        for field_name, declared in custom_operators.items():
            operators = {operator: self.get_custom_leaf_type(operator, declaration) for operator, declaration in declared}
            configurations.append(self.get_field_configuration(type_name, field_name, operators))

        logger.debug(f"Built {len(configurations)} condition fields for {type_name}")
        return configurations

    def get_leaf_type(self, prop: Any, mapping: FieldMapping) -> GraphQLLeafType:
        """Leaf type of a mapped property, either from its column type or from ``FilterGroupCondition``."""
        if mapping.id:
            return GraphQLID

        annotation = self.reader.get_property_annotation(prop, FilterGroupCondition)
        if annotation is not None:
            leaf_type = self.get_type_from_declaration(prop.parent.class_, annotation.type)
            if leaf_type is not None:
                named = get_named_type(leaf_type)
                if not is_leaf_type(named):
                    raise OrmGqlError(
                        f"On property `{full_name(prop.parent.class_)}.{prop.key}` the annotation `FilterGroupCondition` "
                        f"expects a, possibly wrapped, leaf type, but instead got: {type(named).__name__}"
                    )
                return named

        return self.types.get(mapping.type)

    def get_field(self, class_: Type[Any]) -> Dict[str, Any]:
        """The ``conditions`` field accepting a list of condition types."""
        return {
            "name": "conditions",
            "description": "Conditions to be applied on fields",
            "type": GraphQLList(GraphQLNonNull(self.types.get_filter_group_condition(class_))),
        }

    def read_custom_operators(self, class_: Type[Any]) -> CustomOperators:
        """Custom operators declared on the class and its ancestors, by field name."""
        all_filters: Dict[str, Filters] = get_recursive_class_annotations(self.reader, class_, Filters)
        custom_operators: CustomOperators = {}
        for owner_name, filters in all_filters.items():
            for declared in filters.filters:
                operator = self.resolve_operator(owner_name, declared.operator)
                custom_operators.setdefault(declared.field, []).append((operator, declared.type))
        return custom_operators

    def resolve_operator(self, owner_name: str, operator: Any) -> Type[AbstractOperator]:
        if isinstance(operator, str) and "." in operator:
            module_path, _, attribute = operator.rpartition(".")
            try:
                operator = getattr(importlib.import_module(module_path), attribute)
            except (ImportError, AttributeError) as e:
                raise OrmGqlError(
                    f"On class `{owner_name}` the annotation `api.filter()` references `{operator}` which cannot be imported: {e}"
                ) from e

        if not (isinstance(operator, type) and issubclass(operator, AbstractOperator)):
            raise OrmGqlError(
                f"On class `{owner_name}` the annotation `api.filter()` expects a class inheriting from "
                f"`{full_name(AbstractOperator)}`, but instead got: {operator!r}"
            )
        return operator

    def get_custom_leaf_type(self, operator: Type[AbstractOperator], declaration: Any) -> GraphQLLeafType:
        leaf_type = self.types.get(declaration)
        if not is_leaf_type(leaf_type):
            raise OrmGqlError(
                f"The custom operator `{full_name(operator)}` expects a leaf type, but instead got: {type(leaf_type).__name__}"
            )
        return leaf_type

    def get_operators(
        self,
        custom_operators: CustomOperators,
        field_name: str,
        leaf_type: GraphQLLeafType,
        is_association: bool,
        is_collection: bool,
    ) -> OperatorMap:
        """Operators applicable to one field, custom ones included.

        Custom operators of the field are consumed from ``custom_operators``,
        whether declared under the Python name or the GraphQL name of the field.
        """
        keys: List[Type[AbstractOperator]] = []
        if not is_association and not is_collection:
            keys.append(LikeOperatorType)
        if is_association:
            keys.extend((HaveOperatorType, EmptyOperatorType))
        if not is_collection:
            keys.extend(_COMPARISON_OPERATORS)

        operators: OperatorMap = {key: leaf_type for key in keys}
        declared = custom_operators.pop(field_name, [])
        graphql_name = self.types.config.apply_naming_config(field_name)
        if graphql_name != field_name:
            declared = declared + custom_operators.pop(graphql_name, [])

        for operator, declaration in declared:
            operators[operator] = self.get_custom_leaf_type(operator, declaration)
        return operators

    def get_field_configuration(self, type_name: str, field_name: str, operators: OperatorMap) -> Dict[str, Any]:
        name = self.types.config.apply_naming_config(field_name)
        return {"name": name, "type": self.get_field_type(type_name, name, operators)}

    def get_field_type(self, type_name: str, field_name: str, operators: OperatorMap) -> GraphQLInputObjectType:
        field_type = GraphQLInputObjectType(
            name=type_name + ucfirst(field_name),
            description="Type to specify a condition on a specific field",
            fields=self.get_operator_configuration(operators),
        )
        self.types.register_instance(field_type)
        return field_type

    def get_operator_configuration(self, operators: OperatorMap) -> Dict[str, GraphQLInputField]:
        return {
            operator_field_name(operator): GraphQLInputField(self.types.get_operator(operator, leaf_type))
            for operator, leaf_type in operators.items()
        }
