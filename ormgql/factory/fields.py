"""Turn the accessor methods of an entity into field configurations.

Subclasses decide which methods qualify (getters or setters) and how one
method becomes one field configuration; the walk over the class, the
exclusion rules and the type helpers are shared here.
"""
from __future__ import annotations

import abc
import logging
import re
import typing
from typing import Any, Dict, List, Optional, Pattern, Type

from graphql import GraphQLList, GraphQLNonNull, GraphQLType, get_named_type, is_input_type

from ..annotations import AbstractAnnotation, Exclude
from ..exceptions import OrmGqlError
from ..metadata import ClassMetadata, get_class_metadata
from ..reflection import MISSING, ReflectedMethod, iter_public_methods
from .base import AbstractFactory, is_collection_hint, is_mapping_hint, split_optional_hint

logger = logging.getLogger(__name__)

__all__ = ["AbstractFieldsConfigurationFactory"]

# Declarations too vague to become a GraphQL type on their own
_ARRAY_DECLARATIONS = {"list", "List", "dict", "Dict", "array", "tuple", "Tuple", "set", "Set", "Mapping"}


class AbstractFieldsConfigurationFactory(AbstractFactory, abc.ABC):
    """Build a list of field configurations from the methods of an entity."""

    def __init__(self, types: Any):
        super().__init__(types)
        self.metadata: Optional[ClassMetadata] = None
        self.identity_field: Optional[str] = None

    @abc.abstractmethod
    def get_method_pattern(self) -> Pattern[str]:
        """Pattern a method name must match to be considered."""

    @abc.abstractmethod
    def method_to_configuration(self, method: ReflectedMethod) -> Optional[Dict[str, Any]]:
        """Configuration of one field, or ``None`` to skip the method."""

    def create(self, class_: Type[Any]) -> List[Dict[str, Any]]:
        self.find_identity_field(class_)
        pattern = self.get_method_pattern()

        configurations: List[Dict[str, Any]] = []
        for method in iter_public_methods(class_):
            if not pattern.match(method.name):
                continue
            if self.is_excluded(method):
                logger.debug(f"Skipping excluded method {method.full_name}")
                continue
            configuration = self.method_to_configuration(method)
            if configuration is not None:
                configurations.append(configuration)

        logger.debug(f"{type(self).__name__} built {len(configurations)} fields for {class_.__name__}")
        return configurations

    def find_identity_field(self, class_: Type[Any]) -> None:
        self.metadata = get_class_metadata(class_)
        self.identity_field = None
        for mapping in self.metadata.field_mappings.values():
            if mapping.id:
                self.identity_field = mapping.field_name

    def is_identity_field(self, field_name: str) -> bool:
        return field_name == self.identity_field

    def is_excluded(self, method: ReflectedMethod) -> bool:
        return self.reader.get_method_annotation(method.function, Exclude) is not None

    def self_class(self, owner: type) -> type:
        return self.metadata.name if self.metadata is not None else owner

    def get_property_default_value(self, field_name: str) -> Any:
        return self.metadata.get_property_default_value(field_name)

    def get_type_from_return_type_hint(self, method: ReflectedMethod, field_name: str) -> Optional[GraphQLType]:
        """Type of a getter from its return hint.

        Collections need the association mapping to know their entity; a
        concrete element type in the hint is the fallback.
        """
        hint = method.return_hint
        if hint is MISSING:
            return None

        nullable, inner = split_optional_hint(hint)
        if inner is not None and is_collection_hint(inner):
            target = None
            if self.metadata.is_collection_valued_association(field_name):
                target = self.metadata.get_target_entity(field_name)
            if target is not None:
                graphql_type: Optional[GraphQLType] = GraphQLList(GraphQLNonNull(self.get_type_from_registry(target)))
            else:
                graphql_type = self.reflection_type_to_type(method, inner)
            if graphql_type is None:
                raise OrmGqlError(
                    f"The method {method.full_name} is type hinted with a return type of `{_hint_name(hint)}`, "
                    "but the entity contained in that collection could not be automatically detected. "
                    "Either fix the type hint, fix the SQLAlchemy mapping, or specify the type with `api.field()`."
                )
            return graphql_type if nullable else GraphQLNonNull(graphql_type)

        return self.reflection_type_to_type(method, hint)

    def reflection_type_to_type(self, method: ReflectedMethod, hint: Any, is_entity_id: bool = False) -> Optional[GraphQLType]:
        return self.hint_to_type(method.owner, hint, is_entity_id)

    def throw_if_array(self, method: ReflectedMethod, param_name: str, declaration: Any, annotation_name: str) -> None:
        """Refuse parameter types that are collections without an element type."""
        if declaration is None or declaration is MISSING:
            return
        if isinstance(declaration, str):
            vague = declaration.strip() in _ARRAY_DECLARATIONS
        else:
            _, inner = split_optional_hint(declaration)
            vague = inner is not None and (
                is_mapping_hint(inner) or (is_collection_hint(inner) and not typing.get_args(inner))
            )
        if vague:
            raise OrmGqlError(
                f"The parameter `{param_name}` on method {method.full_name} is type hinted as "
                f"`{_hint_name(declaration)}` and is not overridden via `{annotation_name}`. "
                f"Either type hint the parameter with a concrete element type, or specify the type with `{annotation_name}`."
            )

    def nonnull_if_has_default(self, annotation: AbstractAnnotation) -> None:
        """A field with a default value can always be omitted, so it is nullable."""
        if annotation.has_default_value() and isinstance(annotation.type_instance, GraphQLNonNull):
            annotation.type_instance = annotation.type_instance.of_type

    def throw_if_not_input_type(self, method: ReflectedMethod, param_name: str, annotation: AbstractAnnotation) -> None:
        annotation_name = f"api.{type(annotation).__name__.lower()}()"
        if annotation.type_instance is None:
            raise OrmGqlError(
                f"Could not find type for parameter `{param_name}` for method {method.full_name}. "
                f"Either type hint the parameter, or specify the type with `{annotation_name}`."
            )

        named = get_named_type(annotation.type_instance)
        if not is_input_type(named):
            raise OrmGqlError(
                f"Type for parameter `{param_name}` for method {method.full_name} must be an input type, "
                f"but was `{named}` ({type(named).__name__}). Use `{annotation_name}` to specify a custom input type."
            )


def _hint_name(hint: Any) -> str:
    if isinstance(hint, str):
        return hint
    if isinstance(hint, type):
        return hint.__name__
    return re.sub(r"\btyping\.", "", repr(hint))
