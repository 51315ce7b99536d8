"""Registry of all GraphQL types generated for, or used by, the entities.

Every named type is created once and then cached by its name, because a
GraphQL schema must never contain two distinct types sharing a name::

    types = Types(session)
    schema = GraphQLSchema(
        query=GraphQLObjectType("Query", {
            "posts": GraphQLField(GraphQLList(types.get_output(Post)), args={
                "filter": GraphQLArgument(GraphQLList(GraphQLNonNull(types.get_filter_group_condition(Post)))),
            }),
        }),
    )
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Type, Union

from graphql import (
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLInputObjectType,
    GraphQLLeafType,
    GraphQLNamedType,
    GraphQLObjectType,
)
from sqlalchemy.types import TypeEngine

from .config import OrmGqlConfig
from .definition.entity_id import EntityIDType
from .definition.operators import AbstractOperator, operator_type_name
from .docstrings import DocstringReader
from .exceptions import OrmGqlError
from .factory.filter_group_condition import FilterGroupConditionTypeFactory
from .factory.input_fields import InputFieldsConfigurationFactory
from .factory.input_type import InputTypeFactory, PartialInputTypeFactory
from .factory.object_type import ObjectTypeFactory
from .factory.output_fields import OutputFieldsConfigurationFactory
from .metadata import is_entity
from .readers import AttributeReader, Reader
from .scalars import BUILTIN_SCALARS, PYTHON_NAMES, PYTHON_SCALARS, sa_python_type
from .utils import get_type_name

logger = logging.getLogger(__name__)

__all__ = ["Types"]


class Types:
    """Registry and entry point of type generation.

    Args:
        session: SQLAlchemy session used to load entities given by ID as input.
        custom_types: Additional named types, either a mapping of alias to type
            or an iterable of types registered under their own name.
        reader: Annotation reader, :class:`AttributeReader` by default.
        config: Naming options, :class:`OrmGqlConfig` by default.
    """

    def __init__(
        self,
        session: Any = None,
        custom_types: Union[Mapping[str, GraphQLNamedType], Iterable[GraphQLNamedType], None] = None,
        *,
        reader: Optional[Reader] = None,
        config: Optional[OrmGqlConfig] = None,
    ):
        self.session = session
        self.reader: Reader = reader or AttributeReader()
        self.config = config or OrmGqlConfig()
        self._types: Dict[str, GraphQLNamedType] = dict(BUILTIN_SCALARS)
        self._entities: Dict[str, Type[Any]] = {}

        if isinstance(custom_types, Mapping):
            for alias, custom_type in custom_types.items():
                self._types[alias] = custom_type
                self.register_instance(custom_type)
        else:
            for custom_type in custom_types or ():
                self.register_instance(custom_type)

        self.output_fields_factory = OutputFieldsConfigurationFactory(self)
        self.input_fields_factory = InputFieldsConfigurationFactory(self)
        self.object_type_factory = ObjectTypeFactory(self)
        self.input_type_factory = InputTypeFactory(self)
        self.partial_input_type_factory = PartialInputTypeFactory(self)
        self.filter_group_condition_type_factory = FilterGroupConditionTypeFactory(self)

        logger.info(f"Type registry created with {len(self._types)} types")

    def has(self, key: Any) -> bool:
        """Whether :meth:`get` can return a type for ``key``."""
        if isinstance(key, GraphQLNamedType):
            return True
        if isinstance(key, str):
            return key in self._types or key in PYTHON_NAMES
        if isinstance(key, TypeEngine) or (isinstance(key, type) and issubclass(key, TypeEngine)):
            return True
        if isinstance(key, type):
            return key in PYTHON_SCALARS or issubclass(key, enum.Enum) or self.is_entity(key)
        return False

    def get(self, key: Any) -> GraphQLNamedType:
        """Return the named type for a registered name, a Python type, a SQLAlchemy type or an entity.

        Entities give their output type.
        """
        if isinstance(key, GraphQLNamedType):
            self.register_instance(key)
            return key

        if isinstance(key, str):
            if key in self._types:
                return self._types[key]
            if key in PYTHON_NAMES:
                return self.get(PYTHON_NAMES[key])
            raise OrmGqlError(
                f"No type registered with key `{key}`. Either correct the usage, or register it in your custom types."
            )

        if isinstance(key, TypeEngine) or (isinstance(key, type) and issubclass(key, TypeEngine)):
            return self.get(sa_python_type(key))

        if isinstance(key, type):
            if key in PYTHON_SCALARS:
                return PYTHON_SCALARS[key]
            if issubclass(key, enum.Enum):
                return self.get_enum(key)
            if self.is_entity(key):
                return self.get_output(key)

        raise OrmGqlError(f"No GraphQL type for `{key!r}`. Either map it with SQLAlchemy, or register it in your custom types.")

    def is_entity(self, class_: Any) -> bool:
        return is_entity(class_)

    def get_output(self, class_: Type[Any]) -> GraphQLObjectType:
        """Output object type of an entity, e.g. ``Post``."""
        self._entities.setdefault(get_type_name(class_), class_)
        return self._get_or_create(get_type_name(class_), lambda: self.object_type_factory.create(class_))

    def get_entity(self, name: str) -> Optional[Type[Any]]:
        """Entity whose output type is registered under ``name``, if any."""
        return self._entities.get(name)

    def get_input(self, class_: Type[Any]) -> GraphQLInputObjectType:
        """Input type to create an entity, e.g. ``PostInput``."""
        name = self.input_type_factory.type_name(class_)
        return self._get_or_create(name, lambda: self.input_type_factory.create(class_))

    def get_partial_input(self, class_: Type[Any]) -> GraphQLInputObjectType:
        """Input type to update an entity, every field optional, e.g. ``PostPartialInput``."""
        name = self.partial_input_type_factory.type_name(class_)
        return self._get_or_create(name, lambda: self.partial_input_type_factory.create(class_))

    def get_id(self, class_: Type[Any]) -> EntityIDType:
        """Scalar accepting the ID of an entity, e.g. ``PostID``."""
        name = get_type_name(class_) + self.config.id_suffix
        return self._get_or_create(name, lambda: EntityIDType(self.session, class_, name))

    def get_filter_group_condition(self, class_: Type[Any]) -> GraphQLInputObjectType:
        """Condition type of an entity, e.g. ``PostFilterGroupCondition``."""
        name = get_type_name(class_) + self.config.filter_group_condition_suffix
        return self._get_or_create(name, lambda: self.filter_group_condition_type_factory.create(class_, name))

    def get_operator(self, operator: Type[AbstractOperator], leaf_type: GraphQLLeafType) -> AbstractOperator:
        """Operator instance for one leaf type, e.g. ``EqualOperatorString``."""
        name = operator_type_name(operator, leaf_type)
        return self._get_or_create(name, lambda: operator(self, leaf_type))

    def get_enum(self, enum_class: Type[enum.Enum]) -> GraphQLEnumType:
        """Enum type whose values are the members of ``enum_class``."""

        def create() -> GraphQLEnumType:
            values = {member.name: GraphQLEnumValue(member) for member in enum_class}
            return GraphQLEnumType(
                enum_class.__name__,
                values,
                description=DocstringReader(enum_class).get_method_description(),
            )

        return self._get_or_create(enum_class.__name__, create)

    def register_instance(self, instance: GraphQLNamedType) -> None:
        """Register a named type so it can be retrieved by name later on."""
        existing = self._types.get(instance.name)
        if existing is None:
            self._types[instance.name] = instance
        elif existing is not instance:
            logger.warning(f"A different type named `{instance.name}` is already registered, keeping the first one")

    def _get_or_create(self, name: str, create: Any) -> Any:
        if name not in self._types:
            logger.debug(f"Creating type {name}")
            self._types[name] = create()
        return self._types[name]
