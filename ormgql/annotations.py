"""Annotation value objects.

Annotations carry optional overrides for what is otherwise derived from the
mapping, the docstrings and the type hints of an entity. Every value is
independently overridable: leaving one unset lets the normal resolution
chain fill it in.

They are usually attached through the decorators of :mod:`ormgql.api`.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type, Union

from graphql import GraphQLType, Undefined

__all__ = [
    "AbstractAnnotation",
    "Argument",
    "Field",
    "Input",
    "Exclude",
    "Filter",
    "Filters",
    "FilterGroupCondition",
]


class AbstractAnnotation:
    """Common overrides shared by :class:`Field`, :class:`Input` and :class:`Argument`.

    Attributes:
        name: GraphQL name. For arguments it must match the Python parameter name.
        type: Type declaration, either a string such as ``"Optional[Post]"``, a
            Python class or typing object, or a graphql-core type instance.
        type_instance: The resolved graphql-core type, filled by the factories.
        description: GraphQL description.
        default_value: Default value; ``graphql.Undefined`` means "not set" so
            that an explicit ``None`` default stays distinguishable.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        type: Any = None,
        description: Optional[str] = None,
        default_value: Any = Undefined,
    ):
        self.name = name
        self.type = type
        self.type_instance: Optional[GraphQLType] = type if isinstance(type, GraphQLType) else None
        self.description = description
        self._default_value = default_value

    def has_default_value(self) -> bool:
        return self._default_value is not Undefined

    @property
    def default_value(self) -> Any:
        return None if self._default_value is Undefined else self._default_value

    @default_value.setter
    def default_value(self, value: Any) -> None:
        self._default_value = value

    def copy(self):
        """Shallow copy, so factories never mutate the instance held by a decorator."""
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type_instance,
            "description": self.description,
        }
        if self.has_default_value():
            data["default_value"] = self._default_value
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, type={self.type!r})"


class Argument(AbstractAnnotation):
    """Override values for a single argument of an output field."""


class Field(AbstractAnnotation):
    """Override values for an output field (getter method).

    ``args`` overrides arguments by name; each name must exist as a parameter
    of the decorated method.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        type: Any = None,
        description: Optional[str] = None,
        args: Iterable[Argument] = (),
        method: Optional[str] = None,
    ):
        super().__init__(name=name, type=type, description=description)
        self.args: Union[Sequence[Argument], Dict[str, Argument]] = list(args)
        self.method = method

    def copy(self):
        clone = super().copy()
        args = self.args.values() if isinstance(self.args, dict) else self.args
        clone.args = [arg.copy() for arg in args]
        return clone

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if isinstance(self.args, dict):
            items = self.args.items()
        else:
            items = ((arg.name, arg) for arg in self.args)
        data["args"] = {key: arg.to_dict() for key, arg in items}
        data["method"] = self.method
        return data


class Input(AbstractAnnotation):
    """Override values for an input field (setter method)."""

    def __init__(
        self,
        name: Optional[str] = None,
        type: Any = None,
        description: Optional[str] = None,
        default_value: Any = Undefined,
        method: Optional[str] = None,
        updatable: Optional[bool] = None,
    ):
        super().__init__(name=name, type=type, description=description, default_value=default_value)
        self.method = method
        self.updatable = updatable

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["method"] = self.method
        data["updatable"] = True if self.updatable is None else self.updatable
        return data


class Exclude:
    """Exclude a method or a mapped property from the generated schema."""

    def __repr__(self) -> str:
        return "Exclude()"


class Filter:
    """Declare a custom operator available on a field of the condition type.

    Attributes:
        field: Name of the field the operator applies to. It does not need to
            be a mapped property.
        operator: ``AbstractOperator`` subclass, or its dotted import path.
        type: Leaf type declaration used as the operator's comparand.
    """

    def __init__(self, field: str, operator: Union[str, Type[Any]], type: Any):
        self.field = field
        self.operator = operator
        self.type = type

    def __repr__(self) -> str:
        return f"Filter(field={self.field!r}, operator={self.operator!r}, type={self.type!r})"


class Filters:
    """Repeatable container of :class:`Filter` declared on an entity class."""

    def __init__(self, filters: Iterable[Filter] = ()):
        self.filters: List[Filter] = list(filters)


class FilterGroupCondition:
    """Override the leaf type used for a mapped property in condition types."""

    def __init__(self, type: Any):
        self.type = type
