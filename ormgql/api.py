"""Declarative entry points to attach annotations to entities.

Example:
    from ormgql import api

    @api.filter(field="custom", operator=ModuloOperatorType, type="int")
    class Post(Base):
        ...
        title: Mapped[str] = mapped_column(info=api.info(api.FilterGroupCondition(type="str")))
        secret: Mapped[str] = mapped_column(info=api.info(api.Exclude()))

        @api.field(description="The post title", args=[api.argument("upper", description="Uppercase")])
        def get_title(self, upper: bool = False) -> str:
            ...

        @api.exclude
        def get_secret(self) -> str:
            ...
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, TypeVar

from graphql import Undefined

from .annotations import (
    Argument,
    Exclude,
    Field,
    Filter,
    FilterGroupCondition,
    Filters,
    Input,
)

__all__ = [
    "ANNOTATIONS_ATTR",
    "INFO_KEY",
    "Argument",
    "Exclude",
    "Field",
    "Filter",
    "FilterGroupCondition",
    "Filters",
    "Input",
    "argument",
    "exclude",
    "field",
    "filter",
    "filters",
    "info",
    "input",
    "own_annotations",
]

# Attribute holding the annotations attached to a function or a class
ANNOTATIONS_ATTR = "__ormgql_annotations__"

# Key of SQLAlchemy ``info`` dicts holding property annotations
INFO_KEY = "ormgql"

T = TypeVar("T")


def own_annotations(target: Any) -> List[Any]:
    """Return annotations declared directly on ``target``, never inherited ones."""
    if isinstance(target, type):
        return list(vars(target).get(ANNOTATIONS_ATTR, ()))
    return list(getattr(target, ANNOTATIONS_ATTR, ()))


def _attach(target: T, annotation: Any, *, prepend: bool = False) -> T:
    current = own_annotations(target)
    current = [annotation, *current] if prepend else [*current, annotation]
    setattr(target, ANNOTATIONS_ATTR, current)
    return target


def field(
    name: Optional[str] = None,
    type: Any = None,
    description: Optional[str] = None,
    args: Iterable[Argument] = (),
    method: Optional[str] = None,
) -> Callable[[T], T]:
    """Override the output field generated for a getter."""
    annotation = Field(name=name, type=type, description=description, args=args, method=method)

    def decorator(fn: T) -> T:
        return _attach(fn, annotation)

    return decorator


def input(
    name: Optional[str] = None,
    type: Any = None,
    description: Optional[str] = None,
    default_value: Any = Undefined,
    method: Optional[str] = None,
    updatable: Optional[bool] = None,
) -> Callable[[T], T]:
    """Override the input field generated for a setter."""
    annotation = Input(
        name=name,
        type=type,
        description=description,
        default_value=default_value,
        method=method,
        updatable=updatable,
    )

    def decorator(fn: T) -> T:
        return _attach(fn, annotation)

    return decorator


def argument(
    name: str,
    type: Any = None,
    description: Optional[str] = None,
    default_value: Any = Undefined,
) -> Argument:
    """Build an :class:`Argument` override for ``field(args=[...])``."""
    return Argument(name=name, type=type, description=description, default_value=default_value)


def exclude(target: T) -> T:
    """Exclude a getter or a setter from the generated schema."""
    return _attach(target, Exclude())


def filter(field: str, operator: Any, type: Any) -> Callable[[T], T]:
    """Declare one custom operator on an entity class. Can be stacked."""
    declared = Filter(field=field, operator=operator, type=type)

    def decorator(cls: T) -> T:
        existing = [a for a in own_annotations(cls) if isinstance(a, Filters)]
        if existing:
            existing[0].filters.insert(0, declared)
            return cls
        return _attach(cls, Filters([declared]))

    return decorator


def filters(*items: Filter) -> Callable[[T], T]:
    """Declare several custom operators on an entity class at once."""

    def decorator(cls: T) -> T:
        existing = [a for a in own_annotations(cls) if isinstance(a, Filters)]
        if existing:
            existing[0].filters[:0] = list(items)
            return cls
        return _attach(cls, Filters(items))

    return decorator


def info(*annotations: Any, **extra: Any) -> dict:
    """Build the ``info=`` dict of a mapped column or relationship.

    Example:
        name: Mapped[str] = mapped_column(info=api.info(api.Exclude()))
    """
    data = dict(extra)
    data[INFO_KEY] = list(annotations)
    return data
