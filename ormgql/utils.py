from __future__ import annotations

import inspect
from typing import Any, Dict, Type

__all__ = [
    "full_name",
    "get_type_name",
    "get_method_full_name",
    "get_recursive_class_annotations",
]

# Ancestors provided by the interpreter or the ORM itself never carry annotations
_FOREIGN_MODULES = ("builtins", "typing", "abc", "sqlalchemy")


def full_name(obj: Any) -> str:
    """Dotted path of a class or function, e.g. ``app.models.Post``."""
    return f"{obj.__module__}.{obj.__qualname__}"


def get_type_name(cls: Type[Any]) -> str:
    """GraphQL type name of a class: its short name."""
    return cls.__name__


def get_method_full_name(owner: Type[Any], name: str) -> str:
    return f"`{full_name(owner)}.{name}()`"


def get_recursive_class_annotations(reader: Any, cls: Type[Any], kind: Type[Any]) -> Dict[str, Any]:
    """Collect one annotation of ``kind`` per class, walking ``cls`` and its ancestors.

    Returns a dict keyed by the dotted name of the class declaring the
    annotation, most-derived class first.
    """
    result: Dict[str, Any] = {}
    for klass in inspect.getmro(cls):
        if (klass.__module__ or "").split(".")[0] in _FOREIGN_MODULES:
            continue
        annotation = reader.get_class_annotation(klass, kind)
        if annotation is not None:
            result[full_name(klass)] = annotation
    return result
