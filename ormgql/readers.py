"""Annotation readers.

A reader answers "which annotations are attached to this class, method or
mapped property". :class:`AttributeReader` reads what :mod:`ormgql.api`
attached; :class:`ReaderChain` routes lookups to one reader per module
namespace, the way an ORM configured with several mapping sources would.
"""
from __future__ import annotations

import abc
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from .api import INFO_KEY, own_annotations
from .exceptions import OrmGqlError
from .utils import full_name

logger = logging.getLogger(__name__)

A = TypeVar("A")

__all__ = ["Reader", "AttributeReader", "ReaderChain"]


def _as_property(prop: Any) -> Any:
    # Accept instrumented attributes (``Post.title``) as well as mapper properties
    return getattr(prop, "property", prop)


def _first(annotations: List[Any], kind: Type[A]) -> Optional[A]:
    for annotation in annotations:
        if isinstance(annotation, kind):
            return annotation
    return None


class Reader(abc.ABC):
    """Read annotations attached to classes, methods and mapped properties."""

    @abc.abstractmethod
    def get_class_annotations(self, cls: Type[Any]) -> List[Any]:
        ...

    @abc.abstractmethod
    def get_method_annotations(self, method: Any) -> List[Any]:
        ...

    @abc.abstractmethod
    def get_property_annotations(self, prop: Any) -> List[Any]:
        ...

    def get_class_annotation(self, cls: Type[Any], kind: Type[A]) -> Optional[A]:
        return _first(self.get_class_annotations(cls), kind)

    def get_method_annotation(self, method: Any, kind: Type[A]) -> Optional[A]:
        return _first(self.get_method_annotations(method), kind)

    def get_property_annotation(self, prop: Any, kind: Type[A]) -> Optional[A]:
        return _first(self.get_property_annotations(prop), kind)


class AttributeReader(Reader):
    """Reader for annotations declared with :mod:`ormgql.api`.

    Classes and functions carry their annotations as an attribute; mapped
    properties carry them in the SQLAlchemy ``info`` dict of the property or
    of its column.
    """

    def get_class_annotations(self, cls: Type[Any]) -> List[Any]:
        return own_annotations(cls)

    def get_method_annotations(self, method: Any) -> List[Any]:
        return own_annotations(method)

    def get_property_annotations(self, prop: Any) -> List[Any]:
        prop = _as_property(prop)
        annotations = list((getattr(prop, "info", None) or {}).get(INFO_KEY, ()))
        for column in getattr(prop, "columns", ()):
            column_info = getattr(column, "info", None) or {}
            annotations.extend(column_info.get(INFO_KEY, ()))
        return annotations


class ReaderChain(Reader):
    """Route annotation lookups to the reader registered for the entity's namespace.

    ``readers`` maps a module prefix (e.g. ``"app.blog"``) to a source of
    mapping configuration. Only :class:`Reader` instances can answer; the
    first namespace that prefixes the declaring class's dotted name (case
    insensitive) and holds a reader wins. Otherwise the default is used when
    it is a reader.
    """

    def __init__(self, readers: Optional[Mapping[str, Any]] = None, default: Any = None):
        self._readers: Dict[str, Any] = dict(readers or {})
        self.default = default

    def add(self, namespace: str, reader: Any) -> None:
        self._readers[namespace] = reader

    @property
    def readers(self) -> Dict[str, Any]:
        return dict(self._readers)

    def find_reader(self, owner_name: str) -> Reader:
        lowered = owner_name.lower()
        for namespace, reader in self._readers.items():
            if lowered.startswith(namespace.lower()) and isinstance(reader, Reader):
                return reader
        if isinstance(self.default, Reader):
            logger.debug(f"No namespace reader for {owner_name}, using default reader")
            return self.default
        raise OrmGqlError(
            f"ormgql requires `{owner_name}` entity to be configured with a `{full_name(Reader)}`."
        )

    def get_class_annotations(self, cls: Type[Any]) -> List[Any]:
        return self.find_reader(full_name(cls)).get_class_annotations(cls)

    def get_method_annotations(self, method: Any) -> List[Any]:
        return self.find_reader(full_name(method)).get_method_annotations(method)

    def get_property_annotations(self, prop: Any) -> List[Any]:
        prop = _as_property(prop)
        return self.find_reader(full_name(prop.parent.class_)).get_property_annotations(prop)
