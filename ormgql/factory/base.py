"""Shared type resolution of all factories.

Type declarations come in three shapes: strings found in annotations and
docstrings (``"Optional[List[Post]]"``), Python type hints, and ready
graphql-core types. All of them end up as graphql-core types here.
"""
from __future__ import annotations

import collections.abc
import importlib
import sys
import types as pytypes
import typing
from typing import Any, List, Optional, Tuple, Union

from graphql import GraphQLList, GraphQLNamedType, GraphQLNonNull, GraphQLType

from ..exceptions import OrmGqlError

__all__ = [
    "AbstractFactory",
    "is_collection_hint",
    "is_mapping_hint",
    "split_optional_hint",
    "split_top_level",
]

_NONE_NAMES = ("None", "NoneType")

_LIST_NAMES = {
    "List",
    "list",
    "Sequence",
    "MutableSequence",
    "Collection",
    "Iterable",
    "Set",
    "set",
    "FrozenSet",
    "frozenset",
    "Tuple",
    "tuple",
}

_ABC_COLLECTIONS = (
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
    collections.abc.Iterable,
    collections.abc.Set,
    collections.abc.MutableSet,
)


def split_top_level(text: str, separator: str) -> List[str]:
    """Split ``text`` on ``separator`` outside of square brackets."""
    parts: List[str] = []
    depth = 0
    current = ""
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == separator and depth == 0:
            parts.append(current.strip())
            current = ""
            continue
        current += char
    parts.append(current.strip())
    return parts


def _strip_typing_prefix(name: str) -> str:
    for prefix in ("typing.", "collections.abc."):
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


def _split_subscript(text: str) -> Tuple[str, Optional[str]]:
    """``"List[int]"`` -> ``("List", "int")``; ``"int"`` -> ``("int", None)``."""
    if text.endswith("]") and "[" in text:
        head, _, rest = text.partition("[")
        return _strip_typing_prefix(head.strip()), rest[:-1].strip()
    return text, None


def _split_optional_declaration(text: str) -> Tuple[bool, str]:
    """Return ``(nullable, inner)`` for a string declaration."""
    text = text.strip()
    head, inner = _split_subscript(text)
    if head == "Optional" and inner is not None:
        return True, inner
    if head == "Union" and inner is not None:
        members = split_top_level(inner, ",")
    else:
        members = split_top_level(text, "|")
    if len(members) == 1:
        return False, text
    rest = [m for m in members if m not in _NONE_NAMES]
    nullable = len(rest) != len(members)
    if len(rest) != 1:
        raise OrmGqlError(f"Union types are not supported: `{text}`")
    return nullable, rest[0]


def split_optional_hint(hint: Any) -> Tuple[bool, Any]:
    """Return ``(nullable, inner)`` for a type hint.

    ``inner`` is ``None`` for unions of several non-null members.
    """
    origin = typing.get_origin(hint)
    if origin is Union or isinstance(hint, pytypes.UnionType):
        args = typing.get_args(hint)
        rest = [a for a in args if a is not type(None)]
        nullable = len(rest) != len(args)
        if len(rest) != 1:
            return nullable, None
        return nullable, rest[0]
    return False, hint


def is_collection_hint(hint: Any) -> bool:
    """Whether a hint is a list-like collection. Strings are not collections."""
    origin = typing.get_origin(hint) or hint
    if not isinstance(origin, type):
        return False
    if issubclass(origin, (list, set, frozenset, tuple)):
        return True
    return origin in _ABC_COLLECTIONS


def is_mapping_hint(hint: Any) -> bool:
    origin = typing.get_origin(hint) or hint
    return isinstance(origin, type) and issubclass(origin, (dict, collections.abc.Mapping))


class AbstractFactory:
    """Base of every factory: access to the registry and type resolution."""

    def __init__(self, types: Any):
        self.types = types

    @property
    def reader(self) -> Any:
        return self.types.reader

    def get_type_from_registry(self, key: Any, is_entity_id: bool = False) -> GraphQLNamedType:
        """Get a named type from the registry.

        Entities become their ``<Entity>ID`` scalar when ``is_entity_id`` is set,
        so that they can be used as input.
        """
        if is_entity_id and self.types.is_entity(key):
            return self.types.get_id(key)
        return self.types.get(key)

    def get_type_from_declaration(self, owner: type, declaration: Any, is_entity_id: bool = False) -> Optional[GraphQLType]:
        """Convert a type declaration as found in annotations or docstrings."""
        if declaration is None or declaration == "":
            return None
        if isinstance(declaration, GraphQLType):
            return declaration
        if isinstance(declaration, str):
            return self._parse_declaration(owner, declaration, is_entity_id)
        return self.hint_to_type(owner, declaration, is_entity_id)

    def _parse_declaration(self, owner: type, text: str, is_entity_id: bool) -> GraphQLType:
        nullable, inner = _split_optional_declaration(text)
        head, item = _split_subscript(inner)
        if head in _LIST_NAMES and item is not None:
            item_declaration = split_top_level(item, ",")[0]
            graphql_type: GraphQLType = GraphQLList(self._parse_declaration(owner, item_declaration, is_entity_id))
        else:
            graphql_type = self.get_type_from_registry(self.resolve_name(owner, inner), is_entity_id)
        return graphql_type if nullable else GraphQLNonNull(graphql_type)

    def resolve_name(self, owner: type, name: str) -> Any:
        """Resolve a name used in a declaration to a registry key.

        Entities whose output type is registered resolve to their class, so
        they can still become ID scalars. Other registered names win next,
        then names visible in the module declaring ``owner``, then dotted
        import paths. Unknown names are returned as is so the registry
        reports them.
        """
        if name in ("Self", "self"):
            return self.self_class(owner)
        entity = self.types.get_entity(name)
        if entity is not None:
            return entity
        if self.types.has(name):
            return name
        module = sys.modules.get(getattr(owner, "__module__", ""), None)
        candidate: Any = module
        for part in name.split("."):
            candidate = getattr(candidate, part, None)
            if candidate is None:
                break
        if candidate is not None:
            return candidate
        if "." in name:
            module_path, _, attribute = name.rpartition(".")
            try:
                return getattr(importlib.import_module(module_path), attribute)
            except (ImportError, AttributeError) as e:
                raise OrmGqlError(f"Cannot import type `{name}` declared on `{owner.__name__}`: {e}") from e
        return name

    def self_class(self, owner: type) -> type:
        """Class that ``Self`` refers to for methods declared on ``owner``."""
        return owner

    def hint_to_type(self, owner: type, hint: Any, is_entity_id: bool = False) -> Optional[GraphQLType]:
        """Convert a Python type hint. Returns ``None`` when it cannot express a type."""
        if isinstance(hint, str):
            return self._parse_declaration(owner, hint, is_entity_id)
        if isinstance(hint, typing.ForwardRef):
            return self._parse_declaration(owner, hint.__forward_arg__, is_entity_id)
        if isinstance(hint, GraphQLType):
            return hint

        nullable, inner = split_optional_hint(hint)
        if inner is None or inner is typing.Any or inner is type(None):
            return None
        if inner is typing.Self:
            inner = self.self_class(owner)

        if is_collection_hint(inner):
            args = typing.get_args(inner)
            if not args:
                return None
            item_type = self.hint_to_type(owner, args[0], is_entity_id)
            if item_type is None:
                return None
            graphql_type: GraphQLType = GraphQLList(item_type)
        else:
            graphql_type = self.get_type_from_registry(inner, is_entity_id)
        return graphql_type if nullable else GraphQLNonNull(graphql_type)
