"""Field resolver used when a field has no explicit resolver.

Pass it to graphql-core when executing::

    graphql_sync(schema, query, field_resolver=default_field_resolver)
"""
from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from graphql import GraphQLResolveInfo

from .definition.entity_id import EntityID
from .naming import accessor_candidates, camel_to_snake, is_public_name

__all__ = ["DefaultFieldResolver", "default_field_resolver"]

_MISSING = object()


class DefaultFieldResolver:
    """Resolve a field from a mapping, an accessor method or a public attribute.

    For objects, the getter a field was generated from is tried first, then
    ``is_<field>``, ``has_<field>``, ``get_<field>`` and the bare ``<field>()``
    accessor, then a public attribute of that name. Names starting with an
    underscore are never exposed. A miss resolves to ``None``.
    """

    def __call__(self, source: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        field_name = info.field_name
        if source is None:
            return None
        if isinstance(source, Mapping):
            return source.get(field_name)
        return self.resolve_object(source, field_name, args, self.get_configured_method(info))

    @staticmethod
    def get_configured_method(info: GraphQLResolveInfo) -> Optional[str]:
        fields = getattr(info.parent_type, "fields", None) or {}
        field = fields.get(info.field_name)
        extensions = getattr(field, "extensions", None) or {}
        return extensions.get("method")

    def resolve_object(self, source: Any, field_name: str, args: Dict[str, Any], method: Optional[str] = None) -> Any:
        if not is_public_name(field_name):
            return None

        getter = self.get_getter(source, field_name, method)
        if getter is not None:
            return getter(**self.order_arguments(getter, args))

        for name in (field_name, camel_to_snake(field_name)):
            if not is_public_name(name):
                continue
            attribute = inspect.getattr_static(source, name, _MISSING)
            if attribute is _MISSING or inspect.isfunction(attribute):
                continue
            return getattr(source, name)
        return None

    @staticmethod
    def get_getter(source: Any, field_name: str, method: Optional[str]) -> Optional[Callable[..., Any]]:
        candidates = ([method] if method else []) + accessor_candidates(field_name)
        for name in candidates:
            if not is_public_name(name):
                continue
            if inspect.isfunction(inspect.getattr_static(source, name, None)):
                return getattr(source, name)
        return None

    @staticmethod
    def order_arguments(getter: Callable[..., Any], args: Dict[str, Any]) -> Dict[str, Any]:
        """Match arguments to parameters by name, loading entities given by ID."""
        if not args:
            return {}

        ordered: Dict[str, Any] = {}
        for parameter in inspect.signature(getter).parameters.values():
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            value = args.get(parameter.name, _MISSING)
            if value is _MISSING:
                continue
            if isinstance(value, EntityID):
                value = value.get_entity()
            ordered[parameter.name] = value
        return ordered


default_field_resolver = DefaultFieldResolver()
