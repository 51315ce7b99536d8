"""ormgql public API and lazy exports.

Builds GraphQL types from SQLAlchemy-mapped entities: output types from
getters, input types from setters, and condition types describing the
filters available on each entity.

Exposes:
- Types, the registry every type is created through
- OrmGqlConfig, OrmGqlError
- DefaultFieldResolver, default_field_resolver
- api, the decorators declaring overrides on entities
"""
from __future__ import annotations

from .config import OrmGqlConfig
from .exceptions import OrmGqlError


def __getattr__(name: str):  # PEP 562 lazy exports
    import importlib as _importlib
    if name in {'api', 'annotations', 'readers', 'scalars', 'types', 'resolver'}:
        return _importlib.import_module(__name__ + '.' + name)
    if name == 'Types':
        from .types import Types as _Types
        return _Types
    if name in {'DefaultFieldResolver', 'default_field_resolver'}:
        _resolver = _importlib.import_module(__name__ + '.resolver')
        return getattr(_resolver, name)
    if name in {'EntityID', 'EntityIDType'}:
        _entity_id = _importlib.import_module(__name__ + '.definition.entity_id')
        return getattr(_entity_id, name)
    raise AttributeError(name)


__all__ = [
    'Types', 'OrmGqlConfig', 'OrmGqlError',
    'DefaultFieldResolver', 'default_field_resolver',
    'EntityID', 'EntityIDType',
    'api',
]
