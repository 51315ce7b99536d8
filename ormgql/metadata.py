"""Read-only view of the SQLAlchemy mapping of an entity class.

Exposes what the factories need: scalar field mappings (with the identity
flag), association mappings with their target entity and multiplicity, and
declared default values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, Mapper, RelationshipProperty

from .exceptions import OrmGqlError

logger = logging.getLogger(__name__)

__all__ = [
    "FieldMapping",
    "AssociationMapping",
    "ClassMetadata",
    "get_class_metadata",
    "is_entity",
]


@dataclass
class FieldMapping:
    field_name: str
    type: Any
    id: bool = False


@dataclass
class AssociationMapping:
    field_name: str
    target_entity: Type[Any]
    is_collection: bool


def is_entity(cls: Any) -> bool:
    """Whether ``cls`` is a class mapped by SQLAlchemy."""
    if not isinstance(cls, type):
        return False
    return isinstance(sa_inspect(cls, raiseerr=False), Mapper)


class ClassMetadata:
    """Mapping metadata of one entity class."""

    def __init__(self, mapper: Mapper):
        self.mapper = mapper
        self.name: Type[Any] = mapper.class_
        self.field_mappings: Dict[str, FieldMapping] = {}
        self.association_mappings: Dict[str, AssociationMapping] = {}

        for prop in mapper.iterate_properties:
            if isinstance(prop, ColumnProperty):
                column = prop.columns[0]
                self.field_mappings[prop.key] = FieldMapping(
                    field_name=prop.key,
                    type=column.type,
                    id=bool(getattr(column, "primary_key", False)),
                )
            elif isinstance(prop, RelationshipProperty):
                self.association_mappings[prop.key] = AssociationMapping(
                    field_name=prop.key,
                    target_entity=prop.mapper.class_,
                    is_collection=bool(prop.uselist),
                )

    @property
    def identifier(self) -> List[str]:
        return [m.field_name for m in self.field_mappings.values() if m.id]

    def is_collection_valued_association(self, field_name: str) -> bool:
        mapping = self.association_mappings.get(field_name)
        return bool(mapping and mapping.is_collection)

    def get_target_entity(self, field_name: str) -> Optional[Type[Any]]:
        mapping = self.association_mappings.get(field_name)
        return mapping.target_entity if mapping else None

    def get_property(self, field_name: str) -> Any:
        return self.mapper.get_property(field_name)

    def get_property_default_value(self, field_name: str) -> Any:
        """Return the scalar default declared on the mapped column, if any.

        Inherited mappings are included. Callable and SQL expression defaults
        are not values and yield ``None``.
        """
        prop = self.mapper.get_property(field_name) if self.mapper.has_property(field_name) else None
        if not isinstance(prop, ColumnProperty):
            return None
        default = getattr(prop.columns[0], "default", None)
        if default is None or not getattr(default, "is_scalar", False):
            return None
        return default.arg


def get_class_metadata(cls: Type[Any]) -> ClassMetadata:
    mapper = sa_inspect(cls, raiseerr=False) if isinstance(cls, type) else None
    if not isinstance(mapper, Mapper):
        raise OrmGqlError(f"`{getattr(cls, '__name__', cls)}` is not a class mapped by SQLAlchemy.")
    metadata = ClassMetadata(mapper)
    identifier = metadata.identifier
    if len(identifier) > 1:
        logger.warning(
            f"{mapper.class_.__name__} has a composite primary key {identifier}, only `{identifier[-1]}` is treated as identity"
        )
    return metadata
