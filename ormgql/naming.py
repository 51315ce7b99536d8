"""Naming utilities shared by the factories and the default field resolver.

Provides consistent snake_case/camelCase conversion plus the accessor naming
conventions (``get_x``, ``is_x``, ``has_x``, ``set_x``) used to discover fields.
"""
from __future__ import annotations

import re
from typing import List

import inflection

__all__ = [
    "camel_to_snake",
    "snake_to_camel",
    "lcfirst",
    "ucfirst",
    "accessor_candidates",
    "is_public_name",
]


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase identifier to snake_case.

    Idempotent for already snake_case input.
    """
    if not name:
        return name
    return inflection.underscore(name)


def snake_to_camel(name: str, upper_first: bool = False) -> str:
    """Convert snake_case identifier to lowerCamelCase (or UpperCamelCase)."""
    if not name:
        return name
    return inflection.camelize(name, uppercase_first_letter=upper_first)


def lcfirst(name: str) -> str:
    return name[:1].lower() + name[1:]


def ucfirst(name: str) -> str:
    return name[:1].upper() + name[1:]


_PREFIXES = ("is", "has", "get")


def accessor_candidates(field_name: str) -> List[str]:
    """Return accessor method names to try for a GraphQL field name, in order.

    ``is``, ``has`` and ``get`` prefixed forms come first (snake_case, then
    camelCase), followed by the bare name.
    """
    snake = camel_to_snake(field_name)
    candidates: List[str] = []
    for prefix in _PREFIXES:
        candidates.append(f"{prefix}_{snake}")
        candidates.append(prefix + ucfirst(field_name))
    candidates.append(snake)
    candidates.append(field_name)
    seen = set()
    return [c for c in candidates if not (c in seen or seen.add(c))]


_PUBLIC_NAME = re.compile(r"^[A-Za-z]")


def is_public_name(name: str) -> bool:
    """Whether an attribute name may be exposed (no leading underscore)."""
    return bool(name) and bool(_PUBLIC_NAME.match(name))
