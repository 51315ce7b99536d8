from __future__ import annotations


class OrmGqlError(ValueError):
    """Raised when an entity cannot be turned into a consistent GraphQL configuration.

    The message always names the offending class, method or parameter and
    tells how to fix the mapping.
    """
