from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Type

from .exceptions import OrmGqlError
from .naming import is_public_name
from .utils import get_method_full_name

__all__ = ["MISSING", "ReflectedMethod", "iter_public_methods"]

MISSING = inspect.Parameter.empty

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass
class ReflectedMethod:
    """A public instance method together with the class declaring it."""

    owner: Type[Any]
    name: str
    function: Callable[..., Any]
    _hints: Dict[str, Any] = field(default=None, init=False, repr=False)  # type: ignore[assignment]

    @property
    def full_name(self) -> str:
        return get_method_full_name(self.owner, self.name)

    @property
    def parameters(self) -> List[inspect.Parameter]:
        """Parameters without ``self`` and without ``*args``/``**kwargs``."""
        params = list(inspect.signature(self.function).parameters.values())[1:]
        return [p for p in params if p.kind not in _SKIPPED_KINDS]

    @property
    def hints(self) -> Dict[str, Any]:
        if self._hints is None:
            try:
                self._hints = typing.get_type_hints(self.function)
            except (NameError, TypeError) as e:
                raise OrmGqlError(f"Cannot evaluate type hints of method {self.full_name}: {e}") from e
        return self._hints

    @property
    def return_hint(self) -> Any:
        return self.hints.get("return", MISSING)

    def parameter_hint(self, name: str) -> Any:
        return self.hints.get(name, MISSING)


def iter_public_methods(cls: Type[Any]) -> Iterator[ReflectedMethod]:
    """Yield public, non-abstract instance methods of ``cls``, most-derived first.

    Static and class methods are skipped; a name overridden in a subclass is
    only considered once.
    """
    seen = set()
    for owner in inspect.getmro(cls):
        if owner is object:
            continue
        for name, attr in vars(owner).items():
            if name in seen:
                continue
            seen.add(name)
            if not is_public_name(name):
                continue
            if isinstance(attr, (staticmethod, classmethod)) or not inspect.isfunction(attr):
                continue
            if getattr(attr, "__isabstractmethod__", False):
                continue
            yield ReflectedMethod(owner, name, attr)
