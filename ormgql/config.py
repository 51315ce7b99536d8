from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .naming import snake_to_camel

NameConverter = Optional[Callable[[str], str]]


@dataclass
class OrmGqlConfig:
    """Schema generation options.

    Attributes:
        auto_camel_case: Convert derived snake_case field and argument names to
            lowerCamelCase. Names given explicitly through annotations are
            never converted.
        name_converter: Custom callable used instead of the camelCase rule.
        input_suffix: Suffix of generated input object types.
        partial_input_suffix: Suffix of generated partial input object types.
        id_suffix: Suffix of generated entity ID scalars.
        filter_group_condition_suffix: Suffix of generated condition types.
    """

    auto_camel_case: bool = True
    name_converter: NameConverter = None
    input_suffix: str = "Input"
    partial_input_suffix: str = "PartialInput"
    id_suffix: str = "ID"
    filter_group_condition_suffix: str = "FilterGroupCondition"

    def apply_naming_config(self, name: str) -> str:
        if callable(self.name_converter):
            return self.name_converter(name)
        if self.auto_camel_case:
            return snake_to_camel(name)
        return name
