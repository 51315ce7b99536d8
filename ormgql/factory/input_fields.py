from __future__ import annotations

import inspect
import re
from typing import Any, Dict, Optional, Pattern

from ..annotations import Input
from ..docstrings import DocstringReader
from ..naming import camel_to_snake, lcfirst
from ..reflection import ReflectedMethod
from .fields import AbstractFieldsConfigurationFactory

__all__ = ["InputFieldsConfigurationFactory"]


class InputFieldsConfigurationFactory(AbstractFieldsConfigurationFactory):
    """Input fields of an entity, one per setter taking exactly one value.

    ``set_title(self, title: str)`` and ``setTitle(self, title: str)`` both
    become the input field ``title``.
    """

    _pattern = re.compile(r"^set(_[a-z]|[A-Z])")

    def get_method_pattern(self) -> Pattern[str]:
        return self._pattern

    def method_to_configuration(self, method: ReflectedMethod) -> Optional[Dict[str, Any]]:
        parameters = method.parameters
        if len(parameters) != 1:
            return None
        parameter = parameters[0]

        annotation = self.reader.get_method_annotation(method.function, Input)
        field = annotation.copy() if annotation is not None else Input()
        if field.type_instance is None:
            field.type_instance = self.get_type_from_declaration(method.owner, field.type)

        self.complete_field(field, method, parameter)
        return field.to_dict()

    def complete_field(self, field: Input, method: ReflectedMethod, parameter: inspect.Parameter) -> None:
        field_name = lcfirst(re.sub(r"^set_?", "", method.name))
        docstring = DocstringReader(method.function)

        if not field.name:
            field.name = self.types.config.apply_naming_config(field_name)
        if not field.method:
            field.method = method.name
        if not field.description:
            field.description = docstring.get_method_description()

        if not field.has_default_value() and parameter.default is not inspect.Parameter.empty:
            field.default_value = parameter.default
        if not field.has_default_value():
            default_value = self.get_property_default_value(camel_to_snake(field_name))
            if default_value is not None:
                field.default_value = default_value

        if field.type_instance is None:
            declaration = docstring.get_parameter_type(parameter.name)
            self.throw_if_array(method, parameter.name, declaration, "api.input()")
            field.type_instance = self.get_type_from_declaration(method.owner, declaration, True)

        if field.type_instance is None:
            hint = method.parameter_hint(parameter.name)
            self.throw_if_array(method, parameter.name, hint, "api.input()")
            if hint is not inspect.Parameter.empty:
                field.type_instance = self.reflection_type_to_type(method, hint, True)

        self.nonnull_if_has_default(field)
        self.throw_if_not_input_type(method, parameter.name, field)
