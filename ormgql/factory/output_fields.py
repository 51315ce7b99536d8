from __future__ import annotations

import inspect
import re
from typing import Any, Dict, Optional, Pattern

from graphql import GraphQLID, GraphQLNonNull, GraphQLType

from ..annotations import Argument, Field
from ..docstrings import DocstringReader
from ..exceptions import OrmGqlError
from ..naming import camel_to_snake, lcfirst
from ..reflection import ReflectedMethod
from .fields import AbstractFieldsConfigurationFactory

__all__ = ["OutputFieldsConfigurationFactory"]

# Docstring return types that do not say what the collection contains
_VAGUE_RETURN_TYPES = {"list", "List", "Sequence", "Collection", "Iterable", "array", "set", "Set", "tuple", "Tuple"}


class OutputFieldsConfigurationFactory(AbstractFieldsConfigurationFactory):
    """Output fields of an entity, one per getter.

    ``get_title()`` becomes ``title`` while ``is_published()`` and
    ``has_comments()`` keep their prefix.
    """

    _pattern = re.compile(r"^(get|is|has)(_[a-z]|[A-Z])")

    def get_method_pattern(self) -> Pattern[str]:
        return self._pattern

    def method_to_configuration(self, method: ReflectedMethod) -> Optional[Dict[str, Any]]:
        annotation = self.reader.get_method_annotation(method.function, Field)
        field = annotation.copy() if annotation is not None else Field()

        self.convert_type_declarations_to_instances(method, field)
        self.complete_field(field, method)
        return field.to_dict()

    def convert_type_declarations_to_instances(self, method: ReflectedMethod, field: Field) -> None:
        if field.type_instance is None:
            field.type_instance = self.get_type_from_declaration(method.owner, field.type)

        args: Dict[str, Argument] = {}
        for arg in field.args:
            if arg.type_instance is None:
                arg.type_instance = self.get_type_from_declaration(method.owner, arg.type)
            args[arg.name] = arg
        field.args = args

    def complete_field(self, field: Field, method: ReflectedMethod) -> None:
        field_name = lcfirst(re.sub(r"^get_?", "", method.name))
        docstring = DocstringReader(method.function)

        if not field.name:
            field.name = self.types.config.apply_naming_config(field_name)
        if not field.method:
            field.method = method.name
        if not field.description:
            field.description = docstring.get_method_description()

        self.complete_field_arguments(field, method, docstring)
        self.complete_field_type(field, method, camel_to_snake(field_name), docstring)

    def complete_field_arguments(self, field: Field, method: ReflectedMethod, docstring: DocstringReader) -> None:
        declared: Dict[str, Argument] = field.args  # type: ignore[assignment]
        parameter_names = [p.name for p in method.parameters]

        extra = [name for name in declared if name not in parameter_names]
        if extra:
            raise OrmGqlError(
                f"The following arguments were declared via `api.argument()` but do not match actual parameter names "
                f"on method {method.full_name}. Either rename or remove the annotations: {', '.join(map(str, extra))}"
            )

        args: Dict[str, Argument] = {}
        for parameter in method.parameters:
            arg = declared.get(parameter.name) or Argument()
            self.complete_argument(arg, method, parameter, docstring)
            args[parameter.name] = arg
        field.args = args

    def complete_argument(
        self, arg: Argument, method: ReflectedMethod, parameter: inspect.Parameter, docstring: DocstringReader
    ) -> None:
        arg.name = self.types.config.apply_naming_config(parameter.name)
        if not arg.description:
            arg.description = docstring.get_parameter_description(parameter.name)
        if not arg.has_default_value() and parameter.default is not inspect.Parameter.empty:
            arg.default_value = parameter.default

        if arg.type_instance is None:
            declaration = docstring.get_parameter_type(parameter.name)
            self.throw_if_array(method, parameter.name, declaration, "api.argument()")
            arg.type_instance = self.get_type_from_declaration(method.owner, declaration, True)

        if arg.type_instance is None:
            hint = method.parameter_hint(parameter.name)
            self.throw_if_array(method, parameter.name, hint, "api.argument()")
            if hint is not inspect.Parameter.empty:
                arg.type_instance = self.reflection_type_to_type(method, hint, True)

        self.nonnull_if_has_default(arg)
        self.throw_if_not_input_type(method, parameter.name, arg)

    def complete_field_type(self, field: Field, method: ReflectedMethod, field_name: str, docstring: DocstringReader) -> None:
        if self.is_identity_field(field_name):
            field.type_instance = GraphQLNonNull(GraphQLID)

        if field.type_instance is None:
            field.type_instance = self.get_type_from_docstring(method, docstring)

        if field.type_instance is None:
            field.type_instance = self.get_type_from_return_type_hint(method, field_name)

        if field.type_instance is None:
            raise OrmGqlError(
                f"Could not find type for method {method.full_name}. "
                "Either type hint the return value, or specify the type with `api.field()`."
            )

    def get_type_from_docstring(self, method: ReflectedMethod, docstring: DocstringReader) -> Optional[GraphQLType]:
        declaration = docstring.get_return_type()
        if not declaration or declaration in _VAGUE_RETURN_TYPES:
            return None
        return self.get_type_from_declaration(method.owner, declaration)
