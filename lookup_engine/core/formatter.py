"""Type-name, member-name and attribute formatting.

The writer consumes a formatter through three hooks; callers can pass
their own implementation in DecomposeOptions.formatter to change how
names are displayed.
"""

import inspect
from typing import Protocol, runtime_checkable

from .members import MemberInfo
from .models import MemberAttributes


@runtime_checkable
class Formatter(Protocol):
    def format_type_name(self, type_: type) -> str: ...

    def type_namespace(self, type_: type) -> str | None: ...

    def format_member_name(
        self, name: str, parameters: tuple[inspect.Parameter, ...]
    ) -> str: ...

    def format_attributes(self, member: MemberInfo) -> MemberAttributes: ...


class ReflectionFormatter:
    """Default formatter based on class qualnames and modules."""

    def format_type_name(self, type_: type) -> str:
        qualname = getattr(type_, "__qualname__", None) or type_.__name__
        # Classes defined inside functions: keep the part after the function scope
        return qualname.rpartition("<locals>.")[2]

    def type_namespace(self, type_: type) -> str | None:
        return getattr(type_, "__module__", None) or None

    def format_member_name(
        self, name: str, parameters: tuple[inspect.Parameter, ...]
    ) -> str:
        if not parameters:
            return name
        return f"{name}({', '.join(_format_parameter(p) for p in parameters)})"

    def format_attributes(self, member: MemberInfo) -> MemberAttributes:
        attributes = member.kind
        if member.is_static:
            attributes |= MemberAttributes.STATIC
        if member.is_private:
            attributes |= MemberAttributes.PRIVATE

        declared = member.declared
        if isinstance(declared, property) and declared.fset is None:
            attributes |= MemberAttributes.READ_ONLY
        if member.kind == MemberAttributes.METHOD:
            function = getattr(declared, "__func__", declared)
            if inspect.iscoroutinefunction(function):
                attributes |= MemberAttributes.ASYNC
        return attributes


def _format_parameter(parameter: inspect.Parameter) -> str:
    if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{parameter.name}"
    if parameter.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{parameter.name}"
    return parameter.name
