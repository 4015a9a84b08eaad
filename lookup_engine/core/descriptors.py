"""Descriptors and descriptor capabilities.

A Descriptor is caller-supplied metadata for a value or type: an optional
display name and an optional description. A descriptor class can also mix
in any number of capabilities, which the engine probes independently with
isinstance():

- MethodResolver: supplies a substitute evaluation target for a method
- Redirector / ContextRedirector: replaces a value with another one
- Extender / ContextExtender: contributes synthetic members to a level

Descriptors are produced by a type resolver, a callable taking
``(value, type)`` where one of the two is None. The engine writes into
``Descriptor.description`` during redirection, so a resolver that caches
descriptors shares that state between decompositions.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

TContext = TypeVar("TContext")

TypeResolver = Callable[[Any, "type | None"], "Descriptor"]

# Longest display name the default resolver derives from str()
MAX_DEFAULT_NAME_LENGTH = 200


@dataclass
class Descriptor:
    """Descriptive metadata for a value or type."""

    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Variant:
    """A value wrapped with a description of how it was obtained.

    Resolvers return variants to label a substituted value, e.g. the result
    of calling a parametric method with a specific argument.
    """

    value: Any
    description: str | None = None


class MethodResolver(ABC):
    """Capability: evaluate methods the engine cannot call on its own."""

    @abstractmethod
    def resolve(
        self, member_name: str, parameters: tuple[inspect.Parameter, ...]
    ) -> Any:
        """Return a substitute target for the method, or None.

        A callable target is invoked without arguments; any other object
        is used as the member value directly.
        """


class Redirector(ABC):
    """Capability: replace the described value with another one."""

    @abstractmethod
    def try_redirect(self, target: str) -> tuple[bool, Any]:
        """Return ``(True, new_value)`` to redirect, ``(False, None)`` otherwise."""


class ContextRedirector(ABC, Generic[TContext]):
    """Capability: redirect using the composer's ambient context.

    Takes priority over Redirector when a descriptor implements both.
    """

    @abstractmethod
    def try_redirect(self, target: str, context: TContext) -> tuple[bool, Any]:
        """Return ``(True, new_value)`` to redirect, ``(False, None)`` otherwise."""


class ExtensionManager:
    """Collects named extension handlers registered by a descriptor."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}

    def register(self, name: str, handler: Callable[..., Any]) -> None:
        self._handlers[name] = handler

    @property
    def handlers(self) -> dict[str, Callable[..., Any]]:
        return dict(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


class Extender(ABC):
    """Capability: contribute synthetic members. Handlers take no arguments."""

    @abstractmethod
    def register_extensions(self, manager: ExtensionManager) -> None: ...


class ContextExtender(ABC, Generic[TContext]):
    """Capability: contribute synthetic members. Handlers receive the context."""

    @abstractmethod
    def register_extensions(self, manager: ExtensionManager) -> None: ...


def default_type_resolver(value: Any, type_: type | None) -> Descriptor:
    """Describe values by their own str() when their type customizes it.

    Types, and values relying on ``object.__str__``/``object.__repr__``,
    get an unnamed descriptor so the writer falls back to the type name.
    Level requests (``type_`` given) are never named, so the value is not
    rendered once per hierarchy level.
    """
    if type_ is not None or value is None or isinstance(value, type):
        return Descriptor()

    value_type = type(value)
    if value_type.__str__ is object.__str__ and value_type.__repr__ is object.__repr__:
        return Descriptor()

    try:
        text = str(value)
    except Exception:
        return Descriptor()

    if not text:
        return Descriptor()
    if len(text) > MAX_DEFAULT_NAME_LENGTH:
        text = text[:MAX_DEFAULT_NAME_LENGTH] + "..."
    return Descriptor(name=text)
