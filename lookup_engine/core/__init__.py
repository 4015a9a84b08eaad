"""Core types shared by the engine: records, descriptors, formatting, probes."""

from .descriptors import (
    ContextExtender,
    ContextRedirector,
    Descriptor,
    Extender,
    ExtensionManager,
    MethodResolver,
    Redirector,
    TypeResolver,
    Variant,
    default_type_resolver,
)
from .diagnostics import MemoryDiagnoser, TimeDiagnoser
from .errors import EngineNotInitializedError, LookupEngineError, RedirectionContractError
from .formatter import Formatter, ReflectionFormatter
from .members import Evaluation, MemberInfo
from .models import DecomposedMember, DecomposedObject, DecomposedValue, MemberAttributes

__all__ = [
    # Descriptors
    "Descriptor",
    "Variant",
    "TypeResolver",
    "default_type_resolver",
    "MethodResolver",
    "Redirector",
    "ContextRedirector",
    "Extender",
    "ContextExtender",
    "ExtensionManager",
    # Diagnostics
    "TimeDiagnoser",
    "MemoryDiagnoser",
    # Errors
    "LookupEngineError",
    "EngineNotInitializedError",
    "RedirectionContractError",
    # Formatting
    "Formatter",
    "ReflectionFormatter",
    # Members
    "Evaluation",
    "MemberInfo",
    # Records
    "DecomposedObject",
    "DecomposedMember",
    "DecomposedValue",
    "MemberAttributes",
]
