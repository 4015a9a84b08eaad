"""Lookup engine: structured snapshots of live Python objects.

Decompose any value into its fields, properties, methods, events and
elements, one level at a time, with per-member evaluation cost and
caller-supplied descriptive metadata.

Usage:
    from lookup_engine import DecomposeOptions, decompose

    result = decompose(obj, DecomposeOptions(include_private_members=True))
    print(result.model_dump_json(indent=2))
"""

__version__ = "0.1.0"

from .config import DecomposeOptions, EngineConfig, get_config
from .core import (
    ContextExtender,
    ContextRedirector,
    DecomposedMember,
    DecomposedObject,
    DecomposedValue,
    Descriptor,
    EngineNotInitializedError,
    Extender,
    ExtensionManager,
    LookupEngineError,
    MemberAttributes,
    MethodResolver,
    RedirectionContractError,
    Redirector,
    ReflectionFormatter,
    Variant,
    default_type_resolver,
)
from .engine import (
    LookupComposer,
    decompose,
    decompose_members,
    decompose_object,
    decompose_static,
)

__all__ = [
    "__version__",
    # Config
    "DecomposeOptions",
    "EngineConfig",
    "get_config",
    # Engine
    "LookupComposer",
    "decompose",
    "decompose_static",
    "decompose_object",
    "decompose_members",
    # Records
    "DecomposedObject",
    "DecomposedMember",
    "DecomposedValue",
    "MemberAttributes",
    # Descriptors
    "Descriptor",
    "Variant",
    "default_type_resolver",
    "MethodResolver",
    "Redirector",
    "ContextRedirector",
    "Extender",
    "ContextExtender",
    "ExtensionManager",
    "ReflectionFormatter",
    # Errors
    "LookupEngineError",
    "EngineNotInitializedError",
    "RedirectionContractError",
]
