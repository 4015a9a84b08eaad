"""Pydantic records produced by the lookup engine."""

from .decomposition import (
    DecomposedMember,
    DecomposedObject,
    DecomposedValue,
    MemberAttributes,
)

__all__ = [
    "DecomposedMember",
    "DecomposedObject",
    "DecomposedValue",
    "MemberAttributes",
]
