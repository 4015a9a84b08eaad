"""Decomposition records.

A decomposition is a flat snapshot of one object (or class):

- DecomposedObject: the root record and its ordered member list
- DecomposedMember: one structural member, with cost diagnostics
- DecomposedValue: the evaluated payload of a member
- MemberAttributes: member kind and modifiers

Raw values and descriptors are carried for in-process callers (drill-down,
custom rendering) but are never part of the serialized form.
"""

from enum import IntFlag
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator


class MemberAttributes(IntFlag):
    """Kind and modifiers of a decomposed member."""

    NONE = 0

    # Kinds
    FIELD = 1
    PROPERTY = 2
    METHOD = 4
    EVENT = 8
    EXTENSION = 16

    # Modifiers
    STATIC = 32
    PRIVATE = 64
    READ_ONLY = 128
    ASYNC = 256

    @property
    def kind(self) -> "MemberAttributes":
        """The kind part of the flags, with modifiers removed."""
        return self & _KIND_MASK


_KIND_MASK = (
    MemberAttributes.FIELD
    | MemberAttributes.PROPERTY
    | MemberAttributes.METHOD
    | MemberAttributes.EVENT
    | MemberAttributes.EXTENSION
)

# Composite flag values are not enum cases, so validation goes through the
# flag constructor and serialization emits the plain integer.
MemberAttributesField = Annotated[
    MemberAttributes,
    PlainValidator(lambda value: MemberAttributes(value)),
    PlainSerializer(int, return_type=int),
]


class DecomposedValue(BaseModel):
    """Evaluated member value metadata."""

    model_config = ConfigDict(frozen=True)

    raw_value: Any = Field(default=None, exclude=True)
    name: str = Field(description="Display name of the value")
    type_name: str = Field(description="Formatted type name of the value")
    type_full_name: str = Field(description="Type name qualified by its module")
    description: str | None = Field(
        default=None, description="Description of the evaluation context"
    )
    descriptor: Any = Field(default=None, exclude=True)


class DecomposedMember(BaseModel):
    """One structural member of a decomposed object."""

    model_config = ConfigDict(frozen=True)

    depth: int = Field(description="Distance of the declaring level from the leaf type")
    name: str
    declaring_type_name: str
    declaring_type_full_name: str
    computation_time: float = Field(
        default=0.0, description="Time spent evaluating the member, in milliseconds"
    )
    allocated_bytes: int = Field(
        default=0, description="Memory allocated while evaluating the member"
    )
    member_attributes: MemberAttributesField = MemberAttributes.NONE
    value: DecomposedValue


class DecomposedObject(BaseModel):
    """Root record of a decomposition."""

    model_config = ConfigDict(frozen=True)

    raw_value: Any = Field(default=None, exclude=True)
    name: str
    type_name: str
    type_full_name: str
    description: str | None = None
    descriptor: Any = Field(default=None, exclude=True)
    members: list[DecomposedMember] = Field(default_factory=list)
