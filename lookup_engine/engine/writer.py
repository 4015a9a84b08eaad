"""Assembly of decomposition records."""

from typing import Any

from ..core.descriptors import Descriptor
from ..core.diagnostics import MemoryDiagnoser, TimeDiagnoser
from ..core.formatter import Formatter
from ..core.members import MemberInfo
from ..core.models import (
    DecomposedMember,
    DecomposedObject,
    DecomposedValue,
    MemberAttributes,
)
from .state import TraversalState

ITERABLE_TYPE_NAME = "Iterable"
ITERABLE_TYPE_FULL_NAME = "collections.abc.Iterable"


class DecompositionWriter:
    """Turns evaluated values and member infos into immutable records.

    Member records are appended to the traversal state's output buffer in
    the order they are written. Cost readings are taken from the diagnosers
    at write time, which also resets them for the next member.
    """

    def __init__(
        self,
        formatter: Formatter,
        time_diagnoser: TimeDiagnoser,
        memory_diagnoser: MemoryDiagnoser,
    ):
        self.formatter = formatter
        self.time_diagnoser = time_diagnoser
        self.memory_diagnoser = memory_diagnoser

    # ── Names ──

    def display_name(self, descriptor: Descriptor, type_: type) -> str:
        """Descriptor name, unless it is missing or just echoes the type's module path."""
        type_name = self.formatter.format_type_name(type_)
        namespace = self.formatter.type_namespace(type_)
        name = descriptor.name
        if (
            name is None
            or namespace is None
            or name.lower().startswith(namespace.lower())
        ):
            return type_name
        return name

    def type_full_name(self, type_: type) -> str:
        type_name = self.formatter.format_type_name(type_)
        namespace = self.formatter.type_namespace(type_)
        return f"{namespace}.{type_name}" if namespace else type_name

    # ── Objects ──

    def create_null_object(self) -> DecomposedObject:
        return DecomposedObject(
            raw_value=None,
            name=self.type_full_name(object),
            type_name=self.formatter.format_type_name(object),
            type_full_name=self.type_full_name(object),
        )

    def create_instance_object(
        self, instance: Any, descriptor: Descriptor, members: list[DecomposedMember] | None = None
    ) -> DecomposedObject:
        instance_type = type(instance)
        return DecomposedObject(
            raw_value=instance,
            name=self.display_name(descriptor, instance_type),
            type_name=self.formatter.format_type_name(instance_type),
            type_full_name=self.type_full_name(instance_type),
            description=descriptor.description,
            descriptor=descriptor,
            members=members or [],
        )

    def create_static_object(
        self, type_: type, descriptor: Descriptor, members: list[DecomposedMember] | None = None
    ) -> DecomposedObject:
        return DecomposedObject(
            raw_value=type_,
            name=self.display_name(descriptor, type_),
            type_name=self.formatter.format_type_name(type_),
            type_full_name=self.type_full_name(type_),
            description=descriptor.description,
            descriptor=descriptor,
            members=members or [],
        )

    # ── Values ──

    def create_empty_value(self) -> DecomposedValue:
        return DecomposedValue(
            raw_value=None,
            name="",
            type_name=self.formatter.format_type_name(object),
            type_full_name=self.type_full_name(object),
        )

    def create_value(self, value: Any, descriptor: Descriptor) -> DecomposedValue:
        value_type = type(value)
        return DecomposedValue(
            raw_value=value,
            name=self.display_name(descriptor, value_type),
            type_name=self.formatter.format_type_name(value_type),
            type_full_name=self.type_full_name(value_type),
            description=descriptor.description,
            descriptor=descriptor,
        )

    # ── Members ──

    def write_member(
        self, state: TraversalState, member: MemberInfo, value: DecomposedValue
    ) -> DecomposedMember:
        declaring_type = state.declaring_type
        record = DecomposedMember(
            depth=state.depth,
            name=self.formatter.format_member_name(member.name, member.parameters),
            declaring_type_name=self.formatter.format_type_name(declaring_type),
            declaring_type_full_name=self.type_full_name(declaring_type),
            member_attributes=self.formatter.format_attributes(member),
            computation_time=self._read_elapsed_ms(),
            allocated_bytes=self.memory_diagnoser.read_allocated_bytes(),
            value=value,
        )
        state.members.append(record)
        return record

    def write_extension_member(
        self, state: TraversalState, name: str, value: DecomposedValue
    ) -> DecomposedMember:
        declaring_type = state.declaring_type
        record = DecomposedMember(
            depth=state.depth,
            name=name,
            declaring_type_name=self.formatter.format_type_name(declaring_type),
            declaring_type_full_name=self.type_full_name(declaring_type),
            member_attributes=MemberAttributes.EXTENSION,
            computation_time=self._read_elapsed_ms(),
            allocated_bytes=self.memory_diagnoser.read_allocated_bytes(),
            value=value,
        )
        state.members.append(record)
        return record

    def write_element_member(
        self, state: TraversalState, index: int, value: DecomposedValue
    ) -> DecomposedMember:
        type_name = self.formatter.format_type_name(state.declaring_type)
        record = DecomposedMember(
            depth=state.depth,
            name=f"{type_name.replace('[]', '')}[{index}]",
            declaring_type_name=ITERABLE_TYPE_NAME,
            declaring_type_full_name=ITERABLE_TYPE_FULL_NAME,
            member_attributes=MemberAttributes.PROPERTY,
            value=value,
        )
        state.members.append(record)
        return record

    def _read_elapsed_ms(self) -> float:
        return self.time_diagnoser.read_elapsed_time().total_seconds() * 1000
