"""Traversal state of one decomposition call."""

from typing import Any

from ..core.descriptors import Descriptor
from ..core.errors import EngineNotInitializedError
from ..core.models import DecomposedMember

_UNSET: Any = object()


class TraversalState:
    """Mutable state of a single walk, threaded through every extractor.

    The composer creates one per call and sets each field as the walk
    reaches it. Reading a field before it is set is an engine bug and
    raises EngineNotInitializedError.
    """

    def __init__(self) -> None:
        self._depth: int = _UNSET
        self._declaring_type: type = _UNSET
        self._declaring_descriptor: Descriptor = _UNSET
        self._members: list[DecomposedMember] = _UNSET

    def _require(self, name: str) -> Any:
        value = getattr(self, f"_{name}")
        if value is _UNSET:
            raise EngineNotInitializedError(name)
        return value

    @property
    def depth(self) -> int:
        return self._require("depth")

    @depth.setter
    def depth(self, value: int) -> None:
        self._depth = value

    @property
    def declaring_type(self) -> type:
        return self._require("declaring_type")

    @declaring_type.setter
    def declaring_type(self, value: type) -> None:
        self._declaring_type = value

    @property
    def declaring_descriptor(self) -> Descriptor:
        return self._require("declaring_descriptor")

    @declaring_descriptor.setter
    def declaring_descriptor(self, value: Descriptor) -> None:
        self._declaring_descriptor = value

    @property
    def members(self) -> list[DecomposedMember]:
        return self._require("members")

    @members.setter
    def members(self, value: list[DecomposedMember]) -> None:
        self._members = value

    def begin(self) -> None:
        """Start an empty output buffer."""
        self._members = []

    def enter_level(self, declaring_type: type, descriptor: Descriptor, depth: int) -> None:
        self._declaring_type = declaring_type
        self._declaring_descriptor = descriptor
        self._depth = depth
