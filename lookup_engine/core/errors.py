"""Exceptions raised by the decomposition engine.

Only these two failure classes escape a decomposition call. Every other
exception raised while reading a member is captured and rendered as that
member's value.
"""


class LookupEngineError(Exception):
    """Base class for engine failures."""


class EngineNotInitializedError(LookupEngineError, RuntimeError):
    """Traversal state was read before the composer set it."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Traversal state '{field_name}' was accessed before the engine initialized it"
        )


class RedirectionContractError(LookupEngineError, ValueError):
    """A Variant carrying no value reached the member evaluation step."""
