"""Intermediate member types passed from the extractors to the writer."""

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .models import MemberAttributes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberInfo:
    """A member found at one hierarchy level.

    ``declared`` is the raw object from the level's class dict (function,
    property, descriptor, plain value), or None for members with no class
    level declaration such as undeclared instance attributes.
    """

    name: str
    kind: MemberAttributes
    is_static: bool = False
    is_private: bool = False
    declared: Any = None
    parameters: tuple[inspect.Parameter, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Evaluation:
    """Outcome of one evaluation step: a value, or the exception it raised."""

    value: Any = None
    fault: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.fault is not None

    @property
    def ok(self) -> bool:
        return self.fault is None

    @property
    def payload(self) -> Any:
        """What the writer renders: the fault if one was captured, else the value."""
        return self.fault if self.fault is not None else self.value

    @classmethod
    def capture(cls, step: Callable[[], Any]) -> "Evaluation":
        """Run ``step`` and capture its result or the exception it raised."""
        try:
            return cls(value=step())
        except Exception as exc:
            logger.debug("Evaluation step raised %s: %s", type(exc).__name__, exc)
            return cls(fault=exc)
