"""Decomposition orchestrator.

A decomposition walks one structural level of a value:

1. The root value is redirected (if enabled) and described.
2. Its class hierarchy is linearized, most derived class first.
3. For each class: resolve the class descriptor, then extract fields,
   properties, methods and events declared by that class, then run the
   descriptor's extensions.
4. If the root is iterable, one member per element is appended.

Members of a class are at depth = distance from the leaf class (leaf is 0).
Element members continue a counter that decremented once per walked
level: after ``N`` levels, element ``i`` is at depth ``-(N + i)``.

Static decomposition takes a class instead of a value and only visits its
static members (static methods, class methods, class attributes); it has
no element pass and runs no extensions.
"""

import logging
from typing import Any, Generic, TypeVar

from ..config import DecomposeOptions
from ..core.diagnostics import MemoryDiagnoser, TimeDiagnoser
from ..core.models import DecomposedMember, DecomposedObject
from .evaluator import ValueEvaluator
from .extractors import EnumerationPolicy, MemberExtractor, scan_level, undeclared_attributes
from .hierarchy import linearize
from .state import TraversalState
from .writer import DecompositionWriter

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext")


class LookupComposer(Generic[TContext]):
    """Decomposes values and classes into DecomposedObject records.

    Each call builds its own traversal state, so an instance can be reused
    for successive calls. Calls must not overlap: the diagnosers are shared
    by the instance.

    Example:
        composer = LookupComposer(DecomposeOptions(include_private_members=True))
        result = composer.decompose(widget)
        for member in result.members:
            print(member.name, member.value.name)
    """

    def __init__(self, options: DecomposeOptions[TContext] | None = None):
        self.options: DecomposeOptions[TContext] = options or DecomposeOptions()
        self.time_diagnoser = TimeDiagnoser()
        self.memory_diagnoser = MemoryDiagnoser()
        self.writer = DecompositionWriter(
            self.options.formatter, self.time_diagnoser, self.memory_diagnoser
        )
        self.evaluator: ValueEvaluator[TContext] = ValueEvaluator(self.options, self.writer)
        self.extractor = MemberExtractor(
            self.options,
            self.evaluator,
            self.writer,
            self.time_diagnoser,
            self.memory_diagnoser,
        )

    # ── Instance decomposition ──

    def decompose(self, value: Any) -> DecomposedObject:
        """Decompose a value and its members."""
        if value is None:
            return self.writer.create_null_object()

        value, descriptor = self.evaluator.evaluate_root(value)
        if value is None:
            return self.writer.create_null_object()

        logger.debug("Decomposing %s instance", type(value).__name__)
        members = self._decompose_instance_members(value)
        return self.writer.create_instance_object(value, descriptor, members)

    def decompose_object(self, value: Any) -> DecomposedObject:
        """Describe a value without decomposing its members."""
        if value is None:
            return self.writer.create_null_object()

        value, descriptor = self.evaluator.evaluate_root(value)
        if value is None:
            return self.writer.create_null_object()
        return self.writer.create_instance_object(value, descriptor)

    def decompose_members(self, value: Any) -> list[DecomposedMember]:
        """Decompose only the members of a value."""
        if value is None:
            return []

        value, _ = self.evaluator.evaluate_root(value)
        if value is None:
            return []
        return self._decompose_instance_members(value)

    # ── Static decomposition ──

    def decompose_static(self, type_: type) -> DecomposedObject:
        """Decompose the static members of a class and its ancestors."""
        if not isinstance(type_, type):
            raise TypeError(f"Static decomposition expects a class, got {type(type_).__name__}")

        descriptor = self.options.type_resolver(None, type_)
        logger.debug("Decomposing %s statically", type_.__name__)
        members = self._decompose_static_members(type_)
        return self.writer.create_static_object(type_, descriptor, members)

    # ── Walks ──

    def _decompose_instance_members(self, value: Any) -> list[DecomposedMember]:
        state = TraversalState()
        state.begin()

        policy = EnumerationPolicy.for_instance(self.options)
        value_type = type(value)
        levels = linearize(value_type, self.options.include_root)

        for depth, level in enumerate(levels):
            descriptor = self.options.type_resolver(value, level)
            state.enter_level(level, descriptor, depth)

            scan = scan_level(level)
            undeclared = undeclared_attributes(value) if depth == 0 else ()

            self.extractor.decompose_fields(state, value, scan, policy, undeclared)
            self.extractor.decompose_properties(state, value, scan, policy)
            self.extractor.decompose_methods(state, value, scan, policy)
            self.extractor.decompose_events(state, scan, policy)
            self.extractor.execute_extensions(state)

        state.declaring_type = value_type
        state.depth = -len(levels)
        self.extractor.decompose_elements(state, value)

        logger.debug(
            "Decomposed %s: %d level(s), %d member(s)",
            value_type.__name__,
            len(levels),
            len(state.members),
        )
        return state.members

    def _decompose_static_members(self, type_: type) -> list[DecomposedMember]:
        state = TraversalState()
        state.begin()

        policy = EnumerationPolicy.for_static(self.options)
        for depth, level in enumerate(linearize(type_, self.options.include_root)):
            descriptor = self.options.type_resolver(None, level)
            state.enter_level(level, descriptor, depth)

            scan = scan_level(level)
            self.extractor.decompose_fields(state, type_, scan, policy)
            self.extractor.decompose_properties(state, type_, scan, policy)
            self.extractor.decompose_methods(state, type_, scan, policy)

        return state.members


# =============================================================================
# Convenience functions
# =============================================================================


def decompose(value: Any, options: DecomposeOptions | None = None) -> DecomposedObject:
    """Decompose a value with a fresh composer."""
    return LookupComposer(options).decompose(value)


def decompose_static(type_: type, options: DecomposeOptions | None = None) -> DecomposedObject:
    """Decompose the static members of a class with a fresh composer."""
    return LookupComposer(options).decompose_static(type_)


def decompose_object(value: Any, options: DecomposeOptions | None = None) -> DecomposedObject:
    """Describe a value without its members."""
    return LookupComposer(options).decompose_object(value)


def decompose_members(value: Any, options: DecomposeOptions | None = None) -> list[DecomposedMember]:
    """Decompose the members of a value without the root record."""
    return LookupComposer(options).decompose_members(value)
