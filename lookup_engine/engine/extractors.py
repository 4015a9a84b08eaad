"""Member extraction, one hierarchy level at a time.

A level is one class of the walked hierarchy. Only what that class itself
declares is considered: its own ``__dict__`` and its own annotations.
Inherited members are reached by walking the other levels.

Classification of a class dict entry:
- staticmethod / classmethod / builtin classmethod  -> static method
- function / builtin method descriptor              -> instance method
- property / cached_property / getset descriptor    -> instance property
- any other object implementing ``__get__``          -> instance property
- slot member descriptor                             -> instance field
- object exposing connect() and disconnect()         -> event
- anything else                                      -> static field

Annotated names that are not ClassVar are instance fields, whether or not
the class also holds a default for them.
"""

import inspect
import logging
import types
import typing
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any

from ..config import DecomposeOptions
from ..core.descriptors import ContextExtender, Extender, ExtensionManager, MethodResolver
from ..core.diagnostics import MemoryDiagnoser, TimeDiagnoser
from ..core.members import Evaluation, MemberInfo
from ..core.models import MemberAttributes
from .evaluator import ValueEvaluator
from .state import TraversalState
from .writer import ITERABLE_TYPE_NAME, DecompositionWriter

logger = logging.getLogger(__name__)

_STATIC_METHOD_TYPES = (
    staticmethod,
    classmethod,
    types.ClassMethodDescriptorType,
    types.BuiltinFunctionType,
)
_INSTANCE_METHOD_TYPES = (
    types.FunctionType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
)
_PROPERTY_TYPES = (property, cached_property, types.GetSetDescriptorType)

# C-level methods: no Python frame, no annotations
_BUILTIN_METHOD_TYPES = (
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.ClassMethodDescriptorType,
    types.BuiltinFunctionType,
)

_NO_VALUE_ANNOTATIONS = (None, type(None), "None", typing.NoReturn, "NoReturn", typing.Never, "Never")

VOID_METHOD_MESSAGE = "Method doesn't return a value"
UNSUPPORTED_OVERLOAD_MESSAGE = "Unsupported method overload"
ASYNC_METHOD_MESSAGE = "Asynchronous method can't be evaluated synchronously"


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_private(name: str) -> bool:
    return name.startswith("_")


@dataclass(frozen=True)
class EnumerationPolicy:
    """Which members of a level are enumerated."""

    instance: bool = True
    static: bool = False
    private: bool = False

    @classmethod
    def for_instance(cls, options: DecomposeOptions) -> "EnumerationPolicy":
        return cls(
            instance=True,
            static=options.include_static_members,
            private=options.include_private_members,
        )

    @classmethod
    def for_static(cls, options: DecomposeOptions) -> "EnumerationPolicy":
        return cls(instance=False, static=True, private=options.include_private_members)

    def accepts(self, member: MemberInfo) -> bool:
        if member.is_private and not self.private:
            return False
        return self.static if member.is_static else self.instance


@dataclass
class LevelScan:
    """Members declared by one class, grouped by kind, in declaration order."""

    fields: list[MemberInfo] = field(default_factory=list)
    properties: list[MemberInfo] = field(default_factory=list)
    methods: list[MemberInfo] = field(default_factory=list)
    events: list[MemberInfo] = field(default_factory=list)


def scan_level(level: type) -> LevelScan:
    """Classify everything ``level`` declares itself."""
    scan = LevelScan()
    namespace = vars(level)
    claimed: set[str] = set()

    for name, annotation in _own_annotations(level).items():
        if is_dunder(name) or _is_classvar(annotation):
            continue
        if name in namespace and _is_accessor(namespace[name]):
            continue
        scan.fields.append(
            MemberInfo(name=name, kind=MemberAttributes.FIELD, is_private=is_private(name))
        )
        claimed.add(name)

    for name, attr in namespace.items():
        if is_dunder(name) or name in claimed:
            continue

        private = is_private(name)
        if _is_event(attr):
            scan.events.append(
                MemberInfo(name=name, kind=MemberAttributes.EVENT, is_private=private, declared=attr)
            )
        elif isinstance(attr, _STATIC_METHOD_TYPES):
            scan.methods.append(
                MemberInfo(
                    name=name,
                    kind=MemberAttributes.METHOD,
                    is_static=True,
                    is_private=private,
                    declared=attr,
                )
            )
        elif isinstance(attr, _INSTANCE_METHOD_TYPES):
            scan.methods.append(
                MemberInfo(name=name, kind=MemberAttributes.METHOD, is_private=private, declared=attr)
            )
        elif isinstance(attr, types.MemberDescriptorType):
            scan.fields.append(
                MemberInfo(name=name, kind=MemberAttributes.FIELD, is_private=private, declared=attr)
            )
        elif isinstance(attr, _PROPERTY_TYPES) or hasattr(type(attr), "__get__"):
            scan.properties.append(
                MemberInfo(name=name, kind=MemberAttributes.PROPERTY, is_private=private, declared=attr)
            )
        else:
            scan.fields.append(
                MemberInfo(
                    name=name,
                    kind=MemberAttributes.FIELD,
                    is_static=True,
                    is_private=private,
                    declared=attr,
                )
            )

    return scan


def undeclared_attributes(instance: Any) -> list[str]:
    """Instance ``__dict__`` keys that no class in the hierarchy declares."""
    try:
        instance_dict = vars(instance)
    except TypeError:
        return []

    declared: set[str] = set()
    for cls in type(instance).__mro__:
        declared.update(vars(cls))
        declared.update(_own_annotations(cls))

    return [
        name
        for name in instance_dict
        if isinstance(name, str) and not is_dunder(name) and name not in declared
    ]


def method_parameters(declared: Any) -> tuple[inspect.Parameter, ...]:
    """Parameters a caller must supply, i.e. without the bound self/cls."""
    function = declared.__func__ if isinstance(declared, (staticmethod, classmethod)) else declared
    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return ()

    if parameters and not isinstance(declared, (staticmethod, types.BuiltinFunctionType)):
        parameters = parameters[1:]
    return tuple(parameters)


def is_async(declared: Any) -> bool:
    """Whether calling the method only creates a coroutine or async generator."""
    function = getattr(declared, "__func__", declared)
    return inspect.iscoroutinefunction(function) or inspect.isasyncgenfunction(function)


def returns_value(declared: Any) -> bool:
    """Whether the method declares a return value.

    Only a return annotation other than None/NoReturn/Never counts.
    Unannotated methods, including every C-level method, are treated as
    returning nothing: calling them could mutate the object being explored.
    """
    function = getattr(declared, "__func__", declared)
    try:
        annotation = inspect.signature(function).return_annotation
    except (TypeError, ValueError):
        return False

    if annotation is inspect.Signature.empty:
        return False
    return not any(annotation is marker or annotation == marker for marker in _NO_VALUE_ANNOTATIONS)


class MemberExtractor:
    """Evaluates the members of one level and hands them to the writer.

    Every evaluation step (one field read, one property read, one method
    call, one extension call) runs inside its own diagnoser window and has
    its exceptions captured, so one broken member never stops the walk.
    """

    def __init__(
        self,
        options: DecomposeOptions,
        evaluator: ValueEvaluator,
        writer: DecompositionWriter,
        time_diagnoser: TimeDiagnoser,
        memory_diagnoser: MemoryDiagnoser,
    ):
        self.options = options
        self.evaluator = evaluator
        self.writer = writer
        self.time_diagnoser = time_diagnoser
        self.memory_diagnoser = memory_diagnoser

    # ── Fields ──

    def decompose_fields(
        self,
        state: TraversalState,
        target: Any,
        scan: LevelScan,
        policy: EnumerationPolicy,
        undeclared: Iterable[str] = (),
    ) -> None:
        for member in scan.fields:
            if not policy.accepts(member):
                continue
            if member.is_static:
                evaluation = self._measure(lambda: member.declared)
            else:
                evaluation = self._measure(lambda: getattr(target, member.name))
            self._write(state, member, evaluation)

        for name in undeclared:
            member = MemberInfo(name=name, kind=MemberAttributes.FIELD, is_private=is_private(name))
            if not policy.accepts(member):
                continue
            evaluation = self._measure(lambda: vars(target)[name])
            self._write(state, member, evaluation)

    # ── Properties ──

    def decompose_properties(
        self, state: TraversalState, target: Any, scan: LevelScan, policy: EnumerationPolicy
    ) -> None:
        for member in scan.properties:
            if not policy.accepts(member):
                continue
            evaluation = self._measure(lambda: getattr(target, member.name))
            self._write(state, member, evaluation)

    # ── Methods ──

    def decompose_methods(
        self, state: TraversalState, target: Any, scan: LevelScan, policy: EnumerationPolicy
    ) -> None:
        for member in scan.methods:
            if not policy.accepts(member):
                continue
            # Non-public C-level methods are interpreter internals
            if member.is_private and isinstance(member.declared, _BUILTIN_METHOD_TYPES):
                continue

            member = replace(member, parameters=method_parameters(member.declared))
            evaluation = self._try_resolve(state, member)
            if evaluation is None:
                if not self._is_supported(member):
                    if not self.options.include_unsupported:
                        continue
                    evaluation = Evaluation(fault=self._unsupported_fault(member))
                else:
                    evaluation = self._measure(lambda: getattr(target, member.name)())

            self._write(state, member, evaluation)

    def _try_resolve(self, state: TraversalState, member: MemberInfo) -> Evaluation | None:
        """Ask the level descriptor for a substitute evaluation target."""
        descriptor = state.declaring_descriptor
        if not isinstance(descriptor, MethodResolver):
            return None

        try:
            substitute = descriptor.resolve(member.name, member.parameters)
        except Exception as exc:
            logger.debug("Resolver for %s raised %s", member.name, exc)
            return Evaluation(fault=exc)

        if substitute is None:
            return None
        if callable(substitute):
            return self._measure(substitute)
        return Evaluation(value=substitute)

    def _is_supported(self, member: MemberInfo) -> bool:
        return (
            returns_value(member.declared)
            and not member.parameters
            and not is_async(member.declared)
        )

    def _unsupported_fault(self, member: MemberInfo) -> Exception:
        if is_async(member.declared):
            return NotImplementedError(ASYNC_METHOD_MESSAGE)
        if not returns_value(member.declared):
            return RuntimeError(VOID_METHOD_MESSAGE)
        return NotImplementedError(UNSUPPORTED_OVERLOAD_MESSAGE)

    # ── Events ──

    def decompose_events(
        self, state: TraversalState, scan: LevelScan, policy: EnumerationPolicy
    ) -> None:
        for member in scan.events:
            if not policy.accepts(member):
                continue
            self._write(state, member, Evaluation(value=member.declared))

    # ── Extensions ──

    def execute_extensions(self, state: TraversalState) -> None:
        descriptor = state.declaring_descriptor
        manager = ExtensionManager()
        context = self.options.context

        if isinstance(descriptor, ContextExtender):
            with_context = True
        elif isinstance(descriptor, Extender):
            with_context = False
        else:
            return

        try:
            descriptor.register_extensions(manager)
        except Exception as exc:
            logger.warning(
                "Extension registration failed for %s: %s",
                type(descriptor).__name__,
                exc,
            )
            return

        for name, handler in manager.handlers.items():
            evaluation = self._measure(
                lambda: handler(context) if with_context else handler()
            )
            if evaluation.failed:
                logger.debug("Extension %s raised %s", name, evaluation.fault)
            value = self.evaluator.evaluate_member(name, evaluation.payload)
            self.writer.write_extension_member(state, name, value)

    # ── Sequence elements ──

    def decompose_elements(self, state: TraversalState, root: Any) -> None:
        """Emit one member per element of an iterable root.

        One-shot iterators are skipped, iterating them would consume them.
        An exception raised by the iteration itself becomes the value of a
        final element member. The iterator is closed in every case.
        """
        if not isinstance(root, Iterable) or isinstance(root, Iterator):
            return

        try:
            iterator = iter(root)
        except Exception as exc:
            self._write_element(state, 0, exc)
            return

        index = 0
        try:
            while True:
                try:
                    element = next(iterator)
                except StopIteration:
                    break
                except Exception as exc:
                    logger.debug("Iteration of %s failed at index %d: %s", type(root).__name__, index, exc)
                    self._write_element(state, index, exc)
                    break

                self._write_element(state, index, element)
                index += 1
                state.depth -= 1
        finally:
            _close_iterator(iterator)

    def _write_element(self, state: TraversalState, index: int, element: Any) -> None:
        value = self.evaluator.evaluate_member(ITERABLE_TYPE_NAME, element)
        self.writer.write_element_member(state, index, value)

    # ── Shared ──

    def _measure(self, step: Callable[[], Any]) -> Evaluation:
        self.memory_diagnoser.start()
        self.time_diagnoser.start()
        try:
            return Evaluation.capture(step)
        finally:
            self.time_diagnoser.stop()
            self.memory_diagnoser.stop()

    def _write(self, state: TraversalState, member: MemberInfo, evaluation: Evaluation) -> None:
        if evaluation.failed:
            logger.debug(
                "Member %s.%s evaluated to %s",
                state.declaring_type.__name__,
                member.name,
                type(evaluation.fault).__name__,
            )
        value = self.evaluator.evaluate_member(member.name, evaluation.payload)
        self.writer.write_member(state, member, value)


def _own_annotations(cls: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls))
    except Exception:
        return {}


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _is_accessor(attr: Any) -> bool:
    return isinstance(attr, _STATIC_METHOD_TYPES + _INSTANCE_METHOD_TYPES + _PROPERTY_TYPES)


def _is_event(attr: Any) -> bool:
    if isinstance(attr, type):
        return False
    try:
        return callable(getattr(attr, "connect", None)) and callable(
            getattr(attr, "disconnect", None)
        )
    except Exception:
        return False


def _close_iterator(iterator: Iterator) -> None:
    close = getattr(iterator, "close", None)
    if not callable(close):
        return
    try:
        close()
    except Exception as exc:
        logger.warning("Closing iterator %s failed: %s", type(iterator).__name__, exc)
