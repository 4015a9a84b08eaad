"""Value evaluation and redirection.

Redirection lets a descriptor substitute the value it describes with
another one (for example, an id with the entity it refers to). The
substitution is transitive: the replacement is described again and may
itself be redirected, until a descriptor declines. There is no step limit;
a resolver whose descriptors always redirect will loop forever.
"""

import logging
from typing import Any, Generic, TypeVar

from ..config import DecomposeOptions
from ..core.descriptors import ContextRedirector, Descriptor, Redirector, Variant
from ..core.errors import RedirectionContractError
from ..core.models import DecomposedValue
from .writer import DecompositionWriter

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext")

ROOT_TARGET = ""


class ValueEvaluator(Generic[TContext]):
    """Resolves descriptors for values and follows redirection chains."""

    def __init__(self, options: DecomposeOptions[TContext], writer: DecompositionWriter):
        self.options = options
        self.writer = writer

    def describe(self, value: Any) -> Descriptor:
        return self.options.type_resolver(value, None)

    def evaluate_root(self, value: Any) -> tuple[Any, Descriptor]:
        """Redirect the root object of a decomposition."""
        descriptor = self.describe(value)
        if self.options.enable_redirection:
            value, descriptor = self._follow_redirects(
                ROOT_TARGET, value, descriptor, descriptor.description
            )
        return value, descriptor

    def evaluate_member(self, target: str, value: Any) -> DecomposedValue:
        """Describe a member value, following redirects for ``target``."""
        if value is None:
            return self.writer.create_empty_value()
        if isinstance(value, Variant) and value.value is None:
            return self.writer.create_empty_value()

        value, descriptor = self.redirect_value(target, value)
        if value is None:
            return self.writer.create_empty_value()
        return self.writer.create_value(value, descriptor)

    def redirect_value(self, target: str, value: Any) -> tuple[Any, Descriptor]:
        """Unwrap a Variant, then redirect. Returns the final value and descriptor.

        The final descriptor's description is overwritten with the last
        non-None description seen along the chain, falling back to the
        Variant's own description.

        Raises:
            RedirectionContractError: If ``value`` is a Variant carrying None.
        """
        variant = value if isinstance(value, Variant) else None
        if variant is not None:
            if variant.value is None:
                raise RedirectionContractError(
                    "A Variant without a value must be handled before decomposition"
                )
            value = variant.value

        descriptor = self.describe(value)
        description = descriptor.description
        if variant is not None and description is None:
            description = variant.description

        if self.options.enable_redirection:
            value, descriptor = self._follow_redirects(target, value, descriptor, description)
        else:
            descriptor.description = description
        return value, descriptor

    def _follow_redirects(
        self, target: str, value: Any, descriptor: Descriptor, description: str | None
    ) -> tuple[Any, Descriptor]:
        steps = 0
        while True:
            redirected, replacement = self._try_redirect(descriptor, target)
            if not redirected:
                break

            steps += 1
            value = replacement
            descriptor = self.describe(value)
            if descriptor.description is not None:
                description = descriptor.description

        if steps:
            logger.debug("Value for %r redirected %d time(s) to %s", target, steps, type(value).__name__)
        descriptor.description = description
        return value, descriptor

    def _try_redirect(self, descriptor: Descriptor, target: str) -> tuple[bool, Any]:
        if isinstance(descriptor, ContextRedirector):
            return descriptor.try_redirect(target, self.options.context)
        if isinstance(descriptor, Redirector):
            return descriptor.try_redirect(target)
        return False, None
