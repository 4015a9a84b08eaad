"""Decomposition engine: hierarchy walk, extraction, redirection, writing."""

from .composer import (
    LookupComposer,
    decompose,
    decompose_members,
    decompose_object,
    decompose_static,
)
from .evaluator import ValueEvaluator
from .extractors import EnumerationPolicy, MemberExtractor, scan_level
from .hierarchy import linearize
from .state import TraversalState
from .writer import DecompositionWriter

__all__ = [
    "LookupComposer",
    "decompose",
    "decompose_static",
    "decompose_object",
    "decompose_members",
    "ValueEvaluator",
    "EnumerationPolicy",
    "MemberExtractor",
    "scan_level",
    "linearize",
    "TraversalState",
    "DecompositionWriter",
]
