"""Composable API functions for the trace pipelines.

Each function corresponds to a CLI workflow but is callable
programmatically without argparse.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

from . import constants
from .delivery import operations_message, to_json
from .generators import Algorithm, generate
from .operations import Number, Trace
from .parser import SourceParser
from .synth_types import SynthesisConfig, UnresolvedIndexPolicy
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


def parse_source(source: str, language: str = constants.DEFAULT_LANGUAGE):
    """Parse *source* with tree-sitter, rejecting snippets with syntax errors.

    Args:
        source: The source code text.
        language: ``"javascript"`` or ``"typescript"``.

    Returns:
        The tree-sitter Tree.
    """
    return SourceParser().parse(source, language)


def synthesize_trace(
    source: str,
    language: str = constants.DEFAULT_LANGUAGE,
    emit_comments: bool = True,
    reject_unresolved: bool = False,
) -> Trace:
    """Synthesize a trace from source code.

    Args:
        source: The source code text.
        language: Source language name.
        emit_comments: Include loop-entry ``comment`` events.
        reject_unresolved: Drop comparisons whose indices are not literals
            instead of using placeholder indices.

    Returns:
        The synthesized Trace.
    """
    config = SynthesisConfig(
        language=language,
        emit_comments=emit_comments,
        unresolved_index_policy=(
            UnresolvedIndexPolicy.REJECT
            if reject_unresolved
            else UnresolvedIndexPolicy.PLACEHOLDER
        ),
    )
    return synthesize(source, config)


def generate_trace(
    algorithm: Union[Algorithm, str], values: Sequence[Number]
) -> Trace:
    """Generate a canonical trace for a named algorithm."""
    return generate(algorithm, values)


def dump_trace(trace: Trace) -> str:
    """Return a human-readable text dump, one operation per line."""
    width = len(str(max(len(trace) - 1, 0)))
    return "\n".join(f"  {idx:>{width}}  {op}" for idx, op in enumerate(trace))


def trace_to_json(trace: Trace, indent: int | None = None) -> str:
    """Serialize *trace* as a whole-trace ``operations`` message."""
    return to_json(operations_message(trace), indent=indent)
