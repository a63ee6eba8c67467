"""Static trace synthesis — source snippet to operation trace.

Composes: parse → discover_array → analyze_loops → ShadowExecutionEngine.
Each call owns its recorder and shadow array, so concurrent calls never
share state.
"""

from __future__ import annotations

import logging
from typing import Optional

from .discovery import discover_array
from .loops import analyze_loops
from .operations import Trace
from .parser import ParserFactory, SourceParser
from .recorder import TraceRecorder
from .shadow import ShadowExecutionEngine
from .synth_types import SynthesisConfig

logger = logging.getLogger(__name__)


def synthesize(
    code: str,
    config: SynthesisConfig = SynthesisConfig(),
    parser_factory: Optional[ParserFactory] = None,
) -> Trace:
    """Turn *code* into a trace without executing it.

    Args:
        code: Source snippet that declares an array of numbers.
        config: Synthesis configuration.
        parser_factory: Overrides where tree-sitter parsers come from.

    Returns:
        A Trace that opens with ``init`` and closes with ``complete``.

    Raises:
        NoArrayFound: The snippet declares no numeric array.
        SourceSyntaxError: The snippet does not parse.
    """
    logger.info("Synthesizing trace (%s, %d bytes)", config.language, len(code))
    tree = SourceParser(parser_factory).parse(code, config.language)
    root = tree.root_node

    array = discover_array(root)
    recorder = TraceRecorder(array.values)

    structure = analyze_loops(root, array.name, len(array))
    ShadowExecutionEngine(recorder, array.name, config).run(root, structure)
    logger.info("Total operations before complete: %d", len(recorder))
    return recorder.complete()
