"""Shadow Execution Engine — replay recognised structure against a shadow array."""

from __future__ import annotations

import logging
from typing import Callable

from tree_sitter import Node

from . import constants
from .loops import LoopStructure
from .nodes import body_statements, iter_nodes
from .operations import Number
from .patterns import (
    ComparisonPattern,
    Pattern,
    SetPattern,
    SwapPattern,
    classify,
    is_swap,
)
from .recorder import TraceRecorder
from .synth_types import LoopShape, SynthesisConfig

logger = logging.getLogger(__name__)

_GUARD_EVALUATORS: dict[str, Callable[[Number, Number], bool]] = {
    ">": lambda a, b: a > b,
    "<": lambda a, b: a < b,
    ">=": lambda a, b: a >= b,
    "<=": lambda a, b: a <= b,
}


class ShadowExecutionEngine:
    """Single forward pass over concrete bounds; never re-evaluates a bound."""

    def __init__(
        self,
        recorder: TraceRecorder,
        array_name: str,
        config: SynthesisConfig = SynthesisConfig(),
    ):
        self._recorder = recorder
        self._name = array_name
        self._config = config
        self._dispatch: dict[LoopShape, Callable[[Node, LoopStructure], None]] = {
            LoopShape.NONE: self._run_direct,
            LoopShape.SINGLE: self._run_single,
            LoopShape.NESTED: self._run_nested,
        }

    @property
    def _length(self) -> int:
        return len(self._recorder.shadow)

    def run(self, root: Node, structure: LoopStructure) -> None:
        self._dispatch[structure.shape](root, structure)

    def _note(self, message: str) -> None:
        logger.info(message)
        if self._config.emit_comments:
            self._recorder.comment(message)

    # ── replay of single statements ──────────────────────────────

    def _replay(self, pattern: Pattern) -> None:
        if isinstance(pattern, SwapPattern):
            if pattern.indices is None:
                logger.debug("Skipping swap with non-literal indices")
                return
            logger.debug("Found swap: %s", pattern.indices)
            self._recorder.swap(*pattern.indices)
        elif isinstance(pattern, SetPattern):
            logger.debug("Found set: [%d] = %s", pattern.index, pattern.value)
            self._recorder.set(pattern.index, pattern.value)

    # ── no loops ─────────────────────────────────────────────────

    def _run_direct(self, root: Node, structure: LoopStructure) -> None:
        logger.info("No loops found, extracting direct operations")
        self._scan(root)

    def _scan(self, node: Node) -> None:
        """Document-order scan, ignoring the control flow around statements.

        A matched statement or comparison is not searched any further.
        """
        if node.type in constants.FUNCTION_NODE_TYPES:
            return
        if node.type in (
            constants.EXPRESSION_STATEMENT_NODE_TYPE,
            constants.BINARY_NODE_TYPE,
        ):
            pattern = classify(node, self._name, self._config.unresolved_index_policy)
            if isinstance(pattern, (SwapPattern, SetPattern)):
                self._replay(pattern)
                return
            if isinstance(pattern, ComparisonPattern):
                self._recorder.compare(*pattern.indices)
                return
        for child in node.children:
            self._scan(child)

    # ── one loop ─────────────────────────────────────────────────

    def _replayable(self, statements: list[Node]) -> list[Pattern]:
        """Swap and set patterns among *statements*, classified once."""
        patterns: list[Pattern] = []
        for statement in statements:
            if statement.type != constants.EXPRESSION_STATEMENT_NODE_TYPE:
                continue
            pattern = classify(statement, self._name, self._config.unresolved_index_policy)
            if isinstance(pattern, SwapPattern) and pattern.indices is None:
                logger.debug("Skipping swap with non-literal indices")
            elif isinstance(pattern, (SwapPattern, SetPattern)):
                patterns.append(pattern)
        return patterns

    def _run_single(self, root: Node, structure: LoopStructure) -> None:
        bounds = structure.outer_bounds
        self._note(f"Single loop: {bounds.start} to {bounds.end}")
        patterns = self._replayable(
            body_statements(structure.outer.child_by_field_name("body"))
        )
        if not patterns:
            logger.info("Loop body has nothing to replay")
            return
        for _ in bounds.indices():
            for pattern in patterns:
                self._replay(pattern)

    # ── nested loops ─────────────────────────────────────────────

    def _holds_swap(self, statement: Node) -> bool:
        return any(
            n.type == constants.EXPRESSION_STATEMENT_NODE_TYPE and is_swap(n, self._name)
            for n in iter_nodes(statement)
        )

    def _inner_sets(self, inner: Node) -> tuple[list[Pattern], list[Pattern]]:
        """Set statements of the inner body, split around the one holding the swap.

        Without a swap every set runs ahead of the compare.
        """
        statements = body_statements(inner.child_by_field_name("body"))
        pivot = next(
            (k for k, s in enumerate(statements) if self._holds_swap(s)), len(statements)
        )

        def sets(part: list[Node]) -> list[Pattern]:
            return [p for p in self._replayable(part) if isinstance(p, SetPattern)]

        return sets(statements[:pivot]), sets(statements[pivot + 1:])

    def _should_swap(self, structure: LoopStructure, j: int) -> bool:
        guard = structure.guard
        if guard.always_swap:
            return True
        if not guard.has_swap:
            return False
        evaluate = _GUARD_EVALUATORS.get(guard.operator or "")
        if evaluate is None:
            return False
        shadow = self._recorder.shadow
        return evaluate(shadow[j], shadow[j + 1])

    def _run_nested(self, root: Node, structure: LoopStructure) -> None:
        outer, inner, guard = structure.outer_bounds, structure.inner_bounds, structure.guard
        self._note(
            f"Nested loops: outer({outer.start}-{outer.end}), "
            f"inner depends on outer: {str(structure.inner_depends_on_outer).lower()}"
        )
        logger.info("Has swap: %s, Always swap: %s", guard.has_swap, guard.always_swap)
        before, after = self._inner_sets(structure.inner)
        mark_sorted = structure.inner_depends_on_outer and not guard.always_swap
        for i in outer.indices():
            inner_end = structure.inner_end(i, self._length)
            for j in range(inner.start, inner_end):
                for pattern in before:
                    self._replay(pattern)
                if self._recorder.compare(j, j + 1) and self._should_swap(structure, j):
                    self._recorder.swap(j, j + 1)
                for pattern in after:
                    self._replay(pattern)
            if mark_sorted:
                self._recorder.sorted([self._length - i - 1])
