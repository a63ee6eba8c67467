"""Loop Structure Analyzer — classify top-level loops and derive bounds."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from tree_sitter import Node

from . import constants
from .errors import ExtractionError
from .nodes import integer_literal, iter_nodes, node_text, unwrap
from .patterns import is_swap
from .synth_types import LoopShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoopBounds:
    """Concrete half-open range ``[start, end)`` plus the loop variable."""

    variable: str
    start: int
    end: int

    def indices(self) -> range:
        return range(self.start, self.end)


@dataclass(frozen=True)
class SwapGuard:
    """How swaps inside the inner loop body are triggered."""

    has_swap: bool = False
    operator: Optional[str] = None
    always_swap: bool = False


@dataclass(frozen=True)
class LoopStructure:
    shape: LoopShape
    loop_count: int = 0
    outer: Optional[Node] = None  # the only loop for SINGLE
    inner: Optional[Node] = None
    outer_bounds: Optional[LoopBounds] = None
    inner_bounds: Optional[LoopBounds] = None
    inner_depends_on_outer: bool = False
    guard: SwapGuard = SwapGuard()

    def inner_end(self, outer_index: int, array_length: int) -> int:
        """Effective inner upper bound for one outer iteration."""
        if self.inner_depends_on_outer:
            return array_length - outer_index - 1
        return array_length - 1


def collect_loops(root: Node) -> list[Node]:
    """Every ``for`` loop outside function bodies, in document order."""
    return [n for n in iter_nodes(root) if n.type == constants.FOR_NODE_TYPE]


def _bound_literal(node: Optional[Node]) -> Optional[int]:
    """Integer literal in a loop header, or None when it cannot be read."""
    try:
        return integer_literal(node)
    except ExtractionError as exc:
        logger.debug("Ignoring loop header literal: %s", exc)
        return None


def _loop_variable_and_start(loop: Node, default_variable: str) -> tuple[str, int]:
    init = loop.child_by_field_name("initializer")
    if init is None:
        return default_variable, 0
    if init.type in constants.DECLARATION_NODE_TYPES:
        declarators = [
            c for c in init.named_children if c.type == constants.DECLARATOR_NODE_TYPE
        ]
        if not declarators:
            return default_variable, 0
        name_node = declarators[0].child_by_field_name("name")
        variable = node_text(name_node) if name_node is not None else default_variable
        start = _bound_literal(declarators[0].child_by_field_name("value"))
        return variable, 0 if start is None else start
    init = unwrap(init)
    if init is not None and init.type == constants.ASSIGNMENT_NODE_TYPE:
        left = init.child_by_field_name("left")
        variable = node_text(left) if left is not None else default_variable
        start = _bound_literal(init.child_by_field_name("right"))
        return variable, 0 if start is None else start
    return default_variable, 0


def _condition_bound(loop: Node) -> Optional[Node]:
    """Right-hand operand of the loop test, when the test is binary."""
    test = unwrap(loop.child_by_field_name("condition"))
    if test is None or test.type != constants.BINARY_NODE_TYPE:
        return None
    return unwrap(test.child_by_field_name("right"))


def _is_length_access(node: Node) -> bool:
    if node.type != constants.MEMBER_NODE_TYPE:
        return False
    prop = node.child_by_field_name("property")
    return prop is not None and node_text(prop) == constants.LENGTH_PROPERTY


def loop_bounds(loop: Node, array_length: int, default_variable: str) -> LoopBounds:
    """Read ``[start, end)`` from a ``for`` header.

    A literal bound is taken as is, ``x.length`` means the array length and
    any other arithmetic bound is read conservatively as ``length - 1``.
    """
    variable, start = _loop_variable_and_start(loop, default_variable)
    end = array_length
    bound = _condition_bound(loop)
    if bound is not None:
        literal = _bound_literal(bound)
        if literal is not None:
            end = literal
        elif _is_length_access(bound):
            end = array_length
        elif bound.type == constants.BINARY_NODE_TYPE:
            end = array_length - 1
    return LoopBounds(variable=variable, start=start, end=end)


def expression_uses_variable(expr: Optional[Node], variable: str) -> bool:
    """Textual check: does *variable* appear in an arithmetic expression?"""
    expr = unwrap(expr)
    if expr is None:
        return False
    if expr.type == constants.IDENTIFIER_NODE_TYPE:
        return node_text(expr) == variable
    if expr.type == constants.BINARY_NODE_TYPE:
        return expression_uses_variable(
            expr.child_by_field_name("left"), variable
        ) or expression_uses_variable(expr.child_by_field_name("right"), variable)
    return False


def find_inner_loop(outer: Node) -> Optional[Node]:
    """First ``for`` loop found by preorder search of the outer body."""
    body = outer.child_by_field_name("body")
    if body is None:
        return None
    return next(
        (n for n in iter_nodes(body) if n.type == constants.FOR_NODE_TYPE), None
    )


def _contains_swap(node: Node, array_name: str) -> bool:
    return any(
        n.type == constants.EXPRESSION_STATEMENT_NODE_TYPE and is_swap(n, array_name)
        for n in iter_nodes(node)
    )


def _unconditional_swap(node: Node, array_name: str) -> bool:
    if node.type == constants.IF_NODE_TYPE:
        return False
    if node.type == constants.EXPRESSION_STATEMENT_NODE_TYPE and is_swap(
        node, array_name
    ):
        return True
    return any(
        _unconditional_swap(child, array_name)
        for child in node.children
        if child.type not in constants.FUNCTION_NODE_TYPES
    )


def find_swap_guard(body: Optional[Node], array_name: str) -> SwapGuard:
    """Locate the conditional that guards the swap, or an unconditional swap."""
    if body is None:
        return SwapGuard()
    for node in iter_nodes(body):
        if node.type != constants.IF_NODE_TYPE:
            continue
        consequence = node.child_by_field_name("consequence")
        if consequence is None or not _contains_swap(consequence, array_name):
            continue
        test = unwrap(node.child_by_field_name("condition"))
        operator = None
        if test is not None and test.type == constants.BINARY_NODE_TYPE:
            op_node = test.child_by_field_name("operator")
            operator = node_text(op_node) if op_node is not None else None
        return SwapGuard(has_swap=True, operator=operator)
    if _unconditional_swap(body, array_name):
        return SwapGuard(has_swap=True, always_swap=True)
    return SwapGuard()


def analyze_loops(root: Node, array_name: str, array_length: int) -> LoopStructure:
    """Classify the top-level loops of *root* as none / single / nested."""
    loops = collect_loops(root)
    logger.info("Found %d top-level for loops", len(loops))

    if not loops:
        return LoopStructure(shape=LoopShape.NONE)

    outer = loops[0]
    outer_bounds = loop_bounds(outer, array_length, constants.DEFAULT_OUTER_VARIABLE)
    single = LoopStructure(
        shape=LoopShape.SINGLE,
        loop_count=len(loops),
        outer=outer,
        outer_bounds=outer_bounds,
    )
    if len(loops) == 1:
        return single

    inner = find_inner_loop(outer)
    if inner is None:
        logger.info("No inner loop found, treating as single loop")
        return single

    inner_bounds = loop_bounds(inner, array_length, constants.DEFAULT_INNER_VARIABLE)
    bound = _condition_bound(inner)
    depends = (
        bound is not None
        and bound.type == constants.BINARY_NODE_TYPE
        and expression_uses_variable(bound, outer_bounds.variable)
    )
    guard = find_swap_guard(inner.child_by_field_name("body"), array_name)
    logger.info(
        "Nested loops: outer(%d-%d), inner depends on outer: %s, guard: %s",
        outer_bounds.start,
        outer_bounds.end,
        depends,
        guard,
    )
    return LoopStructure(
        shape=LoopShape.NESTED,
        loop_count=len(loops),
        outer=outer,
        inner=inner,
        outer_bounds=outer_bounds,
        inner_bounds=inner_bounds,
        inner_depends_on_outer=depends,
        guard=guard,
    )
