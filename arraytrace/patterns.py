"""Pattern Classifiers — recognise array-affecting source shapes.

The recogniser is closed over a small fixed grammar of shapes, all relative
to the discovered array identifier:

* ``arr[k]``                                   → ``AccessPattern``
* ``arr[a] > arr[b]`` (any relational/equality) → ``ComparisonPattern``
* ``[arr[a], arr[b]] = [arr[b], arr[a]]``       → ``SwapPattern``
* ``arr[k] = 7``                                → ``SetPattern``

Everything else is ``Unrecognized``.  No expression is ever evaluated:
indices are only understood when they are numeric literals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from tree_sitter import Node

from . import constants
from .errors import ExtractionError
from .nodes import integer_literal, node_text, numeric_literal, require_field, unwrap
from .operations import Number
from .synth_types import UnresolvedIndexPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessPattern:
    index_text: str
    index: Optional[int] = None  # literal index, None when it is an expression


@dataclass(frozen=True)
class ComparisonPattern:
    operator: str
    indices: tuple[int, int]
    resolved: bool  # False when a placeholder stood in for a variable index


@dataclass(frozen=True)
class SwapPattern:
    indices: Optional[tuple[int, int]]  # None unless both indices are literals

    @property
    def resolved(self) -> bool:
        return self.indices is not None


@dataclass(frozen=True)
class SetPattern:
    index: int
    value: Number


@dataclass(frozen=True)
class Unrecognized:
    node_type: str
    reason: str = ""


Pattern = Union[AccessPattern, ComparisonPattern, SwapPattern, SetPattern, Unrecognized]


def _normalized(text: str) -> str:
    return "".join(text.split())


def _assignment(node: Node) -> Optional[Node]:
    """The plain ``=`` assignment a statement consists of, if any."""
    expr = unwrap(node)
    if expr is None or expr.type != constants.ASSIGNMENT_NODE_TYPE:
        return None
    return expr


# ── access ───────────────────────────────────────────────────────


def access_pattern(node: Optional[Node], name: str) -> Optional[AccessPattern]:
    node = unwrap(node)
    if node is None or node.type != constants.SUBSCRIPT_NODE_TYPE:
        return None
    obj = node.child_by_field_name("object")
    if obj is None or obj.type != constants.IDENTIFIER_NODE_TYPE:
        return None
    if node_text(obj) != name:
        return None
    index_node = require_field(node, "index")
    return AccessPattern(
        index_text=_normalized(node_text(index_node)),
        index=integer_literal(index_node),
    )


def is_array_access(node: Optional[Node], name: str) -> bool:
    try:
        return access_pattern(node, name) is not None
    except ExtractionError:
        return False


# ── comparison ───────────────────────────────────────────────────


def is_comparison(node: Optional[Node], name: str) -> bool:
    node = unwrap(node)
    if node is None or node.type != constants.BINARY_NODE_TYPE:
        return False
    operator = node.child_by_field_name("operator")
    if operator is None or node_text(operator) not in constants.COMPARISON_OPERATORS:
        return False
    return is_array_access(node.child_by_field_name("left"), name) or is_array_access(
        node.child_by_field_name("right"), name
    )


def extract_comparison(
    node: Node,
    name: str,
    policy: UnresolvedIndexPolicy = UnresolvedIndexPolicy.PLACEHOLDER,
) -> Union[ComparisonPattern, Unrecognized]:
    """Indices of a comparison; variable indices become placeholders.

    The left operand falls back to index 0 and the right to index 1.  Under
    ``UnresolvedIndexPolicy.REJECT`` such comparisons are unrecognized.
    """
    node = unwrap(node)
    operator = node_text(require_field(node, "operator"))
    left = access_pattern(require_field(node, "left"), name)
    right = access_pattern(require_field(node, "right"), name)
    left_index = left.index if left is not None else None
    right_index = right.index if right is not None else None
    resolved = left_index is not None and right_index is not None
    if not resolved and policy == UnresolvedIndexPolicy.REJECT:
        return Unrecognized(node.type, "comparison index is not a literal")
    return ComparisonPattern(
        operator=operator,
        indices=(
            constants.LEFT_PLACEHOLDER_INDEX if left_index is None else left_index,
            constants.RIGHT_PLACEHOLDER_INDEX if right_index is None else right_index,
        ),
        resolved=resolved,
    )


# ── swap ─────────────────────────────────────────────────────────


def _swap_sides(node: Node, name: str) -> Optional[tuple[list, list]]:
    assignment = _assignment(node)
    if assignment is None:
        return None
    left = require_field(assignment, "left")
    right = require_field(assignment, "right")
    if left.type not in (
        constants.ARRAY_PATTERN_NODE_TYPE,
        constants.ARRAY_LITERAL_NODE_TYPE,
    ):
        return None
    if right.type != constants.ARRAY_LITERAL_NODE_TYPE:
        return None
    left_items = [c for c in left.named_children if c.type != "comment"]
    right_items = [c for c in right.named_children if c.type != "comment"]
    if len(left_items) != 2 or len(right_items) != 2:
        return None
    left_access = [access_pattern(item, name) for item in left_items]
    right_access = [access_pattern(item, name) for item in right_items]
    if any(a is None for a in left_access + right_access):
        return None
    return left_access, right_access


def is_swap(node: Node, name: str) -> bool:
    """True for ``[arr[a], arr[b]] = [arr[b], arr[a]]`` with any indices."""
    try:
        sides = _swap_sides(node, name)
    except ExtractionError:
        return False
    if sides is None:
        return False
    (l0, l1), (r0, r1) = sides
    return l0.index_text == r1.index_text and l1.index_text == r0.index_text


def extract_swap_indices(node: Node, name: str) -> Optional[tuple[int, int]]:
    """Literal indices of a swap statement, or None.

    A variable index anywhere on the left makes the statement unrecognized;
    no guess is made.
    """
    try:
        if not is_swap(node, name):
            return None
        (first, second), _ = _swap_sides(node, name)
    except ExtractionError as exc:
        logger.debug("Error getting swap indices: %s", exc)
        return None
    if first.index is None or second.index is None:
        return None
    return first.index, second.index


# ── set ──────────────────────────────────────────────────────────


def extract_set(node: Node, name: str) -> Optional[SetPattern]:
    assignment = _assignment(node)
    if assignment is None:
        return None
    target = access_pattern(require_field(assignment, "left"), name)
    if target is None or target.index is None:
        return None
    value = numeric_literal(require_field(assignment, "right"))
    if value is None:
        return None
    return SetPattern(index=target.index, value=value)


def is_set(node: Node, name: str) -> bool:
    """True for ``arr[<literal>] = <numeric literal>``."""
    try:
        return extract_set(node, name) is not None
    except ExtractionError:
        return False


# ── classifier ───────────────────────────────────────────────────


def classify(
    node: Node,
    name: str,
    policy: UnresolvedIndexPolicy = UnresolvedIndexPolicy.PLACEHOLDER,
) -> Pattern:
    """Tag *node* with the one pattern it matches.

    Extraction errors are contained here: a malformed node is reported as
    ``Unrecognized`` and never aborts the caller.
    """
    try:
        if is_swap(node, name):
            return SwapPattern(indices=extract_swap_indices(node, name))
        set_pattern = extract_set(node, name)
        if set_pattern is not None:
            return set_pattern
        if is_comparison(node, name):
            return extract_comparison(node, name, policy)
        access = access_pattern(node, name)
        if access is not None:
            return access
    except ExtractionError as exc:
        logger.debug("Unrecognized %s: %s", node.type, exc)
        return Unrecognized(node.type, str(exc))
    return Unrecognized(node.type)
