"""Helpers over tree-sitter nodes shared by discovery, patterns and loops."""

from __future__ import annotations

import math
from typing import Iterator, Optional

from tree_sitter import Node

from . import constants
from .errors import ExtractionError
from .operations import Number


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def require_field(node: Node, field_name: str) -> Node:
    """Return the child at *field_name* or raise ``ExtractionError``."""
    child = node.child_by_field_name(field_name)
    if child is None:
        raise ExtractionError(f"{node.type} node has no '{field_name}' field")
    return child


def unwrap(node: Optional[Node]) -> Optional[Node]:
    """Strip parentheses and a wrapping expression statement."""
    while node is not None and node.type in (
        constants.PAREN_NODE_TYPE,
        constants.EXPRESSION_STATEMENT_NODE_TYPE,
    ):
        inner = [c for c in node.named_children if c.type != "comment"]
        if not inner:
            return None
        node = inner[0]
    return node


def iter_nodes(node: Node, skip_functions: bool = True) -> Iterator[Node]:
    """Preorder (document order) walk of *node* and its descendants.

    Function bodies are not entered when *skip_functions* is set.
    """
    yield node
    for child in node.children:
        if skip_functions and child.type in constants.FUNCTION_NODE_TYPES:
            continue
        yield from iter_nodes(child, skip_functions)


def body_statements(body: Optional[Node]) -> list[Node]:
    """Statements directly inside a loop body (a block or a lone statement)."""
    if body is None:
        return []
    if body.type == constants.BLOCK_NODE_TYPE:
        return [c for c in body.named_children if c.type != "comment"]
    return [body]


def parse_number(text: str) -> Number:
    """Convert a JavaScript numeric literal's text to a Python number."""
    cleaned = text.replace("_", "").rstrip("n")
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise ExtractionError(f"Not a numeric literal: {text!r}") from exc
    if not math.isfinite(value):
        raise ExtractionError(f"Numeric literal out of range: {text!r}")
    return int(value) if value.is_integer() else value


def numeric_literal(node: Optional[Node]) -> Optional[Number]:
    """Value of a numeric literal (optionally negated), otherwise ``None``."""
    node = unwrap(node)
    if node is None:
        return None
    if node.type == constants.NUMBER_NODE_TYPE:
        return parse_number(node_text(node))
    if node.type == constants.UNARY_NODE_TYPE:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is not None and node_text(operator) in ("-", "+"):
            value = numeric_literal(argument)
            if value is None:
                return None
            return -value if node_text(operator) == "-" else value
    return None


def integer_literal(node: Optional[Node]) -> Optional[int]:
    """Like ``numeric_literal`` but only for integral values (array indices)."""
    value = numeric_literal(node)
    if value is None or value != int(value):
        return None
    return int(value)
