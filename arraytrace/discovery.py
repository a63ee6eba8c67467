"""Array Discovery — locate the array the snippet manipulates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from . import constants
from .errors import ExtractionError, NoArrayFound
from .nodes import iter_nodes, node_text, numeric_literal
from .operations import Number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredArray:
    name: str
    values: list[Number] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


def _element_value(element: Node) -> Number:
    try:
        value = numeric_literal(element)
    except ExtractionError:
        value = None
    return 0 if value is None else value


def _numeric_array(value_node: Node) -> list[Number] | None:
    """Element values of an array literal, or None if it holds no numbers.

    Non-numeric elements count as 0 so the length matches the source.
    """
    elements = [c for c in value_node.named_children if c.type != "comment"]
    has_number = False
    for element in elements:
        try:
            has_number = has_number or numeric_literal(element) is not None
        except ExtractionError:
            continue
    if not has_number:
        return None
    return [_element_value(e) for e in elements]


def discover_array(root: Node) -> DiscoveredArray:
    """Return the first declared array of numbers, in document order.

    First match wins: later array declarations are ignored even when the
    rest of the snippet only ever touches them.

    Raises:
        NoArrayFound: No declaration initialises a numeric array literal.
    """
    for node in iter_nodes(root, skip_functions=False):
        if node.type != constants.DECLARATOR_NODE_TYPE:
            continue
        name_node = node.child_by_field_name("name")
        value_node = node.child_by_field_name("value")
        if name_node is None or value_node is None:
            continue
        if name_node.type != constants.IDENTIFIER_NODE_TYPE:
            continue
        if value_node.type != constants.ARRAY_LITERAL_NODE_TYPE:
            continue
        values = _numeric_array(value_node)
        if values is None:
            logger.debug("Skipping non-numeric array '%s'", node_text(name_node))
            continue
        name = node_text(name_node)
        logger.info("Found array: %s = %s", name, values)
        return DiscoveredArray(name=name, values=values)
    raise NoArrayFound(
        "No array found. Please initialize an array like: let arr = [1, 2, 3]"
    )
