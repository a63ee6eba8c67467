"""Tree-Sitter Parsing Layer — source text to syntax tree."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from . import constants
from .errors import SourceSyntaxError

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Abstract factory for obtaining a grammar-specific parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


def _first_error_node(node):
    """Preorder search for the first ERROR or MISSING node, or None."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    return next(
        (
            found
            for child in node.children
            if (found := _first_error_node(child)) is not None
        ),
        None,
    )


class SourceParser:
    """Parses snippets and rejects trees that tree-sitter had to repair.

    tree-sitter never fails outright; it inserts ERROR / MISSING nodes
    instead.  A repaired tree is surfaced as ``SourceSyntaxError`` so a
    mangled snippet never yields a trace that looks complete.
    """

    def __init__(self, parser_factory: Optional[ParserFactory] = None):
        self._factory = parser_factory or TreeSitterParserFactory()

    def parse(self, source: str, language: str = constants.DEFAULT_LANGUAGE):
        if language not in constants.SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        parser = self._factory.get_parser(language)
        tree = parser.parse(source.encode("utf-8"))
        error_node = _first_error_node(tree.root_node)
        if error_node is not None:
            line, col = error_node.start_point
            logger.info("Syntax error at %d:%d (%s)", line + 1, col, language)
            raise SourceSyntaxError(
                f"Could not parse {language} source: syntax error at line {line + 1}, column {col}"
            )
        return tree
