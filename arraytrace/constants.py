"""Names for tree-sitter node types, operators and defaults used across the package."""

from __future__ import annotations

SUPPORTED_LANGUAGES: tuple[str, ...] = ("javascript", "typescript")
DEFAULT_LANGUAGE = "javascript"

# Never descended into: iteration inside a called function is invisible.
FUNCTION_NODE_TYPES: frozenset[str] = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "arrow_function",
        "method_definition",
        "generator_function",
        "generator_function_declaration",
    }
)

DECLARATOR_NODE_TYPE = "variable_declarator"
ARRAY_LITERAL_NODE_TYPE = "array"
ARRAY_PATTERN_NODE_TYPE = "array_pattern"
NUMBER_NODE_TYPE = "number"
IDENTIFIER_NODE_TYPE = "identifier"
SUBSCRIPT_NODE_TYPE = "subscript_expression"
MEMBER_NODE_TYPE = "member_expression"
BINARY_NODE_TYPE = "binary_expression"
UNARY_NODE_TYPE = "unary_expression"
PAREN_NODE_TYPE = "parenthesized_expression"
ASSIGNMENT_NODE_TYPE = "assignment_expression"
EXPRESSION_STATEMENT_NODE_TYPE = "expression_statement"
FOR_NODE_TYPE = "for_statement"
IF_NODE_TYPE = "if_statement"
BLOCK_NODE_TYPE = "statement_block"
DECLARATION_NODE_TYPES: frozenset[str] = frozenset(
    {"lexical_declaration", "variable_declaration"}
)

LENGTH_PROPERTY = "length"

COMPARISON_OPERATORS: frozenset[str] = frozenset(
    {">", "<", ">=", "<=", "==", "===", "!=", "!=="}
)
# Operators the nested-loop guard can evaluate against shadow values.
SWAP_GUARD_OPERATORS: frozenset[str] = frozenset({">", "<", ">=", "<="})

LEFT_PLACEHOLDER_INDEX = 0
RIGHT_PLACEHOLDER_INDEX = 1

DEFAULT_OUTER_VARIABLE = "i"
DEFAULT_INNER_VARIABLE = "j"

PIVOT_HIGHLIGHT_COLOR = 0xFFAA00

EVENT_OPERATION = "operation"
EVENT_OPERATIONS = "operations"
