"""Text-level SQL helpers.

Scanner primitives, literal classification and column reference extraction.
None of these build a syntax tree.
"""

from .literals import SQL_KEYWORDS, is_sql_keyword, is_sql_literal_expression, is_trivial_condition
from .references import (
    extract_column_name,
    extract_left_operand,
    extract_table_and_column,
    has_existing_prefix,
    is_identifier,
    qualify_column_in_condition,
)
from .scanner import (
    COMPARISON_OPERATORS,
    ScanState,
    contains_top_level_or,
    ensure_outer_parentheses,
    find_first_operator,
    find_operator_outside_parens,
    split_top_level_and,
    strip_one_outer_paren,
    strip_outer_parens,
)

__all__ = [
    "SQL_KEYWORDS",
    "is_sql_keyword",
    "is_sql_literal_expression",
    "is_trivial_condition",
    "extract_column_name",
    "extract_left_operand",
    "extract_table_and_column",
    "has_existing_prefix",
    "is_identifier",
    "qualify_column_in_condition",
    "COMPARISON_OPERATORS",
    "ScanState",
    "contains_top_level_or",
    "ensure_outer_parentheses",
    "find_first_operator",
    "find_operator_outside_parens",
    "split_top_level_and",
    "strip_one_outer_paren",
    "strip_outer_parens",
]
