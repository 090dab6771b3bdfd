"""Column reference extraction from single WHERE conditions.

A condition such as ``coalesce(users.age, 0) > 18`` is not parsed. The left
operand is cut at the first top-level comparison operator and the
``table.column`` pair is read from it, looking through one function call
when there is one.
"""

from __future__ import annotations

import re

from .literals import is_sql_keyword
from .scanner import find_first_operator, quoted_mask

QUOTE_CHARS = "`\"'"
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")
_TABLE_DELIMITERS = "(, \t"
_COLUMN_DELIMITERS = ",) \t"


def is_identifier(name: str) -> bool:
    """True for plain unquoted SQL identifiers (no dots, no leading digit)."""
    return bool(_IDENTIFIER.match(name or ""))


def extract_left_operand(cond: str) -> str:
    """Left side of the leftmost top-level comparison, quotes stripped.

    Without an operator the first word is used (boolean columns such as
    ``is_active``), unless that word is a SQL keyword.
    """
    cond = (cond or "").strip()
    if not cond:
        return ""

    index, _ = find_first_operator(cond)
    if index > 0:
        return cond[:index].strip().strip(QUOTE_CHARS)

    parts = cond.split()
    if parts:
        token = parts[0].strip(QUOTE_CHARS)
        if token and not is_sql_keyword(token):
            return token
    return ""


def extract_column_name(cond: str) -> str:
    """Column (or expression) a condition filters on: ``"status = 'x'"`` -> ``"status"``."""
    return extract_left_operand(cond)


def has_existing_prefix(cond: str) -> bool:
    """True when the left operand already carries a ``prefix.`` qualifier."""
    return "." in extract_left_operand(cond)


def extract_table_and_column(cond: str) -> tuple[str, str]:
    """Return ``(table, column)`` for the qualified reference on the left side.

    ``users.status = 'a'`` gives ``("users", "status")``;
    ``public.users.status = 'a'`` gives ``("public.users", "status")``;
    ``coalesce(users.age,0) = 1`` gives ``("users", "age")``.
    Both parts are empty when the left side holds no qualified reference.
    """
    ref = extract_left_operand(cond)
    if not ref:
        return "", ""

    paren = ref.find("(")
    if paren >= 0:
        dot = ref.find(".", paren)
        if dot > paren:
            start = dot
            while start > 0 and ref[start - 1] not in _TABLE_DELIMITERS:
                start -= 1
            end = len(ref)
            for i in range(dot + 1, len(ref)):
                if ref[i] in _COLUMN_DELIMITERS:
                    end = i
                    break
            return ref[start:dot].strip(QUOTE_CHARS), ref[dot + 1:end].strip(QUOTE_CHARS)

    dot = ref.rfind(".")
    if dot > 0:
        return ref[:dot].strip(QUOTE_CHARS), ref[dot + 1:].strip(QUOTE_CHARS)

    return "", ""


def qualify_column_in_condition(cond: str, column: str, qualified: str) -> str:
    """Replace whole-word ``column`` with ``qualified`` in ``cond``.

    Occurrences preceded by ``.`` (already qualified), followed by ``.`` or
    ``(`` (a prefix or a function name), or inside quoted literals are kept.
    """
    if not column:
        return cond

    pattern = re.compile(r"\b" + re.escape(column) + r"\b")
    in_quotes = quoted_mask(cond)
    pieces: list[str] = []
    last = 0

    for match in pattern.finditer(cond):
        start, end = match.span()
        if start > 0 and cond[start - 1] == ".":
            continue
        if end < len(cond) and cond[end] in ".(":
            continue
        if in_quotes[start]:
            continue
        pieces.append(cond[last:start])
        pieces.append(qualified)
        last = end

    pieces.append(cond[last:])
    return "".join(pieces)
