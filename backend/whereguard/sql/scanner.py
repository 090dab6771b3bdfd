"""Quote- and parenthesis-aware scanning helpers for WHERE clause text.

Nothing here builds a syntax tree. Every helper walks the text once,
tracking only parenthesis depth and whether the cursor sits inside a
single- or double-quoted literal.
"""

from __future__ import annotations

from dataclasses import dataclass

# Symbolic operators match anywhere; word operators need whitespace around them.
SYMBOL_OPERATORS = ("!=", "<>", ">=", "<=", "=", ">", "<")
WORD_OPERATORS = ("LIKE", "IN", "IS", "NOT", "BETWEEN")
COMPARISON_OPERATORS = SYMBOL_OPERATORS + WORD_OPERATORS


@dataclass
class ScanState:
    """Cursor state carried through a left-to-right scan.

    Quotes toggle on every quote character, as in standard SQL where ``''``
    is the only escape. With ``backslash_escapes`` a backslash inside a
    literal escapes the next character (MySQL reading).
    """

    depth: int = 0
    in_single_quote: bool = False
    in_double_quote: bool = False
    backslash_escapes: bool = False
    escape_next: bool = False

    @property
    def in_quotes(self) -> bool:
        return self.in_single_quote or self.in_double_quote

    @property
    def at_top_level(self) -> bool:
        return self.depth == 0 and not self.in_quotes


def advance(state: ScanState, text: str, index: int) -> bool:
    """Feed ``text[index]`` into ``state``.

    Returns True when the character opened or closed a quoted literal, so
    callers can skip it the same way they skip quoted content.
    """
    ch = text[index]

    if state.escape_next:
        state.escape_next = False
        return False
    if state.backslash_escapes and state.in_quotes and ch == "\\":
        state.escape_next = True
        return False

    if ch == "'" and not state.in_double_quote:
        state.in_single_quote = not state.in_single_quote
        return True
    if ch == '"' and not state.in_single_quote:
        state.in_double_quote = not state.in_double_quote
        return True

    if state.in_quotes:
        return False

    if ch == "(":
        state.depth += 1
    elif ch == ")":
        state.depth -= 1
    return False


def quoted_mask(text: str) -> list[bool]:
    """Per-character flags telling whether that position is part of a quoted literal."""
    state = ScanState()
    mask: list[bool] = []
    for i in range(len(text)):
        toggled = advance(state, text, i)
        mask.append(toggled or state.in_quotes)
    return mask


def _word_bounded(text: str, start: int, length: int) -> bool:
    if start == 0 or not (text[start - 1].isspace() or text[start - 1] == ")"):
        return False
    end = start + length
    if end >= len(text):
        return False
    return text[end].isspace() or text[end] in "('"


def find_operator_outside_parens(text: str, operator: str) -> int:
    """Index of the first ``operator`` outside parentheses and quotes, or -1.

    Word operators (LIKE, IN, IS, ...) are matched case-insensitively and only
    as whole words, so ``login`` never matches ``IN``.
    """
    operator = operator.strip()
    if not text or not operator:
        return -1

    is_word = operator.isalpha()
    needle = operator.lower()
    lowered = text.lower()
    state = ScanState()

    for i in range(len(text)):
        if advance(state, text, i) or not state.at_top_level:
            continue
        if not lowered.startswith(needle, i):
            continue
        if is_word and not _word_bounded(text, i, len(needle)):
            continue
        return i

    return -1


def find_first_operator(text: str) -> tuple[int, str]:
    """Leftmost top-level comparison operator as ``(index, operator)``.

    The leftmost match wins regardless of list order; on a tie the longer
    operator wins (``>=`` over ``>``). An operator at index 0 has no left
    operand and is ignored. Returns ``(-1, "")`` when nothing matches.
    """
    best_index = -1
    best_operator = ""
    for operator in COMPARISON_OPERATORS:
        index = find_operator_outside_parens(text, operator)
        if index <= 0:
            continue
        if (
            best_index == -1
            or index < best_index
            or (index == best_index and len(operator) > len(best_operator))
        ):
            best_index = index
            best_operator = operator
    return best_index, best_operator


def strip_one_outer_paren(text: str) -> tuple[str, bool]:
    """Remove one matching pair of outer parentheses.

    ``"(a)(b)"`` is left alone: the first ``(`` closes before the last
    character, so the two ends are not a pair.
    """
    text = text.strip()
    if len(text) < 2 or text[0] != "(" or text[-1] != ")":
        return text, False

    state = ScanState()
    last = len(text) - 1
    for i in range(len(text)):
        advance(state, text, i)
        if state.in_quotes:
            continue
        if text[i] == ")" and state.depth == 0:
            if i != last:
                return text, False
            return text[1:-1].strip(), True

    return text, False


def strip_outer_parens(text: str) -> str:
    """Repeatedly strip matching outer parentheses: ``"((x))"`` -> ``"x"``."""
    text = text.strip()
    while True:
        text, stripped = strip_one_outer_paren(text)
        if not stripped:
            return text


def split_top_level_and(text: str) -> list[str]:
    """Split on ``" AND "`` (any case) outside parentheses.

    Quotes are not tracked here, so a literal containing `` and `` at the top
    level gets split as well.
    """
    conditions: list[str] = []
    current: list[str] = []
    depth = 0
    i = 0

    while i < len(text):
        ch = text[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and text[i:i + 5].lower() == " and ":
            conditions.append("".join(current))
            current = []
            i += 5
            continue
        current.append(ch)
        i += 1

    conditions.append("".join(current))
    return [cond.strip() for cond in conditions if cond.strip()]


def _has_top_level_or(text: str, lowered: str, backslash_escapes: bool) -> bool:
    state = ScanState(backslash_escapes=backslash_escapes)
    for i in range(len(text)):
        if advance(state, text, i) or not state.at_top_level:
            continue
        if lowered[i:i + 4] == " or ":
            return True
    return False


def contains_top_level_or(text: str) -> bool:
    """True when ``" or "`` (any case) appears outside parentheses and quotes.

    Both quote readings are tried (plain toggling and backslash escapes); an
    OR found under either one counts, so a dialect mismatch never hides it.
    """
    if not text:
        return False

    lowered = text.lower()
    return _has_top_level_or(text, lowered, False) or _has_top_level_or(text, lowered, True)


def ensure_outer_parentheses(clause: str) -> str:
    """Wrap ``clause`` in parentheses unless it already has a matching outer pair."""
    clause = (clause or "").strip()
    if not clause:
        return ""
    _, wrapped = strip_one_outer_paren(clause)
    if wrapped:
        return clause
    return f"({clause})"
