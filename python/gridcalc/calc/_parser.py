"""Formula parsing: input normalization, literals and ``=A1+B2`` operands."""

from __future__ import annotations

import re

from gridcalc._cell import CellValue
from gridcalc._utils import is_cell_id

# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?[0-9]+[eE][+-]?[0-9]+"
)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_input(raw: str) -> str:
    """Drop every whitespace character, leading, trailing and internal."""
    return _WHITESPACE_RE.sub("", raw)


def is_number(text: str) -> bool:
    return bool(_INT_RE.fullmatch(text) or _FLOAT_RE.fullmatch(text))


def is_formula(text: str) -> bool:
    """A formula starts with ``=``; plain numbers never do."""
    return text.startswith("=") and not is_number(text)


def parse_literal(text: str) -> CellValue:
    """Value of non-formula input.

    ``""`` stays blank, integer text becomes ``int``, decimal text becomes
    ``float``, anything else is returned unchanged. Integers too long for
    ``int()`` to convert also stay text.
    """
    if _INT_RE.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            return text
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    return text


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------


def split_operands(formula: str) -> list[str]:
    """Split ``=A1+B2`` into upper-cased operand tokens ``["A1", "B2"]``.

    No validation happens here: ``"=A1+B1+C1"`` gives three tokens and
    ``"=A1"`` gives one.
    """
    body = formula[1:] if formula.startswith("=") else formula
    return [token.upper() for token in body.split("+")]


def parse_references(formula: str) -> list[str]:
    """Cell ids a formula reads from, deduplicated, in order of appearance.

    Tokens that are not cell ids are skipped. Grid bounds are not checked.
    """
    if not is_formula(formula):
        return []
    refs: list[str] = []
    seen: set[str] = set()
    for token in split_operands(formula):
        if is_cell_id(token) and token not in seen:
            refs.append(token)
            seen.add(token)
    return refs
