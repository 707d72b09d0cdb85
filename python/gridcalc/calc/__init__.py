"""gridcalc.calc - Formula evaluation and recalculation for gridcalc grids."""

from gridcalc.calc._engine import RecalcEngine
from gridcalc.calc._evaluator import FormulaEvaluator
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import (
    is_formula,
    normalize_input,
    parse_literal,
    parse_references,
    split_operands,
)
from gridcalc.calc._protocol import CellUpdate, SpreadsheetModel

__all__ = [
    "CellUpdate",
    "DependencyGraph",
    "FormulaEvaluator",
    "RecalcEngine",
    "SpreadsheetModel",
    "is_formula",
    "normalize_input",
    "parse_literal",
    "parse_references",
    "split_operands",
]
