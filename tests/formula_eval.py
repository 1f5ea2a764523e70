"""Minimal evaluator for dashboard formula trees, used only in tests.

Supports the subset the dashboard emits (FILTER, UNIQUE, ROWS, IFERROR, IF,
LET, INDEX, comparisons, products and division) so KPI formulas can be
checked against the rows actually written to the Data sheet.
"""

from __future__ import annotations

import operator
from typing import Any

from app.dashboard.formulas import (
    CellRef,
    ColumnRange,
    Compare,
    Call,
    Divide,
    Expr,
    Literal,
    Name,
    Product,
    TableColumn,
)
from app.dashboard.projector import unique_in_order

_OPS = {
    "=": operator.eq,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class FormulaError(Exception):
    """Spreadsheet error value such as #DIV/0! or #CALC!."""


class Evaluator:
    def __init__(
        self,
        table: dict[str, list[Any]],
        cells: dict[str, Any] | None = None,
        columns: dict[str, list[Any]] | None = None,
    ):
        self.table = table
        self.cells = cells or {}
        self.columns = columns or {}

    def evaluate(self, expr: Expr, env: dict[str, Any] | None = None) -> Any:
        env = env or {}
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, TableColumn):
            return list(self.table[expr.column])
        if isinstance(expr, CellRef):
            return self.cells.get(expr.cell)
        if isinstance(expr, ColumnRange):
            return list(self.columns[expr.column])
        if isinstance(expr, Name):
            return env[expr.name]
        if isinstance(expr, Compare):
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            op = _OPS[expr.op]
            if isinstance(left, list):
                return [op(v, right) for v in left]
            return op(left, right)
        if isinstance(expr, Product):
            masks = [self.evaluate(f, env) for f in expr.factors]
            return [all(values) for values in zip(*masks)]
        if isinstance(expr, Divide):
            numerator = self.evaluate(expr.numerator, env)
            denominator = self.evaluate(expr.denominator, env)
            if not denominator:
                raise FormulaError("#DIV/0!")
            return numerator / denominator
        if isinstance(expr, Call):
            return self._call(expr, env)
        raise TypeError(f"Unsupported node {expr!r}")

    def _call(self, expr: Call, env: dict[str, Any]) -> Any:
        name = expr.name.upper()
        args = expr.args

        if name == "IFERROR":
            try:
                return self.evaluate(args[0], env)
            except FormulaError:
                return self.evaluate(args[1], env)
        if name == "IF":
            branch = args[1] if self.evaluate(args[0], env) else args[2]
            return self.evaluate(branch, env)
        if name == "LET":
            bound = dict(env)
            bound[args[0].name] = self.evaluate(args[1], env)
            return self.evaluate(args[2], bound)
        if name == "ROWS":
            value = self.evaluate(args[0], env)
            return len(value) if isinstance(value, list) else 1
        if name == "FILTER":
            values = self.evaluate(args[0], env)
            mask = self.evaluate(args[1], env)
            picked = [v for v, keep in zip(values, mask) if keep]
            if picked:
                return picked
            if len(args) > 2:
                return self.evaluate(args[2], env)
            raise FormulaError("#CALC!")
        if name == "UNIQUE":
            value = self.evaluate(args[0], env)
            return unique_in_order(value) if isinstance(value, list) else value
        if name == "INDEX":
            values = self.evaluate(args[0], env)
            return values[self.evaluate(args[1], env) - 1]
        raise TypeError(f"Unsupported function {name}")
