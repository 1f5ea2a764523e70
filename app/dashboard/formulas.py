"""Spreadsheet formula expressions.

Dashboard formulas are built as small immutable expression trees and only
turned into text at the edge, when a cell is written. The same tree renders
in two dialects:

- ``Dialect.STORAGE``: the text stored inside the xlsx file. Functions added
  after Excel 2007 must carry their ``_xlfn.`` prefix there (and LET
  parameters an ``_xlpm.`` prefix), otherwise Excel reports ``#NAME?``.
- ``Dialect.DISPLAY``: the text a user sees in the formula bar.

Example:
    >>> cond = eq(TableColumn("DataTable", "Month"), CellRef("C4", sheet="Dashboard", absolute=True))
    >>> to_formula(count_rows(TableColumn("DataTable", "Month"), cond), Dialect.DISPLAY)
    '=IFERROR(ROWS(FILTER(DataTable[Month],(DataTable[Month]=Dashboard!$C$4))),0)'
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Union

from openpyxl.utils.cell import absolute_coordinate


class Dialect(str, Enum):
    STORAGE = "storage"
    DISPLAY = "display"


# Prefixes Excel expects in the file for dynamic-array era functions.
FUTURE_FUNCTION_PREFIXES: dict[str, str] = {
    "FILTER": "_xlfn._xlws.",
    "SORT": "_xlfn._xlws.",
    "UNIQUE": "_xlfn.",
    "LET": "_xlfn.",
}

LET_PARAMETER_PREFIX = "_xlpm."

COMPARISON_OPERATORS = frozenset({"=", "<>", "<", "<=", ">", ">="})

_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _sheet_prefix(sheet: str) -> str:
    """Quote sheet names that are not plain identifiers."""
    if _PLAIN_SHEET_NAME.match(sheet):
        return sheet
    escaped = sheet.replace("'", "''")
    return f"'{escaped}'"


class Expr(ABC):
    """Base class for formula expression nodes."""

    @abstractmethod
    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        """Render the expression as formula text (without a leading '=')."""

    def children(self) -> tuple["Expr", ...]:
        return ()

    def walk(self) -> Iterator["Expr"]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


Operand = Union[Expr, bool, int, float, str]


def as_expr(value: Operand) -> Expr:
    """Wrap plain Python values as literals; pass expressions through."""
    if isinstance(value, Expr):
        return value
    return Literal(value)


@dataclass(frozen=True)
class Literal(Expr):
    value: bool | int | float | str

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        # bool first: True is also an int
        if isinstance(self.value, bool):
            return "TRUE" if self.value else "FALSE"
        if isinstance(self.value, (int, float)):
            return repr(self.value)
        escaped = self.value.replace('"', '""')
        return f'"{escaped}"'


@dataclass(frozen=True)
class CellRef(Expr):
    """Reference to a single cell, optionally qualified by sheet."""

    cell: str
    sheet: str | None = None
    absolute: bool = False

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        coord = absolute_coordinate(self.cell) if self.absolute else self.cell
        if self.sheet:
            return f"{_sheet_prefix(self.sheet)}!{coord}"
        return coord


@dataclass(frozen=True)
class ColumnRange(Expr):
    """Whole-column reference such as ``Lists!$C:$C``."""

    column: str
    sheet: str | None = None

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        ref = f"${self.column}:${self.column}"
        if self.sheet:
            return f"{_sheet_prefix(self.sheet)}!{ref}"
        return ref


@dataclass(frozen=True)
class TableColumn(Expr):
    """Structured reference to one column of a named table."""

    table: str
    column: str

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        return f"{self.table}[{self.column}]"


@dataclass(frozen=True)
class Range(Expr):
    """Range between two references, e.g. ``$A$2:INDEX(...)``."""

    start: Expr
    end: Expr

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        return f"{self.start.render(dialect)}:{self.end.render(dialect)}"

    def children(self) -> tuple[Expr, ...]:
        return (self.start, self.end)


@dataclass(frozen=True)
class Name(Expr):
    """Name bound by LET."""

    name: str

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        if dialect is Dialect.STORAGE:
            return f"{LET_PARAMETER_PREFIX}{self.name}"
        return self.name


@dataclass(frozen=True)
class Compare(Expr):
    left: Expr
    op: str
    right: Expr

    def __post_init__(self) -> None:
        if self.op not in COMPARISON_OPERATORS:
            raise ValueError(f"Unsupported comparison operator: {self.op!r}")

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        return f"({self.left.render(dialect)}{self.op}{self.right.render(dialect)})"

    def children(self) -> tuple[Expr, ...]:
        return (self.left, self.right)


@dataclass(frozen=True)
class Product(Expr):
    """Multiplication of boolean masks, i.e. a logical AND inside FILTER."""

    factors: tuple[Expr, ...]

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        return "*".join(f.render(dialect) for f in self.factors)

    def children(self) -> tuple[Expr, ...]:
        return self.factors


@dataclass(frozen=True)
class Divide(Expr):
    numerator: Expr
    denominator: Expr

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        return f"{self.numerator.render(dialect)}/{self.denominator.render(dialect)}"

    def children(self) -> tuple[Expr, ...]:
        return (self.numerator, self.denominator)


@dataclass(frozen=True)
class Call(Expr):
    name: str
    args: tuple[Expr, ...] = ()

    def render(self, dialect: Dialect = Dialect.STORAGE) -> str:
        name = self.name.upper()
        if dialect is Dialect.STORAGE:
            name = FUTURE_FUNCTION_PREFIXES.get(name, "") + name
        rendered = ",".join(arg.render(dialect) for arg in self.args)
        return f"{name}({rendered})"

    def children(self) -> tuple[Expr, ...]:
        return self.args


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def call(name: str, *args: Operand) -> Call:
    return Call(name, tuple(as_expr(a) for a in args))


def eq(left: Operand, right: Operand) -> Compare:
    return Compare(as_expr(left), "=", as_expr(right))


def all_of(*conditions: Expr) -> Expr:
    """Combine boolean masks so that all must hold."""
    if not conditions:
        raise ValueError("at least one condition is required")
    if len(conditions) == 1:
        return conditions[0]
    factors: list[Expr] = []
    for cond in conditions:
        # Flatten nested products so criteria compose without extra grouping.
        if isinstance(cond, Product):
            factors.extend(cond.factors)
        else:
            factors.append(cond)
    return Product(tuple(factors))


def count_rows(column: TableColumn, condition: Expr) -> Expr:
    """Number of table rows matching ``condition``; 0 when nothing matches."""
    return call("IFERROR", call("ROWS", call("FILTER", column, condition)), 0)


def distinct_count(column: TableColumn, condition: Expr) -> Expr:
    """Number of distinct values of ``column`` among matching rows."""
    return call(
        "IFERROR",
        call("ROWS", call("UNIQUE", call("FILTER", column, condition))),
        0,
    )


def distinct_values(column: TableColumn, condition: Expr, name: str = "x") -> Expr:
    """Spilled list of distinct values; blank instead of an error when empty."""
    bound = Name(name)
    return call(
        "LET",
        bound,
        call("UNIQUE", call("FILTER", column, condition, "")),
        call("IF", Compare(call("ROWS", bound), ">", Literal(0)), bound, ""),
    )


def safe_ratio(numerator: Operand, denominator: Operand, fallback: Operand = 0) -> Expr:
    return call("IFERROR", Divide(as_expr(numerator), as_expr(denominator)), fallback)


def list_extent(sheet: str, column: str, first_row: int = 2) -> Expr:
    """Range from ``first_row`` down to the last non-empty cell of a column."""
    whole = ColumnRange(column, sheet=sheet)
    return Range(
        CellRef(f"{column}{first_row}", sheet=sheet, absolute=True),
        call("INDEX", whole, call("COUNTA", whole)),
    )


def to_formula(expr: Expr, dialect: Dialect = Dialect.STORAGE) -> str:
    """Render ``expr`` as cell formula text."""
    return "=" + expr.render(dialect)
