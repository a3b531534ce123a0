"""Income and expense aggregation for ledgers with the recognised columns."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Mapping, TypedDict

from .config import (
    AMOUNT_COLUMN,
    CATEGORY_COLUMN,
    EXPENSE_VALUE,
    FINANCIAL_COLUMNS,
    INCOME_VALUE,
    TYPE_COLUMN,
)
from .parsing import Table

logger = logging.getLogger(__name__)

# leading decimal number, as read by a prefix parser: "50000 IDR" -> 50000, "1,500" -> 1
_NUMBER_PREFIX_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class FinancialSummary(TypedDict):
    total_income: float
    total_expense: float
    net_balance: float


class FinancialReport(TypedDict):
    summary: FinancialSummary
    expense_by_category: dict[str, float]


class BreakdownEntry(TypedDict):
    name: str
    amount: float
    share: float


class TableStats(TypedDict):
    rows: int
    columns: int


def has_financial_columns(headers: Iterable[str]) -> bool:
    present = set(headers)
    return all(column in present for column in FINANCIAL_COLUMNS)


def parse_amount(value: object) -> float | None:
    """Coerce a cell to a finite float, or ``None`` when it is not a number.

    Strings are read up to the end of their leading number and any trailing text
    is ignored; a string that does not start with a number is ``None``.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PREFIX_RE.match(value)
        if match is None:
            return None
        number = float(match.group())
    else:
        return None
    return number if math.isfinite(number) else None


def calculate_financials(table: Table) -> FinancialReport | None:
    """Total income and expense, and expense per category.

    Returns ``None`` when the table lacks any of the recognised columns so that
    callers can tell "no financial data" apart from a ledger that sums to zero.
    Rows with an unparsable amount are left out entirely, as are rows whose
    type is neither income nor expense. Sums use :func:`math.fsum`, which makes
    the result independent of row order.
    """

    if not has_financial_columns(table.headers):
        missing = [column for column in FINANCIAL_COLUMNS if column not in table.headers]
        logger.warning(f"Skipping financial calculations; missing columns: {missing}")
        return None

    income: list[float] = []
    expense: list[float] = []
    categories: dict[str, list[float]] = {}
    skipped = 0

    for row in table.rows:
        amount = parse_amount(row.get(AMOUNT_COLUMN, ""))
        if amount is None:
            skipped += 1
            continue

        kind = row.get(TYPE_COLUMN, "")
        if kind == INCOME_VALUE:
            income.append(amount)
        elif kind == EXPENSE_VALUE:
            expense.append(amount)
            category = str(row.get(CATEGORY_COLUMN, ""))
            if category:
                categories.setdefault(category, []).append(amount)

    if skipped:
        logger.debug(f"Excluded {skipped} rows with a non-numeric {AMOUNT_COLUMN!r}")

    total_income = math.fsum(income)
    total_expense = math.fsum(expense)
    return {
        "summary": {
            "total_income": total_income,
            "total_expense": total_expense,
            "net_balance": total_income - total_expense,
        },
        "expense_by_category": {name: math.fsum(values) for name, values in categories.items()},
    }


def category_breakdown(
    expense_by_category: Mapping[str, float],
    limit: int | None = None,
) -> list[BreakdownEntry]:
    """Categories sorted by amount, largest first, with their share of total expense."""

    ordered = sorted(expense_by_category.items(), key=lambda item: (-item[1], item[0]))
    overall = math.fsum(expense_by_category.values())
    if limit is not None:
        ordered = ordered[:limit]
    return [
        {
            "name": name,
            "amount": float(amount),
            "share": float(amount / overall) if overall else 0.0,
        }
        for name, amount in ordered
    ]


def table_stats(table: Table) -> TableStats:
    return {"rows": len(table), "columns": len(table.headers)}
