"""Shared utilities for the FinAnalyzer project."""

from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd

from .config import CURRENCY_SYMBOL


def ensure_dataframe(records: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    """Ensure the input payload is normalised to a :class:`pandas.DataFrame`."""

    if isinstance(records, pd.DataFrame):
        return records.copy()

    return pd.DataFrame(list(records))


def format_currency(value: float, currency: str = CURRENCY_SYMBOL) -> str:
    """Return a whole-rupiah string using Indonesian separators, e.g. ``Rp 1.250.000``."""

    grouped = f"{abs(value):,.0f}".replace(",", ".")
    sign = "-" if round(value) < 0 else ""
    return f"{sign}{currency} {grouped}"
