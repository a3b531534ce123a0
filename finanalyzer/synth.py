"""Synthetic sample ledgers.

The generator produces deterministic Indonesian personal-finance ledgers in the
column layout the dashboard recognises, so the app and the tests can run without
a real export.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from .config import AMOUNT_COLUMN, CATEGORY_COLUMN, EXPENSE_VALUE, INCOME_VALUE, TYPE_COLUMN

DEFAULT_ROWS = 120
DEFAULT_SEED = 7
DATE_COLUMN = "Tanggal"
DESCRIPTION_COLUMN = "Deskripsi"

LEDGER_COLUMNS = [DATE_COLUMN, DESCRIPTION_COLUMN, TYPE_COLUMN, CATEGORY_COLUMN, AMOUNT_COLUMN]


@dataclass(frozen=True)
class CategoryProfile:
    """Static metadata for an expense category."""

    name: str
    descriptions: tuple[str, ...]
    amount_range: tuple[int, int]
    monthly_rate: float


EXPENSE_CATEGORIES = (
    CategoryProfile("Makanan", ("Warung makan", "GoFood", "Kopi susu", "Restoran padang"), (15_000, 150_000), 14.0),
    CategoryProfile("Belanja Harian", ("Indomaret", "Alfamart", "Pasar tradisional"), (25_000, 400_000), 5.0),
    CategoryProfile("Transportasi", ("Gojek", "Grab", "Bensin", "KRL"), (10_000, 120_000), 8.0),
    CategoryProfile("Tagihan", ("Listrik PLN", "Internet", "Pulsa"), (100_000, 650_000), 2.0),
    CategoryProfile("Hiburan", ("Bioskop", "Netflix", "Spotify"), (50_000, 200_000), 1.5),
    CategoryProfile("Kesehatan", ("Apotek", "Klinik"), (30_000, 500_000), 0.6),
)

SALARY_RANGE = (8_000_000, 8_500_000)
SIDE_INCOME_RANGE = (500_000, 2_500_000)


def _round_rupiah(value: float) -> int:
    return int(round(value / 500.0) * 500)


def _days_in_month(year: int, month: int) -> int:
    next_month = date(year + (month == 12), month % 12 + 1, 1)
    return (next_month - date(year, month, 1)).days


def _entry(day: date, description: str, kind: str, category: str, amount: int) -> dict[str, Any]:
    return {
        DATE_COLUMN: day.isoformat(),
        DESCRIPTION_COLUMN: description,
        TYPE_COLUMN: kind,
        CATEGORY_COLUMN: category,
        AMOUNT_COLUMN: amount,
    }


def _generate_month(year: int, month: int, rng: np.random.Generator) -> list[dict[str, Any]]:
    month_start = date(year, month, 1)
    days = _days_in_month(year, month)
    entries = [
        _entry(
            month_start + timedelta(days=min(24, days - 1)),
            "Gaji bulanan",
            INCOME_VALUE,
            "Gaji",
            _round_rupiah(rng.uniform(*SALARY_RANGE)),
        )
    ]
    if rng.random() < 0.35:
        entries.append(
            _entry(
                month_start + timedelta(days=int(rng.integers(0, days))),
                "Proyek freelance",
                INCOME_VALUE,
                "Freelance",
                _round_rupiah(rng.uniform(*SIDE_INCOME_RANGE)),
            )
        )

    for profile in EXPENSE_CATEGORIES:
        count = int(rng.poisson(profile.monthly_rate))
        for _ in range(count):
            entries.append(
                _entry(
                    month_start + timedelta(days=int(rng.integers(0, days))),
                    str(rng.choice(profile.descriptions)),
                    EXPENSE_VALUE,
                    profile.name,
                    _round_rupiah(rng.uniform(*profile.amount_range)),
                )
            )
    return entries


def generate_ledger(rows: int = DEFAULT_ROWS, seed: int | None = DEFAULT_SEED) -> pd.DataFrame:
    """Generate ``rows`` ledger entries in date order, deterministically for a seed."""

    if rows <= 0:
        raise ValueError("rows must be positive")

    rng = np.random.default_rng(seed)
    year, month = 2024, 1
    entries: list[dict[str, Any]] = []
    while len(entries) < rows:
        entries.extend(_generate_month(year, month, rng))
        month += 1
        if month > 12:
            month = 1
            year += 1

    df = pd.DataFrame(entries, columns=LEDGER_COLUMNS)
    df.sort_values(DATE_COLUMN, kind="stable", inplace=True)
    df.reset_index(drop=True, inplace=True)
    return df.iloc[:rows].copy()


def write_sample_files(
    output_dir: str | Path = Path("data"),
    *,
    rows: int = DEFAULT_ROWS,
    seed: int | None = DEFAULT_SEED,
) -> tuple[Path, Path]:
    """Persist the same ledger as CSV and XLSX."""

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    ledger = generate_ledger(rows=rows, seed=seed)
    csv_path = output_path / "sample_ledger.csv"
    ledger.to_csv(csv_path, index=False)
    xlsx_path = output_path / "sample_ledger.xlsx"
    ledger.to_excel(xlsx_path, index=False, sheet_name="Transaksi", engine="openpyxl")

    return csv_path, xlsx_path
