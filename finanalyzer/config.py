"""FinAnalyzer configuration: column names, limits, model and credentials."""

from __future__ import annotations

import logging
import os

import streamlit as st

# ---------------------------------------------------------------------------
# Recognised ledger columns (exact, case-sensitive header match)
# ---------------------------------------------------------------------------
TYPE_COLUMN = "Tipe Transaksi"
AMOUNT_COLUMN = "Jumlah (IDR)"
CATEGORY_COLUMN = "Kategori"
FINANCIAL_COLUMNS = (TYPE_COLUMN, AMOUNT_COLUMN, CATEGORY_COLUMN)

INCOME_VALUE = "Pemasukan"
EXPENSE_VALUE = "Pengeluaran"

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
CSV_EXTENSIONS = (".csv",)
SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + SPREADSHEET_EXTENSIONS

# ---------------------------------------------------------------------------
# Display & analysis limits
# ---------------------------------------------------------------------------
PREVIEW_ROWS = 50
ANALYSIS_SAMPLE_ROWS = 100
CURRENCY_SYMBOL = "Rp"

# ---------------------------------------------------------------------------
# LLM
# ---------------------------------------------------------------------------
DEFAULT_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
API_KEY_NAME = "OPENAI_API_KEY"

LOG_LEVEL = os.getenv("FINANALYZER_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_api_key() -> str | None:
    """Return the OpenAI key from Streamlit secrets, falling back to the environment."""

    try:
        api_key = st.secrets.get(API_KEY_NAME)
    except Exception:
        # st.secrets raises when no secrets.toml exists
        api_key = None
    if not api_key:
        api_key = os.getenv(API_KEY_NAME)
    return api_key or None


def configure_logging(level: str | int | None = None) -> None:
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
