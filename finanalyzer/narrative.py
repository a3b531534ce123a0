"""LLM-written narrative reports for FinAnalyzer.

Only a prefix of the table is sent: the first rows are serialised back to CSV
and embedded in a fixed prompt. Whatever Markdown the model returns is handed
to the dashboard unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import OpenAI

from .config import ANALYSIS_SAMPLE_ROWS, API_KEY_NAME, DEFAULT_MODEL, get_api_key
from .errors import AnalysisFailedError, EmptyTableError
from .parsing import Table

logger = logging.getLogger(__name__)

EMPTY_TABLE_MESSAGE = "No data provided for analysis."
ANALYSIS_FAILED_MESSAGE = "Failed to get analysis from the language model. Check the logs for details."

PROMPT_TEMPLATE = """
You are an expert financial analyst reviewing a personal or small business financial ledger.
A user has uploaded a spreadsheet containing their financial transactions.
Below is a sample of the data in CSV format (up to {limit} rows).

Analyse this data and write a clear, well-structured financial report with these sections:
1. **Executive Summary:** a brief, high-level overview of financial health based on the data.
2. **Income Analysis:** the main sources of income.
3. **Expense Breakdown:** the top 3-5 spending categories and why they matter.
4. **Key Observations & Potential Savings:** notable spending patterns, trends or anomalies,
   plus 1-2 specific, actionable areas where savings could be made.

Format the whole response in Markdown. Use bold for section headers and bullet points for lists.

Here is the data:
```csv
{csv}
```
"""


def sample_csv(table: Table, limit: int = ANALYSIS_SAMPLE_ROWS) -> str:
    """Serialise the first ``limit`` rows, header included, to CSV text."""

    return table.head(limit).to_frame().to_csv(index=False)


def build_prompt(csv_text: str, limit: int = ANALYSIS_SAMPLE_ROWS) -> str:
    return PROMPT_TEMPLATE.format(limit=limit, csv=csv_text.rstrip("\n"))


def _default_client() -> OpenAI:
    api_key = get_api_key()
    if not api_key:
        raise RuntimeError(f"{API_KEY_NAME} not found in Streamlit secrets or environment")
    return OpenAI(api_key=api_key)


def analyze_table(
    table: Table,
    *,
    client: Any | None = None,
    model: str | None = None,
    sample_rows: int = ANALYSIS_SAMPLE_ROWS,
) -> str:
    """Ask the model for a Markdown report on ``table``.

    - Raises :class:`EmptyTableError` for an empty table without touching the client.
    - Any failure while building the client or calling the API is logged and
      re-raised as :class:`AnalysisFailedError` with a generic message.
    """

    if table.is_empty:
        raise EmptyTableError(EMPTY_TABLE_MESSAGE)

    prompt = build_prompt(sample_csv(table, sample_rows), limit=sample_rows)
    model_name = model or DEFAULT_MODEL
    logger.info(f"Requesting analysis of {min(len(table), sample_rows)} rows from {model_name}")

    try:
        if client is None:
            client = _default_client()
        response = client.chat.completions.create(
            model=model_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.2,
        )
        return response.choices[0].message.content or ""
    except Exception as exc:
        logger.exception(f"Error calling the OpenAI API: {type(exc).__name__}")
        raise AnalysisFailedError(ANALYSIS_FAILED_MESSAGE) from exc
