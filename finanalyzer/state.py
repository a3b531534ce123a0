"""Application state for the dashboard.

The whole UI is driven by one immutable :class:`AppState`. Every action returns
a new value; nothing is mutated in place, and a reset is simply ``AppState()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Literal

from . import financials, narrative, parsing
from .errors import FinAnalyzerError
from .financials import FinancialReport
from .parsing import Table

logger = logging.getLogger(__name__)

Page = Literal["dashboard", "data-view", "settings"]
PAGES: tuple[Page, ...] = ("dashboard", "data-view", "settings")

NO_DATA_MESSAGE = "No data available to analyze."
BUSY_MESSAGE = "An analysis is already in progress."


@dataclass(frozen=True)
class AppState:
    filename: str | None = None
    table: Table | None = None
    report: FinancialReport | None = None
    analysis: str = ""
    error: str | None = None
    is_analyzing: bool = False
    page: Page = "dashboard"

    @property
    def has_data(self) -> bool:
        return self.table is not None and not self.table.is_empty


def load_file(filename: str, content: bytes | str) -> AppState:
    """Parse ``content`` into a fresh state; the previous state is never reused."""

    try:
        table = parsing.read_upload(filename, content)
    except FinAnalyzerError as exc:
        return AppState(filename=filename, error=str(exc))

    report = financials.calculate_financials(table)
    return AppState(filename=filename, table=table, report=report)


def begin_analysis(state: AppState) -> AppState:
    if state.is_analyzing:
        logger.info("Ignoring analysis request while one is in flight")
        return replace(state, error=BUSY_MESSAGE)
    if not state.has_data:
        return replace(state, error=NO_DATA_MESSAGE)
    return replace(state, is_analyzing=True, analysis="", error=None)


def finish_analysis(
    state: AppState,
    analyzer: Callable[[Table], str] = narrative.analyze_table,
) -> AppState:
    """Run ``analyzer`` for a state returned by :func:`begin_analysis`."""

    if state.table is None:
        return replace(state, is_analyzing=False, error=NO_DATA_MESSAGE)
    try:
        text = analyzer(state.table)
    except FinAnalyzerError as exc:
        return replace(state, is_analyzing=False, error=f"Analysis failed: {exc}")
    return replace(state, is_analyzing=False, analysis=text, error=None)


def select_page(state: AppState, page: Page) -> AppState:
    if page not in PAGES or not state.has_data:
        return state
    return replace(state, page=page)


def cancel_analysis(state: AppState) -> AppState:
    """Clear the in-flight flag of an analysis that ended without a result."""

    return replace(state, is_analyzing=False)
