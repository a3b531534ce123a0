"""Visualization utilities for FinAnalyzer."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import utils
from .config import CURRENCY_SYMBOL, PREVIEW_ROWS
from .parsing import Table

BAR_COLORS = [
    "#4f46e5",
    "#7c3aed",
    "#db2777",
    "#f59e0b",
    "#10b981",
    "#3b82f6",
    "#ef4444",
    "#8b5cf6",
]


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_expense_by_category(breakdown: Iterable[Mapping[str, object]]) -> go.Figure:
    """Horizontal bars of expense per category, largest at the top."""

    data = list(breakdown)
    if not data:
        return _empty_figure("No expense categories to display.")

    df = utils.ensure_dataframe(data)
    df["label"] = df["amount"].apply(lambda value: utils.format_currency(float(value)))
    df["percent"] = (df["share"] * 100).round(1)
    colors = [BAR_COLORS[index % len(BAR_COLORS)] for index in range(len(df))]

    fig = px.bar(
        df,
        x="amount",
        y="name",
        orientation="h",
        text="label",
        custom_data=["percent"],
        labels={"name": "Category", "amount": f"Amount ({CURRENCY_SYMBOL})"},
        title="Expense breakdown",
    )
    fig.update_traces(
        marker_color=colors,
        hovertemplate="%{y}<br>%{text} (%{customdata[0]}%)<extra></extra>",
    )
    fig.update_layout(
        yaxis=dict(autorange="reversed"),
        margin=dict(l=0, r=0, t=40, b=0),
        showlegend=False,
    )
    return fig


def preview_frame(table: Table, limit: int | None = PREVIEW_ROWS) -> pd.DataFrame:
    """Return the first ``limit`` rows as a DataFrame (all rows when ``limit`` is None)."""

    if limit is None:
        return table.to_frame()
    return table.head(limit).to_frame()


def preview_caption(table: Table, limit: int = PREVIEW_ROWS) -> str | None:
    if len(table) > limit:
        return f"Showing first {limit} of {len(table):,} rows."
    return None
