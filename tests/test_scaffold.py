"""Regression tests for the sample ledger, charts and helper scripts."""

from __future__ import annotations

import json

import pandas as pd
import plotly.graph_objects as go

from finanalyzer import financials, parsing, synth, utils, viz
from finanalyzer.parsing import Table
from scripts import print_summary, write_sample_ledger


def test_generate_ledger_schema_and_determinism() -> None:
    first = synth.generate_ledger(rows=90, seed=123)
    second = synth.generate_ledger(rows=90, seed=123)

    pd.testing.assert_frame_equal(first, second)
    assert list(first.columns) == synth.LEDGER_COLUMNS
    assert len(first) == 90
    assert first["Tanggal"].is_monotonic_increasing
    assert set(first["Tipe Transaksi"]) == {"Pemasukan", "Pengeluaran"}
    assert (first["Jumlah (IDR)"] > 0).all()


def test_write_sample_files_parse_to_the_same_report(tmp_path) -> None:
    csv_path, xlsx_path = synth.write_sample_files(tmp_path, rows=80, seed=5)

    from_csv = parsing.load_path(csv_path)
    from_xlsx = parsing.load_path(xlsx_path)

    assert from_csv.headers == from_xlsx.headers == synth.LEDGER_COLUMNS
    assert len(from_csv) == len(from_xlsx) == 80
    assert financials.calculate_financials(from_csv) == financials.calculate_financials(from_xlsx)


def test_viz_plot_expense_by_category_returns_fig() -> None:
    breakdown = financials.category_breakdown({"Makanan": 300_000.0, "Tagihan": 450_000.0})
    figure = viz.plot_expense_by_category(breakdown)

    assert isinstance(figure, go.Figure)
    assert figure.data, "Chart should plot at least one trace"
    assert list(figure.data[0].y) == ["Tagihan", "Makanan"]


def test_viz_empty_breakdown_returns_placeholder() -> None:
    figure = viz.plot_expense_by_category([])
    assert isinstance(figure, go.Figure)
    assert not figure.data


def test_viz_preview_is_capped() -> None:
    table = Table.from_frame(synth.generate_ledger(rows=75, seed=1))

    assert len(viz.preview_frame(table)) == 50
    assert len(viz.preview_frame(table, limit=None)) == 75
    assert viz.preview_caption(table) == "Showing first 50 of 75 rows."
    assert viz.preview_caption(table.head(10)) is None


def test_format_currency_uses_rupiah_grouping() -> None:
    assert utils.format_currency(1_250_000) == "Rp 1.250.000"
    assert utils.format_currency(-600) == "-Rp 600"
    assert utils.format_currency(0.4) == "Rp 0"


def test_print_summary_script(tmp_path, capsys) -> None:
    path = tmp_path / "ledger.csv"
    path.write_text(
        "Tipe Transaksi,Jumlah (IDR),Kategori\nPemasukan,1000,Salary\nPengeluaran,400,Food\n",
        encoding="utf-8",
    )

    assert print_summary.main([str(path)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["net_balance"] == 600.0
    assert payload["expense_by_category"] == [{"name": "Food", "amount": 400.0, "share": 1.0}]


def test_print_summary_script_reports_errors(tmp_path, capsys) -> None:
    assert print_summary.main([str(tmp_path / "ledger.pdf")]) == 1
    assert "Unsupported file type" in capsys.readouterr().err


def test_write_sample_ledger_script(tmp_path) -> None:
    write_sample_ledger.main(["--rows", "30", "--output-dir", str(tmp_path)])
    assert (tmp_path / "sample_ledger.csv").exists()
    assert (tmp_path / "sample_ledger.xlsx").exists()
