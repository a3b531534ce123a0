"""Tests for dashboard state transitions."""

from __future__ import annotations

from finanalyzer import state
from finanalyzer.errors import AnalysisFailedError
from finanalyzer.state import AppState

LEDGER_CSV = (
    "Tanggal,Tipe Transaksi,Kategori,Jumlah (IDR)\n"
    "2024-01-25,Pemasukan,Gaji,8000000\n"
    "2024-01-26,Pengeluaran,Makanan,50000\n"
).encode("utf-8")


def test_load_file_parses_and_aggregates() -> None:
    loaded = state.load_file("ledger.csv", LEDGER_CSV)

    assert loaded.error is None
    assert loaded.filename == "ledger.csv"
    assert len(loaded.table) == 2
    assert loaded.report["summary"]["net_balance"] == 7_950_000.0
    assert loaded.has_data


def test_load_file_without_financial_columns_has_no_report() -> None:
    loaded = state.load_file("other.csv", b"name,score\nA,1\n")
    assert loaded.report is None
    assert loaded.has_data


def test_load_file_error_discards_previous_data() -> None:
    loaded = state.load_file("notes.txt", b"hello")

    assert loaded.table is None
    assert loaded.report is None
    assert "Unsupported file type" in loaded.error
    assert not loaded.has_data


def test_begin_analysis_requires_data() -> None:
    result = state.begin_analysis(AppState())
    assert result.error == state.NO_DATA_MESSAGE
    assert not result.is_analyzing


def test_begin_analysis_guards_duplicate_requests() -> None:
    first = state.begin_analysis(state.load_file("ledger.csv", LEDGER_CSV))
    assert first.is_analyzing
    assert first.error is None

    second = state.begin_analysis(first)
    assert second.is_analyzing
    assert second.error == state.BUSY_MESSAGE


def test_finish_analysis_stores_text() -> None:
    seen = []

    def analyzer(table):
        seen.append(len(table))
        return "**Executive Summary:** healthy"

    started = state.begin_analysis(state.load_file("ledger.csv", LEDGER_CSV))
    finished = state.finish_analysis(started, analyzer=analyzer)

    assert seen == [2]
    assert finished.analysis == "**Executive Summary:** healthy"
    assert not finished.is_analyzing
    assert finished.error is None


def test_finish_analysis_failure_sets_banner() -> None:
    def analyzer(table):
        raise AnalysisFailedError("Failed to get analysis")

    started = state.begin_analysis(state.load_file("ledger.csv", LEDGER_CSV))
    finished = state.finish_analysis(started, analyzer=analyzer)

    assert finished.error == "Analysis failed: Failed to get analysis"
    assert finished.analysis == ""
    assert not finished.is_analyzing
    assert finished.table is started.table


def test_cancelled_analysis_can_be_started_again() -> None:
    started = state.begin_analysis(state.load_file("ledger.csv", LEDGER_CSV))

    cancelled = state.cancel_analysis(started)
    assert not cancelled.is_analyzing
    assert cancelled.table is started.table

    restarted = state.begin_analysis(cancelled)
    assert restarted.is_analyzing
    assert restarted.error is None


def test_select_page_requires_loaded_data() -> None:
    assert state.select_page(AppState(), "data-view").page == "dashboard"

    loaded = state.load_file("ledger.csv", LEDGER_CSV)
    assert state.select_page(loaded, "data-view").page == "data-view"
    assert state.select_page(loaded, "integrations").page == "dashboard"
