"""Streamlit entry point for the FinAnalyzer dashboard."""

from __future__ import annotations

import streamlit as st

from finanalyzer import config, financials, state, synth, utils, viz
from finanalyzer.state import AppState

STATE_KEY = "app_state"
UPLOADER_NONCE_KEY = "uploader_nonce"
PAGE_LABELS = {
    "dashboard": "Dashboard",
    "data-view": "Data view",
    "settings": "Settings",
}


def _get_state() -> AppState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = AppState()
    return st.session_state[STATE_KEY]


def _set_state(new_state: AppState) -> None:
    st.session_state[STATE_KEY] = new_state


def _start_over(new_state: AppState) -> None:
    # the navigation radio keeps its own value; drop it so it follows the new state
    st.session_state.pop("page_choice", None)
    _set_state(new_state)


def _uploader_key() -> str:
    return f"upload_{st.session_state.get(UPLOADER_NONCE_KEY, 0)}"


def _on_upload() -> None:
    uploaded = st.session_state.get(_uploader_key())
    if uploaded is None:
        return
    with st.spinner("Parsing your file…"):
        _start_over(state.load_file(uploaded.name, uploaded.getvalue()))


def _on_reset() -> None:
    st.session_state[UPLOADER_NONCE_KEY] = st.session_state.get(UPLOADER_NONCE_KEY, 0) + 1
    _start_over(AppState())


def _on_load_sample() -> None:
    ledger = synth.generate_ledger(rows=synth.DEFAULT_ROWS, seed=synth.DEFAULT_SEED)
    _start_over(state.load_file("sample_ledger.csv", ledger.to_csv(index=False)))


def _on_page_change() -> None:
    _set_state(state.select_page(_get_state(), st.session_state["page_choice"]))


def _render_upload() -> None:
    st.markdown("## Upload a ledger")
    st.caption("CSV, XLS, or XLSX files supported")
    st.file_uploader(
        "Click to upload or drag and drop",
        type=[ext.lstrip(".") for ext in config.SUPPORTED_EXTENSIONS],
        key=_uploader_key(),
        on_change=_on_upload,
    )
    st.button("Load sample ledger", on_click=_on_load_sample)


def _render_stat_cards(app_state: AppState) -> None:
    cols = st.columns(4)
    cols[0].metric("Filename", app_state.filename or "N/A")

    report = app_state.report
    if report is not None:
        summary = report["summary"]
        cols[1].metric("Total income", utils.format_currency(summary["total_income"]))
        cols[2].metric("Total expense", utils.format_currency(summary["total_expense"]))
        cols[3].metric("Net balance", utils.format_currency(summary["net_balance"]))
    elif app_state.table is not None:
        stats = financials.table_stats(app_state.table)
        cols[1].metric("Total rows", f"{stats['rows']:,}")
        cols[2].metric("Total columns", f"{stats['columns']:,}")


def _render_dashboard(app_state: AppState) -> None:
    header_left, header_right = st.columns([3, 1])
    with header_left:
        st.markdown("## Financial dashboard")
        st.caption("AI-powered insights from your financial data.")
    with header_right:
        clicked = st.button(
            "Analyzing…" if app_state.is_analyzing else "Generate AI analysis",
            type="primary",
            disabled=app_state.is_analyzing,
            use_container_width=True,
        )

    if clicked:
        started = state.begin_analysis(app_state)
        if not started.is_analyzing:
            _set_state(started)
            app_state = started
        else:
            # an interrupted run must not leave the flag set in the session
            finished = state.cancel_analysis(started)
            try:
                with st.spinner("Analyzing your data… This might take a moment."):
                    finished = state.finish_analysis(started)
            finally:
                _set_state(finished)
            st.rerun()

    _render_stat_cards(app_state)

    breakdown = (
        financials.category_breakdown(app_state.report["expense_by_category"])
        if app_state.report is not None
        else []
    )
    if breakdown and app_state.analysis:
        chart_col, analysis_col = st.columns([3, 2], gap="large")
    else:
        chart_col = analysis_col = st.container()

    if breakdown:
        with chart_col:
            st.markdown("### Expense breakdown")
            st.caption("Top spending categories")
            st.plotly_chart(
                viz.plot_expense_by_category(breakdown),
                use_container_width=True,
                config={"displayModeBar": False},
            )

    if app_state.analysis:
        with analysis_col:
            st.markdown("### AI-powered analysis")
            # st.markdown escapes raw HTML in model output
            st.markdown(app_state.analysis)

    st.markdown("### Data preview")
    caption = viz.preview_caption(app_state.table)
    if caption:
        st.caption(caption)
    st.dataframe(viz.preview_frame(app_state.table), hide_index=True, use_container_width=True)


def _render_data_view(app_state: AppState) -> None:
    st.markdown("## Full data view")
    st.caption(f"Showing all {len(app_state.table):,} rows.")
    st.dataframe(viz.preview_frame(app_state.table, limit=None), hide_index=True, use_container_width=True)


def _render_settings() -> None:
    st.markdown("## Settings")
    st.metric("Model", config.DEFAULT_MODEL)
    if config.get_api_key():
        st.success(f"{config.API_KEY_NAME} is configured.")
    else:
        st.warning(f"{config.API_KEY_NAME} was not found in Streamlit secrets or the environment.")
    st.caption(
        f"Financial cards require the columns {', '.join(config.FINANCIAL_COLUMNS)}; "
        f"analysis sends the first {config.ANALYSIS_SAMPLE_ROWS} rows."
    )


def main() -> None:
    """Render the FinAnalyzer Streamlit application."""

    st.set_page_config(
        page_title="FinAnalyzer",
        page_icon="📊",
        layout="wide",
    )
    config.configure_logging()

    app_state = _get_state()

    sidebar = st.sidebar
    sidebar.title("FinAnalyzer")
    sidebar.radio(
        "Navigate",
        list(PAGE_LABELS),
        format_func=PAGE_LABELS.get,
        index=list(PAGE_LABELS).index(app_state.page),
        key="page_choice",
        on_change=_on_page_change,
        disabled=not app_state.has_data,
    )
    if app_state.filename is not None:
        sidebar.button("Upload new file", on_click=_on_reset)
    sidebar.caption("Powered by OpenAI")

    if app_state.error:
        st.error(f"**An error occurred**\n\n{app_state.error}")

    if not app_state.has_data:
        if app_state.table is not None:
            st.info(f"{app_state.filename} has a header row but no data rows.")
        _render_upload()
        return

    if app_state.page == "data-view":
        _render_data_view(app_state)
    elif app_state.page == "settings":
        _render_settings()
    else:
        _render_dashboard(app_state)


if __name__ == "__main__":
    main()
