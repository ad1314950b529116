from __future__ import annotations

import streamlit as st
from loguru import logger

from lagcorr.core.config import CFG
from lagcorr.core.errors import DataFetchError, DatasetValidationError
from lagcorr.domain.entities import CountyContext
from lagcorr.ui.components.charts import render_cases_chart, render_outlook_chart, render_overlay_chart
from lagcorr.ui.components.narrative import deaths_text, icu_text, non_icu_text
from lagcorr.ui.components.tables import render_aligned_table
from lagcorr.ui.sidebar import render_sidebar
from lagcorr.use_cases.build_county_context import build_county_context_uc
from lagcorr.use_cases.implied_rates import implied_rates_uc
from lagcorr.use_cases.list_counties import list_counties_uc
from lagcorr.use_cases.run_projection import RunProjectionInput, run_projection_uc


def _show_dataset_error(e: DatasetValidationError) -> None:
    if e.missing_fields:
        st.error("Invalid source dataset.")
        st.markdown("**Missing required columns:**")
        st.code(", ".join(e.missing_fields))
    else:
        st.error(f"Invalid source dataset: {e}")


def _load_options() -> list[str]:
    if st.session_state["county_options"] is None:
        repo = st.session_state["repo"]
        try:
            with st.spinner("Downloading state case and hospital data..."):
                st.session_state["county_options"] = list_counties_uc(repo, CFG)
        except DataFetchError as e:
            logger.error("Fetch failed for {}: {}", e.url, e)
            st.error(f"Could not download {e.url}: {e}")
            st.stop()
        except DatasetValidationError as e:
            logger.error("Invalid dataset: {}", e)
            _show_dataset_error(e)
            st.stop()
    return st.session_state["county_options"]


def _county_context(county: str) -> CountyContext:
    ctx = st.session_state.get("context")
    if ctx is None or ctx.county != county:
        repo = st.session_state["repo"]
        ctx = build_county_context_uc(CFG, repo.load_cases(), repo.load_hospital(), county)
        st.session_state["context"] = ctx
    return ctx


def render_correlation_page() -> None:
    st.title("California COVID correlations")

    st.markdown(
        """
This page takes COVID case, hospitalization, and death data from California
counties and looks for a lagged case-fatality rate. A reasonably stable fraction
of cases on a given day will die from COVID, but the disease takes time to
progress, so deaths lag cases. Not every case is identified, so the lagged CFR
is not a real CFR; if it is relatively stable it still lets us forecast deaths
15+ days ahead.
"""
    )

    options = _load_options()
    params = render_sidebar(CFG, options)
    if params is None:
        st.info("No county can be selected: the two datasets share no county.")
        return

    try:
        ctx = _county_context(params.county)
    except DatasetValidationError as e:
        _show_dataset_error(e)
        st.stop()

    if ctx.cases.empty:
        st.warning(f"No case data for {params.county} since {CFG.start_date.isoformat()}.")
        return

    out = run_projection_uc(CFG, RunProjectionInput(context=ctx, params=params))
    rates = implied_rates_uc(params, CFG.avg_stay_days)
    results = out.results

    # ---------- cases ----------
    st.header(f"Data from {ctx.county} county")
    st.markdown(
        f"Case reporting has artificial features from lighter reporting on Sundays, so we take "
        f"the {CFG.window_size}-day average looking backwards. The last {CFG.trim_days} days "
        f"are dropped as provisional."
    )
    render_cases_chart(ctx)

    # ---------- deaths ----------
    st.header("Comparing lagged cases with deaths")
    render_overlay_chart(results["deaths"], observed_label="County deaths", projected_label="Estimated deaths")
    st.markdown(deaths_text(ctx.county, results["deaths"], rates))
    render_outlook_chart(results["deaths"], label="Estimated deaths")

    # ---------- hospital ----------
    st.header("Comparing lagged cases to hospitalization")
    st.markdown(
        """
A fraction of cases on a given day will eventually need a hospital or ICU bed.
The rate here is not a simple hospitalization rate, since people stay for
several days in the ICU or hospital.
"""
    )

    st.subheader("ICU patients")
    render_overlay_chart(results["icu"], observed_label="ICU patients", projected_label="Scaled, lagged cases")
    st.markdown(icu_text(results["icu"], rates, CFG.avg_stay_days))

    st.subheader("Non-ICU patients")
    render_overlay_chart(results["non_icu"], observed_label="Non-ICU patients", projected_label="Scaled, lagged cases")
    st.markdown(non_icu_text(results["non_icu"], rates, CFG.avg_stay_days))

    with st.expander("Aligned values"):
        t1, t2, t3 = st.tabs(["Deaths", "ICU", "Non-ICU"])
        with t1:
            render_aligned_table(results["deaths"], observed_label="County deaths (avg.)")
        with t2:
            render_aligned_table(results["icu"], observed_label="ICU patients")
        with t3:
            render_aligned_table(results["non_icu"], observed_label="Non-ICU patients")
