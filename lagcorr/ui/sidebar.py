from __future__ import annotations

import streamlit as st

from lagcorr.core.config import AppConfig, OUTCOME_LABELS, OUTCOME_ORDER
from lagcorr.domain.entities import OutcomeParams, ParameterSpec, ProjectionParams
from lagcorr.ui.state import reset_data
from lagcorr.use_cases.list_counties import default_county


def _slider(spec: ParameterSpec, key: str):
    if spec.is_integer:
        return st.sidebar.slider(
            spec.label,
            min_value=int(spec.min_value),
            max_value=int(spec.max_value),
            value=int(spec.default),
            step=int(spec.step),
            key=key,
        )
    return st.sidebar.slider(
        spec.label,
        min_value=float(spec.min_value),
        max_value=float(spec.max_value),
        value=float(spec.default),
        step=float(spec.step),
        format="%.3f",
        key=key,
    )


def render_sidebar(cfg: AppConfig, options: list[str]) -> ProjectionParams | None:
    st.sidebar.markdown("### County")

    if not options:
        st.sidebar.warning("No county is present in both datasets.")
        return None

    default = default_county(options, cfg.default_county)
    county = st.sidebar.selectbox(
        "Select the county to investigate",
        options,
        index=options.index(default),
        key="ui_county",
    )

    outcomes = {}
    for k in OUTCOME_ORDER:
        st.sidebar.markdown("---")
        st.sidebar.markdown(f"### {OUTCOME_LABELS[k]}")
        lag = _slider(cfg.sliders[f"{k}_lag"], key=f"ui_{k}_lag")
        rate = _slider(cfg.sliders[f"{k}_rate"], key=f"ui_{k}_rate")
        outcomes[k] = OutcomeParams(lag_days=int(lag), rate=float(rate))

    st.sidebar.markdown("---")
    if st.sidebar.button("Reload data", width='stretch'):
        reset_data()
        st.rerun()

    return ProjectionParams(county=county, outcomes=outcomes)
