from __future__ import annotations

import pandas as pd
import streamlit as st

from lagcorr.domain.entities import OutcomeProjection


COL_LABELS = {
    "date": "Date",
    "projected": "Scaled, lagged cases",
    "observed": "Observed",
}


def aligned_table(proj: OutcomeProjection, last_days: int | None = None) -> pd.DataFrame:
    df = proj.aligned.copy()
    df["date"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")
    df["projected"] = df["projected"].round(1)
    df["observed"] = df["observed"].round(1)
    if last_days is not None:
        df = df.tail(int(last_days))
    return df.rename(columns=COL_LABELS).reset_index(drop=True)


def render_aligned_table(proj: OutcomeProjection, observed_label: str, last_days: int = 60) -> None:
    df = aligned_table(proj, last_days=last_days).rename(columns={"Observed": observed_label})
    st.dataframe(df, hide_index=True, width='stretch')
