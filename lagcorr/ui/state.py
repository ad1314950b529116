from __future__ import annotations

import streamlit as st

from lagcorr.core.config import CFG
from lagcorr.infrastructure.repositories.chhs_source_repository import CHHSSourceRepository


def ensure_state() -> None:
    if "repo" not in st.session_state:
        st.session_state["repo"] = CHHSSourceRepository(CFG)

    if "county_options" not in st.session_state:
        st.session_state["county_options"] = None

    if "context" not in st.session_state:
        # CountyContext of the currently selected county
        st.session_state["context"] = None


def reset_data() -> None:
    st.session_state["repo"].clear()
    st.session_state["county_options"] = None
    st.session_state["context"] = None
