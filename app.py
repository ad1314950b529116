# app.py

import streamlit as st

from lagcorr.core.config import CFG
from lagcorr.core.logs import setup_logging
from lagcorr.ui.pages.correlation_page import render_correlation_page
from lagcorr.ui.state import ensure_state

st.set_page_config(
    page_title="California COVID correlations",
    layout="wide",
)

setup_logging(CFG)
ensure_state()
render_correlation_page()
