from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st

from lagcorr.domain.entities import CountyContext, OutcomeProjection, TimeSeries


def _trace(ts: TimeSeries, name: str, mode: str = "lines", opacity: float = 1.0) -> go.Scatter:
    return go.Scatter(
        x=list(ts.dates),
        y=list(ts.values),
        mode=mode,
        name=name,
        opacity=opacity,
    )


def _layout(fig: go.Figure, title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title=y_title,
        hovermode="x unified",
        legend=dict(x=0.01, y=0.99),
    )
    return fig


def build_cases_figure(ctx: CountyContext) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(_trace(ctx.smoothed_cases, "Avg. cases"))
    fig.add_trace(_trace(ctx.cases, "New cases", opacity=0.6))
    return _layout(fig, f"New cases, {ctx.county}", "Cases per day")


def build_overlay_figure(proj: OutcomeProjection, observed_label: str, projected_label: str) -> go.Figure:
    # both traces carry their own dates; plotly aligns them on the date axis
    fig = go.Figure()
    fig.add_trace(_trace(proj.projected, projected_label))
    fig.add_trace(_trace(proj.observed, observed_label, opacity=0.8))
    p = proj.params
    return _layout(fig, f"{observed_label} vs. cases (lag {p.lag_days} d, rate {p.rate:g})", observed_label)


def build_outlook_figure(proj: OutcomeProjection, label: str) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(_trace(proj.outlook, label, mode="lines+markers"))
    return _layout(fig, f"{label}, next {proj.params.lag_days} days", label)


def render_cases_chart(ctx: CountyContext) -> None:
    st.plotly_chart(build_cases_figure(ctx), config={"responsive": True})


def render_overlay_chart(proj: OutcomeProjection, observed_label: str, projected_label: str) -> None:
    st.plotly_chart(build_overlay_figure(proj, observed_label, projected_label), config={"responsive": True})


def render_outlook_chart(proj: OutcomeProjection, label: str) -> None:
    if proj.outlook.empty:
        st.info("Not enough data for an outlook.")
        return
    st.plotly_chart(build_outlook_figure(proj, label), config={"responsive": True})
