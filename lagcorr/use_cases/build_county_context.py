from __future__ import annotations

import pandas as pd
from loguru import logger

from lagcorr.core.config import AppConfig
from lagcorr.domain.entities import CountyContext, TimeSeries
from lagcorr.infrastructure.analysis.county_filter import filter_county
from lagcorr.infrastructure.analysis.preprocessing import anchor_at, to_daily, trim_recent
from lagcorr.infrastructure.analysis.smoothing import smooth_series


def build_county_context_uc(
    cfg: AppConfig,
    cases_df: pd.DataFrame,
    hosp_df: pd.DataFrame,
    county: str,
) -> CountyContext:
    # ---- cases / deaths ----
    c = filter_county(cases_df, county, cfg.cases_county_col)
    c = to_daily(c, cfg.cases_date_col, [cfg.cases_col, cfg.deaths_col])
    c = trim_recent(c, cfg.trim_days)
    c = anchor_at(c, cfg.cases_date_col, cfg.start_date)

    cases = TimeSeries.from_frame("New cases", c, cfg.cases_date_col, cfg.cases_col)
    deaths = TimeSeries.from_frame("Deaths", c, cfg.cases_date_col, cfg.deaths_col)

    # ---- hospital ----
    h = filter_county(hosp_df, county, cfg.hosp_county_col)
    h = to_daily(
        h,
        cfg.hosp_date_col,
        [cfg.hosp_confirmed_col, cfg.icu_confirmed_col, cfg.icu_suspected_col],
        fill="ffill",
    )
    h = anchor_at(h, cfg.hosp_date_col, cfg.start_date)

    h["icu"] = h[cfg.icu_confirmed_col] + h[cfg.icu_suspected_col]
    h["non_icu"] = h[cfg.hosp_confirmed_col] - h["icu"]

    icu = TimeSeries.from_frame("ICU patients", h, cfg.hosp_date_col, "icu")
    non_icu = TimeSeries.from_frame("Non-ICU patients", h, cfg.hosp_date_col, "non_icu")

    logger.info(
        "{}: {} case days, {} hospital days from {}",
        county, len(cases), len(icu), cfg.start_date.isoformat(),
    )

    return CountyContext(
        county=county,
        cases=cases,
        deaths=deaths,
        icu=icu,
        non_icu=non_icu,
        smoothed_cases=smooth_series(cases, cfg.window_size, cfg.edge, name="Avg. cases"),
        smoothed_deaths=smooth_series(deaths, cfg.window_size, cfg.edge, name="County deaths"),
    )
