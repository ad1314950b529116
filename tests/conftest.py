"""
Pytest configuration and fixtures for the lag-correlation tests
"""

from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path

import pandas as pd
import pytest

from lagcorr.core.config import AppConfig


def _days(start: date, n: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(n)]


@pytest.fixture
def cfg(tmp_path):
    """Default configuration with the download cache in a temp directory."""
    return replace(AppConfig(), cache_dir=str(tmp_path))


@pytest.fixture
def cases_df():
    """Case/death table for three areas, 2020-05-25 .. 2020-07-10, plus an undated total row."""
    rows = []
    dates = _days(date(2020, 5, 25), 47)
    for area, base in [("Santa Clara", 100), ("Alameda", 50), ("Out of state", 5)]:
        for i, d in enumerate(dates):
            rows.append({
                "area": area,
                "area_type": "County",
                "date": d.isoformat(),
                "cases": base + i,
                "deaths": (base + i) // 50,
            })
    rows.append({"area": "California", "area_type": "State", "date": None, "cases": 9999, "deaths": 99})
    return pd.DataFrame(rows)


@pytest.fixture
def hosp_df():
    """Hospital table for two counties (one shared with the case table), 2020-05-28 .. 2020-07-05."""
    rows = []
    dates = _days(date(2020, 5, 28), 39)
    for county in ["Santa Clara", "Fresno"]:
        for i, d in enumerate(dates):
            rows.append({
                "county": county,
                "todays_date": d.isoformat(),
                "hospitalized_covid_confirmed_patients": 60 + i,
                "hospitalized_suspected_covid_patients": 5,
                "icu_covid_confirmed_patients": 20,
                "icu_suspected_covid_patients": 2 if i % 2 == 0 else None,
            })
    return pd.DataFrame(rows)


@pytest.fixture
def source_files(cfg, cases_df, hosp_df):
    """Write both tables where the CHHS repository expects its cached downloads."""
    cache = Path(cfg.cache_dir)
    cases_df.to_csv(cache / "covid19cases_test.csv", index=False)
    hosp_df.to_csv(cache / "covid19hospitalbycounty.csv", index=False)
    return cfg
