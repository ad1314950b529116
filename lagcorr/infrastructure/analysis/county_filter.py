from __future__ import annotations

from typing import Iterable

import pandas as pd


def _distinct(values: Iterable) -> set[str]:
    out = set()
    for v in values:
        if v is None or (isinstance(v, float) and pd.isna(v)):
            continue
        s = str(v).strip()
        if s:
            out.add(s)
    return out


def county_options(
    cases_df: pd.DataFrame,
    hosp_df: pd.DataFrame,
    cases_col: str = "area",
    hosp_col: str = "county",
) -> list[str]:
    """Counties present in both tables, sorted. Empty list if there is no overlap."""
    return sorted(_distinct(cases_df[cases_col]) & _distinct(hosp_df[hosp_col]))


def filter_county(df: pd.DataFrame, county: str, column: str) -> pd.DataFrame:
    mask = df[column].astype(str).str.strip() == str(county).strip()
    return df.loc[mask].reset_index(drop=True)
