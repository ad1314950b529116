from __future__ import annotations

from datetime import date

import pandas as pd
from loguru import logger

from lagcorr.core.errors import DatasetValidationError


def load_and_validate_df(
    df: pd.DataFrame,
    required_cols: list[str],
    date_col: str,
) -> pd.DataFrame:
    if not isinstance(df, pd.DataFrame):
        raise DatasetValidationError("Source is not a valid CSV table.")

    missing = [c for c in required_cols if c not in df.columns]
    if missing:
        raise DatasetValidationError(
            message="Missing required columns",
            missing_fields=missing,
        )

    try:
        df = df.copy()
        df[date_col] = pd.to_datetime(df[date_col])
    except (ValueError, TypeError) as e:
        raise DatasetValidationError(
            f"Column `{date_col}` has an invalid date format."
        ) from e

    # statewide/unassigned rows come without a date
    df = df.dropna(subset=[date_col])

    if df.empty:
        raise DatasetValidationError("Dataset is empty.")

    return df


def clean_core_cols(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    for c in cols:
        if c not in df.columns:
            raise DatasetValidationError(
                message=f"Missing column `{c}`",
                missing_fields=[c],
            )

        if not pd.api.types.is_numeric_dtype(df[c]):
            raise DatasetValidationError(
                f"Column `{c}` must be numeric."
            )

    before = len(df)
    df = df.dropna(subset=cols)
    if len(df) < before:
        logger.debug("Dropped {} rows with empty {}", before - len(df), cols)

    if df.empty:
        raise DatasetValidationError(
            "No valid rows left after cleaning."
        )

    return df


FILL_POLICIES = ("zero", "ffill")


def to_daily(df: pd.DataFrame, date_col: str, value_cols: list[str], fill: str = "zero") -> pd.DataFrame:
    """
    One row per calendar day: sorted by ``date_col``, duplicate dates collapsed
    to the last row.

    Missing days are set to 0 with ``fill="zero"`` (daily counts such as new
    cases) or carried forward with ``fill="ffill"`` (census levels such as
    patients in hospital).
    """
    if fill not in FILL_POLICIES:
        raise ValueError(f"fill must be one of {FILL_POLICIES}, got {fill!r}")
    if df.empty:
        return pd.DataFrame({date_col: pd.Series(dtype="datetime64[ns]"), **{c: pd.Series(dtype=float) for c in value_cols}})

    out = df[[date_col] + list(value_cols)].copy()
    out[date_col] = pd.to_datetime(out[date_col]).dt.normalize()
    out = out.sort_values(date_col, kind="stable")

    dupes = int(out.duplicated(subset=[date_col]).sum())
    if dupes:
        logger.warning("Collapsed {} duplicate dates", dupes)
        out = out.drop_duplicates(subset=[date_col], keep="last")

    out = out.set_index(date_col).asfreq("D")
    missing = int(out[list(value_cols)].isna().all(axis=1).sum())
    if missing:
        logger.debug("Filled {} missing days ({})", missing, fill)
    out = out.fillna(0.0) if fill == "zero" else out.ffill()
    return out.reset_index()


def trim_recent(df: pd.DataFrame, trim_days: int) -> pd.DataFrame:
    if trim_days < 0:
        raise ValueError("trim_days must be >= 0")
    if trim_days == 0:
        return df.reset_index(drop=True)
    return df.iloc[:-trim_days].reset_index(drop=True)


def anchor_at(df: pd.DataFrame, date_col: str, start_date: date) -> pd.DataFrame:
    mask = pd.to_datetime(df[date_col]) >= pd.Timestamp(start_date)
    return df.loc[mask].reset_index(drop=True)
