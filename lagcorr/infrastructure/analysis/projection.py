from __future__ import annotations

from datetime import timedelta
from typing import Optional

import pandas as pd

from lagcorr.domain.entities import ProjectedValue, TimeSeries


def _check(lag_days: int, rate: float) -> None:
    if int(lag_days) != lag_days or lag_days < 0:
        raise ValueError(f"lag_days must be a non-negative integer, got {lag_days}")
    if rate < 0:
        raise ValueError(f"rate must be >= 0, got {rate}")


def project(
    smoothed: TimeSeries,
    lag_days: int,
    rate: float,
    name: str | None = None,
) -> TimeSeries:
    """``rate`` of the smoothed cases on day t become the outcome on day t + ``lag_days``."""
    _check(lag_days, rate)
    shift = timedelta(days=int(lag_days))
    return TimeSeries(
        name=name or f"Scaled, lagged {smoothed.name}",
        dates=tuple(d + shift for d in smoothed.dates),
        values=tuple(float(rate) * v for v in smoothed.values),
    )


def align_by_date(projected: TimeSeries, observed: TimeSeries) -> pd.DataFrame:
    """Outer join on calendar date; columns ``date``, ``projected``, ``observed``."""
    left = projected.to_frame("projected")
    right = observed.to_frame("observed")
    out = pd.merge(left, right, on="date", how="outer", sort=True)
    return out.reset_index(drop=True)


def projected_value(
    smoothed: TimeSeries,
    lag_days: int,
    rate: float,
    back: int = 0,
) -> Optional[ProjectedValue]:
    """Projection made from the smoothed value ``back`` days before the last one."""
    _check(lag_days, rate)
    if back < 0:
        raise ValueError("back must be >= 0")
    if len(smoothed) <= back:
        return None

    idx = len(smoothed) - 1 - back
    return ProjectedValue(
        date=smoothed.dates[idx] + timedelta(days=int(lag_days)),
        value=float(rate) * smoothed.values[idx],
    )


def outlook(
    smoothed: TimeSeries,
    lag_days: int,
    rate: float,
    back: int = 0,
) -> TimeSeries:
    """
    Forward-looking tail of the projection: the last ``lag_days`` smoothed
    points up to ``back`` days before the end, shifted and scaled. These are
    the projected values whose dates mostly lie beyond the observed data.
    """
    _check(lag_days, rate)
    n = len(smoothed)
    start = max(n - 1 - int(lag_days), 0)
    stop = n - back
    if stop <= start:
        return TimeSeries(name="Outlook")

    tail = TimeSeries(
        name=smoothed.name,
        dates=smoothed.dates[start:stop],
        values=smoothed.values[start:stop],
    )
    return project(tail, lag_days, rate, name="Outlook")
