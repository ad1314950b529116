from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from lagcorr.domain.entities import TimeSeries

EDGE_POLICIES = ("replicate", "truncate")


def trailing_moving_average(
    values: Sequence[float],
    window: int = 7,
    edge: str = "replicate",
) -> np.ndarray:
    """
    Trailing (backward-looking) unweighted moving average.

    Entry ``i`` is the mean of ``values[i-window+1 .. i]``. For the first
    ``window-1`` entries the window is either padded with the first value
    (``"replicate"``) or shortened to the available prefix (``"truncate"``).
    """
    if window < 1:
        raise ValueError("window must be >= 1")
    if edge not in EDGE_POLICIES:
        raise ValueError(f"Unknown edge policy: {edge}")

    x = np.asarray(values, dtype=np.float64)
    if x.size == 0:
        return x

    if edge == "truncate":
        return pd.Series(x).rolling(window, min_periods=1).mean().to_numpy()

    padded = np.concatenate([np.full(window - 1, x[0]), x])
    kernel = np.full(window, 1.0 / window)
    return np.convolve(padded, kernel, mode="valid")


def smooth_series(
    ts: TimeSeries,
    window: int = 7,
    edge: str = "replicate",
    name: str | None = None,
) -> TimeSeries:
    avg = trailing_moving_average(ts.values, window=window, edge=edge)
    return TimeSeries(
        name=name or f"{ts.name} ({window}-day avg)",
        dates=ts.dates,
        values=tuple(avg.tolist()),
    )
