from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

from lagcorr.core.errors import SeriesValidationError


@dataclass(frozen=True)
class TimeSeries:
    """Daily series of ``(date, value)`` pairs, one entry per consecutive calendar day."""

    name: str
    dates: Tuple[date, ...] = ()
    values: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dates", tuple(self.dates))
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))

        if len(self.dates) != len(self.values):
            raise SeriesValidationError(
                f"Series `{self.name}`: {len(self.dates)} dates vs {len(self.values)} values"
            )
        for prev, cur in zip(self.dates, self.dates[1:]):
            if cur <= prev:
                raise SeriesValidationError(
                    f"Series `{self.name}` dates must be strictly increasing ({prev} -> {cur})"
                )
            if (cur - prev).days != 1:
                raise SeriesValidationError(
                    f"Series `{self.name}` skips calendar days ({prev} -> {cur})"
                )

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def empty(self) -> bool:
        return len(self.dates) == 0

    @property
    def first_date(self) -> Optional[date]:
        return self.dates[0] if self.dates else None

    @property
    def last_date(self) -> Optional[date]:
        return self.dates[-1] if self.dates else None

    def value_at(self, d: date) -> Optional[float]:
        try:
            return self.values[self.dates.index(d)]
        except ValueError:
            return None

    def to_frame(self, value_col: str = "value") -> pd.DataFrame:
        return pd.DataFrame(
            {
                "date": pd.to_datetime(list(self.dates)),
                value_col: list(self.values),
            }
        )

    @classmethod
    def from_frame(cls, name: str, df: pd.DataFrame, date_col: str, value_col: str) -> "TimeSeries":
        dates = [pd.Timestamp(d).date() for d in df[date_col]]
        return cls(name=name, dates=tuple(dates), values=tuple(df[value_col].astype(float)))

    @classmethod
    def from_pairs(cls, name: str, dates: Sequence[date], values: Sequence[float]) -> "TimeSeries":
        return cls(name=name, dates=tuple(dates), values=tuple(values))


@dataclass(frozen=True)
class ParameterSpec:
    label: str
    min_value: float
    max_value: float
    step: float
    default: float

    def __post_init__(self) -> None:
        if self.min_value > self.max_value:
            raise ValueError(f"{self.label}: min {self.min_value} > max {self.max_value}")
        if not (self.min_value <= self.default <= self.max_value):
            raise ValueError(f"{self.label}: default {self.default} outside [{self.min_value}, {self.max_value}]")

    @property
    def is_integer(self) -> bool:
        return all(float(x).is_integer() for x in (self.min_value, self.max_value, self.step, self.default))

    def validate(self, value: float) -> float:
        if not (self.min_value <= value <= self.max_value):
            raise ValueError(f"{self.label}: {value} outside [{self.min_value}, {self.max_value}]")
        return value


@dataclass(frozen=True)
class OutcomeParams:
    lag_days: int
    rate: float


@dataclass(frozen=True)
class ProjectionParams:
    county: str
    outcomes: Dict[str, OutcomeParams]


@dataclass(frozen=True)
class CountyContext:
    county: str
    cases: TimeSeries
    deaths: TimeSeries
    icu: TimeSeries
    non_icu: TimeSeries

    smoothed_cases: TimeSeries
    smoothed_deaths: TimeSeries

    def observed(self, outcome: str) -> TimeSeries:
        # deaths are compared against their own 7-day average
        return {
            "deaths": self.smoothed_deaths,
            "icu": self.icu,
            "non_icu": self.non_icu,
        }[outcome]


@dataclass(frozen=True)
class ProjectedValue:
    date: date
    value: float


@dataclass(frozen=True)
class OutcomeProjection:
    outcome: str
    params: OutcomeParams
    projected: TimeSeries
    observed: TimeSeries
    aligned: pd.DataFrame = field(compare=False)
    next_value: Optional[ProjectedValue]
    outlook: TimeSeries
