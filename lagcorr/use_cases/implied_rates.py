from __future__ import annotations

from dataclasses import dataclass

from lagcorr.domain.entities import ProjectionParams


@dataclass(frozen=True)
class ImpliedRates:
    deaths_per_100_cases: float
    icu_bed_pct: float
    hospital_bed_pct: float


def implied_rates_uc(params: ProjectionParams, avg_stay_days: float = 5.0) -> ImpliedRates:
    """
    Read the tuned rates back as per-case figures. ICU and hospital rates are
    patient-days per case, so they are divided by the average length of stay.
    """
    if avg_stay_days <= 0:
        raise ValueError("avg_stay_days must be > 0")

    o = params.outcomes
    return ImpliedRates(
        deaths_per_100_cases=round(o["deaths"].rate * 100, 1),
        icu_bed_pct=float(round(o["icu"].rate * 100 / avg_stay_days)),
        hospital_bed_pct=float(round(o["non_icu"].rate * 100 / avg_stay_days)),
    )
