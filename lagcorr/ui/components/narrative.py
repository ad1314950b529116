from __future__ import annotations

from lagcorr.domain.entities import OutcomeProjection
from lagcorr.use_cases.implied_rates import ImpliedRates


def _prediction(proj: OutcomeProjection, what: str) -> str:
    nv = proj.next_value
    if nv is None:
        return f"not enough data to project {what}"
    return f"on {nv.date.isoformat()} there should be roughly {round(nv.value):.0f} {what}"


def deaths_text(county: str, proj: OutcomeProjection, rates: ImpliedRates) -> str:
    lag = proj.params.lag_days
    return (
        f"When cases rise sharply in {county} county, deaths rise about {lag} days later. "
        f"The current fit predicts that for 100 new, identified cases, "
        f"{rates.deaths_per_100_cases:g} people will die from COVID.\n\n"
        f"Projecting forward from recent cases: {_prediction(proj, 'deaths per day')}."
    )


def icu_text(proj: OutcomeProjection, rates: ImpliedRates, avg_stay_days: float) -> str:
    return (
        f"If we assume the average ICU patient spends {avg_stay_days:g} days there, "
        f"~{rates.icu_bed_pct:.0f} % of identified COVID cases need ICU beds.\n\n"
        f"Current prediction: {_prediction(proj, 'ICU patients hospitalized with COVID-19')}."
    )


def non_icu_text(proj: OutcomeProjection, rates: ImpliedRates, avg_stay_days: float) -> str:
    return (
        f"If we assume the average hospital stay is {avg_stay_days:g} days, each identified "
        f"COVID case has a {rates.hospital_bed_pct:.0f} % chance of needing a hospital bed.\n\n"
        f"Current prediction: {_prediction(proj, 'non-ICU patients hospitalized with COVID-19')}."
    )
