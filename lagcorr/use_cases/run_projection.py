from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from loguru import logger

from lagcorr.core.config import AppConfig, OUTCOME_ORDER
from lagcorr.domain.entities import CountyContext, OutcomeParams, OutcomeProjection, ProjectionParams
from lagcorr.infrastructure.analysis.projection import align_by_date, outlook, project, projected_value


@dataclass(frozen=True)
class RunProjectionInput:
    context: CountyContext
    params: ProjectionParams


@dataclass(frozen=True)
class RunProjectionOutput:
    meta: Dict[str, Any]
    results: Dict[str, OutcomeProjection]


def default_params(cfg: AppConfig, county: str) -> ProjectionParams:
    s = cfg.sliders
    return ProjectionParams(
        county=county,
        outcomes={
            k: OutcomeParams(lag_days=int(s[f"{k}_lag"].default), rate=float(s[f"{k}_rate"].default))
            for k in OUTCOME_ORDER
        },
    )


def validate_params(cfg: AppConfig, params: ProjectionParams) -> None:
    for k, p in params.outcomes.items():
        cfg.sliders[f"{k}_lag"].validate(p.lag_days)
        cfg.sliders[f"{k}_rate"].validate(p.rate)


def project_outcome(cfg: AppConfig, ctx: CountyContext, outcome: str, p: OutcomeParams) -> OutcomeProjection:
    smoothed = ctx.smoothed_cases
    back = cfg.deaths_report_back if outcome == "deaths" else 0

    projected = project(smoothed, p.lag_days, p.rate, name="Scaled, lagged cases")
    observed = ctx.observed(outcome)

    return OutcomeProjection(
        outcome=outcome,
        params=p,
        projected=projected,
        observed=observed,
        aligned=align_by_date(projected, observed),
        next_value=projected_value(smoothed, p.lag_days, p.rate, back=back),
        outlook=outlook(smoothed, p.lag_days, p.rate, back=back),
    )


def run_projection_uc(cfg: AppConfig, inp: RunProjectionInput) -> RunProjectionOutput:
    ctx = inp.context
    if inp.params.county != ctx.county:
        raise ValueError(f"Parameters are for {inp.params.county}, context is {ctx.county}")

    validate_params(cfg, inp.params)

    results: Dict[str, OutcomeProjection] = {}
    for outcome in OUTCOME_ORDER:
        if outcome not in inp.params.outcomes:
            continue
        p = inp.params.outcomes[outcome]
        results[outcome] = project_outcome(cfg, ctx, outcome, p)
        logger.debug("{} {}: lag={} rate={}", ctx.county, outcome, p.lag_days, p.rate)

    meta = {
        "county": ctx.county,
        "start_date": cfg.start_date.isoformat(),
        "last_case_date": ctx.cases.last_date.isoformat() if ctx.cases.last_date else None,
        "case_days": len(ctx.cases),
        "window_size": int(cfg.window_size),
        "trim_days": int(cfg.trim_days),
    }

    return RunProjectionOutput(meta=meta, results=results)
