"""
Headless report of the lagged case/outcome projections for one county.

Usage:
    python -m lagcorr.cli --county "Santa Clara" --death-lag 17 --death-rate 0.018
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from loguru import logger

from lagcorr.core.config import CFG, OUTCOME_LABELS, OUTCOME_ORDER, AppConfig
from lagcorr.core.errors import DataFetchError, DatasetValidationError
from lagcorr.core.logs import setup_logging
from lagcorr.domain.entities import OutcomeParams, ProjectionParams
from lagcorr.domain.repositories import SourceRepository
from lagcorr.infrastructure.repositories.chhs_source_repository import CHHSSourceRepository
from lagcorr.use_cases.build_county_context import build_county_context_uc
from lagcorr.use_cases.implied_rates import implied_rates_uc
from lagcorr.use_cases.list_counties import list_counties_uc
from lagcorr.use_cases.run_projection import RunProjectionInput, default_params, run_projection_uc

_ARG_PREFIX = {"deaths": "death", "icu": "icu", "non_icu": "non_icu"}


def build_parser(cfg: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Project deaths, ICU and non-ICU patients from lagged, scaled county cases",
    )
    parser.add_argument("--county", default=cfg.default_county, help="County name (default: %(default)s)")
    parser.add_argument("--list-counties", action="store_true", help="Print selectable counties and exit")
    parser.add_argument("--trim-days", type=int, default=cfg.trim_days, help="Most recent days to drop")
    parser.add_argument("--cache-dir", default=cfg.cache_dir, help="Directory for downloaded CSVs")
    parser.add_argument("--refresh", action="store_true", help="Download the sources again")

    for k in OUTCOME_ORDER:
        pfx = _ARG_PREFIX[k].replace("_", "-")
        parser.add_argument(f"--{pfx}-lag", type=int, default=None, help=f"{OUTCOME_LABELS[k]} lag in days")
        parser.add_argument(f"--{pfx}-rate", type=float, default=None, help=f"{OUTCOME_LABELS[k]} rate")
    return parser


def params_from_args(cfg: AppConfig, args: argparse.Namespace) -> ProjectionParams:
    base = default_params(cfg, args.county)
    outcomes = {}
    for k in OUTCOME_ORDER:
        pfx = _ARG_PREFIX[k]
        lag = getattr(args, f"{pfx}_lag")
        rate = getattr(args, f"{pfx}_rate")
        outcomes[k] = OutcomeParams(
            lag_days=base.outcomes[k].lag_days if lag is None else int(lag),
            rate=base.outcomes[k].rate if rate is None else float(rate),
        )
    return ProjectionParams(county=args.county, outcomes=outcomes)


def run_report(cfg: AppConfig, repo: SourceRepository, args: argparse.Namespace) -> int:
    try:
        options = list_counties_uc(repo, cfg)
    except DataFetchError as e:
        logger.error("Could not download {}: {}", e.url, e)
        return 1
    except DatasetValidationError as e:
        logger.error("Invalid dataset: {} {}", e, e.missing_fields or "")
        return 1

    if args.list_counties:
        for c in options:
            print(c)
        return 0

    if args.county not in options:
        logger.error("County {!r} is not present in both datasets", args.county)
        return 2

    try:
        params = params_from_args(cfg, args)
        ctx = build_county_context_uc(cfg, repo.load_cases(), repo.load_hospital(), args.county)
        out = run_projection_uc(cfg, RunProjectionInput(context=ctx, params=params))
    except (DatasetValidationError, ValueError) as e:
        logger.error("{}", e)
        return 1

    rates = implied_rates_uc(params, cfg.avg_stay_days)
    logger.info("County: {} (cases through {})", ctx.county, out.meta["last_case_date"])
    for k, proj in out.results.items():
        nv = proj.next_value
        when = nv.date.isoformat() if nv else "n/a"
        value = round(nv.value) if nv else "n/a"
        logger.info(
            "{:<16} lag={:>2}d rate={:<6g} -> {} on {}",
            OUTCOME_LABELS[k], proj.params.lag_days, proj.params.rate, value, when,
        )
    logger.info("Deaths per 100 identified cases: {:g}", rates.deaths_per_100_cases)
    logger.info("Cases needing an ICU bed: ~{:.0f} %", rates.icu_bed_pct)
    logger.info("Cases needing a hospital bed: ~{:.0f} %", rates.hospital_bed_pct)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser(CFG)
    args = parser.parse_args(argv)

    if args.trim_days < 0:
        parser.error("--trim-days must be >= 0")

    cfg = replace(CFG, trim_days=args.trim_days, cache_dir=args.cache_dir)
    setup_logging(cfg)

    repo = CHHSSourceRepository(cfg)
    if args.refresh:
        repo.clear()
    return run_report(cfg, repo, args)


if __name__ == "__main__":
    sys.exit(main())
