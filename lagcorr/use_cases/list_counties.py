from __future__ import annotations

from typing import Optional

from loguru import logger

from lagcorr.core.config import AppConfig
from lagcorr.domain.repositories import SourceRepository
from lagcorr.infrastructure.analysis.county_filter import county_options


def list_counties_uc(repo: SourceRepository, cfg: AppConfig) -> list[str]:
    options = county_options(
        repo.load_cases(),
        repo.load_hospital(),
        cases_col=cfg.cases_county_col,
        hosp_col=cfg.hosp_county_col,
    )
    logger.info("{} counties present in both datasets", len(options))
    return options


def default_county(options: list[str], preferred: str) -> Optional[str]:
    if not options:
        return None
    return preferred if preferred in options else options[0]
