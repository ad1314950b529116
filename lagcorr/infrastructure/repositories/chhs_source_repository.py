from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import pandas as pd
from loguru import logger

from lagcorr.core.config import AppConfig
from lagcorr.core.errors import DatasetValidationError
from lagcorr.domain.repositories import SourceRepository
from lagcorr.infrastructure.analysis.preprocessing import clean_core_cols, load_and_validate_df
from lagcorr.infrastructure.http.downloader import download


def _file_name(url: str) -> str:
    return Path(urlparse(url).path).name or "download.csv"


class CHHSSourceRepository(SourceRepository):
    """California Health and Human Services open-data CSVs, cached on disk."""

    def __init__(self, cfg: AppConfig) -> None:
        self._cfg = cfg
        self._cache_dir = Path(cfg.cache_dir)
        self._cases: Optional[pd.DataFrame] = None
        self._hospital: Optional[pd.DataFrame] = None

    def _read(self, url: str, required_cols: tuple[str, ...], date_col: str) -> pd.DataFrame:
        path = download(
            url,
            self._cache_dir / _file_name(url),
            timeout=self._cfg.download_timeout_s,
            max_age_s=self._cfg.cache_max_age_h * 3600,
        )
        try:
            df_raw = pd.read_csv(path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DatasetValidationError(f"Cannot parse {path.name}: {e}") from e

        df = load_and_validate_df(df_raw, list(required_cols), date_col)
        logger.info("Loaded {} rows from {}", len(df), path.name)
        return df

    def load_cases(self) -> pd.DataFrame:
        if self._cases is None:
            cfg = self._cfg
            df = self._read(cfg.cases_url, cfg.cases_required_cols, cfg.cases_date_col)
            self._cases = clean_core_cols(df, [cfg.cases_col, cfg.deaths_col])
        return self._cases

    def load_hospital(self) -> pd.DataFrame:
        if self._hospital is None:
            cfg = self._cfg
            df = self._read(cfg.hospital_url, cfg.hosp_required_cols, cfg.hosp_date_col)
            # suspected ICU counts are often left blank
            df[cfg.icu_suspected_col] = df[cfg.icu_suspected_col].fillna(0.0)
            self._hospital = clean_core_cols(df, [cfg.hosp_confirmed_col, cfg.icu_confirmed_col, cfg.icu_suspected_col])
        return self._hospital

    def clear(self) -> None:
        self._cases = None
        self._hospital = None
        for url in (self._cfg.cases_url, self._cfg.hospital_url):
            path = self._cache_dir / _file_name(url)
            if path.exists():
                path.unlink()
                logger.info("Removed cached {}", path)
