from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict

from dotenv import load_dotenv

from lagcorr.domain.entities import ParameterSpec


CASES_DEATHS_URL = (
    "https://data.chhs.ca.gov/dataset/f333528b-4d38-4814-bebb-12db1f10f535/"
    "resource/046cdd2b-31e5-4d34-9ed3-b48cdbc4be7a/download/covid19cases_test.csv"
)
HOSPITAL_URL = (
    "https://data.chhs.ca.gov/dataset/2df3e19e-9ee4-42a6-a087-9761f82033f6/"
    "resource/47af979d-8685-4981-bced-96a6b79d3ed5/download/covid19hospitalbycounty.csv"
)

OUTCOME_ORDER = ["deaths", "icu", "non_icu"]

OUTCOME_LABELS = {
    "deaths": "Deaths",
    "icu": "ICU patients",
    "non_icu": "Non-ICU patients",
}


def _default_sliders() -> Dict[str, ParameterSpec]:
    return {
        "deaths_lag": ParameterSpec("Death lag (days)", 5, 30, 1, 17),
        "deaths_rate": ParameterSpec("Lagged CFR", 0.001, 0.030, 0.001, 0.018),
        "icu_lag": ParameterSpec("ICU lag (days)", 1, 20, 1, 15),
        "icu_rate": ParameterSpec("ICU rate", 0.0, 0.3, 0.01, 0.19),
        "non_icu_lag": ParameterSpec("Non-ICU lag (days)", 1, 20, 1, 13),
        "non_icu_rate": ParameterSpec("Non-ICU rate", 0.0, 0.6, 0.01, 0.47),
    }


@dataclass(frozen=True)
class AppConfig:
    # ---- Sources ----
    cases_url: str = CASES_DEATHS_URL
    hospital_url: str = HOSPITAL_URL
    cache_dir: str = "data"
    download_timeout_s: int = 120
    # CHHS publishes once a day
    cache_max_age_h: float = 12.0

    # ---- Case/death table ----
    cases_county_col: str = "area"
    cases_date_col: str = "date"
    cases_col: str = "cases"
    deaths_col: str = "deaths"

    # ---- Hospital table ----
    hosp_county_col: str = "county"
    hosp_date_col: str = "todays_date"
    hosp_confirmed_col: str = "hospitalized_covid_confirmed_patients"
    icu_confirmed_col: str = "icu_covid_confirmed_patients"
    icu_suspected_col: str = "icu_suspected_covid_patients"

    # ---- Analysis ----
    window_size: int = 7
    edge: str = "replicate"
    # recent data is somewhat unreliable
    trim_days: int = 3
    start_date: date = date(2020, 6, 1)
    default_county: str = "Santa Clara"
    avg_stay_days: float = 5.0
    deaths_report_back: int = 5

    # ---- Controls ----
    sliders: Dict[str, ParameterSpec] = field(default_factory=_default_sliders)

    # ---- Logging ----
    log_level: str = "INFO"
    log_format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

    @property
    def cases_required_cols(self) -> tuple[str, ...]:
        return (self.cases_county_col, self.cases_date_col, self.cases_col, self.deaths_col)

    @property
    def hosp_required_cols(self) -> tuple[str, ...]:
        return (
            self.hosp_county_col,
            self.hosp_date_col,
            self.hosp_confirmed_col,
            self.icu_confirmed_col,
            self.icu_suspected_col,
        )


def load_config(base: AppConfig | None = None) -> AppConfig:
    """Apply ``LAGCORR_*`` environment overrides (and a ``.env`` file) to ``base``."""
    load_dotenv()
    cfg = base or AppConfig()

    overrides: dict = {}
    if os.getenv("LAGCORR_CACHE_DIR"):
        overrides["cache_dir"] = os.environ["LAGCORR_CACHE_DIR"]
    if os.getenv("LAGCORR_CACHE_MAX_AGE_H"):
        overrides["cache_max_age_h"] = float(os.environ["LAGCORR_CACHE_MAX_AGE_H"])
    if os.getenv("LAGCORR_TRIM_DAYS"):
        overrides["trim_days"] = int(os.environ["LAGCORR_TRIM_DAYS"])
    if os.getenv("LAGCORR_START_DATE"):
        overrides["start_date"] = date.fromisoformat(os.environ["LAGCORR_START_DATE"])
    if os.getenv("LAGCORR_LOG_LEVEL"):
        overrides["log_level"] = os.environ["LAGCORR_LOG_LEVEL"].upper()

    if overrides.get("trim_days", cfg.trim_days) < 0:
        raise ValueError("LAGCORR_TRIM_DAYS must be >= 0")

    return replace(cfg, **overrides) if overrides else cfg


CFG = load_config()
