"""
Tests for the county context, projection and implied-rate use cases.
"""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from lagcorr.domain.entities import OutcomeParams, ProjectionParams
from lagcorr.infrastructure.repositories.chhs_source_repository import CHHSSourceRepository
from lagcorr.use_cases.build_county_context import build_county_context_uc
from lagcorr.use_cases.implied_rates import implied_rates_uc
from lagcorr.use_cases.list_counties import default_county, list_counties_uc
from lagcorr.use_cases.run_projection import (
    RunProjectionInput,
    default_params,
    run_projection_uc,
    validate_params,
)


@pytest.fixture
def repo(source_files):
    return CHHSSourceRepository(source_files)


@pytest.fixture
def context(source_files, repo):
    return build_county_context_uc(source_files, repo.load_cases(), repo.load_hospital(), "Santa Clara")


class TestListCounties:
    def test_intersection_of_sources(self, source_files, repo):
        assert list_counties_uc(repo, source_files) == ["Santa Clara"]

    def test_default_county(self):
        assert default_county(["Alameda", "Santa Clara"], "Santa Clara") == "Santa Clara"
        assert default_county(["Alameda", "Fresno"], "Santa Clara") == "Alameda"
        assert default_county([], "Santa Clara") is None


class TestBuildCountyContext:
    """Filter, trim, anchor and smooth one county."""

    def test_trim_and_anchor(self, context):
        # cases run 2020-05-25 .. 2020-07-10; last 3 days dropped
        assert context.cases.first_date == date(2020, 6, 1)
        assert context.cases.last_date == date(2020, 7, 7)
        assert len(context.cases) == 37
        assert len(context.smoothed_cases) == len(context.cases)

    def test_trim_is_configurable(self, source_files, repo):
        cfg = replace(source_files, trim_days=0)

        ctx = build_county_context_uc(cfg, repo.load_cases(), repo.load_hospital(), "Santa Clara")

        assert ctx.cases.last_date == date(2020, 7, 10)

    def test_smoothing_starts_at_anchor(self, context):
        # Santa Clara cases are 100 + i from 2020-05-25, i.e. 107 on 2020-06-01
        assert context.cases.values[0] == 107.0
        assert context.smoothed_cases.values[0] == pytest.approx(107.0)
        assert context.smoothed_cases.values[6] == pytest.approx(sum(range(107, 114)) / 7)

    def test_hospital_series(self, context):
        assert context.icu.first_date == date(2020, 6, 1)
        assert context.icu.last_date == date(2020, 7, 5)
        # 2020-06-01 is day 4 of the hospital table: suspected ICU present
        assert context.icu.values[0] == 22.0
        assert context.icu.values[1] == 20.0
        assert context.non_icu.values[0] == 64.0 - 22.0

    def test_unknown_county_gives_empty_series(self, source_files, repo):
        ctx = build_county_context_uc(source_files, repo.load_cases(), repo.load_hospital(), "Nowhere")

        assert ctx.cases.empty
        assert ctx.icu.empty
        assert ctx.smoothed_cases.empty


class TestRunProjection:
    """Projected series for all three outcomes."""

    def test_defaults(self, source_files, context):
        params = default_params(source_files, "Santa Clara")

        out = run_projection_uc(source_files, RunProjectionInput(context=context, params=params))

        assert list(out.results) == ["deaths", "icu", "non_icu"]
        assert out.meta["county"] == "Santa Clara"
        assert out.meta["last_case_date"] == "2020-07-07"

        deaths = out.results["deaths"]
        assert deaths.params == OutcomeParams(lag_days=17, rate=0.018)
        assert deaths.projected.first_date == date(2020, 6, 18)
        assert deaths.observed is context.smoothed_deaths

    def test_projected_dates_shift_by_calendar_days(self, source_files, context):
        params = default_params(source_files, "Santa Clara")

        out = run_projection_uc(source_files, RunProjectionInput(context=context, params=params))

        icu = out.results["icu"]
        for src, dst in zip(context.smoothed_cases.dates, icu.projected.dates):
            assert dst - src == timedelta(days=15)

    def test_next_values(self, source_files, context):
        params = default_params(source_files, "Santa Clara")

        out = run_projection_uc(source_files, RunProjectionInput(context=context, params=params))

        sm = context.smoothed_cases
        deaths_next = out.results["deaths"].next_value
        assert deaths_next.date == sm.dates[-6] + timedelta(days=17)
        assert deaths_next.value == pytest.approx(0.018 * sm.values[-6])

        icu_next = out.results["icu"].next_value
        assert icu_next.date == date(2020, 7, 7) + timedelta(days=15)

        non_icu_next = out.results["non_icu"].next_value
        assert non_icu_next.date == date(2020, 7, 7) + timedelta(days=13)
        assert non_icu_next.value == pytest.approx(0.47 * sm.values[-1])

    def test_aligned_frame_joins_on_date(self, source_files, context):
        params = default_params(source_files, "Santa Clara")

        out = run_projection_uc(source_files, RunProjectionInput(context=context, params=params))

        aligned = out.results["non_icu"].aligned
        row = aligned[aligned["date"].dt.date == date(2020, 6, 20)].iloc[0]
        # projected on 06-20 comes from smoothed cases on 06-07
        assert row["projected"] == pytest.approx(0.47 * context.smoothed_cases.value_at(date(2020, 6, 7)))
        assert row["observed"] == context.non_icu.value_at(date(2020, 6, 20))

    def test_idempotent(self, source_files, context):
        params = default_params(source_files, "Santa Clara")
        inp = RunProjectionInput(context=context, params=params)

        a = run_projection_uc(source_files, inp)
        b = run_projection_uc(source_files, inp)

        for k in a.results:
            assert a.results[k].projected == b.results[k].projected
            assert a.results[k].aligned.equals(b.results[k].aligned)

    def test_out_of_range_parameters(self, source_files, context):
        params = default_params(source_files, "Santa Clara")
        bad = ProjectionParams(
            county="Santa Clara",
            outcomes={**params.outcomes, "deaths": OutcomeParams(lag_days=40, rate=0.018)},
        )

        with pytest.raises(ValueError):
            validate_params(source_files, bad)
        with pytest.raises(ValueError):
            run_projection_uc(source_files, RunProjectionInput(context=context, params=bad))

    def test_county_mismatch(self, source_files, context):
        params = default_params(source_files, "Alameda")

        with pytest.raises(ValueError):
            run_projection_uc(source_files, RunProjectionInput(context=context, params=params))


class TestImpliedRates:
    def test_default_rates(self, cfg):
        rates = implied_rates_uc(default_params(cfg, "Santa Clara"), avg_stay_days=5)

        assert rates.deaths_per_100_cases == 1.8
        assert rates.icu_bed_pct == 4.0
        assert rates.hospital_bed_pct == 9.0

    def test_invalid_stay(self, cfg):
        with pytest.raises(ValueError):
            implied_rates_uc(default_params(cfg, "Santa Clara"), avg_stay_days=0)
