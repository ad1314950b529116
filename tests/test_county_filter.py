"""
Tests for county intersection and filtering.
"""

import pandas as pd

from lagcorr.infrastructure.analysis.county_filter import county_options, filter_county


def _cases(areas):
    return pd.DataFrame({"area": areas, "cases": range(len(areas))})


def _hosp(counties):
    return pd.DataFrame({"county": counties, "icu": range(len(counties))})


class TestCountyOptions:
    """Only counties present in both tables are selectable."""

    def test_intersection(self):
        options = county_options(_cases(["A", "B", "C"]), _hosp(["B", "C", "D"]))

        assert options == ["B", "C"]
        assert "A" not in options

    def test_commutative(self):
        a = pd.DataFrame({"name": ["A", "B", "C", "C"]})
        b = pd.DataFrame({"name": ["D", "C", "B"]})

        assert county_options(a, b, "name", "name") == county_options(b, a, "name", "name")

    def test_empty_intersection(self):
        assert county_options(_cases(["A"]), _hosp(["Z"])) == []

    def test_ignores_blank_and_missing(self):
        options = county_options(_cases(["A", None, " ", "B "]), _hosp(["A", "B", None]))

        assert options == ["A", "B"]


class TestFilterCounty:
    """Row subset for one county."""

    def test_preserves_order(self):
        df = pd.DataFrame({"area": ["A", "B", "A", "A"], "cases": [3, 9, 1, 2]})

        out = filter_county(df, "A", "area")

        assert out["cases"].tolist() == [3, 1, 2]
        assert out.index.tolist() == [0, 1, 2]

    def test_absent_county_gives_empty_frame(self):
        df = pd.DataFrame({"area": ["A", "B"], "cases": [1, 2]})

        out = filter_county(df, "Nowhere", "area")

        assert out.empty
        assert list(out.columns) == ["area", "cases"]
