"""Unit tests for the demographics summary tables."""

import pandas as pd
import pytest

from cdisc_pipeline.domain.services.summary_service import (
    build_demographics_summary,
    build_population_counts,
)


@pytest.fixture
def adsl() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "USUBJID": ["S1-001", "S1-002", "S1-003", "S1-004"],
            "AGE": pd.array([70, 13, 40, None], dtype="Int64"),
            "SEX": pd.array(["F", "M", "F", None], dtype="string"),
            "ETHNIC": pd.array([None, None, None, None], dtype="string"),
            "RACEREC": pd.array(
                ["WHITE", "ASIAN", "BLACK OR AFRICAN AMERICAN", "WHITE"],
                dtype="string",
            ),
            "AGEGR1": pd.array([">65", "<18", "18-65", None], dtype="string"),
            "SAFFL": pd.array(["Y", "Y", "Y", "N"], dtype="string"),
        }
    )


def _cell(table: pd.DataFrame, characteristic: str, category: str, column: str):
    row = table[
        (table["Characteristic"] == characteristic) & (table["Category"] == category)
    ]
    assert len(row) == 1, f"{characteristic}/{category} not found"
    return row.iloc[0][column]


class TestPopulationCounts:
    def test_counts_by_flag(self, adsl):
        counts = build_population_counts(adsl)

        assert list(counts["SAFFL"]) == ["Y", "N"]
        assert list(counts["Subjects"]) == [3, 1]

    def test_absent_flag_is_zero(self, adsl):
        counts = build_population_counts(adsl[adsl["SAFFL"] == "Y"])

        assert list(counts["Subjects"]) == [3, 0]


class TestDemographicsSummary:
    def test_columns(self, adsl):
        table = build_demographics_summary(adsl)

        assert list(table.columns) == [
            "Characteristic",
            "Category",
            "SAFFL=Y",
            "SAFFL=N",
            "Total",
        ]

    def test_subject_counts(self, adsl):
        table = build_demographics_summary(adsl)

        assert _cell(table, "Subjects", "n", "SAFFL=Y") == "3"
        assert _cell(table, "Subjects", "n", "Total") == "4"

    def test_age_statistics(self, adsl):
        table = build_demographics_summary(adsl)

        assert _cell(table, "Age (years)", "Mean (SD)", "SAFFL=Y") == "41.0 (28.5)"
        assert _cell(table, "Age (years)", "Median", "Total") == "40.0"
        assert _cell(table, "Age (years)", "Min, Max", "Total") == "13, 70"
        assert _cell(table, "Age (years)", "Missing", "Total") == "1"
        assert _cell(table, "Age (years)", "Mean (SD)", "SAFFL=N") == "-"

    def test_age_groups_follow_fixed_order(self, adsl):
        table = build_demographics_summary(adsl)
        categories = list(table.loc[table["Characteristic"] == "Age group", "Category"])

        assert categories == ["<18", "18-65", ">65", "Missing"]

    def test_categorical_percentages(self, adsl):
        table = build_demographics_summary(adsl)

        assert _cell(table, "Sex", "F", "Total") == "2 (50.0%)"
        assert _cell(table, "Sex", "Missing", "SAFFL=N") == "1 (100.0%)"
        assert _cell(table, "Race (recoded)", "WHITE", "Total") == "2 (50.0%)"
        assert _cell(table, "Ethnicity", "Missing", "Total") == "4 (100.0%)"

    def test_empty_dataset(self):
        table = build_demographics_summary(
            pd.DataFrame(columns=["AGE", "SEX", "SAFFL"])
        )

        assert _cell(table, "Subjects", "n", "Total") == "0"
        assert _cell(table, "Sex", "Missing", "Total") == "0"
        assert _cell(table, "Age (years)", "Mean (SD)", "Total") == "-"
