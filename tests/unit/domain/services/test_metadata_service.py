"""Unit tests for dataset descriptions."""

import pytest

from cdisc_pipeline.domain.services.metadata_service import (
    DESCRIPTION_COLUMNS,
    describe_all,
    describe_dataset,
)


class TestDescribeDataset:
    def test_sdtm_dm_variables_in_order(self):
        frame = describe_dataset("SDTM")

        assert tuple(frame.columns) == DESCRIPTION_COLUMNS
        assert list(frame["Variable"]) == [
            "STUDYID",
            "DOMAIN",
            "USUBJID",
            "SUBJID",
            "BRTHDTC",
            "AGE",
            "AGEU",
            "SEX",
            "ETHNIC",
            "RACE",
            "RACEOTH",
            "RACEREC",
        ]

    def test_adsl_carries_derived_variables(self):
        frame = describe_dataset("adam").set_index("Variable")

        assert frame.loc["AGEGR1", "Label"] == "Pooled Age Group 1"
        assert frame.loc["SAFFL", "Type"] == "Char"
        assert frame.loc["AGE", "Type"] == "Num"

    def test_unknown_stage(self):
        with pytest.raises(KeyError, match="Unknown dataset stage"):
            describe_dataset("SEND")


def test_describe_all_covers_each_stage():
    frame = describe_all()

    assert frame.columns[0] == "Dataset"
    assert list(frame["Dataset"].unique()) == ["CDASH.DM", "SDTM.DM", "ADAM.ADSL"]
    assert (frame["Variable"].str.len() <= 8).all()
    assert (frame["Label"].str.len() <= 40).all()
