"""Unit tests for the record dataclasses."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from cdisc_pipeline.domain.entities.records import (
    AnalysisRecord,
    RawDemographicRecord,
    StandardizedRecord,
)


class TestFromMapping:
    def test_ignores_unknown_keys(self):
        record = RawDemographicRecord.from_mapping(
            {"study_id": "S1", "subject_id": "001", "site": "NL01"}
        )

        assert record == RawDemographicRecord(study_id="S1", subject_id="001")

    def test_standardized_record(self):
        record = StandardizedRecord.from_mapping(
            {
                "study_id": "S1",
                "domain": "DM",
                "unique_subject_id": "S1-001",
                "subject_id": "001",
                "birth_date": date(1990, 1, 1),
            }
        )

        assert record.birth_date == date(1990, 1, 1)
        assert record.race_recoded is None

    def test_analysis_record_defaults_flag_to_no(self):
        record = AnalysisRecord.from_mapping(
            {"study_id": "S1", "unique_subject_id": "S1-001", "subject_id": "001"}
        )

        assert record.safety_population_flag == "N"
        assert record.age_group is None


def test_records_are_immutable():
    record = RawDemographicRecord(study_id="S1", subject_id="001")

    with pytest.raises(FrozenInstanceError):
        record.age = 40  # type: ignore[misc]
