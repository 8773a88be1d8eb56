"""Unit tests for CSVReader and the CSV raw data source."""

from pathlib import Path

import pytest

from cdisc_pipeline.domain.entities.records import RawDemographicRecord
from cdisc_pipeline.infrastructure.io.csv_reader import (
    CSVRawDataSource,
    CSVReader,
    CSVReadOptions,
)
from cdisc_pipeline.infrastructure.io.csv_writer import write_records_csv
from cdisc_pipeline.infrastructure.io.exceptions import (
    DataParseError,
    DataSourceNotFoundError,
    DataValidationError,
)


class TestCSVReader:
    """Test suite for CSVReader class."""

    def test_read_simple_csv(self, tmp_path: Path):
        """Test reading a simple CSV file."""
        # Arrange
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("StudyID,SubjID,Age\nS1,001,40\n")
        reader = CSVReader()

        # Act
        df = reader.read(csv_file)

        # Assert
        assert list(df.columns) == ["STUDYID", "SUBJID", "AGE"]
        assert df.iloc[0]["SUBJID"] == "001"

    def test_read_without_header_normalization(self, tmp_path: Path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text(" StudyID ,Age\nS1,40\n")

        df = CSVReader().read(csv_file, CSVReadOptions(normalize_headers=False))

        assert list(df.columns) == [" StudyID ", "Age"]

    def test_na_strings_are_kept_in_strict_mode(self, tmp_path: Path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("RACE,RACEOTH\nNA,\n")

        df = CSVReader().read(csv_file)

        assert df.iloc[0]["RACE"] == "NA"
        assert df["RACEOTH"].isna().all()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DataSourceNotFoundError, match="File not found"):
            CSVReader().read(tmp_path / "absent.csv")

    def test_directory_is_not_a_file(self, tmp_path: Path):
        with pytest.raises(DataSourceNotFoundError, match="Not a file"):
            CSVReader().read(tmp_path)

    def test_empty_file(self, tmp_path: Path):
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")

        with pytest.raises(DataParseError, match="empty"):
            CSVReader().read(csv_file)


class TestCSVRawDataSource:
    def test_load_records(self, tmp_path: Path):
        csv_file = tmp_path / "dm.csv"
        csv_file.write_text(
            "STUDYID,SUBJID,BRTHDAT,AGE,AGEU,SEX,ETHNIC,RACE,RACEOTH\n"
            "S1,001,1953-06-01,70,YEARS,F,,OTHER,Caucasian\n"
            "S1,002,, 13 ,YEARS,null,,ASIAN,\n"
        )

        records = CSVRawDataSource().load_records(csv_file)

        assert records[0] == RawDemographicRecord(
            study_id="S1",
            subject_id="001",
            birth_date="1953-06-01",
            age="70",
            age_unit="YEARS",
            sex="F",
            ethnicity=None,
            race="OTHER",
            race_other="Caucasian",
        )
        assert records[1].age == "13"
        assert records[1].sex is None
        assert records[1].birth_date is None

    def test_optional_columns_may_be_absent(self, tmp_path: Path):
        csv_file = tmp_path / "dm.csv"
        csv_file.write_text("STUDYID,SUBJID\nS1,001\n")

        [record] = CSVRawDataSource().load_records(csv_file)

        assert record == RawDemographicRecord(study_id="S1", subject_id="001")

    def test_required_columns(self, tmp_path: Path):
        csv_file = tmp_path / "dm.csv"
        csv_file.write_text("STUDYID,AGE\nS1,40\n")

        with pytest.raises(DataValidationError, match="SUBJID"):
            CSVRawDataSource().load_records(csv_file)

    def test_reads_back_written_records(self, tmp_path: Path, raw_records):
        path = write_records_csv(raw_records, "CDASH", tmp_path / "out" / "dm.csv")

        records = CSVRawDataSource().load_records(path)

        assert [r.subject_id for r in records] == ["001", "002", "003", "004"]
        assert records[0].race_other == "Caucasian"
        assert records[0].birth_date == "1953-06-01"
        assert records[3].age is None
