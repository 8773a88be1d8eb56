from __future__ import annotations

from datetime import date

import pytest

from cdisc_pipeline.domain.entities.records import RawDemographicRecord


@pytest.fixture(autouse=True)
def _isolated_pipeline_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep host environment variables and config files out of the tests.

    ``ConfigLoader`` layers environment variables and ``./cdisc_pipeline.toml``
    over the defaults, so tests run from an empty working directory with the
    relevant variables unset.
    """
    for name in (
        "STUDY_ID",
        "N_SUBJECTS",
        "SEED",
        "MISSING_AGE_RATE",
        "MISSING_SEX_RATE",
        "N_IMPUTATIONS",
        "MAX_WORKERS",
        "ERROR_POLICY",
        "OUTPUT_DIR",
        "REFERENCE_DATE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def raw_record() -> RawDemographicRecord:
    return RawDemographicRecord(
        study_id="S1",
        subject_id="001",
        birth_date=date(1953, 6, 1),
        age=70,
        age_unit="YEARS",
        sex="F",
        ethnicity="NOT HISPANIC OR LATINO",
        race="OTHER",
        race_other="Caucasian",
    )


@pytest.fixture
def raw_records() -> list[RawDemographicRecord]:
    rows = [
        ("001", "1953-06-01", 70, "F", "OTHER", "Caucasian"),
        ("002", "2010-02-14", 13, "M", "ASIAN", None),
        ("003", None, 40, "F", "UNKNOWN", "Black American"),
        ("004", None, None, None, "WHITE", None),
    ]
    return [
        RawDemographicRecord(
            study_id="S1",
            subject_id=subject_id,
            birth_date=birth_date,
            age=age,
            age_unit="YEARS" if age is not None else None,
            sex=sex,
            race=race,
            race_other=race_other,
        )
        for subject_id, birth_date, age, sex, race, race_other in rows
    ]
