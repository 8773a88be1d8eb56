"""Unit tests for SAS V5 transport export."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyreadstat
import pytest

from cdisc_pipeline.domain.services.batch_mapper import map_batch
from cdisc_pipeline.domain.services.demographics_mapper import (
    map_cdash_to_sdtm,
    map_sdtm_to_adam,
)
from cdisc_pipeline.infrastructure.io.exceptions import XportGenerationError
from cdisc_pipeline.infrastructure.io.frames import records_to_frame
from cdisc_pipeline.infrastructure.io.xpt_writer import XPTWriter, write_xpt_file


@pytest.fixture
def frames(raw_records) -> dict[str, pd.DataFrame]:
    sdtm = map_batch(raw_records, map_cdash_to_sdtm).records
    adam = map_batch(sdtm, map_sdtm_to_adam).records
    return {
        "SDTM": records_to_frame(sdtm, "SDTM"),
        "ADAM": records_to_frame(adam, "ADAM"),
    }


class TestWriteXptFile:
    def test_writes_readable_dm(self, tmp_path: Path, frames):
        path = write_xpt_file(frames["SDTM"], "SDTM", tmp_path / "xpt" / "DM.xpt")

        assert path == tmp_path / "xpt" / "dm.xpt"
        df, meta = pyreadstat.read_xport(str(path))
        assert list(df.columns) == list(frames["SDTM"].columns)
        assert meta.table_name == "DM"
        assert meta.column_names_to_labels["USUBJID"] == "Unique Subject Identifier"
        assert list(df["USUBJID"]) == ["S1-001", "S1-002", "S1-003", "S1-004"]

    def test_dates_are_iso_text_and_missing_is_blank(self, tmp_path: Path, frames):
        path = write_xpt_file(frames["SDTM"], "SDTM", tmp_path / "dm.xpt")

        df, _ = pyreadstat.read_xport(str(path))

        assert df.loc[0, "BRTHDTC"] == "1953-06-01"
        assert df.loc[2, "BRTHDTC"] == ""
        assert df.loc[3, "SEX"] == ""

    def test_numeric_missing_is_nan(self, tmp_path: Path, frames):
        path = write_xpt_file(frames["ADAM"], "ADAM", tmp_path / "adsl.xpt")

        df, meta = pyreadstat.read_xport(str(path))

        assert meta.table_name == "ADSL"
        assert df.loc[0, "AGE"] == 70.0
        assert pd.isna(df.loc[3, "AGE"])
        assert list(df["SAFFL"]) == ["Y", "Y", "Y", "N"]
        assert list(df["AGEGR1"])[:3] == [">65", "<18", "18-65"]

    def test_columns_follow_definition_order(self, tmp_path: Path, frames):
        shuffled = frames["ADAM"][list(reversed(frames["ADAM"].columns))]

        path = write_xpt_file(shuffled, "ADAM", tmp_path / "adsl.xpt")

        df, _ = pyreadstat.read_xport(str(path))
        assert list(df.columns) == list(frames["ADAM"].columns)

    def test_filename_stem_limit(self, tmp_path: Path, frames):
        with pytest.raises(XportGenerationError, match="<=8 characters"):
            write_xpt_file(frames["SDTM"], "SDTM", tmp_path / "demographics.xpt")

    def test_overwrites_existing_file(self, tmp_path: Path, frames):
        target = tmp_path / "dm.xpt"
        target.write_bytes(b"stale")

        write_xpt_file(frames["SDTM"], "SDTM", target)

        df, _ = pyreadstat.read_xport(str(target))
        assert len(df) == 4


def test_xpt_writer_adapter(tmp_path: Path, frames):
    path = XPTWriter().write(frames["ADAM"], "ADAM", tmp_path / "adsl.xpt")

    assert path.exists()
