"""Unit tests for stage dataset persistence."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from cdisc_pipeline.domain.services.demographics_mapper import map_cdash_to_sdtm
from cdisc_pipeline.infrastructure.io.dataset_store import DatasetStore
from cdisc_pipeline.infrastructure.io.exceptions import DatasetStoreError
from cdisc_pipeline.infrastructure.io.frames import records_to_frame


@pytest.fixture
def sdtm_frame(raw_records) -> pd.DataFrame:
    return records_to_frame([map_cdash_to_sdtm(r) for r in raw_records], "SDTM")


class TestDatasetStore:
    def test_path_per_stage(self, tmp_path: Path):
        store = DatasetStore(tmp_path)

        assert store.path_for("sdtm_imputed") == tmp_path / "sdtm_imputed.pkl"

    def test_unknown_stage(self, tmp_path: Path):
        with pytest.raises(DatasetStoreError, match="Unknown stage"):
            DatasetStore(tmp_path).path_for("MISSINGNESS")

    def test_round_trip_preserves_types_and_missing_values(
        self, tmp_path: Path, sdtm_frame: pd.DataFrame
    ):
        store = DatasetStore(tmp_path / "data")

        path = store.save("SDTM", sdtm_frame)
        loaded = store.load("SDTM")

        assert path.exists()
        pd.testing.assert_frame_equal(loaded, sdtm_frame)
        assert loaded.loc[0, "BRTHDTC"] == date(1953, 6, 1)
        assert str(loaded["AGE"].dtype) == "Int64"
        assert loaded["AGE"].isna().sum() == 1

    def test_exists(self, tmp_path: Path, sdtm_frame: pd.DataFrame):
        store = DatasetStore(tmp_path)
        assert not store.exists("ADAM")

        store.save("ADAM", sdtm_frame)

        assert store.exists("adam")

    def test_load_missing_dataset(self, tmp_path: Path):
        with pytest.raises(DatasetStoreError, match="No CDASH dataset"):
            DatasetStore(tmp_path).load("CDASH")

    def test_load_rejects_non_dataframe(self, tmp_path: Path):
        store = DatasetStore(tmp_path)
        pd.Series([1, 2]).to_pickle(store.path_for("CDASH"))

        with pytest.raises(DatasetStoreError, match="does not contain a DataFrame"):
            store.load("CDASH")

    def test_load_corrupt_file(self, tmp_path: Path):
        store = DatasetStore(tmp_path)
        store.path_for("CDASH").write_bytes(b"not a pickle")

        with pytest.raises(DatasetStoreError, match="Failed to load"):
            store.load("CDASH")
