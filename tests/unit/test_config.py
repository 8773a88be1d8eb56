"""Unit tests for configuration and constants."""

from __future__ import annotations

from pathlib import Path

import pytest

from cdisc_pipeline.config import ConfigLoader, PipelineConfig
from cdisc_pipeline.constants import AgeGroups, Defaults, RaceCategories
from cdisc_pipeline.domain.services.batch_mapper import ErrorPolicy


class TestPipelineConfig:
    """Test suite for PipelineConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = PipelineConfig()

        assert config.study_id == "CDISCPILOT01"
        assert config.n_subjects == 100
        assert config.seed == Defaults.SEED
        assert config.missing_age_rate == 0.1
        assert config.missing_sex_rate == 0.05
        assert config.n_imputations == 5
        assert config.max_workers == 1
        assert config.resolved_error_policy is ErrorPolicy.FAIL_FAST
        assert config.output_dir == Path("output")
        assert config.race_aliases == {}

    def test_config_is_immutable(self):
        """Test that config is frozen and cannot be modified."""
        config = PipelineConfig()

        with pytest.raises(Exception):  # FrozenInstanceError
            config.seed = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"study_id": "  "}, "study_id must not be empty"),
            ({"n_subjects": 0}, "n_subjects must be positive"),
            ({"missing_age_rate": 1.5}, "missing_age_rate must be between"),
            ({"missing_sex_rate": -0.1}, "missing_sex_rate must be between"),
            ({"n_imputations": 0}, "n_imputations must be positive"),
            ({"max_workers": 0}, "max_workers must be positive"),
            ({"error_policy": "retry"}, "error_policy must be one of"),
            ({"reference_date": "01/01/2024"}, "reference_date must be an ISO"),
            ({"race_aliases": {"Latin": "LATINO"}}, "non-canonical"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            PipelineConfig(**kwargs)

    def test_race_alias_table_extends_defaults(self):
        config = PipelineConfig(race_aliases={"Mediterranean": "WHITE"})

        table = config.race_alias_table

        assert table.resolve("mediterranean") == RaceCategories.WHITE
        assert table.resolve("Caucasian") == RaceCategories.WHITE

    def test_with_overrides_skips_none(self):
        config = PipelineConfig().with_overrides(seed=7, study_id=None)

        assert config.seed == 7
        assert config.study_id == Defaults.STUDY_ID

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError, match="max_workers"):
            PipelineConfig().with_overrides(max_workers=-1)

    def test_config_from_env(self, monkeypatch):
        """Test loading config from environment variables."""
        monkeypatch.setenv("STUDY_ID", "ENV01")
        monkeypatch.setenv("N_SUBJECTS", "25")
        monkeypatch.setenv("SEED", "11")
        monkeypatch.setenv("MISSING_AGE_RATE", "0.2")
        monkeypatch.setenv("MAX_WORKERS", "3")
        monkeypatch.setenv("ERROR_POLICY", "collect")
        monkeypatch.setenv("OUTPUT_DIR", "/env/out")

        config = PipelineConfig.from_env()

        assert config.study_id == "ENV01"
        assert config.n_subjects == 25
        assert config.seed == 11
        assert config.missing_age_rate == 0.2
        assert config.max_workers == 3
        assert config.resolved_error_policy is ErrorPolicy.COLLECT
        assert config.output_dir == Path("/env/out")


class TestConfigLoader:
    """Test suite for ConfigLoader class."""

    def test_load_with_no_toml_file(self):
        """Test loading config when TOML file doesn't exist."""
        config = ConfigLoader.load(config_file=Path("/nonexistent/config.toml"))

        assert config == PipelineConfig()

    def test_load_from_toml(self, tmp_path: Path):
        """Test loading config from TOML file."""
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("""
[paths]
output_dir = "/toml/out"

[default]
study_id = "TOML01"
max_workers = 4
error_policy = "collect"

[simulation]
n_subjects = 40
seed = 99
missing_age_rate = 0.25
missing_sex_rate = "0"
n_imputations = 3
reference_date = "2025-06-30"

[race_aliases]
"Latin American" = "OTHER"
""")

        config = ConfigLoader.load(config_file=toml_file)

        assert config.output_dir == Path("/toml/out")
        assert config.study_id == "TOML01"
        assert config.max_workers == 4
        assert config.resolved_error_policy is ErrorPolicy.COLLECT
        assert config.n_subjects == 40
        assert config.seed == 99
        assert config.missing_age_rate == 0.25
        assert config.missing_sex_rate == 0.0
        assert config.n_imputations == 3
        assert config.reference.isoformat() == "2025-06-30"
        assert config.race_alias_table.resolve("latin american") == "OTHER"

    def test_load_toml_with_partial_config(self, tmp_path: Path):
        """Test loading TOML with only some values (others use defaults)."""
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("""
[simulation]
seed = 5
""")

        config = ConfigLoader.load(config_file=toml_file)

        assert config.seed == 5
        assert config.n_subjects == Defaults.N_SUBJECTS
        assert config.study_id == Defaults.STUDY_ID

    def test_toml_layers_over_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STUDY_ID", "ENV01")
        monkeypatch.setenv("SEED", "3")
        toml_file = tmp_path / "config.toml"
        toml_file.write_text('[simulation]\nseed = 8\n')

        config = ConfigLoader.load(config_file=toml_file)

        assert config.study_id == "ENV01"
        assert config.seed == 8

    def test_invalid_toml_warns_and_falls_back(self, tmp_path: Path):
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("[simulation]\nn_subjects = 0\n")

        with pytest.warns(UserWarning, match="Failed to load config"):
            config = ConfigLoader.load(config_file=toml_file)

        assert config.n_subjects == Defaults.N_SUBJECTS

    def test_default_config_file_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / Defaults.CONFIG_FILE).write_text('[default]\nstudy_id = "CWD01"\n')

        assert ConfigLoader.load().study_id == "CWD01"


class TestConstants:
    def test_age_group_order_matches_boundaries(self):
        assert AgeGroups.ORDER == (
            AgeGroups.PEDIATRIC,
            AgeGroups.ADULT,
            AgeGroups.ELDERLY,
        )
        assert AgeGroups.LOWER_BOUND == 18
        assert AgeGroups.UPPER_BOUND == 65

    def test_unresolved_race_categories_are_canonical(self):
        assert RaceCategories.UNRESOLVED <= RaceCategories.CANONICAL
