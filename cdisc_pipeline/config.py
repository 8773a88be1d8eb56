from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults
from .domain.services.batch_mapper import ErrorPolicy
from .domain.services.categories import DEFAULT_RACE_ALIASES, RaceAliasTable


def _empty_aliases() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    study_id: str = Defaults.STUDY_ID
    n_subjects: int = Defaults.N_SUBJECTS
    seed: int = Defaults.SEED
    missing_age_rate: float = Defaults.MISSING_AGE_RATE
    missing_sex_rate: float = Defaults.MISSING_SEX_RATE
    n_imputations: int = Defaults.N_IMPUTATIONS
    max_workers: int = Defaults.MAX_WORKERS
    error_policy: str = Defaults.ERROR_POLICY
    output_dir: Path = field(default_factory=lambda: Path(Defaults.OUTPUT_DIR))
    reference_date: str = Defaults.REFERENCE_DATE
    race_aliases: dict[str, str] = field(default_factory=_empty_aliases)

    def __post_init__(self) -> None:
        if not self.study_id.strip():
            raise ValueError("study_id must not be empty")
        if self.n_subjects < 1:
            raise ValueError(f"n_subjects must be positive, got {self.n_subjects}")
        for name in ("missing_age_rate", "missing_sex_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {rate}")
        if self.n_imputations < 1:
            raise ValueError(
                f"n_imputations must be positive, got {self.n_imputations}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        ErrorPolicy.parse(self.error_policy)
        try:
            date.fromisoformat(self.reference_date)
        except ValueError:
            raise ValueError(
                f"reference_date must be an ISO 8601 date, got {self.reference_date!r}"
            ) from None
        DEFAULT_RACE_ALIASES.with_aliases(self.race_aliases)

    @property
    def race_alias_table(self) -> RaceAliasTable:
        return DEFAULT_RACE_ALIASES.with_aliases(self.race_aliases)

    @property
    def resolved_error_policy(self) -> ErrorPolicy:
        return ErrorPolicy.parse(self.error_policy)

    @property
    def reference(self) -> date:
        return date.fromisoformat(self.reference_date)

    def with_overrides(self, **overrides: object) -> PipelineConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls) -> PipelineConfig:
        return cls(
            study_id=os.getenv("STUDY_ID", Defaults.STUDY_ID),
            n_subjects=int(os.getenv("N_SUBJECTS", str(Defaults.N_SUBJECTS))),
            seed=int(os.getenv("SEED", str(Defaults.SEED))),
            missing_age_rate=float(
                os.getenv("MISSING_AGE_RATE", str(Defaults.MISSING_AGE_RATE))
            ),
            missing_sex_rate=float(
                os.getenv("MISSING_SEX_RATE", str(Defaults.MISSING_SEX_RATE))
            ),
            n_imputations=int(os.getenv("N_IMPUTATIONS", str(Defaults.N_IMPUTATIONS))),
            max_workers=int(os.getenv("MAX_WORKERS", str(Defaults.MAX_WORKERS))),
            error_policy=os.getenv("ERROR_POLICY", Defaults.ERROR_POLICY),
            output_dir=Path(os.getenv("OUTPUT_DIR", Defaults.OUTPUT_DIR)),
            reference_date=os.getenv("REFERENCE_DATE", Defaults.REFERENCE_DATE),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> PipelineConfig:
        config = PipelineConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: PipelineConfig
    ) -> PipelineConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        paths = _get_table(data, "paths")
        default_section = _get_table(data, "default")
        simulation = _get_table(data, "simulation")
        aliases = _get_table(data, "race_aliases")
        output_dir = base_config.output_dir
        if value := paths.get("output_dir"):
            output_dir = Path(str(value))
        study_id = base_config.study_id
        if value := default_section.get("study_id"):
            study_id = str(value).strip()
        max_workers = base_config.max_workers
        if (value := default_section.get("max_workers")) is not None:
            max_workers = _coerce_int(value, key="default.max_workers")
        error_policy = base_config.error_policy
        if (value := default_section.get("error_policy")) is not None:
            error_policy = str(value)
        n_subjects = base_config.n_subjects
        if (value := simulation.get("n_subjects")) is not None:
            n_subjects = _coerce_int(value, key="simulation.n_subjects")
        seed = base_config.seed
        if (value := simulation.get("seed")) is not None:
            seed = _coerce_int(value, key="simulation.seed")
        missing_age_rate = base_config.missing_age_rate
        if (value := simulation.get("missing_age_rate")) is not None:
            missing_age_rate = _coerce_float(value, key="simulation.missing_age_rate")
        missing_sex_rate = base_config.missing_sex_rate
        if (value := simulation.get("missing_sex_rate")) is not None:
            missing_sex_rate = _coerce_float(value, key="simulation.missing_sex_rate")
        n_imputations = base_config.n_imputations
        if (value := simulation.get("n_imputations")) is not None:
            n_imputations = _coerce_int(value, key="simulation.n_imputations")
        reference_date = base_config.reference_date
        if (value := simulation.get("reference_date")) is not None:
            reference_date = str(value)
        race_aliases = {
            **base_config.race_aliases,
            **{str(k): str(v) for k, v in aliases.items()},
        }
        return PipelineConfig(
            study_id=study_id,
            n_subjects=n_subjects,
            seed=seed,
            missing_age_rate=missing_age_rate,
            missing_sex_rate=missing_sex_rate,
            n_imputations=n_imputations,
            max_workers=max_workers,
            error_policy=error_policy,
            output_dir=output_dir,
            reference_date=reference_date,
            race_aliases=race_aliases,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_float(value: object, *, key: str) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise ValueError(f"{key} must be numeric or string, got {type(value).__name__}")


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")
