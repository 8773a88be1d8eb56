from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import Defaults
from ..domain.services.batch_mapper import ErrorPolicy
from ..domain.services.categories import DEFAULT_RACE_ALIASES, RaceAliasTable

if TYPE_CHECKING:
    from pathlib import Path

    import pandas as pd

    from ..domain.services.batch_mapper import RecordFailure


def _empty_failures() -> list[RecordFailure]:
    return []


def _empty_counts() -> dict[str, int]:
    return {}


def _empty_stage_results() -> list[StageResult]:
    return []


def _empty_paths() -> dict[str, Path]:
    return {}


def _empty_str_list() -> list[str]:
    return []


@dataclass(slots=True)
class PipelineRequest:
    study_id: str
    output_dir: Path
    input_path: Path | None = None
    n_subjects: int = Defaults.N_SUBJECTS
    missing_rates: dict[str, float] = field(
        default_factory=lambda: {
            "AGE": Defaults.MISSING_AGE_RATE,
            "SEX": Defaults.MISSING_SEX_RATE,
        }
    )
    impute: bool = True
    max_workers: int = Defaults.MAX_WORKERS
    error_policy: ErrorPolicy = ErrorPolicy.FAIL_FAST
    race_aliases: RaceAliasTable = DEFAULT_RACE_ALIASES
    export_xpt: bool = True
    write_tables: bool = True


@dataclass(slots=True)
class PipelineSummary:
    study_id: str
    source: str
    output_dir: Path
    max_workers: int
    error_policy: str


@dataclass(slots=True)
class StageResult:
    stage: str
    input_rows: int
    output_rows: int
    failures: list[RecordFailure] = field(default_factory=_empty_failures)
    counts: dict[str, int] = field(default_factory=_empty_counts)
    path: Path | None = None

    @property
    def success(self) -> bool:
        return len(self.failures) == 0


@dataclass(slots=True)
class PipelineResponse:
    success: bool = True
    stages: list[StageResult] = field(default_factory=_empty_stage_results)
    sdtm_dataframe: pd.DataFrame | None = None
    adam_dataframe: pd.DataFrame | None = None
    summary_table: pd.DataFrame | None = None
    population_counts: pd.DataFrame | None = None
    output_paths: dict[str, Path] = field(default_factory=_empty_paths)
    errors: list[str] = field(default_factory=_empty_str_list)

    def stage(self, name: str) -> StageResult | None:
        return next((s for s in self.stages if s.stage == name), None)

    @property
    def failure_count(self) -> int:
        return sum(len(s.failures) for s in self.stages)
