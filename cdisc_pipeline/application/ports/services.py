from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    import pandas as pd

    from ...domain.entities.records import RawDemographicRecord
    from ...domain.services.batch_mapper import RecordFailure
    from ..models import PipelineSummary


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_pipeline_start(self, summary: PipelineSummary) -> None: ...

    def log_stage_start(self, stage: str, input_rows: int) -> None: ...

    def log_stage_complete(
        self, stage: str, output_rows: int, *, failures: int = 0
    ) -> None: ...

    def log_record_failures(
        self, stage: str, failures: Sequence[RecordFailure]
    ) -> None: ...

    def log_file_written(self, kind: str, path: Path) -> None: ...

    def log_final_stats(self) -> None: ...


@runtime_checkable
class RawDataSourcePort(Protocol):
    pass

    def load_records(self, path: Path) -> list[RawDemographicRecord]: ...


@runtime_checkable
class MockDataPort(Protocol):
    pass

    def generate(self, n_subjects: int) -> list[RawDemographicRecord]: ...


@runtime_checkable
class MissingnessPort(Protocol):
    pass

    def inject(
        self, frame: pd.DataFrame, rates: Mapping[str, float]
    ) -> tuple[pd.DataFrame, dict[str, int]]: ...


@runtime_checkable
class ImputationPort(Protocol):
    pass

    def impute(self, frame: pd.DataFrame) -> tuple[pd.DataFrame, dict[str, int]]: ...


@runtime_checkable
class DatasetStorePort(Protocol):
    pass

    def save(self, stage: str, frame: pd.DataFrame) -> Path: ...

    def load(self, stage: str) -> pd.DataFrame: ...


@runtime_checkable
class DatasetExportPort(Protocol):
    pass

    def write(self, frame: pd.DataFrame, stage: str, output_path: Path) -> Path: ...
