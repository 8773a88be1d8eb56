from __future__ import annotations

from typing import TYPE_CHECKING

from typing_extensions import override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ...application.models import PipelineSummary
    from ...domain.services.batch_mapper import RecordFailure


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_pipeline_start(self, summary: PipelineSummary) -> None:
        return None

    @override
    def log_stage_start(self, stage: str, input_rows: int) -> None:
        return None

    @override
    def log_stage_complete(
        self, stage: str, output_rows: int, *, failures: int = 0
    ) -> None:
        return None

    @override
    def log_record_failures(
        self, stage: str, failures: Sequence[RecordFailure]
    ) -> None:
        return None

    @override
    def log_file_written(self, kind: str, path: Path) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
