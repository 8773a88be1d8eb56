from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING

from typing_extensions import override

from rich.console import Console

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ...application.models import PipelineSummary
    from ...domain.services.batch_mapper import RecordFailure

MAX_LISTED_FAILURES = 10


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    study_id: str = ""
    stage: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "stages_completed": 0,
        "records_processed": 0,
        "record_failures": 0,
        "files_written": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_pipeline_start(self, summary: PipelineSummary) -> None:
        self.set_context(study_id=summary.study_id)
        self.console.print(f"[bold]Study: {summary.study_id}[/bold]")
        self.console.print(f"[bold]Source:[/bold] {summary.source}")
        self.verbose(f"Output directory: {summary.output_dir}")
        self.verbose(
            f"Workers: {summary.max_workers}, error policy: {summary.error_policy}"
        )

    @override
    def log_stage_start(self, stage: str, input_rows: int) -> None:
        self.set_context(stage=stage)
        self.console.print()
        self.console.print(f"[bold]{stage}[/bold]")
        self.verbose(f"  Input: {input_rows:,} rows")

    @override
    def log_stage_complete(
        self, stage: str, output_rows: int, *, failures: int = 0
    ) -> None:
        self._stats["stages_completed"] += 1
        self._stats["records_processed"] += output_rows
        msg = f"{stage}: {output_rows:,} records"
        if failures:
            msg += f" ({failures} rejected)"
        self.success(msg)

    @override
    def log_record_failures(
        self, stage: str, failures: Sequence[RecordFailure]
    ) -> None:
        if not failures:
            return
        self._stats["record_failures"] += len(failures)
        self.warning(f"{stage}: {len(failures)} record(s) rejected")
        limit = None if self.verbosity >= LogLevel.DEBUG else MAX_LISTED_FAILURES
        for failure in list(failures)[:limit]:
            self.console.print(f"    row {failure.index}: {failure.message}")
        if limit is not None and len(failures) > limit:
            self.console.print(f"    ... {len(failures) - limit} more")

    @override
    def log_file_written(self, kind: str, path: Path) -> None:
        self._stats["files_written"] += 1
        self.verbose(f"  Wrote {kind}: {path}")

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Processing Statistics:[/dim]")
            self.console.print(
                f"[dim]  Stages completed: {self._stats['stages_completed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Total records: {self._stats['records_processed']:,}[/dim]"
            )
            self.console.print(
                f"[dim]  Files written: {self._stats['files_written']}[/dim]"
            )
            if self._stats["record_failures"] > 0:
                self.console.print(
                    f"[dim yellow]  Rejected records: "
                    f"{self._stats['record_failures']}[/dim yellow]"
                )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.study_id:
            parts.append(self._context.study_id)
        if self._context.stage:
            parts.append(self._context.stage)
        return f"[{':'.join(parts)}] " if parts else ""
