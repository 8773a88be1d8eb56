from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    import pandas as pd
    from rich.console import Console

    from ...application.models import StageResult

MAX_ERROR_LINES = 20


@dataclass(frozen=True, slots=True)
class SummaryRequest:
    stages: Sequence[StageResult]
    errors: list[str]
    output_dir: Path
    summary_table: pd.DataFrame | None = None
    population_counts: pd.DataFrame | None = None


class SummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, request: SummaryRequest) -> None:
        self.console.print()
        if request.stages:
            self.console.print(self._build_stage_table(request.stages))
            self.console.print()
        if request.population_counts is not None:
            self.console.print(
                self._frame_table(
                    "👥 Analysis Populations", request.population_counts
                )
            )
            self.console.print()
        if request.summary_table is not None:
            self.console.print(
                self._frame_table("📋 Demographics Summary", request.summary_table)
            )
            self.console.print()
        self._print_status(request)

    def _build_stage_table(self, stages: Sequence[StageResult]) -> Table:
        table = Table(
            title="📊 Pipeline Summary",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Stage", style="cyan", no_wrap=True)
        table.add_column("Input", justify="right", style="yellow")
        table.add_column("Output", justify="right", style="yellow")
        table.add_column("Rejected", justify="right")
        table.add_column("Notes", style="dim", overflow="fold")
        for stage in stages:
            rejected = len(stage.failures)
            table.add_row(
                stage.stage,
                f"{stage.input_rows:,}",
                f"{stage.output_rows:,}",
                f"[red]{rejected}[/red]" if rejected else "0",
                self._notes(stage),
            )
        return table

    def _notes(self, stage: StageResult) -> str:
        notes = [f"{col}: {count} missing" for col, count in stage.counts.items()]
        if stage.path is not None:
            notes.append(stage.path.name)
        return ", ".join(notes)

    def _frame_table(self, title: str, frame: pd.DataFrame) -> Table:
        table = Table(title=title, header_style="bold cyan", title_style="bold")
        for index, column in enumerate(frame.columns):
            table.add_column(
                str(column),
                justify="left" if index < 2 else "right",
                no_wrap=True,
            )
        for row in frame.itertuples(index=False):
            table.add_row(*("" if value is None else str(value) for value in row))
        return table

    def _print_status(self, request: SummaryRequest) -> None:
        rejected = sum(len(stage.failures) for stage in request.stages)
        if request.errors:
            self.console.print(
                f"[bold red]✗ Pipeline failed with {len(request.errors)} error(s)"
                "[/bold red]"
            )
            for message in request.errors[:MAX_ERROR_LINES]:
                self.console.print(f"  [red]•[/red] {message}")
        elif rejected:
            self.console.print(
                f"[bold yellow]⚠ Completed with {rejected} rejected record(s)"
                "[/bold yellow]"
            )
        else:
            self.console.print("[bold green]✓ Pipeline completed[/bold green]")
        self.console.print(f"[bold]Output:[/bold] {request.output_dir}")
