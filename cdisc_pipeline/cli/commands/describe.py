from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...constants import StageNames
from ...domain.entities.dataset import get_dataset_definition
from ...domain.services.metadata_service import describe_all, describe_dataset

console = Console()

DESCRIBED_STAGES = (StageNames.CDASH, StageNames.SDTM, StageNames.ADAM)


@click.command()
@click.option(
    "--stage",
    type=click.Choice(DESCRIBED_STAGES, case_sensitive=False),
    help="Only describe one stage's dataset (default: all)",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the description table to this CSV file",
)
def describe_command(stage: str | None, output_path: Path | None) -> None:
    """Show the variables of the CDASH, SDTM and ADaM demographics datasets."""
    stages = (stage.upper(),) if stage else DESCRIBED_STAGES
    for name in stages:
        definition = get_dataset_definition(name)
        table = Table(
            title=f"{definition.stage}.{definition.code} - {definition.label}",
            header_style="bold cyan",
        )
        table.add_column("Variable", style="cyan", no_wrap=True)
        table.add_column("Label")
        table.add_column("Type", style="yellow", no_wrap=True)
        table.add_column("Length", justify="right")
        for row in describe_dataset(name).itertuples(index=False):
            table.add_row(
                str(row.Variable), str(row.Label), str(row.Type), str(row.Length)
            )
        console.print(table)

    if output_path is not None:
        frame = describe_dataset(stages[0]) if stage else describe_all()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output_path, index=False)
        console.print(f"[green]✓[/green] Wrote {output_path}")
