"""Generate command - write a seeded mock CDASH demographics CSV."""

from pathlib import Path

import click
from rich.console import Console

from ...config import ConfigLoader
from ...constants import StageNames
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io.csv_writer import write_records_csv
from ...infrastructure.io.exceptions import PipelineInfrastructureError

console = Console()


@click.command()
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a cdisc_pipeline.toml config file (default: ./cdisc_pipeline.toml)",
)
@click.option("--n-subjects", type=click.IntRange(min=0), help="Number of subjects")
@click.option("--seed", type=int, help="Random seed")
@click.option("--study-id", help="Study identifier written to STUDYID")
def generate_command(
    output_path: Path,
    config_file: Path | None,
    n_subjects: int | None,
    seed: int | None,
    study_id: str | None,
) -> None:
    """Write mock collected demographics (CDASH DM) to OUTPUT_PATH.

    The same seed always produces the same subjects.

    Examples:

    \b
        cdisc-pipeline generate raw_dm.csv --n-subjects 250 --seed 7
    """
    config = ConfigLoader.load(config_file=config_file).with_overrides(
        study_id=study_id, seed=seed
    )
    container = DependencyContainer(config=config, console=console)
    count = config.n_subjects if n_subjects is None else n_subjects
    records = container.create_mock_data_generator().generate(count)
    try:
        path = write_records_csv(records, StageNames.CDASH, output_path)
    except PipelineInfrastructureError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"[green]✓[/green] Wrote {len(records):,} subjects to {path}")
