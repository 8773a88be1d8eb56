"""Run command - take demographics through SDTM DM to ADaM ADSL.

Thin adapter between Click and ``PipelineUseCase``: it layers the command-line
options over the loaded configuration, builds the ``PipelineRequest``, runs the
use case and hands the response to the summary presenter.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

import click
from rich.console import Console

from ...application.models import PipelineRequest
from ...config import ConfigLoader
from ...domain.services.batch_mapper import ErrorPolicy
from ...infrastructure.container import DependencyContainer
from ..presenters.summary import SummaryPresenter, SummaryRequest

console = Console()


@dataclass(frozen=True)
class RunCommandOptions:
    config_file: Path | None
    input_path: Path | None
    output_dir: Path | None
    study_id: str | None
    n_subjects: int | None
    seed: int | None
    max_workers: int | None
    error_policy: str | None
    missing_age_rate: float | None
    missing_sex_rate: float | None
    impute: bool
    export_xpt: bool
    write_tables: bool
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> RunCommandOptions:
        return cls(
            config_file=cast("Path | None", options.get("config_file")),
            input_path=cast("Path | None", options.get("input_path")),
            output_dir=cast("Path | None", options.get("output_dir")),
            study_id=cast("str | None", options.get("study_id")),
            n_subjects=cast("int | None", options.get("n_subjects")),
            seed=cast("int | None", options.get("seed")),
            max_workers=cast("int | None", options.get("max_workers")),
            error_policy=cast("str | None", options.get("error_policy")),
            missing_age_rate=cast("float | None", options.get("missing_age_rate")),
            missing_sex_rate=cast("float | None", options.get("missing_sex_rate")),
            impute=cast("bool", options["impute"]),
            export_xpt=cast("bool", options["export_xpt"]),
            write_tables=cast("bool", options["write_tables"]),
            verbose=cast("int", options["verbose"]),
        )


@click.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a cdisc_pipeline.toml config file (default: ./cdisc_pipeline.toml)",
)
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV of collected demographics (default: generate mock subjects)",
)
@click.option(
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for datasets, XPT files and tables",
)
@click.option("--study-id", help="Study identifier for generated subjects")
@click.option(
    "--n-subjects",
    type=click.IntRange(min=1),
    help="Number of mock subjects when no --input is given",
)
@click.option("--seed", type=int, help="Seed for mock data, missingness and imputation")
@click.option(
    "--workers",
    "max_workers",
    type=click.IntRange(min=1),
    help="Worker threads used to map records",
)
@click.option(
    "--error-policy",
    type=click.Choice([p.value for p in ErrorPolicy]),
    help="fail_fast aborts on the first invalid record, collect rejects and continues",
)
@click.option(
    "--missing-age-rate",
    type=click.FloatRange(0.0, 1.0),
    help="Share of AGE values set missing before imputation",
)
@click.option(
    "--missing-sex-rate",
    type=click.FloatRange(0.0, 1.0),
    help="Share of SEX values set missing before imputation",
)
@click.option(
    "--impute/--no-impute",
    "impute",
    default=True,
    show_default=True,
    help="Impute missing AGE and SEX before the ADaM derivation",
)
@click.option(
    "--xpt/--no-xpt",
    "export_xpt",
    default=True,
    show_default=True,
    help="Export dm.xpt and adsl.xpt SAS transport files",
)
@click.option(
    "--tables/--no-tables",
    "write_tables",
    default=True,
    show_default=True,
    help="Write the demographics summary tables as CSV",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def run_command(**options: object) -> None:
    """Run the demographics pipeline: CDASH -> SDTM DM -> ADaM ADSL.

    Each stage's dataset is saved under OUTPUT_DIR/data, transport files
    under OUTPUT_DIR/xpt and summary tables under OUTPUT_DIR/tables.

    Examples:

    \b
        # 100 mock subjects with the default configuration
        cdisc-pipeline run

    \b
        # Map a collected CSV, rejecting invalid records instead of aborting
        cdisc-pipeline run --input raw_dm.csv --error-policy collect
    """
    command_options = RunCommandOptions.from_kwargs(dict(options))
    config = ConfigLoader.load(config_file=command_options.config_file)
    config = config.with_overrides(
        study_id=command_options.study_id,
        n_subjects=command_options.n_subjects,
        seed=command_options.seed,
        max_workers=command_options.max_workers,
        error_policy=command_options.error_policy,
        missing_age_rate=command_options.missing_age_rate,
        missing_sex_rate=command_options.missing_sex_rate,
        output_dir=command_options.output_dir,
    )

    request = PipelineRequest(
        study_id=config.study_id,
        output_dir=config.output_dir,
        input_path=command_options.input_path,
        n_subjects=config.n_subjects,
        missing_rates={
            "AGE": config.missing_age_rate,
            "SEX": config.missing_sex_rate,
        },
        impute=command_options.impute,
        max_workers=config.max_workers,
        error_policy=config.resolved_error_policy,
        race_aliases=config.race_alias_table,
        export_xpt=command_options.export_xpt,
        write_tables=command_options.write_tables,
    )

    container = DependencyContainer(
        config=config, verbose=command_options.verbose, console=console
    )
    use_case = container.create_pipeline_use_case()
    response = use_case.execute(request)

    SummaryPresenter(console).present(
        SummaryRequest(
            stages=response.stages,
            errors=response.errors,
            output_dir=config.output_dir,
            summary_table=response.summary_table,
            population_counts=response.population_counts,
        )
    )

    if not response.success:
        raise click.ClickException("Pipeline run completed with errors")
