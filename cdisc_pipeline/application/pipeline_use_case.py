"""Demographics pipeline use case.

Orchestrates the stages around the record mapper:
raw records -> SDTM DM -> missing-data injection -> imputation -> ADaM ADSL,
persisting each stage's dataset, exporting transport files and building the
summary tables. Stage ordering is fixed; within a stage records are mapped
independently.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from ..constants import StageNames
from ..domain.entities.records import StandardizedRecord
from ..domain.exceptions import InvalidRecordError
from ..domain.services.batch_mapper import map_batch
from ..domain.services.demographics_mapper import map_cdash_to_sdtm, map_sdtm_to_adam
from ..domain.services.summary_service import (
    build_demographics_summary,
    build_population_counts,
)
from .models import PipelineResponse, PipelineSummary, StageResult

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    import pandas as pd

    from ..domain.entities.records import RawDemographicRecord
    from ..domain.services.batch_mapper import BatchMappingResult
    from .models import PipelineRequest
    from .ports.services import (
        DatasetExportPort,
        DatasetStorePort,
        ImputationPort,
        LoggerPort,
        MissingnessPort,
        MockDataPort,
        RawDataSourcePort,
    )

XPT_FILENAMES = {StageNames.SDTM: "dm.xpt", StageNames.ADAM: "adsl.xpt"}
SUMMARY_TABLE_FILENAME = "demographics_summary.csv"
POPULATION_TABLE_FILENAME = "population_counts.csv"


@dataclass(slots=True)
class PipelineDependencies:
    logger: LoggerPort
    raw_data_source: RawDataSourcePort
    mock_data: MockDataPort
    missingness: MissingnessPort
    imputation: ImputationPort
    store_factory: Callable[[Path], DatasetStorePort]
    dataset_export: DatasetExportPort
    frame_builder: Callable[[Sequence[object], str], pd.DataFrame]
    record_loader: Callable[[pd.DataFrame, str, Callable[..., object]], list[object]]


class PipelineUseCase:
    """Runs the demographics pipeline end to end.

    Record-level integrity failures are handled per the request's error
    policy: fail-fast aborts the run, collect rejects the offending records
    and carries on. Either way the response lists what happened per stage.
    """

    def __init__(self, dependencies: PipelineDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._raw_data_source = dependencies.raw_data_source
        self._mock_data = dependencies.mock_data
        self._missingness = dependencies.missingness
        self._imputation = dependencies.imputation
        self._store_factory = dependencies.store_factory
        self._dataset_export = dependencies.dataset_export
        self._frame_builder = dependencies.frame_builder
        self._record_loader = dependencies.record_loader

    def execute(self, request: PipelineRequest) -> PipelineResponse:
        response = PipelineResponse()
        try:
            self._execute_impl(request, response)
            response.success = len(response.errors) == 0
        except InvalidRecordError as exc:
            response.success = False
            response.errors.append(f"Invalid record: {exc}")
            self.logger.error(f"Pipeline aborted on invalid record: {exc}")
        except Exception as exc:
            response.success = False
            response.errors.append(str(exc))
            self.logger.error(f"Pipeline failed: {exc}")
        return response

    def _execute_impl(
        self, request: PipelineRequest, response: PipelineResponse
    ) -> None:
        store = self._store_factory(request.output_dir / "data")
        raw_records, source = self._load_raw_records(request)
        self.logger.log_pipeline_start(
            PipelineSummary(
                study_id=request.study_id,
                source=source,
                output_dir=request.output_dir,
                max_workers=request.max_workers,
                error_policy=str(request.error_policy),
            )
        )

        raw_frame = self._frame_builder(raw_records, StageNames.CDASH)
        response.stages.append(
            StageResult(
                stage=StageNames.CDASH,
                input_rows=len(raw_records),
                output_rows=len(raw_frame),
                path=self._save(store, StageNames.CDASH, raw_frame, response),
            )
        )

        self.logger.log_stage_start(StageNames.SDTM, len(raw_records))
        sdtm = self._map_stage(
            request,
            raw_records,
            partial(map_cdash_to_sdtm, race_aliases=request.race_aliases),
        )
        sdtm_frame = self._frame_builder(sdtm.records, StageNames.SDTM)
        response.sdtm_dataframe = sdtm_frame
        response.stages.append(
            StageResult(
                stage=StageNames.SDTM,
                input_rows=len(raw_records),
                output_rows=len(sdtm_frame),
                failures=sdtm.failures,
                path=self._save(store, StageNames.SDTM, sdtm_frame, response),
            )
        )
        self._log_stage_end(StageNames.SDTM, sdtm)

        analysis_input = self._prepare_analysis_input(request, sdtm_frame, response)
        response.stages.append(
            StageResult(
                stage=StageNames.SDTM_IMPUTED,
                input_rows=len(sdtm_frame),
                output_rows=len(analysis_input),
                path=self._save(
                    store, StageNames.SDTM_IMPUTED, analysis_input, response
                ),
            )
        )

        standardized = self._record_loader(
            analysis_input, StageNames.SDTM, StandardizedRecord.from_mapping
        )
        self.logger.log_stage_start(StageNames.ADAM, len(standardized))
        adam = self._map_stage(request, standardized, map_sdtm_to_adam)
        adam_frame = self._frame_builder(adam.records, StageNames.ADAM)
        response.adam_dataframe = adam_frame
        response.stages.append(
            StageResult(
                stage=StageNames.ADAM,
                input_rows=len(standardized),
                output_rows=len(adam_frame),
                failures=adam.failures,
                path=self._save(store, StageNames.ADAM, adam_frame, response),
            )
        )
        self._log_stage_end(StageNames.ADAM, adam)

        if request.export_xpt:
            self._export(request, StageNames.SDTM, sdtm_frame, response)
            self._export(request, StageNames.ADAM, adam_frame, response)

        response.summary_table = build_demographics_summary(adam_frame)
        response.population_counts = build_population_counts(adam_frame)
        if request.write_tables:
            self._write_tables(request, response)

        self.logger.log_final_stats()

    def _load_raw_records(
        self, request: PipelineRequest
    ) -> tuple[list[RawDemographicRecord], str]:
        if request.input_path is not None:
            records = self._raw_data_source.load_records(request.input_path)
            return records, str(request.input_path)
        records = self._mock_data.generate(request.n_subjects)
        return records, f"mock data ({request.n_subjects} subjects)"

    def _map_stage(
        self,
        request: PipelineRequest,
        records: Sequence[object],
        derive: Callable[[object], object],
    ) -> BatchMappingResult:
        return map_batch(
            records,
            derive,
            max_workers=request.max_workers,
            policy=request.error_policy,
        )

    def _log_stage_end(self, stage: str, result: BatchMappingResult) -> None:
        self.logger.log_record_failures(stage, result.failures)
        self.logger.log_stage_complete(
            stage, len(result.records), failures=len(result.failures)
        )

    def _prepare_analysis_input(
        self,
        request: PipelineRequest,
        sdtm_frame: pd.DataFrame,
        response: PipelineResponse,
    ) -> pd.DataFrame:
        frame = sdtm_frame
        rates = {col: rate for col, rate in request.missing_rates.items() if rate > 0}
        if rates:
            self.logger.log_stage_start(StageNames.MISSINGNESS, len(frame))
            frame, injected = self._missingness.inject(frame, rates)
            response.stages.append(
                StageResult(
                    stage=StageNames.MISSINGNESS,
                    input_rows=len(sdtm_frame),
                    output_rows=len(frame),
                    counts=injected,
                )
            )
            for column, count in injected.items():
                self.logger.verbose(f"  Set {count} {column} value(s) missing")
        if not request.impute:
            return frame

        self.logger.log_stage_start(StageNames.SDTM_IMPUTED, len(frame))
        imputed, filled = self._imputation.impute(frame)
        for column, count in filled.items():
            self.logger.verbose(f"  Imputed {count} {column} value(s)")
            remaining = int(imputed[column].isna().sum())
            if remaining:
                self.logger.warning(
                    f"{column}: {remaining} value(s) remain missing after imputation"
                )
        self.logger.log_stage_complete(StageNames.SDTM_IMPUTED, len(imputed))
        return imputed

    def _save(
        self,
        store: DatasetStorePort,
        stage: str,
        frame: pd.DataFrame,
        response: PipelineResponse,
    ) -> Path:
        path = store.save(stage, frame)
        response.output_paths[stage] = path
        self.logger.log_file_written(f"{stage} dataset", path)
        return path

    def _export(
        self,
        request: PipelineRequest,
        stage: str,
        frame: pd.DataFrame,
        response: PipelineResponse,
    ) -> None:
        target = request.output_dir / "xpt" / XPT_FILENAMES[stage]
        path = self._dataset_export.write(frame, stage, target)
        response.output_paths[f"{stage}_XPT"] = path
        self.logger.log_file_written("XPT", path)

    def _write_tables(
        self, request: PipelineRequest, response: PipelineResponse
    ) -> None:
        tables_dir = request.output_dir / "tables"
        tables_dir.mkdir(parents=True, exist_ok=True)
        outputs = (
            ("SUMMARY_TABLE", SUMMARY_TABLE_FILENAME, response.summary_table),
            ("POPULATION_TABLE", POPULATION_TABLE_FILENAME, response.population_counts),
        )
        for key, filename, table in outputs:
            if table is None:
                continue
            path = tables_dir / filename
            table.to_csv(path, index=False)
            response.output_paths[key] = path
            self.logger.log_file_written("table", path)
