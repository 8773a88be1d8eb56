from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.pipeline_use_case import PipelineDependencies, PipelineUseCase
from ..config import PipelineConfig
from .io.csv_reader import CSVRawDataSource, CSVReader
from .io.dataset_store import DatasetStore
from .io.frames import records_from_frame, records_to_frame
from .io.xpt_writer import XPTWriter
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .services.imputation_adapter import IterativeImputationAdapter
from .services.missingness_injector import MissingnessInjector
from .services.mock_data_generator import MockDataGenerator

if TYPE_CHECKING:
    from pathlib import Path

    from ..application.ports.services import (
        DatasetExportPort,
        DatasetStorePort,
        ImputationPort,
        LoggerPort,
        MissingnessPort,
        MockDataPort,
        RawDataSourcePort,
    )


class DependencyContainer:
    """Builds the adapters for one pipeline run.

    Seeded adapters take their seed from ``config`` so a container built from
    the same configuration reproduces the same run.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or PipelineConfig()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._logger_instance: LoggerPort | None = None
        self._csv_reader_instance: CSVReader | None = None
        self._raw_data_source_instance: RawDataSourcePort | None = None
        self._xpt_writer_instance: DatasetExportPort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_csv_reader(self) -> CSVReader:
        if self._csv_reader_instance is None:
            self._csv_reader_instance = CSVReader()
        return self._csv_reader_instance

    def create_raw_data_source(self) -> RawDataSourcePort:
        if self._raw_data_source_instance is None:
            self._raw_data_source_instance = CSVRawDataSource(
                reader=self.create_csv_reader()
            )
        return self._raw_data_source_instance

    def create_mock_data_generator(self) -> MockDataPort:
        return MockDataGenerator(
            seed=self.config.seed,
            study_id=self.config.study_id,
            reference_date=self.config.reference,
        )

    def create_missingness_injector(self) -> MissingnessPort:
        return MissingnessInjector(seed=self.config.seed)

    def create_imputation_adapter(self) -> ImputationPort:
        return IterativeImputationAdapter(
            seed=self.config.seed, n_imputations=self.config.n_imputations
        )

    def create_xpt_writer(self) -> DatasetExportPort:
        if self._xpt_writer_instance is None:
            self._xpt_writer_instance = XPTWriter()
        return self._xpt_writer_instance

    def create_dataset_store(self, root: Path) -> DatasetStorePort:
        return DatasetStore(root)

    def create_pipeline_use_case(self) -> PipelineUseCase:
        dependencies = PipelineDependencies(
            logger=self.create_logger(),
            raw_data_source=self.create_raw_data_source(),
            mock_data=self.create_mock_data_generator(),
            missingness=self.create_missingness_injector(),
            imputation=self.create_imputation_adapter(),
            store_factory=self.create_dataset_store,
            dataset_export=self.create_xpt_writer(),
            frame_builder=records_to_frame,
            record_loader=records_from_frame,
        )
        return PipelineUseCase(dependencies)

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._csv_reader_instance = None
        self._raw_data_source_instance = None
        self._xpt_writer_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_raw_data_source(self, raw_data_source: RawDataSourcePort) -> None:
        self._raw_data_source_instance = raw_data_source


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose)
