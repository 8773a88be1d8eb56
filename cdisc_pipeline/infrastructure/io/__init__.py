"""File-based adapters: CSV ingest, stage persistence and XPT export."""

from .csv_reader import CSVRawDataSource, CSVReader, CSVReadOptions
from .dataset_store import DatasetStore
from .exceptions import (
    DatasetStoreError,
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    DataValidationError,
    ImputationError,
    PipelineInfrastructureError,
    XportGenerationError,
)
from .csv_writer import write_records_csv
from .frames import records_from_frame, records_to_frame
from .xpt_writer import XPTWriter, write_xpt_file

__all__ = [
    "CSVRawDataSource",
    "CSVReadOptions",
    "CSVReader",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataValidationError",
    "DatasetStore",
    "DatasetStoreError",
    "ImputationError",
    "PipelineInfrastructureError",
    "XPTWriter",
    "XportGenerationError",
    "records_from_frame",
    "records_to_frame",
    "write_records_csv",
    "write_xpt_file",
]
