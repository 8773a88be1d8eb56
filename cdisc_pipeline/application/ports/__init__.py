"""Ports (interfaces) implemented by infrastructure adapters."""

from .services import (
    DatasetExportPort,
    DatasetStorePort,
    ImputationPort,
    LoggerPort,
    MissingnessPort,
    MockDataPort,
    RawDataSourcePort,
)

__all__ = [
    "DatasetExportPort",
    "DatasetStorePort",
    "ImputationPort",
    "LoggerPort",
    "MissingnessPort",
    "MockDataPort",
    "RawDataSourcePort",
]
