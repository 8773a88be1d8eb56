"""Collaborators around the record mapper: mock data, missingness, imputation."""

from .imputation_adapter import IterativeImputationAdapter
from .missingness_injector import MissingnessInjector
from .mock_data_generator import MockDataGenerator

__all__ = ["IterativeImputationAdapter", "MissingnessInjector", "MockDataGenerator"]
