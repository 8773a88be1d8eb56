from .dataset import (
    ADAM_ADSL,
    CDASH_DM,
    DATASET_DEFINITIONS,
    SDTM_DM,
    DatasetDefinition,
    FieldDefinition,
    get_dataset_definition,
)
from .records import AnalysisRecord, RawDemographicRecord, StandardizedRecord

__all__ = [
    "ADAM_ADSL",
    "CDASH_DM",
    "DATASET_DEFINITIONS",
    "SDTM_DM",
    "AnalysisRecord",
    "DatasetDefinition",
    "FieldDefinition",
    "RawDemographicRecord",
    "StandardizedRecord",
    "get_dataset_definition",
]
