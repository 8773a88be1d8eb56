"""CDISC demographics pipeline.

Maps collected demographics (CDASH DM) to the tabulation dataset (SDTM DM) and
on to the subject-level analysis dataset (ADaM ADSL).

Features:
- Record-level CDASH -> SDTM -> ADaM derivations with integrity checks
- Race recoding from free text through a configurable alias table
- Seeded mock data, missing-data injection and multiple imputation
- XPT (SAS Transport) export and demographics summary tables
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("cdisc-dm-pipeline")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from cdisc_pipeline.domain.entities.records import (
    AnalysisRecord,
    RawDemographicRecord,
    StandardizedRecord,
)
from cdisc_pipeline.domain.exceptions import InvalidRecordError
from cdisc_pipeline.domain.services.categories import (
    DEFAULT_RACE_ALIASES,
    RaceAliasTable,
)
from cdisc_pipeline.domain.services.demographics_mapper import (
    map_cdash_to_sdtm,
    map_sdtm_to_adam,
)

__all__ = [
    "__version__",
    # Records
    "AnalysisRecord",
    "RawDemographicRecord",
    "StandardizedRecord",
    # Mapping
    "DEFAULT_RACE_ALIASES",
    "InvalidRecordError",
    "RaceAliasTable",
    "map_cdash_to_sdtm",
    "map_sdtm_to_adam",
]
