"""Domain services: record derivations and dataset-level summaries."""

from .batch_mapper import BatchMappingResult, ErrorPolicy, RecordFailure, map_batch
from .categories import DEFAULT_RACE_ALIASES, RaceAliasTable, normalize_category
from .demographics_mapper import (
    derive_age_group,
    derive_safety_population_flag,
    derive_unique_subject_id,
    map_cdash_to_sdtm,
    map_sdtm_to_adam,
    recode_race,
)

__all__ = [
    "DEFAULT_RACE_ALIASES",
    "BatchMappingResult",
    "ErrorPolicy",
    "RaceAliasTable",
    "RecordFailure",
    "derive_age_group",
    "derive_safety_population_flag",
    "derive_unique_subject_id",
    "map_batch",
    "map_cdash_to_sdtm",
    "map_sdtm_to_adam",
    "normalize_category",
    "recode_race",
]
