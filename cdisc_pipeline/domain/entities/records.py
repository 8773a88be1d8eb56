"""Demographic record types for the CDASH, SDTM and ADaM stages.

Each stage is an immutable dataclass. Missing values are carried as ``None``;
derived fields are added on top of the source fields and never replace them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class RawDemographicRecord:
    """One subject as collected on the case report form (CDASH)."""

    study_id: str
    subject_id: str
    birth_date: date | str | None = None
    age: int | float | str | None = None
    age_unit: str | None = None
    sex: str | None = None
    ethnicity: str | None = None
    race: str | None = None
    race_other: str | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> RawDemographicRecord:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


@dataclass(frozen=True, slots=True)
class StandardizedRecord:
    """Demographics (DM) record derived 1:1 from a raw record."""

    study_id: str
    domain: str
    unique_subject_id: str
    subject_id: str
    birth_date: date | None = None
    age: int | float | str | None = None
    age_unit: str | None = None
    sex: str | None = None
    ethnicity: str | None = None
    race: str | None = None
    race_other: str | None = None
    race_recoded: str | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> StandardizedRecord:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


@dataclass(frozen=True, slots=True)
class AnalysisRecord:
    """Subject-level analysis record derived 1:1 from a DM record."""

    study_id: str
    unique_subject_id: str
    subject_id: str
    birth_date: date | None = None
    age: int | float | None = None
    age_unit: str | None = None
    sex: str | None = None
    ethnicity: str | None = None
    race: str | None = None
    race_recoded: str | None = None
    age_group: str | None = None
    safety_population_flag: str = "N"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> AnalysisRecord:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})
