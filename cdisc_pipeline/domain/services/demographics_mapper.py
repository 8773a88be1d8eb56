"""Demographic record mapper: CDASH -> SDTM DM -> ADaM ADSL.

Both derivations are pure functions of a single record. They never log and
never consult external state, so a batch can be mapped record by record in
any order or in parallel.
"""

from __future__ import annotations

from datetime import date, datetime
import math
import numbers
from typing import Any

from ...constants import AgeGroups, Domains, Flags, RaceCategories, Sexes
from ...pandas_utils import is_missing_scalar
from ..entities.records import AnalysisRecord, RawDemographicRecord, StandardizedRecord
from ..exceptions import InvalidRecordError
from .categories import DEFAULT_RACE_ALIASES, RaceAliasTable, normalize_category


def map_cdash_to_sdtm(
    record: RawDemographicRecord | StandardizedRecord,
    *,
    race_aliases: RaceAliasTable = DEFAULT_RACE_ALIASES,
) -> StandardizedRecord:
    """Derive the DM record for one collected subject.

    Adds DOMAIN, USUBJID and the recoded race; every collected field is
    copied unchanged (birth dates given as ISO text are parsed to dates).
    Identifiers are stripped only inside USUBJID.

    Raises:
        InvalidRecordError: empty identifiers, a subject identifier containing
            the USUBJID separator, a non-numeric AGE or a malformed birth date.
    """
    study_id = _require_identifier(record.study_id, "study_id", None)
    subject_id = _require_identifier(record.subject_id, "subject_id", study_id)
    subject = f"{study_id}/{subject_id}"
    if Domains.USUBJID_SEPARATOR in subject_id:
        raise InvalidRecordError(
            f"subject_id must not contain '{Domains.USUBJID_SEPARATOR}'",
            field="subject_id",
            subject=subject,
        )
    _parse_age(record.age, subject=subject)
    return StandardizedRecord(
        study_id=record.study_id,
        domain=Domains.DEMOGRAPHICS,
        unique_subject_id=derive_unique_subject_id(study_id, subject_id),
        subject_id=record.subject_id,
        birth_date=_coerce_date(record.birth_date, subject=subject),
        age=_missing_to_none(record.age),
        age_unit=_missing_to_none(record.age_unit),
        sex=_missing_to_none(record.sex),
        ethnicity=_missing_to_none(record.ethnicity),
        race=_missing_to_none(record.race),
        race_other=_missing_to_none(record.race_other),
        race_recoded=recode_race(record.race, record.race_other, race_aliases),
    )


def map_sdtm_to_adam(record: StandardizedRecord) -> AnalysisRecord:
    """Derive the subject-level analysis record from a DM record.

    Missing AGE gives a missing AGEGR1; SAFFL is "Y" only for SEX M or F.
    AGE given as numeric text is carried as a number.

    Raises:
        InvalidRecordError: negative or non-numeric AGE.
    """
    subject = record.unique_subject_id
    age = _coerce_age(record.age, subject=subject)
    return AnalysisRecord(
        study_id=record.study_id,
        unique_subject_id=record.unique_subject_id,
        subject_id=record.subject_id,
        birth_date=_coerce_date(record.birth_date, subject=subject),
        age=age,
        age_unit=_missing_to_none(record.age_unit),
        sex=_missing_to_none(record.sex),
        ethnicity=_missing_to_none(record.ethnicity),
        race=_missing_to_none(record.race),
        race_recoded=_missing_to_none(record.race_recoded),
        age_group=derive_age_group(age, subject=subject),
        safety_population_flag=derive_safety_population_flag(record.sex),
    )


def derive_unique_subject_id(study_id: str, subject_id: str) -> str:
    return f"{study_id}{Domains.USUBJID_SEPARATOR}{subject_id}"


def recode_race(
    race: object,
    race_other: object,
    race_aliases: RaceAliasTable = DEFAULT_RACE_ALIASES,
) -> str | None:
    """Resolve OTHER/UNKNOWN race through the free-text RACEOTH value.

    Any other race passes through unchanged. When the free text is missing
    or not a known alias the original OTHER/UNKNOWN value is kept.
    """
    if is_missing_scalar(race):
        return None
    if normalize_category(race) not in RaceCategories.UNRESOLVED:
        return str(race)
    resolved = race_aliases.resolve(race_other)
    return resolved if resolved is not None else str(race)


def derive_age_group(age: object, *, subject: str | None = None) -> str | None:
    value = _coerce_age(age, subject=subject)
    if value is None:
        return None
    if value < AgeGroups.LOWER_BOUND:
        return AgeGroups.PEDIATRIC
    if value <= AgeGroups.UPPER_BOUND:
        return AgeGroups.ADULT
    return AgeGroups.ELDERLY


def derive_safety_population_flag(sex: object) -> str:
    # Exact SEX codes only; missing, "U" and lower-case codes are flagged "N".
    if isinstance(sex, str) and sex in Sexes.VALID:
        return Flags.YES
    return Flags.NO


def _require_identifier(value: object, name: str, subject: str | None) -> str:
    text = "" if is_missing_scalar(value) else str(value).strip()
    if not text:
        raise InvalidRecordError(
            f"{name} must be a non-empty string", field=name, subject=subject
        )
    return text


def _missing_to_none(value: Any) -> Any:
    return None if is_missing_scalar(value) else value


def _coerce_age(value: object, *, subject: str | None) -> int | float | None:
    number = _parse_age(value, subject=subject)
    if number is not None and number < 0:
        raise InvalidRecordError(
            f"age must not be negative, got {value!r}", field="age", subject=subject
        )
    return number


def _parse_age(value: object, *, subject: str | None) -> int | float | None:
    if is_missing_scalar(value):
        return None
    if isinstance(value, bool):
        raise InvalidRecordError(
            f"age must be numeric, got {value!r}", field="age", subject=subject
        )
    number: float
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise InvalidRecordError(
                f"age must be numeric, got {value!r}", field="age", subject=subject
            ) from None
    else:
        raise InvalidRecordError(
            f"age must be numeric, got {type(value).__name__}",
            field="age",
            subject=subject,
        )
    if not math.isfinite(number):
        raise InvalidRecordError(
            f"age must be finite, got {value!r}", field="age", subject=subject
        )
    return int(number) if number.is_integer() else number


def _coerce_date(value: object, *, subject: str | None) -> date | None:
    if is_missing_scalar(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text.split("T")[0])
        except ValueError:
            raise InvalidRecordError(
                f"birth_date is not an ISO 8601 date: {value!r}",
                field="birth_date",
                subject=subject,
            ) from None
    raise InvalidRecordError(
        f"birth_date must be a date, got {type(value).__name__}",
        field="birth_date",
        subject=subject,
    )
