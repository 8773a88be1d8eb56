"""Seeded mock case-report demographics."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

import numpy as np

from ...constants import Defaults, Ethnicities, RaceCategories, Sexes
from ...domain.entities.records import RawDemographicRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

MIN_AGE = 12
MAX_AGE = 85

RACE_WEIGHTS: dict[str, float] = {
    RaceCategories.WHITE: 0.55,
    RaceCategories.BLACK: 0.15,
    RaceCategories.ASIAN: 0.12,
    RaceCategories.AMERICAN_INDIAN: 0.03,
    RaceCategories.PACIFIC_ISLANDER: 0.02,
    RaceCategories.OTHER: 0.08,
    RaceCategories.UNKNOWN: 0.05,
}

ETHNICITY_WEIGHTS: dict[str, float] = {
    Ethnicities.NOT_HISPANIC: 0.8,
    Ethnicities.HISPANIC: 0.15,
    Ethnicities.NOT_REPORTED: 0.03,
    Ethnicities.UNKNOWN: 0.02,
}

# Free text entered next to OTHER/UNKNOWN; None means the field was left blank.
RACE_OTHER_CHOICES: tuple[str | None, ...] = (
    "Caucasian",
    "Black American",
    "african american",
    "Mixed",
    "Mediterranean",
    "Prefer not to say",
    None,
)


class MockDataGenerator:
    """Generates CDASH demographics for a synthetic study.

    All randomness comes from one ``numpy.random.Generator`` seeded at
    construction, so the same seed always yields the same subjects.
    """

    def __init__(
        self,
        seed: int = Defaults.SEED,
        study_id: str = Defaults.STUDY_ID,
        reference_date: date | None = None,
    ) -> None:
        super().__init__()
        self.seed = seed
        self.study_id = study_id
        self.reference_date = reference_date or date.fromisoformat(
            Defaults.REFERENCE_DATE
        )

    def generate(self, n_subjects: int) -> list[RawDemographicRecord]:
        if n_subjects < 0:
            raise ValueError(f"n_subjects must not be negative, got {n_subjects}")
        rng = np.random.default_rng(self.seed)
        width = max(3, len(str(n_subjects)))
        ages = rng.integers(MIN_AGE, MAX_AGE + 1, size=n_subjects)
        days_past_birthday = rng.integers(0, 365, size=n_subjects)
        sexes = rng.choice([Sexes.MALE, Sexes.FEMALE], size=n_subjects)
        ethnicities = rng.choice(
            list(ETHNICITY_WEIGHTS),
            size=n_subjects,
            p=_normalized(ETHNICITY_WEIGHTS.values()),
        )
        races = rng.choice(
            list(RACE_WEIGHTS), size=n_subjects, p=_normalized(RACE_WEIGHTS.values())
        )
        other_picks = rng.integers(0, len(RACE_OTHER_CHOICES), size=n_subjects)
        records: list[RawDemographicRecord] = []
        for i in range(n_subjects):
            age = int(ages[i])
            race = str(races[i])
            race_other = (
                RACE_OTHER_CHOICES[int(other_picks[i])]
                if race in RaceCategories.UNRESOLVED
                else None
            )
            records.append(
                RawDemographicRecord(
                    study_id=self.study_id,
                    subject_id=str(i + 1).zfill(width),
                    birth_date=self._birth_date(age, int(days_past_birthday[i])),
                    age=age,
                    age_unit=Defaults.AGE_UNIT,
                    sex=str(sexes[i]),
                    ethnicity=str(ethnicities[i]),
                    race=race,
                    race_other=race_other,
                )
            )
        return records

    def _birth_date(self, age: int, days_past_birthday: int) -> date:
        last_birthday = _years_before(self.reference_date, age)
        return last_birthday - timedelta(days=days_past_birthday)


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def _normalized(weights: Iterable[float]) -> list[float]:
    values = [float(w) for w in weights]
    total = sum(values)
    return [w / total for w in values]
