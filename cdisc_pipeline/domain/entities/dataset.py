from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    name: str
    label: str
    type: str
    attribute: str
    length: int = 200


@dataclass(frozen=True, slots=True)
class DatasetDefinition:
    code: str
    stage: str
    label: str
    structure: str
    variables: tuple[FieldDefinition, ...]

    def variable_names(self) -> tuple[str, ...]:
        return tuple(var.name for var in self.variables)

    def by_name(self) -> dict[str, FieldDefinition]:
        return {var.name.upper(): var for var in self.variables}

    def resolved_dataset_name(self) -> str:
        return self.code.upper()[:8]


def _field(
    name: str, label: str, vtype: str, attribute: str, length: int = 200
) -> FieldDefinition:
    return FieldDefinition(
        name=name, label=label, type=vtype, attribute=attribute, length=length
    )


_STUDYID = _field("STUDYID", "Study Identifier", "Char", "study_id", 20)
_USUBJID = _field(
    "USUBJID", "Unique Subject Identifier", "Char", "unique_subject_id", 40
)
_SUBJID = _field(
    "SUBJID", "Subject Identifier for the Study", "Char", "subject_id", 20
)
_AGE = _field("AGE", "Age", "Num", "age", 8)
_AGEU = _field("AGEU", "Age Units", "Char", "age_unit", 10)
_SEX = _field("SEX", "Sex", "Char", "sex", 2)
_ETHNIC = _field("ETHNIC", "Ethnicity", "Char", "ethnicity", 40)
_RACE = _field("RACE", "Race", "Char", "race", 60)
_RACEOTH = _field("RACEOTH", "Race, Other", "Char", "race_other", 200)
_RACEREC = _field("RACEREC", "Race, Recoded", "Char", "race_recoded", 60)

CDASH_DM = DatasetDefinition(
    code="DM",
    stage="CDASH",
    label="Demographics (Collected)",
    structure="One record per subject",
    variables=(
        _STUDYID,
        _SUBJID,
        _field("BRTHDAT", "Birth Date", "Date", "birth_date", 10),
        _AGE,
        _AGEU,
        _SEX,
        _ETHNIC,
        _RACE,
        _RACEOTH,
    ),
)

SDTM_DM = DatasetDefinition(
    code="DM",
    stage="SDTM",
    label="Demographics",
    structure="One record per subject",
    variables=(
        _STUDYID,
        _field("DOMAIN", "Domain Abbreviation", "Char", "domain", 2),
        _USUBJID,
        _SUBJID,
        _field("BRTHDTC", "Date/Time of Birth", "Date", "birth_date", 10),
        _AGE,
        _AGEU,
        _SEX,
        _ETHNIC,
        _RACE,
        _RACEOTH,
        _RACEREC,
    ),
)

ADAM_ADSL = DatasetDefinition(
    code="ADSL",
    stage="ADAM",
    label="Subject-Level Analysis Dataset",
    structure="One record per subject",
    variables=(
        _STUDYID,
        _USUBJID,
        _SUBJID,
        _field("BRTHDT", "Date of Birth", "Date", "birth_date", 10),
        _AGE,
        _AGEU,
        _SEX,
        _ETHNIC,
        _RACE,
        _RACEREC,
        _field("AGEGR1", "Pooled Age Group 1", "Char", "age_group", 5),
        _field(
            "SAFFL", "Safety Population Flag", "Char", "safety_population_flag", 1
        ),
    ),
)

DATASET_DEFINITIONS: dict[str, DatasetDefinition] = {
    "CDASH": CDASH_DM,
    "SDTM": SDTM_DM,
    "SDTM_IMPUTED": SDTM_DM,
    "ADAM": ADAM_ADSL,
}


def get_dataset_definition(stage: str) -> DatasetDefinition:
    key = (stage or "").strip().upper()
    try:
        return DATASET_DEFINITIONS[key]
    except KeyError:
        known = ", ".join(sorted(DATASET_DEFINITIONS))
        raise KeyError(
            f"Unknown dataset stage '{stage}' (expected one of: {known})"
        ) from None
