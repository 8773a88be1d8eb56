from typing import ClassVar


class Defaults:
    STUDY_ID = "CDISCPILOT01"
    N_SUBJECTS = 100
    SEED = 20240903
    MISSING_AGE_RATE = 0.1
    MISSING_SEX_RATE = 0.05
    N_IMPUTATIONS = 5
    MAX_WORKERS = 1
    ERROR_POLICY = "fail_fast"
    OUTPUT_DIR = "output"
    REFERENCE_DATE = "2024-01-01"
    AGE_UNIT = "YEARS"
    CONFIG_FILE = "cdisc_pipeline.toml"


class Domains:
    DEMOGRAPHICS = "DM"
    USUBJID_SEPARATOR = "-"


class StageNames:
    CDASH = "CDASH"
    SDTM = "SDTM"
    SDTM_IMPUTED = "SDTM_IMPUTED"
    ADAM = "ADAM"
    MISSINGNESS = "MISSINGNESS"
    PERSISTED: ClassVar[tuple[str, ...]] = ("CDASH", "SDTM", "SDTM_IMPUTED", "ADAM")


class RaceCategories:
    AMERICAN_INDIAN = "AMERICAN INDIAN OR ALASKA NATIVE"
    ASIAN = "ASIAN"
    BLACK = "BLACK OR AFRICAN AMERICAN"
    PACIFIC_ISLANDER = "NATIVE HAWAIIAN OR OTHER PACIFIC ISLANDER"
    WHITE = "WHITE"
    MULTIPLE = "MULTIPLE"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"
    CANONICAL: ClassVar[frozenset[str]] = frozenset(
        {
            "AMERICAN INDIAN OR ALASKA NATIVE",
            "ASIAN",
            "BLACK OR AFRICAN AMERICAN",
            "NATIVE HAWAIIAN OR OTHER PACIFIC ISLANDER",
            "WHITE",
            "MULTIPLE",
            "OTHER",
            "UNKNOWN",
        }
    )
    UNRESOLVED: ClassVar[frozenset[str]] = frozenset({"OTHER", "UNKNOWN"})


class Ethnicities:
    HISPANIC = "HISPANIC OR LATINO"
    NOT_HISPANIC = "NOT HISPANIC OR LATINO"
    NOT_REPORTED = "NOT REPORTED"
    UNKNOWN = "UNKNOWN"


class Sexes:
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"
    VALID: ClassVar[frozenset[str]] = frozenset({"M", "F"})


class AgeGroups:
    LOWER_BOUND = 18
    UPPER_BOUND = 65
    PEDIATRIC = "<18"
    ADULT = "18-65"
    ELDERLY = ">65"
    ORDER: ClassVar[tuple[str, ...]] = ("<18", "18-65", ">65")


class Flags:
    YES = "Y"
    NO = "N"


class MissingValues:
    STRING_MARKERS: ClassVar[frozenset[str]] = frozenset(
        {"", "NAN", "<NA>", "NONE", "NULL"}
    )
