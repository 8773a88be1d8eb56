from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from ...domain.entities.dataset import CDASH_DM
from ...domain.entities.records import RawDemographicRecord
from ...pandas_utils import normalize_missing_strings
from .exceptions import DataParseError, DataSourceNotFoundError, DataValidationError
from .frames import records_from_frame

if TYPE_CHECKING:
    from pathlib import Path

REQUIRED_RAW_COLUMNS = ("STUDYID", "SUBJID")


@dataclass(slots=True)
class CSVReadOptions:
    normalize_headers: bool = True
    strict_na_handling: bool = True
    dtype: Any = str
    encoding: str = "utf-8"


class CSVReader:
    pass

    def read(self, path: Path, options: CSVReadOptions | None = None) -> pd.DataFrame:
        if options is None:
            options = CSVReadOptions()
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")
        try:
            df = pd.read_csv(
                path,
                dtype=options.dtype,
                keep_default_na=not options.strict_na_handling,
                na_values=[""] if options.strict_na_handling else None,
                encoding=options.encoding,
            )
        except FileNotFoundError as e:
            raise DataSourceNotFoundError(f"File not found: {path}") from e
        except pd.errors.ParserError as e:
            raise DataParseError(f"Failed to parse CSV {path}: {e}") from e
        except pd.errors.EmptyDataError as e:
            raise DataParseError(f"CSV file is empty: {path}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(
                f"Encoding error reading {path}. Try a different encoding: {e}"
            ) from e
        if df.shape[1] == 0:
            raise DataParseError(f"CSV file has no columns: {path}")
        if options.normalize_headers:
            df = self._normalize_headers(df)
        return df

    def _normalize_headers(self, df: pd.DataFrame) -> pd.DataFrame:
        df.columns = [str(col).strip().upper() for col in df.columns]
        return df


class CSVRawDataSource:
    """Reads collected demographics (CDASH column names) from a CSV file."""

    def __init__(self, reader: CSVReader | None = None) -> None:
        super().__init__()
        self._reader = reader or CSVReader()

    def load_frame(self, path: Path) -> pd.DataFrame:
        frame = self._reader.read(path)
        missing = [col for col in REQUIRED_RAW_COLUMNS if col not in frame.columns]
        if missing:
            raise DataValidationError(
                f"{path.name} is missing required column(s): {', '.join(missing)}"
            )
        known = [col for col in CDASH_DM.variable_names() if col in frame.columns]
        for col in known:
            frame[col] = normalize_missing_strings(frame[col])
        return frame

    def load_records(self, path: Path) -> list[RawDemographicRecord]:
        frame = self.load_frame(path)
        return records_from_frame(frame, "CDASH", RawDemographicRecord.from_mapping)
