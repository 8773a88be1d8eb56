"""Conversion between record dataclasses and pandas DataFrames.

Frames use the CDISC variable names of the stage's dataset definition and
nullable dtypes, so missing values stay missing and dates stay dates.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

import pandas as pd

from ...constants import StageNames
from ...domain.entities.dataset import FieldDefinition, get_dataset_definition
from ...pandas_utils import is_missing_scalar, none_if_missing
from .exceptions import DataValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


def records_to_frame(records: Iterable[object], stage: str) -> pd.DataFrame:
    definition = get_dataset_definition(stage)
    rows = [
        {var.name: getattr(record, var.attribute, None) for var in definition.variables}
        for record in records
    ]
    frame = pd.DataFrame(rows, columns=list(definition.variable_names()))
    # Collected values are kept as-is; derived stages must hold parseable values.
    strict = stage.upper() != StageNames.CDASH
    for var in definition.variables:
        frame[var.name] = _coerce_column(frame[var.name], var, strict=strict)
    return frame


def records_from_frame(
    frame: pd.DataFrame, stage: str, factory: Callable[[dict[str, Any]], Any]
) -> list[Any]:
    """Build records from a frame whose columns are CDISC variable names.

    Column matching is case-insensitive; columns not in the stage's dataset
    definition are ignored and absent variables are passed as missing.
    """
    definition = get_dataset_definition(stage)
    by_name = definition.by_name()
    columns = {
        str(col): by_name[str(col).strip().upper()]
        for col in frame.columns
        if str(col).strip().upper() in by_name
    }
    records: list[Any] = []
    for row in frame.to_dict("records"):
        values = {
            var.attribute: _to_python(row[col]) for col, var in columns.items()
        }
        records.append(factory(values))
    return records


def _coerce_column(
    series: pd.Series, var: FieldDefinition, *, strict: bool = True
) -> pd.Series:
    if var.type == "Num":
        numeric = pd.to_numeric(series, errors="coerce")
        unparsed = numeric.isna() & series.map(_is_present).astype(bool)
        if bool(unparsed.any()):
            if strict:
                bad = series[unparsed].tolist()
                raise DataValidationError(
                    f"{var.name} has non-numeric value(s): {bad[:5]!r}"
                )
            return series.map(none_if_missing).astype("object")
        present = numeric.dropna()
        if bool((present == present.round()).all()):
            return numeric.round().astype("Int64")
        return numeric.astype("Float64")
    if var.type == "Date":
        return series.map(_to_date_or_none).astype("object")
    return series.map(none_if_missing).astype("string")


def _is_present(value: object) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return not is_missing_scalar(value)


def _to_date_or_none(value: object) -> object:
    if is_missing_scalar(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    return value


def _to_python(value: object) -> object:
    if is_missing_scalar(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    item = getattr(value, "item", None)
    if callable(item) and not isinstance(value, (str, date)):
        return item()
    return value
