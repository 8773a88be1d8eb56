from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import pyreadstat

from ...domain.entities.dataset import get_dataset_definition
from ...pandas_utils import is_missing_scalar
from .exceptions import XportGenerationError

if TYPE_CHECKING:
    from ...domain.entities.dataset import DatasetDefinition, FieldDefinition
MAX_XPT_FILENAME_STEM = 8
MAX_XPT_LABEL_LENGTH = 40


def _order_columns(
    dataset: pd.DataFrame, *, definition: DatasetDefinition
) -> list[str]:
    by_upper = {str(c).upper(): str(c) for c in dataset.columns}
    ordered = [
        by_upper[name.upper()]
        for name in definition.variable_names()
        if name.upper() in by_upper
    ]
    extras = [str(c) for c in dataset.columns if str(c) not in ordered]
    return ordered + extras


def _column_label(column: str, variables: dict[str, FieldDefinition]) -> str:
    var = variables.get(column.upper())
    return var.label if var is not None else column


def _iso_text(value: object) -> str:
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_missing_scalar(value):
        return ""
    return str(value)


def write_xpt_file(
    dataset: pd.DataFrame,
    stage: str,
    path: str | Path,
    *,
    file_label: str | None = None,
) -> Path:
    output_path = Path(path)
    output_path = output_path.with_name(output_path.name.lower())
    if len(output_path.stem) > MAX_XPT_FILENAME_STEM:
        raise XportGenerationError(
            "XPT filename stem must be <=8 characters for SAS V5 transport: "
            f"{output_path.name}"
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.exists():
        output_path.unlink()
    definition = get_dataset_definition(stage)
    dataset_name = definition.resolved_dataset_name()
    dataset = dataset.loc[:, _order_columns(dataset, definition=definition)]
    variables = definition.by_name()
    column_labels = [
        _column_label(str(col), variables)[:MAX_XPT_LABEL_LENGTH]
        for col in dataset.columns
    ]
    label = (file_label if file_label is not None else definition.label).strip()
    export_df = pd.DataFrame(index=dataset.index)
    for column_index, col in enumerate(dataset.columns):
        series = dataset.iloc[:, column_index]
        var = variables.get(str(col).upper())
        expected = var.type if var is not None else None
        values: np.ndarray
        if expected == "Date":
            values = series.map(_iso_text).to_numpy(dtype=object)
        elif expected == "Num" or (
            expected is None and pd.api.types.is_numeric_dtype(series.dtype)
        ):
            values = pd.to_numeric(series, errors="coerce").to_numpy(
                dtype="float64", na_value=np.nan
            )
        else:
            normalized = series.astype(object).where(~pd.isna(series), "")
            max_length = normalized.astype(str).str.len().max()
            if pd.isna(max_length) or int(max_length) == 0:
                normalized = pd.Series([" "] * len(dataset.index), index=dataset.index)
            values = normalized.astype(str).to_numpy(dtype=object)
        export_df.insert(column_index, str(col).upper()[:8], values)
    try:
        pyreadstat.write_xport(
            export_df,
            str(output_path),
            file_label=label[:MAX_XPT_LABEL_LENGTH] or None,
            column_labels=column_labels,
            table_name=dataset_name,
            file_format_version=5,
        )
    except Exception as exc:
        raise XportGenerationError(f"Failed to write XPT file: {exc}") from exc
    return output_path


class XPTWriter:
    pass

    def write(self, frame: pd.DataFrame, stage: str, output_path: Path) -> Path:
        return write_xpt_file(frame, stage, output_path)
