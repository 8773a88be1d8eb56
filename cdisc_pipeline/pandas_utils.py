from __future__ import annotations

from typing import Any, cast

import pandas as pd

from .constants import MissingValues


def ensure_series(value: object, index: pd.Index[Any] | None = None) -> pd.Series[Any]:
    if isinstance(value, pd.Series):
        return cast("pd.Series[Any]", value)
    if isinstance(value, pd.DataFrame):
        if value.shape[1] == 0:
            return pd.Series(index=value.index, dtype="object")
        return value.iloc[:, 0]
    return pd.Series(cast("Any", value), index=index)


def is_missing_scalar(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(cast("Any", value)))
    except (TypeError, ValueError):
        return False


def none_if_missing(value: object) -> object:
    return None if is_missing_scalar(value) else value


def normalize_missing_strings(
    value: object, *, markers: set[str] | None = None
) -> pd.Series[Any]:
    series = ensure_series(value).astype("string")
    stripped = series.str.strip()
    marker_set = {m.upper() for m in markers or MissingValues.STRING_MARKERS}
    marker_mask = stripped.str.upper().isin(marker_set)
    return stripped.mask(marker_mask, pd.NA)
