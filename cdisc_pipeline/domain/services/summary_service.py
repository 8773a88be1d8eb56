"""Summary tables over the subject-level analysis dataset."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from ...constants import AgeGroups, Flags

if TYPE_CHECKING:
    from collections.abc import Iterable

SUMMARY_KEY_COLUMNS = ["Characteristic", "Category"]
TOTAL_LABEL = "Total"


def population_label(flag: str) -> str:
    return f"SAFFL={flag}"


def build_population_counts(frame: pd.DataFrame) -> pd.DataFrame:
    flags = _column(frame, "SAFFL").fillna(Flags.NO)
    counts = flags.value_counts().reindex([Flags.YES, Flags.NO], fill_value=0)
    result = counts.rename_axis("SAFFL").reset_index(name="Subjects")
    result["Subjects"] = result["Subjects"].astype(int)
    return result


def build_demographics_summary(frame: pd.DataFrame) -> pd.DataFrame:
    """Demographics table: one column per safety population flag plus total.

    Categorical cells read ``n (pct%)`` against the column's subject count.
    """
    groups = _population_groups(frame)
    rows: list[dict[str, str]] = []
    rows.append(
        _row("Subjects", "n", {label: str(len(sub)) for label, sub in groups})
    )
    rows.extend(_age_rows(groups))
    rows.extend(
        _categorical_rows(
            "Age group", groups, "AGEGR1", categories=list(AgeGroups.ORDER)
        )
    )
    rows.extend(_categorical_rows("Sex", groups, "SEX"))
    rows.extend(_categorical_rows("Race (recoded)", groups, "RACEREC"))
    rows.extend(_categorical_rows("Ethnicity", groups, "ETHNIC"))
    columns = SUMMARY_KEY_COLUMNS + [label for label, _ in groups]
    return pd.DataFrame(rows, columns=columns).fillna("")


def _population_groups(frame: pd.DataFrame) -> list[tuple[str, pd.DataFrame]]:
    flags = _column(frame, "SAFFL").fillna(Flags.NO)
    groups = [
        (population_label(flag), frame.loc[flags == flag])
        for flag in (Flags.YES, Flags.NO)
    ]
    groups.append((TOTAL_LABEL, frame))
    return groups


def _age_rows(groups: list[tuple[str, pd.DataFrame]]) -> list[dict[str, str]]:
    mean_sd: dict[str, str] = {}
    median: dict[str, str] = {}
    min_max: dict[str, str] = {}
    missing: dict[str, str] = {}
    for label, sub in groups:
        age = pd.to_numeric(_column(sub, "AGE"), errors="coerce")
        present = age.dropna()
        missing[label] = str(int(age.isna().sum()))
        if present.empty:
            mean_sd[label] = median[label] = min_max[label] = "-"
            continue
        sd = present.std()
        sd_text = "-" if pd.isna(sd) else f"{sd:.1f}"
        mean_sd[label] = f"{present.mean():.1f} ({sd_text})"
        median[label] = f"{present.median():.1f}"
        min_max[label] = f"{present.min():.0f}, {present.max():.0f}"
    return [
        _row("Age (years)", "Mean (SD)", mean_sd),
        _row("Age (years)", "Median", median),
        _row("Age (years)", "Min, Max", min_max),
        _row("Age (years)", "Missing", missing),
    ]


def _categorical_rows(
    characteristic: str,
    groups: list[tuple[str, pd.DataFrame]],
    column: str,
    *,
    categories: Iterable[str] | None = None,
) -> list[dict[str, str]]:
    total_frame = groups[-1][1]
    observed = _column(total_frame, column).dropna().astype(str)
    ordered = list(categories) if categories is not None else []
    ordered.extend(sorted(set(observed) - set(ordered)))
    rows: list[dict[str, str]] = []
    for category in ordered:
        cells = {}
        for label, sub in groups:
            values = _column(sub, column).astype("string")
            cells[label] = _format_count(int((values == category).sum()), len(sub))
        rows.append(_row(characteristic, category, cells))
    missing_cells = {
        label: _format_count(int(_column(sub, column).isna().sum()), len(sub))
        for label, sub in groups
    }
    rows.append(_row(characteristic, "Missing", missing_cells))
    return rows


def _row(characteristic: str, category: str, cells: dict[str, str]) -> dict[str, str]:
    return {"Characteristic": characteristic, "Category": category, **cells}


def _format_count(count: int, total: int) -> str:
    if total == 0:
        return "0"
    return f"{count} ({count / total * 100:.1f}%)"


def _column(frame: pd.DataFrame, column: str) -> pd.Series:
    if column in frame.columns:
        return frame[column]
    return pd.Series(pd.NA, index=frame.index, dtype="object")
