"""Completely-at-random missingness for exercising the imputation step."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from ...constants import Defaults

if TYPE_CHECKING:
    from collections.abc import Mapping


class MissingnessInjector:
    pass

    def __init__(self, seed: int = Defaults.SEED) -> None:
        super().__init__()
        self.seed = seed

    def inject(
        self, frame: pd.DataFrame, rates: Mapping[str, float]
    ) -> tuple[pd.DataFrame, dict[str, int]]:
        """Blank out a random share of each listed column.

        Returns a new frame and the number of values newly set missing per
        column; the input frame is not modified.
        """
        rng = np.random.default_rng(self.seed)
        result = frame.copy()
        counts: dict[str, int] = {}
        for column, rate in rates.items():
            if not 0.0 <= rate <= 1.0:
                raise ValueError(
                    f"Missingness rate for {column} must be between 0 and 1, got {rate}"
                )
            if column not in result.columns:
                raise KeyError(f"Column {column} not found in dataset")
            mask = rng.random(len(result)) < rate
            newly_missing = mask & result[column].notna().to_numpy()
            counts[column] = int(newly_missing.sum())
            if counts[column]:
                result.loc[newly_missing, column] = pd.NA
        return result, counts
