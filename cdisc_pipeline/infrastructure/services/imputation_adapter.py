"""Multiple imputation of missing AGE and SEX in the DM dataset.

Delegates the modelling to scikit-learn's ``IterativeImputer`` (chained
equations with posterior sampling). Each of the ``n_imputations`` runs uses
its own seed; AGE is pooled by the rounded mean and SEX by majority vote.
Only values that were missing on input are filled.
"""

from __future__ import annotations

import warnings

import numpy as np
import pandas as pd
from sklearn.exceptions import ConvergenceWarning
from sklearn.experimental import enable_iterative_imputer  # noqa: F401
from sklearn.impute import IterativeImputer

from ...constants import Defaults, Sexes
from ...domain.services.categories import normalize_category
from ..io.exceptions import ImputationError

SEX_CODES: dict[str, float] = {Sexes.MALE: 1.0, Sexes.FEMALE: 0.0}
IMPUTED_COLUMNS = ("AGE", "SEX")


class IterativeImputationAdapter:
    pass

    def __init__(
        self,
        seed: int = Defaults.SEED,
        n_imputations: int = Defaults.N_IMPUTATIONS,
        max_iter: int = 10,
    ) -> None:
        super().__init__()
        if n_imputations < 1:
            raise ValueError(f"n_imputations must be positive, got {n_imputations}")
        self.seed = seed
        self.n_imputations = n_imputations
        self.max_iter = max_iter

    def impute(self, frame: pd.DataFrame) -> tuple[pd.DataFrame, dict[str, int]]:
        missing_columns = [c for c in IMPUTED_COLUMNS if c not in frame.columns]
        if missing_columns:
            raise KeyError(f"Column(s) not found in dataset: {missing_columns}")
        result = frame.copy()
        age = pd.to_numeric(result["AGE"], errors="coerce").to_numpy(
            dtype="float64", na_value=np.nan
        )
        sex_missing = result["SEX"].isna().to_numpy()
        sex = np.array(
            [SEX_CODES.get(normalize_category(v) or "", np.nan) for v in result["SEX"]],
            dtype="float64",
        )
        age_missing = np.isnan(age)
        counts = {"AGE": 0, "SEX": 0}
        if not age_missing.any() and not sex_missing.any():
            return result, counts

        matrix = np.column_stack([age, sex])
        # A column without any observed value cannot be modelled and stays missing.
        usable = ~np.isnan(matrix).all(axis=0)
        if not usable.any():
            return result, counts

        runs = self._run_imputations(matrix)
        if usable[0] and age_missing.any():
            pooled_age = runs[:, :, 0].mean(axis=0)
            observed = age[~age_missing]
            pooled_age = np.clip(pooled_age, observed.min(), observed.max())
            filled = np.rint(pooled_age).astype("int64")
            result.loc[age_missing, "AGE"] = filled[age_missing]
            counts["AGE"] = int(age_missing.sum())
        if usable[1] and sex_missing.any():
            male_share = (runs[:, :, 1] >= 0.5).mean(axis=0)
            votes = np.where(male_share >= 0.5, Sexes.MALE, Sexes.FEMALE)
            result.loc[sex_missing, "SEX"] = votes[sex_missing]
            counts["SEX"] = int(sex_missing.sum())
        return result, counts

    def _run_imputations(self, matrix: np.ndarray) -> np.ndarray:
        runs: list[np.ndarray] = []
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", category=ConvergenceWarning)
                for i in range(self.n_imputations):
                    imputer = IterativeImputer(
                        max_iter=self.max_iter,
                        sample_posterior=True,
                        random_state=self.seed + i,
                        keep_empty_features=True,
                    )
                    runs.append(imputer.fit_transform(matrix))
        except ValueError as exc:
            raise ImputationError(f"Imputation failed: {exc}") from exc
        return np.stack(runs)
