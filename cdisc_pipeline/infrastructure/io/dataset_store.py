"""Structure-preserving persistence of intermediate stage datasets."""

from __future__ import annotations

from pathlib import Path
import pickle

import pandas as pd

from ...constants import StageNames
from .exceptions import DatasetStoreError

STORE_SUFFIX = ".pkl"


class DatasetStore:
    """Saves one DataFrame per pipeline stage under ``root``.

    Frames are pickled, so nullable dtypes, ``datetime.date`` values and
    missing markers round-trip unchanged.
    """

    def __init__(self, root: Path) -> None:
        super().__init__()
        self.root = Path(root)

    def path_for(self, stage: str) -> Path:
        key = stage.strip().upper()
        if key not in StageNames.PERSISTED:
            known = ", ".join(StageNames.PERSISTED)
            raise DatasetStoreError(
                f"Unknown stage '{stage}' (expected one of: {known})"
            )
        return self.root / f"{key.lower()}{STORE_SUFFIX}"

    def save(self, stage: str, frame: pd.DataFrame) -> Path:
        path = self.path_for(stage)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            frame.to_pickle(path)
        except (OSError, pickle.PicklingError) as exc:
            raise DatasetStoreError(
                f"Failed to save {stage} dataset to {path}: {exc}"
            ) from exc
        return path

    def load(self, stage: str) -> pd.DataFrame:
        path = self.path_for(stage)
        if not path.exists():
            raise DatasetStoreError(f"No {stage} dataset stored at {path}")
        try:
            frame = pd.read_pickle(path)
        except (OSError, pickle.UnpicklingError, EOFError) as exc:
            raise DatasetStoreError(
                f"Failed to load {stage} dataset from {path}: {exc}"
            ) from exc
        if not isinstance(frame, pd.DataFrame):
            raise DatasetStoreError(f"{path} does not contain a DataFrame")
        return frame

    def exists(self, stage: str) -> bool:
        return self.path_for(stage).exists()
