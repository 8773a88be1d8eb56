"""Flat, human-readable description of each dataset's variables."""

import pandas as pd

from ..entities.dataset import DATASET_DEFINITIONS, get_dataset_definition

DESCRIPTION_COLUMNS = ("Variable", "Label", "Type", "Length")


def describe_dataset(stage: str) -> pd.DataFrame:
    definition = get_dataset_definition(stage)
    rows = [
        {
            "Variable": var.name,
            "Label": var.label,
            "Type": var.type,
            "Length": var.length,
        }
        for var in definition.variables
    ]
    return pd.DataFrame(rows, columns=list(DESCRIPTION_COLUMNS))


def describe_all() -> pd.DataFrame:
    frames: list[pd.DataFrame] = []
    for stage in ("CDASH", "SDTM", "ADAM"):
        definition = DATASET_DEFINITIONS[stage]
        frame = describe_dataset(stage)
        frame.insert(0, "Dataset", f"{stage}.{definition.code}")
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)
