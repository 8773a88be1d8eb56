from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .exceptions import PipelineInfrastructureError
from .frames import records_to_frame

if TYPE_CHECKING:
    from collections.abc import Iterable


def write_records_csv(records: Iterable[object], stage: str, path: Path) -> Path:
    """Write records as a CSV with the stage's CDISC column names.

    Dates are written as ISO 8601 text and missing values as empty cells, which
    is what ``CSVRawDataSource`` reads back.
    """
    output_path = Path(path)
    frame = records_to_frame(records, stage)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(output_path, index=False)
    except OSError as exc:
        raise PipelineInfrastructureError(
            f"Failed to write {stage} CSV to {output_path}: {exc}"
        ) from exc
    return output_path
