"""Apply a per-record derivation across a batch of records."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from ..exceptions import InvalidRecordError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


class ErrorPolicy(StrEnum):
    FAIL_FAST = "fail_fast"
    COLLECT = "collect"

    @classmethod
    def parse(cls, value: str | ErrorPolicy) -> ErrorPolicy:
        if isinstance(value, ErrorPolicy):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(
                f"error_policy must be one of {allowed}, got {value!r}"
            ) from None


@dataclass(frozen=True, slots=True)
class RecordFailure:
    index: int
    subject: str | None
    field: str | None
    message: str


def _empty_failures() -> list[RecordFailure]:
    return []


@dataclass(slots=True)
class BatchMappingResult:
    records: list[Any]
    failures: list[RecordFailure] = field(default_factory=_empty_failures)

    @property
    def success(self) -> bool:
        return len(self.failures) == 0

    @property
    def input_count(self) -> int:
        return len(self.records) + len(self.failures)


def map_batch(
    records: Sequence[Any],
    derive: Callable[[Any], Any],
    *,
    max_workers: int = 1,
    policy: ErrorPolicy | str = ErrorPolicy.FAIL_FAST,
) -> BatchMappingResult:
    """Derive every record independently, preserving input order.

    With ``max_workers > 1`` records are dispatched to a thread pool; there is
    no cross-record state, so the result does not depend on scheduling.

    Under ``FAIL_FAST`` the first invalid record (in input order) is re-raised.
    Under ``COLLECT`` invalid records are skipped and reported as failures.
    Only ``InvalidRecordError`` is treated as a per-record failure; any other
    exception propagates.
    """
    resolved_policy = ErrorPolicy.parse(policy)
    if max_workers < 1:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    def _attempt(record: Any) -> Any:
        try:
            return derive(record)
        except InvalidRecordError as exc:
            return exc

    if max_workers == 1 or len(records) <= 1:
        if resolved_policy is ErrorPolicy.FAIL_FAST:
            return BatchMappingResult(records=[derive(record) for record in records])
        outcomes = [_attempt(record) for record in records]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(_attempt, records))

    result = BatchMappingResult(records=[])
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, InvalidRecordError):
            if resolved_policy is ErrorPolicy.FAIL_FAST:
                raise outcome
            result.failures.append(
                RecordFailure(
                    index=index,
                    subject=outcome.subject,
                    field=outcome.field,
                    message=str(outcome),
                )
            )
        else:
            result.records.append(outcome)
    return result
