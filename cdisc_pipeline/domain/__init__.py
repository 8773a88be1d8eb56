"""Domain layer: record types, integrity errors and pure derivations."""

from .exceptions import InvalidRecordError

__all__ = ["InvalidRecordError"]
