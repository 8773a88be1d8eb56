"""Category normalization and the race alias table.

Free-text race entries collected under OTHER/UNKNOWN are reconciled against
an explicit alias table instead of ad-hoc conditionals, so the recoding
policy is data that can be inspected, extended and tested.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from types import MappingProxyType
from typing import TYPE_CHECKING

from ...constants import RaceCategories
from ...pandas_utils import is_missing_scalar

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[-_/.,]+")


def normalize_category(value: object) -> str | None:
    """Return the comparison key for a categorical value.

    Case, surrounding whitespace, repeated inner whitespace and separator
    punctuation are ignored. Missing values normalize to ``None``.

    >>> normalize_category("  black-american ")
    'BLACK AMERICAN'
    """
    if is_missing_scalar(value):
        return None
    text = _PUNCTUATION.sub(" ", str(value))
    text = _WHITESPACE.sub(" ", text).strip().upper()
    return text or None


def _empty_aliases() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class RaceAliasTable:
    """Finite mapping from recognised free-text race entries to CDISC categories.

    Keys are stored normalized; every target must be a canonical race
    category. Lookups of unknown or missing text return ``None``.
    """

    aliases: Mapping[str, str] = field(default_factory=_empty_aliases)

    def __post_init__(self) -> None:
        normalized: dict[str, str] = {}
        for alias, category in self.aliases.items():
            key = normalize_category(alias)
            target = normalize_category(category)
            if key is None:
                raise ValueError("Race alias must be a non-empty string")
            if target not in RaceCategories.CANONICAL:
                raise ValueError(
                    f"Race alias '{alias}' maps to non-canonical category '{category}'"
                )
            normalized[key] = target
        object.__setattr__(self, "aliases", MappingProxyType(normalized))

    def resolve(self, text: object) -> str | None:
        key = normalize_category(text)
        if key is None:
            return None
        return self.aliases.get(key)

    def with_aliases(self, extra: Mapping[str, str]) -> RaceAliasTable:
        return RaceAliasTable({**self.aliases, **extra})

    def __contains__(self, text: object) -> bool:
        return self.resolve(text) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.aliases)

    def __len__(self) -> int:
        return len(self.aliases)


DEFAULT_RACE_ALIASES = RaceAliasTable(
    {
        "Caucasian": RaceCategories.WHITE,
        "White Caucasian": RaceCategories.WHITE,
        "White, Caucasian, or Arabic": RaceCategories.WHITE,
        "European": RaceCategories.WHITE,
        "Black American": RaceCategories.BLACK,
        "African American": RaceCategories.BLACK,
        "Afro-American": RaceCategories.BLACK,
        "Black": RaceCategories.BLACK,
        "Asian American": RaceCategories.ASIAN,
        "Native American": RaceCategories.AMERICAN_INDIAN,
        "Alaska Native": RaceCategories.AMERICAN_INDIAN,
        "Pacific Islander": RaceCategories.PACIFIC_ISLANDER,
        "Native Hawaiian": RaceCategories.PACIFIC_ISLANDER,
        "Mixed": RaceCategories.MULTIPLE,
        "Multiracial": RaceCategories.MULTIPLE,
    }
)
