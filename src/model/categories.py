"""Closed key sets for the categorical simulation inputs.

Inputs arrive as bare strings (URL query parameters, spec.json files), so each
enum offers a total ``from_key`` lookup: a known key returns its member, any
other value returns None. Callers treat None as "use the neutral fallback".
"""

from enum import Enum
from typing import Optional


class _KeyedEnum(str, Enum):
    """String enum whose value is the external key."""

    @classmethod
    def from_key(cls, key: Optional[str]):
        if key is None:
            return None
        try:
            return cls(key)
        except ValueError:
            return None


class FamilyType(_KeyedEnum):
    SINGLE = "single"
    COUPLE = "couple"
    COUPLE_1CHILD = "couple-1child"
    COUPLE_2CHILDREN = "couple-2children"
    COUPLE_3CHILDREN = "couple-3children"


class HousingType(_KeyedEnum):
    RENT = "rent"
    OWN = "own"
    OWN_LOAN = "own_loan"


class FireStrategy(_KeyedEnum):
    WITHDRAWAL = "withdrawal"
    YIELD = "yield"


class ScenarioKey(_KeyedEnum):
    OPTIMISTIC = "optimistic"
    NEUTRAL = "neutral"
    PESSIMISTIC = "pessimistic"


class IncomeType(_KeyedEnum):
    GROSS = "gross"
    NET = "net"


class FamilyPattern(_KeyedEnum):
    """Household patterns supported by the take-home calculator."""
    SINGLE = "single"
    COUPLE = "couple"
    COUPLE_CHILD1 = "couple-child1"

    @property
    def has_spouse(self) -> bool:
        return self is not FamilyPattern.SINGLE

    @property
    def dependents(self) -> int:
        return 1 if self is FamilyPattern.COUPLE_CHILD1 else 0


FAMILY_PATTERN_LABELS = {
    FamilyPattern.SINGLE: "独身",
    FamilyPattern.COUPLE: "片働き夫婦",
    FamilyPattern.COUPLE_CHILD1: "夫婦＋子1人",
}


def get_family_pattern_label(pattern: FamilyPattern) -> str:
    return FAMILY_PATTERN_LABELS[pattern]
