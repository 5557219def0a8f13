"""Result data model for the post-FIRE drawdown simulation.

Amounts are in man-yen and rounded to whole man-yen for display.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class WithdrawalYear:
    """State at the end of one drawdown year.

    The first record is the starting point, before any withdrawal.
    """
    age: int
    assets: float  # 0 once depleted
    withdrawal: float  # inflation-escalated annual withdrawal
    investment_return: float


@dataclass(frozen=True)
class WithdrawalResult:
    initial_assets: float
    monthly_withdrawal: float
    start_age: int
    max_age: int
    records: List[WithdrawalYear]
    depletion_age: Optional[int]  # None when assets last until max_age
    years_lasted: int
    effective_rate: float  # first-year withdrawal as a percent of initial assets

    @property
    def depleted(self) -> bool:
        return self.depletion_age is not None
