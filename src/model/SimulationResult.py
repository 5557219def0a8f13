"""Result data model for the FIRE simulation.

These classes hold everything a report needs. Numeric fields are already
rounded for display by the calculators, so renderers only format them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from model.SimulationInput import SimulationInput
from calc.rounding import round_half_up


@dataclass(frozen=True)
class YearProjection:
    """Snapshot of one simulated year, taken before that year's growth.

    Index 0 is the starting state.
    """
    age: int
    year: int
    assets: float
    fire_number: float  # inflation-escalated target for this year
    annual_investment: float


@dataclass(frozen=True)
class AchievementResult:
    """Output of the compounding projector.

    ``years`` is None when the target was not reached within the horizon.
    """
    years: Optional[int]
    projection: List[YearProjection]

    @property
    def achieved(self) -> bool:
        return self.years is not None


@dataclass(frozen=True)
class ScenarioResult:
    label: str
    color: str
    fire_number: float  # whole man-yen, or inf when unreachable
    monthly_expense: float  # one decimal
    annual_expense: float  # whole man-yen
    achievement_age: Optional[int]
    achievement_years: Optional[int]
    yearly_projection: List[YearProjection] = field(default_factory=list)


@dataclass(frozen=True)
class SensitivityItem:
    label: str
    description: str
    current_years: Optional[int]
    new_years: Optional[int]
    diff: Optional[int]  # new - current; negative means FIRE comes sooner


@dataclass(frozen=True)
class SimulationResult:
    """Complete result of one simulation run."""
    input: SimulationInput
    prefecture_name: str
    cost_index: float
    family_label: str
    housing_label: str
    strategy_label: str
    base_monthly_expense: float
    post_fire_monthly_cost: float
    effective_yield_rate: Optional[float]
    scenarios: Dict[str, ScenarioResult]
    sensitivity: List[SensitivityItem]

    @property
    def optimistic(self) -> ScenarioResult:
        return self.scenarios["optimistic"]

    @property
    def neutral(self) -> ScenarioResult:
        return self.scenarios["neutral"]

    @property
    def pessimistic(self) -> ScenarioResult:
        return self.scenarios["pessimistic"]

    @property
    def total_monthly_expense(self) -> float:
        """Living cost plus post-FIRE insurance and pension, one decimal."""
        return round_half_up(self.base_monthly_expense + self.post_fire_monthly_cost, 1)
