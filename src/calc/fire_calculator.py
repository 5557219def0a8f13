"""FIRE number and achievement-year calculations.

A FIRE number of ``math.inf`` means the target can never be reached (a zero
withdrawal rate, or a yield fully eaten by tax). It flows through the
projector unchanged and comes out as "not achieved".
"""

import math
from typing import List

from model.SimulationInput import SimulationInput
from model.SimulationResult import AchievementResult, YearProjection
from model.categories import FireStrategy
from calc.rounding import round_half_up

MAX_SIMULATION_YEARS = 80


def calc_fire_number(annual_expense: float, swr: float) -> float:
    """Net worth needed to draw ``annual_expense`` each year at the safe withdrawal rate."""
    if swr <= 0:
        return math.inf
    return annual_expense / swr


def calc_effective_yield_rate(gross_yield_rate: float, tax_rate: float) -> float:
    """Yield left after dividend/interest tax."""
    return gross_yield_rate * (1 - tax_rate)


def calc_fire_number_for_strategy(annual_expense: float, input: SimulationInput) -> float:
    """FIRE number under the input's strategy.

    The yield strategy lives on after-tax income alone and never touches
    principal; anything else is treated as withdrawal.
    """
    if FireStrategy.from_key(input.fire_strategy) is FireStrategy.YIELD:
        effective_rate = calc_effective_yield_rate(input.yield_rate, input.dividend_tax_rate)
        if effective_rate <= 0:
            return math.inf
        return annual_expense / effective_rate
    return calc_fire_number(annual_expense, input.swr)


def calc_achievement_years(current_assets: float, annual_investment: float, annual_return_rate: float,
                           fire_number: float, inflation_rate: float,
                           max_years: int = MAX_SIMULATION_YEARS, start_age: int = 0) -> AchievementResult:
    """Simulate compounding savings against an inflation-escalated target.

    Each year records a snapshot first, then checks for crossover, then grows
    assets by the return rate plus the fixed contribution and grows the target
    by inflation. Crossover is only reported from year 1 onward, so assets
    that already cover the target still report one year.

    Args:
        current_assets: Starting assets.
        annual_investment: Contribution added at the end of every year.
        annual_return_rate: Nominal return, e.g. 0.04.
        fire_number: Target in today's money; grows with inflation.
        inflation_rate: Annual target escalation.
        max_years: Horizon; the loop runs years 0..max_years inclusive.
        start_age: Added to the year index to fill in ``age``.

    Returns:
        AchievementResult whose ``years`` is None when the horizon ran out.
    """
    projection: List[YearProjection] = []
    assets = current_assets
    target = fire_number

    for year in range(max_years + 1):
        projection.append(YearProjection(
            age=start_age + year,
            year=year,
            assets=round_half_up(assets),
            fire_number=round_half_up(target),
            annual_investment=annual_investment
        ))

        if assets >= target and year > 0:
            return AchievementResult(years=year, projection=projection)

        assets = assets * (1 + annual_return_rate) + annual_investment
        target = target * (1 + inflation_rate)

    return AchievementResult(years=None, projection=projection)
