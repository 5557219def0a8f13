"""Post-FIRE drawdown: how long do the assets last?

Every year the remaining assets earn the return and the withdrawal, which
grows with inflation from the first year on, is taken out. The run stops at
``max_age`` or as soon as the assets are gone.
"""

import math
from typing import List, Optional

from model.SimulationResult import SimulationResult
from model.WithdrawalResult import WithdrawalResult, WithdrawalYear
from calc.rounding import round_half_up

MAX_AGE = 100

# Used when a drawdown is requested without a simulated household
DEFAULT_ANNUAL_RETURN = 0.03
DEFAULT_INFLATION_RATE = 0.01
DEFAULT_START_AGE = 45


def calc_withdrawal(initial_assets: float, monthly_withdrawal: float, annual_return: float,
                    inflation_rate: float, start_age: int, max_age: int = MAX_AGE) -> WithdrawalResult:
    """Simulate drawing down ``initial_assets`` from ``start_age`` to ``max_age``.

    Args:
        initial_assets: Assets at the start of retirement (man-yen).
        monthly_withdrawal: Spending per month in today's money (man-yen).
        annual_return: Nominal return, e.g. 0.03.
        inflation_rate: Annual escalation of the withdrawal.
        start_age: Age at the first record.
        max_age: Last age simulated.

    Returns:
        WithdrawalResult whose ``depletion_age`` is None when the assets last.
    """
    annual_withdrawal = monthly_withdrawal * 12
    assets = initial_assets
    depletion_age: Optional[int] = None
    records: List[WithdrawalYear] = [
        WithdrawalYear(age=start_age, assets=round_half_up(assets), withdrawal=0, investment_return=0)
    ]

    for year in range(1, max_age - start_age + 1):
        investment_return = assets * annual_return
        withdrawal = annual_withdrawal * (1 + inflation_rate) ** year
        assets = assets + investment_return - withdrawal

        if assets <= 0:
            depletion_age = start_age + year
            records.append(WithdrawalYear(
                age=depletion_age,
                assets=0,
                withdrawal=round_half_up(withdrawal),
                investment_return=round_half_up(investment_return)
            ))
            break

        records.append(WithdrawalYear(
            age=start_age + year,
            assets=round_half_up(assets),
            withdrawal=round_half_up(withdrawal),
            investment_return=round_half_up(investment_return)
        ))

    if depletion_age is not None:
        years_lasted = depletion_age - start_age
    else:
        years_lasted = max(0, max_age - start_age)

    if initial_assets > 0:
        effective_rate = annual_withdrawal / initial_assets * 100
    else:
        effective_rate = math.inf

    return WithdrawalResult(
        initial_assets=initial_assets,
        monthly_withdrawal=monthly_withdrawal,
        start_age=start_age,
        max_age=max_age,
        records=records,
        depletion_age=depletion_age,
        years_lasted=years_lasted,
        effective_rate=effective_rate
    )


def withdrawal_after_fire(result: SimulationResult, max_age: int = MAX_AGE) -> Optional[WithdrawalResult]:
    """Drawdown that follows the neutral scenario's FIRE date.

    Starts from the assets held in the FIRE year and spends the neutral
    monthly expense, inflated to that year. Returns None when the neutral
    scenario never reaches FIRE.
    """
    neutral = result.neutral
    if neutral.achievement_years is None:
        return None
    sim_input = result.input
    snapshot = neutral.yearly_projection[neutral.achievement_years]
    monthly = neutral.monthly_expense * (1 + sim_input.inflation_rate) ** neutral.achievement_years
    return calc_withdrawal(
        snapshot.assets,
        round_half_up(monthly, 1),
        sim_input.annual_return_rate,
        sim_input.inflation_rate,
        neutral.achievement_age,
        max_age
    )
