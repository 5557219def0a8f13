"""Monthly cost-of-living and post-FIRE overhead estimates (man-yen per month)."""

from typing import Optional

from calc.assumptions import FireAssumptions, default_assumptions
from calc.rounding import round_half_up
from model.categories import FamilyType


def estimate_monthly_expense(cost_index: float, family_type: str, housing_type: str,
                             assumptions: Optional[FireAssumptions] = None) -> float:
    """Living cost for a household, scaled from the single-renter national baseline.

    Unknown family or housing keys use a coefficient of 1.0. The result is not
    rounded.
    """
    a = assumptions or default_assumptions()
    return (a.base_monthly_cost * cost_index
            * a.family_coefficient(family_type)
            * a.housing_coefficient(housing_type))


def estimate_post_fire_monthly_cost(family_type: str, assumptions: Optional[FireAssumptions] = None) -> float:
    """National health insurance plus national pension once out of employment.

    Pension is counted for one person when single and for two otherwise;
    children are not counted. Rounded to one decimal.
    """
    a = assumptions or default_assumptions()
    health = a.monthly_health_insurance(family_type)
    people = 1 if family_type == FamilyType.SINGLE.value else 2
    pension = a.pension_per_person * people
    return round_half_up(health + pension, 1)


def gross_to_net(gross_annual: float) -> float:
    """Rough gross-to-net conversion for an annual salary in man-yen."""
    if gross_annual <= 300:
        return gross_annual * 0.80
    if gross_annual <= 500:
        return gross_annual * 0.77
    if gross_annual <= 700:
        return gross_annual * 0.74
    if gross_annual <= 1000:
        return gross_annual * 0.70
    return gross_annual * 0.65
