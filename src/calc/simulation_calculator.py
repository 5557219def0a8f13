"""Simulation calculator that assembles a complete SimulationResult.

The calculation runs in three steps:
1. Resolve the household: region cost index, labels, monthly living cost
   and post-FIRE insurance/pension overhead
2. Scenarios - optimistic, neutral and pessimistic re-runs with adjusted
   return rate and living cost
3. Sensitivity - five one-change-at-a-time re-runs compared with neutral
"""

from typing import List, Optional

from model.SimulationInput import SimulationInput
from model.SimulationResult import ScenarioResult, SensitivityItem, SimulationResult
from model.categories import FireStrategy, ScenarioKey
from calc.assumptions import FireAssumptions, default_assumptions
from calc.prefectures import PrefectureDirectory, default_prefectures
from calc.cost_estimator import estimate_monthly_expense, estimate_post_fire_monthly_cost
from calc.fire_calculator import (
    calc_achievement_years,
    calc_effective_yield_rate,
    calc_fire_number_for_strategy,
)
from calc.rounding import round_half_up


def _number(value: float) -> str:
    """Format a number the way it is typed, without a trailing '.0'."""
    return f"{value:g}"


def make_sensitivity_item(label: str, description: str,
                          new_years: Optional[int], neutral_years: Optional[int]) -> SensitivityItem:
    return SensitivityItem(
        label=label,
        description=description,
        current_years=neutral_years,
        new_years=new_years,
        diff=new_years - neutral_years if neutral_years is not None and new_years is not None else None
    )


class SimulationCalculator:
    """Runs the FIRE simulation using injected assumptions and regional data."""

    def __init__(self, assumptions: FireAssumptions, prefectures: PrefectureDirectory):
        self.assumptions = assumptions
        self.prefectures = prefectures

    def _achievement_years(self, input: SimulationInput, annual_investment: float,
                           return_rate: float, fire_number: float):
        return calc_achievement_years(
            input.current_assets,
            annual_investment,
            return_rate,
            fire_number,
            input.inflation_rate,
            max_years=self.assumptions.max_simulation_years,
            start_age=input.current_age
        )

    def calc_scenario(self, scenario_key, base_monthly_expense: float,
                      post_fire_monthly_cost: float, input: SimulationInput) -> ScenarioResult:
        """Run one scenario profile.

        Only the living cost is adjusted; insurance and pension overhead are
        added unchanged.
        """
        scenario = self.assumptions.scenario(scenario_key)
        adjusted_living_expense = base_monthly_expense * (1 + scenario.expense_adjust)
        adjusted_monthly_expense = adjusted_living_expense + post_fire_monthly_cost
        annual_expense = adjusted_monthly_expense * 12
        fire_number = calc_fire_number_for_strategy(annual_expense, input)
        return_rate = input.annual_return_rate + scenario.return_rate_adjust

        result = self._achievement_years(input, input.annual_investment, return_rate, fire_number)
        years = result.years

        return ScenarioResult(
            label=scenario.label,
            color=scenario.color,
            fire_number=round_half_up(fire_number),
            monthly_expense=round_half_up(adjusted_monthly_expense, 1),
            annual_expense=round_half_up(annual_expense),
            achievement_age=input.current_age + years if years is not None else None,
            achievement_years=years,
            yearly_projection=result.projection
        )

    def calc_sensitivity(self, base_monthly_expense: float, post_fire_monthly_cost: float,
                         input: SimulationInput, neutral_years: Optional[int]) -> List[SensitivityItem]:
        """Five what-if comparisons against the neutral scenario."""
        annual_expense = (base_monthly_expense + post_fire_monthly_cost) * 12
        fire_number = calc_fire_number_for_strategy(annual_expense, input)
        annual_investment = input.annual_investment
        rate = input.annual_return_rate

        items: List[SensitivityItem] = []

        extra_invest = self._achievement_years(input, annual_investment + 12, rate, fire_number)
        items.append(make_sensitivity_item(
            "積立 +1万円/月", f"月{_number(input.monthly_investment + 1)}万円に増額",
            extra_invest.years, neutral_years))

        extra_invest3 = self._achievement_years(input, annual_investment + 36, rate, fire_number)
        items.append(make_sensitivity_item(
            "積立 +3万円/月", f"月{_number(input.monthly_investment + 3)}万円に増額",
            extra_invest3.years, neutral_years))

        higher_return = self._achievement_years(input, annual_investment, rate + 0.01, fire_number)
        items.append(make_sensitivity_item(
            "利回り +1%", f"年率{(rate + 0.01) * 100:.0f}%",
            higher_return.years, neutral_years))

        # Living cost only; insurance and pension stay as they are
        lower_annual = base_monthly_expense * 0.9 * 12 + post_fire_monthly_cost * 12
        lower_fire_number = calc_fire_number_for_strategy(lower_annual, input)
        lower_expense = self._achievement_years(input, annual_investment, rate, lower_fire_number)
        items.append(make_sensitivity_item(
            "支出 -10%", "生活費を10%削減",
            lower_expense.years, neutral_years))

        if FireStrategy.from_key(input.fire_strategy) is FireStrategy.YIELD:
            switched = input.with_changes(fire_strategy=FireStrategy.WITHDRAWAL.value)
            label = "取り崩しに変更"
            description = f"SWR {input.swr * 100:.1f}%で取り崩し"
        else:
            switched = input.with_changes(fire_strategy=FireStrategy.YIELD.value)
            label = "利回り運用に変更"
            description = f"元本維持（利回り{input.yield_rate * 100:.1f}%）"
        switched_fire_number = calc_fire_number_for_strategy(annual_expense, switched)
        switched_result = self._achievement_years(input, annual_investment, rate, switched_fire_number)
        items.append(make_sensitivity_item(label, description, switched_result.years, neutral_years))

        return items

    def resolve_monthly_expense(self, input: SimulationInput) -> float:
        """User-supplied living cost when positive, otherwise the regional estimate."""
        if input.custom_monthly_expense is not None and input.custom_monthly_expense > 0:
            return input.custom_monthly_expense
        return estimate_monthly_expense(
            self.prefectures.cost_index(input.prefecture),
            input.family_type,
            input.housing_type,
            self.assumptions
        )

    def resolve_post_fire_monthly_cost(self, input: SimulationInput) -> float:
        """User-supplied overhead when non-negative, otherwise the family-based estimate."""
        if input.post_fire_monthly_cost is not None and input.post_fire_monthly_cost >= 0:
            return input.post_fire_monthly_cost
        return estimate_post_fire_monthly_cost(input.family_type, self.assumptions)

    def calculate(self, input: SimulationInput) -> SimulationResult:
        """Calculate every scenario and the sensitivity analysis for one input.

        Args:
            input: The user's simulation input

        Returns:
            SimulationResult with display labels and pre-rounded figures
        """
        base_monthly_expense = self.resolve_monthly_expense(input)
        post_fire_monthly_cost = self.resolve_post_fire_monthly_cost(input)

        # Only meaningful when living on yield
        effective_yield_rate = None
        if FireStrategy.from_key(input.fire_strategy) is FireStrategy.YIELD:
            effective_yield_rate = calc_effective_yield_rate(input.yield_rate, input.dividend_tax_rate)

        scenarios = {
            key.value: self.calc_scenario(key, base_monthly_expense, post_fire_monthly_cost, input)
            for key in ScenarioKey
        }
        sensitivity = self.calc_sensitivity(
            base_monthly_expense,
            post_fire_monthly_cost,
            input,
            scenarios[ScenarioKey.NEUTRAL.value].achievement_years
        )

        return SimulationResult(
            input=input,
            prefecture_name=self.prefectures.name(input.prefecture),
            cost_index=self.prefectures.cost_index(input.prefecture),
            family_label=self.assumptions.family_label(input.family_type),
            housing_label=self.assumptions.housing_label(input.housing_type),
            strategy_label=self.assumptions.strategy_short_label(input.fire_strategy),
            base_monthly_expense=round_half_up(base_monthly_expense, 1),
            post_fire_monthly_cost=round_half_up(post_fire_monthly_cost, 1),
            effective_yield_rate=effective_yield_rate,
            scenarios=scenarios,
            sensitivity=sensitivity
        )


def default_calculator() -> SimulationCalculator:
    return SimulationCalculator(default_assumptions(), default_prefectures())


def run_simulation(input: SimulationInput, calculator: Optional[SimulationCalculator] = None) -> SimulationResult:
    return (calculator or default_calculator()).calculate(input)


def calc_scenario(scenario_key, base_monthly_expense: float, post_fire_monthly_cost: float,
                  input: SimulationInput, calculator: Optional[SimulationCalculator] = None) -> ScenarioResult:
    return (calculator or default_calculator()).calc_scenario(
        scenario_key, base_monthly_expense, post_fire_monthly_cost, input)


def calc_sensitivity(base_monthly_expense: float, post_fire_monthly_cost: float, input: SimulationInput,
                     neutral_years: Optional[int],
                     calculator: Optional[SimulationCalculator] = None) -> List[SensitivityItem]:
    return (calculator or default_calculator()).calc_sensitivity(
        base_monthly_expense, post_fire_monthly_cost, input, neutral_years)
