"""Renderer classes for displaying FIRE simulation and take-home results.

This module contains renderer classes that handle the presentation logic
for the different reports. Simulation renderers take a SimulationResult,
take-home renderers take a TakeHomeResult or a list of them, and the
drawdown renderer takes a WithdrawalResult.
"""

import math
from abc import ABC, abstractmethod
from typing import List, Optional

from model.SimulationResult import ScenarioResult, SimulationResult, YearProjection
from model.TakeHomeResult import TakeHomeResult
from model.WithdrawalResult import WithdrawalResult
from model.field_metadata import get_short_name, wrap_header
from model.categories import IncomeType
from calc.cost_estimator import gross_to_net
from render.formatting import format_money, format_percent, format_year_diff, format_monthly, format_years, format_yen


def format_multiline_headers(columns: List[tuple], first_label: str = 'Age', first_width: int = 6) -> tuple[List[str], str]:
    """Format column headers with multi-line wrapping support.

    Args:
        columns: List of (header_text, width) tuples for each column
        first_label: Label of the leading key column
        first_width: Width of the leading key column (default 6)

    Returns:
        Tuple of (list of header lines, separator line)
    """
    # Wrap each column header
    wrapped_headers = []
    for header, width in columns:
        lines = wrap_header(header, width)
        wrapped_headers.append((lines, width))

    # Find max number of lines needed
    max_lines = max(len(lines) for lines, _ in wrapped_headers) if wrapped_headers else 1

    # Pad all headers to have the same number of lines (pad at top)
    for lines, _ in wrapped_headers:
        while len(lines) < max_lines:
            lines.insert(0, "")

    header_lines = []
    for line_idx in range(max_lines):
        if line_idx == max_lines - 1:
            header_line = f"  {first_label:<{first_width}}"
        else:
            header_line = f"  {'':<{first_width}}"

        for lines, width in wrapped_headers:
            header_line += f" {lines[line_idx]:>{width}}"
        header_lines.append(header_line)

    sep_line = f"  {'-' * first_width}"
    for _, width in wrapped_headers:
        sep_line += f" {'-' * width}"

    return header_lines, sep_line


def parse_age_range(age_range: str, projection: List[YearProjection]) -> tuple:
    """Parse an age range string into start and end ages.

    Args:
        age_range: String in format 'startAge-endAge', 'startAge-', '-endAge' or a single age
        projection: Projection used to fill in open ends

    Returns:
        Tuple of (start_age, end_age)
    """
    if '-' not in age_range:
        age = int(age_range)
        return (age, age)

    parts = age_range.split('-')
    start_age = int(parts[0]) if parts[0] else projection[0].age
    end_age = int(parts[1]) if parts[1] else projection[-1].age
    return (start_age, end_age)


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data) -> None:
        """Render the data to output."""
        pass


class SummaryRenderer(BaseRenderer):
    """Renderer for the headline simulation summary."""

    def render(self, data: SimulationResult) -> None:
        neutral = data.neutral
        print()
        print("=" * 60)
        print(f"{'FIRE SIMULATION SUMMARY':^60}")
        print("=" * 60)

        print()
        print("-" * 60)
        print("HOUSEHOLD")
        print("-" * 60)
        print(f"  {'Region:':<36} {data.prefecture_name:>20}")
        print(f"  {'Cost Index:':<36} {data.cost_index:>20.2f}")
        print(f"  {'Family:':<36} {data.family_label:>20}")
        print(f"  {'Housing:':<36} {data.housing_label:>20}")
        print(f"  {'Strategy:':<36} {data.strategy_label:>20}")
        print(f"  {'Current Age:':<36} {data.input.current_age:>20}")
        income = data.input.annual_income
        if data.input.income_type == IncomeType.NET.value:
            print(f"  {'Net Income:':<36} {format_money(income):>20}")
        else:
            print(f"  {'Gross Income:':<36} {format_money(income):>20}")
            print(f"  {'Estimated Net Income:':<36} {format_money(gross_to_net(income)):>20}")

        print()
        print("-" * 60)
        print("MONTHLY EXPENSES")
        print("-" * 60)
        print(f"  {'Living Cost:':<36} {format_monthly(data.base_monthly_expense):>20}")
        print(f"  {'Insurance + Pension after FIRE:':<36} {format_monthly(data.post_fire_monthly_cost):>20}")
        print(f"  {'-' * 36}")
        print(f"  {'Total:':<36} {format_monthly(data.total_monthly_expense):>20}")
        if data.effective_yield_rate is not None:
            print(f"  {'After-tax Yield:':<36} {format_percent(data.effective_yield_rate):>20}")

        print()
        print("=" * 60)
        print("RESULT (NEUTRAL SCENARIO)")
        print("=" * 60)
        print(f"  {'FIRE Number:':<36} {format_money(neutral.fire_number):>20}")
        age = "未達成" if neutral.achievement_age is None else f"{neutral.achievement_age}歳"
        print(f"  {'FIRE Age:':<36} {age:>20}")
        print(f"  {'Years to FIRE:':<36} {format_years(neutral.achievement_years):>20}")
        print()


class ScenarioRenderer(BaseRenderer):
    """Renderer for the optimistic / neutral / pessimistic comparison table."""

    def render(self, data: SimulationResult) -> None:
        print()
        print("=" * 80)
        print(f"{'SCENARIO COMPARISON':^80}")
        print("=" * 80)
        print()

        columns = [
            (get_short_name("fire_number"), 14),
            (get_short_name("monthly_expense"), 12),
            (get_short_name("annual_expense"), 12),
            (get_short_name("achievement_age"), 10),
            (get_short_name("achievement_years"), 10),
        ]
        header_lines, sep_line = format_multiline_headers(columns, first_label='Scenario', first_width=10)
        for line in header_lines:
            print(line)
        print(sep_line)

        for scenario in data.scenarios.values():
            age = "-" if scenario.achievement_age is None else str(scenario.achievement_age)
            years = "-" if scenario.achievement_years is None else str(scenario.achievement_years)
            print(f"  {scenario.label:<10} {format_money(scenario.fire_number):>14} "
                  f"{scenario.monthly_expense:>12.1f} {format_money(scenario.annual_expense):>12} "
                  f"{age:>10} {years:>10}")
        print()


class ProjectionRenderer(BaseRenderer):
    """Renderer for the year-by-year asset projection of one scenario."""

    def __init__(self, scenario: str = 'neutral', start_age: Optional[int] = None, end_age: Optional[int] = None):
        """Initialize with the scenario and optional age range.

        Args:
            scenario: Scenario key to display
            start_age: First age to display (defaults to the current age)
            end_age: Last age to display (defaults to the last projected age)
        """
        self.scenario = scenario
        self.start_age = start_age
        self.end_age = end_age

    def render(self, data: SimulationResult) -> None:
        if self.scenario not in data.scenarios:
            print(f"No scenario named '{self.scenario}'")
            return
        scenario: ScenarioResult = data.scenarios[self.scenario]
        projection = scenario.yearly_projection

        print()
        print("=" * 70)
        print(f"{'ASSET PROJECTION - ' + scenario.label:^70}")
        print("=" * 70)
        print()

        columns = [
            (get_short_name("year"), 6),
            (get_short_name("assets"), 16),
            (get_short_name("target"), 16),
            (get_short_name("annual_investment"), 12),
        ]
        header_lines, sep_line = format_multiline_headers(columns)
        for line in header_lines:
            print(line)
        print(sep_line)

        start = self.start_age if self.start_age is not None else projection[0].age
        end = self.end_age if self.end_age is not None else projection[-1].age
        for p in projection:
            if p.age < start or p.age > end:
                continue
            marker = "  <- FIRE" if p.year == scenario.achievement_years else ""
            print(f"  {p.age:<6} {p.year:>6} {format_money(p.assets):>16} "
                  f"{format_money(p.fire_number):>16} {format_money(p.annual_investment):>12}{marker}")

        print(sep_line)
        if scenario.achievement_years is None:
            print(f"  Not reached within {projection[-1].year} years")
        print()


class SensitivityRenderer(BaseRenderer):
    """Renderer for the what-if sensitivity analysis."""

    def render(self, data: SimulationResult) -> None:
        print()
        print("=" * 80)
        print(f"{'SENSITIVITY ANALYSIS':^80}")
        print("=" * 80)
        print()
        for item in data.sensitivity:
            print(f"  {item.label:<20} {item.description:<28} "
                  f"{format_years(item.current_years):>8} -> {format_years(item.new_years):>8}  "
                  f"{format_year_diff(item.diff)}")
        print()


class TakeHomeRenderer(BaseRenderer):
    """Renderer for a single take-home breakdown."""

    def render(self, data: TakeHomeResult) -> None:
        si = data.social_insurance
        print()
        print("=" * 60)
        print(f"{'TAKE HOME PAY':^60}")
        print("=" * 60)

        print()
        print("-" * 60)
        print("INCOME")
        print("-" * 60)
        print(f"  {'Gross Salary:':<36} {format_yen(data.gross_annual):>20}")
        print(f"  {'Employment Income Deduction:':<36} {format_yen(data.employment_deduction):>20}")
        print(f"  {'Total Income:':<36} {format_yen(data.total_income):>20}")

        print()
        print("-" * 60)
        print("SOCIAL INSURANCE")
        print("-" * 60)
        print(f"  {'Health Insurance:':<36} {format_yen(si.health):>20}")
        print(f"  {'Pension:':<36} {format_yen(si.pension):>20}")
        print(f"  {'Employment Insurance:':<36} {format_yen(si.employment):>20}")
        print(f"  {'-' * 36}")
        print(f"  {'Total Social Insurance:':<36} {format_yen(si.total):>20}")

        print()
        print("-" * 60)
        print("TAXES")
        print("-" * 60)
        print(f"  {'Income Tax:':<36} {format_yen(data.income_tax):>20}")
        print(f"  {'  incl. Reconstruction Surtax:':<36} {format_yen(data.reconstruction_surtax):>20}")
        print(f"  {'  Marginal Rate:':<36} {format_percent(data.income_tax_marginal_rate):>20}")
        print(f"  {'Resident Tax:':<36} {format_yen(data.resident_tax):>20}")

        print()
        print("=" * 60)
        print(f"  {'TOTAL DEDUCTIONS:':<36} {format_yen(data.total_deductions):>20}")
        print(f"  {'TAKE HOME (ANNUAL):':<36} {format_yen(data.take_home_annual):>20}")
        print(f"  {'TAKE HOME (MONTHLY):':<36} {format_yen(data.take_home_monthly):>20}")
        print(f"  {'TAKE HOME RATE:':<36} {data.take_home_rate:>19.1f}%")
        print("=" * 60)
        print()


class IncomeTableRenderer(BaseRenderer):
    """Renderer for take-home pay across the supported salary levels."""

    def render(self, data: List[TakeHomeResult]) -> None:
        print()
        print("=" * 96)
        print(f"{'TAKE HOME BY SALARY':^96}")
        print("=" * 96)
        print()

        columns = [
            (get_short_name("social_insurance_total"), 12),
            (get_short_name("income_tax"), 12),
            (get_short_name("resident_tax"), 12),
            (get_short_name("take_home_annual"), 14),
            (get_short_name("take_home_monthly"), 12),
            (get_short_name("take_home_rate"), 10),
        ]
        header_lines, sep_line = format_multiline_headers(columns, first_label='Gross', first_width=12)
        for line in header_lines:
            print(line)
        print(sep_line)

        for r in data:
            print(f"  {r.gross_annual:>12,} {r.social_insurance.total:>12,} {r.income_tax:>12,} "
                  f"{r.resident_tax:>12,} {r.take_home_annual:>14,} {r.take_home_monthly:>12,} "
                  f"{r.take_home_rate:>9.1f}%")
        print()


class WithdrawalRenderer(BaseRenderer):
    """Renderer for the post-FIRE drawdown table."""

    def render(self, data: WithdrawalResult) -> None:
        print()
        print("=" * 70)
        print(f"{'DRAWDOWN AFTER FIRE':^70}")
        print("=" * 70)
        print(f"  {'Starting Assets:':<36} {format_money(data.initial_assets):>20}")
        print(f"  {'Monthly Withdrawal:':<36} {format_monthly(data.monthly_withdrawal):>20}")
        rate = "∞" if math.isinf(data.effective_rate) else f"{data.effective_rate:.1f}%"
        print(f"  {'Withdrawal Rate:':<36} {rate:>20}")
        print()

        columns = [
            (get_short_name("assets"), 16),
            (get_short_name("withdrawal"), 12),
            (get_short_name("investment_return"), 12),
        ]
        header_lines, sep_line = format_multiline_headers(columns)
        for line in header_lines:
            print(line)
        print(sep_line)

        for r in data.records:
            print(f"  {r.age:<6} {format_money(r.assets):>16} "
                  f"{format_money(r.withdrawal):>12} {format_money(r.investment_return):>12}")

        print(sep_line)
        if data.depleted:
            print(f"  Assets run out at age {data.depletion_age} ({data.years_lasted} years)")
        else:
            print(f"  Assets last until age {data.max_age} ({data.years_lasted} years)")
        print()


RENDERER_REGISTRY = {
    'Summary': SummaryRenderer,
    'Scenarios': ScenarioRenderer,
    'Projection': ProjectionRenderer,
    'Sensitivity': SensitivityRenderer,
    'TakeHome': TakeHomeRenderer,
    'IncomeTable': IncomeTableRenderer,
    'Withdrawal': WithdrawalRenderer,
}
