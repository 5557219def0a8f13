"""FIRE Planner Tools for MCP Server.

This module provides the tool implementations that wrap the FIRE simulation
and take-home calculators and expose their data through MCP.
"""

import math
import os
import sys
import json
from dataclasses import asdict
from typing import Any, Dict, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from model.SimulationInput import SimulationInput
from model.SimulationResult import ScenarioResult, SimulationResult
from model.TakeHomeResult import TakeHomeResult
from model.WithdrawalResult import WithdrawalResult
from model.categories import FamilyPattern, IncomeType, ScenarioKey, get_family_pattern_label
from model.input_codec import input_from_query, input_from_spec, input_to_params, input_to_spec
from calc.assumptions import FireAssumptions
from calc.prefectures import PrefectureDirectory
from calc.simulation_calculator import SimulationCalculator
from calc.cost_estimator import gross_to_net
from calc.rounding import round_half_up
from calc.take_home import TakeHomeCalculator
from calc.withdrawal_calculator import (
    DEFAULT_ANNUAL_RETURN,
    DEFAULT_INFLATION_RATE,
    DEFAULT_START_AGE,
    MAX_AGE,
    calc_withdrawal,
    withdrawal_after_fire,
)
from tax.IncomeTaxDetails import IncomeTaxDetails
from tax.ResidentTaxDetails import ResidentTaxDetails
from tax.SocialInsuranceDetails import SocialInsuranceDetails


def _finite(value: Optional[float]) -> Optional[float]:
    """JSON has no infinity; an unreachable target is reported as null."""
    if value is None or math.isinf(value):
        return None
    return value


def scenario_to_dict(scenario: ScenarioResult) -> dict:
    return {
        "label": scenario.label,
        "fire_number": _finite(scenario.fire_number),
        "monthly_expense": scenario.monthly_expense,
        "annual_expense": scenario.annual_expense,
        "achievement_age": scenario.achievement_age,
        "achievement_years": scenario.achievement_years,
        "achieved": scenario.achievement_years is not None
    }


def take_home_to_dict(result: TakeHomeResult) -> dict:
    return asdict(result)


def withdrawal_to_dict(result: WithdrawalResult) -> dict:
    data = asdict(result)
    data["effective_rate"] = _finite(round_half_up(result.effective_rate, 2))
    data["depleted"] = result.depleted
    return data


def load_calculators(base_path: str) -> tuple:
    """Build simulation and take-home calculators from ``<base_path>/reference``."""
    ref_dir = os.path.join(base_path, 'reference')
    assumptions = FireAssumptions.load(os.path.join(ref_dir, 'fire-assumptions.json'))
    prefectures = PrefectureDirectory(os.path.join(ref_dir, 'prefectures.json'))
    take_home = TakeHomeCalculator(
        IncomeTaxDetails(os.path.join(ref_dir, 'income-tax-details.json')),
        ResidentTaxDetails(os.path.join(ref_dir, 'resident-tax-details.json')),
        SocialInsuranceDetails(os.path.join(ref_dir, 'social-insurance.json'))
    )
    return SimulationCalculator(assumptions, prefectures), take_home


def summarize_result(result: SimulationResult) -> dict:
    """Household, expense and neutral-scenario headline for one simulation."""
    sim_input = result.input
    neutral = result.neutral
    return {
        "household": {
            "prefecture": sim_input.prefecture,
            "prefecture_name": result.prefecture_name,
            "cost_index": result.cost_index,
            "family": result.family_label,
            "housing": result.housing_label,
            "strategy": result.strategy_label,
            "current_age": sim_input.current_age,
            "target_age": sim_input.target_age
        },
        "income": {
            "annual_income": sim_input.annual_income,
            "income_type": sim_input.income_type,
            "estimated_net_income": round_half_up(gross_to_net(sim_input.annual_income), 1)
            if sim_input.income_type != IncomeType.NET.value else sim_input.annual_income
        },
        "monthly_expenses": {
            "living_cost": result.base_monthly_expense,
            "post_fire_insurance_and_pension": result.post_fire_monthly_cost,
            "total": result.total_monthly_expense
        },
        "effective_yield_rate": result.effective_yield_rate,
        "neutral": scenario_to_dict(neutral),
        "share_query": input_to_params(sim_input)
    }


class FirePlannerTools:
    """Tools that wrap the FIRE simulation of one program for MCP access."""

    def __init__(self, base_path: str, program_name: str,
                 calculator: Optional[SimulationCalculator] = None):
        """Initialize with paths and run the simulation.

        Args:
            base_path: Path to the fire-planner root directory
            program_name: Name of the program folder in input-parameters
            calculator: Optional pre-built calculator shared across programs
        """
        self.base_path = base_path
        self.program_name = program_name
        self.spec = self._load_spec()
        if calculator is None:
            calculator, _ = load_calculators(base_path)
        self.calculator = calculator
        self.input: SimulationInput = input_from_spec(self.spec, calculator.assumptions.defaults)
        self.result: SimulationResult = calculator.calculate(self.input)

    def _load_spec(self) -> dict:
        """Load the program spec.json."""
        spec_path = os.path.join(
            self.base_path, 'input-parameters', self.program_name, 'spec.json'
        )
        with open(spec_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def get_program_overview(self) -> dict:
        """Get an overview of the program's household and headline result."""
        overview = {"program_name": self.program_name, "input": input_to_spec(self.input)}
        overview.update(summarize_result(self.result))
        return overview

    def get_scenarios(self) -> dict:
        """Compare the optimistic, neutral and pessimistic scenarios."""
        return {
            "scenarios": {key: scenario_to_dict(s) for key, s in self.result.scenarios.items()}
        }

    def get_projection(self, scenario: str = 'neutral',
                       start_age: Optional[int] = None, end_age: Optional[int] = None) -> dict:
        """Year-by-year projection for one scenario, optionally limited to an age range."""
        if ScenarioKey.from_key(scenario) is None:
            return {"error": f"Unknown scenario '{scenario}'. Available: {[k.value for k in ScenarioKey]}"}
        result = self.result.scenarios[scenario]
        rows = []
        for p in result.yearly_projection:
            if start_age is not None and p.age < start_age:
                continue
            if end_age is not None and p.age > end_age:
                continue
            row = asdict(p)
            row["fire_number"] = _finite(p.fire_number)
            row["achieved"] = p.year == result.achievement_years
            rows.append(row)
        return {
            "scenario": scenario,
            "label": result.label,
            "achievement_age": result.achievement_age,
            "achievement_years": result.achievement_years,
            "projection": rows
        }

    def get_sensitivity(self) -> dict:
        """What-if comparisons against the neutral scenario."""
        return {
            "neutral_years": self.result.neutral.achievement_years,
            "items": [asdict(item) for item in self.result.sensitivity]
        }

    def get_withdrawal(self, max_age: int = MAX_AGE) -> dict:
        """Drawdown starting at the neutral FIRE age with the assets held then."""
        drawdown = withdrawal_after_fire(self.result, max_age)
        if drawdown is None:
            return {
                "achieved": False,
                "message": "FIRE is not reached in the neutral scenario; there is no drawdown to simulate."
            }
        data = withdrawal_to_dict(drawdown)
        data["achieved"] = True
        return data


class MultiProgramTools:
    """Manager for multiple FIRE programs.

    Discovers all available programs and caches their simulations,
    allowing queries to specify which program to use.
    """

    def __init__(self, base_path: str, default_program: Optional[str] = None):
        """Initialize and discover all available programs.

        Args:
            base_path: Path to the fire-planner root directory
            default_program: Default program to use when none specified
        """
        self.base_path = base_path
        self.programs: Dict[str, FirePlannerTools] = {}
        self.default_program = default_program
        self.calculator, self.take_home_calculator = load_calculators(base_path)
        self._discover_programs()

    def _discover_programs(self):
        """Discover and load all available programs."""
        input_params_path = os.path.join(self.base_path, 'input-parameters')

        if not os.path.exists(input_params_path):
            return

        for name in sorted(os.listdir(input_params_path)):
            program_dir = os.path.join(input_params_path, name)
            spec_path = os.path.join(program_dir, 'spec.json')

            if os.path.isdir(program_dir) and os.path.exists(spec_path):
                try:
                    self.programs[name] = FirePlannerTools(self.base_path, name, self.calculator)
                except (OSError, ValueError) as e:
                    print(f"Warning: Failed to load program '{name}': {e}", file=sys.stderr)

        if self.default_program is None and self.programs:
            self.default_program = list(self.programs.keys())[0]

    def _get_program(self, program: Optional[str] = None) -> FirePlannerTools:
        """Get the specified program or default."""
        program_name = program or self.default_program

        if program_name not in self.programs:
            available = list(self.programs.keys())
            raise ValueError(
                f"Program '{program_name}' not found. Available programs: {available}"
            )

        return self.programs[program_name]

    def _with_program(self, result: dict, program: Optional[str]) -> dict:
        result["program"] = program or self.default_program
        return result

    def list_programs(self) -> dict:
        """List all available programs."""
        programs_info = {}
        for name, tools in self.programs.items():
            programs_info[name] = {
                "prefecture": tools.result.prefecture_name,
                "family": tools.result.family_label,
                "current_age": tools.input.current_age,
                "fire_age": tools.result.neutral.achievement_age
            }

        return {
            "available_programs": list(self.programs.keys()),
            "default_program": self.default_program,
            "programs_info": programs_info
        }

    def reload_programs(self) -> dict:
        """Reload all programs from disk, refreshing the cache.

        Reference files are re-read too, so edits to the assumptions or tax
        tables are picked up without restarting the server.
        """
        old_programs = set(self.programs.keys())

        self.programs.clear()
        self.calculator, self.take_home_calculator = load_calculators(self.base_path)
        self._discover_programs()

        new_programs = set(self.programs.keys())

        return {
            "status": "success",
            "message": f"Reloaded {len(self.programs)} programs",
            "programs_loaded": list(self.programs.keys()),
            "default_program": self.default_program,
            "changes": {
                "added": sorted(new_programs - old_programs),
                "removed": sorted(old_programs - new_programs),
                "reloaded": sorted(old_programs & new_programs)
            }
        }

    def get_program_overview(self, program: Optional[str] = None) -> dict:
        """Get an overview of the specified program."""
        return self._with_program(self._get_program(program).get_program_overview(), program)

    def get_scenarios(self, program: Optional[str] = None) -> dict:
        return self._with_program(self._get_program(program).get_scenarios(), program)

    def get_projection(self, scenario: str = 'neutral', start_age: Optional[int] = None,
                       end_age: Optional[int] = None, program: Optional[str] = None) -> dict:
        result = self._get_program(program).get_projection(scenario, start_age, end_age)
        return self._with_program(result, program)

    def get_sensitivity(self, program: Optional[str] = None) -> dict:
        return self._with_program(self._get_program(program).get_sensitivity(), program)

    def get_withdrawal(self, program: Optional[str] = None, initial_assets: Optional[float] = None,
                       monthly_withdrawal: Optional[float] = None, annual_return: Optional[float] = None,
                       inflation_rate: Optional[float] = None, start_age: Optional[int] = None,
                       max_age: int = MAX_AGE) -> dict:
        """Simulate drawing down assets after FIRE.

        With ``initial_assets`` and ``monthly_withdrawal`` the drawdown is run
        directly; otherwise it follows the program's neutral FIRE date.
        """
        if initial_assets is None and monthly_withdrawal is None:
            return self._with_program(self._get_program(program).get_withdrawal(max_age), program)
        if initial_assets is None or monthly_withdrawal is None:
            return {"error": "initial_assets and monthly_withdrawal must be given together"}
        drawdown = calc_withdrawal(
            initial_assets,
            monthly_withdrawal,
            DEFAULT_ANNUAL_RETURN if annual_return is None else annual_return,
            DEFAULT_INFLATION_RATE if inflation_rate is None else inflation_rate,
            DEFAULT_START_AGE if start_age is None else start_age,
            max_age
        )
        return withdrawal_to_dict(drawdown)

    def simulate_query(self, query: str) -> dict:
        """Run an ad-hoc simulation from a shareable query string.

        Args:
            query: URL query such as 'pref=osaka&income=600&assets=500'
        """
        sim_input = input_from_query(query, self.calculator.assumptions.defaults)
        result = self.calculator.calculate(sim_input)
        summary = summarize_result(result)
        summary["scenarios"] = {key: scenario_to_dict(s) for key, s in result.scenarios.items()}
        summary["sensitivity"] = [asdict(item) for item in result.sensitivity]
        return summary

    def get_take_home(self, gross_annual: int, family: str = FamilyPattern.SINGLE.value) -> dict:
        """Take-home breakdown for an annual gross salary in yen."""
        pattern = FamilyPattern.from_key(family)
        if pattern is None:
            return {"error": f"Unknown family pattern '{family}'. Available: {[p.value for p in FamilyPattern]}"}
        result = self.take_home_calculator.calculate(gross_annual, pattern)
        data = take_home_to_dict(result)
        data["family"] = pattern.value
        data["family_label"] = get_family_pattern_label(pattern)
        return data

    def get_income_table(self, family: str = FamilyPattern.SINGLE.value) -> dict:
        """Take-home pay at every supported salary level."""
        pattern = FamilyPattern.from_key(family)
        if pattern is None:
            return {"error": f"Unknown family pattern '{family}'. Available: {[p.value for p in FamilyPattern]}"}
        rows = self.take_home_calculator.income_table(pattern)
        return {
            "family": pattern.value,
            "family_label": get_family_pattern_label(pattern),
            "rows": [
                {
                    "gross_annual": r.gross_annual,
                    "social_insurance": r.social_insurance.total,
                    "income_tax": r.income_tax,
                    "resident_tax": r.resident_tax,
                    "take_home_annual": r.take_home_annual,
                    "take_home_monthly": r.take_home_monthly,
                    "take_home_rate": r.take_home_rate
                }
                for r in rows
            ]
        }

    def list_prefectures(self, region: Optional[str] = None) -> dict:
        """List prefectures with their cost-of-living index, optionally for one region."""
        directory = self.calculator.prefectures
        prefectures = directory.all()
        if region is not None:
            prefectures = directory.by_region().get(region)
            if prefectures is None:
                return {"error": f"Unknown region '{region}'. Available: {list(directory.by_region().keys())}"}
        return {
            "count": len(prefectures),
            "prefectures": [asdict(p) for p in prefectures]
        }

    def compare_programs(self, program1: str, program2: str) -> dict:
        """Compare the neutral outcome of two programs and say which reaches FIRE sooner.

        Args:
            program1: First program name to compare
            program2: Second program name to compare
        """
        if program1 not in self.programs:
            return {"error": f"Program '{program1}' not found. Available: {list(self.programs.keys())}"}
        if program2 not in self.programs:
            return {"error": f"Program '{program2}' not found. Available: {list(self.programs.keys())}"}

        result1 = self.programs[program1].result
        result2 = self.programs[program2].result

        def compare_metric(val1: Optional[float], val2: Optional[float], lower_is_better: bool = True) -> dict:
            """Compare a metric; None means unreachable and always loses."""
            if val1 is None and val2 is None:
                winner = "tie"
            elif val1 is None:
                winner = program2
            elif val2 is None:
                winner = program1
            elif val1 == val2:
                winner = "tie"
            elif (val1 < val2) == lower_is_better:
                winner = program1
            else:
                winner = program2
            diff = val2 - val1 if val1 is not None and val2 is not None else None
            return {
                program1: val1,
                program2: val2,
                "difference": diff,
                "better": winner,
                "lower_is_better": lower_is_better
            }

        metrics: Dict[str, Any] = {
            "fire_number": compare_metric(_finite(result1.neutral.fire_number), _finite(result2.neutral.fire_number)),
            "monthly_expense": compare_metric(result1.total_monthly_expense, result2.total_monthly_expense),
            "achievement_years": compare_metric(result1.neutral.achievement_years,
                                                result2.neutral.achievement_years),
            "pessimistic_achievement_years": compare_metric(result1.pessimistic.achievement_years,
                                                            result2.pessimistic.achievement_years),
        }

        wins = {program1: 0, program2: 0, "tie": 0}
        for metric in metrics.values():
            wins[metric["better"]] += 1

        sooner = metrics["achievement_years"]["better"]
        if sooner == "tie":
            recommendation = "Both programs reach FIRE at the same time in the neutral scenario."
        else:
            diff = metrics["achievement_years"]["difference"]
            if diff is None:
                recommendation = f"Only '{sooner}' reaches FIRE within the simulation horizon."
            else:
                recommendation = f"'{sooner}' reaches FIRE {abs(diff)} years sooner in the neutral scenario."

        return {
            "metrics": metrics,
            "summary": {
                "metrics_compared": len(metrics),
                "wins": {program1: wins[program1], program2: wins[program2], "tied": wins["tie"]}
            },
            "recommendation": recommendation
        }
