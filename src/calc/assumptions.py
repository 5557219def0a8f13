"""Modelling assumptions for the FIRE simulation.

Everything the cost and overhead estimators, the scenario engine and the
input codec need is read from ``reference/fire-assumptions.json`` into a
single immutable ``FireAssumptions`` object. Build it once and pass it to the
calculators explicitly.

Unknown family, housing and strategy keys never raise. They fall back to a
coefficient of 1.0, the single-person insurance figure, or the raw key as
the display label.
"""

import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional

from model.SimulationInput import SimulationDefaults
from model.categories import FamilyType, HousingType, FireStrategy, ScenarioKey

REFERENCE_FILE = 'fire-assumptions.json'


@dataclass(frozen=True)
class Coefficient:
    label: str
    coefficient: float


@dataclass(frozen=True)
class StrategyInfo:
    label: str
    short_label: str
    description: str


@dataclass(frozen=True)
class ScenarioProfile:
    label: str
    return_rate_adjust: float
    expense_adjust: float
    color: str


# Maps camelCase keys in the reference "defaults" section to SimulationDefaults fields.
_DEFAULT_KEYS = {
    "annualReturnRate": "annual_return_rate",
    "swr": "swr",
    "inflationRate": "inflation_rate",
    "yieldRate": "yield_rate",
    "dividendTaxRate": "dividend_tax_rate",
    "fireStrategy": "fire_strategy",
    "currentAge": "current_age",
    "targetAge": "target_age",
    "annualIncome": "annual_income",
    "currentAssets": "current_assets",
    "monthlyInvestment": "monthly_investment",
    "prefecture": "prefecture",
    "familyType": "family_type",
    "housingType": "housing_type",
    "incomeType": "income_type",
}


@dataclass(frozen=True)
class FireAssumptions:
    base_monthly_cost: float
    family: Dict[FamilyType, Coefficient]
    housing: Dict[HousingType, Coefficient]
    health_insurance: Dict[FamilyType, float]
    pension_per_person: float
    strategies: Dict[FireStrategy, StrategyInfo]
    scenarios: Dict[ScenarioKey, ScenarioProfile]
    max_simulation_years: int = 80
    defaults: SimulationDefaults = field(default_factory=SimulationDefaults)

    @classmethod
    def load(cls, ref_path: Optional[str] = None) -> 'FireAssumptions':
        path = ref_path or os.path.normpath(
            os.path.join(os.path.dirname(__file__), '..', '..', 'reference', REFERENCE_FILE))
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'FireAssumptions':
        family_data = data.get("familyTypes", {})
        missing = [k.value for k in FamilyType if k.value not in family_data]
        if missing:
            raise ValueError(f"{REFERENCE_FILE} 'familyTypes' is missing entries for {missing}")
        family = {}
        health = {}
        for key, entry in family_data.items():
            member = _require_member(FamilyType, key, "familyTypes")
            family[member] = Coefficient(entry["label"], entry["coefficient"])
            health[member] = entry["healthInsurance"]

        housing = {}
        for key, entry in data.get("housingTypes", {}).items():
            housing[_require_member(HousingType, key, "housingTypes")] = Coefficient(
                entry["label"], entry["coefficient"])

        strategies = {}
        for key, entry in data.get("fireStrategies", {}).items():
            strategies[_require_member(FireStrategy, key, "fireStrategies")] = StrategyInfo(
                entry["label"], entry["shortLabel"], entry.get("description", ""))

        scenarios = {}
        for key, entry in data.get("scenarios", {}).items():
            scenarios[_require_member(ScenarioKey, key, "scenarios")] = ScenarioProfile(
                label=entry["label"],
                return_rate_adjust=entry["returnRateAdjust"],
                expense_adjust=entry["expenseAdjust"],
                color=entry["color"]
            )
        if set(scenarios) != set(ScenarioKey):
            raise ValueError(f"{REFERENCE_FILE} 'scenarios' must define exactly {[k.value for k in ScenarioKey]}")

        defaults_data = data.get("defaults", {})
        overrides = {_DEFAULT_KEYS[k]: v for k, v in defaults_data.items() if k in _DEFAULT_KEYS}

        return cls(
            base_monthly_cost=data["baseMonthlyCost"],
            family=family,
            housing=housing,
            health_insurance=health,
            pension_per_person=data.get("postFireInsurance", {}).get("nationalPensionPerPerson", 0.0),
            strategies=strategies,
            scenarios=scenarios,
            max_simulation_years=data.get("maxSimulationYears", 80),
            defaults=SimulationDefaults(**overrides)
        )

    def family_coefficient(self, family_key: str) -> float:
        entry = self.family.get(FamilyType.from_key(family_key))
        return entry.coefficient if entry else 1.0

    def housing_coefficient(self, housing_key: str) -> float:
        entry = self.housing.get(HousingType.from_key(housing_key))
        return entry.coefficient if entry else 1.0

    def family_label(self, family_key: str) -> str:
        entry = self.family.get(FamilyType.from_key(family_key))
        return entry.label if entry else family_key

    def housing_label(self, housing_key: str) -> str:
        entry = self.housing.get(HousingType.from_key(housing_key))
        return entry.label if entry else housing_key

    def monthly_health_insurance(self, family_key: str) -> float:
        member = FamilyType.from_key(family_key)
        if member not in self.health_insurance:
            member = FamilyType.SINGLE
        return self.health_insurance[member]

    def strategy_short_label(self, strategy_key: str) -> str:
        info = self.strategies.get(FireStrategy.from_key(strategy_key))
        if info is None:
            info = self.strategies.get(FireStrategy.WITHDRAWAL)
        return info.short_label if info else "取り崩し"

    def scenario(self, key) -> ScenarioProfile:
        member = ScenarioKey.from_key(key)
        if member is None:
            raise ValueError(f"Unknown scenario '{key}'. Expected one of {[k.value for k in ScenarioKey]}")
        return self.scenarios[member]


def _require_member(enum_cls, key: str, section: str):
    member = enum_cls.from_key(key)
    if member is None:
        raise ValueError(f"{REFERENCE_FILE} '{section}' has an unknown key '{key}'")
    return member


@lru_cache(maxsize=1)
def default_assumptions() -> FireAssumptions:
    """Assumptions loaded from the bundled reference file, built once."""
    return FireAssumptions.load()
