"""Input value objects for the FIRE simulation.

Monetary amounts are in man-yen (10,000 JPY). Every rate is a fraction,
so 0.04 means 4%.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class SimulationDefaults:
    """Fallback values for any input the user did not supply.

    Built once from the ``defaults`` section of
    ``reference/fire-assumptions.json`` and passed explicitly to the code that
    needs it (the query codec, spec loading, the CLI).
    """
    annual_return_rate: float = 0.04
    swr: float = 0.04
    inflation_rate: float = 0.02
    yield_rate: float = 0.03
    dividend_tax_rate: float = 0.20
    fire_strategy: str = "withdrawal"
    current_age: int = 30
    target_age: int = 50
    annual_income: float = 500
    current_assets: float = 300
    monthly_investment: float = 10
    prefecture: str = "tokyo"
    family_type: str = "single"
    housing_type: str = "rent"
    income_type: str = "gross"

    def to_input(self) -> 'SimulationInput':
        """Return a SimulationInput populated entirely from defaults."""
        return SimulationInput(
            prefecture=self.prefecture,
            annual_income=self.annual_income,
            income_type=self.income_type,
            current_assets=self.current_assets,
            monthly_investment=self.monthly_investment,
            family_type=self.family_type,
            housing_type=self.housing_type,
            current_age=self.current_age,
            annual_return_rate=self.annual_return_rate,
            swr=self.swr,
            inflation_rate=self.inflation_rate,
            fire_strategy=self.fire_strategy,
            yield_rate=self.yield_rate,
            dividend_tax_rate=self.dividend_tax_rate,
        )


@dataclass(frozen=True)
class SimulationInput:
    prefecture: str
    annual_income: float
    income_type: str  # "gross" or "net"; not consumed by the projection
    current_assets: float
    monthly_investment: float
    family_type: str
    housing_type: str
    current_age: int
    annual_return_rate: float
    swr: float
    inflation_rate: float
    fire_strategy: str  # "withdrawal" or "yield"
    yield_rate: float  # gross yield before dividend tax
    dividend_tax_rate: float
    target_age: Optional[int] = None
    custom_monthly_expense: Optional[float] = None
    post_fire_monthly_cost: Optional[float] = None

    @property
    def annual_investment(self) -> float:
        return self.monthly_investment * 12

    def with_changes(self, **changes) -> 'SimulationInput':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
