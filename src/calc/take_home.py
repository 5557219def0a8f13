"""Take-home pay for a Japanese salaried employee.

Simplified for the 2026 tax year: salary income only, employee under 40 (no
long-term care premium), association-managed health insurance at the
national average rate, no bonus split (annual salary paid in 12 equal parts).
"""

from functools import lru_cache
from typing import List, Optional, Union

from model.TakeHomeResult import TakeHomeResult
from model.categories import FamilyPattern
from tax.IncomeTaxDetails import IncomeTaxDetails
from tax.ResidentTaxDetails import ResidentTaxDetails
from tax.SocialInsuranceDetails import SocialInsuranceDetails
from calc.rounding import round_half_up


# Gross salaries (man-yen) that get their own take-home page.
INCOME_LEVELS = (
    200, 250, 300, 350, 400, 450, 500, 550, 600, 650, 700, 750, 800, 850, 900,
    950, 1000, 1100, 1200, 1300, 1400, 1500, 2000,
)

YEN_PER_MAN = 10_000


class TakeHomeCalculator:
    """Calculator that computes take-home pay using injected detail providers.

    Pass hydrated instances of `IncomeTaxDetails`, `ResidentTaxDetails` and
    `SocialInsuranceDetails` into the constructor. This keeps file I/O in the
    caller and makes the calculation logic easy to unit test.
    """

    def __init__(self, income_tax: IncomeTaxDetails, resident_tax: ResidentTaxDetails,
                 social_insurance: SocialInsuranceDetails):
        self.income_tax = income_tax
        self.resident_tax = resident_tax
        self.social_insurance = social_insurance

    def calculate(self, gross_annual: int, family: Union[FamilyPattern, str] = FamilyPattern.SINGLE) -> TakeHomeResult:
        if gross_annual <= 0:
            raise ValueError(f"Gross annual income must be positive, got {gross_annual}")
        pattern = FamilyPattern.from_key(family) or FamilyPattern.SINGLE

        employment_deduction = self.income_tax.employmentDeduction(gross_annual)
        total_income = gross_annual - employment_deduction

        si = self.social_insurance.breakdown(gross_annual)

        # Spouse deduction shrinks with the filer's total income; dependent deduction does not
        family_deduction_it = self.income_tax.familyDeduction(pattern, total_income)
        family_deduction_rt = self.resident_tax.familyDeduction(pattern, total_income)

        taxable_it = max(
            0,
            total_income - self.income_tax.basicDeduction(total_income) - si.total - family_deduction_it
        )
        taxable_rt = max(
            0,
            total_income - self.resident_tax.basicDeduction(total_income) - si.total - family_deduction_rt
        )

        income_tax_result = self.income_tax.taxBurden(taxable_it)
        income_tax = income_tax_result.totalIncomeTax
        resident_tax = self.resident_tax.taxBurden(taxable_rt)
        total_deductions = si.total + income_tax + resident_tax
        take_home_annual = gross_annual - total_deductions

        return TakeHomeResult(
            gross_annual=gross_annual,
            employment_deduction=employment_deduction,
            total_income=total_income,
            social_insurance=si,
            income_tax=income_tax,
            income_tax_marginal_rate=income_tax_result.marginalBracket,
            reconstruction_surtax=income_tax_result.reconstructionSurtax,
            resident_tax=resident_tax,
            total_deductions=total_deductions,
            take_home_annual=take_home_annual,
            take_home_monthly=int(round_half_up(take_home_annual / 12)),
            take_home_rate=round_half_up(take_home_annual / gross_annual * 100, 1)
        )

    def income_table(self, family: Union[FamilyPattern, str] = FamilyPattern.SINGLE) -> List[TakeHomeResult]:
        """Take-home results for every supported income level."""
        return [self.calculate(level * YEN_PER_MAN, family) for level in INCOME_LEVELS]


@lru_cache(maxsize=1)
def default_calculator() -> TakeHomeCalculator:
    """Calculator hydrated from the bundled reference files, built once."""
    return TakeHomeCalculator(IncomeTaxDetails(), ResidentTaxDetails(), SocialInsuranceDetails())


def calc_take_home(gross_annual_yen: int, family: Union[FamilyPattern, str] = FamilyPattern.SINGLE,
                   calculator: Optional[TakeHomeCalculator] = None) -> TakeHomeResult:
    return (calculator or default_calculator()).calculate(gross_annual_yen, family)


def build_income_table(family: Union[FamilyPattern, str] = FamilyPattern.SINGLE,
                       calculator: Optional[TakeHomeCalculator] = None) -> List[TakeHomeResult]:
    return (calculator or default_calculator()).income_table(family)
