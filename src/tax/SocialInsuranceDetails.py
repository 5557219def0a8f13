import math
from typing import Optional

from model.TakeHomeResult import SocialInsuranceBreakdown
from tax.bands import load_reference, require_tax_year

REFERENCE_FILE = 'social-insurance.json'


class SocialInsuranceDetails:
    """Holds employee social insurance rates and computes premiums.

    Health insurance, employees' pension and employment insurance are each a
    flat share of gross salary, floored to the yen. The pension premium is
    capped at an annual ceiling derived from the top standard monthly wage.
    Long-term care insurance is not modelled (employee assumed under 40).
    """

    def __init__(self, ref_path: Optional[str] = None):
        """Initialize by loading rates from the reference file.

        Args:
            ref_path: Optional override for ``reference/social-insurance.json``.
        """
        data = load_reference(REFERENCE_FILE, ref_path)
        self.tax_year = require_tax_year(data, REFERENCE_FILE)
        self.health_rate = data.get("healthInsuranceRate", 0.0)
        self.pension_rate = data.get("pensionRate", 0.0)
        self.pension_cap = data.get("pensionAnnualCap", 0)
        self.employment_rate = data.get("employmentInsuranceRate", 0.0)

    def breakdown(self, gross_income: int) -> SocialInsuranceBreakdown:
        """Calculate each premium for a gross annual salary.

        Args:
            gross_income: Gross annual salary in yen.

        Returns:
            The floored health, pension and employment premiums and their sum.
        """
        health = math.floor(gross_income * self.health_rate)
        pension = min(math.floor(gross_income * self.pension_rate), self.pension_cap)
        employment = math.floor(gross_income * self.employment_rate)
        return SocialInsuranceBreakdown(
            health=health,
            pension=pension,
            employment=employment,
            total=health + pension + employment
        )

    def total_contribution(self, gross_income: int) -> int:
        return self.breakdown(gross_income).total
