import math
from typing import Optional

from model.IncomeTaxResult import IncomeTaxResult
from model.categories import FamilyPattern
from tax.bands import load_reference, require_tax_year, validate_bands, band_amount

REFERENCE_FILE = 'income-tax-details.json'


class IncomeTaxDetails:
    """National income tax rules for salaried employees, single tax year.

    Loads ``reference/income-tax-details.json``: the employment income
    deduction schedule, the basic deduction, the spouse and dependent
    deductions, the progressive brackets and the reconstruction surtax.
    The employment income deduction is shared with the resident tax, so it
    lives here and is reused by the take-home calculator for both tracks.
    """

    def __init__(self, ref_path: Optional[str] = None):
        data = load_reference(REFERENCE_FILE, ref_path)
        self.tax_year = require_tax_year(data, REFERENCE_FILE)

        employment = data.get("employmentDeduction")
        if not employment:
            raise ValueError(f"{REFERENCE_FILE} must contain an 'employmentDeduction' section")
        self.employment_minimum = employment["minimum"]
        self.employment_minimum_up_to = employment["minimumUpTo"]
        self.employment_maximum = employment["maximum"]
        self.employment_bands = employment.get("bands", [])
        validate_bands(self.employment_bands, REFERENCE_FILE, "employmentDeduction.bands")

        self.basic_deduction_bands = data.get("basicDeduction", [])
        validate_bands(self.basic_deduction_bands, REFERENCE_FILE, "basicDeduction")

        self.spouse_deduction_bands = data.get("spouseDeduction", [])
        validate_bands(self.spouse_deduction_bands, REFERENCE_FILE, "spouseDeduction")
        self.dependent_deduction = data.get("dependentDeduction", 0)

        brackets = []
        for b in data.get("brackets", []):
            rate = b["rate"]
            if rate > 1:
                rate = rate / 100.0
            brackets.append({
                "maxIncome": b["maxIncome"],
                "rate": rate,
                "subtraction": b["subtraction"]
            })
        validate_bands(brackets, REFERENCE_FILE, "brackets", open_ended=True)
        self.brackets = brackets

        self.surtax_rate = data.get("reconstructionSurtax", 0.0)

    def employmentDeduction(self, gross: int) -> int:
        """Employment income deduction for a gross salary (yen).

        Each band computes ``floor(gross * rate) + adjustment``. Salaries up to
        ``minimumUpTo`` get the fixed minimum and those above the last band get
        the fixed maximum.
        """
        if gross <= self.employment_minimum_up_to:
            return self.employment_minimum
        for band in self.employment_bands:
            if gross <= band["maxIncome"]:
                return math.floor(gross * band["rate"]) + band["adjustment"]
        return self.employment_maximum

    def basicDeduction(self, total_income: int) -> int:
        return band_amount(self.basic_deduction_bands, total_income)

    def familyDeduction(self, pattern: FamilyPattern, total_income: int) -> int:
        """Spouse deduction (income tested on the filer) plus dependent deduction."""
        spouse = band_amount(self.spouse_deduction_bands, total_income) if pattern.has_spouse else 0
        return spouse + self.dependent_deduction * pattern.dependents

    def taxBurden(self, taxable_income: int) -> IncomeTaxResult:
        """
        Returns an IncomeTaxResult for the given taxable income, including the
        reconstruction surtax. Non-positive taxable income owes nothing.
        """
        if taxable_income <= 0:
            return IncomeTaxResult(totalIncomeTax=0, marginalBracket=0.0)
        for b in self.brackets:
            if b["maxIncome"] is None or taxable_income <= b["maxIncome"]:
                base_tax = taxable_income * b["rate"] - b["subtraction"]
                total = math.floor(base_tax * (1 + self.surtax_rate))
                return IncomeTaxResult(
                    totalIncomeTax=total,
                    marginalBracket=b["rate"],
                    reconstructionSurtax=total - math.floor(base_tax)
                )
        # Should not reach here
        raise ValueError("Income exceeds all bracket definitions.")
