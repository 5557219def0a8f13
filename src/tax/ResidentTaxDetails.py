import math
from typing import Optional

from model.categories import FamilyPattern
from tax.bands import load_reference, require_tax_year, validate_bands, band_amount

REFERENCE_FILE = 'resident-tax-details.json'


class ResidentTaxDetails:
    """Local resident tax: a flat income-based levy plus fixed per-capita levies.

    The resident tax uses its own basic, spouse and dependent deduction
    amounts, which are lower than the income tax ones, so taxable income is
    tracked separately from the income tax track.
    """

    def __init__(self, ref_path: Optional[str] = None):
        data = load_reference(REFERENCE_FILE, ref_path)
        self.tax_year = require_tax_year(data, REFERENCE_FILE)
        self.rate = data.get("rate", 0.0)
        self.per_capita_levy = data.get("perCapitaLevy", 0)
        self.forest_environment_levy = data.get("forestEnvironmentLevy", 0)

        self.basic_deduction_bands = data.get("basicDeduction", [])
        validate_bands(self.basic_deduction_bands, REFERENCE_FILE, "basicDeduction")
        self.spouse_deduction_bands = data.get("spouseDeduction", [])
        validate_bands(self.spouse_deduction_bands, REFERENCE_FILE, "spouseDeduction")
        self.dependent_deduction = data.get("dependentDeduction", 0)

    @property
    def fixed_levy(self) -> int:
        return self.per_capita_levy + self.forest_environment_levy

    def basicDeduction(self, total_income: int) -> int:
        return band_amount(self.basic_deduction_bands, total_income)

    def familyDeduction(self, pattern: FamilyPattern, total_income: int) -> int:
        spouse = band_amount(self.spouse_deduction_bands, total_income) if pattern.has_spouse else 0
        return spouse + self.dependent_deduction * pattern.dependents

    def taxBurden(self, taxable_income: int) -> int:
        """Income-based portion plus fixed levies; nothing is owed on non-positive taxable income."""
        if taxable_income <= 0:
            return 0
        return math.floor(taxable_income * self.rate) + self.fixed_levy
