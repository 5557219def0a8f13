import unittest
import os
import sys
import math
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.IncomeTaxDetails import IncomeTaxDetails
from model.categories import FamilyPattern


class TestIncomeTaxDetails(unittest.TestCase):
    def setUp(self):
        self.it = IncomeTaxDetails()

    def test_tax_year(self):
        self.assertEqual(self.it.tax_year, 2026)

    def test_brackets_loaded_as_fractions(self):
        # Percent rates in the reference file become fractions
        self.assertEqual(len(self.it.brackets), 7)
        self.assertAlmostEqual(self.it.brackets[0]["rate"], 0.05)
        self.assertAlmostEqual(self.it.brackets[-1]["rate"], 0.45)
        self.assertIsNone(self.it.brackets[-1]["maxIncome"])

    def test_employment_deduction_minimum(self):
        self.assertEqual(self.it.employmentDeduction(1_000_000), 550_000)
        self.assertEqual(self.it.employmentDeduction(1_625_000), 550_000)

    def test_employment_deduction_bands(self):
        # 1.7M: 40% - 100,000
        self.assertEqual(self.it.employmentDeduction(1_700_000), 580_000)
        # 5M: 20% + 440,000
        self.assertEqual(self.it.employmentDeduction(5_000_000), 1_440_000)

    def test_employment_deduction_maximum(self):
        self.assertEqual(self.it.employmentDeduction(8_500_001), 1_950_000)
        self.assertEqual(self.it.employmentDeduction(20_000_000), 1_950_000)

    def test_basic_deduction_tapers(self):
        self.assertEqual(self.it.basicDeduction(3_560_000), 480_000)
        self.assertEqual(self.it.basicDeduction(24_000_000), 480_000)
        self.assertEqual(self.it.basicDeduction(24_200_000), 320_000)
        self.assertEqual(self.it.basicDeduction(24_800_000), 160_000)
        self.assertEqual(self.it.basicDeduction(26_000_000), 0)

    def test_family_deduction(self):
        self.assertEqual(self.it.familyDeduction(FamilyPattern.SINGLE, 3_560_000), 0)
        self.assertEqual(self.it.familyDeduction(FamilyPattern.COUPLE, 3_560_000), 380_000)
        self.assertEqual(self.it.familyDeduction(FamilyPattern.COUPLE_CHILD1, 3_560_000), 760_000)
        # Spouse deduction shrinks with the filer's income and disappears above 10M
        self.assertEqual(self.it.familyDeduction(FamilyPattern.COUPLE, 9_200_000), 260_000)
        self.assertEqual(self.it.familyDeduction(FamilyPattern.COUPLE, 11_000_000), 0)
        self.assertEqual(self.it.familyDeduction(FamilyPattern.COUPLE_CHILD1, 11_000_000), 380_000)

    def test_tax_burden_zero_and_negative(self):
        self.assertEqual(self.it.taxBurden(0).totalIncomeTax, 0)
        self.assertEqual(self.it.taxBurden(-50_000).totalIncomeTax, 0)
        self.assertEqual(self.it.taxBurden(0).marginalBracket, 0.0)

    def test_tax_burden_first_bracket(self):
        result = self.it.taxBurden(1_000_000)
        expected = math.floor((1_000_000 * 0.05 - 0) * (1 + 0.021))
        self.assertEqual(result.totalIncomeTax, expected)
        self.assertAlmostEqual(result.marginalBracket, 0.05)
        self.assertEqual(result.reconstructionSurtax, expected - 50_000)

    def test_tax_burden_quick_deduction(self):
        # 20% bracket with the 427,500 subtraction
        result = self.it.taxBurden(5_000_000)
        expected = math.floor((5_000_000 * 0.2 - 427_500) * (1 + 0.021))
        self.assertEqual(result.totalIncomeTax, expected)
        self.assertAlmostEqual(result.marginalBracket, 0.2)

    def test_tax_burden_top_bracket(self):
        result = self.it.taxBurden(50_000_000)
        expected = math.floor((50_000_000 * 0.45 - 4_796_000) * (1 + 0.021))
        self.assertEqual(result.totalIncomeTax, expected)
        self.assertAlmostEqual(result.marginalBracket, 0.45)

    def test_tax_is_continuous_at_bracket_boundary(self):
        below = self.it.taxBurden(1_950_000).totalIncomeTax
        above = self.it.taxBurden(1_950_001).totalIncomeTax
        self.assertGreaterEqual(above, below)
        self.assertLess(above - below, 10)


if __name__ == '__main__':
    unittest.main()
