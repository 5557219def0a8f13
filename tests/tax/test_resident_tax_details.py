import unittest
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.ResidentTaxDetails import ResidentTaxDetails
from model.categories import FamilyPattern


class TestResidentTaxDetails(unittest.TestCase):
    def setUp(self):
        self.rt = ResidentTaxDetails()

    def test_fixed_levy(self):
        # Per-capita levy plus forest environment levy
        self.assertEqual(self.rt.fixed_levy, 6_000)

    def test_basic_deduction(self):
        self.assertEqual(self.rt.basicDeduction(3_560_000), 430_000)
        self.assertEqual(self.rt.basicDeduction(24_200_000), 290_000)
        self.assertEqual(self.rt.basicDeduction(24_800_000), 150_000)
        self.assertEqual(self.rt.basicDeduction(30_000_000), 0)

    def test_family_deduction(self):
        self.assertEqual(self.rt.familyDeduction(FamilyPattern.SINGLE, 3_000_000), 0)
        self.assertEqual(self.rt.familyDeduction(FamilyPattern.COUPLE, 3_000_000), 330_000)
        self.assertEqual(self.rt.familyDeduction(FamilyPattern.COUPLE_CHILD1, 3_000_000), 660_000)

    def test_tax_burden(self):
        self.assertEqual(self.rt.taxBurden(1_000_000), 106_000)

    def test_no_tax_or_levy_without_taxable_income(self):
        self.assertEqual(self.rt.taxBurden(0), 0)
        self.assertEqual(self.rt.taxBurden(-1), 0)


if __name__ == '__main__':
    unittest.main()
