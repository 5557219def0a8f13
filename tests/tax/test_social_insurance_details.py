import unittest
import os
import sys
import math
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.SocialInsuranceDetails import SocialInsuranceDetails


class TestSocialInsuranceDetails(unittest.TestCase):
    def setUp(self):
        self.si = SocialInsuranceDetails()

    def test_breakdown(self):
        gross = 5_000_000
        result = self.si.breakdown(gross)
        self.assertEqual(result.health, math.floor(gross * 0.05))
        self.assertEqual(result.pension, math.floor(gross * 0.0915))
        self.assertEqual(result.employment, math.floor(gross * 0.006))
        self.assertEqual(result.total, result.health + result.pension + result.employment)

    def test_pension_is_capped(self):
        result = self.si.breakdown(10_000_000)
        self.assertEqual(result.pension, 713_700)
        # Health and employment insurance are not capped
        self.assertEqual(result.health, math.floor(10_000_000 * 0.05))

    def test_total_contribution(self):
        self.assertEqual(self.si.total_contribution(4_000_000), self.si.breakdown(4_000_000).total)


if __name__ == '__main__':
    unittest.main()
