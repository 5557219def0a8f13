import math
import os
import sys
import unittest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.fire_calculator import (
    MAX_SIMULATION_YEARS,
    calc_achievement_years,
    calc_effective_yield_rate,
    calc_fire_number,
    calc_fire_number_for_strategy,
)
from calc.rounding import round_half_up
from model.SimulationInput import SimulationDefaults


class TestFireNumber(unittest.TestCase):
    def test_four_percent_rule(self):
        self.assertEqual(calc_fire_number(360, 0.04), 9000)

    def test_zero_or_negative_swr_is_unreachable(self):
        self.assertEqual(calc_fire_number(360, 0), math.inf)
        self.assertEqual(calc_fire_number(360, -0.01), math.inf)

    def test_effective_yield_rate(self):
        self.assertAlmostEqual(calc_effective_yield_rate(0.03, 0.20), 0.024)
        self.assertAlmostEqual(calc_effective_yield_rate(0.03, 0.0), 0.03)

    def test_strategy_dispatch(self):
        base = SimulationDefaults().to_input()
        withdrawal = calc_fire_number_for_strategy(360, base)
        self.assertAlmostEqual(withdrawal, 9000)

        yield_input = base.with_changes(fire_strategy="yield", yield_rate=0.03, dividend_tax_rate=0.2)
        self.assertAlmostEqual(calc_fire_number_for_strategy(360, yield_input), 360 / 0.024)

    def test_yield_target_not_below_withdrawal_target(self):
        base = SimulationDefaults().to_input().with_changes(swr=0.04, yield_rate=0.04, dividend_tax_rate=0.2)
        self.assertGreaterEqual(
            calc_fire_number_for_strategy(300, base.with_changes(fire_strategy="yield")),
            calc_fire_number_for_strategy(300, base)
        )

    def test_yield_fully_taxed_is_unreachable(self):
        base = SimulationDefaults().to_input().with_changes(fire_strategy="yield", dividend_tax_rate=1.0)
        self.assertEqual(calc_fire_number_for_strategy(300, base), math.inf)

    def test_unknown_strategy_treated_as_withdrawal(self):
        base = SimulationDefaults().to_input().with_changes(fire_strategy="coast")
        self.assertAlmostEqual(calc_fire_number_for_strategy(360, base), 9000)


class TestAchievementYears(unittest.TestCase):
    def test_already_covered_reports_one_year(self):
        result = calc_achievement_years(10000, 100, 0.04, 5000, 0.02)
        self.assertEqual(result.years, 1)
        self.assertTrue(result.achieved)
        self.assertEqual(len(result.projection), 2)

    def test_snapshot_taken_before_growth(self):
        result = calc_achievement_years(1000, 120, 0.05, 3000, 0.02, start_age=30)
        first, second = result.projection[0], result.projection[1]
        self.assertEqual((first.age, first.year, first.assets, first.fire_number), (30, 0, 1000, 3000))
        self.assertEqual(second.age, 31)
        self.assertEqual(second.assets, round_half_up(1000 * 1.05 + 120))
        self.assertEqual(second.fire_number, round_half_up(3000 * 1.02))
        self.assertEqual(first.annual_investment, 120)

    def test_last_snapshot_is_the_crossover_year(self):
        result = calc_achievement_years(500, 240, 0.05, 4000, 0.02, start_age=40)
        self.assertIsNotNone(result.years)
        last = result.projection[-1]
        self.assertEqual(last.year, result.years)
        self.assertGreaterEqual(last.assets, last.fire_number)
        for p in result.projection[1:-1]:
            self.assertLessEqual(p.assets, p.fire_number)

    def test_unreachable_runs_full_horizon(self):
        result = calc_achievement_years(0, 0, 0.05, 1000, 0.02)
        self.assertIsNone(result.years)
        self.assertFalse(result.achieved)
        self.assertEqual(len(result.projection), MAX_SIMULATION_YEARS + 1)

    def test_infinite_target_never_achieved(self):
        result = calc_achievement_years(1000, 100, 0.05, math.inf, 0.02, max_years=10)
        self.assertIsNone(result.years)
        self.assertEqual(len(result.projection), 11)
        self.assertEqual(result.projection[0].fire_number, math.inf)

    def test_custom_horizon(self):
        result = calc_achievement_years(0, 10, 0.0, 1000, 0.0, max_years=5)
        self.assertIsNone(result.years)
        self.assertEqual(len(result.projection), 6)

    def test_monotone_in_inputs(self):
        base = calc_achievement_years(500, 120, 0.05, 5000, 0.02).years
        self.assertLessEqual(calc_achievement_years(1000, 120, 0.05, 5000, 0.02).years, base)
        self.assertLessEqual(calc_achievement_years(500, 240, 0.05, 5000, 0.02).years, base)
        self.assertGreaterEqual(calc_achievement_years(500, 120, 0.05, 6000, 0.02).years, base)
        self.assertGreaterEqual(calc_achievement_years(500, 120, 0.05, 5000, 0.03).years, base)

    def test_idempotent(self):
        self.assertEqual(
            calc_achievement_years(800, 150, 0.04, 6000, 0.01),
            calc_achievement_years(800, 150, 0.04, 6000, 0.01)
        )


class TestRoundHalfUp(unittest.TestCase):
    def test_halves_round_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(22.25, 1), 22.3)

    def test_integer_result_without_digits(self):
        self.assertIsInstance(round_half_up(7.4), int)

    def test_non_finite_passthrough(self):
        self.assertEqual(round_half_up(math.inf), math.inf)
        self.assertTrue(math.isnan(round_half_up(math.nan)))


if __name__ == '__main__':
    unittest.main()
