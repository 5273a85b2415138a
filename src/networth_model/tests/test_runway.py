# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for the deterministic runway.
"""

import math
import unittest

from ..exceptions import ConfigurationError
from ..montecarlo.runway import (
    DEPLETING,
    SUSTAINABLE,
    UNAFFORDABLE,
    BalanceEntry,
    RunwayParams,
    break_even_income,
    infer_monthly_burn,
    simulate_runway,
    withdrawal_rate,
    withdrawal_status,
)


def flat_params(liquid, invested, income, burn, **overrides):
    """Runway inputs with no investment return and no inflation."""
    params = dict(annual_return=0.0, inflation_rate=0.0)
    params.update(overrides)
    return RunwayParams(liquid, invested, income, burn, **params)


class TestRunwayParams(unittest.TestCase):
    """Tests for RunwayParams validation."""

    def test_defaults(self):
        """Test the 50-year horizon, 20% gains tax and 3% inflation."""
        params = RunwayParams(1000, 1000, 0, 100)
        self.assertEqual(params.max_months, 600)
        self.assertEqual(params.tax_rate, 0.20)
        self.assertEqual(params.inflation_rate, 0.03)

    def test_invalid_inputs_raise(self):
        """Test that out-of-range inputs raise."""
        with self.assertRaises(ConfigurationError):
            RunwayParams(1000, 1000, 0, 100, max_months=0)
        with self.assertRaises(ConfigurationError):
            RunwayParams(1000, 1000, 0, 100, tax_rate=1.5)
        with self.assertRaises(ConfigurationError) as ctx:
            RunwayParams(1000, 1000, 0, -100)
        self.assertEqual(ctx.exception.field, "monthly_burn")


class TestSimulateRunway(unittest.TestCase):
    """Tests for simulate_runway."""

    def test_cash_only_runs_out(self):
        """Test that $12k of cash at $1k a month lasts 12 months."""
        result = simulate_runway(flat_params(12000, 0, 0, 1000))

        self.assertEqual(result.total_months, 12)
        self.assertTrue(result.depleted)
        self.assertEqual(result.status, UNAFFORDABLE)
        self.assertEqual(result.final_balance, 0.0)
        self.assertEqual(result.snapshots[0].liquid_balance, 11000.0)
        self.assertEqual(result.snapshots[0].withdrawal_rate, 1.0)
        self.assertTrue(result.guardrails.depletion_risk)
        self.assertEqual(result.guardrails.years_until_depletion, 1.0)

    def test_running_out_in_the_last_month(self):
        """Test that running out exactly at the horizon is still depletion."""
        result = simulate_runway(flat_params(12000, 0, 0, 1000, max_months=12))
        self.assertEqual(result.total_months, 12)
        self.assertTrue(result.depleted)
        self.assertEqual(result.status, UNAFFORDABLE)
        self.assertTrue(result.guardrails.depletion_risk)

        survivor = simulate_runway(flat_params(12000, 0, 0, 1000, max_months=11))
        self.assertFalse(survivor.depleted)
        self.assertEqual(survivor.final_balance, 1000.0)
        self.assertEqual(survivor.status, DEPLETING)
        self.assertFalse(survivor.guardrails.depletion_risk)
        self.assertIsNone(survivor.guardrails.years_until_depletion)
        self.assertTrue(survivor.guardrails.liquidity_warning)

    def test_sustainable_portfolio(self):
        """Test that a 2.4% withdrawal rate from a growing portfolio is sustainable."""
        result = simulate_runway(RunwayParams(0, 1000000, 0, 2000, annual_return=0.07,
                                              inflation_rate=0.0, max_months=120))

        self.assertEqual(result.total_months, 120)
        self.assertFalse(result.depleted)
        self.assertEqual(result.status, SUSTAINABLE)
        self.assertFalse(result.guardrails.withdrawal_rate_warning)
        self.assertTrue(result.guardrails.liquidity_warning)
        self.assertGreater(result.final_balance, 1000000)
        self.assertGreater(result.total_taxes_paid, 0.0)
        self.assertGreater(result.total_investment_gains, result.total_taxes_paid)

    def test_gains_taxed_on_sale(self):
        """Test that selling pays tax on the share of the balance that is this month's gain."""
        params = RunwayParams(0, 100000, 0, 5000, annual_return=1.01 ** 12 - 1,
                              inflation_rate=0.0, max_months=1, tax_rate=0.2)
        snapshot = simulate_runway(params).snapshots[0]

        self.assertAlmostEqual(snapshot.investment_gains, 1000.0, places=6)
        self.assertAlmostEqual(snapshot.taxes_paid, 5000 * 1000 / 101000 * 0.2, places=6)
        self.assertAlmostEqual(snapshot.invested_balance, 101000 - 5000 - 5000 * 1000 / 101000 * 0.2,
                               places=4)
        self.assertEqual(snapshot.net_cash_flow, -5000.0)

    def test_surplus_reinvested_above_reserve(self):
        """Test that cash above 12 months of burn moves to investments."""
        result = simulate_runway(flat_params(0, 0, 5000, 1000, max_months=4))

        self.assertEqual(result.snapshots[2].liquid_balance, 12000.0)
        self.assertEqual(result.snapshots[2].invested_balance, 0.0)
        self.assertEqual(result.snapshots[3].liquid_balance, 12000.0)
        self.assertEqual(result.snapshots[3].invested_balance, 4000.0)

    def test_inflation_compounds_monthly(self):
        """Test that a year of monthly inflation matches the annual rate."""
        result = simulate_runway(RunwayParams(1000000, 0, 0, 1000, annual_return=0.0,
                                              inflation_rate=0.03, max_months=13))
        self.assertEqual(result.snapshots[0].monthly_burn, 1000.0)
        self.assertAlmostEqual(result.snapshots[12].monthly_burn, 1030.0, places=6)

    def test_to_dataframe(self):
        """Test one row per month indexed by month."""
        df = simulate_runway(flat_params(12000, 0, 0, 1000)).to_dataframe()
        self.assertEqual(len(df), 12)
        self.assertEqual(df.index.name, "month")
        self.assertEqual(df.index[0], 1)
        self.assertIn("status", df.columns)


class TestWithdrawalRate(unittest.TestCase):
    """Tests for withdrawal rate helpers."""

    def test_withdrawal_rate(self):
        """Test annual spending over assets."""
        self.assertAlmostEqual(withdrawal_rate(4000, 1200000), 0.04)
        self.assertTrue(math.isinf(withdrawal_rate(1000, 0)))

    def test_withdrawal_status(self):
        """Test the 4% and 6% cut-offs."""
        self.assertEqual(withdrawal_status(0.03), SUSTAINABLE)
        self.assertEqual(withdrawal_status(0.04), SUSTAINABLE)
        self.assertEqual(withdrawal_status(0.05), DEPLETING)
        self.assertEqual(withdrawal_status(0.07), UNAFFORDABLE)

    def test_break_even_income(self):
        """Test income needed to bring withdrawals down to 4%."""
        self.assertAlmostEqual(break_even_income(5000, 1200000), 1000.0)
        self.assertEqual(break_even_income(3000, 1200000), 0.0)


class TestInferMonthlyBurn(unittest.TestCase):
    """Tests for infer_monthly_burn."""

    def test_cash_decline(self):
        """Test that a fall in cash-only net worth is spending."""
        burn = infer_monthly_burn([("2024-01-01", 100000, 100000), ("2024-01-31", 97000, 97000)])
        self.assertAlmostEqual(burn, 3000 * 30.44 / 30)

    def test_missed_investment_growth(self):
        """Test that flat invested net worth implies spending the expected return."""
        burn = infer_monthly_burn([BalanceEntry("2024-01-31", 100000, 0),
                                   BalanceEntry("2024-01-01", 100000, 0)], annual_return=0.12)
        self.assertAlmostEqual(burn, 100000 * (1.12 ** (1 / 12) - 1))

    def test_no_spending(self):
        """Test that growth, long gaps and short histories give no burn."""
        self.assertEqual(infer_monthly_burn([("2024-01-01", 100000, 100000),
                                             ("2024-02-01", 105000, 105000)]), 0.0)
        self.assertEqual(infer_monthly_burn([("2022-01-01", 100000, 100000),
                                             ("2024-01-01", 50000, 50000)]), 0.0)
        self.assertEqual(infer_monthly_burn([("2024-01-01", 100000, 100000)]), 0.0)


if __name__ == '__main__':
    unittest.main()
