"""
Shared fixtures for FireLab tests.
"""

import pytest

from firelab import FinancialInputs, MonteCarloInputs


@pytest.fixture
def base_inputs():
    """Default inputs: born 1990 (age 35 in 2025), 70/20/10 allocation, 3% withdrawal."""
    return FinancialInputs(
        initial_savings=50000,
        stocks_percent=70,
        bonds_percent=20,
        cash_percent=10,
        current_annual_expenses=40000,
        fire_annual_expenses=40000,
        annual_labor_income=60000,
        labor_income_growth_rate=3,
        savings_rate=33.33,
        desired_withdrawal_rate=3,
        years_of_expenses=100 / 3,
        expected_stock_return=7,
        expected_bond_return=2,
        expected_cash_return=-2,
        year_of_birth=1990,
        retirement_age=67,
        stop_working_at_fire=True,
        max_age=100,
    )


@pytest.fixture
def base_mc_inputs():
    return MonteCarloInputs(
        num_simulations=100,
        stock_volatility=15,
        bond_volatility=5,
        black_swan_probability=2,
        black_swan_impact=-40,
    )
