"""
Property-based tests using Hypothesis for projection and simulation invariants.
"""

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from firelab import (
    DEPLETION_FLOOR,
    MAX_SAFE_VALUE,
    FinancialInputs,
    MonteCarloInputs,
    ReturnGenerator,
    project,
    simulate,
)

CURRENT_YEAR = 2025

money = st.floats(min_value=0, max_value=5_000_000, allow_nan=False, allow_infinity=False)
percent = st.floats(min_value=0, max_value=100, allow_nan=False, allow_infinity=False)
rate = st.floats(min_value=-10, max_value=15, allow_nan=False, allow_infinity=False)


@st.composite
def financial_inputs(draw):
    """Valid inputs with an allocation that sums to exactly 100."""
    stocks = draw(st.integers(min_value=0, max_value=100))
    bonds = draw(st.integers(min_value=0, max_value=100 - stocks))
    age = draw(st.integers(min_value=18, max_value=90))
    return FinancialInputs(
        initial_savings=draw(money),
        stocks_percent=stocks,
        bonds_percent=bonds,
        cash_percent=100 - stocks - bonds,
        current_annual_expenses=draw(st.floats(min_value=0, max_value=200_000)),
        fire_annual_expenses=draw(st.floats(min_value=0, max_value=200_000)),
        annual_labor_income=draw(st.floats(min_value=0, max_value=300_000)),
        labor_income_growth_rate=draw(st.floats(min_value=0, max_value=5)),
        savings_rate=draw(percent),
        desired_withdrawal_rate=draw(st.floats(min_value=0.5, max_value=10)),
        years_of_expenses=None,
        expected_stock_return=draw(rate),
        expected_bond_return=draw(rate),
        expected_cash_return=draw(rate),
        year_of_birth=CURRENT_YEAR - age,
        retirement_age=draw(st.integers(min_value=50, max_value=75)),
        other_income=draw(st.floats(min_value=0, max_value=50_000)),
        stop_working_at_fire=draw(st.booleans()),
        max_age=draw(st.integers(min_value=age, max_value=110)),
    )


class TestProjectionProperties:
    """Structural invariants of any valid projection."""

    @given(inputs=financial_inputs())
    @settings(max_examples=100, deadline=None)
    def test_fire_flag_is_monotonic_and_first_crossing(self, inputs):
        result = project(inputs, current_year=CURRENT_YEAR)

        assert not result.has_errors()
        flags = [p.is_fire for p in result.projections]
        if result.years_to_fire == -1:
            assert not any(flags)
        else:
            n = result.years_to_fire
            assert not any(flags[:n])
            assert all(flags[n:])
            assert result.projections[n].portfolio_value >= result.fire_target

    @given(inputs=financial_inputs())
    @settings(max_examples=100, deadline=None)
    def test_length_and_early_termination(self, inputs):
        result = project(inputs, current_year=CURRENT_YEAR)
        full_length = inputs.max_age - inputs.current_age(CURRENT_YEAR) + 1

        assert 1 <= len(result.projections) <= full_length
        if len(result.projections) < full_length:
            last = result.projections[-1]
            end_value = last.portfolio_value + last.net_savings
            assert (
                not math.isfinite(end_value)
                or end_value > MAX_SAFE_VALUE
                or end_value < DEPLETION_FLOOR
            )

    @given(inputs=financial_inputs())
    @settings(max_examples=50, deadline=None)
    def test_projection_is_deterministic(self, inputs):
        assert project(inputs, current_year=CURRENT_YEAR) == project(
            inputs, current_year=CURRENT_YEAR
        )

    @given(inputs=financial_inputs())
    @settings(max_examples=50, deadline=None)
    def test_years_and_ages_are_consecutive(self, inputs):
        projections = project(inputs, current_year=CURRENT_YEAR).projections

        for i, p in enumerate(projections):
            assert p.year == CURRENT_YEAR + i
            assert p.age == inputs.current_age(CURRENT_YEAR) + i


class TestSimulationProperties:
    """Aggregate invariants of any Monte Carlo batch."""

    @given(
        inputs=financial_inputs(),
        seed=st.integers(min_value=0, max_value=2**32 - 1),
        swan=percent,
    )
    @settings(max_examples=25, deadline=None)
    def test_batch_invariants(self, inputs, seed, swan):
        mc = MonteCarloInputs(num_simulations=20, black_swan_probability=swan)

        result = simulate(inputs, mc, seed=seed, current_year=CURRENT_YEAR)

        assert result.success_count + result.failure_count == 20
        assert 0 <= result.success_rate <= 100
        assert result.success_count == sum(r.years_to_fire is not None for r in result.simulations)
        for run in result.simulations:
            if not run.success:
                assert run.years_to_fire is None
            else:
                assert 0 <= run.years_to_fire < 50


class TestReturnProperties:
    @given(
        expected=st.floats(min_value=-1, max_value=1, allow_nan=False),
        seed=st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_zero_volatility_is_exact(self, expected, seed):
        assert ReturnGenerator(seed=seed).draw_return(expected, 0.0) == expected
