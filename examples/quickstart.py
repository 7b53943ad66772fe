"""
Quick demonstration of the FireLab projection and Monte Carlo engines.
"""

from __future__ import annotations

import json
from dataclasses import replace

from firelab import (
    FinancialInputs,
    MonteCarloInputs,
    NumpyEncoder,
    displayed_final_portfolio,
    final_portfolio_stats,
    portfolio_drawdown,
    project,
    simulate,
    years_to_fire_histogram,
    years_to_fire_stats,
)

CURRENT_YEAR = 2025


def pretty(data: dict) -> str:
    """Return JSON formatted output."""
    return json.dumps(data, indent=2, sort_keys=True, cls=NumpyEncoder)


def build_inputs() -> FinancialInputs:
    return FinancialInputs(
        initial_savings=120_000,
        annual_labor_income=75_000,
        current_annual_expenses=42_000,
        fire_annual_expenses=38_000,
        savings_rate=40,
        desired_withdrawal_rate=3.5,
        years_of_expenses=None,
        year_of_birth=1988,
    )


def main() -> None:
    inputs = build_inputs()

    print("=== Deterministic projection ===")
    result = project(inputs, current_year=CURRENT_YEAR)
    if result.has_errors():
        for error in result.validation_errors:
            print(f"❌ {error}")
        return

    print(f"FIRE target:   {result.fire_target:,.0f}")
    print(f"FIRE age:      {result.fire_age}")
    print(f"Max drawdown:  {portfolio_drawdown(result):.1%}")
    current_age = inputs.current_age(CURRENT_YEAR)
    print(
        "Portfolio in 20 years: "
        f"{displayed_final_portfolio(result, current_age, zoom_years=20):,.0f}"
    )
    print(result.to_frame()[["age", "portfolio_value", "is_fire"]].head(10))

    print("\n=== Monte Carlo ===")
    mc = simulate(
        inputs, MonteCarloInputs(num_simulations=2_000), seed=42, current_year=CURRENT_YEAR
    )
    print(pretty(mc.summary()))
    print(years_to_fire_stats(mc))
    print(final_portfolio_stats(mc))
    print(years_to_fire_histogram(mc).to_string(index=False))

    print("\n=== Keep working after FIRE ===")
    keep_working = simulate(
        replace(inputs, stop_working_at_fire=False),
        MonteCarloInputs(num_simulations=2_000),
        seed=42,
        current_year=CURRENT_YEAR,
    )
    print(f"Success rate: {keep_working.success_rate:.1f}%")


if __name__ == "__main__":
    main()
