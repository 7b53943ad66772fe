"""
FireLab - Financial Independence projections and Monte Carlo simulation

FireLab answers one question: when does a portfolio become large enough to
fund a chosen spending level indefinitely? It offers two engines built on the
same year-by-year state machine (working -> FIRE -> retired):

- **Deterministic projection**: compounds expected returns year by year and
  reports the first year the portfolio meets the FIRE target.
- **Monte Carlo simulation**: replays the projection thousands of times with
  normally distributed returns and rare shock years, and reports the share
  of trials that reach FIRE.

Error Channels:
- ``project`` never raises for bad inputs; it returns a result carrying a
  list of validation messages and no projections.
- ``simulate`` raises ``ConfigError`` for the same class of problems.

Quick Start:
    ```python
    from firelab import FinancialInputs, MonteCarloInputs, project, simulate

    inputs = FinancialInputs(initial_savings=120_000, annual_labor_income=75_000)

    result = project(inputs)
    if result.has_errors():
        print(result.validation_errors)
    else:
        print(f"FIRE at age {result.fire_age}, target {result.fire_target:,.0f}")

    mc = simulate(inputs, MonteCarloInputs(num_simulations=5_000), seed=7)
    print(f"Success rate: {mc.success_rate:.1f}%")
    ```

Conventions:
    Percentages are whole numbers (``7`` means 7%). Money amounts are plain
    floats in a single implied currency.
"""

# Version information
__version__ = "0.1.0"
__author__ = "FireLab Team"
__description__ = "FIRE projections and Monte Carlo simulation"

from .core import (
    DEPLETION_FLOOR,
    MAX_SAFE_VALUE,
    BucketReturns,
    CalculationResult,
    ConfigError,
    FinancialInputs,
    MonteCarloInputs,
    MonteCarloResult,
    MonteCarloResultWithLogs,
    NumpyEncoder,
    ReturnGenerator,
    SimulationLogEntry,
    SimulationRun,
    SimulationYearData,
    ValidationReport,
    YearProjection,
    project,
    simulate,
    simulate_with_logs,
    validate_inputs,
)

# Import KPI utilities
from .kpi import (
    displayed_final_portfolio,
    final_portfolio_stats,
    portfolio_drawdown,
    years_to_fire_histogram,
    years_to_fire_stats,
)

# Define what gets imported with "from firelab import *"
__all__ = [
    # Engines
    "project",
    "simulate",
    "simulate_with_logs",
    "validate_inputs",
    "ReturnGenerator",
    # Inputs
    "FinancialInputs",
    "MonteCarloInputs",
    "MAX_SAFE_VALUE",
    "DEPLETION_FLOOR",
    # Results
    "BucketReturns",
    "YearProjection",
    "CalculationResult",
    "SimulationRun",
    "SimulationYearData",
    "SimulationLogEntry",
    "MonteCarloResult",
    "MonteCarloResultWithLogs",
    "ValidationReport",
    "NumpyEncoder",
    # Errors
    "ConfigError",
    # KPI utilities
    "years_to_fire_stats",
    "final_portfolio_stats",
    "years_to_fire_histogram",
    "portfolio_drawdown",
    "displayed_final_portfolio",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]
