"""
Core module for FireLab.

This module contains the projection and Monte Carlo engines together with
their input and result records.
"""

from .cashflow import BucketReturns, YearFlow, year_flow
from .errors import ConfigError
from .montecarlo import simulate, simulate_with_logs, simulation_years
from .projection import project
from .results import (
    CalculationResult,
    MonteCarloResult,
    MonteCarloResultWithLogs,
    NumpyEncoder,
    SimulationLogEntry,
    SimulationRun,
    SimulationYearData,
    YearProjection,
)
from .returns import ReturnGenerator
from .specs import (
    DEPLETION_FLOOR,
    MAX_SAFE_VALUE,
    FinancialInputs,
    MonteCarloInputs,
)
from .validation import ValidationReport, validate_inputs

__all__ = [
    # Errors
    "ConfigError",
    # Specs
    "FinancialInputs",
    "MonteCarloInputs",
    "MAX_SAFE_VALUE",
    "DEPLETION_FLOOR",
    # Validation
    "ValidationReport",
    "validate_inputs",
    # Cash flows
    "BucketReturns",
    "YearFlow",
    "year_flow",
    # Engines
    "project",
    "simulate",
    "simulate_with_logs",
    "simulation_years",
    "ReturnGenerator",
    # Results
    "YearProjection",
    "CalculationResult",
    "SimulationRun",
    "SimulationYearData",
    "SimulationLogEntry",
    "MonteCarloResult",
    "MonteCarloResultWithLogs",
    "NumpyEncoder",
]
