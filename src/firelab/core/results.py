"""
Results and output structures for FireLab.

Every record is a frozen dataclass: projections and simulation runs are
produced once, in order, and never mutated afterwards. Tabular views are
built on demand with pandas.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class YearProjection:
    """
    One projected year of the deterministic engine.

    Attributes:
        year: Calendar year
        age: Age reached in that year
        labor_income: Labor income earned (0 once no longer working)
        investment_yield: Portfolio return for the year
        total_income: Labor + yield + pensions + other income
        expenses: Spending level applied (current or FIRE level)
        net_savings: Net portfolio change applied after this year
        portfolio_value: Portfolio value before this year's change
        fire_target: Target portfolio value
        is_fire: Whether FIRE has been achieved as of this year
        state_pension_income: State pension (0 before retirement age)
        private_pension_income: Private pension (0 before retirement age)
        other_income: Other income

    Note:
        Pension and other income are always reported for charting, but they
        only move the portfolio in years where the person is not working.
    """

    year: int
    age: int
    labor_income: float
    investment_yield: float
    total_income: float
    expenses: float
    net_savings: float
    portfolio_value: float
    fire_target: float
    is_fire: bool
    state_pension_income: float = 0.0
    private_pension_income: float = 0.0
    other_income: float = 0.0


@dataclass(frozen=True)
class CalculationResult:
    """
    Outcome of a deterministic projection.

    Callers must check ``has_errors()`` before trusting the projection: when
    validation failed the projections are empty and ``years_to_fire`` is -1.
    """

    projections: list[YearProjection] = field(default_factory=list)
    years_to_fire: int = -1
    fire_target: float = 0.0
    final_portfolio_value: float = 0.0
    validation_errors: list[str] | None = None

    @classmethod
    def invalid(cls, errors: list[str]) -> CalculationResult:
        return cls(validation_errors=list(errors))

    def has_errors(self) -> bool:
        return bool(self.validation_errors)

    @property
    def fire_achieved(self) -> bool:
        return self.years_to_fire >= 0

    @property
    def fire_age(self) -> int | None:
        """Age at which FIRE is first reached, or None."""
        if not self.fire_achieved or not self.projections:
            return None
        return self.projections[self.years_to_fire].age

    @property
    def fire_year(self) -> int | None:
        """Calendar year in which FIRE is first reached, or None."""
        if not self.fire_achieved or not self.projections:
            return None
        return self.projections[self.years_to_fire].year

    def to_frame(self) -> pd.DataFrame:
        """Projections as a DataFrame indexed by calendar year."""
        columns = [f.name for f in fields(YearProjection)]
        df = pd.DataFrame([asdict(p) for p in self.projections], columns=columns)
        return df.set_index("year")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationRun:
    """Outcome of a single Monte Carlo trial."""

    simulation_id: int
    success: bool
    years_to_fire: int | None
    final_portfolio: float


@dataclass(frozen=True)
class SimulationYearData:
    """One simulated year of a trial; returns are expressed in percent."""

    year: int
    age: int
    stock_return: float
    bond_return: float
    cash_return: float
    portfolio_return: float
    is_black_swan: bool
    expenses: float
    labor_income: float
    total_income: float
    portfolio_value: float
    is_fire_achieved: bool


@dataclass(frozen=True)
class SimulationLogEntry:
    """Detailed log of a single trial."""

    simulation_id: int
    timestamp: str
    success: bool
    years_to_fire: int | None
    final_portfolio: float
    yearly_data: list[SimulationYearData] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(y) for y in self.yearly_data])


@dataclass(frozen=True)
class MonteCarloResult:
    """
    Aggregated outcome of a Monte Carlo batch.

    Attributes:
        success_count: Trials that reached FIRE
        failure_count: Trials that did not
        success_rate: Share of successful trials, in percent
        median_years_to_fire: Median years-to-FIRE over successful trials (0 if none)
        simulations: Individual trial outcomes in execution order
    """

    success_count: int
    failure_count: int
    success_rate: float
    median_years_to_fire: float
    simulations: list[SimulationRun] = field(default_factory=list)

    @classmethod
    def from_runs(cls, runs: list[SimulationRun]) -> MonteCarloResult:
        success_count = sum(1 for run in runs if run.success)
        failure_count = len(runs) - success_count
        success_rate = success_count / len(runs) * 100 if runs else 0.0

        successful_years = [
            run.years_to_fire for run in runs if run.years_to_fire is not None
        ]
        median = float(np.median(successful_years)) if successful_years else 0.0

        return cls(
            success_count=success_count,
            failure_count=failure_count,
            success_rate=success_rate,
            median_years_to_fire=median,
            simulations=list(runs),
        )

    def successful_years(self) -> list[int]:
        """Sorted years-to-FIRE of successful trials."""
        return sorted(
            run.years_to_fire
            for run in self.simulations
            if run.years_to_fire is not None
        )

    def to_frame(self) -> pd.DataFrame:
        """Trial outcomes as a DataFrame indexed by simulation id."""
        df = pd.DataFrame(
            [asdict(run) for run in self.simulations],
            columns=["simulation_id", "success", "years_to_fire", "final_portfolio"],
        )
        return df.set_index("simulation_id")

    def summary(self) -> dict[str, Any]:
        return {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "success_rate": self.success_rate,
            "median_years_to_fire": self.median_years_to_fire,
            "num_simulations": len(self.simulations),
        }


@dataclass(frozen=True)
class MonteCarloResultWithLogs(MonteCarloResult):
    """Monte Carlo result with one log entry per trial and the fixed parameters."""

    logs: list[SimulationLogEntry] = field(default_factory=list)
    fixed_parameters: dict[str, Any] = field(default_factory=dict)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars/arrays, pandas objects and result dataclasses."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.generic):
            return obj.item()
        elif isinstance(obj, pd.DataFrame):
            return obj.to_dict("records")
        elif isinstance(obj, pd.Series):
            return obj.to_dict()
        elif hasattr(obj, "__dataclass_fields__"):
            return asdict(obj)
        return super().default(obj)
