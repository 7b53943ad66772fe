"""
Input specifications and engine constants for FireLab.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from .errors import ConfigError

# Ceiling for money amounts: a fraction of the largest integer a double
# represents exactly, so sums and products stay precise.
MAX_SAFE_INTEGER = 2**53 - 1
MAX_SAFE_VALUE = MAX_SAFE_INTEGER / 1000

# Portfolio below this value is considered irrecoverably depleted.
DEPLETION_FLOOR = -1000.0

ALLOCATION_TOLERANCE = 0.01
MAX_AGE_LIMIT = 150

# Monte Carlo horizon: at most 50 years and never past age 100.
MC_MAX_YEARS = 50
MC_AGE_LIMIT = 100

MIN_SIMULATIONS = 1
MAX_SIMULATIONS = 100_000


def _coerce(owner: str, name: str, annotation: str, value: Any) -> Any:
    """Check one field value against its annotation ("int", "float", "bool", "float | None")."""
    label = f"{owner}.{name}"
    if annotation == "bool":
        if not isinstance(value, bool):
            raise ConfigError(f"{label} must be true or false, got {value!r}")
        return value
    if value is None and annotation.endswith("| None"):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{label} must be a number, got {type(value).__name__}")
    if annotation == "int" and isinstance(value, float):
        if not value.is_integer():
            raise ConfigError(f"{label} must be a whole number, got {value}")
        return int(value)
    return value


def _build(cls, data: dict[str, Any]):
    """
    Build a spec dataclass from a plain dict.

    Rejects unknown keys and values of the wrong type. Whole floats such as
    ``100.0`` are accepted for integer fields.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"{cls.__name__} expects a mapping, got {type(data).__name__}")
    annotations = {f.name: f.type for f in fields(cls)}
    unknown = sorted(set(data) - set(annotations))
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} fields: {unknown}")
    values = {
        name: _coerce(cls.__name__, name, annotations[name], value)
        for name, value in data.items()
    }
    return cls(**values)


@dataclass(frozen=True)
class FinancialInputs:
    """
    Financial situation of one person, immutable for the duration of a calculation.

    Percent fields are whole numbers (``7`` means 7%). The three allocation
    fields split the portfolio into growth (stocks), fixed-income (bonds) and
    cash buckets and must sum to 100.

    Defaults describe a 1990-born saver with 50k invested, 60k income and
    40k annual spending targeting a 3% withdrawal rate.
    """

    # Initial values
    initial_savings: float = 50_000.0

    # Asset allocation (must sum to 100)
    stocks_percent: float = 70.0
    bonds_percent: float = 20.0
    cash_percent: float = 10.0

    # Expenses
    current_annual_expenses: float = 40_000.0
    fire_annual_expenses: float = 40_000.0

    # Income
    annual_labor_income: float = 60_000.0
    labor_income_growth_rate: float = 3.0

    # Share of labor income saved while working
    savings_rate: float = (60_000.0 - 40_000.0) / 60_000.0 * 100

    # FIRE target sizing; None derives years_of_expenses from the withdrawal rate
    desired_withdrawal_rate: float = 3.0
    years_of_expenses: float | None = 100 / 3

    # Expected annual returns per bucket
    expected_stock_return: float = 7.0
    expected_bond_return: float = 2.0
    expected_cash_return: float = -2.0  # typically negative (inflation)

    # Personal info
    year_of_birth: int = 1990
    retirement_age: int = 67

    # Income streams outside the portfolio
    state_pension_income: float = 0.0
    private_pension_income: float = 0.0
    other_income: float = 0.0

    # Options
    stop_working_at_fire: bool = True
    max_age: int = 100

    @property
    def allocation_sum(self) -> float:
        return self.stocks_percent + self.bonds_percent + self.cash_percent

    def allocation_is_valid(self) -> bool:
        return abs(self.allocation_sum - 100) <= ALLOCATION_TOLERANCE

    def current_age(self, current_year: int) -> int:
        return current_year - self.year_of_birth

    def resolved_years_of_expenses(self) -> float:
        """
        Multiplier applied to FIRE expenses to size the target.

        Uses ``years_of_expenses`` when given, otherwise ``100 / withdrawal rate``.
        """
        if self.years_of_expenses is not None:
            return self.years_of_expenses
        return 100 / self.desired_withdrawal_rate

    def fire_target(self) -> float:
        """
        Portfolio value that funds FIRE expenses indefinitely.

        A withdrawal rate of exactly 0 is treated as "already FIRE" and gives
        a target of 0. The result may be non-finite for degenerate inputs;
        callers check it against ``MAX_SAFE_VALUE``.
        """
        if self.desired_withdrawal_rate == 0:
            return 0.0
        return self.fire_annual_expenses * self.resolved_years_of_expenses()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FinancialInputs:
        return _build(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonteCarloInputs:
    """
    Parameters of a Monte Carlo batch.

    Attributes:
        num_simulations: Number of independent trials
        stock_volatility: Standard deviation of growth returns, in percent
        bond_volatility: Standard deviation of fixed-income returns, in percent
        black_swan_probability: Chance of a shock in any simulated year, in percent
        black_swan_impact: Growth return forced in a shock year, in percent (<= 0)
    """

    num_simulations: int = 1000
    stock_volatility: float = 15.0
    bond_volatility: float = 5.0
    black_swan_probability: float = 2.0
    black_swan_impact: float = -40.0

    def validate(self) -> None:
        """
        Check parameter bounds.

        Raises:
            ConfigError: If any parameter is outside its allowed range
        """
        if not MIN_SIMULATIONS <= self.num_simulations <= MAX_SIMULATIONS:
            raise ConfigError(
                f"num_simulations must be between {MIN_SIMULATIONS} and "
                f"{MAX_SIMULATIONS}, got {self.num_simulations}"
            )
        for name in ("stock_volatility", "bond_volatility"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigError(f"{name} must be >= 0, got {value}")
        if not 0 <= self.black_swan_probability <= 100:
            raise ConfigError(
                "black_swan_probability must be between 0 and 100, "
                f"got {self.black_swan_probability}"
            )
        if not -100 <= self.black_swan_impact <= 0:
            raise ConfigError(
                "black_swan_impact must be between -100 and 0, "
                f"got {self.black_swan_impact}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MonteCarloInputs:
        return _build(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
