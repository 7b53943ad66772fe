"""
Random market returns for Monte Carlo trials.
"""

from __future__ import annotations

import math

import numpy as np

from .cashflow import BucketReturns
from .specs import FinancialInputs, MonteCarloInputs

# Substitute for a zero uniform draw so log(u1) stays finite.
_MIN_UNIFORM = 1e-10


class ReturnGenerator:
    """
    Normally distributed annual returns with rare shock years.

    Normal variates come from the Box-Muller transform: each pair of uniform
    draws yields two independent variates, the second of which is cached and
    returned by the next call. The cache belongs to this instance, so create
    one generator per simulation batch (or per thread) to keep batches
    independent.

    Attributes:
        rng: Source of uniform draws

    Example:
        ```python
        gen = ReturnGenerator(seed=42)
        r = gen.draw_return(0.07, 0.15)  # 7% expected, 15% volatility
        ```
    """

    def __init__(self, seed: int | None = None, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._cached_normal: float | None = None

    def reset(self) -> None:
        """Drop the cached variate."""
        self._cached_normal = None

    def uniform(self) -> float:
        return float(self.rng.random())

    def standard_normal(self) -> float:
        if self._cached_normal is not None:
            z = self._cached_normal
            self._cached_normal = None
            return z

        u1 = self.uniform() or _MIN_UNIFORM
        u2 = self.uniform()

        radius = math.sqrt(-2 * math.log(u1))
        theta = 2 * math.pi * u2

        self._cached_normal = radius * math.sin(theta)
        return radius * math.cos(theta)

    def draw_return(self, expected_return: float, volatility: float) -> float:
        """Return ``expected_return + volatility * z`` for a fresh standard normal ``z``."""
        return expected_return + volatility * self.standard_normal()

    def is_black_swan(self, probability_pct: float) -> bool:
        return self.uniform() < probability_pct / 100

    def annual_returns(
        self, inputs: FinancialInputs, mc_inputs: MonteCarloInputs
    ) -> BucketReturns:
        """
        Draw one year of bucket returns.

        The shock draw comes first. In a shock year the growth bucket returns
        the shock impact and fixed income half of it, with no normal draws
        consumed. Cash always earns its expected return.
        """
        cash = inputs.expected_cash_return / 100

        if self.is_black_swan(mc_inputs.black_swan_probability):
            return BucketReturns(
                stocks=mc_inputs.black_swan_impact / 100,
                bonds=mc_inputs.black_swan_impact / 200,
                cash=cash,
                is_black_swan=True,
            )

        return BucketReturns(
            stocks=self.draw_return(
                inputs.expected_stock_return / 100, mc_inputs.stock_volatility / 100
            ),
            bonds=self.draw_return(
                inputs.expected_bond_return / 100, mc_inputs.bond_volatility / 100
            ),
            cash=cash,
        )
