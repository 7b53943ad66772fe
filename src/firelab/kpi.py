"""
KPI calculation utilities for FIRE outcomes.

This module provides standalone functions that summarize projection and
Monte Carlo results. All functions return plain numbers or pandas objects.
"""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from .core.results import CalculationResult, MonteCarloResult

_PERCENTILES = {"p10": 0.10, "p25": 0.25, "p75": 0.75, "p90": 0.90}


def years_to_fire_stats(result: MonteCarloResult) -> pd.Series:
    """
    Distribution statistics of years-to-FIRE over successful trials.

    Percentiles are index-based on the sorted values (``sorted[floor(n * q)]``),
    so they always match an observed trial.

    Args:
        result: Monte Carlo result

    Returns:
        Series with min, max, median, mean, p10, p25, p75, p90
        (empty when no trial succeeded)
    """
    years = result.successful_years()
    if not years:
        return pd.Series(dtype=float, name="years_to_fire")

    stats = {
        "min": float(years[0]),
        "max": float(years[-1]),
        "median": float(result.median_years_to_fire),
        "mean": float(np.mean(years)),
    }
    for label, q in _PERCENTILES.items():
        stats[label] = float(years[int(math.floor(len(years) * q))])

    return pd.Series(stats, name="years_to_fire")


def final_portfolio_stats(result: MonteCarloResult) -> pd.Series:
    """
    Distribution of final portfolio values over trials that ended above zero.

    Failed trials report a final portfolio of 0 and are left out. Median and
    percentiles are index-based on the sorted values, like
    ``years_to_fire_stats``.

    Args:
        result: Monte Carlo result

    Returns:
        Series with min, max, median, p10, p90 (empty when no trial ended
        above zero)
    """
    values = np.sort(
        [run.final_portfolio for run in result.simulations if run.final_portfolio > 0]
    )
    if values.size == 0:
        return pd.Series(dtype=float, name="final_portfolio")

    n = values.size
    return pd.Series(
        {
            "min": float(values[0]),
            "max": float(values[-1]),
            "median": float(values[n // 2]),
            "p10": float(values[int(math.floor(n * 0.10))]),
            "p90": float(values[int(math.floor(n * 0.90))]),
        },
        name="final_portfolio",
    )


def years_to_fire_histogram(result: MonteCarloResult) -> pd.DataFrame:
    """
    Bin successful trials by years-to-FIRE.

    Uses 5 to 20 bins (about one per two years of spread), plus one more when
    needed so the largest value is counted. The bin holding the median is
    flagged.

    Args:
        result: Monte Carlo result

    Returns:
        DataFrame with columns range, bin_start, bin_end, count, is_median
    """
    columns = ["range", "bin_start", "bin_end", "count", "is_median"]
    years = np.asarray(result.successful_years())
    if years.size == 0:
        return pd.DataFrame(columns=columns)

    low, high = int(years.min()), int(years.max())
    spread = high - low
    bin_count = min(max(math.ceil(spread / 2), 5), 20)
    bin_size = math.ceil(spread / bin_count) or 1
    # Last bin must reach the maximum
    bin_count = max(bin_count, math.ceil((spread + 1) / bin_size))

    rows = []
    for i in range(bin_count):
        start = low + i * bin_size
        end = start + bin_size - 1
        rows.append(
            {
                "range": f"{start}" if bin_size == 1 else f"{start}-{end}",
                "bin_start": start,
                "bin_end": end,
                "count": int(((years >= start) & (years <= end)).sum()),
                "is_median": start <= result.median_years_to_fire <= end,
            }
        )
    return pd.DataFrame(rows, columns=columns)


def portfolio_drawdown(result: CalculationResult) -> float:
    """
    Maximum drawdown of the projected portfolio from its running peak.

    Returns 0.0 for empty projections or a portfolio that never had a
    positive peak.
    """
    if not result.projections:
        return 0.0
    values = result.to_frame()["portfolio_value"]
    running_max = values.expanding().max()
    drawdown = np.where(running_max > 0, (values - running_max) / running_max, 0.0)
    return float(drawdown.min())


def displayed_final_portfolio(
    result: CalculationResult, current_age: int, zoom_years: int | None = None
) -> float:
    """
    Portfolio value at the end of a zoom window.

    Args:
        result: Projection result
        current_age: Age in the first projected year
        zoom_years: Window length in years (None = whole horizon)

    Returns:
        Last projected portfolio value at or before ``current_age + zoom_years``
        (the first year's value if the window ends before it), 0.0 when the
        result has errors or no projections
    """
    if result.has_errors() or not result.projections:
        return 0.0
    if zoom_years is None:
        return result.projections[-1].portfolio_value

    target_age = current_age + zoom_years
    value = result.projections[0].portfolio_value
    for projection in result.projections:
        if projection.age > target_age:
            break
        value = projection.portfolio_value
    return value
