"""
Deterministic year-by-year wealth projection.
"""

from __future__ import annotations

import logging
import math
from datetime import date

from .cashflow import BucketReturns, grow_labor_income, is_working, year_flow
from .results import CalculationResult, YearProjection
from .specs import DEPLETION_FLOOR, MAX_SAFE_VALUE, FinancialInputs
from .validation import MSG_TARGET_TOO_LARGE, validate_inputs

log = logging.getLogger(__name__)


def _out_of_range(value: float) -> bool:
    return not math.isfinite(value) or value > MAX_SAFE_VALUE


def project(inputs: FinancialInputs, current_year: int | None = None) -> CalculationResult:
    """
    Project the portfolio from the current age up to ``max_age``.

    The FIRE check happens at the start of each year, before that year's cash
    flows: the first year whose starting portfolio meets the target is
    reported as years-to-FIRE and already flagged ``is_fire``.

    Validation problems never raise. They are returned inside the result with
    empty projections and ``years_to_fire == -1``.

    Args:
        inputs: Financial inputs
        current_year: Calendar year of the first projected year (default: today)

    Returns:
        CalculationResult with one YearProjection per year. The projection
        stops early, without error, when the portfolio or labor income
        overflows or the portfolio falls below the depletion floor.

    Example:
        ```python
        from firelab import FinancialInputs, project

        result = project(FinancialInputs(initial_savings=100_000))
        if not result.has_errors():
            print(result.fire_age, result.fire_target)
        ```
    """
    if current_year is None:
        current_year = date.today().year

    report = validate_inputs(inputs, current_year)
    if report.has_errors():
        return CalculationResult.invalid(report.errors)

    fire_target = inputs.fire_target()
    if _out_of_range(fire_target):
        return CalculationResult.invalid([MSG_TARGET_TOO_LARGE])

    current_age = inputs.current_age(current_year)
    portfolio_return = BucketReturns.expected(inputs).blended(inputs)

    projections: list[YearProjection] = []
    portfolio = inputs.initial_savings
    labor_income = inputs.annual_labor_income
    fire_achieved = False
    years_to_fire = -1

    for i in range(inputs.max_age - current_age + 1):
        year = current_year + i
        age = current_age + i

        if not fire_achieved and portfolio >= fire_target:
            fire_achieved = True
            years_to_fire = i

        working = is_working(inputs, fire_achieved)
        flow = year_flow(
            inputs,
            age=age,
            portfolio=portfolio,
            labor_income=labor_income,
            portfolio_return=portfolio_return,
            fire_achieved=fire_achieved,
            working=working,
        )

        projections.append(
            YearProjection(
                year=year,
                age=age,
                labor_income=flow.labor_income,
                investment_yield=flow.investment_yield,
                total_income=flow.total_income,
                expenses=flow.expenses,
                net_savings=flow.net_change,
                portfolio_value=portfolio,
                fire_target=fire_target,
                is_fire=fire_achieved,
                state_pension_income=flow.state_pension_income,
                private_pension_income=flow.private_pension_income,
                other_income=flow.other_income,
            )
        )

        portfolio = portfolio + flow.net_change
        labor_income = grow_labor_income(inputs, labor_income, working)

        if _out_of_range(portfolio) or _out_of_range(labor_income):
            log.debug("Projection stopped at age %d: values exceed safe range", age)
            break
        if portfolio < DEPLETION_FLOOR:
            log.debug("Projection stopped at age %d: portfolio depleted (%.2f)", age, portfolio)
            break

    return CalculationResult(
        projections=projections,
        years_to_fire=years_to_fire,
        fire_target=fire_target,
        final_portfolio_value=projections[-1].portfolio_value if projections else 0.0,
    )
