"""
Monte Carlo estimation of the probability of reaching FIRE.

Each trial replays the projection's per-year state machine with randomized
returns and keeps only its terminal outcome. Trials are independent; a batch
shares one ReturnGenerator so that a seed reproduces the whole batch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any

from .cashflow import grow_labor_income, is_working, year_flow
from .errors import ConfigError
from .results import (
    MonteCarloResult,
    MonteCarloResultWithLogs,
    SimulationLogEntry,
    SimulationRun,
    SimulationYearData,
)
from .returns import ReturnGenerator
from .specs import (
    DEPLETION_FLOOR,
    MAX_SAFE_VALUE,
    MC_AGE_LIMIT,
    MC_MAX_YEARS,
    FinancialInputs,
    MonteCarloInputs,
)
from .validation import MSG_ALLOCATION, MSG_TARGET_TOO_LARGE

log = logging.getLogger(__name__)


def _out_of_range(value: float) -> bool:
    return not math.isfinite(value) or value > MAX_SAFE_VALUE


def _check_preconditions(inputs: FinancialInputs, mc_inputs: MonteCarloInputs) -> float:
    """Validate inputs for a batch and return the FIRE target."""
    if not inputs.allocation_is_valid():
        raise ConfigError(MSG_ALLOCATION.format(total=inputs.allocation_sum))
    if not inputs.desired_withdrawal_rate > 0:
        raise ConfigError("desired_withdrawal_rate must be greater than 0")
    mc_inputs.validate()

    fire_target = inputs.fire_target()
    if _out_of_range(fire_target):
        raise ConfigError(MSG_TARGET_TOO_LARGE)
    return fire_target


def simulation_years(inputs: FinancialInputs, current_year: int) -> int:
    """Trial horizon: at most 50 years and never past age 100."""
    return max(0, min(MC_MAX_YEARS, MC_AGE_LIMIT - inputs.current_age(current_year)))


def _run_trial(
    inputs: FinancialInputs,
    mc_inputs: MonteCarloInputs,
    generator: ReturnGenerator,
    *,
    simulation_id: int,
    fire_target: float,
    current_year: int,
    yearly_data: list[SimulationYearData] | None = None,
) -> SimulationRun:
    current_age = inputs.current_age(current_year)

    portfolio = inputs.initial_savings
    labor_income = inputs.annual_labor_income
    fire_achieved = False
    years_to_fire: int | None = None

    for i in range(simulation_years(inputs, current_year)):
        age = current_age + i
        returns = generator.annual_returns(inputs, mc_inputs)
        portfolio_return = returns.blended(inputs)

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

        if yearly_data is not None:
            yearly_data.append(
                SimulationYearData(
                    year=current_year + i,
                    age=age,
                    stock_return=returns.stocks * 100,
                    bond_return=returns.bonds * 100,
                    cash_return=returns.cash * 100,
                    portfolio_return=portfolio_return * 100,
                    is_black_swan=returns.is_black_swan,
                    expenses=flow.expenses,
                    labor_income=flow.labor_income,
                    total_income=flow.total_income,
                    portfolio_value=portfolio,
                    is_fire_achieved=fire_achieved,
                )
            )

        portfolio = portfolio + flow.net_change
        labor_income = grow_labor_income(inputs, labor_income, working)

        if (
            _out_of_range(portfolio)
            or _out_of_range(labor_income)
            or portfolio < DEPLETION_FLOOR
        ):
            log.debug(
                "Trial %d failed at age %d: portfolio %.2f, labor income %.2f",
                simulation_id,
                age,
                portfolio,
                labor_income,
            )
            return SimulationRun(
                simulation_id=simulation_id,
                success=False,
                years_to_fire=None,
                final_portfolio=0.0,
            )

    return SimulationRun(
        simulation_id=simulation_id,
        success=fire_achieved,
        years_to_fire=years_to_fire,
        final_portfolio=portfolio,
    )


def simulate(
    inputs: FinancialInputs,
    mc_inputs: MonteCarloInputs,
    seed: int | None = None,
    current_year: int | None = None,
) -> MonteCarloResult:
    """
    Run a batch of Monte Carlo trials and aggregate their outcomes.

    Unlike ``project``, invalid inputs raise instead of being reported in the
    result.

    Args:
        inputs: Financial inputs
        mc_inputs: Monte Carlo parameters
        seed: Seed for the batch's random generator (None = fresh entropy)
        current_year: Calendar year of the first simulated year (default: today)

    Returns:
        MonteCarloResult with one SimulationRun per trial

    Raises:
        ConfigError: If the allocation does not sum to 100%, the withdrawal
            rate is not positive, or the Monte Carlo parameters are out of bounds
    """
    fire_target = _check_preconditions(inputs, mc_inputs)
    if current_year is None:
        current_year = date.today().year

    generator = ReturnGenerator(seed=seed)
    runs = [
        _run_trial(
            inputs,
            mc_inputs,
            generator,
            simulation_id=i + 1,
            fire_target=fire_target,
            current_year=current_year,
        )
        for i in range(mc_inputs.num_simulations)
    ]

    result = MonteCarloResult.from_runs(runs)
    log.info(
        "Monte Carlo batch: %d trials, success rate %.1f%%",
        len(runs),
        result.success_rate,
    )
    return result


def fixed_parameters(inputs: FinancialInputs, mc_inputs: MonteCarloInputs) -> dict[str, Any]:
    """Parameters that stay constant across every trial of a batch."""
    return {
        "initial_savings": inputs.initial_savings,
        "stocks_percent": inputs.stocks_percent,
        "bonds_percent": inputs.bonds_percent,
        "cash_percent": inputs.cash_percent,
        "current_annual_expenses": inputs.current_annual_expenses,
        "fire_annual_expenses": inputs.fire_annual_expenses,
        "annual_labor_income": inputs.annual_labor_income,
        "savings_rate": inputs.savings_rate,
        "desired_withdrawal_rate": inputs.desired_withdrawal_rate,
        "expected_stock_return": inputs.expected_stock_return,
        "expected_bond_return": inputs.expected_bond_return,
        "expected_cash_return": inputs.expected_cash_return,
        "num_simulations": mc_inputs.num_simulations,
        "stock_volatility": mc_inputs.stock_volatility,
        "bond_volatility": mc_inputs.bond_volatility,
        "black_swan_probability": mc_inputs.black_swan_probability,
        "black_swan_impact": mc_inputs.black_swan_impact,
        "stop_working_at_fire": inputs.stop_working_at_fire,
    }


def simulate_with_logs(
    inputs: FinancialInputs,
    mc_inputs: MonteCarloInputs,
    seed: int | None = None,
    current_year: int | None = None,
) -> MonteCarloResultWithLogs:
    """
    Run a batch like ``simulate`` and keep a year-by-year log of every trial.

    Logs are returned in trial order and carry the same outcome as the
    matching SimulationRun.
    """
    fire_target = _check_preconditions(inputs, mc_inputs)
    if current_year is None:
        current_year = date.today().year

    generator = ReturnGenerator(seed=seed)
    runs: list[SimulationRun] = []
    logs: list[SimulationLogEntry] = []

    for i in range(mc_inputs.num_simulations):
        yearly_data: list[SimulationYearData] = []
        run = _run_trial(
            inputs,
            mc_inputs,
            generator,
            simulation_id=i + 1,
            fire_target=fire_target,
            current_year=current_year,
            yearly_data=yearly_data,
        )
        runs.append(run)
        logs.append(
            SimulationLogEntry(
                simulation_id=run.simulation_id,
                timestamp=datetime.now(timezone.utc).isoformat(),
                success=run.success,
                years_to_fire=run.years_to_fire,
                final_portfolio=run.final_portfolio,
                yearly_data=yearly_data,
            )
        )

    result = MonteCarloResultWithLogs.from_runs(runs)
    log.info(
        "Monte Carlo batch with logs: %d trials, success rate %.1f%%",
        len(runs),
        result.success_rate,
    )
    return replace(result, logs=logs, fixed_parameters=fixed_parameters(inputs, mc_inputs))
