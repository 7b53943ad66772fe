"""
Per-year cash-flow step shared by the projection and Monte Carlo engines.
"""

from __future__ import annotations

from typing import NamedTuple

from .specs import FinancialInputs


class BucketReturns(NamedTuple):
    """
    Annual returns of the three allocation buckets, as fractions.

    Attributes:
        stocks: Growth bucket return (e.g. 0.07)
        bonds: Fixed-income bucket return
        cash: Cash bucket return
        is_black_swan: Whether the year was a shock year
    """

    stocks: float
    bonds: float
    cash: float
    is_black_swan: bool = False

    @classmethod
    def expected(cls, inputs: FinancialInputs) -> BucketReturns:
        return cls(
            stocks=inputs.expected_stock_return / 100,
            bonds=inputs.expected_bond_return / 100,
            cash=inputs.expected_cash_return / 100,
        )

    def blended(self, inputs: FinancialInputs) -> float:
        """Portfolio return weighted by the allocation percentages."""
        return (
            (inputs.stocks_percent / 100) * self.stocks
            + (inputs.bonds_percent / 100) * self.bonds
            + (inputs.cash_percent / 100) * self.cash
        )


class YearFlow(NamedTuple):
    """Cash flows of one year; ``net_change`` is what moves the portfolio."""

    labor_income: float
    investment_yield: float
    state_pension_income: float
    private_pension_income: float
    other_income: float
    total_income: float
    expenses: float
    net_change: float


def is_working(inputs: FinancialInputs, fire_achieved: bool) -> bool:
    """Labor stops at FIRE only when ``stop_working_at_fire`` is set."""
    return not fire_achieved if inputs.stop_working_at_fire else True


def year_flow(
    inputs: FinancialInputs,
    *,
    age: int,
    portfolio: float,
    labor_income: float,
    portfolio_return: float,
    fire_achieved: bool,
    working: bool,
) -> YearFlow:
    """
    Compute one year's income, expenses and net portfolio change.

    While working the portfolio grows from the saved slice of labor income
    plus investment yield only. Pensions and other income are reported in
    every year but enter the net change only once the person stops working.

    Args:
        inputs: Financial inputs
        age: Age in this year
        portfolio: Portfolio value at the start of the year
        labor_income: Labor income the person would earn this year
        portfolio_return: Blended portfolio return, as a fraction
        fire_achieved: Whether FIRE has been reached as of this year
        working: Whether the person works this year

    Returns:
        YearFlow for the year
    """
    investment_yield = portfolio * portfolio_return

    earned = labor_income if working else 0.0
    if age >= inputs.retirement_age:
        state_pension = inputs.state_pension_income
        private_pension = inputs.private_pension_income
    else:
        state_pension = 0.0
        private_pension = 0.0
    other = inputs.other_income
    total_income = earned + investment_yield + state_pension + private_pension + other

    expenses = (
        inputs.fire_annual_expenses if fire_achieved else inputs.current_annual_expenses
    )

    if working:
        # The savings rate already accounts for spending while working.
        net_change = labor_income * (inputs.savings_rate / 100) + investment_yield
    else:
        net_change = total_income - expenses

    return YearFlow(
        labor_income=earned,
        investment_yield=investment_yield,
        state_pension_income=state_pension,
        private_pension_income=private_pension,
        other_income=other,
        total_income=total_income,
        expenses=expenses,
        net_change=net_change,
    )


def grow_labor_income(inputs: FinancialInputs, labor_income: float, working: bool) -> float:
    if not working:
        return labor_income
    return labor_income * (1 + inputs.labor_income_growth_rate / 100)
