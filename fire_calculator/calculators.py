"""
calculators.py

Provides the core calculation logic for:
- simulate_years: how many (fractional) years savings last under compounding
  interest, recurring income and inflating costs
- depletion_schedule: the same projection recorded year by year
- salary accrual between a reference instant and now
"""

from datetime import datetime
from typing import Optional

import pandas as pd

from config import INFLATION_RATE, INTEREST_RATE, MAX_YEARS, START_DATE
from models import DEFAULT_INCOME_SCHEDULE, IncomeSchedule, SimulationInput


def simulate_years(
    principal: float,
    annual_income: float,
    annual_cost: float,
    interest_rate: float = INTEREST_RATE,
    inflation_rate: float = INFLATION_RATE,
    start_year: int = START_DATE.year,
    income_schedule: Optional[IncomeSchedule] = None,
) -> float:
    """
    Projects the balance forward one calendar year at a time until it goes
    negative, and returns the number of years survived. The final year is
    prorated as money / (-cost). Stops at MAX_YEARS.

    annual_cost must be positive; callers report 0 years otherwise.
    """
    schedule = income_schedule or DEFAULT_INCOME_SCHEDULE
    years = 0.0
    money = principal
    cost = annual_cost
    year = start_year

    while money > 0 and years < MAX_YEARS:
        income = schedule.income_for(year, annual_income)
        money += income                  # income lands first
        money *= (1 + interest_rate)     # compounding
        money -= cost                    # this year's living cost
        if money < 0:
            years += money / (-cost)
            break
        cost *= (1 + inflation_rate)
        years += 1
        year += 1

    return years


def simulate_years_for(sim: SimulationInput, income_schedule: Optional[IncomeSchedule] = None) -> float:
    return simulate_years(
        sim.principal,
        sim.annual_income,
        sim.annual_cost,
        interest_rate=sim.interest_rate,
        inflation_rate=sim.inflation_rate,
        start_year=sim.start_year,
        income_schedule=income_schedule,
    )


def depletion_schedule(sim: SimulationInput, income_schedule: Optional[IncomeSchedule] = None) -> pd.DataFrame:
    """
    Year-by-year version of simulate_years for charting. One row per
    simulated calendar year with the income received, the cost paid and the
    closing balance. 'Fraction' is 1.0 for a full year and the proration of
    the year in which the balance runs out.
    """
    schedule = income_schedule or DEFAULT_INCOME_SCHEDULE
    money = sim.principal
    cost = sim.annual_cost
    year = sim.start_year
    rows = []

    while money > 0 and len(rows) < MAX_YEARS:
        income = schedule.income_for(year, sim.annual_income)
        money = (money + income) * (1 + sim.interest_rate) - cost
        fraction = 1.0
        if money < 0:
            fraction = money / (-cost)
        rows.append({
            "Year": year,
            "Income": income,
            "Cost": cost,
            "Balance": money,
            "Fraction": fraction,
        })
        if money < 0:
            break
        cost *= (1 + sim.inflation_rate)
        year += 1

    return pd.DataFrame(rows, columns=["Year", "Income", "Cost", "Balance", "Fraction"])


def salary_per_second(annual_income: float) -> float:
    return annual_income / 365 / 24 / 60 / 60


def accrued_deposit(deposit: float, annual_income: float, now: datetime, start: datetime = START_DATE) -> float:
    """
    Deposit plus salary earned continuously since 'start'. Before 'start'
    nothing has accrued.
    """
    elapsed_seconds = max(0.0, (now - start).total_seconds())
    return deposit + salary_per_second(annual_income) * elapsed_seconds
