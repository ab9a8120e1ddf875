"""
scenario.py

Encapsulates a user's FIRE plan:
- seed deposit plus salary accrued since the reference instant
- the active life style
- years the current deposit supports (zero when there is no cost)
- year-by-year schedule and cost sensitivity for charting
"""

from datetime import datetime
from typing import Optional

import numpy as np
import pandas as pd

import calculators
from config import START_DATE
from models import DEFAULT_INCOME_SCHEDULE, FireConfig, IncomeSchedule, LifeStyle, SimulationInput


def support_years(sim: SimulationInput, income_schedule: Optional[IncomeSchedule] = None) -> float:
    """
    Years the principal supports. A non-positive yearly cost reports 0
    without running the simulation.
    """
    if sim.annual_cost <= 0:
        return 0.0
    return calculators.simulate_years_for(sim, income_schedule)


def cost_sensitivity(
    sim: SimulationInput,
    min_cost: float,
    max_cost: float,
    points: int = 25,
    income_schedule: Optional[IncomeSchedule] = None,
) -> pd.DataFrame:
    """
    Years supported across an evenly spaced grid of yearly costs, everything
    else held fixed.
    """
    costs = np.linspace(min_cost, max_cost, points)
    years = []
    for cost in costs:
        trial = SimulationInput(
            principal=sim.principal,
            annual_income=sim.annual_income,
            annual_cost=float(cost),
            interest_rate=sim.interest_rate,
            inflation_rate=sim.inflation_rate,
            start_year=sim.start_year,
        )
        years.append(support_years(trial, income_schedule))
    return pd.DataFrame({"Yearly Cost": costs, "Years": years})


class FirePlan:
    """
    Holds the settings the page edits and answers the questions it displays.
    """

    def __init__(
        self,
        deposit: float,
        annual_income: float,
        life_style: LifeStyle,
        start_date: datetime = START_DATE,
        income_schedule: IncomeSchedule = DEFAULT_INCOME_SCHEDULE,
    ):
        self.deposit = deposit
        self.annual_income = annual_income
        self.life_style = life_style
        self.start_date = start_date
        self.income_schedule = income_schedule

    @classmethod
    def from_config(cls, config: FireConfig, **kwargs) -> "FirePlan":
        return cls(config.deposit, config.annual_income, config.life_style, **kwargs)

    def to_config(self) -> FireConfig:
        return FireConfig(
            deposit=self.deposit,
            annual_income=self.annual_income,
            life_styles=[self.life_style],
        )

    def update_base(self, deposit: float, annual_income: float):
        self.deposit = deposit
        self.annual_income = annual_income

    def update_life_style(self, desc: str, year_cost: float, interest_rate: float, inflation_rate: float):
        if year_cost < 0:
            raise ValueError(f"year_cost must not be negative, got {year_cost}")
        self.life_style = LifeStyle(
            desc=desc,
            year_cost=year_cost,
            interest_rate=interest_rate,
            inflation_rate=inflation_rate,
        )

    def salary_per_second(self) -> float:
        return calculators.salary_per_second(self.annual_income)

    def current_deposit(self, now: datetime) -> float:
        return calculators.accrued_deposit(self.deposit, self.annual_income, now, self.start_date)

    def simulation_input(self, now: datetime) -> SimulationInput:
        return SimulationInput(
            principal=self.current_deposit(now),
            annual_income=self.annual_income,
            annual_cost=self.life_style.year_cost,
            interest_rate=self.life_style.interest_fraction(),
            inflation_rate=self.life_style.inflation_fraction(),
            start_year=self.start_date.year,
        )

    def support_years(self, now: datetime) -> float:
        return support_years(self.simulation_input(now), self.income_schedule)

    def depletion_table(self, now: datetime) -> pd.DataFrame:
        return calculators.depletion_schedule(self.simulation_input(now), self.income_schedule)

    def cost_sensitivity(self, now: datetime, spread: float = 0.5, points: int = 25) -> pd.DataFrame:
        """
        Years supported for yearly costs from (1 - spread) to (1 + spread)
        times the current life style's cost.
        """
        base_cost = self.life_style.year_cost
        return cost_sensitivity(
            self.simulation_input(now),
            base_cost * (1 - spread),
            base_cost * (1 + spread),
            points=points,
            income_schedule=self.income_schedule,
        )
