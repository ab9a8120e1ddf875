"""
models.py

Contains the data types passed between the page and the calculators:
- SimulationInput (one depletion simulation request)
- IncomeOverride / IncomeSchedule (fixed-income policy by calendar year)
- LifeStyle (yearly cost plus interest/inflation percents)
- FireConfig (everything the page persists)
"""

from dataclasses import dataclass, field
from typing import List, Optional

from config import DEFAULTS


@dataclass(frozen=True)
class IncomeOverride:
    """
    From effective_year onwards, income is fixed_income regardless of the
    configured annual income.
    """

    effective_year: int
    fixed_income: float


class IncomeSchedule:
    """
    Ordered list of income overrides. The latest override whose
    effective_year is on or before a given year wins.
    """

    def __init__(self, overrides: Optional[List[IncomeOverride]] = None):
        self._overrides = tuple(sorted(overrides or [], key=lambda o: o.effective_year))

    @property
    def overrides(self) -> tuple:
        return self._overrides

    def income_for(self, year: int, configured_income: float) -> float:
        income = configured_income
        for override in self._overrides:
            if year < override.effective_year:
                break
            income = override.fixed_income
        return income

    def __repr__(self):
        return f"IncomeSchedule({list(self._overrides)!r})"


# From 2035 on, yearly income is a flat 50,000
DEFAULT_INCOME_SCHEDULE = IncomeSchedule([IncomeOverride(effective_year=2035, fixed_income=50_000)])


@dataclass(frozen=True)
class SimulationInput:
    """
    One depletion simulation request. Rates are fractions (0.04 == 4%).
    """

    principal: float
    annual_income: float
    annual_cost: float
    interest_rate: float
    inflation_rate: float
    start_year: int


@dataclass
class LifeStyle:
    """
    A spending profile. Rates are stored as percents, the way the user
    types them.
    """

    desc: str
    year_cost: float
    interest_rate: float = DEFAULTS["life_style"]["interest_rate"]
    inflation_rate: float = DEFAULTS["life_style"]["inflation_rate"]

    def interest_fraction(self) -> float:
        return self.interest_rate / 100

    def inflation_fraction(self) -> float:
        return self.inflation_rate / 100

    @classmethod
    def default(cls) -> "LifeStyle":
        return cls(**DEFAULTS["life_style"])

    def to_dict(self) -> dict:
        return {
            "desc": self.desc,
            "yearCost": self.year_cost,
            "interestRate": self.interest_rate,
            "inflationRate": self.inflation_rate,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "LifeStyle":
        fallback = DEFAULTS["life_style"]
        interest = raw.get("interestRate")
        inflation = raw.get("inflationRate")
        return cls(
            desc=str(raw.get("desc", fallback["desc"])),
            year_cost=float(raw.get("yearCost", fallback["year_cost"])),
            interest_rate=fallback["interest_rate"] if interest is None else float(interest),
            inflation_rate=fallback["inflation_rate"] if inflation is None else float(inflation),
        )


@dataclass
class FireConfig:
    """
    User settings persisted between sessions.
    """

    deposit: float = DEFAULTS["deposit"]
    annual_income: float = DEFAULTS["annual_income"]
    life_styles: List[LifeStyle] = field(default_factory=lambda: [LifeStyle.default()])

    @property
    def life_style(self) -> LifeStyle:
        # Only the first profile is active
        if not self.life_styles:
            return LifeStyle.default()
        return self.life_styles[0]

    def to_dict(self) -> dict:
        return {
            "deposit": self.deposit,
            "annualIncome": self.annual_income,
            "lifeStyles": [ls.to_dict() for ls in self.life_styles],
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "FireConfig":
        deposit = raw.get("deposit")
        income = raw.get("annualIncome")
        styles = [LifeStyle.from_dict(item) for item in raw.get("lifeStyles") or []]
        return cls(
            deposit=DEFAULTS["deposit"] if deposit is None else float(deposit),
            annual_income=DEFAULTS["annual_income"] if income is None else float(income),
            life_styles=styles or [LifeStyle.default()],
        )
