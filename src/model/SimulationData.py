"""Inputs and results of the forward-looking investment simulations."""

from dataclasses import dataclass, asdict, field
from typing import List


@dataclass
class DRIPScenario:
    """Parameters of a dividend reinvestment projection.

    Rates are percentages (4 means 4%).
    """
    initial_investment: float
    monthly_contribution: float
    years: int
    average_yield: float
    dividend_growth_rate: float
    share_price: float
    dividend_per_share: float
    name: str = ''

    @classmethod
    def from_dict(cls, data: dict) -> 'DRIPScenario':
        return cls(
            initial_investment=data.get('initialInvestment', 0.0),
            monthly_contribution=data.get('monthlyContribution', 0.0),
            years=int(data.get('years', 0)),
            average_yield=data.get('averageYield', 0.0),
            dividend_growth_rate=data.get('dividendGrowthRate', 0.0),
            share_price=data.get('sharePrice', 0.0),
            dividend_per_share=data.get('dividendPerShare', 0.0),
            name=data.get('name', ''),
        )


@dataclass
class DRIPResult:
    """Snapshot of a DRIP projection at the end of one year."""
    year: int
    shares: float
    total_invested: float
    portfolio_value: float
    annual_dividend: float
    dividend_per_share: float
    share_price: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SavingsPlanGoal:
    """Target for the savings plan solver. Rates are percentages."""
    target_annual_dividend: float
    average_yield: float
    years: int
    dividend_growth_rate: float
    initial_investment: float

    @classmethod
    def from_dict(cls, data: dict) -> 'SavingsPlanGoal':
        return cls(
            target_annual_dividend=data.get('targetAnnualDividend', 0.0),
            average_yield=data.get('averageYield', 0.0),
            years=int(data.get('years', 0)),
            dividend_growth_rate=data.get('dividendGrowthRate', 0.0),
            initial_investment=data.get('initialInvestment', 0.0),
        )


@dataclass
class SavingsPlanYear:
    year: int
    portfolio_value: float
    annual_dividend: float
    monthly_contribution: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SavingsPlanResult:
    required_monthly_contribution: float
    total_invested: float
    final_portfolio_value: float
    final_annual_dividend: float
    yearly_breakdown: List[SavingsPlanYear] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
