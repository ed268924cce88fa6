"""Result records for dividend cash-flow calculations.

All amounts are in EUR. Dates are ISO-8601 strings (YYYY-MM-DD) so the
records can be handed to any presentation or export layer unchanged.
"""

from dataclasses import dataclass, asdict, field
from typing import List


@dataclass
class TaxResult:
    """Outcome of the dividend tax waterfall for one gross amount."""
    gross: float
    withholding_tax: float
    capital_gains_tax: float  # after crediting withholding tax
    net: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DividendPayment:
    """One taxed dividend cash event."""
    position_id: str
    position_name: str
    date: str
    gross_amount: float
    withholding_tax: float
    capital_gains_tax: float
    net_amount: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PaymentSchedule:
    """Payments of one position plus the allowance left after them."""
    payments: List[DividendPayment] = field(default_factory=list)
    allowance_remaining: float = 0.0


@dataclass
class DashboardStats:
    """Portfolio totals for one calendar year."""
    total_gross_annual: float = 0.0
    total_net_annual: float = 0.0
    total_withholding_tax: float = 0.0
    total_capital_gains_tax: float = 0.0
    average_monthly_net: float = 0.0
    free_allowance_remaining: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MonthlyDividends:
    month: str  # YYYY-MM
    gross: float = 0.0
    net: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PortfolioPerformance:
    total_cost: float
    total_value: float
    total_gain: float
    performance_percent: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SectorValue:
    """Aggregated value for one sector, either annual dividend or market value."""
    sector: str
    label: str
    value: float
    percentage: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GoalProgress:
    monthly_goal: float
    annual_goal: float
    progress_percent: float
    monthly_remaining: float
    annual_remaining: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AllowanceSuggestion:
    """Suggested share of the free allowance for one position."""
    position_id: str
    position_name: str
    country: str
    gross_annual_dividend: float
    withholding_tax_rate: float
    withholding_tax: float
    priority: float
    suggested_allowance: float = 0.0
    tax_savings: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)
