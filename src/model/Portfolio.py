"""Portfolio input model.

Positions and tax configuration as supplied by the caller. Values are taken
as-is; quantities, prices and exchange rates are assumed to be validated
upstream.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


PAYMENTS_PER_YEAR: Dict[str, int] = {
    'monthly': 12,
    'quarterly': 4,
    'semi-annual': 2,
    'annual': 1,
}

SECTOR_LABELS: Dict[str, str] = {
    'tech': 'Technology',
    'finance': 'Financials',
    'health': 'Health Care',
    'consumer': 'Consumer',
    'energy': 'Energy',
    'industry': 'Industrials',
    'realestate': 'Real Estate',
    'utilities': 'Utilities',
    'materials': 'Materials',
    'telecom': 'Telecommunications',
    'other': 'Other',
}


def divide(numerator: float, denominator: float) -> float:
    """Float division that yields inf/nan instead of raising on zero."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def parse_date(value) -> date:
    """Parse an ISO-8601 date, ignoring any time component."""
    # datetime is a subclass of date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass
class Position:
    """A single holding in the portfolio."""
    id: str
    name: str
    quantity: float
    purchase_price: float
    dividend_per_share: float
    country: str = 'DE'
    currency: str = 'EUR'
    exchange_rate: float = 1.0  # units of position currency per 1 EUR
    payment_interval: str = 'quarterly'  # informational only
    payment_dates: List[str] = field(default_factory=list)
    purchase_date: str = ''
    sector: str = 'other'
    isin: str = ''
    ticker: Optional[str] = None
    current_price: Optional[float] = None
    ex_dividend_dates: List[str] = field(default_factory=list)
    last_price_update: Optional[str] = None

    def dividend_in_eur(self) -> float:
        """Per-share dividend converted into EUR."""
        if self.currency == 'EUR':
            return self.dividend_per_share
        return divide(self.dividend_per_share, self.exchange_rate)

    def market_price(self) -> float:
        """Current price if known, otherwise the purchase price."""
        return self.current_price if self.current_price is not None else self.purchase_price

    @classmethod
    def from_dict(cls, data: dict) -> 'Position':
        """Build a position from its camelCase JSON representation."""
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            quantity=data.get('quantity', 0),
            purchase_price=data.get('purchasePrice', 0),
            dividend_per_share=data.get('dividendPerShare', 0),
            country=data.get('country', 'DE'),
            currency=data.get('currency', 'EUR'),
            exchange_rate=data.get('exchangeRate', 1.0),
            payment_interval=data.get('paymentInterval', 'quarterly'),
            payment_dates=list(data.get('paymentDates', [])),
            purchase_date=data.get('purchaseDate', ''),
            sector=data.get('sector', 'other'),
            isin=data.get('isin', ''),
            ticker=data.get('ticker'),
            current_price=data.get('currentPrice'),
            ex_dividend_dates=list(data.get('exDividendDates', [])),
            last_price_update=data.get('lastPriceUpdate'),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'isin': self.isin,
            'ticker': self.ticker,
            'quantity': self.quantity,
            'purchasePrice': self.purchase_price,
            'purchaseDate': self.purchase_date,
            'country': self.country,
            'sector': self.sector,
            'dividendPerShare': self.dividend_per_share,
            'currency': self.currency,
            'exchangeRate': self.exchange_rate,
            'paymentInterval': self.payment_interval,
            'paymentDates': list(self.payment_dates),
            'exDividendDates': list(self.ex_dividend_dates),
            'currentPrice': self.current_price,
            'lastPriceUpdate': self.last_price_update,
        }


@dataclass
class TaxConfig:
    """Annual tax-free allowance (Freistellungsauftrag) settings.

    `free_allowance_used` is informational; calculators recompute consumption
    on every call.
    """
    free_allowance: float = 1000.0
    free_allowance_used: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> 'TaxConfig':
        return cls(
            free_allowance=data.get('freeAllowance', 1000.0),
            free_allowance_used=data.get('freeAllowanceUsed', 0.0),
        )


@dataclass
class Portfolio:
    """A named set of positions with its tax configuration and planning inputs."""
    name: str
    positions: List[Position] = field(default_factory=list)
    tax_config: TaxConfig = field(default_factory=TaxConfig)
    drip_scenarios: List[dict] = field(default_factory=list)
    savings_goal: Optional[dict] = None
    monthly_goal: float = 0.0

    @classmethod
    def from_dict(cls, name: str, data: dict) -> 'Portfolio':
        return cls(
            name=name,
            positions=[Position.from_dict(p) for p in data.get('positions', [])],
            tax_config=TaxConfig.from_dict(data.get('taxConfig', {})),
            drip_scenarios=list(data.get('dripScenarios', [])),
            savings_goal=data.get('savingsGoal'),
            monthly_goal=data.get('monthlyGoal', 0.0),
        )
