"""Portfolio-level dividend aggregation.

Folds the payment schedules of all positions into yearly totals and
provides the valuation and breakdown figures shown next to them.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from model.Portfolio import Position, PAYMENTS_PER_YEAR, SECTOR_LABELS
from model.DividendData import (
    DashboardStats,
    DividendPayment,
    GoalProgress,
    MonthlyDividends,
    PortfolioPerformance,
    SectorValue,
)
from calc.payment_schedule import PaymentScheduleCalculator


def group_payments_by_month(payments: List[DividendPayment]) -> List[MonthlyDividends]:
    """Sum gross and net amounts per calendar month, sorted by month."""
    months: Dict[str, MonthlyDividends] = {}
    for payment in payments:
        key = payment.date[:7]
        entry = months.setdefault(key, MonthlyDividends(month=key))
        entry.gross += payment.gross_amount
        entry.net += payment.net_amount
    return [months[key] for key in sorted(months)]


def annual_dividend(position: Position) -> float:
    """Expected gross EUR dividend per year based on the payment interval."""
    per_year = PAYMENTS_PER_YEAR.get(position.payment_interval, 0)
    return position.dividend_in_eur() * position.quantity * per_year


def yield_on_cost(position: Position) -> float:
    """Annual dividend as a percentage of the original purchase cost."""
    cost = position.quantity * position.purchase_price
    if cost == 0:
        return 0.0
    return annual_dividend(position) / cost * 100


def portfolio_performance(positions: List[Position]) -> PortfolioPerformance:
    """Valuation and gain of the portfolio, without any tax logic."""
    total_cost = 0.0
    total_value = 0.0
    for p in positions:
        total_cost += p.quantity * p.purchase_price
        total_value += p.quantity * p.market_price()

    total_gain = total_value - total_cost
    performance_percent = (total_gain / total_cost) * 100 if total_cost > 0 else 0.0
    return PortfolioPerformance(
        total_cost=total_cost,
        total_value=total_value,
        total_gain=total_gain,
        performance_percent=performance_percent,
    )


def top_positions(positions: List[Position], n: int = 5) -> List[tuple]:
    """The n positions with the highest annual dividend as (name, amount)."""
    ranked = sorted(((p.name, annual_dividend(p)) for p in positions), key=lambda item: item[1], reverse=True)
    return ranked[:n]


def sector_dividends(positions: List[Position]) -> List[SectorValue]:
    """Annual dividend per sector, in order of first appearance."""
    totals: Dict[str, float] = {}
    for p in positions:
        totals[p.sector] = totals.get(p.sector, 0.0) + annual_dividend(p)
    return [SectorValue(sector=s, label=SECTOR_LABELS.get(s, s), value=v) for s, v in totals.items()]


def sector_allocation(positions: List[Position]) -> List[SectorValue]:
    """Market value per sector, rounded to whole EUR, largest first."""
    totals: Dict[str, float] = {}
    for p in positions:
        totals[p.sector] = totals.get(p.sector, 0.0) + p.quantity * p.market_price()

    sectors = [SectorValue(sector=s, label=SECTOR_LABELS.get(s, s), value=round(v)) for s, v in totals.items()]
    sectors.sort(key=lambda s: s.value, reverse=True)

    total = sum(s.value for s in sectors)
    for s in sectors:
        s.percentage = s.value / total * 100 if total > 0 else 0.0
    return sectors


def goal_progress(monthly_goal: float, monthly_net: float, annual_net: float) -> GoalProgress:
    """Progress towards a monthly net dividend goal."""
    annual_goal = monthly_goal * 12
    return GoalProgress(
        monthly_goal=monthly_goal,
        annual_goal=annual_goal,
        progress_percent=(monthly_net / monthly_goal) * 100 if monthly_goal > 0 else 0.0,
        monthly_remaining=max(0.0, monthly_goal - monthly_net),
        annual_remaining=max(0.0, annual_goal - annual_net),
    )


class DashboardCalculator:
    """Aggregates taxed dividend payments across a portfolio.

    One free allowance is shared by the whole portfolio. It is handed from
    position to position in list order, so the allowance is used up by the
    positions listed first rather than by the earliest payments of the year.
    """

    def __init__(self, schedule_calculator: Optional[PaymentScheduleCalculator] = None):
        self.schedule_calculator = schedule_calculator or PaymentScheduleCalculator()

    def calculate(self, positions: List[Position], free_allowance: float,
                  year: Optional[int] = None) -> DashboardStats:
        """Calculate the dividend totals for a calendar year.

        Args:
            positions: Positions in the order the allowance is consumed
            free_allowance: Annual free allowance in EUR
            year: Calendar year (defaults to the current year)

        Returns:
            DashboardStats for the year
        """
        year = year if year is not None else date.today().year
        year_start = date(year, 1, 1)
        year_end = date(year, 12, 31)

        stats = DashboardStats()
        remaining = free_allowance

        for position in positions:
            schedule = self.schedule_calculator.expand(position, year_start, year_end, remaining)
            for payment in schedule.payments:
                stats.total_gross_annual += payment.gross_amount
                stats.total_net_annual += payment.net_amount
                stats.total_withholding_tax += payment.withholding_tax
                stats.total_capital_gains_tax += payment.capital_gains_tax
            remaining = schedule.allowance_remaining

        stats.average_monthly_net = stats.total_net_annual / 12
        stats.free_allowance_remaining = remaining
        return stats

    def payments_for_year(self, positions: List[Position], free_allowance: float,
                          year: Optional[int] = None) -> List[DividendPayment]:
        """All payments of the year with the allowance threaded as in calculate(), sorted by date."""
        year = year if year is not None else date.today().year
        remaining = free_allowance
        payments: List[DividendPayment] = []
        for position in positions:
            schedule = self.schedule_calculator.expand(position, date(year, 1, 1), date(year, 12, 31), remaining)
            payments.extend(schedule.payments)
            remaining = schedule.allowance_remaining
        payments.sort(key=lambda p: p.date)
        return payments

    def monthly_chart(self, positions: List[Position], free_allowance: float,
                      year: Optional[int] = None) -> List[MonthlyDividends]:
        """Gross and net dividends for each of the twelve months of a year.

        Each position is expanded with the full allowance; the chart does not
        share the allowance between positions.
        """
        year = year if year is not None else date.today().year
        payments: List[DividendPayment] = []
        for position in positions:
            payments.extend(self.schedule_calculator.expand_payments(
                position, date(year, 1, 1), date(year, 12, 31), free_allowance))

        grouped = {m.month: m for m in group_payments_by_month(payments)}
        months = []
        for month in range(1, 13):
            key = f"{year}-{month:02d}"
            months.append(grouped.get(key, MonthlyDividends(month=key)))
        return months

    def upcoming_payments(self, positions: List[Position], free_allowance: float,
                          today: Optional[date] = None, days: int = 30,
                          limit: Optional[int] = None) -> List[DividendPayment]:
        """Payments strictly after today and at most `days` days ahead.

        Each position is expanded with the full allowance.
        """
        today = today or date.today()
        end = today + timedelta(days=days)
        payments: List[DividendPayment] = []
        for position in positions:
            payments.extend(self.schedule_calculator.expand_payments(position, today, end, free_allowance))

        payments = [p for p in payments if p.date > today.isoformat()]
        payments.sort(key=lambda p: p.date)
        return payments[:limit] if limit is not None else payments

