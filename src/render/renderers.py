"""Renderer classes for displaying dividend planning results.

This module contains renderer classes that handle the presentation logic
for the different calculator outputs. Each renderer takes the result
records of one calculator and prints them as a console table.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from model.DividendData import (
    AllowanceSuggestion,
    DashboardStats,
    DividendPayment,
    GoalProgress,
    MonthlyDividends,
    PortfolioPerformance,
    SectorValue,
)
from model.SimulationData import DRIPResult, SavingsPlanResult
from model.field_metadata import get_short_name, wrap_header
from tax.VorabpauschaleDetails import VorabpauschaleResult


def format_multiline_headers(columns: List[tuple], first_label: str = 'Year',
                             first_width: int = 6) -> tuple[List[str], str]:
    """Format column headers with multi-line wrapping support.

    Args:
        columns: List of (header_text, width) tuples for each column
        first_label: Label of the leading key column
        first_width: Width of the leading key column

    Returns:
        Tuple of (list of header lines, separator line)
    """
    wrapped_headers = []
    for header, width in columns:
        lines = wrap_header(header, width)
        wrapped_headers.append((lines, width))

    max_lines = max(len(lines) for lines, _ in wrapped_headers) if wrapped_headers else 1

    # Pad at top so the last header line lines up
    for lines, _ in wrapped_headers:
        while len(lines) < max_lines:
            lines.insert(0, "")

    header_lines = []
    for line_idx in range(max_lines):
        label = first_label if line_idx == max_lines - 1 else ''
        header_line = f"  {label:<{first_width}}"
        for lines, width in wrapped_headers:
            header_line += f" {lines[line_idx]:>{width}}"
        header_lines.append(header_line)

    sep_line = f"  {'-' * first_width}"
    for _, width in wrapped_headers:
        sep_line += f" {'-' * width}"

    return header_lines, sep_line


def print_title(title: str, width: int) -> None:
    print()
    print("=" * width)
    print(f"{title:^{width}}")
    print("=" * width)
    print()


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data: Any) -> None:
        """Render the data to output.

        Args:
            data: The calculator result to display
        """
        pass


class DashboardRenderer(BaseRenderer):
    """Renderer for the yearly dividend dashboard."""

    def __init__(self, year: int):
        self.year = year

    def render(self, data: dict) -> None:
        """Render dashboard totals.

        Args:
            data: Dict with 'stats' (DashboardStats), 'performance'
                  (PortfolioPerformance) and optionally 'goal' (GoalProgress)
        """
        stats: DashboardStats = data['stats']
        performance: PortfolioPerformance = data['performance']
        goal: GoalProgress = data.get('goal')

        print_title(f"DIVIDEND DASHBOARD {self.year}", 60)

        print("-" * 60)
        print("DIVIDENDS")
        print("-" * 60)
        print(f"  {'Gross Dividends:':<40} {stats.total_gross_annual:>14,.2f} €")
        print(f"  {'Withholding Tax:':<40} {stats.total_withholding_tax:>14,.2f} €")
        print(f"  {'Capital Gains Tax:':<40} {stats.total_capital_gains_tax:>14,.2f} €")
        print(f"  {'-' * 40}")
        print(f"  {'Net Dividends:':<40} {stats.total_net_annual:>14,.2f} €")
        print(f"  {'Average Monthly Net:':<40} {stats.average_monthly_net:>14,.2f} €")
        print(f"  {'Free Allowance Remaining:':<40} {stats.free_allowance_remaining:>14,.2f} €")

        print()
        print("-" * 60)
        print("PORTFOLIO")
        print("-" * 60)
        print(f"  {'Total Cost:':<40} {performance.total_cost:>14,.2f} €")
        print(f"  {'Market Value:':<40} {performance.total_value:>14,.2f} €")
        print(f"  {'Gain / Loss:':<40} {performance.total_gain:>14,.2f} €")
        print(f"  {'Performance:':<40} {performance.performance_percent:>13.2f} %")

        if goal is not None and goal.monthly_goal > 0:
            print()
            print("-" * 60)
            print("MONTHLY GOAL")
            print("-" * 60)
            print(f"  {'Monthly Goal:':<40} {goal.monthly_goal:>14,.2f} €")
            print(f"  {'Progress:':<40} {goal.progress_percent:>13.1f} %")
            print(f"  {'Missing per Month:':<40} {goal.monthly_remaining:>14,.2f} €")
            print(f"  {'Missing per Year:':<40} {goal.annual_remaining:>14,.2f} €")
        print()


class PaymentsRenderer(BaseRenderer):
    """Renderer for a list of taxed dividend payments."""

    def render(self, data: List[DividendPayment]) -> None:
        print_title("DIVIDEND PAYMENTS", 112)

        if not data:
            print("  No payments in this period.")
            print()
            return

        columns = [
            (get_short_name("position_name"), 28),
            (get_short_name("gross_amount"), 12),
            (get_short_name("withholding_tax"), 12),
            (get_short_name("capital_gains_tax"), 12),
            (get_short_name("net_amount"), 12),
        ]
        header_lines, sep_line = format_multiline_headers(columns, first_label='Date', first_width=10)
        for line in header_lines:
            print(line)
        print(sep_line)

        for p in data:
            print(f"  {p.date:<10} {p.position_name[:28]:>28} {p.gross_amount:>12,.2f} {p.withholding_tax:>12,.2f} {p.capital_gains_tax:>12,.2f} {p.net_amount:>12,.2f}")

        print(sep_line)
        print(f"  {'Total':<10} {'':>28} {sum(p.gross_amount for p in data):>12,.2f} {sum(p.withholding_tax for p in data):>12,.2f} {sum(p.capital_gains_tax for p in data):>12,.2f} {sum(p.net_amount for p in data):>12,.2f}")
        print()


class MonthlyRenderer(BaseRenderer):
    """Renderer for gross and net dividends per month."""

    def render(self, data: List[MonthlyDividends]) -> None:
        print_title("DIVIDENDS PER MONTH", 40)

        columns = [
            (get_short_name("gross"), 12),
            (get_short_name("net"), 12),
        ]
        header_lines, sep_line = format_multiline_headers(columns, first_label='Month', first_width=8)
        for line in header_lines:
            print(line)
        print(sep_line)
        for m in data:
            print(f"  {m.month:<8} {m.gross:>12,.2f} {m.net:>12,.2f}")
        print()


class SectorRenderer(BaseRenderer):
    """Renderer for the market value split by sector."""

    def render(self, data: List[SectorValue]) -> None:
        print_title("SECTOR ALLOCATION", 60)
        for s in data:
            print(f"  {s.label + ':':<30} {s.value:>14,.0f} € {s.percentage:>8.1f} %")
        print()


class AllowanceOptimizerRenderer(BaseRenderer):
    """Renderer for the suggested free allowance split."""

    def render(self, data: List[AllowanceSuggestion]) -> None:
        print_title("FREE ALLOWANCE OPTIMIZATION", 100)

        columns = [
            (get_short_name("gross_annual_dividend"), 12),
            (get_short_name("withholding_tax"), 12),
            (get_short_name("priority"), 12),
            (get_short_name("suggested_allowance"), 12),
            (get_short_name("tax_savings"), 12),
        ]
        header_lines, sep_line = format_multiline_headers(columns, first_label='Position', first_width=28)
        for line in header_lines:
            print(line)
        print(sep_line)
        for s in data:
            print(f"  {s.position_name[:28]:<28} {s.gross_annual_dividend:>12,.2f} {s.withholding_tax:>12,.2f} {s.priority:>12,.2f} {s.suggested_allowance:>12,.2f} {s.tax_savings:>12,.2f}")
        print(sep_line)
        print(f"  {'Total Tax Savings:':<28} {sum(s.tax_savings for s in data):>64,.2f}")
        print()


class DRIPRenderer(BaseRenderer):
    """Renderer for one or more DRIP projections."""

    def render(self, data: List[Tuple[str, List[DRIPResult]]]) -> None:
        for name, results in data:
            print_title(f"DRIP PROJECTION {name.upper()}".strip(), 96)

            columns = [
                (get_short_name("shares"), 12),
                (get_short_name("share_price"), 10),
                (get_short_name("total_invested"), 14),
                (get_short_name("portfolio_value"), 14),
                (get_short_name("annual_dividend"), 12),
                (get_short_name("dividend_per_share"), 10),
            ]
            header_lines, sep_line = format_multiline_headers(columns)
            for line in header_lines:
                print(line)
            print(sep_line)
            for r in results:
                print(f"  {r.year:<6} {r.shares:>12,.2f} {r.share_price:>10,.2f} {r.total_invested:>14,.2f} {r.portfolio_value:>14,.2f} {r.annual_dividend:>12,.2f} {r.dividend_per_share:>10,.4f}")
            print()


class SavingsPlanRenderer(BaseRenderer):
    """Renderer for the savings plan solution."""

    def __init__(self, target_annual_dividend: float):
        self.target_annual_dividend = target_annual_dividend

    def render(self, data: SavingsPlanResult) -> None:
        print_title("SAVINGS PLAN", 60)

        print(f"  {'Target Annual Dividend:':<40} {self.target_annual_dividend:>14,.2f} €")
        print(f"  {'Required Monthly Contribution:':<40} {data.required_monthly_contribution:>14,.2f} €")
        print(f"  {'Total Invested:':<40} {data.total_invested:>14,.2f} €")
        print(f"  {'Final Portfolio Value:':<40} {data.final_portfolio_value:>14,.2f} €")
        print(f"  {'Final Annual Dividend:':<40} {data.final_annual_dividend:>14,.2f} €")
        if data.final_annual_dividend < self.target_annual_dividend:
            print("  Target not reachable within the search range; contribution is an upper estimate.")
        print()

        columns = [
            (get_short_name("portfolio_value"), 16),
            (get_short_name("annual_dividend"), 14),
        ]
        header_lines, sep_line = format_multiline_headers(columns)
        for line in header_lines:
            print(line)
        print(sep_line)
        for y in data.yearly_breakdown:
            print(f"  {y.year:<6} {y.portfolio_value:>16,.2f} {y.annual_dividend:>14,.2f}")
        print()


class VorabpauschaleRenderer(BaseRenderer):
    """Renderer for the advance lump-sum tax calculation."""

    def render(self, data: VorabpauschaleResult) -> None:
        print_title(f"VORABPAUSCHALE {data.year}", 60)
        print(f"  {'Base Rate:':<40} {data.base_rate:>13.2f} %")
        print(f"  {'Base Yield:':<40} {data.base_yield:>14,.2f} €")
        print(f"  {'Value Increase:':<40} {data.value_increase:>14,.2f} €")
        print(f"  {'Vorabpauschale:':<40} {data.vorabpauschale:>14,.2f} €")
        print(f"  {'-' * 40}")
        print(f"  {'Capital Gains Tax:':<40} {data.capital_gains_tax:>14,.2f} €")
        print(f"  {'Solidarity Surcharge:':<40} {data.solidarity_surcharge:>14,.2f} €")
        print(f"  {'Total Tax:':<40} {data.total_tax:>14,.2f} €")
        print(f"  {'Effective Rate on Increase:':<40} {data.effective_rate:>13.2f} %")
        print()


RENDERER_REGISTRY = {
    'Dashboard': DashboardRenderer,
    'Payments': PaymentsRenderer,
    'Monthly': MonthlyRenderer,
    'Sectors': SectorRenderer,
    'AllowanceOptimizer': AllowanceOptimizerRenderer,
    'DRIP': DRIPRenderer,
    'SavingsPlan': SavingsPlanRenderer,
    'Vorabpauschale': VorabpauschaleRenderer,
}
