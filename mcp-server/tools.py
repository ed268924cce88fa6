"""Dividend Planner Tools for MCP Server.

This module provides the tool implementations that wrap the dividend
calculators and expose their data through MCP.
"""

import os
import sys
from datetime import date
from typing import Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from calc.allowance_optimizer import AllowanceOptimizer
from calc.dashboard_calculator import (
    DashboardCalculator,
    goal_progress,
    portfolio_performance,
    sector_allocation,
    sector_dividends,
    top_positions,
    yield_on_cost,
)
from calc.drip_calculator import DRIPCalculator
from calc.payment_schedule import PaymentScheduleCalculator
from calc.savings_plan_calculator import SavingsPlanCalculator
from model.SimulationData import DRIPScenario, SavingsPlanGoal
from portfolio_loader import (
    list_portfolio_names,
    load_portfolio,
    load_tax_details,
    load_vorabpauschale_details,
)


def _rounded(record: dict) -> dict:
    return {k: round(v, 2) if isinstance(v, float) else v for k, v in record.items()}


class PortfolioTools:
    """Tools that wrap the dividend calculators for one portfolio."""

    def __init__(self, base_path: str, portfolio_name: str):
        """Initialize with paths and load the portfolio.

        Args:
            base_path: Path to the project root directory
            portfolio_name: Name of the portfolio folder in input-parameters
        """
        self.base_path = base_path
        self.portfolio_name = portfolio_name
        self.portfolio = load_portfolio(portfolio_name, base_path)
        self._init_calculators()

    def _init_calculators(self):
        """Initialize all calculators from the reference data."""
        self.tax_details = load_tax_details(self.base_path)
        self.schedule_calculator = PaymentScheduleCalculator(self.tax_details)
        self.dashboard = DashboardCalculator(self.schedule_calculator)
        self.optimizer = AllowanceOptimizer(self.tax_details)

    @property
    def free_allowance(self) -> float:
        return self.portfolio.tax_config.free_allowance

    def get_portfolio_overview(self) -> dict:
        """Get an overview of the positions and planning inputs."""
        positions = self.portfolio.positions
        return {
            "portfolio_name": self.portfolio_name,
            "position_count": len(positions),
            "free_allowance": self.free_allowance,
            "monthly_goal": self.portfolio.monthly_goal,
            "positions": [
                {
                    "id": p.id,
                    "name": p.name,
                    "country": p.country,
                    "sector": p.sector,
                    "currency": p.currency,
                    "quantity": p.quantity,
                    "payment_dates": list(p.payment_dates),
                    "yield_on_cost": round(yield_on_cost(p), 2),
                }
                for p in positions
            ],
            "top_positions": [
                {"name": name, "annual_dividend": round(amount, 2)}
                for name, amount in top_positions(positions)
            ],
            "drip_scenarios": [s.get('name', '') for s in self.portfolio.drip_scenarios],
            "has_savings_goal": self.portfolio.savings_goal is not None,
        }

    def get_dashboard_stats(self, year: Optional[int] = None) -> dict:
        """Get the dividend totals of a calendar year."""
        year = year or date.today().year
        stats = self.dashboard.calculate(self.portfolio.positions, self.free_allowance, year)
        result = {"year": year, **_rounded(stats.to_dict())}
        if self.portfolio.monthly_goal > 0:
            progress = goal_progress(self.portfolio.monthly_goal, stats.average_monthly_net, stats.total_net_annual)
            result["goal"] = _rounded(progress.to_dict())
        return result

    def get_payment_schedule(self, year: Optional[int] = None, position_id: Optional[str] = None) -> dict:
        """Get the taxed payments of a year, optionally for a single position.

        For a single position the full free allowance is applied to it;
        otherwise the allowance is shared across positions in list order.
        """
        year = year or date.today().year
        if position_id is not None:
            position = next((p for p in self.portfolio.positions if p.id == position_id), None)
            if position is None:
                return {"error": f"Position '{position_id}' not found"}
            schedule = self.schedule_calculator.expand(
                position, date(year, 1, 1), date(year, 12, 31), self.free_allowance)
            payments = schedule.payments
        else:
            payments = self.dashboard.payments_for_year(self.portfolio.positions, self.free_allowance, year)

        return {
            "year": year,
            "payments": [_rounded(p.to_dict()) for p in payments],
            "total_net": round(sum(p.net_amount for p in payments), 2),
        }

    def get_monthly_dividends(self, year: Optional[int] = None) -> dict:
        """Get gross and net dividends for each month of a year."""
        year = year or date.today().year
        months = self.dashboard.monthly_chart(self.portfolio.positions, self.free_allowance, year)
        return {"year": year, "months": [_rounded(m.to_dict()) for m in months]}

    def get_upcoming_payments(self, days: int = 30, limit: Optional[int] = None) -> dict:
        """Get payments due in the next days."""
        payments = self.dashboard.upcoming_payments(
            self.portfolio.positions, self.free_allowance, days=days, limit=limit)
        return {"days": days, "payments": [_rounded(p.to_dict()) for p in payments]}

    def get_portfolio_performance(self) -> dict:
        """Get cost, market value and gain of the portfolio."""
        return _rounded(portfolio_performance(self.portfolio.positions).to_dict())

    def get_sector_allocation(self) -> dict:
        """Get market value and annual dividend split by sector."""
        positions = self.portfolio.positions
        return {
            "by_market_value": [_rounded(s.to_dict()) for s in sector_allocation(positions)],
            "by_annual_dividend": [_rounded(s.to_dict()) for s in sector_dividends(positions)],
        }

    def optimize_free_allowance(self) -> dict:
        """Suggest how to spread the free allowance over the positions."""
        suggestions = self.optimizer.optimize(self.portfolio.positions, self.free_allowance)
        used = sum(s.suggested_allowance for s in suggestions)
        return {
            "free_allowance": self.free_allowance,
            "allocated": round(used, 2),
            "unallocated": round(self.free_allowance - used, 2),
            "total_tax_savings": round(sum(s.tax_savings for s in suggestions), 2),
            "suggestions": [_rounded(s.to_dict()) for s in suggestions],
        }

    def simulate_drip(self) -> dict:
        """Project the DRIP scenarios configured for the portfolio."""
        if not self.portfolio.drip_scenarios:
            return {"error": f"Portfolio '{self.portfolio_name}' defines no DRIP scenarios"}
        return simulate_drip(self.portfolio.drip_scenarios)

    def solve_savings_plan(self) -> dict:
        """Find the monthly contribution for the portfolio's savings goal."""
        if not self.portfolio.savings_goal:
            return {"error": f"Portfolio '{self.portfolio_name}' defines no savings goal"}
        return solve_savings_plan(self.portfolio.savings_goal)


def calculate_net_dividend(tax_details, gross: float, country: str, free_allowance_remaining: float) -> dict:
    """Run the tax waterfall for a single gross dividend."""
    return _rounded(tax_details.net_dividend(gross, country, free_allowance_remaining).to_dict())


def simulate_drip(raw_scenarios: List[dict]) -> dict:
    comparison = DRIPCalculator().compare([DRIPScenario.from_dict(s) for s in raw_scenarios])
    return {
        "scenarios": [
            {"name": name, "results": [_rounded(r.to_dict()) for r in results]}
            for name, results in comparison
        ]
    }


def solve_savings_plan(raw_goal: dict) -> dict:
    goal = SavingsPlanGoal.from_dict(raw_goal)
    result = SavingsPlanCalculator().solve(goal)
    data = result.to_dict()
    data["yearly_breakdown"] = [_rounded(y) for y in data["yearly_breakdown"]]
    data = _rounded(data)
    data["target_reached"] = result.final_annual_dividend >= goal.target_annual_dividend
    return data


class MultiPortfolioTools:
    """Manager for multiple portfolios.

    Discovers all available portfolios and caches their calculators,
    allowing queries to specify which portfolio to use.
    """

    def __init__(self, base_path: str, default_portfolio: Optional[str] = None):
        """Initialize and discover all available portfolios.

        Args:
            base_path: Path to the project root directory
            default_portfolio: Default portfolio to use when none specified
        """
        self.base_path = base_path
        self.portfolios: Dict[str, PortfolioTools] = {}
        self.default_portfolio = default_portfolio
        self.tax_details = load_tax_details(base_path)
        self.vorabpauschale_details = load_vorabpauschale_details(base_path)
        self._discover_portfolios()

    def _discover_portfolios(self):
        """Discover and load all available portfolios."""
        for name in list_portfolio_names(self.base_path):
            try:
                self.portfolios[name] = PortfolioTools(self.base_path, name)
            except Exception as e:
                # Log but don't fail on individual portfolio errors
                print(f"Warning: Failed to load portfolio '{name}': {e}", file=sys.stderr)

        if self.default_portfolio is None and self.portfolios:
            self.default_portfolio = list(self.portfolios.keys())[0]

    def _get_portfolio(self, portfolio: Optional[str] = None) -> PortfolioTools:
        """Get the specified portfolio or the default."""
        name = portfolio or self.default_portfolio
        if name not in self.portfolios:
            available = list(self.portfolios.keys())
            raise ValueError(f"Portfolio '{name}' not found. Available portfolios: {available}")
        return self.portfolios[name]

    def _tagged(self, result: dict, portfolio: Optional[str]) -> dict:
        result["portfolio"] = portfolio or self.default_portfolio
        return result

    def list_portfolios(self) -> dict:
        """List all available portfolios."""
        portfolios_info = {}
        for name, tools in self.portfolios.items():
            portfolios_info[name] = {
                "position_count": len(tools.portfolio.positions),
                "free_allowance": tools.free_allowance,
            }
        return {
            "available_portfolios": list(self.portfolios.keys()),
            "default_portfolio": self.default_portfolio,
            "portfolios_info": portfolios_info,
        }

    def reload_portfolios(self) -> dict:
        """Reload all portfolios from disk, refreshing the cache."""
        old_portfolios = set(self.portfolios.keys())

        self.portfolios.clear()
        self.default_portfolio = None
        self.tax_details = load_tax_details(self.base_path)
        self.vorabpauschale_details = load_vorabpauschale_details(self.base_path)
        self._discover_portfolios()

        new_portfolios = set(self.portfolios.keys())
        return {
            "status": "success",
            "message": f"Reloaded {len(self.portfolios)} portfolios",
            "portfolios_loaded": list(self.portfolios.keys()),
            "default_portfolio": self.default_portfolio,
            "changes": {
                "added": sorted(new_portfolios - old_portfolios),
                "removed": sorted(old_portfolios - new_portfolios),
                "reloaded": sorted(old_portfolios & new_portfolios),
            },
        }

    def get_portfolio_overview(self, portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_portfolio_overview(), portfolio)

    def get_dashboard_stats(self, year: Optional[int] = None, portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_dashboard_stats(year), portfolio)

    def get_payment_schedule(self, year: Optional[int] = None, position_id: Optional[str] = None,
                             portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_payment_schedule(year, position_id), portfolio)

    def get_monthly_dividends(self, year: Optional[int] = None, portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_monthly_dividends(year), portfolio)

    def get_upcoming_payments(self, days: int = 30, limit: Optional[int] = None,
                              portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_upcoming_payments(days, limit), portfolio)

    def get_portfolio_performance(self, portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_portfolio_performance(), portfolio)

    def get_sector_allocation(self, portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).get_sector_allocation(), portfolio)

    def optimize_free_allowance(self, portfolio: Optional[str] = None) -> dict:
        return self._tagged(self._get_portfolio(portfolio).optimize_free_allowance(), portfolio)

    def simulate_drip(self, scenario: Optional[dict] = None, portfolio: Optional[str] = None) -> dict:
        if scenario:
            return simulate_drip([scenario])
        return self._tagged(self._get_portfolio(portfolio).simulate_drip(), portfolio)

    def solve_savings_plan(self, goal: Optional[dict] = None, portfolio: Optional[str] = None) -> dict:
        if goal:
            return solve_savings_plan(goal)
        return self._tagged(self._get_portfolio(portfolio).solve_savings_plan(), portfolio)

    def calculate_net_dividend(self, gross: float, country: str, free_allowance_remaining: float = 0.0) -> dict:
        """Run the tax waterfall for a single gross dividend."""
        return calculate_net_dividend(self.tax_details, gross, country, free_allowance_remaining)

    def calculate_vorabpauschale(self, value_start: float, value_end: float, distributions: float,
                                 year: int, base_rate: Optional[float] = None) -> dict:
        """Calculate the advance lump-sum tax on an accumulating fund."""
        try:
            result = self.vorabpauschale_details.calculate(value_start, value_end, distributions, year, base_rate)
        except KeyError as e:
            return {"error": e.args[0]}
        return _rounded(result.to_dict())
