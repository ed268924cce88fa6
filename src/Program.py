import sys
import os
import argparse
from datetime import date

from calc.dashboard_calculator import DashboardCalculator, goal_progress, portfolio_performance, sector_allocation
from calc.payment_schedule import PaymentScheduleCalculator
from calc.allowance_optimizer import AllowanceOptimizer
from calc.drip_calculator import DRIPCalculator
from calc.savings_plan_calculator import SavingsPlanCalculator
from model.SimulationData import DRIPScenario, SavingsPlanGoal
from portfolio_loader import load_portfolio, load_tax_details, load_vorabpauschale_details
from render.renderers import (
    DashboardRenderer,
    PaymentsRenderer,
    MonthlyRenderer,
    SectorRenderer,
    AllowanceOptimizerRenderer,
    DRIPRenderer,
    SavingsPlanRenderer,
    VorabpauschaleRenderer,
    RENDERER_REGISTRY,
)


BASE_PATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..'))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Dividend portfolio planner',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Dashboard           Dividend totals, taxes and portfolio value for a year (default)
  Payments            Every taxed payment of the year, in date order
  Monthly             Gross and net dividends per month
  Sectors             Market value per sector
  AllowanceOptimizer  Suggested split of the free allowance
  DRIP                Dividend reinvestment projections from dripScenarios
  SavingsPlan         Monthly contribution needed to reach savingsGoal
  Vorabpauschale      Advance lump-sum tax for an accumulating fund

Examples:
  python src/Program.py example
  python src/Program.py example --mode Payments --year 2026
  python src/Program.py example --mode DRIP
  python src/Program.py example --mode Vorabpauschale --start-value 50000 --end-value 55000 --distributions 500 --year 2024
  python src/Program.py example --mode Vorabpauschale --start-value 50000 --end-value 55000 --base-rate 3.2
        """
    )
    parser.add_argument('portfolio', help='Name of the portfolio (folder in input-parameters)')
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Dashboard',
                        help='Output mode (default: Dashboard)')
    parser.add_argument('--year', '-y', type=int, default=None,
                        help='Calendar year (defaults to the current year)')
    parser.add_argument('--start-value', type=float, default=0.0,
                        help='Vorabpauschale: fund value at the start of the year')
    parser.add_argument('--end-value', type=float, default=0.0,
                        help='Vorabpauschale: fund value at the end of the year')
    parser.add_argument('--distributions', type=float, default=0.0,
                        help='Vorabpauschale: distributions paid during the year')
    parser.add_argument('--base-rate', type=float, default=None,
                        help='Vorabpauschale: base rate in percent (defaults to the reference value for --year)')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        portfolio = load_portfolio(args.portfolio, BASE_PATH)
    except FileNotFoundError as e:
        print(e)
        sys.exit(1)

    year = args.year or date.today().year
    tax_details = load_tax_details(BASE_PATH)
    dashboard = DashboardCalculator(PaymentScheduleCalculator(tax_details))
    positions = portfolio.positions
    free_allowance = portfolio.tax_config.free_allowance

    if args.mode == 'Dashboard':
        stats = dashboard.calculate(positions, free_allowance, year)
        DashboardRenderer(year).render({
            'stats': stats,
            'performance': portfolio_performance(positions),
            'goal': goal_progress(portfolio.monthly_goal, stats.average_monthly_net, stats.total_net_annual),
        })
    elif args.mode == 'Payments':
        PaymentsRenderer().render(dashboard.payments_for_year(positions, free_allowance, year))
    elif args.mode == 'Monthly':
        MonthlyRenderer().render(dashboard.monthly_chart(positions, free_allowance, year))
    elif args.mode == 'Sectors':
        SectorRenderer().render(sector_allocation(positions))
    elif args.mode == 'AllowanceOptimizer':
        AllowanceOptimizerRenderer().render(AllowanceOptimizer(tax_details).optimize(positions, free_allowance))
    elif args.mode == 'DRIP':
        if not portfolio.drip_scenarios:
            print(f"Portfolio '{portfolio.name}' defines no dripScenarios")
            sys.exit(1)
        scenarios = [DRIPScenario.from_dict(s) for s in portfolio.drip_scenarios]
        DRIPRenderer().render(DRIPCalculator().compare(scenarios))
    elif args.mode == 'SavingsPlan':
        if not portfolio.savings_goal:
            print(f"Portfolio '{portfolio.name}' defines no savingsGoal")
            sys.exit(1)
        goal = SavingsPlanGoal.from_dict(portfolio.savings_goal)
        SavingsPlanRenderer(goal.target_annual_dividend).render(SavingsPlanCalculator().solve(goal))
    elif args.mode == 'Vorabpauschale':
        details = load_vorabpauschale_details(BASE_PATH)
        try:
            result = details.calculate(args.start_value, args.end_value, args.distributions, year,
                                       base_rate=args.base_rate)
        except KeyError as e:
            print(e.args[0])
            sys.exit(1)
        VorabpauschaleRenderer().render(result)


if __name__ == "__main__":
    main()
