"""Dividend reinvestment (DRIP) projection.

Projects share count, invested capital and dividend income year by year
for a single holding whose dividends are reinvested. The projection is
pre-tax and does not use the tax waterfall.
"""

from typing import List, Tuple

from model.Portfolio import divide
from model.SimulationData import DRIPScenario, DRIPResult


# Dividends are modeled as quarterly payments regardless of a position's interval.
PAYMENTS_PER_YEAR = 4


class DRIPCalculator:
    """Calculator for year-by-year DRIP compounding.

    Each projected year:
    1. Pays the annual dividend on the shares held at the start of the year
    2. Reinvests the dividend at the current share price
    3. Buys shares with twelve monthly contributions at the current share price
    4. Records the year
    5. Grows the dividend per share by the dividend growth rate and the share
       price by a quarter of the average yield
    """

    def simulate(self, scenario: DRIPScenario) -> List[DRIPResult]:
        """Project a scenario over its horizon.

        Args:
            scenario: The DRIP scenario to project

        Returns:
            List of `years + 1` results; index 0 is the starting position
            before any reinvestment or contribution
        """
        shares = divide(scenario.initial_investment, scenario.share_price)
        total_invested = scenario.initial_investment
        dividend_per_share = scenario.dividend_per_share
        share_price = scenario.share_price

        results = [DRIPResult(
            year=0,
            shares=shares,
            total_invested=total_invested,
            portfolio_value=shares * share_price,
            annual_dividend=shares * dividend_per_share * PAYMENTS_PER_YEAR,
            dividend_per_share=dividend_per_share,
            share_price=share_price,
        )]

        yearly_contribution = scenario.monthly_contribution * 12

        for year in range(1, scenario.years + 1):
            annual_dividend = shares * dividend_per_share * PAYMENTS_PER_YEAR

            shares += divide(annual_dividend, share_price)

            shares += divide(yearly_contribution, share_price)
            total_invested += yearly_contribution

            results.append(DRIPResult(
                year=year,
                shares=shares,
                total_invested=total_invested,
                portfolio_value=shares * share_price,
                annual_dividend=annual_dividend,
                dividend_per_share=dividend_per_share,
                share_price=share_price,
            ))

            dividend_per_share *= (1 + scenario.dividend_growth_rate / 100)
            # Price appreciation is a quarter of the yield per year.
            share_price *= (1 + scenario.average_yield / 100 / 4)

        return results

    def compare(self, scenarios: List[DRIPScenario]) -> List[Tuple[str, List[DRIPResult]]]:
        """Project several scenarios side by side, keeping their order."""
        return [(scenario.name, self.simulate(scenario)) for scenario in scenarios]
