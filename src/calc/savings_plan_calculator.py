"""Savings plan solver.

Answers "how much do I have to save each month to receive a target annual
dividend after N years" by bisecting over the monthly contribution.
"""

from model.SimulationData import SavingsPlanGoal, SavingsPlanResult, SavingsPlanYear


# Width of the search interval (EUR per month) at which the bisection stops.
TOLERANCE = 0.1

# Upper search bound as a multiple of the target annual dividend.
UPPER_BOUND_FACTOR = 10


class SavingsPlanCalculator:
    """Calculator for the monthly contribution needed to reach a dividend goal.

    The search interval is [0, target * 10]. When even the upper bound does not
    reach the target, the upper bound is returned without further notice, so
    the contribution must then be read as an upper estimate.
    """

    def simulate(self, goal: SavingsPlanGoal, monthly_contribution: float) -> SavingsPlanResult:
        """Simulate the plan for a fixed monthly contribution.

        Each year the contributions and the previous year's dividend are added
        to the portfolio, then the dividend is recomputed from the new value
        with growth applied as (1 + growth) ** year.

        Args:
            goal: The savings goal providing yield, growth, horizon and start capital
            monthly_contribution: Amount saved per month in EUR

        Returns:
            SavingsPlanResult for this contribution
        """
        yield_fraction = goal.average_yield / 100
        growth = 1 + goal.dividend_growth_rate / 100

        portfolio_value = goal.initial_investment
        annual_dividend = portfolio_value * yield_fraction
        breakdown = []

        for year in range(1, goal.years + 1):
            portfolio_value += monthly_contribution * 12
            portfolio_value += annual_dividend
            annual_dividend = portfolio_value * yield_fraction * growth ** year

            breakdown.append(SavingsPlanYear(
                year=year,
                portfolio_value=portfolio_value,
                annual_dividend=annual_dividend,
                monthly_contribution=monthly_contribution,
            ))

        return SavingsPlanResult(
            required_monthly_contribution=monthly_contribution,
            total_invested=goal.initial_investment + monthly_contribution * 12 * goal.years,
            final_portfolio_value=portfolio_value,
            final_annual_dividend=annual_dividend,
            yearly_breakdown=breakdown,
        )

    def solve(self, goal: SavingsPlanGoal) -> SavingsPlanResult:
        """Find the smallest monthly contribution that meets the goal.

        Bisects until the search interval is at most TOLERANCE wide and
        returns the simulation at the upper end of the final interval.
        """
        low = 0.0
        high = goal.target_annual_dividend * UPPER_BOUND_FACTOR

        while high - low > TOLERANCE:
            mid = (low + high) / 2
            result = self.simulate(goal, mid)
            if result.final_annual_dividend >= goal.target_annual_dividend:
                high = mid
            else:
                low = mid

        return self.simulate(goal, high)
