from typing import List, Optional

from model.Portfolio import Position
from model.DividendData import AllowanceSuggestion
from tax.DividendTaxDetails import DividendTaxDetails


class AllowanceOptimizer:
    """Suggests how to spread the free allowance over the positions.

    Positions are ranked by their annual tax burden (withholding tax plus the
    domestic tax left after crediting it). The allowance is then handed out
    greedily in that order, each position receiving at most its gross annual
    dividend.
    """

    def __init__(self, tax_details: Optional[DividendTaxDetails] = None):
        self.tax_details = tax_details or DividendTaxDetails()

    def gross_annual_dividend(self, position: Position) -> float:
        """Gross EUR dividend over all configured payment dates."""
        return position.dividend_in_eur() * position.quantity * len(position.payment_dates)

    def optimize(self, positions: List[Position], free_allowance: float) -> List[AllowanceSuggestion]:
        """Rank positions by tax burden and allocate the allowance.

        Args:
            positions: Portfolio positions
            free_allowance: Annual free allowance in EUR

        Returns:
            Suggestions sorted by priority, highest first
        """
        rate = self.tax_details.capital_gains_rate
        suggestions: List[AllowanceSuggestion] = []

        for position in positions:
            gross = self.gross_annual_dividend(position)
            withholding_rate = self.tax_details.withholding_rate(position.country)
            withholding_tax = gross * withholding_rate

            kest = (gross - withholding_tax) * rate
            remaining_kest = kest - min(withholding_tax, kest)

            suggestions.append(AllowanceSuggestion(
                position_id=position.id,
                position_name=position.name,
                country=position.country,
                gross_annual_dividend=gross,
                withholding_tax_rate=withholding_rate,
                withholding_tax=withholding_tax,
                priority=withholding_tax + remaining_kest,
            ))

        suggestions.sort(key=lambda s: s.priority, reverse=True)

        remaining = free_allowance
        for suggestion in suggestions:
            if remaining <= 0:
                break
            allocated = min(remaining, suggestion.gross_annual_dividend)
            suggestion.suggested_allowance = allocated
            suggestion.tax_savings = allocated * rate
            remaining -= allocated

        return suggestions
