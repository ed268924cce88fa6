from typing import Dict, Optional

from model.DividendData import TaxResult


# Foreign withholding tax (Quellensteuer) by country of the paying company,
# after double-taxation treaty reduction.
WITHHOLDING_TAX_RATES: Dict[str, float] = {
    'DE': 0.0,
    'US': 0.15,
    'CH': 0.35,
    'GB': 0.0,
    'FR': 0.12,
    'NL': 0.15,
    'AT': 0.275,
    'IE': 0.0,
}

# German Kapitalertragsteuer: 25% plus 5.5% solidarity surcharge on that tax.
CAPITAL_GAINS_TAX_RATE = 0.26375


class DividendTaxDetails:
    """Holds dividend tax statutory details and runs the tax waterfall.

    Constructed with statutory values loaded from the reference file (or the
    module defaults). Calculation methods accept the variable inputs: the
    gross dividend, the paying country and the remaining free allowance.
    """

    def __init__(self, withholding_rates: Optional[Dict[str, float]] = None,
                 capital_gains_rate: float = CAPITAL_GAINS_TAX_RATE):
        """Initialize with statutory details.

        Args:
            withholding_rates: Country code to withholding rate (0.15 for 15%).
                Unknown countries are taxed at 0.
            capital_gains_rate: Combined domestic capital gains tax rate.
        """
        self.withholding_rates = dict(WITHHOLDING_TAX_RATES if withholding_rates is None else withholding_rates)
        self.capital_gains_rate = capital_gains_rate

    @classmethod
    def from_reference(cls, reference: dict) -> 'DividendTaxDetails':
        """Build from the parsed contents of reference/tax-details.json."""
        return cls(
            withholding_rates=reference.get('withholdingTaxRates', WITHHOLDING_TAX_RATES),
            capital_gains_rate=reference.get('capitalGainsTaxRate', CAPITAL_GAINS_TAX_RATE),
        )

    def withholding_rate(self, country: str) -> float:
        return self.withholding_rates.get(country, 0.0)

    def withholding_tax(self, gross_dividend: float, country: str) -> float:
        """Tax withheld at source by the paying country."""
        return gross_dividend * self.withholding_rate(country)

    def net_dividend(self, gross_dividend: float, country: str, free_allowance_remaining: float) -> TaxResult:
        """Run the dividend tax waterfall for one gross amount.

        Order of the steps:
        1. Withholding tax on the full gross amount.
        2. The free allowance reduces the taxable base (never the withholding tax).
        3. Domestic capital gains tax on the taxable base.
        4. Withholding tax is credited against the domestic tax, capped at the
           domestic liability. Excess foreign tax is neither refunded nor carried forward.
        5. Net = gross - withholding - remaining capital gains tax.

        Args:
            gross_dividend: Gross dividend in EUR.
            country: Country code of the paying company.
            free_allowance_remaining: Allowance still available for this payment.

        Returns:
            TaxResult with the final (post-credit) capital gains tax.
        """
        withholding_tax = self.withholding_tax(gross_dividend, country)

        taxable_amount = gross_dividend
        if free_allowance_remaining > 0:
            taxable_amount -= min(taxable_amount, free_allowance_remaining)

        capital_gains_tax = taxable_amount * self.capital_gains_rate

        creditable_tax = min(withholding_tax, capital_gains_tax)
        final_capital_gains_tax = max(0.0, capital_gains_tax - creditable_tax)

        net = gross_dividend - withholding_tax - final_capital_gains_tax
        return TaxResult(
            gross=gross_dividend,
            withholding_tax=withholding_tax,
            capital_gains_tax=final_capital_gains_tax,
            net=net,
        )
