from dataclasses import dataclass, asdict
from typing import Dict, Optional


# Basiszins published by the Bundesbank, in percent.
BASE_RATES: Dict[int, float] = {
    2023: 2.55,
    2024: 2.29,
    2025: 2.53,
}

PARTIAL_EXEMPTION = 0.7
CAPITAL_GAINS_TAX = 0.25
SOLIDARITY_SURCHARGE = 0.055


@dataclass
class VorabpauschaleResult:
    year: int
    base_rate: float
    base_yield: float
    value_increase: float
    vorabpauschale: float
    capital_gains_tax: float
    solidarity_surcharge: float
    total_tax: float
    effective_rate: float

    def to_dict(self) -> dict:
        return asdict(self)


class VorabpauschaleDetails:
    """Advance lump-sum tax on accumulating funds.

    The taxable lump sum is the smaller of the base yield (start value times
    Basiszins times 0.7) and the actual value increase, reduced by the
    distributions of the year and floored at zero.
    """

    def __init__(self, base_rates: Optional[Dict[int, float]] = None,
                 partial_exemption: float = PARTIAL_EXEMPTION):
        self.base_rates = dict(BASE_RATES if base_rates is None else base_rates)
        self.partial_exemption = partial_exemption

    @classmethod
    def from_reference(cls, reference: dict) -> 'VorabpauschaleDetails':
        section = reference.get('vorabpauschale', {})
        base_rates = section.get('baseRates')
        if base_rates is not None:
            # JSON object keys are strings
            base_rates = {int(year): rate for year, rate in base_rates.items()}
        return cls(base_rates, section.get('partialExemption', PARTIAL_EXEMPTION))

    def base_rate(self, year: int) -> float:
        """Basiszins for a year, in percent.

        Raises:
            KeyError: if no rate is known for the year.
        """
        if year not in self.base_rates:
            raise KeyError(f"No base rate known for {year}. Known years: {sorted(self.base_rates)}")
        return self.base_rates[year]

    def calculate(self, value_start: float, value_end: float, distributions: float,
                  year: int, base_rate: Optional[float] = None) -> VorabpauschaleResult:
        """Calculate the Vorabpauschale and the tax due on it.

        Args:
            value_start: Fund value at the start of the year.
            value_end: Fund value at the end of the year.
            distributions: Distributions actually paid during the year.
            year: Tax year, used to look up the base rate.
            base_rate: Optional base rate in percent overriding the lookup.
        """
        rate = base_rate if base_rate is not None else self.base_rate(year)
        base_yield = value_start * (rate / 100) * self.partial_exemption
        value_increase = value_end - value_start

        vorabpauschale = max(0.0, min(base_yield, value_increase) - distributions)

        kest = vorabpauschale * CAPITAL_GAINS_TAX
        soli = kest * SOLIDARITY_SURCHARGE
        total_tax = kest + soli
        effective_rate = (total_tax / value_increase) * 100 if value_increase > 0 else 0.0

        return VorabpauschaleResult(
            year=year,
            base_rate=rate,
            base_yield=base_yield,
            value_increase=value_increase,
            vorabpauschale=vorabpauschale,
            capital_gains_tax=kest,
            solidarity_surcharge=soli,
            total_tax=total_tax,
            effective_rate=effective_rate,
        )
