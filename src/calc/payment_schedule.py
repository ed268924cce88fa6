"""Dividend payment schedule expansion.

Turns a position's configured payment dates into taxed payments, consuming
the free allowance payment by payment.
"""

from datetime import date
from typing import List, Optional

from model.Portfolio import Position, parse_date
from model.DividendData import DividendPayment, PaymentSchedule
from tax.DividendTaxDetails import DividendTaxDetails


class PaymentScheduleCalculator:
    """Calculator for the taxed dividend payments of a single position.

    The allowance is consumed in the order the dates appear in
    `payment_dates`, while the returned payments are sorted by date. When the
    dates are not declared chronologically, an earlier payment can therefore
    receive less allowance than a later one.
    """

    def __init__(self, tax_details: Optional[DividendTaxDetails] = None):
        self.tax_details = tax_details or DividendTaxDetails()

    def gross_per_payment(self, position: Position) -> float:
        """Gross EUR amount paid on each payment date."""
        return position.dividend_in_eur() * position.quantity

    def expand(self, position: Position, start_date: date, end_date: date,
               allowance_remaining: float) -> PaymentSchedule:
        """Expand the payments of a position within [start_date, end_date].

        Args:
            position: The position whose payment dates are expanded
            start_date: First day of the window (inclusive)
            end_date: Last day of the window (inclusive)
            allowance_remaining: Free allowance available before the first payment

        Returns:
            PaymentSchedule with the payments sorted by date and the
            allowance left after all of them
        """
        start = parse_date(start_date)
        end = parse_date(end_date)
        gross = self.gross_per_payment(position)

        payments: List[DividendPayment] = []
        remaining = allowance_remaining

        for date_str in position.payment_dates:
            payment_date = parse_date(date_str)
            if payment_date < start or payment_date > end:
                continue

            tax = self.tax_details.net_dividend(gross, position.country, remaining)
            payments.append(DividendPayment(
                position_id=position.id,
                position_name=position.name,
                date=payment_date.isoformat(),
                gross_amount=tax.gross,
                withholding_tax=tax.withholding_tax,
                capital_gains_tax=tax.capital_gains_tax,
                net_amount=tax.net,
            ))

            used = min(remaining, gross)
            remaining = max(0.0, remaining - used)

        payments.sort(key=lambda p: p.date)
        return PaymentSchedule(payments=payments, allowance_remaining=remaining)

    def expand_payments(self, position: Position, start_date: date, end_date: date,
                        allowance_remaining: float) -> List[DividendPayment]:
        """Same as expand(), returning only the payments."""
        return self.expand(position, start_date, end_date, allowance_remaining).payments
