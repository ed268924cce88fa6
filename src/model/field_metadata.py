"""Field metadata for result record fields.

This module provides descriptions and short names for the fields of the
payment, DRIP and savings plan records. Short names are used as column
headers in tables.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Column header (unique, concise)
    description: str  # Full description of the field


# Field metadata dictionary mapping field names to their info
FIELD_METADATA: Dict[str, FieldInfo] = {
    # Payments
    "date": FieldInfo("Date", "Payment date"),
    "position_name": FieldInfo("Position", "Name of the paying position"),
    "gross_amount": FieldInfo("Gross", "Gross dividend in EUR"),
    "withholding_tax": FieldInfo("Withholding Tax", "Foreign tax withheld at source"),
    "capital_gains_tax": FieldInfo("Capital Gains Tax", "Domestic tax after crediting withholding tax"),
    "net_amount": FieldInfo("Net", "Dividend received after all taxes"),
    "gross": FieldInfo("Gross", "Gross dividends of the month"),
    "net": FieldInfo("Net", "Net dividends of the month"),

    # DRIP projection
    "shares": FieldInfo("Shares", "Shares held at the end of the year"),
    "total_invested": FieldInfo("Total Invested", "Initial investment plus contributions to date"),
    "portfolio_value": FieldInfo("Portfolio Value", "Value of the holding at the end of the year"),
    "annual_dividend": FieldInfo("Annual Dividend", "Dividend paid during the year"),
    "dividend_per_share": FieldInfo("Dividend / Share", "Quarterly dividend per share"),
    "share_price": FieldInfo("Share Price", "Share price during the year"),

    # Savings plan
    "monthly_contribution": FieldInfo("Monthly Contribution", "Amount saved per month"),

    # Allowance optimizer
    "gross_annual_dividend": FieldInfo("Gross Annual", "Gross dividend over all payment dates"),
    "priority": FieldInfo("Tax Burden", "Withholding plus remaining domestic tax"),
    "suggested_allowance": FieldInfo("Suggested Allowance", "Share of the free allowance to assign"),
    "tax_savings": FieldInfo("Tax Savings", "Domestic tax saved by the suggested allowance"),
}


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def wrap_header(text: str, max_width: int) -> list[str]:
    """Wrap a header text into multiple lines to fit within max_width.

    Words are split on spaces and distributed across lines to minimize
    the total number of lines while staying within max_width.

    Args:
        text: The header text to wrap
        max_width: Maximum width per line

    Returns:
        List of strings, each representing a line
    """
    if len(text) <= max_width:
        return [text]

    words = text.split()
    lines = []
    current_line = ""

    for word in words:
        if not current_line:
            current_line = word
        elif len(current_line) + 1 + len(word) <= max_width:
            current_line += " " + word
        else:
            lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines
