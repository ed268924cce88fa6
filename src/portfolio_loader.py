"""Loading of portfolio files and statutory reference data.

Portfolios live in `input-parameters/<name>/portfolio.json`; statutory tax
data lives in `reference/tax-details.json`. Both paths are relative to a base
directory (the project root by default).
"""

import os
import json
from typing import List

from model.Portfolio import Portfolio
from tax.DividendTaxDetails import DividendTaxDetails
from tax.VorabpauschaleDetails import VorabpauschaleDetails


DEFAULT_BASE_PATH = os.path.normpath(os.path.join(os.path.dirname(__file__), '..'))

PORTFOLIO_FILE = 'portfolio.json'
TAX_REFERENCE_FILE = 'tax-details.json'


def portfolio_path(base_path: str, name: str) -> str:
    return os.path.join(base_path, 'input-parameters', name, PORTFOLIO_FILE)


def list_portfolio_names(base_path: str = DEFAULT_BASE_PATH) -> List[str]:
    """Names of all folders in input-parameters that contain a portfolio file."""
    input_params_path = os.path.join(base_path, 'input-parameters')
    if not os.path.exists(input_params_path):
        return []
    return sorted(
        name for name in os.listdir(input_params_path)
        if os.path.isfile(portfolio_path(base_path, name))
    )


def load_portfolio(name: str, base_path: str = DEFAULT_BASE_PATH) -> Portfolio:
    """Load a portfolio by name.

    Raises:
        FileNotFoundError: if the portfolio file does not exist
    """
    path = portfolio_path(base_path, name)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Portfolio file not found: {path}")
    with open(path, 'r') as f:
        data = json.load(f)
    return Portfolio.from_dict(name, data)


def load_tax_reference(base_path: str = DEFAULT_BASE_PATH) -> dict:
    """Read reference/tax-details.json, or an empty dict when it is absent."""
    path = os.path.join(base_path, 'reference', TAX_REFERENCE_FILE)
    if not os.path.exists(path):
        return {}
    with open(path, 'r') as f:
        return json.load(f)


def load_tax_details(base_path: str = DEFAULT_BASE_PATH) -> DividendTaxDetails:
    return DividendTaxDetails.from_reference(load_tax_reference(base_path))


def load_vorabpauschale_details(base_path: str = DEFAULT_BASE_PATH) -> VorabpauschaleDetails:
    return VorabpauschaleDetails.from_reference(load_tax_reference(base_path))
