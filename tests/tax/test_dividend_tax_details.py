import os
import sys
import math
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.DividendTaxDetails import DividendTaxDetails, CAPITAL_GAINS_TAX_RATE, WITHHOLDING_TAX_RATES


def test_us_dividend_partly_covered_by_allowance():
    td = DividendTaxDetails()
    result = td.net_dividend(1000.0, 'US', 500.0)

    # 150 withheld, 500 taxable -> 131.875 domestic tax, fully offset by the credit
    assert result.withholding_tax == pytest.approx(150.0)
    assert result.capital_gains_tax == pytest.approx(0.0)
    assert result.net == pytest.approx(850.0)


def test_domestic_dividend_without_allowance():
    td = DividendTaxDetails()
    result = td.net_dividend(1000.0, 'DE', 0.0)

    assert result.withholding_tax == 0.0
    assert result.capital_gains_tax == pytest.approx(263.75)
    assert result.net == pytest.approx(736.25)


def test_allowance_covers_whole_dividend():
    td = DividendTaxDetails()
    result = td.net_dividend(200.0, 'DE', 1000.0)
    assert result.capital_gains_tax == 0.0
    assert result.net == pytest.approx(200.0)


def test_allowance_does_not_reduce_withholding_tax():
    td = DividendTaxDetails()
    result = td.net_dividend(100.0, 'CH', 1000.0)
    assert result.withholding_tax == pytest.approx(35.0)
    assert result.capital_gains_tax == 0.0
    assert result.net == pytest.approx(65.0)


def test_credit_is_capped_at_domestic_tax():
    # Swiss withholding (35%) exceeds domestic tax; the excess is lost
    td = DividendTaxDetails()
    result = td.net_dividend(1000.0, 'CH', 0.0)
    assert result.withholding_tax == pytest.approx(350.0)
    assert result.capital_gains_tax == 0.0
    assert result.net == pytest.approx(650.0)


def test_partial_credit():
    td = DividendTaxDetails()
    result = td.net_dividend(1000.0, 'FR', 0.0)
    assert result.withholding_tax == pytest.approx(120.0)
    assert result.capital_gains_tax == pytest.approx(263.75 - 120.0)
    assert result.net == pytest.approx(1000.0 - 263.75)


@pytest.mark.parametrize("country", list(WITHHOLDING_TAX_RATES.keys()) + ['XX'])
@pytest.mark.parametrize("allowance", [0.0, 50.0, 5000.0])
def test_amounts_add_up(country, allowance):
    td = DividendTaxDetails()
    result = td.net_dividend(400.0, country, allowance)
    assert result.gross == 400.0
    assert result.net == pytest.approx(result.gross - result.withholding_tax - result.capital_gains_tax)
    assert result.capital_gains_tax >= 0.0
    assert 0.0 <= result.net <= result.gross


def test_unknown_country_has_no_withholding():
    td = DividendTaxDetails()
    assert td.withholding_rate('ZZ') == 0.0
    result = td.net_dividend(100.0, 'ZZ', 0.0)
    assert result.withholding_tax == 0.0
    assert result.capital_gains_tax == pytest.approx(100.0 * CAPITAL_GAINS_TAX_RATE)


def test_zero_gross():
    td = DividendTaxDetails()
    result = td.net_dividend(0.0, 'US', 100.0)
    assert result.net == 0.0
    assert result.withholding_tax == 0.0
    assert result.capital_gains_tax == 0.0


def test_from_reference_overrides_rates():
    td = DividendTaxDetails.from_reference({
        'withholdingTaxRates': {'US': 0.30},
        'capitalGainsTaxRate': 0.25,
    })
    assert td.withholding_rate('US') == 0.30
    # Countries missing from the reference are treated as unknown
    assert td.withholding_rate('CH') == 0.0
    assert td.capital_gains_rate == 0.25


def test_from_empty_reference_uses_defaults():
    td = DividendTaxDetails.from_reference({})
    assert td.withholding_rates == WITHHOLDING_TAX_RATES
    assert math.isclose(td.capital_gains_rate, 0.26375)
