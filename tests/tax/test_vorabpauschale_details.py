import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from tax.VorabpauschaleDetails import VorabpauschaleDetails


def test_base_yield_below_value_increase():
    vd = VorabpauschaleDetails()
    result = vd.calculate(50000.0, 55000.0, 0.0, 2024)

    # 50000 * 2.29% * 0.7
    assert result.base_rate == 2.29
    assert result.base_yield == pytest.approx(801.5)
    assert result.value_increase == pytest.approx(5000.0)
    assert result.vorabpauschale == pytest.approx(801.5)
    assert result.capital_gains_tax == pytest.approx(200.375)
    assert result.solidarity_surcharge == pytest.approx(200.375 * 0.055)
    assert result.total_tax == pytest.approx(200.375 * 1.055)
    assert result.effective_rate == pytest.approx(200.375 * 1.055 / 5000.0 * 100)


def test_value_increase_caps_lump_sum():
    vd = VorabpauschaleDetails()
    result = vd.calculate(50000.0, 50300.0, 0.0, 2024)
    assert result.vorabpauschale == pytest.approx(300.0)


def test_distributions_reduce_lump_sum():
    vd = VorabpauschaleDetails()
    result = vd.calculate(50000.0, 55000.0, 500.0, 2024)
    assert result.vorabpauschale == pytest.approx(301.5)


def test_loss_year_has_no_tax():
    vd = VorabpauschaleDetails()
    result = vd.calculate(50000.0, 45000.0, 0.0, 2023)
    assert result.vorabpauschale == 0.0
    assert result.total_tax == 0.0
    assert result.effective_rate == 0.0


def test_explicit_base_rate_overrides_lookup():
    vd = VorabpauschaleDetails()
    result = vd.calculate(10000.0, 20000.0, 0.0, 2099, base_rate=3.0)
    assert result.base_rate == 3.0
    assert result.base_yield == pytest.approx(210.0)


def test_unknown_year_raises():
    vd = VorabpauschaleDetails()
    with pytest.raises(KeyError):
        vd.calculate(10000.0, 11000.0, 0.0, 1999)


def test_from_reference_converts_year_keys():
    vd = VorabpauschaleDetails.from_reference({
        'vorabpauschale': {'partialExemption': 0.7, 'baseRates': {'2030': 1.5}}
    })
    assert vd.base_rate(2030) == 1.5
    with pytest.raises(KeyError):
        vd.base_rate(2024)


def test_from_reference_without_section_uses_defaults():
    vd = VorabpauschaleDetails.from_reference({})
    assert vd.base_rate(2025) == 2.53
    assert vd.partial_exemption == 0.7
