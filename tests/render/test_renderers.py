"""Tests for the console renderers."""

import os
import sys
import pytest

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from render.renderers import (
    AllowanceOptimizerRenderer,
    BaseRenderer,
    DashboardRenderer,
    DRIPRenderer,
    MonthlyRenderer,
    PaymentsRenderer,
    SavingsPlanRenderer,
    SectorRenderer,
    VorabpauschaleRenderer,
    RENDERER_REGISTRY,
    format_multiline_headers,
)
from model.DividendData import (
    AllowanceSuggestion,
    DashboardStats,
    DividendPayment,
    GoalProgress,
    MonthlyDividends,
    PortfolioPerformance,
    SectorValue,
)
from model.SimulationData import DRIPResult, SavingsPlanResult, SavingsPlanYear
from tax.VorabpauschaleDetails import VorabpauschaleDetails


class TestRendererRegistry:

    def test_all_modes_registered(self):
        assert set(RENDERER_REGISTRY.keys()) == {
            'Dashboard', 'Payments', 'Monthly', 'Sectors',
            'AllowanceOptimizer', 'DRIP', 'SavingsPlan', 'Vorabpauschale',
        }

    def test_registry_values_are_renderers(self):
        for renderer_class in RENDERER_REGISTRY.values():
            assert issubclass(renderer_class, BaseRenderer)


def test_format_multiline_headers_aligns_columns():
    header_lines, sep_line = format_multiline_headers([('Gross', 10), ('Withholding Tax', 12)])
    assert len(header_lines) >= 2
    assert header_lines[-1].strip().startswith('Year')
    assert len(set(len(line) for line in header_lines)) == 1
    assert len(sep_line) == len(header_lines[-1])


def test_dashboard_renderer(capsys):
    stats = DashboardStats(total_gross_annual=1200.0, total_net_annual=900.0,
                           total_withholding_tax=60.0, total_capital_gains_tax=240.0,
                           average_monthly_net=75.0, free_allowance_remaining=0.0)
    performance = PortfolioPerformance(10000.0, 12000.0, 2000.0, 20.0)
    goal = GoalProgress(100.0, 1200.0, 75.0, 25.0, 300.0)

    DashboardRenderer(2026).render({'stats': stats, 'performance': performance, 'goal': goal})

    out = capsys.readouterr().out
    assert 'DIVIDEND DASHBOARD 2026' in out
    assert '1,200.00' in out
    assert '900.00' in out
    assert '20.00 %' in out
    assert 'MONTHLY GOAL' in out


def test_dashboard_renderer_without_goal(capsys):
    DashboardRenderer(2026).render({
        'stats': DashboardStats(),
        'performance': PortfolioPerformance(0.0, 0.0, 0.0, 0.0),
    })
    assert 'MONTHLY GOAL' not in capsys.readouterr().out


def test_payments_renderer_totals(capsys):
    payments = [
        DividendPayment('a', 'Alpha', '2026-02-01', 100.0, 15.0, 11.375, 73.625),
        DividendPayment('b', 'Beta', '2026-03-01', 50.0, 0.0, 13.1875, 36.8125),
    ]
    PaymentsRenderer().render(payments)
    out = capsys.readouterr().out
    assert 'Alpha' in out
    assert '2026-03-01' in out
    assert '150.00' in out
    assert '110.44' in out


def test_monthly_renderer(capsys):
    MonthlyRenderer().render([MonthlyDividends('2026-01', 10.0, 7.5), MonthlyDividends('2026-02')])
    out = capsys.readouterr().out
    assert '2026-01' in out
    assert '7.50' in out


def test_sector_renderer(capsys):
    SectorRenderer().render([SectorValue('tech', 'Technology', 7500, 75.0), SectorValue('energy', 'Energy', 2500, 25.0)])
    out = capsys.readouterr().out
    assert 'Technology:' in out
    assert '75.0 %' in out


def test_allowance_optimizer_renderer(capsys):
    AllowanceOptimizerRenderer().render([
        AllowanceSuggestion('a', 'Alpha', 'US', 100.0, 0.15, 15.0, 20.0, 100.0, 26.375),
    ])
    out = capsys.readouterr().out
    assert 'Alpha' in out
    assert '26.38' in out


def test_drip_renderer(capsys):
    results = [
        DRIPResult(0, 100.0, 10000.0, 10000.0, 400.0, 1.0, 100.0),
        DRIPResult(1, 104.0, 10000.0, 10400.0, 400.0, 1.0, 100.0),
    ]
    DRIPRenderer().render([('Base', results)])
    out = capsys.readouterr().out
    assert 'DRIP PROJECTION BASE' in out
    assert '104.00' in out


def test_savings_plan_renderer_flags_unreachable_target(capsys):
    result = SavingsPlanResult(5000.0, 65000.0, 65000.0, 0.0,
                               [SavingsPlanYear(1, 65000.0, 0.0, 5000.0)])
    SavingsPlanRenderer(500.0).render(result)
    out = capsys.readouterr().out
    assert 'Required Monthly Contribution:' in out
    assert 'upper estimate' in out


def test_savings_plan_renderer_reached_target(capsys):
    result = SavingsPlanResult(100.0, 6200.0, 6400.0, 261.12,
                               [SavingsPlanYear(1, 6400.0, 261.12, 100.0)])
    SavingsPlanRenderer(250.0).render(result)
    assert 'upper estimate' not in capsys.readouterr().out


def test_vorabpauschale_renderer(capsys):
    result = VorabpauschaleDetails().calculate(50000.0, 55000.0, 0.0, 2024)
    VorabpauschaleRenderer().render(result)
    out = capsys.readouterr().out
    assert 'VORABPAUSCHALE 2024' in out
    assert '801.50' in out
    assert '2.29 %' in out


def test_short_names_and_header_wrapping():
    from model.field_metadata import get_short_name, wrap_header

    assert get_short_name('capital_gains_tax') == 'Capital Gains Tax'
    assert get_short_name('unknown_field') == 'unknown_field'
    assert wrap_header('Capital Gains Tax', 12) == ['Capital', 'Gains Tax']
    assert wrap_header('Net', 12) == ['Net']
