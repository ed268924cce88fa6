"""Render module for dividend planning output display."""

from render.renderers import (
    BaseRenderer,
    DashboardRenderer,
    PaymentsRenderer,
    MonthlyRenderer,
    SectorRenderer,
    AllowanceOptimizerRenderer,
    DRIPRenderer,
    SavingsPlanRenderer,
    VorabpauschaleRenderer,
    RENDERER_REGISTRY,
)

__all__ = [
    'BaseRenderer',
    'DashboardRenderer',
    'PaymentsRenderer',
    'MonthlyRenderer',
    'SectorRenderer',
    'AllowanceOptimizerRenderer',
    'DRIPRenderer',
    'SavingsPlanRenderer',
    'VorabpauschaleRenderer',
    'RENDERER_REGISTRY',
]
