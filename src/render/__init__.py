"""Render module for FIRE simulation output display."""

from render.renderers import (
    BaseRenderer,
    SummaryRenderer,
    ScenarioRenderer,
    ProjectionRenderer,
    SensitivityRenderer,
    TakeHomeRenderer,
    IncomeTableRenderer,
    WithdrawalRenderer,
    parse_age_range,
    RENDERER_REGISTRY,
)
from render.formatting import (
    format_money,
    format_percent,
    format_year_diff,
    format_yen,
)

__all__ = [
    'BaseRenderer',
    'SummaryRenderer',
    'ScenarioRenderer',
    'ProjectionRenderer',
    'SensitivityRenderer',
    'TakeHomeRenderer',
    'IncomeTableRenderer',
    'WithdrawalRenderer',
    'parse_age_range',
    'RENDERER_REGISTRY',
    'format_money',
    'format_percent',
    'format_year_diff',
    'format_yen',
]
