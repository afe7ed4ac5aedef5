"""Analysis pipeline and sensitivity tools built on the engine."""

from moneytalks.analysis.analyzer import analyze
from moneytalks.analysis.sensitivity import build_sensitivity_grid
from moneytalks.analysis.sensitivity import DEFAULT_DISCOUNT_RATES
from moneytalks.analysis.sensitivity import DEFAULT_GROWTH_RATES
from moneytalks.analysis.sensitivity import SensitivityGrid

__all__ = [
    'analyze',
    'build_sensitivity_grid',
    'DEFAULT_DISCOUNT_RATES',
    'DEFAULT_GROWTH_RATES',
    'SensitivityGrid',
]
