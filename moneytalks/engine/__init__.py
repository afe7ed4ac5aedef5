'''Valuation engine with pure math functions.'''

from moneytalks.engine.dcf import (
    calculate_dcf,
    compute_terminal_value,
    project_cash_flows,
    validate_dcf_parameters,
)
from moneytalks.engine.margin import (
    MOS_SENTINEL,
    buy_zone_prices,
    calculate_mos,
    mos_zone,
    value_zone,
)
from moneytalks.engine.metrics import (
    calculate_cagr,
    calculate_fcf,
    calculate_growth_rate,
    calculate_roic,
)

__all__ = [
    'MOS_SENTINEL',
    'buy_zone_prices',
    'calculate_cagr',
    'calculate_dcf',
    'calculate_fcf',
    'calculate_growth_rate',
    'calculate_mos',
    'calculate_roic',
    'compute_terminal_value',
    'mos_zone',
    'project_cash_flows',
    'validate_dcf_parameters',
    'value_zone',
]
