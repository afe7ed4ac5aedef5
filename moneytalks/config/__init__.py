"""Engine configuration."""

from moneytalks.config.settings import DCFDefaults
from moneytalks.config.settings import DebtEquityTiers
from moneytalks.config.settings import EngineConfig
from moneytalks.config.settings import MosTiers
from moneytalks.config.settings import RoicTiers
from moneytalks.config.settings import ScoringThresholds

__all__ = [
    'DCFDefaults',
    'DebtEquityTiers',
    'EngineConfig',
    'MosTiers',
    'RoicTiers',
    'ScoringThresholds',
]
