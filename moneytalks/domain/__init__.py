"""Domain types for the valuation and scoring engine."""

from moneytalks.domain.errors import DataUnavailable
from moneytalks.domain.errors import InvalidParameters
from moneytalks.domain.types import AnalysisResult
from moneytalks.domain.types import DCFParameters
from moneytalks.domain.types import DCFResult
from moneytalks.domain.types import FlagStatus
from moneytalks.domain.types import InvestmentCall
from moneytalks.domain.types import Percent
from moneytalks.domain.types import ProjectedYear
from moneytalks.domain.types import Quote
from moneytalks.domain.types import RedFlag
from moneytalks.domain.types import RedFlagInputs
from moneytalks.domain.types import RedFlagSummary
from moneytalks.domain.types import RoicYear
from moneytalks.domain.types import Score
from moneytalks.domain.types import ScoreBreakdown
from moneytalks.domain.types import ScoringMetrics
from moneytalks.domain.types import Severity
from moneytalks.domain.types import StatementYear
from moneytalks.domain.types import Verdict

__all__ = [
    'AnalysisResult',
    'DCFParameters',
    'DCFResult',
    'DataUnavailable',
    'FlagStatus',
    'InvalidParameters',
    'InvestmentCall',
    'Percent',
    'ProjectedYear',
    'Quote',
    'RedFlag',
    'RedFlagInputs',
    'RedFlagSummary',
    'RoicYear',
    'Score',
    'ScoreBreakdown',
    'ScoringMetrics',
    'Severity',
    'StatementYear',
    'Verdict',
]
