'''
Composite 0-100 investment score.

Five additive components, each capped by construction:
  financial health    0..25  balance sheet and margin bonuses
  ROIC quality        0..25  mutually exclusive tiers
  margin of safety    0..30  mutually exclusive tiers
  qualitative         0..20  moat + management grades
  red flag penalty    -5 per failing flag

The reported total is clamped to [0, 100] and drives the verdict; the
breakdown and raw_total keep the unclamped contributions.
'''

import logging
from typing import Dict, Optional, Sequence

from moneytalks.config.settings import EngineConfig
from moneytalks.config.settings import MosTiers
from moneytalks.config.settings import RoicTiers
from moneytalks.config.settings import ScoringThresholds
from moneytalks.domain.types import FlagStatus
from moneytalks.domain.types import Percent
from moneytalks.domain.types import RedFlag
from moneytalks.domain.types import Score
from moneytalks.domain.types import ScoreBreakdown
from moneytalks.domain.types import ScoringMetrics
from moneytalks.domain.types import Verdict

logger = logging.getLogger(__name__)

RED_FLAG_PENALTY = 5

MOAT_POINTS: Dict[str, int] = {'Wide': 15, 'Moderate': 10, 'Narrow': 5}
MANAGEMENT_POINTS: Dict[str, int] = {'A+': 5, 'A': 4, 'B': 3}

VERDICT_CUTOFFS = (
    (80, Verdict.STRONG_BUY),
    (60, Verdict.BUY),
    (40, Verdict.HOLD),
    (20, Verdict.SELL),
)


def score_financial_health(metrics: ScoringMetrics,
                           thresholds: ScoringThresholds) -> int:
  '''Balance sheet strength, 0..25.'''
  points = 0
  if metrics.current_ratio > thresholds.current_ratio_min:
    points += 5
  if metrics.debt_to_equity < thresholds.debt_equity.good:
    points += 10
  elif metrics.debt_to_equity < thresholds.debt_equity.acceptable:
    points += 5
  if metrics.interest_coverage > thresholds.interest_coverage_min:
    points += 5
  if metrics.operating_margin > thresholds.operating_margin_min:
    points += 5
  return points


def score_roic_quality(roic: Percent, tiers: RoicTiers) -> int:
  if roic > tiers.exceptional:
    return 25
  if roic > tiers.excellent:
    return 20
  if roic > tiers.good:
    return 15
  if roic > tiers.acceptable:
    return 10
  return 0


def score_margin_of_safety(mos: Percent, tiers: MosTiers) -> int:
  if mos >= tiers.strong_buy:
    return 30
  if mos >= tiers.buy:
    return 25
  if mos >= tiers.hold:
    return 15
  if mos >= tiers.sell:
    return 5
  return 0


def red_flag_penalty(red_flags: Sequence[RedFlag]) -> int:
  '''-5 per failing flag; warnings are free.'''
  failures = sum(1 for flag in red_flags if flag.status == FlagStatus.FAIL)
  return -RED_FLAG_PENALTY * failures


def score_qualitative(moat_strength: str, management_quality: str) -> int:
  '''Moat grade (0..15) plus management grade (0..5). Unknown grades are 0.'''
  return (MOAT_POINTS.get(moat_strength, 0) +
          MANAGEMENT_POINTS.get(management_quality, 0))


def verdict_for(total: int) -> Verdict:
  for cutoff, verdict in VERDICT_CUTOFFS:
    if total >= cutoff:
      return verdict
  return Verdict.STRONG_SELL


def calculate_money_talks_score(
    metrics: ScoringMetrics,
    config: Optional[EngineConfig] = None,
) -> Score:
  '''
  Aggregate all components into a Score.

  Args:
    metrics: Ratios, valuation gap, flags and qualitative grades
    config: Engine configuration (default: EngineConfig.default())

  Returns:
    Score with clamped total, unclamped raw_total, breakdown and verdict
  '''
  if config is None:
    config = EngineConfig.default()
  thresholds = config.scoring

  breakdown = ScoreBreakdown(
      financial_health=score_financial_health(metrics, thresholds),
      roic_quality=score_roic_quality(metrics.roic, thresholds.roic),
      margin_of_safety=score_margin_of_safety(metrics.mos, thresholds.mos),
      qualitative=score_qualitative(metrics.moat_strength,
                                    metrics.management_quality),
      red_flag_penalty=red_flag_penalty(metrics.red_flags),
  )

  raw_total = breakdown.total
  total = max(0, min(100, raw_total))
  logger.debug('Score breakdown %s -> raw %d, clamped %d', breakdown,
               raw_total, total)

  return Score(
      total=total,
      raw_total=raw_total,
      breakdown=breakdown,
      verdict=verdict_for(total),
  )
