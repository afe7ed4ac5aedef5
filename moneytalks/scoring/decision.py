'''
Overall investment call and its rationale.

The call combines the clamped score with the margin of safety, so a
high-quality business still needs a price discount to be a buy:
  STRONG BUY  score >= 80 and MOS >= mos.buy (30)
  BUY         score >= 60 and MOS >= mos.hold (15)
  HOLD        score >= 40 or MOS >= mos.sell (0)
  SELL/AVOID  otherwise

The rationale lists the factors behind the call, in a fixed order: capital
efficiency, valuation gap, leverage, failed red flags.
'''

from typing import Dict, List, Optional, Sequence

from moneytalks.config.settings import MosTiers
from moneytalks.config.settings import ScoringThresholds
from moneytalks.domain.types import FlagStatus
from moneytalks.domain.types import InvestmentCall
from moneytalks.domain.types import Percent
from moneytalks.domain.types import RedFlag

STRONG_BUY_SCORE = 80
BUY_SCORE = 60
HOLD_SCORE = 40

CALL_SUMMARIES: Dict[InvestmentCall, str] = {
    InvestmentCall.STRONG_BUY:
        'Excellent quality business with significant margin of safety.',
    InvestmentCall.BUY:
        'Good business at reasonable price. Consider adding to portfolio.',
    InvestmentCall.HOLD:
        'Fair value. Wait for better entry point.',
    InvestmentCall.AVOID:
        'Overvalued or quality concerns. Look for better opportunities.',
}


def investment_verdict(total_score: int,
                       mos: Percent,
                       tiers: Optional[MosTiers] = None) -> InvestmentCall:
  '''
  Overall call from the clamped score total and margin of safety.

  Args:
    total_score: Score.total (0..100)
    mos: Margin of safety in percent
    tiers: MOS cut-offs (default: MosTiers())
  '''
  if tiers is None:
    tiers = MosTiers()
  if total_score >= STRONG_BUY_SCORE and mos >= tiers.buy:
    return InvestmentCall.STRONG_BUY
  if total_score >= BUY_SCORE and mos >= tiers.hold:
    return InvestmentCall.BUY
  if total_score >= HOLD_SCORE or mos >= tiers.sell:
    return InvestmentCall.HOLD
  return InvestmentCall.AVOID


def investment_rationale(
    avg_roic: Percent,
    mos: Percent,
    debt_to_equity: float,
    red_flags: Sequence[RedFlag],
    thresholds: Optional[ScoringThresholds] = None,
) -> str:
  '''
  One-sentence rationale, or an empty string when nothing stands out.

  Example:
    'High ROIC indicates strong competitive advantage; minimal debt
    provides financial flexibility.'
  '''
  if thresholds is None:
    thresholds = ScoringThresholds()
  parts: List[str] = []

  if avg_roic > thresholds.roic.excellent:
    parts.append('high ROIC indicates strong competitive advantage')
  elif avg_roic > thresholds.roic.good:
    parts.append('solid capital efficiency')

  if mos >= thresholds.mos.buy:
    parts.append('significant margin of safety protects downside')
  elif mos < thresholds.mos.sell:
    parts.append('currently overvalued based on DCF')

  if debt_to_equity < thresholds.debt_equity.excellent:
    parts.append('minimal debt provides financial flexibility')

  failed = sum(1 for flag in red_flags if flag.status == FlagStatus.FAIL)
  if failed:
    parts.append(f'{failed} red flag(s) detected requiring investigation')

  if not parts:
    return ''
  sentence = '; '.join(parts) + '.'
  return sentence[0].upper() + sentence[1:]
