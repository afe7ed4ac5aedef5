"""Composite investment scoring."""

from moneytalks.scoring.decision import CALL_SUMMARIES
from moneytalks.scoring.decision import investment_rationale
from moneytalks.scoring.decision import investment_verdict
from moneytalks.scoring.score import calculate_money_talks_score
from moneytalks.scoring.score import red_flag_penalty
from moneytalks.scoring.score import score_financial_health
from moneytalks.scoring.score import score_margin_of_safety
from moneytalks.scoring.score import score_qualitative
from moneytalks.scoring.score import score_roic_quality
from moneytalks.scoring.score import verdict_for

__all__ = [
    'CALL_SUMMARIES',
    'investment_rationale',
    'investment_verdict',
    'calculate_money_talks_score',
    'red_flag_penalty',
    'score_financial_health',
    'score_margin_of_safety',
    'score_qualitative',
    'score_roic_quality',
    'verdict_for',
]
