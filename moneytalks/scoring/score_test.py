import pytest

from moneytalks.config.settings import EngineConfig
from moneytalks.config.settings import RoicTiers
from moneytalks.config.settings import ScoringThresholds
from moneytalks.domain.types import FlagStatus
from moneytalks.domain.types import RedFlag
from moneytalks.domain.types import ScoringMetrics
from moneytalks.domain.types import Severity
from moneytalks.domain.types import Verdict
from moneytalks.scoring.score import calculate_money_talks_score
from moneytalks.scoring.score import red_flag_penalty
from moneytalks.scoring.score import score_financial_health
from moneytalks.scoring.score import score_margin_of_safety
from moneytalks.scoring.score import score_qualitative
from moneytalks.scoring.score import score_roic_quality
from moneytalks.scoring.score import verdict_for

THRESHOLDS = ScoringThresholds()


def _flag(status: FlagStatus) -> RedFlag:
  return RedFlag(type='Test', status=status, message='', severity=Severity.NONE)


def _metrics(**overrides) -> ScoringMetrics:
  values = dict(current_ratio=2.0,
                debt_to_equity=0.2,
                interest_coverage=10.0,
                operating_margin=25.0,
                roic=30.0,
                mos=50.0,
                red_flags=(),
                moat_strength='Wide',
                management_quality='A+')
  values.update(overrides)
  return ScoringMetrics(**values)


class TestFinancialHealth:
  """Tests for score_financial_health function."""

  def test_all_bonuses(self):
    assert score_financial_health(_metrics(), THRESHOLDS) == 25

  def test_no_bonuses(self):
    metrics = _metrics(current_ratio=1.0,
                       debt_to_equity=2.0,
                       interest_coverage=2.0,
                       operating_margin=5.0)

    assert score_financial_health(metrics, THRESHOLDS) == 0

  def test_moderate_leverage_half_bonus(self):
    metrics = _metrics(debt_to_equity=0.7)

    assert score_financial_health(metrics, THRESHOLDS) == 20

  @pytest.mark.parametrize('field, value', [
      ('current_ratio', 1.5),
      ('interest_coverage', 5.0),
      ('operating_margin', 20.0),
  ])
  def test_boundaries_are_exclusive(self, field, value):
    """Threshold values themselves earn no bonus."""
    metrics = _metrics(**{field: value})

    assert score_financial_health(metrics, THRESHOLDS) == 20

  def test_debt_equity_boundaries(self):
    assert score_financial_health(_metrics(debt_to_equity=0.5),
                                  THRESHOLDS) == 20
    assert score_financial_health(_metrics(debt_to_equity=1.0),
                                  THRESHOLDS) == 15

  def test_unbounded_leverage_gets_no_bonus(self):
    metrics = _metrics(debt_to_equity=float('inf'))

    assert score_financial_health(metrics, THRESHOLDS) == 15


class TestRoicQuality:
  """Tests for score_roic_quality function."""

  @pytest.mark.parametrize('roic, points', [
      (30.0, 25),
      (25.1, 25),
      (25.0, 20),
      (20.5, 20),
      (18.0, 15),
      (12.0, 10),
      (10.0, 0),
      (-5.0, 0),
  ])
  def test_tiers(self, roic, points):
    assert score_roic_quality(roic, THRESHOLDS.roic) == points

  def test_custom_tiers(self):
    tiers = RoicTiers(exceptional=40, excellent=30, good=20, acceptable=5)

    assert score_roic_quality(30.0, tiers) == 15


class TestMarginOfSafety:
  """Tests for score_margin_of_safety function."""

  @pytest.mark.parametrize('mos, points', [
      (40.0, 30),
      (35.0, 25),
      (30.0, 25),
      (20.0, 15),
      (15.0, 15),
      (0.0, 5),
      (-0.1, 0),
      (-100.0, 0),
  ])
  def test_tiers(self, mos, points):
    assert score_margin_of_safety(mos, THRESHOLDS.mos) == points


class TestPenaltyAndQualitative:
  """Tests for red_flag_penalty and score_qualitative."""

  def test_penalty_counts_failures_only(self):
    flags = [
        _flag(FlagStatus.FAIL),
        _flag(FlagStatus.WARNING),
        _flag(FlagStatus.PASS),
        _flag(FlagStatus.FAIL),
    ]

    assert red_flag_penalty(flags) == -10

  def test_no_flags(self):
    assert red_flag_penalty([]) == 0

  @pytest.mark.parametrize('moat, management, points', [
      ('Wide', 'A+', 20),
      ('Moderate', 'A', 14),
      ('Narrow', 'B', 8),
      ('None', 'C', 0),
      ('', '', 0),
  ])
  def test_qualitative(self, moat, management, points):
    assert score_qualitative(moat, management) == points


class TestVerdict:
  """Tests for verdict_for function."""

  @pytest.mark.parametrize('total, verdict', [
      (100, Verdict.STRONG_BUY),
      (80, Verdict.STRONG_BUY),
      (79, Verdict.BUY),
      (60, Verdict.BUY),
      (59, Verdict.HOLD),
      (40, Verdict.HOLD),
      (39, Verdict.SELL),
      (20, Verdict.SELL),
      (19, Verdict.STRONG_SELL),
      (0, Verdict.STRONG_SELL),
  ])
  def test_cutoffs(self, total, verdict):
    assert verdict_for(total) == verdict

  def test_verdict_is_plain_string(self):
    assert verdict_for(85) == 'STRONG BUY'


class TestCalculateMoneyTalksScore:
  """Tests for calculate_money_talks_score function."""

  def test_all_max_bonuses_reach_exactly_100(self):
    """
    25 + 25 + 30 + 20 + 0 = 100.

    Component caps sum to 100 and the penalty is never positive, so the
    upper clamp is unreachable; only the lower clamp ever applies.
    """
    score = calculate_money_talks_score(_metrics())

    assert score.breakdown.financial_health == 25
    assert score.breakdown.roic_quality == 25
    assert score.breakdown.margin_of_safety == 30
    assert score.breakdown.qualitative == 20
    assert score.breakdown.red_flag_penalty == 0
    assert score.total == 100
    assert score.raw_total == 100
    assert score.verdict == Verdict.STRONG_BUY

  def test_mixed_case(self):
    """
    Health: CR 1.2 (0) + D/E 0.8 (5) + cover 10 (5) + margin 15 (0) = 10
    ROIC 18 -> 15, MOS 20 -> 15, Narrow + B -> 8, one failure -> -5
    Total: 10 + 15 + 15 + 8 - 5 = 43 -> HOLD
    """
    score = calculate_money_talks_score(
        _metrics(current_ratio=1.2,
                 debt_to_equity=0.8,
                 operating_margin=15.0,
                 roic=18.0,
                 mos=20.0,
                 moat_strength='Narrow',
                 management_quality='B',
                 red_flags=(_flag(FlagStatus.FAIL), _flag(
                     FlagStatus.PASS), _flag(FlagStatus.WARNING))))

    assert score.breakdown.to_dict() == {
        'financial_health': 10,
        'roic_quality': 15,
        'margin_of_safety': 15,
        'qualitative': 8,
        'red_flag_penalty': -5,
    }
    assert score.total == 43
    assert score.verdict == Verdict.HOLD

  def test_negative_raw_total_clamps_to_zero(self):
    """0 + 0 + 0 + 0 - 15 = -15, reported as 0."""
    score = calculate_money_talks_score(
        _metrics(current_ratio=1.0,
                 debt_to_equity=2.0,
                 interest_coverage=1.0,
                 operating_margin=5.0,
                 roic=5.0,
                 mos=-50.0,
                 moat_strength='None',
                 management_quality='C',
                 red_flags=(_flag(FlagStatus.FAIL),) * 3))

    assert score.raw_total == -15
    assert score.total == 0
    assert score.breakdown.red_flag_penalty == -15
    assert score.verdict == Verdict.STRONG_SELL

  def test_penalty_lowers_total(self):
    """100 - 5 = 95, still a strong buy."""
    score = calculate_money_talks_score(
        _metrics(red_flags=(_flag(FlagStatus.FAIL),)))

    assert score.raw_total == 95
    assert score.total == 95

  def test_config_thresholds_are_used(self):
    config = EngineConfig(scoring=ScoringThresholds(
        roic=RoicTiers(exceptional=50, excellent=40, good=35, acceptable=31)))

    score = calculate_money_talks_score(_metrics(), config)

    assert score.breakdown.roic_quality == 0

  def test_idempotent(self):
    metrics = _metrics(red_flags=(_flag(FlagStatus.FAIL),))

    assert (calculate_money_talks_score(metrics) ==
            calculate_money_talks_score(metrics))

  def test_to_dict(self):
    result = calculate_money_talks_score(_metrics()).to_dict()

    assert result['total'] == 100
    assert result['verdict'] == 'STRONG BUY'
    assert result['breakdown']['qualitative'] == 20
