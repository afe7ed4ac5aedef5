'''
Domain types for the valuation and scoring engine.

These frozen dataclasses are the only currency passed between the engine
components. Every derived record is recomputed from its inputs and never
mutated in place.

Percent convention: every rate is a whole-number percent (8 means 8%) and
is divided by 100 inside the engine. Fields holding such values are typed
with the Percent alias so unit mismatches are visible at call sites.
'''

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, NewType, Optional, Sequence, Tuple

import pandas as pd

Percent = NewType('Percent', float)


class FlagStatus(str, Enum):
  PASS = 'pass'
  WARNING = 'warning'
  FAIL = 'fail'


class Severity(str, Enum):
  NONE = 'none'
  LOW = 'low'
  MEDIUM = 'medium'
  HIGH = 'high'


class Verdict(str, Enum):
  STRONG_BUY = 'STRONG BUY'
  BUY = 'BUY'
  HOLD = 'HOLD'
  SELL = 'SELL'
  STRONG_SELL = 'STRONG SELL'


class InvestmentCall(str, Enum):
  '''Overall call combining the score with the margin of safety.'''
  STRONG_BUY = 'STRONG BUY'
  BUY = 'BUY'
  HOLD = 'HOLD'
  AVOID = 'SELL/AVOID'



@dataclass(frozen=True)
class StatementYear:
  '''
  One fiscal year of merged income, balance sheet and cash flow data.

  Sequences of StatementYear are always ordered newest-first. Ratio fields
  (gross_profit_ratio, operating_income_ratio, ebitda_ratio) are whole
  percents. capital_expenditure keeps the sign reported by the source.
  '''
  date: pd.Timestamp
  revenue: float = 0.0
  cost_of_revenue: float = 0.0
  gross_profit: float = 0.0
  gross_profit_ratio: Percent = Percent(0.0)
  operating_expenses: float = 0.0
  operating_income: float = 0.0
  operating_income_ratio: Percent = Percent(0.0)
  ebitda: float = 0.0
  ebitda_ratio: Percent = Percent(0.0)
  net_income: float = 0.0
  eps: float = 0.0
  cash_and_equivalents: float = 0.0
  inventory: float = 0.0
  current_assets: float = 0.0
  current_liabilities: float = 0.0
  total_assets: float = 0.0
  total_debt: float = 0.0
  total_equity: float = 0.0
  current_ratio: float = 0.0
  operating_cash_flow: float = 0.0
  capital_expenditure: float = 0.0
  free_cash_flow: float = 0.0
  stock_based_compensation: float = 0.0

  @property
  def fiscal_year(self) -> int:
    return int(self.date.year)


@dataclass(frozen=True)
class Quote:
  '''Market quote for a single symbol. Replaced, never updated in place.'''
  symbol: str
  name: str
  price: float
  change: float = 0.0
  change_percent: Percent = Percent(0.0)
  day_high: float = 0.0
  day_low: float = 0.0
  year_high: float = 0.0
  year_low: float = 0.0
  market_cap: float = 0.0
  volume: float = 0.0
  avg_volume: float = 0.0
  pe: Optional[float] = None
  eps: Optional[float] = None


@dataclass(frozen=True)
class DCFParameters:
  '''
  Inputs for the five-year revenue-driven DCF.

  Attributes:
    current_revenue: Latest annual revenue (absolute)
    revenue_growth: Annual revenue growth over the projection
    operating_margin: Operating income as a share of revenue
    tax_rate: Tax applied to operating income
    capex_percent: Capital expenditure as a share of revenue
    terminal_growth: Perpetual growth after year five
    discount_rate: Required return; must exceed terminal_growth
    shares_outstanding: Share count; must be positive
    cash: Cash added to enterprise value
    debt: Debt subtracted from enterprise value
  '''
  current_revenue: float
  revenue_growth: Percent
  operating_margin: Percent
  tax_rate: Percent
  capex_percent: Percent
  terminal_growth: Percent
  discount_rate: Percent
  shares_outstanding: float
  cash: float = 0.0
  debt: float = 0.0

  def with_overrides(self, **changes: float) -> 'DCFParameters':
    '''Return a copy with the given fields replaced.'''
    return replace(self, **changes)

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)


@dataclass(frozen=True)
class ProjectedYear:
  '''One explicit forecast year of the DCF projection.'''
  year: int
  revenue: float
  operating_income: float
  nopat: float
  capex: float
  free_cash_flow: float
  discount_factor: float
  present_value: float


@dataclass(frozen=True)
class DCFResult:
  '''
  DCF valuation output.

  Attributes:
    intrinsic_value: Equity value per share
    enterprise_value: PV of explicit flows plus PV of terminal value
    equity_value: Enterprise value + cash - debt
    pv_future_cash_flows: PV of the five explicit free cash flows
    pv_terminal: Terminal value discounted back five periods
    terminal_value: Undiscounted terminal value at year five
    projections: Explicit forecast rows, year 1 first
  '''
  intrinsic_value: float
  enterprise_value: float
  equity_value: float
  pv_future_cash_flows: float
  pv_terminal: float
  terminal_value: float = 0.0
  projections: Tuple[ProjectedYear, ...] = ()

  def to_dict(self) -> Dict[str, Any]:
    result = asdict(self)
    result['projections'] = [asdict(p) for p in self.projections]
    return result


@dataclass(frozen=True)
class RedFlagInputs:
  '''
  Ratios evaluated by the red flag rules.

  Attributes:
    inventory_growth: Year-over-year inventory growth
    revenue_growth: Year-over-year revenue growth
    sbc: Stock-based compensation (absolute)
    revenue: Revenue of the same year (absolute)
    margin_change: Operating margin delta in percentage points
  '''
  inventory_growth: Percent
  revenue_growth: Percent
  sbc: float
  revenue: float
  margin_change: Percent


@dataclass(frozen=True)
class RedFlag:
  type: str
  status: FlagStatus
  message: str
  severity: Severity

  def to_dict(self) -> Dict[str, str]:
    return {
        'type': self.type,
        'status': self.status.value,
        'message': self.message,
        'severity': self.severity.value,
    }


@dataclass(frozen=True)
class RedFlagSummary:
  '''Pass count over all checks; HEALTHY only when every check passed.'''
  passed: int
  total: int

  @property
  def healthy(self) -> bool:
    return self.passed == self.total

  @property
  def label(self) -> str:
    return 'HEALTHY' if self.healthy else 'CAUTION'

  def to_dict(self) -> Dict[str, Any]:
    return {'passed': self.passed, 'total': self.total, 'label': self.label}


@dataclass(frozen=True)
class ScoringMetrics:

  '''
  Inputs to the composite investment score.

  moat_strength is one of Wide/Moderate/Narrow (anything else scores 0),
  management_quality one of A+/A/B (anything else scores 0).
  '''
  current_ratio: float
  debt_to_equity: float
  interest_coverage: float
  operating_margin: Percent
  roic: Percent
  mos: Percent
  red_flags: Sequence[RedFlag] = ()
  moat_strength: str = ''
  management_quality: str = ''


@dataclass(frozen=True)
class ScoreBreakdown:
  '''Raw, pre-clamp contribution of each score component.'''
  financial_health: int
  roic_quality: int
  margin_of_safety: int
  qualitative: int
  red_flag_penalty: int

  @property
  def total(self) -> int:
    return (self.financial_health + self.roic_quality + self.margin_of_safety +
            self.qualitative + self.red_flag_penalty)

  def to_dict(self) -> Dict[str, int]:
    return asdict(self)


@dataclass(frozen=True)
class Score:
  '''
  Composite investment score.

  Attributes:
    total: Sum of components clamped to [0, 100]
    raw_total: Unclamped sum of components
    breakdown: Raw component contributions
    verdict: Verdict derived from the clamped total
  '''
  total: int
  raw_total: int
  breakdown: ScoreBreakdown
  verdict: Verdict

  def to_dict(self) -> Dict[str, Any]:
    return {
        'total': self.total,
        'raw_total': self.raw_total,
        'breakdown': self.breakdown.to_dict(),
        'verdict': self.verdict.value,
    }


@dataclass(frozen=True)
class RoicYear:
  date: pd.Timestamp
  roic: Percent


@dataclass(frozen=True)
class AnalysisResult:
  '''
  Every engine output for one analysis request.

  Produced by moneytalks.analysis.analyzer.analyze. roic_history follows
  the canonical newest-first order of the statements it was built from.
  '''
  symbol: str
  price: float
  roic_history: Tuple[RoicYear, ...]
  avg_roic: Percent
  roic_consistency: str
  revenue_growth: Percent
  inventory_growth: Percent
  margin_change: Percent
  dcf_params: DCFParameters
  dcf_result: DCFResult
  mos: Percent
  mos_zone: str
  buy_price: float
  strong_buy_price: float
  red_flags: Tuple[RedFlag, ...]
  red_flag_summary: RedFlagSummary
  score: Score
  investment_call: InvestmentCall
  rationale: str
  debt_to_equity: float
  current_ratio: float
  fcf: float
  diag: Dict[str, Any] = field(default_factory=dict)

  def roic_history_frame(self) -> pd.DataFrame:
    '''ROIC history as a new oldest-first DataFrame for display.'''
    df = pd.DataFrame(
        [{'year': r.date.year, 'roic': r.roic} for r in self.roic_history],
        columns=['year', 'roic'],
    )
    return df.iloc[::-1].reset_index(drop=True)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to a JSON-friendly dictionary.'''
    return {
        'symbol': self.symbol,
        'price': self.price,
        'roic_history': [{
            'year': r.date.year,
            'roic': r.roic
        } for r in self.roic_history],
        'avg_roic': self.avg_roic,
        'roic_consistency': self.roic_consistency,
        'revenue_growth': self.revenue_growth,
        'inventory_growth': self.inventory_growth,
        'margin_change': self.margin_change,
        'dcf_params': self.dcf_params.to_dict(),
        'dcf_result': self.dcf_result.to_dict(),
        'mos': self.mos,
        'mos_zone': self.mos_zone,
        'buy_price': self.buy_price,
        'strong_buy_price': self.strong_buy_price,
        'red_flags': [f.to_dict() for f in self.red_flags],
        'red_flag_summary': self.red_flag_summary.to_dict(),
        'score': self.score.to_dict(),
        'investment_call': self.investment_call.value,
        'rationale': self.rationale,
        'debt_to_equity': self.debt_to_equity,
        'current_ratio': self.current_ratio,
        'fcf': self.fcf,
        **self.diag,
    }
