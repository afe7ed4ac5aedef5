"""
Engine configuration.

EngineConfig is a serializable (JSON-friendly) record holding every tunable
threshold used by the scoring rules and every DCF default used by the
analysis pipeline. The engine treats it as read-only input; deployments
substitute their own instance instead of editing constants.

All rates are whole-number percents, matching the engine's convention.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
import json
from typing import Any


@dataclass(frozen=True)
class RoicTiers:
  """ROIC cut-offs (strictly greater than) for the ROIC quality tiers."""
  exceptional: float = 25.0
  excellent: float = 20.0
  good: float = 15.0
  acceptable: float = 10.0


@dataclass(frozen=True)
class MosTiers:
  """Margin-of-safety cut-offs (greater or equal) for the MOS tiers."""
  strong_buy: float = 40.0
  buy: float = 30.0
  hold: float = 15.0
  sell: float = 0.0


@dataclass(frozen=True)
class DebtEquityTiers:
  """
  Debt-to-equity cut-offs (strictly less than).

  good earns the full balance sheet bonus, acceptable the half bonus.
  excellent is only used for presentation labels.
  """
  excellent: float = 0.3
  good: float = 0.5
  acceptable: float = 1.0


@dataclass(frozen=True)
class ScoringThresholds:
  roic: RoicTiers = field(default_factory=RoicTiers)
  mos: MosTiers = field(default_factory=MosTiers)
  debt_equity: DebtEquityTiers = field(default_factory=DebtEquityTiers)
  sbc_threshold: float = 10.0
  current_ratio_min: float = 1.5
  interest_coverage_min: float = 5.0
  operating_margin_min: float = 20.0


@dataclass(frozen=True)
class DCFDefaults:
  """
  Default DCF assumptions used when assembling DCFParameters.

  Attributes:
    revenue_growth: Growth used when no history is available
    terminal_growth: Perpetual growth after the explicit period
    discount_rate: Required return
    tax_rate: Tax rate for NOPAT and ROIC
    capex_percent: Capex share of revenue when none is reported
    growth_cap: Upper bound on historical growth fed into the DCF
    fallback_pe: P/E used to derive share count when the quote has none
  """
  revenue_growth: float = 8.0
  terminal_growth: float = 2.5
  discount_rate: float = 10.0
  tax_rate: float = 21.0
  capex_percent: float = 3.0
  growth_cap: float = 15.0
  fallback_pe: float = 20.0


_NESTED = {
    'scoring': ScoringThresholds,
    'dcf': DCFDefaults,
    'roic': RoicTiers,
    'mos': MosTiers,
    'debt_equity': DebtEquityTiers,
}


def _build(cls: type, data: dict[str, Any]) -> Any:
  """Instantiate a (possibly nested) config dataclass from a dict."""
  known = {f.name for f in fields(cls)}
  unknown = set(data) - known
  if unknown:
    raise KeyError(f'Unknown {cls.__name__} keys: {sorted(unknown)}. '
                   f'Available: {sorted(known)}')
  kwargs = {}
  for key, value in data.items():
    if key in _NESTED and isinstance(value, dict):
      kwargs[key] = _build(_NESTED[key], value)
    else:
      kwargs[key] = value
  return cls(**kwargs)


@dataclass(frozen=True)
class EngineConfig:
  """
  Configuration for one engine deployment.

  Attributes:
    name: Human-readable configuration name
    scoring: Thresholds for red flags and score components
    dcf: Default DCF assumptions
    interest_coverage: Interest coverage assumed when statements lack it
    cache_duration_sec: TTL for cached data-source responses
  """
  name: str = 'default'
  scoring: ScoringThresholds = field(default_factory=ScoringThresholds)
  dcf: DCFDefaults = field(default_factory=DCFDefaults)
  interest_coverage: float = 10.0
  cache_duration_sec: float = 300.0

  @classmethod
  def default(cls) -> 'EngineConfig':
    """
    Create default configuration.

    Uses:
      - ROIC tiers 25/20/15/10, MOS tiers 40/30/15/0
      - D/E tiers 0.3/0.5/1.0, SBC threshold 10% of revenue
      - Current ratio 1.5, interest coverage 5, operating margin 20
      - DCF: 8% growth, 2.5% terminal, 10% discount, 21% tax, 3% capex
      - 5 minute response cache
    """
    return cls()

  @classmethod
  def conservative(cls) -> 'EngineConfig':
    """Higher discount rate and tighter growth cap."""
    return cls(
        name='conservative',
        dcf=DCFDefaults(discount_rate=12.0, growth_cap=10.0),
    )

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'EngineConfig':
    """Create from dictionary. Missing keys keep their defaults."""
    config: EngineConfig = _build(cls, data)
    return config

  @classmethod
  def from_json(cls, json_str: str) -> 'EngineConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))
