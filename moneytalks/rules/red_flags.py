"""
Red flag rules.

Each rule inspects one statement ratio and returns a RedFlag whose message
embeds the figures it was computed from. The message text is part of the
output contract consumed by the presentation layer.

To add a new rule:
1. Subclass RedFlagRule and implement evaluate()
2. Append an instance in default_rules()
"""

from abc import ABC
from abc import abstractmethod
from typing import List, Optional, Sequence

from moneytalks.config.settings import EngineConfig
from moneytalks.domain.types import FlagStatus
from moneytalks.domain.types import RedFlag
from moneytalks.domain.types import RedFlagInputs
from moneytalks.domain.types import RedFlagSummary
from moneytalks.domain.types import Severity


class RedFlagRule(ABC):
  """
  Base class for red flag rules.

  Subclasses implement evaluate() and always return exactly one flag.
  """

  name: str = ''

  @abstractmethod
  def evaluate(self, data: RedFlagInputs) -> RedFlag:
    """
    Evaluate the rule.

    Args:
      data: Ratios for the latest fiscal year

    Returns:
      RedFlag with status, message and severity
    """

  def _flag(self, status: FlagStatus, message: str,
            severity: Severity) -> RedFlag:
    return RedFlag(type=self.name,
                   status=status,
                   message=message,
                   severity=severity)


class InventoryBloat(RedFlagRule):
  """Inventory outgrowing revenue by more than a tolerance."""

  name = 'Inventory Bloat'

  def __init__(self, tolerance: float = 5.0):
    """
    Args:
      tolerance: Percentage points inventory may outgrow revenue
    """
    self.tolerance = tolerance

  def evaluate(self, data: RedFlagInputs) -> RedFlag:
    if data.inventory_growth > data.revenue_growth + self.tolerance:
      return self._flag(
          FlagStatus.FAIL,
          f'Inventory growing {data.inventory_growth:.1f}% '
          f'vs revenue {data.revenue_growth:.1f}%',
          Severity.HIGH,
      )
    return self._flag(FlagStatus.PASS,
                      'Inventory growth healthy relative to revenue',
                      Severity.NONE)


class SBCDilution(RedFlagRule):
  """Stock-based compensation above a share of revenue."""

  name = 'SBC Dilution'

  def __init__(self, threshold: float = 10.0):
    """
    Args:
      threshold: Maximum SBC as a percent of revenue (default: 10%)
    """
    self.threshold = threshold

  def evaluate(self, data: RedFlagInputs) -> RedFlag:
    # Zero revenue reads as no dilution rather than a division error.
    sbc_percent = data.sbc / data.revenue * 100 if data.revenue else 0.0

    if sbc_percent > self.threshold:
      return self._flag(
          FlagStatus.FAIL,
          f'SBC is {sbc_percent:.1f}% of revenue '
          f'(threshold: {self.threshold:g}%)',
          Severity.MEDIUM,
      )
    return self._flag(FlagStatus.PASS,
                      f'SBC is {sbc_percent:.1f}% of revenue (healthy)',
                      Severity.NONE)


class MarginCompression(RedFlagRule):
  """Operating margin shrinking, worst when revenue is growing fast."""

  name = 'Margin Compression'

  def __init__(self,
               growth_floor: float = 10.0,
               compression_limit: float = -2.0):
    """
    Args:
      growth_floor: Revenue growth above which compression is a failure
      compression_limit: Margin change (points) below which it fails
    """
    self.growth_floor = growth_floor
    self.compression_limit = compression_limit

  def evaluate(self, data: RedFlagInputs) -> RedFlag:
    change = data.margin_change
    if (data.revenue_growth > self.growth_floor and
        change < self.compression_limit):
      return self._flag(
          FlagStatus.FAIL,
          f'Revenue up {data.revenue_growth:.1f}% '
          f'but margins down {abs(change):.1f}%',
          Severity.HIGH,
      )
    if change < 0:
      return self._flag(FlagStatus.WARNING,
                        f'Margins declining {abs(change):.1f}% (monitor)',
                        Severity.LOW)
    trend = 'expanding' if change > 0 else 'stable'
    return self._flag(FlagStatus.PASS, f'Margins {trend}', Severity.NONE)


def default_rules(config: Optional[EngineConfig] = None) -> List[RedFlagRule]:
  """Rules in reporting order, with thresholds from config."""
  if config is None:
    config = EngineConfig.default()
  return [
      InventoryBloat(),
      SBCDilution(threshold=config.scoring.sbc_threshold),
      MarginCompression(),
  ]


def detect_red_flags(
    data: RedFlagInputs,
    config: Optional[EngineConfig] = None,
    rules: Optional[Sequence[RedFlagRule]] = None,
) -> List[RedFlag]:
  """
  Evaluate every rule independently, preserving rule order.

  Args:
    data: Ratios for the latest fiscal year
    config: Engine configuration (default: EngineConfig.default())
    rules: Override the rule set (default: default_rules(config))

  Returns:
    One RedFlag per rule; three with the default rules
  """
  if rules is None:
    rules = default_rules(config)
  return [rule.evaluate(data) for rule in rules]


def summarize_red_flags(flags: Sequence[RedFlag]) -> RedFlagSummary:
  """Count passing checks; warnings and failures both count against."""
  passed = sum(1 for flag in flags if flag.status == FlagStatus.PASS)
  return RedFlagSummary(passed=passed, total=len(flags))
