"""
Capital efficiency and growth primitives.

Pure arithmetic over whole-number percents. Degenerate inputs return a
documented sentinel of 0 instead of raising, so a missing prior year or a
negative capital base reads as "neutral" in the score. Pass strict=True to
get InvalidParameters instead; callers must not read the sentinel 0 as a
real measurement of "no growth" or "no return".
"""

from moneytalks.domain.errors import InvalidParameters
from moneytalks.domain.types import Percent


def calculate_roic(
    operating_income: float,
    tax_rate: Percent,
    equity: float,
    debt: float,
    cash: float,
    *,
    strict: bool = False,
) -> Percent:
  """
  Return on invested capital.

  NOPAT = operating_income * (1 - tax_rate / 100)
  Invested capital = equity + (debt - cash)

  Returns:
    NOPAT / invested capital * 100, or 0 when invested capital <= 0
  """
  nopat = operating_income * (1 - tax_rate / 100)
  invested_capital = equity + (debt - cash)

  if invested_capital <= 0:
    if strict:
      raise InvalidParameters('invested_capital', invested_capital,
                              'equity + net debt must be positive')
    return Percent(0.0)

  return Percent(nopat / invested_capital * 100)


def calculate_fcf(operating_cash_flow: float,
                  capex: float,
                  sbc: float = 0.0) -> float:
  """Free cash flow net of stock-based compensation."""
  return operating_cash_flow - capex - sbc


def calculate_growth_rate(old_value: float,
                          new_value: float,
                          *,
                          strict: bool = False) -> Percent:
  """
  Period-over-period growth in percent.

  Returns 0 when old_value is 0 (guarded division, not "no growth").
  """
  if old_value == 0:
    if strict:
      raise InvalidParameters('old_value', old_value,
                              'growth base must be non-zero')
    return Percent(0.0)
  return Percent((new_value - old_value) / old_value * 100)


def calculate_cagr(begin_value: float,
                   end_value: float,
                   years: float,
                   *,
                   strict: bool = False) -> Percent:
  """
  Compound annual growth rate in percent.

  Returns 0 when begin_value <= 0 or years <= 0. A negative end_value has
  no real root and also returns 0.
  """
  if begin_value <= 0 or years <= 0:
    if strict:
      bad_field = 'begin_value' if begin_value <= 0 else 'years'
      bad_value = begin_value if begin_value <= 0 else years
      raise InvalidParameters(bad_field, bad_value, 'must be positive')
    return Percent(0.0)
  if end_value < 0:
    if strict:
      raise InvalidParameters('end_value', end_value, 'must not be negative')
    return Percent(0.0)
  return Percent(((end_value / begin_value)**(1 / years) - 1) * 100)
