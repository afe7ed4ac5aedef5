"""Margin of safety between intrinsic value and market price."""

from typing import Tuple

from moneytalks.domain.errors import InvalidParameters
from moneytalks.domain.types import Percent

# Returned when intrinsic value is not positive: "fully overvalued/invalid".
MOS_SENTINEL = Percent(-100.0)

BUY_DISCOUNT = 0.30
STRONG_BUY_DISCOUNT = 0.50
GOOD_VALUE_PREMIUM = 1.3


def calculate_mos(intrinsic_value: float,
                  current_price: float,
                  *,
                  strict: bool = False) -> Percent:
  """
  Margin of safety in percent: (IV - price) / IV * 100.

  Returns MOS_SENTINEL (-100) when intrinsic_value <= 0. The sentinel is a
  meaningful verdict, not a market measurement.
  """
  if intrinsic_value <= 0:
    if strict:
      raise InvalidParameters('intrinsic_value', intrinsic_value,
                              'must be positive')
    return MOS_SENTINEL
  return Percent((intrinsic_value - current_price) / intrinsic_value * 100)


def buy_zone_prices(intrinsic_value: float) -> Tuple[float, float]:
  """Return (buy_price, strong_buy_price) at 30% and 50% below IV."""
  return (intrinsic_value * (1 - BUY_DISCOUNT),
          intrinsic_value * (1 - STRONG_BUY_DISCOUNT))


def mos_zone(mos: Percent) -> str:
  if mos >= 30:
    return 'BUY ZONE'
  if mos >= 15:
    return 'FAIR VALUE'
  return 'OVERVALUED'


def value_zone(intrinsic_value: float, current_price: float) -> str:
  """
  Classify a valuation against the market price.

  Above GOOD_VALUE_PREMIUM x price is 'GOOD VALUE', above price 'FAIR',
  otherwise 'OVERVALUED'. Both comparisons are strict.
  """
  if intrinsic_value > current_price * GOOD_VALUE_PREMIUM:
    return 'GOOD VALUE'
  if intrinsic_value > current_price:
    return 'FAIR'
  return 'OVERVALUED'
