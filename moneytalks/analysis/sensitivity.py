"""
Sensitivity analysis for DCF valuation.

Re-runs the DCF engine over the cross product of revenue growth and
discount rate assumptions. Rows are growth rates, columns are discount
rates, cells are intrinsic value per share. Every cell is an independent
pure call, so the cell matching the base assumptions equals a direct
calculate_dcf() call exactly.

CLI Usage:
  python -m moneytalks.analysis.sensitivity \\
      --revenue 1000 --margin 20 --shares 100 \\
      --discount-rates 8,9,10,11,12 \\
      --growth-rates 6,8,10,12,14
"""

import argparse
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from moneytalks.config.settings import EngineConfig
from moneytalks.domain.types import DCFParameters
from moneytalks.domain.types import Percent
from moneytalks.engine.dcf import calculate_dcf
from moneytalks.engine.margin import value_zone

logger = logging.getLogger(__name__)

DEFAULT_DISCOUNT_RATES: Tuple[float, ...] = (8, 9, 10, 11, 12)
DEFAULT_GROWTH_RATES: Tuple[float, ...] = (6, 8, 10, 12, 14)


@dataclass(frozen=True)
class SensitivityGrid:
  """
  Intrinsic value per share across growth x discount assumptions.

  Attributes:
    growth_rates: Row axis (revenue growth, whole percents)
    discount_rates: Column axis (discount rate, whole percents)
    values: values[i][j] is the IV for growth_rates[i], discount_rates[j]
  """
  growth_rates: Tuple[float, ...]
  discount_rates: Tuple[float, ...]
  values: Tuple[Tuple[float, ...], ...]

  @property
  def shape(self) -> Tuple[int, int]:
    return len(self.growth_rates), len(self.discount_rates)

  def value(self, growth: float, discount: float) -> float:
    """
    Look up one cell by axis values.

    Raises:
      KeyError: If either value is not on its axis
    """
    try:
      i = self.growth_rates.index(growth)
    except ValueError as e:
      raise KeyError(f'Growth rate {growth} not in grid. '
                     f'Available: {list(self.growth_rates)}') from e
    try:
      j = self.discount_rates.index(discount)
    except ValueError as e:
      raise KeyError(f'Discount rate {discount} not in grid. '
                     f'Available: {list(self.discount_rates)}') from e
    return self.values[i][j]

  def to_rows(self) -> List[dict]:
    """One dict per growth row, keyed 'growth' and 'discount_<rate>'."""
    rows = []
    for growth, row_values in zip(self.growth_rates, self.values):
      row: dict = {'growth': growth}
      for discount, iv in zip(self.discount_rates, row_values):
        row[f'discount_{discount:g}'] = iv
      rows.append(row)
    return rows

  def _labelled(self, cells: List[list]) -> pd.DataFrame:
    g_labels = [f'{g:g}%' for g in self.growth_rates]
    r_labels = [f'{r:g}%' for r in self.discount_rates]
    df = pd.DataFrame(cells, index=g_labels, columns=r_labels)
    df.index.name = 'Revenue Growth'
    df.columns.name = 'Discount Rate'
    return df

  def to_frame(self) -> pd.DataFrame:
    """DataFrame with growth labels as index and discount labels as columns."""
    return self._labelled([list(row) for row in self.values])

  def zones(self, current_price: float) -> pd.DataFrame:
    """Each cell classified against the price with value_zone()."""
    return self._labelled(
        [[value_zone(iv, current_price) for iv in row] for row in self.values])


def build_sensitivity_grid(
    base_params: DCFParameters,
    discount_rates: Sequence[float] = DEFAULT_DISCOUNT_RATES,
    growth_rates: Sequence[float] = DEFAULT_GROWTH_RATES,
) -> SensitivityGrid:
  """
  Build the growth x discount sensitivity grid.

  Args:
    base_params: DCF parameters; revenue_growth and discount_rate are
      overridden per cell, everything else is held fixed
    discount_rates: Column axis (e.g., [8, 10, 12])
    growth_rates: Row axis (e.g., [6, 8, 10])

  Returns:
    SensitivityGrid with len(growth_rates) x len(discount_rates) cells

  Raises:
    ValueError: If an axis is empty
    InvalidParameters: If a cell violates a DCF precondition (for example
      a discount rate not above terminal growth)
  """
  if not discount_rates:
    raise ValueError('discount_rates cannot be empty')
  if not growth_rates:
    raise ValueError('growth_rates cannot be empty')

  logger.debug('Building sensitivity grid: %d x %d', len(growth_rates),
               len(discount_rates))

  rows = []
  for growth in growth_rates:
    row = []
    for discount in discount_rates:
      params = base_params.with_overrides(revenue_growth=Percent(growth),
                                          discount_rate=Percent(discount))
      row.append(calculate_dcf(params).intrinsic_value)
    rows.append(tuple(row))

  return SensitivityGrid(
      growth_rates=tuple(growth_rates),
      discount_rates=tuple(discount_rates),
      values=tuple(rows),
  )


def _parse_float_list(s: str) -> List[float]:
  """Parse comma-separated float list."""
  return [float(x.strip()) for x in s.split(',')]


def _frange(start: float, stop: float, step: float) -> List[float]:
  """
  Inclusive float range with rounding.

  Args:
      start: Start value
      stop: Stop value (inclusive)
      step: Step size

  Returns:
      List of floats from start to stop (inclusive)
  """
  if step <= 0:
    raise ValueError('step must be > 0')
  n = int(round((stop - start) / step))
  if n < 0:
    return []
  return [round(start + k * step, 12) for k in range(n + 1)]


def _resolve_axis(explicit: Optional[str], lo: Optional[float],
                  hi: Optional[float], step: float,
                  default: Sequence[float]) -> List[float]:
  if explicit:
    return _parse_float_list(explicit)
  if lo is not None and hi is not None:
    return _frange(lo, hi, step)
  return list(default)


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  defaults = EngineConfig.default().dcf

  parser = argparse.ArgumentParser(
      description='DCF Sensitivity Analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Default 5x5 grid
  python -m moneytalks.analysis.sensitivity \\
      --revenue 1000 --margin 20 --shares 100 --cash 50 --debt 20

  # Using range specification
  python -m moneytalks.analysis.sensitivity \\
      --revenue 6.3e9 --margin 25 --shares 192.5e6 \\
      --discount-min 8 --discount-max 12 --discount-step 0.5 \\
      --growth-min 4 --growth-max 16 --growth-step 2
      """)

  parser.add_argument('--revenue',
                      type=float,
                      required=True,
                      help='Current annual revenue')
  parser.add_argument('--margin',
                      type=float,
                      required=True,
                      help='Operating margin (%%)')
  parser.add_argument('--shares',
                      type=float,
                      required=True,
                      help='Shares outstanding')
  parser.add_argument('--cash', type=float, default=0.0, help='Cash')
  parser.add_argument('--debt', type=float, default=0.0, help='Total debt')
  parser.add_argument('--tax-rate',
                      type=float,
                      default=defaults.tax_rate,
                      help='Tax rate (%%)')
  parser.add_argument('--capex-percent',
                      type=float,
                      default=defaults.capex_percent,
                      help='Capex as %% of revenue')
  parser.add_argument('--terminal-growth',
                      type=float,
                      default=defaults.terminal_growth,
                      help='Terminal growth (%%)')

  # Option 1: Explicit lists
  parser.add_argument('--discount-rates',
                      type=str,
                      help='Comma-separated discount rates (e.g., 8,10,12)')
  parser.add_argument('--growth-rates',
                      type=str,
                      help='Comma-separated growth rates (e.g., 6,8,10)')

  # Option 2: Range specification
  parser.add_argument('--discount-min', type=float, help='Minimum discount')
  parser.add_argument('--discount-max', type=float, help='Maximum discount')
  parser.add_argument('--discount-step',
                      type=float,
                      default=1.0,
                      help='Discount rate step (default: 1)')
  parser.add_argument('--growth-min', type=float, help='Minimum growth rate')
  parser.add_argument('--growth-max', type=float, help='Maximum growth rate')
  parser.add_argument('--growth-step',
                      type=float,
                      default=2.0,
                      help='Growth rate step (default: 2)')

  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  discount_rates = _resolve_axis(args.discount_rates, args.discount_min,
                                 args.discount_max, args.discount_step,
                                 DEFAULT_DISCOUNT_RATES)
  growth_rates = _resolve_axis(args.growth_rates, args.growth_min,
                               args.growth_max, args.growth_step,
                               DEFAULT_GROWTH_RATES)
  logger.info('Discount rates: %s', discount_rates)
  logger.info('Growth rates: %s', growth_rates)

  base = DCFParameters(
      current_revenue=args.revenue,
      revenue_growth=Percent(defaults.revenue_growth),
      operating_margin=Percent(args.margin),
      tax_rate=Percent(args.tax_rate),
      capex_percent=Percent(args.capex_percent),
      terminal_growth=Percent(args.terminal_growth),
      discount_rate=Percent(defaults.discount_rate),
      shares_outstanding=args.shares,
      cash=args.cash,
      debt=args.debt,
  )

  grid = build_sensitivity_grid(base, discount_rates, growth_rates)
  table = grid.to_frame()

  print('\n' + '=' * 80)
  print('Intrinsic Value per Share ($)')
  print('=' * 80)
  print(table.to_string(float_format=lambda x: f'${x:.2f}'))
  print('=' * 80 + '\n')

  if args.output:
    table.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
