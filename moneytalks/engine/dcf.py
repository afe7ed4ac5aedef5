"""
Revenue-driven DCF engine.

Pure functions, no I/O. Parameters are validated up front so the engine
either returns a fully populated DCFResult or raises InvalidParameters
naming the offending field; NaN and Infinity never reach the caller.

Key functions:
  calculate_dcf: Main entry point, computes intrinsic value per share
  project_cash_flows: Explicit five-year projection
  compute_terminal_value: Gordon growth terminal value
  validate_dcf_parameters: Precondition checks
"""

from dataclasses import fields
from math import isfinite
from typing import List, Tuple

from moneytalks.domain.errors import InvalidParameters
from moneytalks.domain.types import DCFParameters
from moneytalks.domain.types import DCFResult
from moneytalks.domain.types import ProjectedYear

PROJECTION_YEARS = 5


def validate_dcf_parameters(params: DCFParameters) -> None:
  """
  Check DCF preconditions.

  Raises:
    InvalidParameters: If any field is non-finite, shares_outstanding <= 0,
      discount_rate <= -100 or discount_rate <= terminal_growth
  """
  for f in fields(params):
    value = getattr(params, f.name)
    if not isfinite(value):
      raise InvalidParameters(f.name, value, 'must be finite')

  if params.shares_outstanding <= 0:
    raise InvalidParameters('shares_outstanding', params.shares_outstanding,
                            'must be positive')

  if params.discount_rate <= -100:
    raise InvalidParameters('discount_rate', params.discount_rate,
                            'must be greater than -100')

  if params.discount_rate <= params.terminal_growth:
    raise InvalidParameters(
        'discount_rate', params.discount_rate,
        f'must exceed terminal_growth ({params.terminal_growth})')


def project_cash_flows(
    params: DCFParameters,
    years: int = PROJECTION_YEARS,
) -> Tuple[List[ProjectedYear], float, float]:
  """
  Project and discount explicit-period free cash flows.

  Each year revenue compounds by (1 + revenue_growth / 100) and
  FCF = revenue * margin * (1 - tax) - revenue * capex_percent.

  Args:
    params: Validated DCF parameters
    years: Number of explicit forecast years

  Returns:
    Tuple of (rows, pv_total, final_revenue):
    - rows: One ProjectedYear per forecast year
    - pv_total: Sum of discounted free cash flows
    - final_revenue: Revenue in the last explicit year
  """
  rows: List[ProjectedYear] = []
  pv_total = 0.0
  revenue = params.current_revenue

  for year in range(1, years + 1):
    revenue = revenue * (1 + params.revenue_growth / 100)
    operating_income = revenue * (params.operating_margin / 100)
    nopat = operating_income * (1 - params.tax_rate / 100)
    capex = revenue * (params.capex_percent / 100)
    fcf = nopat - capex

    discount_factor = (1 + params.discount_rate / 100)**year
    pv = fcf / discount_factor
    pv_total += pv

    rows.append(
        ProjectedYear(
            year=year,
            revenue=revenue,
            operating_income=operating_income,
            nopat=nopat,
            capex=capex,
            free_cash_flow=fcf,
            discount_factor=discount_factor,
            present_value=pv,
        ))

  return rows, pv_total, revenue


def compute_terminal_value(
    final_revenue: float,
    params: DCFParameters,
    final_year: int = PROJECTION_YEARS,
) -> Tuple[float, float]:
  """
  Gordon growth terminal value.

  Terminal FCF excludes capex: it is final revenue grown one more year at
  terminal_growth, times margin, after tax.

  Returns:
    Tuple of (terminal_value, pv_terminal)
  """
  terminal_fcf = (final_revenue * (1 + params.terminal_growth / 100) *
                  (params.operating_margin / 100) *
                  (1 - params.tax_rate / 100))
  terminal_value = terminal_fcf / (
      (params.discount_rate - params.terminal_growth) / 100)
  pv_terminal = terminal_value / (1 + params.discount_rate / 100)**final_year
  return terminal_value, pv_terminal


def calculate_dcf(params: DCFParameters) -> DCFResult:
  """
  Compute intrinsic value per share.

  Stage 1: five explicit years of revenue-driven free cash flow
  Stage 2: terminal value discounted back five periods

  Enterprise value = PV explicit + PV terminal
  Equity value = enterprise value + cash - debt
  Intrinsic value = equity value / shares outstanding

  Raises:
    InvalidParameters: If a precondition is violated or the projection
      overflows to a non-finite value
  """
  validate_dcf_parameters(params)

  rows, pv_total, final_revenue = project_cash_flows(params)
  terminal_value, pv_terminal = compute_terminal_value(final_revenue, params)

  enterprise_value = pv_total + pv_terminal
  equity_value = enterprise_value + params.cash - params.debt
  intrinsic_value = equity_value / params.shares_outstanding

  if not (isfinite(enterprise_value) and isfinite(intrinsic_value)):
    raise InvalidParameters('current_revenue', params.current_revenue,
                            'projection overflows')

  return DCFResult(
      intrinsic_value=intrinsic_value,
      enterprise_value=enterprise_value,
      equity_value=equity_value,
      pv_future_cash_flows=pv_total,
      pv_terminal=pv_terminal,
      terminal_value=terminal_value,
      projections=tuple(rows),
  )
