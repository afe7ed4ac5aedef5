'''
Single-company analysis pipeline.

Turns newest-first statement years and a quote into every engine input and
runs the whole engine once:
1. Per-year ROIC, average ROIC and its consistency
2. Year-over-year revenue, inventory and margin changes
3. DCF parameters assembled from the latest year and config defaults
4. DCF, margin of safety, red flags and composite score
5. Overall investment call (score + MOS) with its rationale

Usage:
  from moneytalks.analysis.analyzer import analyze
  from moneytalks.data.mock import mock_quote, mock_statements

  result = analyze(mock_quote('GRMN'), mock_statements('GRMN'))
  print(f'{result.score.verdict.value}: {result.score.total}/100')
'''

import logging
from typing import List, Optional, Sequence

import pandas as pd

from moneytalks.config.settings import EngineConfig
from moneytalks.domain.errors import InvalidParameters
from moneytalks.domain.types import AnalysisResult
from moneytalks.domain.types import DCFParameters
from moneytalks.domain.types import Percent
from moneytalks.domain.types import Quote
from moneytalks.domain.types import RedFlagInputs
from moneytalks.domain.types import RoicYear
from moneytalks.domain.types import ScoringMetrics
from moneytalks.domain.types import StatementYear
from moneytalks.engine.dcf import calculate_dcf
from moneytalks.engine.margin import buy_zone_prices
from moneytalks.engine.margin import calculate_mos
from moneytalks.engine.margin import mos_zone
from moneytalks.engine.metrics import calculate_growth_rate
from moneytalks.engine.metrics import calculate_roic
from moneytalks.rules.red_flags import detect_red_flags
from moneytalks.rules.red_flags import summarize_red_flags
from moneytalks.scoring.decision import investment_rationale
from moneytalks.scoring.decision import investment_verdict
from moneytalks.scoring.score import calculate_money_talks_score

logger = logging.getLogger(__name__)


def roic_history(statements: Sequence[StatementYear],
                 tax_rate: Percent) -> List[RoicYear]:
  '''ROIC for every statement year, in the statements' order.'''
  return [
      RoicYear(
          date=s.date,
          roic=calculate_roic(s.operating_income, tax_rate, s.total_equity,
                              s.total_debt, s.cash_and_equivalents),
      ) for s in statements
  ]


def roic_consistency(values: Sequence[float]) -> str:
  '''
  Rate ROIC stability by coefficient of variation.

  CV = population std / |mean| * 100; below 15 is very consistent, below
  25 moderately consistent. A zero mean is inconsistent.
  '''
  series = pd.Series(list(values), dtype=float)
  mean = series.mean()
  if series.empty or mean == 0:
    return 'Inconsistent (concerning)'
  cv = series.std(ddof=0) / abs(mean) * 100
  if cv < 15:
    return 'Very consistent (excellent)'
  if cv < 25:
    return 'Moderately consistent (good)'
  return 'Inconsistent (concerning)'


def debt_to_equity(total_debt: float, total_equity: float) -> float:
  '''Leverage ratio; non-positive equity with debt is unbounded leverage.'''
  if total_equity <= 0:
    return float('inf') if total_debt > 0 else 0.0
  return total_debt / total_equity


def build_dcf_parameters(
    quote: Quote,
    latest: StatementYear,
    revenue_growth: Optional[Percent],
    config: EngineConfig,
) -> DCFParameters:
  '''
  Assemble DCF inputs from the latest fiscal year.

  Growth is the historical revenue growth capped at dcf.growth_cap, or the
  configured default when there is no prior year. Shares are estimated as
  equity / (price / P/E), falling back to dcf.fallback_pe when the P/E is
  missing or not positive (loss-making companies).

  Raises:
    InvalidParameters: If the quote price is not positive
  '''
  defaults = config.dcf

  if quote.price <= 0:
    raise InvalidParameters('price', quote.price, 'must be positive')

  if revenue_growth is None:
    growth = defaults.revenue_growth
  else:
    growth = min(revenue_growth, defaults.growth_cap)

  if latest.revenue:
    capex_percent = abs(latest.capital_expenditure) / latest.revenue * 100
  else:
    capex_percent = defaults.capex_percent

  pe = quote.pe if quote.pe and quote.pe > 0 else defaults.fallback_pe
  shares = latest.total_equity / (quote.price / pe)

  return DCFParameters(
      current_revenue=latest.revenue,
      revenue_growth=Percent(growth),
      operating_margin=latest.operating_income_ratio,
      tax_rate=Percent(defaults.tax_rate),
      capex_percent=Percent(capex_percent),
      terminal_growth=Percent(defaults.terminal_growth),
      discount_rate=Percent(defaults.discount_rate),
      shares_outstanding=shares,
      cash=latest.cash_and_equivalents,
      debt=latest.total_debt,
  )


def analyze(
    quote: Quote,
    statements: Sequence[StatementYear],
    config: Optional[EngineConfig] = None,
    moat_strength: str = 'Moderate',
    management_quality: str = 'A',
    interest_coverage: Optional[float] = None,
) -> AnalysisResult:
  '''
  Run the full engine for one company.

  Args:
    quote: Latest market quote
    statements: Fiscal years, newest first
    config: EngineConfig (default: EngineConfig.default())
    moat_strength: Qualitative moat grade (Wide/Moderate/Narrow)
    management_quality: Qualitative management grade (A+/A/B)
    interest_coverage: Override for config.interest_coverage

  Returns:
    AnalysisResult with valuation, flags and score

  Raises:
    InvalidParameters: If statements are empty or DCF inputs are invalid
  '''
  if config is None:
    config = EngineConfig.default()
  if not statements:
    raise InvalidParameters('statements', list(statements),
                            'at least one fiscal year is required')
  if interest_coverage is None:
    interest_coverage = config.interest_coverage

  latest = statements[0]
  prior = statements[1] if len(statements) > 1 else None
  tax_rate = Percent(config.dcf.tax_rate)

  history = roic_history(statements, tax_rate)
  roic_values = [r.roic for r in history]
  avg_roic = Percent(sum(roic_values) / len(roic_values))

  if prior is not None:
    revenue_growth = calculate_growth_rate(prior.revenue, latest.revenue)
    inventory_growth = calculate_growth_rate(prior.inventory,
                                             latest.inventory)
    margin_change = Percent(latest.operating_income_ratio -
                            prior.operating_income_ratio)
  else:
    revenue_growth = inventory_growth = margin_change = Percent(0.0)

  params = build_dcf_parameters(
      quote, latest, revenue_growth if prior is not None else None, config)
  dcf_result = calculate_dcf(params)

  mos = calculate_mos(dcf_result.intrinsic_value, quote.price)
  buy_price, strong_buy_price = buy_zone_prices(dcf_result.intrinsic_value)

  red_flags = detect_red_flags(
      RedFlagInputs(
          inventory_growth=inventory_growth,
          revenue_growth=revenue_growth,
          sbc=latest.stock_based_compensation,
          revenue=latest.revenue,
          margin_change=margin_change,
      ),
      config,
  )

  leverage = debt_to_equity(latest.total_debt, latest.total_equity)
  score = calculate_money_talks_score(
      ScoringMetrics(
          current_ratio=latest.current_ratio,
          debt_to_equity=leverage,
          interest_coverage=interest_coverage,
          operating_margin=latest.operating_income_ratio,
          roic=avg_roic,
          mos=mos,
          red_flags=tuple(red_flags),
          moat_strength=moat_strength,
          management_quality=management_quality,
      ),
      config,
  )
  call = investment_verdict(score.total, mos, config.scoring.mos)
  rationale = investment_rationale(avg_roic, mos, leverage, red_flags,
                                   config.scoring)

  logger.info('%s: IV $%.2f vs price $%.2f (MOS %.1f%%), score %d %s, %s',
              quote.symbol, dcf_result.intrinsic_value, quote.price, mos,
              score.total, score.verdict.value, call.value)

  return AnalysisResult(
      symbol=quote.symbol,
      price=quote.price,
      roic_history=tuple(history),
      avg_roic=avg_roic,
      roic_consistency=roic_consistency(roic_values),
      revenue_growth=revenue_growth,
      inventory_growth=inventory_growth,
      margin_change=margin_change,
      dcf_params=params,
      dcf_result=dcf_result,
      mos=mos,
      mos_zone=mos_zone(mos),
      buy_price=buy_price,
      strong_buy_price=strong_buy_price,
      red_flags=tuple(red_flags),
      red_flag_summary=summarize_red_flags(red_flags),
      score=score,
      investment_call=call,
      rationale=rationale,
      debt_to_equity=leverage,
      current_ratio=latest.current_ratio,
      fcf=latest.free_cash_flow,
      diag={
          'config': config.name,
          'fiscal_years': len(statements),
          'latest_fiscal_date': str(latest.date.date()),
          'interest_coverage': interest_coverage,
      },
  )
