'''
Single-company analysis entrypoint.

This module provides the CLI for running an analysis. It:
1. Loads statements and a quote (live FMP data or synthetic demo data)
2. Runs the analysis pipeline (ROIC, DCF, MOS, red flags, score)
3. Logs the report and the growth x discount sensitivity table

Usage:
  python -m moneytalks.run --symbol GRMN --mock
  python -m moneytalks.run --symbol AAPL --api-key $FMP_API_KEY --moat Wide
'''

import argparse
import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple

from moneytalks.analysis.analyzer import analyze
from moneytalks.analysis.sensitivity import build_sensitivity_grid
from moneytalks.config.settings import EngineConfig
from moneytalks.data.cache import TTLCache
from moneytalks.data.fmp_client import FMPClient
from moneytalks.data.mock import mock_quote
from moneytalks.data.mock import mock_statements
from moneytalks.domain.types import AnalysisResult
from moneytalks.domain.types import Quote
from moneytalks.domain.types import StatementYear
from moneytalks.scoring.decision import CALL_SUMMARIES

logger = logging.getLogger(__name__)


def load_config(path: Optional[Path]) -> EngineConfig:
  '''Load EngineConfig from a JSON file, or the default config.'''
  if path is None:
    return EngineConfig.default()
  if not path.exists():
    raise FileNotFoundError(f'Config not found: {path}')
  return EngineConfig.from_json(path.read_text(encoding='utf-8'))


def load_company(
    symbol: str,
    use_mock: bool,
    api_key: Optional[str],
    config: EngineConfig,
) -> Tuple[Quote, List[StatementYear]]:
  '''Fetch quote and statements from FMP, or build demo data.'''
  if use_mock:
    logger.info('Using synthetic data for %s', symbol)
    return mock_quote(symbol), mock_statements(symbol)

  if not api_key:
    raise ValueError('An FMP API key is required without --mock '
                     '(pass --api-key or set FMP_API_KEY)')

  client = FMPClient(api_key=api_key,
                     cache=TTLCache(duration_sec=config.cache_duration_sec))
  return client.fetch_quote(symbol), client.fetch_statements(symbol)


def log_report(result: AnalysisResult) -> None:
  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('MoneyTalks Analysis - %s', result.symbol)
  logger.info(separator)

  dcf = result.dcf_result
  logger.info('\nValuation:')
  logger.info('  Enterprise Value: $%s', f'{dcf.enterprise_value:,.0f}')
  logger.info('  Equity Value: $%s', f'{dcf.equity_value:,.0f}')
  logger.info('  Intrinsic Value: $%.2f', dcf.intrinsic_value)
  logger.info('  Current Price: $%.2f', result.price)
  logger.info('  Margin of Safety: %.1f%% (%s)', result.mos, result.mos_zone)
  logger.info('  Buy below: $%.2f, strong buy below: $%.2f',
              result.buy_price, result.strong_buy_price)

  logger.info('\nCapital Efficiency:')
  for row in result.roic_history:
    logger.info('  %d: %.1f%%', row.date.year, row.roic)
  logger.info('  Average ROIC: %.1f%% - %s', result.avg_roic,
              result.roic_consistency)

  summary = result.red_flag_summary
  logger.info('\nRed Flags: %s (%d/%d checks passed)', summary.label,
              summary.passed, summary.total)
  for flag in result.red_flags:
    logger.info('  [%s] %s: %s', flag.status.value.upper(), flag.type,
                flag.message)

  score = result.score
  logger.info('\nScore: %d/100 -> %s', score.total, score.verdict.value)
  for component, points in score.breakdown.to_dict().items():
    logger.info('  %s: %d', component, points)
  if score.raw_total != score.total:
    logger.info('  (raw total before clamping: %d)', score.raw_total)

  logger.info('\nInvestment Call: %s - %s', result.investment_call.value,
              CALL_SUMMARIES[result.investment_call])
  if result.rationale:
    logger.info('  Rationale: %s', result.rationale)


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(description='Run MoneyTalks analysis')
  parser.add_argument('--symbol',
                      type=str,
                      required=True,
                      help='Ticker symbol (e.g., GRMN, AAPL)')
  parser.add_argument('--mock',
                      action='store_true',
                      help='Use synthetic demo data instead of FMP')
  parser.add_argument('--api-key',
                      type=str,
                      default=os.environ.get('FMP_API_KEY'),
                      help='FMP API key (default: $FMP_API_KEY)')
  parser.add_argument('--moat',
                      type=str,
                      default='Moderate',
                      choices=['Wide', 'Moderate', 'Narrow', 'None'],
                      help='Moat strength')
  parser.add_argument('--management',
                      type=str,
                      default='A',
                      choices=['A+', 'A', 'B', 'C'],
                      help='Management quality grade')
  parser.add_argument('--config',
                      type=Path,
                      help='EngineConfig JSON file (optional)')
  parser.add_argument('--json',
                      type=Path,
                      help='Write the full result as JSON (optional)')
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

  config = load_config(args.config)
  quote, statements = load_company(args.symbol, args.mock, args.api_key,
                                   config)

  result = analyze(
      quote,
      statements,
      config=config,
      moat_strength=args.moat,
      management_quality=args.management,
  )
  log_report(result)

  grid = build_sensitivity_grid(result.dcf_params)
  table = grid.to_frame()
  logger.info('\nIntrinsic Value per Share ($)\n%s',
              table.to_string(float_format=lambda x: f'${x:.2f}'))
  logger.info('\nValue vs Price $%.2f\n%s', result.price,
              grid.zones(result.price).to_string())

  if args.json:
    payload = result.to_dict()
    payload['sensitivity'] = grid.to_rows()
    args.json.write_text(json.dumps(payload, indent=2), encoding='utf-8')
    logger.info('Saved to: %s', args.json)


if __name__ == '__main__':
  main()
