'''
Financial Modeling Prep (FMP) client.

Thin supplier of typed records for the engine: fetches annual statements
and quotes over HTTP and maps the JSON payloads into Quote and
StatementYear. Responses are cached in an injected TTLCache. There are no
retries and no fallback data; failures propagate to the caller.

References:
- https://financialmodelingprep.com/developer/docs/
'''

import logging
from typing import Any, Dict, List, Optional

import pandas as pd
import requests

from moneytalks.data.cache import TTLCache
from moneytalks.domain.errors import DataUnavailable
from moneytalks.domain.types import Percent
from moneytalks.domain.types import Quote
from moneytalks.domain.types import StatementYear

logger = logging.getLogger(__name__)

FMP_BASE_URL = 'https://financialmodelingprep.com/api/v3'

Record = Dict[str, Any]


def _num(record: Record, key: str) -> float:
  '''Numeric field, with missing or null values read as 0.'''
  value = record.get(key)
  return float(value) if value is not None else 0.0


def _optional_num(record: Record, key: str) -> Optional[float]:
  value = record.get(key)
  return float(value) if value is not None else None


def parse_quote(record: Record) -> Quote:
  return Quote(
      symbol=record['symbol'],
      name=record.get('name') or record['symbol'],
      price=_num(record, 'price'),
      change=_num(record, 'change'),
      change_percent=Percent(_num(record, 'changesPercentage')),
      day_high=_num(record, 'dayHigh'),
      day_low=_num(record, 'dayLow'),
      year_high=_num(record, 'yearHigh'),
      year_low=_num(record, 'yearLow'),
      market_cap=_num(record, 'marketCap'),
      volume=_num(record, 'volume'),
      avg_volume=_num(record, 'avgVolume'),
      pe=_optional_num(record, 'pe'),
      eps=_optional_num(record, 'eps'),
  )


def parse_income(record: Record) -> Record:
  '''Income statement fields; FMP ratios are fractions, stored as percents.'''
  return {
      'date': pd.Timestamp(record['date']),
      'revenue': _num(record, 'revenue'),
      'cost_of_revenue': _num(record, 'costOfRevenue'),
      'gross_profit': _num(record, 'grossProfit'),
      'gross_profit_ratio': Percent(_num(record, 'grossProfitRatio') * 100),
      'operating_expenses': _num(record, 'operatingExpenses'),
      'operating_income': _num(record, 'operatingIncome'),
      'operating_income_ratio':
          Percent(_num(record, 'operatingIncomeRatio') * 100),
      'ebitda': _num(record, 'ebitda'),
      'ebitda_ratio': Percent(_num(record, 'ebitdaratio') * 100),
      'net_income': _num(record, 'netIncome'),
      'eps': _num(record, 'eps'),
  }


def parse_balance(record: Record) -> Record:
  current_assets = _num(record, 'totalCurrentAssets')
  current_liabilities = _num(record, 'totalCurrentLiabilities')
  return {
      'cash_and_equivalents': _num(record, 'cashAndCashEquivalents'),
      'inventory': _num(record, 'inventory'),
      'current_assets': current_assets,
      'total_assets': _num(record, 'totalAssets'),
      'current_liabilities': current_liabilities,
      'total_debt': _num(record, 'totalDebt'),
      'total_equity': _num(record, 'totalStockholdersEquity'),
      'current_ratio': (current_assets / current_liabilities
                        if current_liabilities else 0.0),
  }


def parse_cash_flow(record: Record) -> Record:
  return {
      'operating_cash_flow': _num(record, 'operatingCashFlow'),
      'capital_expenditure': _num(record, 'capitalExpenditure'),
      'free_cash_flow': _num(record, 'freeCashFlow'),
      'stock_based_compensation': _num(record, 'stockBasedCompensation'),
  }


def merge_statements(
    income: List[Record],
    balance: List[Record],
    cash_flow: List[Record],
) -> List[StatementYear]:
  '''
  Merge the three statements year by year into StatementYear records.

  Statements are paired by position (FMP returns each newest-first) and
  truncated to the shortest list. The result is sorted newest-first.
  '''
  years = [
      StatementYear(**parse_income(i), **parse_balance(b),
                    **parse_cash_flow(c))
      for i, b, c in zip(income, balance, cash_flow)
  ]
  return sorted(years, key=lambda s: s.date, reverse=True)


class FMPClient:
  '''
  Cached FMP client.

  The cache is injected so callers control its lifetime and tests can
  substitute their own clock.
  '''

  def __init__(
      self,
      api_key: str,
      session: Optional[requests.Session] = None,
      cache: Optional[TTLCache] = None,
      base_url: str = FMP_BASE_URL,
      timeout_sec: int = 30,
  ):
    '''
    Initialize client.

    Args:
      api_key: FMP API key
      session: requests session (default: new Session)
      cache: Response cache (default: TTLCache with 5 minute TTL)
      base_url: API root
      timeout_sec: Per-request timeout
    '''
    self.api_key = api_key
    self.session = session or requests.Session()
    self.cache = cache if cache is not None else TTLCache()
    self.base_url = base_url.rstrip('/')
    self.timeout_sec = timeout_sec

  def _get_json(self, path: str, **params: Any) -> List[Record]:
    '''
    GET a list payload, served from the cache while fresh.

    Only list payloads are cached. FMP reports failures such as an invalid
    key as an {"Error Message": ...} object with HTTP 200; those raise
    instead of reading as "no data".

    Raises:
      requests.HTTPError: On HTTP error status or an FMP error payload
    '''
    url = f'{self.base_url}/{path}'
    key = (path, tuple(sorted(params.items())))

    cached = self.cache.get(key)
    if cached is not None:
      logger.debug('Cache hit: %s', key)
      return cached

    logger.debug('GET %s %s', url, params)
    resp = self.session.get(url,
                            params={
                                **params, 'apikey': self.api_key
                            },
                            timeout=self.timeout_sec)
    resp.raise_for_status()
    payload = resp.json()

    if isinstance(payload, dict) and 'Error Message' in payload:
      raise requests.HTTPError(
          f'FMP error for {path}: {payload["Error Message"]}', response=resp)
    if not isinstance(payload, list):
      logger.warning('Unexpected %s payload for %s', type(payload).__name__,
                     path)
      return []

    self.cache.put(key, payload)
    return payload

  def _get_records(self, symbol: str, dataset: str, path: str,
                   **params: Any) -> List[Record]:
    records = self._get_json(path, **params)
    if not records:
      raise DataUnavailable(symbol, dataset)
    return records

  def fetch_quote(self, symbol: str) -> Quote:
    '''
    Raises:
      requests.HTTPError: On HTTP error status or an FMP error payload
      DataUnavailable: If FMP returns no quote
    '''
    records = self._get_records(symbol, 'quote', f'quote/{symbol}')
    return parse_quote(records[0])

  def fetch_income_statements(self,
                              symbol: str,
                              limit: int = 5) -> List[Record]:
    return self._get_records(symbol,
                             'income statement',
                             f'income-statement/{symbol}',
                             limit=limit)

  def fetch_balance_sheets(self, symbol: str, limit: int = 5) -> List[Record]:
    return self._get_records(symbol,
                             'balance sheet',
                             f'balance-sheet-statement/{symbol}',
                             limit=limit)

  def fetch_cash_flows(self, symbol: str, limit: int = 5) -> List[Record]:
    return self._get_records(symbol,
                             'cash flow',
                             f'cash-flow-statement/{symbol}',
                             limit=limit)

  def fetch_statements(self,
                       symbol: str,
                       limit: int = 5) -> List[StatementYear]:
    '''Fetch and merge the three annual statements, newest first.'''
    statements = merge_statements(
        self.fetch_income_statements(symbol, limit),
        self.fetch_balance_sheets(symbol, limit),
        self.fetch_cash_flows(symbol, limit),
    )
    logger.info('%s: fetched %d fiscal years', symbol, len(statements))
    return statements
