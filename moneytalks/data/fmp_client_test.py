from unittest.mock import MagicMock

import pandas as pd
import pytest
import requests

from moneytalks.data.cache import TTLCache
from moneytalks.data.fmp_client import FMPClient
from moneytalks.data.fmp_client import merge_statements
from moneytalks.data.fmp_client import parse_balance
from moneytalks.data.fmp_client import parse_income
from moneytalks.data.fmp_client import parse_quote
from moneytalks.domain.errors import DataUnavailable

QUOTE = {
    'symbol': 'GRMN',
    'name': 'Garmin Ltd.',
    'price': 195.5,
    'changesPercentage': 1.2,
    'marketCap': 37.5e9,
    'pe': 22.5,
    'eps': 8.69,
}


def _income(date: str, revenue: float) -> dict:
  return {
      'date': date,
      'revenue': revenue,
      'operatingIncome': revenue * 0.25,
      'operatingIncomeRatio': 0.25,
      'grossProfitRatio': 0.6,
      'ebitdaratio': 0.3,
  }


def _balance() -> dict:
  return {
      'cashAndCashEquivalents': 100.0,
      'inventory': 50.0,
      'totalCurrentAssets': 300.0,
      'totalCurrentLiabilities': 100.0,
      'totalDebt': 10.0,
      'totalStockholdersEquity': 500.0,
  }


def _cash_flow() -> dict:
  return {
      'operatingCashFlow': 200.0,
      'capitalExpenditure': -20.0,
      'freeCashFlow': 180.0,
      'stockBasedCompensation': 5.0,
  }


def _response(payload) -> MagicMock:
  resp = MagicMock()
  resp.json.return_value = payload
  resp.raise_for_status.return_value = None
  return resp


class TestParsers:
  """Tests for FMP payload parsers."""

  def test_parse_quote(self):
    quote = parse_quote(QUOTE)

    assert quote.symbol == 'GRMN'
    assert quote.price == 195.5
    assert quote.pe == 22.5
    assert quote.change == 0.0

  def test_parse_quote_missing_pe(self):
    quote = parse_quote({'symbol': 'X', 'price': 10.0, 'pe': None})

    assert quote.pe is None
    assert quote.name == 'X'

  def test_parse_income_ratios_to_percent(self):
    parsed = parse_income(_income('2023-12-31', 1000.0))

    assert parsed['date'] == pd.Timestamp('2023-12-31')
    assert parsed['operating_income_ratio'] == pytest.approx(25.0)
    assert parsed['gross_profit_ratio'] == pytest.approx(60.0)
    assert parsed['net_income'] == 0.0

  def test_parse_balance_current_ratio(self):
    assert parse_balance(_balance())['current_ratio'] == 3.0

  def test_parse_balance_zero_liabilities(self):
    record = {**_balance(), 'totalCurrentLiabilities': 0}

    assert parse_balance(record)['current_ratio'] == 0.0

  def test_merge_sorts_newest_first_and_truncates(self):
    income = [_income('2022-12-31', 900.0), _income('2023-12-31', 1000.0)]

    years = merge_statements(income, [_balance(), _balance()], [_cash_flow()])

    assert len(years) == 1
    assert years[0].fiscal_year == 2022

  def test_merge_order(self):
    income = [_income('2022-12-31', 900.0), _income('2023-12-31', 1000.0)]

    years = merge_statements(income, [_balance()] * 2, [_cash_flow()] * 2)

    assert [y.fiscal_year for y in years] == [2023, 2022]
    assert years[0].revenue == 1000.0
    assert years[0].capital_expenditure == -20.0


class TestFMPClient:
  """Tests for FMPClient with a mocked requests session."""

  def _client(self, *payloads):
    session = MagicMock()
    session.get.side_effect = [_response(p) for p in payloads]
    return FMPClient(api_key='secret', session=session), session

  def test_fetch_quote(self):
    client, session = self._client([QUOTE])

    quote = client.fetch_quote('GRMN')

    assert quote.name == 'Garmin Ltd.'
    args, kwargs = session.get.call_args
    assert args[0] == 'https://financialmodelingprep.com/api/v3/quote/GRMN'
    assert kwargs['params'] == {'apikey': 'secret'}
    assert kwargs['timeout'] == 30

  def test_responses_are_cached(self):
    client, session = self._client([QUOTE])

    client.fetch_quote('GRMN')
    client.fetch_quote('GRMN')

    assert session.get.call_count == 1

  def test_cache_expiry_refetches(self):
    now = [0.0]
    session = MagicMock()
    session.get.side_effect = [_response([QUOTE]), _response([QUOTE])]
    client = FMPClient(api_key='k',
                       session=session,
                       cache=TTLCache(duration_sec=300, clock=lambda: now[0]))

    client.fetch_quote('GRMN')
    now[0] = 301.0
    client.fetch_quote('GRMN')

    assert session.get.call_count == 2

  def test_empty_payload_raises(self):
    client, _ = self._client([])

    with pytest.raises(DataUnavailable, match='No quote data for NOPE'):
      client.fetch_quote('NOPE')

  def test_error_payload_raises_and_is_not_cached(self):
    """FMP signals a bad key with HTTP 200 and an error object."""
    error = {'Error Message': 'Invalid API KEY.'}
    client, session = self._client(error, error)

    for _ in range(2):
      with pytest.raises(requests.HTTPError, match='Invalid API KEY'):
        client.fetch_quote('AAPL')

    assert session.get.call_count == 2
    assert len(client.cache) == 0

  def test_error_payload_then_recovery(self):
    client, _ = self._client({'Error Message': 'Limit Reach.'}, [QUOTE])

    with pytest.raises(requests.HTTPError):
      client.fetch_quote('GRMN')

    assert client.fetch_quote('GRMN').symbol == 'GRMN'

  def test_unexpected_payload_is_not_cached(self):
    client, session = self._client({'unexpected': True}, [QUOTE])

    with pytest.raises(DataUnavailable):
      client.fetch_quote('GRMN')

    assert client.fetch_quote('GRMN').price == 195.5
    assert session.get.call_count == 2

  def test_http_error_propagates(self):
    session = MagicMock()
    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError('429')
    session.get.return_value = resp
    client = FMPClient(api_key='k', session=session)

    with pytest.raises(requests.HTTPError):
      client.fetch_quote('GRMN')
    assert len(client.cache) == 0

  def test_fetch_statements(self):
    client, session = self._client(
        [_income('2023-12-31', 1000.0),
         _income('2022-12-31', 900.0)],
        [_balance(), _balance()],
        [_cash_flow(), _cash_flow()],
    )

    years = client.fetch_statements('GRMN', limit=2)

    assert [y.fiscal_year for y in years] == [2023, 2022]
    assert years[0].operating_income_ratio == pytest.approx(25.0)
    assert years[0].current_ratio == 3.0
    paths = [c.args[0].rsplit('/', 2)[-2] for c in session.get.call_args_list]
    assert paths == [
        'income-statement', 'balance-sheet-statement', 'cash-flow-statement'
    ]
    assert session.get.call_args.kwargs['params'] == {
        'limit': 2,
        'apikey': 'secret'
    }
