'''
Synthetic demo data.

Deterministic stand-ins for live data: revenue compounding 15% a year,
assets 10% a year and operating cash flow 12% a year, with the latest
fiscal year ending in 2023. Used by the CLI's --mock mode and in tests.
'''

from typing import Dict, List

import pandas as pd

from moneytalks.domain.types import Percent
from moneytalks.domain.types import Quote
from moneytalks.domain.types import StatementYear

MOCK_PRICES: Dict[str, Dict[str, float]] = {
    'GRMN': {'price': 195.50, 'pe': 22.5, 'market_cap': 37.5e9},
    'AAPL': {'price': 189.50, 'pe': 28.5, 'market_cap': 2.9e12},
    'COST': {'price': 899.50, 'pe': 45.2, 'market_cap': 398e9},
    'MSFT': {'price': 378.00, 'pe': 35.1, 'market_cap': 2.8e12},
    'NVDA': {'price': 560.00, 'pe': 45.0, 'market_cap': 1.4e12},
}

MOCK_NAMES: Dict[str, str] = {
    'GRMN': 'Garmin Ltd.',
    'AAPL': 'Apple Inc.',
    'COST': 'Costco Wholesale',
    'MSFT': 'Microsoft Corporation',
    'NVDA': 'NVIDIA Corporation',
}

LATEST_FISCAL_YEAR = 2023
BASE_REVENUE = 6.3e9
BASE_ASSETS = 8e9
BASE_OCF = 1.5e9
SHARES_FOR_EPS = 192.5e6


def mock_quote(symbol: str) -> Quote:
  mock = MOCK_PRICES.get(symbol, {'price': 100.0, 'pe': 20.0,
                                  'market_cap': 10e9})
  price = mock['price']
  return Quote(
      symbol=symbol,
      name=MOCK_NAMES.get(symbol, symbol),
      price=price,
      change=price * 0.012,
      change_percent=Percent(1.2),
      day_high=price * 1.015,
      day_low=price * 0.995,
      year_high=price * 1.25,
      year_low=price * 0.68,
      market_cap=mock['market_cap'],
      volume=850000,
      avg_volume=980000,
      pe=mock['pe'],
      eps=price / mock['pe'],
  )


def mock_statements(symbol: str, years: int = 5) -> List[StatementYear]:
  '''
  Synthetic fiscal years, newest first.

  symbol is accepted for interface parity with the live client; every
  symbol gets the same fundamentals.
  '''
  del symbol
  statements = []
  for i in range(years):
    revenue = BASE_REVENUE * 1.15**-i
    assets = BASE_ASSETS * 1.1**-i
    ocf = BASE_OCF * 1.12**-i
    statements.append(
        StatementYear(
            date=pd.Timestamp(year=LATEST_FISCAL_YEAR - i, month=12, day=31),
            revenue=revenue,
            cost_of_revenue=revenue * 0.38,
            gross_profit=revenue * 0.62,
            gross_profit_ratio=Percent(62.0),
            operating_expenses=revenue * 0.37,
            operating_income=revenue * 0.25,
            operating_income_ratio=Percent(25.0),
            ebitda=revenue * 0.28,
            ebitda_ratio=Percent(28.0),
            net_income=revenue * 0.20,
            eps=revenue * 0.20 / SHARES_FOR_EPS,
            cash_and_equivalents=assets * 0.44,
            inventory=assets * 0.13,
            current_assets=assets * 0.75,
            total_assets=assets,
            current_liabilities=assets * 0.25,
            total_debt=0.0,
            total_equity=assets * 0.75,
            current_ratio=3.0,
            operating_cash_flow=ocf,
            capital_expenditure=ocf * 0.15,
            free_cash_flow=ocf * 0.85,
            stock_based_compensation=ocf * 0.02,
        ))
  return statements
