import pandas as pd
import pytest

from moneytalks.data.mock import mock_quote
from moneytalks.data.mock import mock_statements
from moneytalks.domain.types import DCFParameters
from moneytalks.domain.types import Percent
from moneytalks.domain.types import Quote
from moneytalks.domain.types import StatementYear


def _make_year(year: int, **overrides: float) -> StatementYear:
  """Helper to create a StatementYear with sensible defaults."""
  values = dict(
      revenue=1000.0,
      operating_income=200.0,
      operating_income_ratio=Percent(20.0),
      cash_and_equivalents=50.0,
      inventory=100.0,
      current_assets=400.0,
      current_liabilities=200.0,
      total_assets=1200.0,
      total_debt=100.0,
      total_equity=500.0,
      current_ratio=2.0,
      operating_cash_flow=250.0,
      capital_expenditure=-30.0,
      free_cash_flow=220.0,
      stock_based_compensation=20.0,
  )
  values.update(overrides)
  return StatementYear(date=pd.Timestamp(year=year, month=12, day=31),
                       **values)


@pytest.fixture
def base_dcf_params() -> DCFParameters:
  """
  Reference DCF inputs.

  With growth equal to the discount rate every explicit year discounts to
  the same present value:
    FCF_t = 1000 * 1.1^t * (0.2 * 0.79 - 0.03) = 128 * 1.1^t
    PV_t = 128, PV explicit = 640
  Terminal:
    TV = 1610.51 * 1.025 * 0.2 * 0.79 / 0.075 = 3477.628
    PV terminal = 3477.628 / 1.61051 = 2159.333
  EV = 2799.333, equity = 2829.333, IV = 28.2933
  """
  return DCFParameters(
      current_revenue=1000.0,
      revenue_growth=Percent(10.0),
      operating_margin=Percent(20.0),
      tax_rate=Percent(21.0),
      capex_percent=Percent(3.0),
      terminal_growth=Percent(2.5),
      discount_rate=Percent(10.0),
      shares_outstanding=100.0,
      cash=50.0,
      debt=20.0,
  )


@pytest.fixture
def sample_quote() -> Quote:
  return Quote(symbol='TEST', name='Test Corp', price=20.0, pe=10.0)


@pytest.fixture
def sample_statements() -> list[StatementYear]:
  """Two fiscal years, newest first: revenue +10%, inventory +20%."""
  return [
      _make_year(2023,
                 revenue=1100.0,
                 operating_income=231.0,
                 operating_income_ratio=Percent(21.0),
                 inventory=120.0),
      _make_year(2022),
  ]


@pytest.fixture
def mock_company() -> tuple[Quote, list[StatementYear]]:
  return mock_quote('GRMN'), mock_statements('GRMN')
