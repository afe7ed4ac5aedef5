"""Data suppliers for the engine: response cache, FMP client, demo data."""

from moneytalks.data.cache import TTLCache
from moneytalks.data.fmp_client import FMPClient
from moneytalks.data.mock import mock_quote
from moneytalks.data.mock import mock_statements

__all__ = ['TTLCache', 'FMPClient', 'mock_quote', 'mock_statements']
