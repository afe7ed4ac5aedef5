"""Error kinds raised by the valuation engine."""

from typing import Any


class InvalidParameters(ValueError):
  """
  Input record violates an engine precondition.

  Attributes:
    field: Name of the offending input field
    value: The rejected value
    reason: Human-readable explanation
  """

  def __init__(self, field: str, value: Any, reason: str):
    self.field = field
    self.value = value
    self.reason = reason
    super().__init__(f'Invalid {field}={value!r}: {reason}')


class DataUnavailable(LookupError):
  """Data source returned no records for a symbol."""

  def __init__(self, symbol: str, dataset: str):
    self.symbol = symbol
    self.dataset = dataset
    super().__init__(f'No {dataset} data for {symbol}')
