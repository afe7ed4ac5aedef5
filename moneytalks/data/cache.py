"""
TTL cache for data-source responses.

Owned by a single client and injected into it, never shared as a module
global. Last write wins; concurrent misses on the same key are not
de-duplicated and may both call the data source.
"""

from dataclasses import dataclass
import logging
import time
from typing import Any, Callable, Dict, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class CacheEntry:
  data: Any
  timestamp: float


class TTLCache:
  """
  Key -> (payload, fetch timestamp) map with expiry on read.

  Usage:
    cache = TTLCache(duration_sec=300)
    quote = cache.get_or_fetch(('quote', 'AAPL'), lambda: fetch('AAPL'))
  """

  def __init__(
      self,
      duration_sec: float = 300.0,
      clock: Callable[[], float] = time.monotonic,
  ):
    """
    Initialize cache.

    Args:
      duration_sec: Default time-to-live for entries
      clock: Monotonic time source in seconds (injectable for tests)
    """
    if duration_sec < 0:
      raise ValueError('duration_sec must be >= 0')
    self.duration_sec = duration_sec
    self._clock = clock
    self._entries: Dict[Hashable, CacheEntry] = {}

  def __len__(self) -> int:
    return len(self._entries)

  def __contains__(self, key: Hashable) -> bool:
    return self.get(key) is not None

  def get(self,
          key: Hashable,
          duration_sec: Optional[float] = None) -> Optional[Any]:
    """
    Return the cached payload, or None if missing or expired.

    Expired entries are evicted.
    """
    entry = self._entries.get(key)
    if entry is None:
      return None

    ttl = self.duration_sec if duration_sec is None else duration_sec
    if self._clock() - entry.timestamp < ttl:
      return entry.data

    del self._entries[key]
    return None

  def put(self, key: Hashable, data: Any) -> None:
    """Store data under key and drop every entry past the default TTL."""
    self.prune()
    self._entries[key] = CacheEntry(data=data, timestamp=self._clock())

  def prune(self) -> int:
    """Evict entries older than the default TTL. Returns the count."""
    now = self._clock()
    expired = [
        key for key, entry in self._entries.items()
        if now - entry.timestamp >= self.duration_sec
    ]
    for key in expired:
      del self._entries[key]
    if expired:
      logger.debug('Pruned %d expired entries', len(expired))
    return len(expired)

  def get_or_fetch(
      self,
      key: Hashable,
      fetch: Callable[[], T],
      duration_sec: Optional[float] = None,
  ) -> T:
    """
    Return a fresh cached payload or call fetch() and cache its result.

    Exceptions from fetch() propagate and nothing is cached.
    """
    cached = self.get(key, duration_sec)
    if cached is not None:
      logger.debug('Cache hit: %s', key)
      return cached

    logger.debug('Cache miss: %s', key)
    data = fetch()
    self.put(key, data)
    return data

  def invalidate(self, key: Hashable) -> None:
    self._entries.pop(key, None)

  def clear(self) -> None:
    self._entries.clear()
