"""
Price Cache
In-memory memo of computed base prices keyed by (product type, article id)

Author: BBltZen
Date: 2026-10-19
"""
import threading
import time
from decimal import Decimal
from typing import Dict, Optional, Tuple

from bbltzen.domain.pricing import CacheStats
from bbltzen.domain.product import ProductType

CacheKey = Tuple[ProductType, int]


class PriceCache:
    """
    Thread-safe price memo owned by one PriceCalculationService

    Entries live until clear() unless a ttl_seconds is given, in which case
    they expire that many seconds after being stored.
    """

    def __init__(self, ttl_seconds: Optional[float] = None):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[CacheKey, Tuple[Decimal, Optional[float]]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, product_type: ProductType, article_id: int) -> Optional[Decimal]:
        """Cached price or None on miss / expired entry"""
        key = (ProductType.parse(product_type), article_id)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                price, expires_at = entry
                if expires_at is None or expires_at > time.monotonic():
                    self._hits += 1
                    return price
                del self._entries[key]
            self._misses += 1
            return None

    def put(self, product_type: ProductType, article_id: int, price: Decimal) -> None:
        key = (ProductType.parse(product_type), article_id)
        expires_at = time.monotonic() + self.ttl_seconds if self.ttl_seconds else None
        with self._lock:
            self._entries[key] = (price, expires_at)

    def evict(self, product_type: ProductType, article_id: int) -> bool:
        """Drop one entry; True if it was present"""
        key = (ProductType.parse(product_type), article_id)
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry and reset counters; returns the number dropped"""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            return count

    def stats(self) -> CacheStats:
        with self._lock:
            self._prune_expired()
            return CacheStats(size=len(self._entries), hits=self._hits, misses=self._misses)

    def __contains__(self, key: CacheKey) -> bool:
        product_type, article_id = key
        with self._lock:
            entry = self._entries.get((ProductType.parse(product_type), article_id))
            return entry is not None and (entry[1] is None or entry[1] > time.monotonic())

    def __len__(self) -> int:
        with self._lock:
            self._prune_expired()
            return len(self._entries)

    def _prune_expired(self) -> None:
        # caller holds self._lock
        if not self.ttl_seconds:
            return
        now = time.monotonic()
        expired = [
            key for key, (_, expires_at) in self._entries.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._entries[key]
