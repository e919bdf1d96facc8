"""
Unit tests for PriceCache
"""
import threading
from decimal import Decimal
from unittest.mock import patch

from bbltzen.domain.product import ProductType
from bbltzen.services.price_cache import PriceCache


class TestPriceCache:
    """Test PriceCache get/put/clear semantics"""

    def test_get_returns_none_on_miss(self):
        cache = PriceCache()

        assert cache.get(ProductType.STANDARD_DRINK, 1) is None
        assert cache.stats().misses == 1

    def test_put_then_get_returns_price(self):
        cache = PriceCache()
        cache.put(ProductType.STANDARD_DRINK, 1, Decimal('5.00'))

        assert cache.get(ProductType.STANDARD_DRINK, 1) == Decimal('5.00')
        assert cache.stats().hits == 1
        assert len(cache) == 1

    def test_keys_are_scoped_by_product_type(self):
        """Same article id under two variants are different entries"""
        cache = PriceCache()
        cache.put(ProductType.STANDARD_DRINK, 7, Decimal('5.00'))
        cache.put(ProductType.DESSERT, 7, Decimal('3.00'))

        assert cache.get(ProductType.STANDARD_DRINK, 7) == Decimal('5.00')
        assert cache.get(ProductType.DESSERT, 7) == Decimal('3.00')
        assert cache.get(ProductType.CUSTOM_DRINK, 7) is None

    def test_string_tags_are_accepted(self):
        cache = PriceCache()
        cache.put('bs', 1, Decimal('5.00'))

        assert cache.get(ProductType.STANDARD_DRINK, 1) == Decimal('5.00')
        assert (ProductType.STANDARD_DRINK, 1) in cache

    def test_clear_drops_all_entries(self):
        cache = PriceCache()
        cache.put(ProductType.STANDARD_DRINK, 1, Decimal('5.00'))
        cache.put(ProductType.DESSERT, 4, Decimal('3.50'))

        removed = cache.clear()

        assert removed == 2
        assert len(cache) == 0
        assert cache.get(ProductType.STANDARD_DRINK, 1) is None

    def test_evict_single_entry(self):
        cache = PriceCache()
        cache.put(ProductType.DESSERT, 4, Decimal('3.50'))

        assert cache.evict(ProductType.DESSERT, 4) is True
        assert cache.evict(ProductType.DESSERT, 4) is False

    @patch('bbltzen.services.price_cache.time.monotonic')
    def test_entries_expire_after_ttl(self, mock_monotonic):
        """With a TTL an entry stops being served once it is older than ttl_seconds"""
        mock_monotonic.return_value = 1000.0
        cache = PriceCache(ttl_seconds=60)
        cache.put(ProductType.STANDARD_DRINK, 1, Decimal('5.00'))

        mock_monotonic.return_value = 1059.0
        assert cache.get(ProductType.STANDARD_DRINK, 1) == Decimal('5.00')

        mock_monotonic.return_value = 1061.0
        assert cache.get(ProductType.STANDARD_DRINK, 1) is None
        assert len(cache) == 0

    @patch('bbltzen.services.price_cache.time.monotonic')
    def test_size_excludes_expired_entries(self, mock_monotonic):
        """len() and stats().size only count entries get() would still serve"""
        mock_monotonic.return_value = 1000.0
        cache = PriceCache(ttl_seconds=60)
        cache.put(ProductType.STANDARD_DRINK, 1, Decimal('5.00'))
        mock_monotonic.return_value = 1030.0
        cache.put(ProductType.DESSERT, 4, Decimal('3.50'))

        mock_monotonic.return_value = 1070.0

        assert len(cache) == 1
        assert cache.stats().size == 1
        assert (ProductType.STANDARD_DRINK, 1) not in cache
        assert cache.get(ProductType.DESSERT, 4) == Decimal('3.50')

    def test_hit_ratio(self):
        cache = PriceCache()
        cache.put(ProductType.STANDARD_DRINK, 1, Decimal('5.00'))
        cache.get(ProductType.STANDARD_DRINK, 1)
        cache.get(ProductType.STANDARD_DRINK, 1)
        cache.get(ProductType.STANDARD_DRINK, 2)

        stats = cache.stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert round(stats.hit_ratio, 2) == 0.67

    def test_concurrent_clear_and_lookups_do_not_crash(self):
        """clear() racing with get/put must never raise"""
        cache = PriceCache()
        errors = []

        def writer():
            try:
                for i in range(500):
                    cache.put(ProductType.STANDARD_DRINK, i, Decimal('1.00'))
                    cache.get(ProductType.STANDARD_DRINK, i)
            except Exception as e:  # pragma: no cover - only hit on failure
                errors.append(e)

        def clearer():
            try:
                for _ in range(200):
                    cache.clear()
            except Exception as e:  # pragma: no cover - only hit on failure
                errors.append(e)

        threads = [threading.Thread(target=writer) for _ in range(4)] + [threading.Thread(target=clearer)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
