"""
Domain Layer - Business Entities

Pydantic models returned by repositories and services.

Author: BBltZen
Date: 2026-10-19
"""
from bbltzen.domain.product import ProductType
from bbltzen.domain.pricing import OrderItemPrice, BatchPriceRequest, BatchPriceResult, CacheStats
from bbltzen.domain.order import OrderItemTotal, OrderTotal, OrderTotalUpdate
from bbltzen.domain.tax_rate import TaxRate

__all__ = [
    'ProductType',
    'OrderItemPrice',
    'BatchPriceRequest',
    'BatchPriceResult',
    'CacheStats',
    'OrderItemTotal',
    'OrderTotal',
    'OrderTotalUpdate',
    'TaxRate',
]
