"""
Service Layer - Pricing and order totals

Usage:
    from bbltzen.services import get_order_total_service

    service = get_order_total_service(db)
    breakdown = service.calculate_order_total(42)
"""
from typing import Optional

from sqlalchemy.orm import Session

from bbltzen.repositories import CatalogRepository, OrderRepository, TaxRateRepository
from bbltzen.services.order_total_service import OrderTotalService
from bbltzen.services.price_cache import PriceCache
from bbltzen.services.price_calculation_service import PriceCalculationService


def get_price_calculation_service(db: Session, cache: Optional[PriceCache] = None) -> PriceCalculationService:
    """Build a PriceCalculationService over the given session"""
    return PriceCalculationService(CatalogRepository(db), TaxRateRepository(db), cache=cache)


def get_order_total_service(
    db: Session,
    price_calculation_service: Optional[PriceCalculationService] = None
) -> OrderTotalService:
    """Build an OrderTotalService (and its pricing engine, unless given)"""
    pricing = price_calculation_service or get_price_calculation_service(db)
    return OrderTotalService(db, OrderRepository(db), pricing)


__all__ = [
    "OrderTotalService",
    "PriceCache",
    "PriceCalculationService",
    "get_order_total_service",
    "get_price_calculation_service",
]
