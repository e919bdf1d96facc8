"""
Repository Layer - Data Access

This layer handles all database queries over a SQLAlchemy session.
Repositories abstract away ORM details from the pricing services.

Author: BBltZen
Date: 2026-10-19
"""
from bbltzen.repositories.catalog_repository import CatalogRepository
from bbltzen.repositories.order_repository import OrderRepository
from bbltzen.repositories.tax_rate_repository import TaxRateRepository

__all__ = [
    'CatalogRepository',
    'OrderRepository',
    'TaxRateRepository',
]
