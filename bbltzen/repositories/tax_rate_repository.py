"""
Tax Rate Repository - Data Access Layer for tax rates (aliquote IVA)

Author: BBltZen
Date: 2026-10-19
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from bbltzen.core.exceptions import (
    DependencyConflictError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from bbltzen.core.money import round_money, to_decimal
from bbltzen.domain.tax_rate import TaxRate
from bbltzen.models.order import OrderItem, TaxRate as TaxRateModel

logger = logging.getLogger(__name__)


class TaxRateRepository:
    """
    Repository for TaxRate data access

    Reads return TaxRate domain models. Writes validate the rate range,
    refuse duplicate rate+description pairs and refuse to delete a rate that
    order items still reference.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, tax_rate_id: int) -> Optional[TaxRate]:
        """
        Find tax rate by ID

        Returns:
            TaxRate or None if not found
        """
        row = self.db.get(TaxRateModel, tax_rate_id)
        return TaxRate.model_validate(row) if row else None

    def get_rate(self, tax_rate_id: int) -> Optional[Decimal]:
        """
        Percentage stored for a tax rate

        Returns:
            Decimal percentage (22.00 = 22%) or None if not found
        """
        row = (
            self.db.query(TaxRateModel.rate)
            .filter(TaxRateModel.id == tax_rate_id)
            .first()
        )
        return to_decimal(row[0]) if row else None

    def find_all(self, limit: int = 50, offset: int = 0) -> Tuple[List[TaxRate], int]:
        """
        Find all tax rates ordered by rate

        Args:
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of tax rates, total count)
        """
        total = self.db.query(func.count(TaxRateModel.id)).scalar()

        rows = (
            self.db.query(TaxRateModel)
            .order_by(TaxRateModel.rate, TaxRateModel.id)
            .limit(limit)
            .offset(offset)
            .all()
        )

        return [TaxRate.model_validate(row) for row in rows], total

    def find_by_rate(self, rate: Decimal) -> List[TaxRate]:
        rows = (
            self.db.query(TaxRateModel)
            .filter(TaxRateModel.rate == round_money(rate))
            .order_by(TaxRateModel.id)
            .all()
        )
        return [TaxRate.model_validate(row) for row in rows]

    def exists(self, tax_rate_id: int) -> bool:
        return self.db.query(TaxRateModel.id).filter(TaxRateModel.id == tax_rate_id).first() is not None

    def exists_by_rate_description(
        self,
        rate: Decimal,
        description: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        """Check whether another tax rate has the same rate and description"""
        query = self.db.query(TaxRateModel.id).filter(
            TaxRateModel.rate == round_money(rate),
            func.lower(TaxRateModel.description) == description.strip().lower(),
        )
        if exclude_id is not None:
            query = query.filter(TaxRateModel.id != exclude_id)
        return query.first() is not None

    def has_dependencies(self, tax_rate_id: int) -> bool:
        """True when at least one order item references the tax rate"""
        return (
            self.db.query(OrderItem.id)
            .filter(OrderItem.tax_rate_id == tax_rate_id)
            .first()
        ) is not None

    def add(self, rate: Decimal, description: str) -> TaxRate:
        """
        Create a tax rate

        Raises:
            ValidationError: rate outside 0..100 or blank description
            DuplicateError: same rate and description already stored
        """
        rate, description = self._validate(rate, description)

        if self.exists_by_rate_description(rate, description):
            raise DuplicateError(f"Tax rate {rate}% '{description}' already exists")

        row = TaxRateModel(rate=rate, description=description)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)

        logger.info(f"Created tax rate {row.id}: {rate}% {description}")
        return TaxRate.model_validate(row)

    def update(self, tax_rate_id: int, rate: Decimal, description: str) -> TaxRate:
        """
        Update rate and description of an existing tax rate

        Raises:
            NotFoundError: tax rate does not exist
            ValidationError: rate outside 0..100 or blank description
            DuplicateError: another tax rate has the same rate and description
        """
        rate, description = self._validate(rate, description)

        row = self.db.get(TaxRateModel, tax_rate_id)
        if row is None:
            raise NotFoundError(f"Tax rate not found: {tax_rate_id}")

        if self.exists_by_rate_description(rate, description, exclude_id=tax_rate_id):
            raise DuplicateError(f"Tax rate {rate}% '{description}' already exists")

        row.rate = rate
        row.description = description
        self.db.commit()
        self.db.refresh(row)

        logger.info(f"Updated tax rate {tax_rate_id}: {rate}% {description}")
        return TaxRate.model_validate(row)

    def delete(self, tax_rate_id: int) -> None:
        """
        Delete a tax rate that no order item references

        Raises:
            NotFoundError: tax rate does not exist
            DependencyConflictError: order items still reference it
        """
        row = self.db.get(TaxRateModel, tax_rate_id)
        if row is None:
            raise NotFoundError(f"Tax rate not found: {tax_rate_id}")

        if self.has_dependencies(tax_rate_id):
            raise DependencyConflictError(
                f"Tax rate {tax_rate_id} is referenced by order items and cannot be deleted"
            )

        self.db.delete(row)
        self.db.commit()
        logger.info(f"Deleted tax rate {tax_rate_id}")

    @staticmethod
    def _validate(rate: Decimal, description: str) -> Tuple[Decimal, str]:
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Tax rate description is required")

        rate = round_money(rate)
        if rate < 0 or rate > 100:
            raise ValidationError(f"Tax rate must be between 0 and 100: {rate}")

        return rate, description.strip()
