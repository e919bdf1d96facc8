"""
Order Total Service
Aggregates order lines into subtotal, tax and grand total

Steps (per line):
1. taxable = unit_price * quantity - discount
2. tax = taxable * rate / 100
3. subtotal += taxable, total_tax += tax

grand_total = subtotal + total_tax. Every value is rounded to 2 decimals
where it is computed.

Author: BBltZen
Date: 2026-10-19
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from bbltzen.core.config import settings
from bbltzen.core.exceptions import BubbleTeaError, NotFoundError, ValidationError
from bbltzen.core.money import ZERO, round_money, to_decimal
from bbltzen.domain.order import OrderItemTotal, OrderTotal, OrderTotalUpdate
from bbltzen.models.order import OrderItem
from bbltzen.repositories.order_repository import OrderRepository
from bbltzen.services.price_calculation_service import PriceCalculationService

logger = logging.getLogger(__name__)


class OrderTotalService:
    """
    Service for computing and persisting order totals

    Totals are never recomputed in the background: callers invoke
    calculate_order_total (read-only) or update_order_total (persists).
    Callers must serialize updates of the same order; update_order_total
    additionally locks the order row for the duration of its transaction.
    """

    def __init__(
        self,
        db: Session,
        order_repository: OrderRepository,
        price_calculation_service: PriceCalculationService,
        final_status_ids: Optional[Iterable[int]] = None,
        tolerance: Optional[Decimal] = None
    ):
        self.db = db
        self.orders = order_repository
        self.pricing = price_calculation_service
        self.final_status_ids = (
            set(final_status_ids) if final_status_ids is not None
            else set(settings.get_final_order_status_ids())
        )
        self.tolerance = tolerance if tolerance is not None else settings.INVALID_TOTAL_TOLERANCE

    def calculate_order_total(self, order_id: int) -> OrderTotal:
        """
        Compute the total breakdown of an order without persisting it

        Args:
            order_id: Order ID

        Returns:
            OrderTotal with per-line amounts, subtotal, tax and grand total

        Raises:
            NotFoundError: order or a referenced tax rate not found
            ValidationError: order in a final state, or a malformed line
        """
        logger.info(f"Calculating order total: {order_id}")

        order = self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order not found: {order_id}")

        if order.order_status_id in self.final_status_ids:
            raise ValidationError(
                f"Order {order_id} is in final status {order.order_status_id} and cannot be recalculated"
            )

        try:
            result = self._build_total(order_id, self.orders.find_items(order_id))
        except BubbleTeaError:
            logger.error(f"Error calculating order total: {order_id}")
            raise

        logger.info(
            f"Order {order_id}: subtotal={result.subtotal}, tax={result.total_tax}, "
            f"total={result.grand_total}"
        )
        return result

    def update_order_total(self, order_id: int) -> OrderTotalUpdate:
        """
        Recompute the order total and persist it in one transaction

        The grand total is written onto the order, and every line's
        taxable_amount / total_with_tax is refreshed with it.

        Raises:
            NotFoundError: order not found, or order has no lines
            ValidationError: order in a final state, or a malformed line
        """
        logger.info(f"Updating order total: {order_id}")

        try:
            order = self.orders.find_by_id_for_update(order_id)
            if order is None:
                raise NotFoundError(f"Order not found: {order_id}")

            if order.order_status_id in self.final_status_ids:
                raise ValidationError(
                    f"Order {order_id} is in final status {order.order_status_id} and cannot be recalculated"
                )

            items = self.orders.find_items(order_id)
            if not items:
                raise NotFoundError(f"Order {order_id} has no items")

            calculation = self._build_total(order_id, items)

            line_totals = {line.order_item_id: line for line in calculation.items}
            for item in items:
                line = line_totals[item.id]
                item.taxable_amount = line.taxable_amount
                item.total_with_tax = line.total_with_tax

            previous_total = round_money(order.total if order.total is not None else ZERO)
            now = datetime.now(timezone.utc)
            order.total = calculation.grand_total
            order.updated_at = now

            self.db.commit()

        except Exception:
            self.db.rollback()
            logger.error(f"Error updating order total: {order_id}")
            raise

        result = OrderTotalUpdate(
            order_id=order_id,
            previous_total=previous_total,
            new_total=calculation.grand_total,
            difference=round_money(calculation.grand_total - previous_total),
            updated_at=now,
        )

        logger.info(
            f"Order {order_id} updated: {previous_total} -> {result.new_total} (diff: {result.difference})"
        )
        return result

    def calculate_item_tax(self, order_item_id: int) -> Decimal:
        """
        Tax amount of a single order line

        Raises:
            NotFoundError: order item or its tax rate not found
            ValidationError: malformed line
        """
        item = self.orders.find_item(order_item_id)
        if item is None:
            raise NotFoundError(f"Order item not found: {order_item_id}")

        try:
            taxable = self.pricing.calculate_taxable_amount(item.unit_price, item.quantity, item.discount)
            return self.pricing.calculate_tax_amount(taxable, item.tax_rate_id)
        except BubbleTeaError:
            logger.error(f"Error calculating tax for order item: {order_item_id}")
            raise

    def validate_order_for_calculation(self, order_id: int) -> bool:
        """True when the order exists and is not in a final state"""
        order = self.orders.find_by_id(order_id)
        if order is None:
            return False
        return order.order_status_id not in self.final_status_ids

    def recalculate_order_total(self, order_id: int) -> Decimal:
        """Grand total of an order recomputed from its lines"""
        logger.info(f"Recalculating order total from scratch: {order_id}")
        return self.calculate_order_total(order_id).grand_total

    def find_orders_with_invalid_totals(self) -> List[int]:
        """
        IDs of open orders whose stored total is off by more than the tolerance

        Orders in a final state are not checked, nor are orders deleted while
        the scan runs. An order whose lines cannot be priced is reported as
        invalid.
        """
        invalid = []

        for order_id in self.orders.find_ids_excluding_statuses(self.final_status_ids):
            order = self.orders.find_by_id(order_id)
            if order is None:
                logger.debug(f"Order {order_id} disappeared during invalid total scan")
                continue
            stored_total = round_money(order.total if order.total is not None else ZERO)

            try:
                calculated_total = self.recalculate_order_total(order_id)
            except BubbleTeaError as e:
                logger.warning(f"Order {order_id} cannot be recalculated: {e.message}")
                invalid.append(order_id)
                continue

            if abs(stored_total - calculated_total) > self.tolerance:
                invalid.append(order_id)

        logger.info(f"Found {len(invalid)} orders with invalid totals")
        return invalid

    def exists(self, order_id: int) -> bool:
        return self.orders.exists(order_id)

    def _build_total(self, order_id: int, items: List[OrderItem]) -> OrderTotal:
        result = OrderTotal(order_id=order_id, calculated_at=datetime.now(timezone.utc))

        subtotal = ZERO
        total_tax = ZERO

        for item in items:
            line = self._build_item_total(item)
            result.items.append(line)
            subtotal = round_money(subtotal + line.taxable_amount)
            total_tax = round_money(total_tax + line.tax_amount)

        result.subtotal = subtotal
        result.total_tax = total_tax
        result.grand_total = round_money(subtotal + total_tax)
        return result

    def _build_item_total(self, item: OrderItem) -> OrderItemTotal:
        rate = self.pricing.get_tax_rate(item.tax_rate_id)
        discount = round_money(item.discount if item.discount is not None else ZERO)
        taxable = self.pricing.calculate_taxable_amount(item.unit_price, item.quantity, discount)
        tax = self.pricing.calculate_tax_amount(taxable, item.tax_rate_id)

        return OrderItemTotal(
            order_item_id=item.id,
            article_id=item.article_id,
            product_type=item.product_type,
            quantity=item.quantity,
            unit_price=round_money(to_decimal(item.unit_price)),
            discount=discount,
            taxable_amount=taxable,
            tax_amount=tax,
            total_with_tax=round_money(taxable + tax),
            tax_rate=rate,
        )
