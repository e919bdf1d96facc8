"""
Order Repository - Data Access Layer for Orders

Author: BBltZen
Date: 2026-10-19
"""
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from bbltzen.models.order import Order, OrderItem


class OrderRepository:
    """
    Repository for Order and OrderItem data access

    Returns ORM entities so that OrderTotalService can write the recomputed
    totals back within the same session.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, order_id: int) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def find_by_id_for_update(self, order_id: int) -> Optional[Order]:
        """
        Find order by ID and lock its row until the transaction ends

        Uses SELECT ... FOR UPDATE; backends without row locks (SQLite)
        ignore the clause.
        """
        return (
            self.db.query(Order)
            .filter(Order.id == order_id)
            .with_for_update()
            .first()
        )

    def exists(self, order_id: int) -> bool:
        return self.db.query(Order.id).filter(Order.id == order_id).first() is not None

    def find_items(self, order_id: int) -> List[OrderItem]:
        """
        All items of an order

        Returns:
            List of OrderItem ordered by ID (empty if the order has none)
        """
        return (
            self.db.query(OrderItem)
            .filter(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
            .all()
        )

    def find_item(self, order_item_id: int) -> Optional[OrderItem]:
        return self.db.get(OrderItem, order_item_id)

    def find_ids_excluding_statuses(self, status_ids: Iterable[int]) -> List[int]:
        """
        IDs of orders whose status is not in status_ids

        Args:
            status_ids: Order status IDs to skip (e.g. completed, cancelled)

        Returns:
            Sorted list of order IDs
        """
        query = self.db.query(Order.id)
        status_ids = list(status_ids)
        if status_ids:
            query = query.filter(Order.order_status_id.notin_(status_ids))
        return [row[0] for row in query.order_by(Order.id).all()]
