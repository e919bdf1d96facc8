"""
Order Total Domain Models

Breakdowns produced by OrderTotalService.

Author: BBltZen
Date: 2026-10-19
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from datetime import datetime
from decimal import Decimal


class OrderItemTotal(BaseModel):
    """
    Computed amounts of one order line

    Fields:
        order_item_id: Line ID
        article_id: Ordered article
        product_type: Product variant tag (BS, BC, D)
        quantity: Units ordered
        unit_price: Price per unit stored on the line
        discount: Discount stored on the line
        taxable_amount: unit_price * quantity - discount
        tax_amount: Tax on taxable_amount
        total_with_tax: taxable_amount + tax_amount
        tax_rate: Tax percentage applied
    """

    order_item_id: int = Field(..., description="Order item ID")
    article_id: int = Field(..., description="Article ID")
    product_type: str = Field(..., description="Product type tag")
    quantity: int = Field(..., description="Quantity", ge=1)
    unit_price: Decimal = Field(..., description="Unit price", ge=0)
    discount: Decimal = Field(Decimal('0.00'), description="Discount", ge=0)
    taxable_amount: Decimal = Field(..., description="Taxable base", ge=0)
    tax_amount: Decimal = Field(..., description="Tax amount", ge=0)
    total_with_tax: Decimal = Field(..., description="Total incl. tax", ge=0)
    tax_rate: Decimal = Field(..., description="Tax percentage", ge=0)

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()

        for field in ['unit_price', 'discount', 'taxable_amount', 'tax_amount', 'total_with_tax', 'tax_rate']:
            if data.get(field) is not None:
                data[field] = float(data[field])

        return data


class OrderTotal(BaseModel):
    """
    Order total breakdown (not persisted)

    grand_total = subtotal + total_tax
    """

    order_id: int = Field(..., description="Order ID")
    items: List[OrderItemTotal] = Field(default_factory=list, description="Per-line amounts")
    subtotal: Decimal = Field(Decimal('0.00'), description="Sum of taxable amounts")
    total_tax: Decimal = Field(Decimal('0.00'), description="Sum of tax amounts")
    grand_total: Decimal = Field(Decimal('0.00'), description="subtotal + total_tax")
    calculated_at: datetime = Field(..., description="Calculation timestamp")

    @property
    def item_count(self) -> int:
        """Number of lines in the order"""
        return len(self.items)

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['item_count'] = self.item_count

        for field in ['subtotal', 'total_tax', 'grand_total']:
            data[field] = float(data[field])

        data['calculated_at'] = self.calculated_at.isoformat()
        data['items'] = [item.to_dict() for item in self.items]

        return data


class OrderTotalUpdate(BaseModel):
    """Result of persisting a recomputed order total"""

    order_id: int = Field(..., description="Order ID")
    previous_total: Decimal = Field(..., description="Total before the update")
    new_total: Decimal = Field(..., description="Persisted total")
    difference: Decimal = Field(..., description="new_total - previous_total")
    updated_at: datetime = Field(..., description="Update timestamp")

    @property
    def changed(self) -> bool:
        return self.difference != 0

    def to_dict(self) -> dict:
        data = self.model_dump()
        for field in ['previous_total', 'new_total', 'difference']:
            data[field] = float(data[field])
        data['updated_at'] = self.updated_at.isoformat()
        data['changed'] = self.changed
        return data
