"""
Pricing Domain Models

Results returned by PriceCalculationService.

Author: BBltZen
Date: 2026-10-19
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Optional
from decimal import Decimal

from bbltzen.domain.product import ProductType


class OrderItemPrice(BaseModel):
    """
    Price breakdown of a single order line

    Fields:
        product_type: Product variant tag
        article_id: Priced article
        quantity: Units ordered
        base_price: Current unit price of the product
        discount: Discount subtracted from the line
        taxable_amount: base_price * quantity - discount
        tax_amount: taxable_amount * tax_rate / 100
        total_with_tax: taxable_amount + tax_amount
        tax_rate_id: Applied tax rate
        tax_rate: Tax percentage (22.00 = 22%)
        detail: Human readable calculation trace
    """

    product_type: ProductType = Field(..., description="Product variant tag")
    article_id: int = Field(..., description="Article ID")
    quantity: int = Field(..., description="Quantity", ge=1)
    base_price: Decimal = Field(..., description="Unit price", ge=0)
    discount: Decimal = Field(Decimal('0.00'), description="Line discount", ge=0)
    taxable_amount: Decimal = Field(..., description="Taxable base", ge=0)
    tax_amount: Decimal = Field(..., description="Tax amount", ge=0)
    total_with_tax: Decimal = Field(..., description="Line total incl. tax", ge=0)
    tax_rate_id: int = Field(..., description="Tax rate ID")
    tax_rate: Decimal = Field(..., description="Tax percentage", ge=0, le=100)
    detail: Optional[str] = Field(None, description="Calculation trace", max_length=1000)

    model_config = ConfigDict(use_enum_values=False)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['product_type'] = self.product_type.value

        for field in ['base_price', 'discount', 'taxable_amount', 'tax_amount', 'total_with_tax', 'tax_rate']:
            if data.get(field) is not None:
                data[field] = float(data[field])

        return data


class BatchPriceRequest(BaseModel):
    """Ids to price in one call, grouped by product variant"""

    standard_drink_ids: List[int] = Field(default_factory=list)
    custom_drink_ids: List[int] = Field(default_factory=list)
    dessert_ids: List[int] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.standard_drink_ids) + len(self.custom_drink_ids) + len(self.dessert_ids)


class BatchPriceResult(BaseModel):
    """Prices computed by a batch call; failed ids are reported in errors"""

    standard_drink_prices: Dict[int, Decimal] = Field(default_factory=dict)
    custom_drink_prices: Dict[int, Decimal] = Field(default_factory=dict)
    dessert_prices: Dict[int, Decimal] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.standard_drink_prices) + len(self.custom_drink_prices) + len(self.dessert_prices)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class CacheStats(BaseModel):
    """Counters of the price cache"""

    size: int = 0
    hits: int = 0
    misses: int = 0

    @property
    def hit_ratio(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0
