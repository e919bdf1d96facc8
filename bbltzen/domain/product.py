"""
Product Domain Types

Products are a tagged union over three variants. The tag is stored on
articles.type and order_items.product_type.

Author: BBltZen
Date: 2026-10-19
"""
from enum import Enum
from typing import Union

from bbltzen.core.exceptions import ValidationError


class ProductType(str, Enum):
    """Product variant tag"""

    STANDARD_DRINK = "BS"
    CUSTOM_DRINK = "BC"
    DESSERT = "D"

    @classmethod
    def parse(cls, value: Union["ProductType", str, None]) -> "ProductType":
        """
        Parse a stored tag (case-insensitive, surrounding blanks ignored)

        Raises:
            ValidationError: if the tag is not one of BS, BC, D
        """
        if isinstance(value, ProductType):
            return value

        tag = (value or "").strip().upper()
        try:
            return cls(tag)
        except ValueError:
            raise ValidationError(f"Unsupported product type: {value!r}")
