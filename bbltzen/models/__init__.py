"""
Modelos de base de datos
"""
from .catalog import (
    Article,
    CupSize,
    CustomDrink,
    CustomPersonalization,
    CustomPersonalizationIngredient,
    Dessert,
    Ingredient,
    Personalization,
    StandardDrink,
)
from .order import Order, OrderItem, TaxRate

__all__ = [
    "Article",
    "CupSize",
    "CustomDrink",
    "CustomPersonalization",
    "CustomPersonalizationIngredient",
    "Dessert",
    "Ingredient",
    "Personalization",
    "StandardDrink",
    "Order",
    "OrderItem",
    "TaxRate",
]
