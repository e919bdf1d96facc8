"""
Catalog Repository - Data Access Layer for priced products

Read-only accessors over articles, drinks, desserts, ingredients, cup sizes
and personalizations. The pricing core never writes through this repository.

Author: BBltZen
Date: 2026-10-19
"""
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from bbltzen.domain.product import ProductType
from bbltzen.models.catalog import (
    Article,
    CupSize,
    CustomDrink,
    CustomPersonalization,
    CustomPersonalizationIngredient,
    Dessert,
    Ingredient,
    StandardDrink,
)

Product = Union[StandardDrink, CustomDrink, Dessert]


class CatalogRepository:
    """
    Repository for catalog data access

    Returns ORM entities; missing rows are reported as None and turned into
    NotFoundError by the services.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_article(self, article_id: int) -> Optional[Article]:
        return self.db.get(Article, article_id)

    def get_by_id(self, product_type: Union[ProductType, str], article_id: int) -> Optional[Product]:
        """
        Find a product by variant tag and article ID

        Args:
            product_type: ProductType or its tag ('BS', 'BC', 'D')
            article_id: Article ID

        Returns:
            StandardDrink, CustomDrink or Dessert, or None if not found
        """
        product_type = ProductType.parse(product_type)

        if product_type is ProductType.STANDARD_DRINK:
            return self.get_standard_drink(article_id)
        if product_type is ProductType.CUSTOM_DRINK:
            return self.get_custom_drink(article_id)
        return self.get_dessert(article_id)

    def get_standard_drink(self, article_id: int) -> Optional[StandardDrink]:
        return self.db.get(StandardDrink, article_id)

    def get_custom_drink(self, article_id: int) -> Optional[CustomDrink]:
        return self.db.get(CustomDrink, article_id)

    def get_dessert(self, article_id: int) -> Optional[Dessert]:
        return self.db.get(Dessert, article_id)

    def get_custom_personalization(self, custom_personalization_id: int) -> Optional[CustomPersonalization]:
        return self.db.get(CustomPersonalization, custom_personalization_id)

    def get_cup_size(self, cup_size_id: int) -> Optional[CupSize]:
        return self.db.get(CupSize, cup_size_id)

    def get_ingredient(self, ingredient_id: int) -> Optional[Ingredient]:
        return self.db.get(Ingredient, ingredient_id)

    def get_ingredients_for_personalization(self, custom_personalization_id: int) -> List[Ingredient]:
        """
        Ingredients selected in a custom personalization

        Unavailable ingredients are included; callers decide whether they
        count towards the price.

        Args:
            custom_personalization_id: Custom personalization ID

        Returns:
            List of Ingredient ordered by link ID (empty if none)
        """
        return (
            self.db.query(Ingredient)
            .join(
                CustomPersonalizationIngredient,
                CustomPersonalizationIngredient.ingredient_id == Ingredient.id,
            )
            .filter(CustomPersonalizationIngredient.custom_personalization_id == custom_personalization_id)
            .order_by(CustomPersonalizationIngredient.id)
            .all()
        )

    def list_available_ids(self, product_type: Union[ProductType, str]) -> List[int]:
        """
        Article IDs of the products of one variant that can be sold now

        Standard drinks count when is_available or always_available is set,
        desserts when is_available is set. Custom drinks have no availability
        flag and are always listed.

        Args:
            product_type: ProductType or its tag

        Returns:
            Sorted list of article IDs
        """
        product_type = ProductType.parse(product_type)

        if product_type is ProductType.STANDARD_DRINK:
            query = self.db.query(StandardDrink.article_id).filter(
                (StandardDrink.is_available.is_(True)) | (StandardDrink.always_available.is_(True))
            )
            column = StandardDrink.article_id
        elif product_type is ProductType.CUSTOM_DRINK:
            query = self.db.query(CustomDrink.article_id)
            column = CustomDrink.article_id
        else:
            query = self.db.query(Dessert.article_id).filter(Dessert.is_available.is_(True))
            column = Dessert.article_id

        return [row[0] for row in query.order_by(column).all()]
