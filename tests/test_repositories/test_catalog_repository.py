"""
Tests for CatalogRepository and OrderRepository

Author: BBltZen
Date: 2026-10-19
"""
import pytest

from bbltzen.core.exceptions import ValidationError
from bbltzen.domain.product import ProductType
from bbltzen.models import CustomDrink, Dessert, StandardDrink
from bbltzen.repositories import CatalogRepository, OrderRepository


class TestCatalogRepository:
    """Catalog read accessors"""

    def test_get_by_id_dispatches_on_type(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        assert isinstance(repo.get_by_id(ProductType.STANDARD_DRINK, 1), StandardDrink)
        assert isinstance(repo.get_by_id('BC', 3), CustomDrink)
        assert isinstance(repo.get_by_id('d', 4), Dessert)

    def test_get_by_id_returns_none_for_wrong_variant(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        assert repo.get_by_id(ProductType.DESSERT, 1) is None

    def test_get_by_id_rejects_unknown_type(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        with pytest.raises(ValidationError):
            repo.get_by_id('ZZ', 1)

    def test_standard_drink_relationships(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        drink = repo.get_standard_drink(1)

        assert drink.article.type == 'BS'
        assert drink.cup_size.code == 'M'
        assert drink.personalization.name == 'Classica'

    def test_get_ingredients_for_personalization(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        ingredients = repo.get_ingredients_for_personalization(1)

        assert [i.name for i in ingredients] == ['Tapioca', 'Lychee jelly', 'Matcha']

    def test_get_ingredients_for_unknown_personalization_is_empty(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        assert repo.get_ingredients_for_personalization(999) == []

    def test_get_cup_size_and_personalization(self, seeded_db):
        repo = CatalogRepository(seeded_db)

        personalization = repo.get_custom_personalization(1)
        cup_size = repo.get_cup_size(personalization.cup_size_id)

        assert cup_size.code == 'L'
        assert repo.get_cup_size(999) is None

    @pytest.mark.parametrize("product_type,expected", [
        (ProductType.STANDARD_DRINK, [1]),
        (ProductType.CUSTOM_DRINK, [3]),
        (ProductType.DESSERT, [4]),
    ])
    def test_list_available_ids(self, seeded_db, product_type, expected):
        repo = CatalogRepository(seeded_db)

        assert repo.list_available_ids(product_type) == expected

    def test_always_available_drink_is_listed(self, seeded_db):
        drink = seeded_db.get(StandardDrink, 2)
        drink.always_available = True
        seeded_db.commit()
        repo = CatalogRepository(seeded_db)

        assert repo.list_available_ids(ProductType.STANDARD_DRINK) == [1, 2]


class TestOrderRepository:
    """Order read accessors"""

    def test_find_items_ordered_by_id(self, seeded_db):
        repo = OrderRepository(seeded_db)

        assert [item.id for item in repo.find_items(2)] == [2, 3, 4]
        assert repo.find_items(4) == []

    def test_find_by_id_for_update(self, seeded_db):
        repo = OrderRepository(seeded_db)

        assert repo.find_by_id_for_update(1).id == 1
        assert repo.find_by_id_for_update(999) is None

    def test_find_item(self, seeded_db):
        repo = OrderRepository(seeded_db)

        assert repo.find_item(6).quantity == 4
        assert repo.find_item(999) is None

    def test_find_ids_excluding_statuses(self, seeded_db):
        repo = OrderRepository(seeded_db)

        assert repo.find_ids_excluding_statuses([4, 5]) == [1, 2, 4, 5]
        assert repo.find_ids_excluding_statuses([]) == [1, 2, 3, 4, 5]
