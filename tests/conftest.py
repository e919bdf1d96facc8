"""
Pytest fixtures and configuration for BBltZen pricing core tests

This file provides shared fixtures that can be used across all test modules.
Database fixtures run against an in-memory SQLite database, created fresh
for every test.

Author: BBltZen
Date: 2026-10-19
"""
import pytest
from decimal import Decimal
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bbltzen.core.database import Base
from bbltzen.models import (
    Article,
    CupSize,
    CustomDrink,
    CustomPersonalization,
    CustomPersonalizationIngredient,
    Dessert,
    Ingredient,
    Order,
    OrderItem,
    Personalization,
    StandardDrink,
    TaxRate,
)

# Load environment variables for tests
load_dotenv()


@pytest.fixture(scope="function")
def db_engine():
    """
    Provides an in-memory SQLite engine with every table created

    Scope: function (new database per test)
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """
    Provides a SQLAlchemy session bound to the test engine

    Automatically closes the session after the test
    """
    Session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db_session):
    """
    Provides a session over a seeded catalog and a handful of orders

    Catalog:
        tax rates      1 = 22.00%, 2 = 10.00%, 3 = 0.00%
        cup sizes      1 = M (4.50, x1.00), 2 = L (5.50, x1.20)
        ingredients    1 = Tapioca 0.50, 2 = Lychee jelly 0.80, 3 = Matcha 1.00 (unavailable)
        article 1      standard drink 5.00 (available)
        article 2      standard drink 4.20 (unavailable)
        article 3      custom drink, size L + ingredients 1, 2, 3 -> 5.50 + 1.30 * 1.20 = 7.06
        article 4      dessert 3.50 (available)
        article 5      dessert 4.00 (unavailable)

    Orders:
        1  open, total 0.00   item 1: BS 1, 2 x 5.00 - 1.00 @22%      -> 10.98
        2  open, total 29.59  items 2-4: 10.98 + 11.55 + 7.06          -> 29.59
        3  completed (status 4), item 5
        4  open, no items, total 0.00
        5  open, total 50.00  item 6: BS 1, 4 x 5.00 - 1.00 @22%      -> 23.18
    """
    db = db_session

    db.add_all([
        TaxRate(id=1, rate=Decimal('22.00'), description='IVA ordinaria'),
        TaxRate(id=2, rate=Decimal('10.00'), description='IVA ridotta'),
        TaxRate(id=3, rate=Decimal('0.00'), description='Esente'),
        CupSize(id=1, code='M', description='Medium', capacity=Decimal('500.00'),
                base_price=Decimal('4.50'), multiplier=Decimal('1.00')),
        CupSize(id=2, code='L', description='Large', capacity=Decimal('700.00'),
                base_price=Decimal('5.50'), multiplier=Decimal('1.20')),
        Personalization(id=1, name='Classica', description='Dolcezza media, ghiaccio normale'),
        Ingredient(id=1, name='Tapioca', category='topping', extra_price=Decimal('0.50'), is_available=True),
        Ingredient(id=2, name='Lychee jelly', category='topping', extra_price=Decimal('0.80'), is_available=True),
        Ingredient(id=3, name='Matcha', category='tea', extra_price=Decimal('1.00'), is_available=False),
        Article(id=1, type='BS'),
        Article(id=2, type='BS'),
        Article(id=3, type='BC'),
        Article(id=4, type='D'),
        Article(id=5, type='D'),
    ])
    db.flush()

    db.add_all([
        StandardDrink(article_id=1, personalization_id=1, cup_size_id=1, price=Decimal('5.00'),
                      is_available=True, always_available=False, priority=1),
        StandardDrink(article_id=2, personalization_id=1, cup_size_id=1, price=Decimal('4.20'),
                      is_available=False, always_available=False, priority=2),
        CustomPersonalization(id=1, name='Mio Taro', sweetness_level=2, cup_size_id=2),
        Dessert(article_id=4, name='Mochi', price=Decimal('3.50'), is_available=True, priority=1),
        Dessert(article_id=5, name='Cheesecake', price=Decimal('4.00'), is_available=False, priority=2),
    ])
    db.flush()

    db.add_all([
        CustomPersonalizationIngredient(id=1, custom_personalization_id=1, ingredient_id=1),
        CustomPersonalizationIngredient(id=2, custom_personalization_id=1, ingredient_id=2),
        CustomPersonalizationIngredient(id=3, custom_personalization_id=1, ingredient_id=3),
        CustomDrink(article_id=3, custom_personalization_id=1, price=Decimal('7.06')),
        Order(id=1, customer_id=1, order_status_id=1, payment_status_id=1, total=Decimal('0.00')),
        Order(id=2, customer_id=1, order_status_id=1, payment_status_id=1, total=Decimal('29.59')),
        Order(id=3, customer_id=2, order_status_id=4, payment_status_id=2, total=Decimal('12.00')),
        Order(id=4, customer_id=2, order_status_id=1, payment_status_id=1, total=Decimal('0.00')),
        Order(id=5, customer_id=3, order_status_id=1, payment_status_id=1, total=Decimal('50.00')),
    ])
    db.flush()

    db.add_all([
        OrderItem(id=1, order_id=1, article_id=1, product_type='BS', quantity=2,
                  unit_price=Decimal('5.00'), discount=Decimal('1.00'), tax_rate_id=1),
        OrderItem(id=2, order_id=2, article_id=1, product_type='BS', quantity=2,
                  unit_price=Decimal('5.00'), discount=Decimal('1.00'), tax_rate_id=1),
        OrderItem(id=3, order_id=2, article_id=4, product_type='D', quantity=3,
                  unit_price=Decimal('3.50'), discount=Decimal('0.00'), tax_rate_id=2),
        OrderItem(id=4, order_id=2, article_id=3, product_type='BC', quantity=1,
                  unit_price=Decimal('7.06'), discount=Decimal('0.00'), tax_rate_id=3),
        OrderItem(id=5, order_id=3, article_id=4, product_type='D', quantity=2,
                  unit_price=Decimal('3.50'), discount=Decimal('0.00'), tax_rate_id=2),
        OrderItem(id=6, order_id=5, article_id=1, product_type='BS', quantity=4,
                  unit_price=Decimal('5.00'), discount=Decimal('1.00'), tax_rate_id=1),
    ])
    db.commit()

    return db


@pytest.fixture
def sample_tax_rate_data():
    """
    Provides sample tax rate data for tests
    """
    return {
        "rate": Decimal("4.00"),
        "description": "IVA minima",
    }
