"""
Modelos del catálogo: artículos, bebidas, postres, ingredientes y tamaños de vaso
"""
from sqlalchemy import Column, Integer, SmallInteger, String, Boolean, DateTime, Text, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from bbltzen.core.database import Base


class Article(Base):
    """
    Artículo - identidad común de todo producto vendible

    type: 'BS' (standard drink), 'BC' (custom drink), 'D' (dessert)
    """
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(2), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships (one of them is populated, depending on type)
    standard_drink = relationship("StandardDrink", back_populates="article", uselist=False)
    custom_drink = relationship("CustomDrink", back_populates="article", uselist=False)
    dessert = relationship("Dessert", back_populates="article", uselist=False)
    order_items = relationship("OrderItem", back_populates="article")


class CupSize(Base):
    """
    Tamaño de vaso (dimensione bicchiere)

    base_price is the starting price of a custom drink in this size;
    multiplier scales every ingredient surcharge.
    """
    __tablename__ = "cup_sizes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(3), nullable=False, unique=True)
    description = Column(String(50), nullable=False)
    capacity = Column(DECIMAL(5, 2), nullable=False)
    base_price = Column(DECIMAL(10, 2), nullable=False)
    multiplier = Column(DECIMAL(4, 2), nullable=False, default=1)

    standard_drinks = relationship("StandardDrink", back_populates="cup_size")
    custom_personalizations = relationship("CustomPersonalization", back_populates="cup_size")


class Personalization(Base):
    """Configuración con nombre (dulzor/tamaño) de una bebida estándar"""
    __tablename__ = "personalizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    standard_drinks = relationship("StandardDrink", back_populates="personalization")


class StandardDrink(Base):
    """
    Bebida estándar del menú (bevanda standard)
    """
    __tablename__ = "standard_drinks"

    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    personalization_id = Column(Integer, ForeignKey("personalizations.id"), nullable=False, index=True)
    cup_size_id = Column(Integer, ForeignKey("cup_sizes.id"), nullable=False, index=True)

    price = Column(DECIMAL(10, 2), nullable=False)
    image_url = Column(String(500))
    is_available = Column(Boolean, default=True, nullable=False, index=True)
    always_available = Column(Boolean, default=False, nullable=False)
    priority = Column(Integer, default=1, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    article = relationship("Article", back_populates="standard_drink")
    personalization = relationship("Personalization", back_populates="standard_drinks")
    cup_size = relationship("CupSize", back_populates="standard_drinks")


class Ingredient(Base):
    """Ingrediente seleccionable en una bebida custom"""
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    category = Column(String(50))
    extra_price = Column(DECIMAL(10, 2), nullable=False, default=0)
    is_available = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class CustomPersonalization(Base):
    """
    Personalización custom (personalizzazione custom)

    Owns the ingredient set selected by the customer and the cup size.
    """
    __tablename__ = "custom_personalizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    sweetness_level = Column(SmallInteger, nullable=False, default=2)
    cup_size_id = Column(Integer, ForeignKey("cup_sizes.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    cup_size = relationship("CupSize", back_populates="custom_personalizations")
    ingredient_links = relationship(
        "CustomPersonalizationIngredient",
        back_populates="custom_personalization",
        cascade="all, delete-orphan",
    )
    custom_drinks = relationship("CustomDrink", back_populates="custom_personalization")


class CustomPersonalizationIngredient(Base):
    """Ingrediente elegido dentro de una personalización custom"""
    __tablename__ = "custom_personalization_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    custom_personalization_id = Column(
        Integer, ForeignKey("custom_personalizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    custom_personalization = relationship("CustomPersonalization", back_populates="ingredient_links")
    ingredient = relationship("Ingredient")


class CustomDrink(Base):
    """
    Bebida custom (bevanda custom)

    price is the last stored price; the live price is always recomputed
    from the personalization by PriceCalculationService.
    """
    __tablename__ = "custom_drinks"

    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    custom_personalization_id = Column(
        Integer, ForeignKey("custom_personalizations.id"), nullable=False, index=True
    )
    price = Column(DECIMAL(10, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    article = relationship("Article", back_populates="custom_drink")
    custom_personalization = relationship("CustomPersonalization", back_populates="custom_drinks")


class Dessert(Base):
    """Postre (dolce)"""
    __tablename__ = "desserts"

    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    name = Column(String(100), nullable=False)
    price = Column(DECIMAL(10, 2), nullable=False)
    description = Column(Text)
    image_url = Column(String(500))
    is_available = Column(Boolean, default=True, nullable=False, index=True)
    priority = Column(Integer, default=1, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    article = relationship("Article", back_populates="dessert")
