"""
Modelos relacionados con órdenes/pedidos e impuestos
"""
from sqlalchemy import Column, Integer, String, DateTime, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from bbltzen.core.database import Base


class TaxRate(Base):
    """
    Alícuota de IVA (aliquota)

    rate is a percentage: 22.00 means 22%. Rows referenced by order items
    must not be deleted (see TaxRateRepository.delete).
    """
    __tablename__ = "tax_rates"

    id = Column(Integer, primary_key=True, index=True)
    rate = Column(DECIMAL(5, 2), nullable=False)
    description = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    order_items = relationship("OrderItem", back_populates="tax_rate")


class Order(Base):
    """
    Tabla principal de órdenes

    total is written only by OrderTotalService.update_order_total.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    # Relaciones (customers / statuses live outside the pricing core)
    customer_id = Column(Integer, index=True)
    order_status_id = Column(Integer, nullable=False, default=1, index=True)
    payment_status_id = Column(Integer, nullable=False, default=1)

    # Montos
    total = Column(DECIMAL(10, 2), nullable=False, default=0)

    priority = Column(Integer, nullable=False, default=1)
    session_id = Column(String(36))

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")


class OrderItem(Base):
    """
    Items/productos de cada orden
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id"), index=True, nullable=False)
    product_type = Column(String(2), nullable=False)  # 'BS', 'BC', 'D'

    # Cantidades
    quantity = Column(Integer, nullable=False)
    unit_price = Column(DECIMAL(10, 2), nullable=False)
    discount = Column(DECIMAL(10, 2), nullable=False, default=0)
    taxable_amount = Column(DECIMAL(10, 2), nullable=False, default=0)
    total_with_tax = Column(DECIMAL(10, 2))
    tax_rate_id = Column(Integer, ForeignKey("tax_rates.id"), index=True, nullable=False)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    order = relationship("Order", back_populates="items")
    article = relationship("Article", back_populates="order_items")
    tax_rate = relationship("TaxRate", back_populates="order_items")
