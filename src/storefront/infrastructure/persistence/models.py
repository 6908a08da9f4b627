"""SQLAlchemy table mappings.

Table names follow the storefront's existing schema (``customer``,
``product``, ``cart``, ``coupon``, ``customer_order``, ``order_item``).
``customer`` and ``product`` are owned by the identity and catalog
services; they are mapped here only so the engine can read them.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class CustomerRow(Base):
    __tablename__ = "customer"

    id = Column(Integer, primary_key=True)
    is_admin = Column(Boolean, nullable=False, default=False)


class ProductRow(Base):
    __tablename__ = "product"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_product_stock", stock_quantity),
        CheckConstraint("price >= 0", name="check_product_price_non_negative"),
    )


class CartLineRow(Base):
    __tablename__ = "cart"

    # Surrogate key keeps insertion order for listing
    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("customer_id", "product_id", name="uq_cart_customer_product"),
        CheckConstraint("quantity > 0", name="check_cart_quantity_positive"),
    )


class CouponRow(Base):
    __tablename__ = "coupon"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=False, unique=True)
    discount_percent = Column(Numeric(5, 2), nullable=False)
    valid_from = Column(Date, nullable=False)
    valid_to = Column(Date, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="check_coupon_percent_range",
        ),
        CheckConstraint("valid_from <= valid_to", name="check_coupon_window"),
    )


class OrderRow(Base):
    __tablename__ = "customer_order"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False)
    status = Column(String(50), nullable=False, default="Pending")
    shipping_address = Column(Text, nullable=False)
    payment_method = Column(String(50))
    coupon_code = Column(String(50))
    discount_percent = Column(Numeric(5, 2), nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    items = relationship(
        "OrderLineRow",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineRow.id",
    )

    __table_args__ = (
        Index("idx_order_customer_created", customer_id, created_at),
        Index("idx_order_created", created_at),
    )


class OrderLineRow(Base):
    __tablename__ = "order_item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("customer_order.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False)

    # Snapshot of the product at placement time
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderRow", back_populates="items")

    __table_args__ = (
        Index("idx_order_item_order", order_id),
        Index("idx_order_item_product", product_id),
        CheckConstraint("quantity > 0", name="check_order_item_quantity_positive"),
        CheckConstraint("unit_price >= 0", name="check_order_item_price_non_negative"),
    )
