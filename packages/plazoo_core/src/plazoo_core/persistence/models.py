"""
Plazoo Database Models

Mirror of the hosted backend tables this package reads and writes.

Tables:
- stores: tenant storefronts
- user_roles: global (store_id NULL) and per-store roles
- orders: order headers, unique per idempotency key
- order_items: lines of an order
- order_item_add_ons: add-ons selected on a line
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from plazoo_base.db import Base


def _uuid() -> str:
    return str(uuid4())


class PlazooModelMixin:
    """Common fields for all Plazoo models."""

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )


class StoreRecord(Base, PlazooModelMixin):
    __tablename__ = "stores"

    owner_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(63), unique=True, nullable=False, index=True)
    logo_url = Column(String(500), nullable=True)
    primary_color = Column(String(7), nullable=True)  # hex color
    secondary_color = Column(String(7), nullable=True)  # hex color
    is_food_business = Column(Boolean, nullable=False, default=False)


class UserRoleRecord(Base, PlazooModelMixin):
    __tablename__ = "user_roles"

    user_id = Column(String(36), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # admin, owner, ...
    store_id = Column(String(36), ForeignKey("stores.id", ondelete="CASCADE"), nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "role", "store_id", name="uq_user_roles_user_role_store"),
    )


class OrderRecord(Base, PlazooModelMixin):
    """
    Order header.

    idempotency_key is generated once per checkout attempt, so a retried
    submission finds the existing header instead of creating a second one.
    """

    __tablename__ = "orders"

    store_id = Column(String(36), ForeignKey("stores.id"), nullable=False, index=True)
    idempotency_key = Column(String(64), nullable=False, unique=True)
    order_type = Column(String(20), nullable=False)  # loja, online, dine_in, takeout
    status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(30), nullable=True)
    payment_status = Column(String(20), nullable=False, default="pending")
    customer_name = Column(String(255), nullable=True)
    customer_phone = Column(String(20), nullable=True)
    customer_email = Column(String(255), nullable=True)
    table_id = Column(String(36), nullable=True)
    notes = Column(Text, nullable=True)
    subtotal = Column(Numeric(12, 2), nullable=False)
    discount_type = Column(String(10), nullable=True)
    discount_value = Column(Numeric(12, 2), nullable=True)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)

    items = relationship(
        "OrderItemRecord",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemRecord.position",
    )

    __table_args__ = (Index("idx_orders_store_created", "store_id", "created_at"),)


class OrderItemRecord(Base, PlazooModelMixin):
    __tablename__ = "order_items"

    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(String(36), nullable=True)
    menu_item_id = Column(String(36), nullable=True)
    variant_id = Column(String(36), nullable=True)
    size_id = Column(String(36), nullable=True)
    name = Column(String(255), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)  # base + size
    extras_total = Column(Numeric(12, 2), nullable=False, default=0)  # add-ons per unit
    discount_type = Column(String(10), nullable=True)
    discount_value = Column(Numeric(12, 2), nullable=True)
    total_price = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text, nullable=True)

    order = relationship("OrderRecord", back_populates="items")
    add_ons = relationship("OrderItemAddOnRecord", back_populates="item", cascade="all, delete-orphan")


class OrderItemAddOnRecord(Base, PlazooModelMixin):
    __tablename__ = "order_item_add_ons"

    order_item_id = Column(
        String(36), ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    add_on_id = Column(String(36), nullable=True)
    name = Column(String(255), nullable=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)

    item = relationship("OrderItemRecord", back_populates="add_ons")


def create_tables(engine) -> None:
    """Create all Plazoo tables (local development and tests)."""
    Base.metadata.create_all(bind=engine)
