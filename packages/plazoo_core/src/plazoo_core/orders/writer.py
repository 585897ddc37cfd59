"""
Order Writer

Writes a priced order (header, items, item add-ons) in one transaction.
Each checkout attempt carries an idempotency key; resubmitting with the
same key returns the order already written and writes nothing new, so a
retry after a lost response never duplicates the header.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from plazoo_base.db import get_sessionmaker
from plazoo_core.cart import Cart
from plazoo_core.errors import OrderWriteError, PricingError
from plazoo_core.persistence.models import OrderRecord
from plazoo_core.persistence.repo import OrderRepository
from plazoo_core.pricing.engine import Discount, OrderBreakdown

logger = logging.getLogger(__name__)


class OrderType(str, Enum):
    IN_STORE = "loja"  # counter sale
    ONLINE = "online"  # catalog checkout
    DINE_IN = "dine_in"  # menu order from a table
    TAKEOUT = "takeout"  # menu order without a table

    def __str__(self) -> str:
        return self.value


def new_idempotency_key() -> str:
    """One key per checkout attempt; reuse it when retrying that attempt."""
    return uuid4().hex


@dataclass(frozen=True)
class Customer:
    name: str | None = None
    phone: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class OrderDraft:
    """Everything needed to write an order."""

    store_id: str
    order_type: OrderType
    breakdown: OrderBreakdown
    customer: Customer = Customer()
    payment_method: str | None = None
    table_id: str | None = None
    notes: str | None = None
    status: str = "pending"

    @classmethod
    def from_cart(
        cls,
        cart: Cart,
        order_type: OrderType,
        discount: Discount | None = None,
        store_id: str | None = None,
        **kwargs,
    ) -> "OrderDraft":
        if not cart:
            raise PricingError("Cart is empty", code="EMPTY_CART")
        store = store_id or cart.store_id
        if not store:
            raise PricingError("Cart has no store", code="MISSING_STORE")
        return cls(store_id=store, order_type=order_type, breakdown=cart.breakdown(discount), **kwargs)


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    idempotency_key: str
    total: Decimal
    created: bool  # False when an earlier attempt already wrote the order

    @property
    def short_id(self) -> str:
        return self.order_id[:8]


def _receipt(order: OrderRecord, created: bool) -> OrderReceipt:
    return OrderReceipt(
        order_id=order.id,
        idempotency_key=order.idempotency_key,
        total=Decimal(str(order.total)),
        created=created,
    )


class OrderWriter:
    """Atomic, idempotent order submission."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory or get_sessionmaker()

    def submit(self, draft: OrderDraft, idempotency_key: str) -> OrderReceipt:
        """
        Write the order, or return the one already written for this key.

        Raises:
            OrderWriteError: the transaction failed; nothing was written and
                the same key can be retried
        """
        if not idempotency_key:
            raise OrderWriteError("Missing idempotency key", code="MISSING_IDEMPOTENCY_KEY", retryable=False)

        db: Session = self.session_factory()
        try:
            repo = OrderRepository(db)

            existing = repo.get_by_idempotency_key(idempotency_key)
            if existing:
                logger.info(
                    f"Order already submitted: order_id={existing.id}",
                    extra={"idempotency_key": idempotency_key, "store_id": draft.store_id},
                )
                return _receipt(existing, created=False)

            order = self._write(repo, draft, idempotency_key)
            db.commit()

            logger.info(
                f"Order created: order_id={order.id}",
                extra={
                    "store_id": draft.store_id,
                    "order_type": draft.order_type.value,
                    "items": len(draft.breakdown.lines),
                    "total": str(draft.breakdown.total),
                },
            )
            return _receipt(order, created=True)

        except IntegrityError:
            # A concurrent attempt with the same key won the insert
            db.rollback()
            existing = OrderRepository(db).get_by_idempotency_key(idempotency_key)
            if existing:
                return _receipt(existing, created=False)
            logger.error("Order write violated a constraint", extra={"store_id": draft.store_id}, exc_info=True)
            raise OrderWriteError("Erro ao criar pedido", code="CONSTRAINT_VIOLATION", retryable=False)

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Order write failed: {e}", extra={"store_id": draft.store_id}, exc_info=True)
            raise OrderWriteError(
                "Erro ao criar pedido. Tente novamente em alguns instantes.",
                details={"idempotency_key": idempotency_key},
            )

        finally:
            db.close()

    def _write(self, repo: OrderRepository, draft: OrderDraft, idempotency_key: str) -> OrderRecord:
        breakdown = draft.breakdown
        discount = breakdown.discount

        order = repo.add_order(
            idempotency_key=idempotency_key,
            store_id=draft.store_id,
            order_type=draft.order_type.value,
            status=draft.status,
            subtotal=breakdown.subtotal,
            discount_type=discount.type.value if discount else None,
            discount_value=discount.value if discount else None,
            discount_amount=breakdown.discount_amount,
            total=breakdown.total,
            payment_method=draft.payment_method,
            customer_name=draft.customer.name,
            customer_phone=draft.customer.phone,
            customer_email=draft.customer.email,
            table_id=draft.table_id,
            notes=draft.notes,
        )

        for position, priced in enumerate(breakdown.lines):
            line = priced.line
            item = repo.add_item(
                order,
                position=position,
                product_id=line.product_id,
                menu_item_id=line.menu_item_id,
                variant_id=line.variant_id,
                size_id=line.size_id,
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                extras_total=line.extras_total,
                discount_type=line.discount.type.value if line.discount else None,
                discount_value=line.discount.value if line.discount else None,
                total_price=priced.total,
                notes=line.notes,
            )
            for add_on in line.add_ons:
                repo.add_item_add_on(
                    item,
                    add_on_id=add_on.addon_id,
                    name=add_on.name,
                    quantity=add_on.quantity,
                    price=add_on.price,
                )

        repo.db.flush()
        return order
