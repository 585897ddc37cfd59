"""
Repository helpers for Plazoo tables.

Simple query and write helpers. Callers own the transaction.
"""

from decimal import Decimal

from sqlalchemy.orm import Session

from plazoo_core.persistence.models import (
    OrderItemAddOnRecord,
    OrderItemRecord,
    OrderRecord,
    StoreRecord,
    UserRoleRecord,
)
from plazoo_core.tenancy.models import Store, ViewerRole


def _to_store(record: StoreRecord) -> Store:
    return Store.from_dict(
        {
            "id": record.id,
            "name": record.name,
            "slug": record.slug,
            "logo_url": record.logo_url,
            "primary_color": record.primary_color,
            "secondary_color": record.secondary_color,
            "is_food_business": record.is_food_business,
            "owner_id": record.owner_id,
        }
    )


class StoreRepository:
    """Read access to stores and roles."""

    def __init__(self, db: Session):
        self.db = db

    def list_owned(self, user_id: str) -> list[Store]:
        records = (
            self.db.query(StoreRecord)
            .filter(StoreRecord.owner_id == user_id)
            .order_by(StoreRecord.name)
            .all()
        )
        return [_to_store(r) for r in records]

    def list_all(self) -> list[Store]:
        records = self.db.query(StoreRecord).order_by(StoreRecord.name).all()
        return [_to_store(r) for r in records]

    def get_by_slug(self, slug: str) -> Store | None:
        record = self.db.query(StoreRecord).filter(StoreRecord.slug == slug).first()
        return _to_store(record) if record else None

    def has_global_role(self, user_id: str, role: ViewerRole) -> bool:
        """Global roles have no store_id."""
        return (
            self.db.query(UserRoleRecord.id)
            .filter(
                UserRoleRecord.user_id == user_id,
                UserRoleRecord.role == role.value,
                UserRoleRecord.store_id.is_(None),
            )
            .first()
            is not None
        )


class OrderRepository:
    """Order writes and idempotency lookups."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_idempotency_key(self, key: str) -> OrderRecord | None:
        return self.db.query(OrderRecord).filter(OrderRecord.idempotency_key == key).first()

    def get(self, order_id: str) -> OrderRecord | None:
        return self.db.get(OrderRecord, order_id)

    def add_order(
        self,
        idempotency_key: str,
        store_id: str,
        order_type: str,
        subtotal: Decimal,
        discount_amount: Decimal,
        total: Decimal,
        status: str = "pending",
        discount_type: str | None = None,
        discount_value: Decimal | None = None,
        **fields,
    ) -> OrderRecord:
        order = OrderRecord(
            idempotency_key=idempotency_key,
            store_id=store_id,
            order_type=order_type,
            status=status,
            subtotal=subtotal,
            discount_type=discount_type,
            discount_value=discount_value,
            discount_amount=discount_amount,
            total=total,
            **fields,
        )
        self.db.add(order)
        return order

    def add_item(self, order: OrderRecord, position: int, **fields) -> OrderItemRecord:
        item = OrderItemRecord(position=position, **fields)
        order.items.append(item)
        return item

    def add_item_add_on(self, item: OrderItemRecord, **fields) -> OrderItemAddOnRecord:
        add_on = OrderItemAddOnRecord(**fields)
        item.add_ons.append(add_on)
        return add_on
