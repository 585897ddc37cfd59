"""
Tenancy value objects.

Stores are owned and persisted by the hosted backend; these are read-only
projections of its rows.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from plazoo_core.branding.colors import normalize_hex


class ViewerRole(str, Enum):
    """What a viewer may see in the console."""

    ADMIN = "admin"  # all stores
    OWNER = "owner"  # stores they own

    def __str__(self) -> str:
        return self.value


class StoreMode(str, Enum):
    CATALOG = "catalog"
    MENU = "menu"


@dataclass(frozen=True)
class Store:
    """A tenant storefront."""

    id: str
    name: str
    slug: str
    primary_color: str | None = None
    secondary_color: str | None = None
    logo_url: str | None = None
    is_food_business: bool = False
    owner_id: str | None = None

    @property
    def mode(self) -> StoreMode:
        """Food businesses get a digital menu, everyone else a catalog."""
        return StoreMode.MENU if self.is_food_business else StoreMode.CATALOG

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Store":
        """Build from a backend row. Malformed colors are dropped."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            slug=data.get("slug") or "",
            primary_color=normalize_hex(data.get("primary_color")),
            secondary_color=normalize_hex(data.get("secondary_color")),
            logo_url=data.get("logo_url"),
            is_food_business=bool(data.get("is_food_business", False)),
            owner_id=str(data["owner_id"]) if data.get("owner_id") else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "logo_url": self.logo_url,
            "is_food_business": self.is_food_business,
            "owner_id": self.owner_id,
        }
