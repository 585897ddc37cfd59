"""
Pytest fixtures for Plazoo core tests.
"""

import os
import sys

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add package paths to sys.path for imports
packages_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.join(packages_root, "plazoo_base", "src"))
sys.path.insert(0, os.path.join(packages_root, "plazoo_core", "src"))

from plazoo_base.db import session_scope  # noqa: E402
from plazoo_base.settings import get_settings  # noqa: E402
from plazoo_core.branding.theme import StyleBag  # noqa: E402
from plazoo_core.persistence.models import StoreRecord, UserRoleRecord, create_tables  # noqa: E402
from plazoo_core.tenancy.directory import StaticStoreDirectory  # noqa: E402
from plazoo_core.tenancy.models import Store  # noqa: E402
from plazoo_core.tenancy.storage import MemorySelectionStorage  # noqa: E402

ADMIN_ID = "00000000-0000-0000-0000-00000000a001"
OWNER_ID = "00000000-0000-0000-0000-00000000b001"
OTHER_OWNER_ID = "00000000-0000-0000-0000-00000000b002"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def padaria():
    """Food business owned by OWNER_ID."""
    return Store(
        id="store-padaria",
        name="Padaria Central",
        slug="padaria-central",
        primary_color="#FF0000",
        secondary_color="#FFFF00",
        is_food_business=True,
        owner_id=OWNER_ID,
    )


@pytest.fixture
def boutique():
    """Catalog store owned by OWNER_ID."""
    return Store(
        id="store-boutique",
        name="Boutique Aurora",
        slug="boutique-aurora",
        primary_color="#0000FF",
        owner_id=OWNER_ID,
    )


@pytest.fixture
def mercado():
    """Store owned by somebody else, without brand colors."""
    return Store(
        id="store-mercado",
        name="Mercado Bom Preço",
        slug="mercado-bom-preco",
        owner_id=OTHER_OWNER_ID,
    )


@pytest.fixture
def all_stores(padaria, boutique, mercado):
    return [padaria, boutique, mercado]


@pytest.fixture
def directory(all_stores):
    return StaticStoreDirectory(stores=all_stores, admins=[ADMIN_ID])


@pytest.fixture
def storage():
    return MemorySelectionStorage()


@pytest.fixture
def sink():
    return StyleBag()


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads (SqlStoreDirectory uses a worker thread)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def seeded_db(session_factory, all_stores):
    """Stores, a global admin and a store-scoped admin row."""
    with session_scope(session_factory) as db:
        for store in all_stores:
            db.add(
                StoreRecord(
                    id=store.id,
                    name=store.name,
                    slug=store.slug,
                    primary_color=store.primary_color,
                    secondary_color=store.secondary_color,
                    is_food_business=store.is_food_business,
                    owner_id=store.owner_id,
                )
            )
        db.add(UserRoleRecord(user_id=ADMIN_ID, role="admin", store_id=None))
        db.add(UserRoleRecord(user_id=OWNER_ID, role="admin", store_id="store-padaria"))
    return session_factory
