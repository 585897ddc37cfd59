"""
Store Context Resolver

Single source of truth for "which store is this screen operating on".

States: uninitialized -> resolving_role -> resolving_stores -> ready.
Closing moves to closed from any state.

- The viewer's role decides the store query (admins see every store,
  owners see their own).
- Once the visible set is known, a persisted selection is restored when
  still visible, otherwise the first visible store is selected; an empty
  set leaves the resolver ready with no store.
- Explicit selections are persisted immediately.
- Every selection change releases the previous theme scope and applies the
  new store's branding variables.
- Query failures are logged and read as "not admin" / "no stores".
- Results from a superseded refresh or from after close() are dropped.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable

from plazoo_core.branding.theme import THEME_VARIABLES, StyleBag, ThemeScope, ThemeSink
from plazoo_core.errors import PlazooError, StoreNotVisibleError
from plazoo_core.tenancy.directory import StoreDirectory
from plazoo_core.tenancy.models import Store, ViewerRole
from plazoo_core.tenancy.storage import SELECTED_STORE_KEY, SelectionStorage

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Store | None], None]

_DISCARDED = object()


class ResolverState(str, Enum):
    UNINITIALIZED = "uninitialized"
    RESOLVING_ROLE = "resolving_role"
    RESOLVING_STORES = "resolving_stores"
    READY = "ready"
    CLOSED = "closed"


@dataclass(frozen=True)
class StoreContext:
    """Snapshot handed to screens."""

    state: ResolverState
    role: ViewerRole
    stores: tuple[Store, ...]
    selected_store: Store | None
    theme: dict[str, str] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.role == ViewerRole.ADMIN

    @property
    def is_loading(self) -> bool:
        return self.state in (
            ResolverState.UNINITIALIZED,
            ResolverState.RESOLVING_ROLE,
            ResolverState.RESOLVING_STORES,
        )

    @property
    def has_store(self) -> bool:
        return self.selected_store is not None


class StoreContextResolver:
    """
    Resolves the active store for one viewer session.

    Each resolver owns its theme scope, so several resolvers (one per
    session, or per test) never overwrite each other's branding.
    """

    def __init__(
        self,
        user_id: str | None,
        directory: StoreDirectory,
        storage: SelectionStorage,
        sink: ThemeSink | None = None,
        storage_key: str = SELECTED_STORE_KEY,
    ):
        self.user_id = user_id
        self.directory = directory
        self.storage = storage
        self.sink = sink if sink is not None else StyleBag()
        self.storage_key = storage_key

        self._state = ResolverState.UNINITIALIZED
        self._role = ViewerRole.OWNER
        self._stores: list[Store] = []
        self._selected: Store | None = None
        self._scope: ThemeScope | None = None
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[SelectionListener] = []

    # --- Read side ---

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def role(self) -> ViewerRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == ViewerRole.ADMIN

    @property
    def stores(self) -> list[Store]:
        return list(self._stores)

    @property
    def selected_store(self) -> Store | None:
        return self._selected

    @property
    def selected_store_id(self) -> str | None:
        return self._selected.id if self._selected else None

    @property
    def closed(self) -> bool:
        return self._state == ResolverState.CLOSED

    def theme(self) -> dict[str, str]:
        """Theme variables currently present in the sink."""
        values = {}
        for name in THEME_VARIABLES:
            value = self.sink.get_property(name)
            if value is not None:
                values[name] = value
        return values

    def context(self) -> StoreContext:
        return StoreContext(
            state=self._state,
            role=self._role,
            stores=tuple(self._stores),
            selected_store=self._selected,
            theme=self.theme(),
        )

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Call ``listener`` with the new store on every selection change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Lifecycle ---

    async def start(self) -> StoreContext:
        """Resolve role and stores for the first time."""
        await self.refresh()
        return self.context()

    async def refresh(self) -> None:
        """
        Re-run role and store resolution.

        Safe to call while another refresh is in flight: only the latest
        call's results are applied.
        """
        if self.closed:
            return

        self._generation += 1
        generation = self._generation

        self._set_state(ResolverState.RESOLVING_ROLE)
        is_admin = await self._fetch(self._resolve_is_admin())
        if self._is_stale(generation, is_admin):
            return
        self._role = ViewerRole.ADMIN if is_admin else ViewerRole.OWNER

        self._set_state(ResolverState.RESOLVING_STORES)
        stores = await self._fetch(self._resolve_stores(bool(is_admin)))
        if self._is_stale(generation, stores):
            return

        self.apply_visible_stores(stores)
        self._set_state(ResolverState.READY)

    def close(self) -> None:
        """Tear down: cancel fetches, release branding, stop accepting results."""
        if self.closed:
            return
        self._state = ResolverState.CLOSED
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._release_theme()
        self._listeners.clear()
        logger.debug("Store context closed", extra={"user_id": self.user_id})

    async def __aenter__(self) -> "StoreContextResolver":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- Write side ---

    def select(self, store_id: str) -> Store:
        """
        Explicit selection by the viewer.

        Raises:
            StoreNotVisibleError: the store is not in the visible set
        """
        if self.closed:
            raise PlazooError("Store context is closed", code="CONTEXT_CLOSED")
        store = self._find(store_id)
        if store is None:
            raise StoreNotVisibleError(
                f"Store {store_id} is not visible to this viewer",
                details={"store_id": store_id, "user_id": self.user_id},
            )
        self.storage.set(self.storage_key, store.id)
        self._change_selection(store)
        return store

    def deselect(self) -> None:
        """Clear the selection and forget the persisted id. No-op after close()."""
        if self.closed:
            return
        self.storage.delete(self.storage_key)
        self._change_selection(None)

    def apply_visible_stores(self, stores: Iterable[Store]) -> Store | None:
        """
        Replace the visible set and re-apply the fallback rule.

        Restores the persisted id when visible; otherwise keeps the current
        selection when still visible; otherwise the first store; otherwise
        nothing. Explicit selections are persisted, so a fallback pick never
        shadows a persisted store that becomes visible later.
        """
        if self.closed:
            return None
        self._stores = list(stores)

        persisted = self.storage.get(self.storage_key)
        current = self._find(persisted) if persisted else None
        if current is None and self._selected is not None:
            current = self._find(self._selected.id)
        if current is None and self._stores:
            current = self._stores[0]

        self._change_selection(current)
        return current

    # --- Internals ---

    def _find(self, store_id: str | None) -> Store | None:
        if store_id is None:
            return None
        return next((s for s in self._stores if s.id == store_id), None)

    def _set_state(self, state: ResolverState) -> None:
        if self.closed:
            return
        self._state = state

    def _is_stale(self, generation: int, result: Any) -> bool:
        return result is _DISCARDED or self.closed or generation != self._generation

    async def _fetch(self, coro: Awaitable[Any]) -> Any:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        try:
            return await task
        except asyncio.CancelledError:
            if self.closed:
                return _DISCARDED
            raise
        finally:
            self._tasks.discard(task)

    async def _resolve_is_admin(self) -> bool:
        if not self.user_id:
            return False
        try:
            return await self.directory.is_admin(self.user_id)
        except Exception as e:
            logger.error(
                f"Error checking admin role: {e}",
                extra={"user_id": self.user_id},
                exc_info=True,
            )
            return False

    async def _resolve_stores(self, is_admin: bool) -> list[Store]:
        if not self.user_id:
            return []
        try:
            if is_admin:
                return await self.directory.list_all_stores()
            return await self.directory.list_owned_stores(self.user_id)
        except Exception as e:
            logger.error(
                f"Error fetching stores: {e}",
                extra={"user_id": self.user_id, "is_admin": is_admin},
                exc_info=True,
            )
            return []

    def _change_selection(self, store: Store | None) -> None:
        if store == self._selected and (store is None or self._scope is not None):
            return

        previous_id = self.selected_store_id
        self._release_theme()
        self._selected = store
        if store is not None:
            self._scope = ThemeScope(self.sink, store).apply()

        if previous_id != self.selected_store_id:
            logger.info(
                "Store selection changed",
                extra={
                    "user_id": self.user_id,
                    "from_store_id": previous_id,
                    "to_store_id": self.selected_store_id,
                },
            )
        for listener in list(self._listeners):
            listener(store)

    def _release_theme(self) -> None:
        if self._scope is not None:
            self._scope.release()
            self._scope = None
