"""
Access policy for privileged console actions.

The console asks the policy before showing or running an admin-only action
(user management, editing another owner's store). The policy always asks
the roles source; a cached "is admin" flag on the client is never trusted.
The backend still enforces the same rule on its side.
"""

import logging

from plazoo_core.errors import AuthorizationError, DirectoryError
from plazoo_core.tenancy.directory import StoreDirectory
from plazoo_core.tenancy.models import Store

logger = logging.getLogger(__name__)

# Actions exposed by the admin user-management API
ADMIN_ACTIONS = frozenset({"list", "create", "delete", "toggle-ban", "reset-password", "set-role"})


class AccessPolicy:
    """Explicit authorization checks for the console."""

    def __init__(self, directory: StoreDirectory):
        self.directory = directory

    async def require_admin(self, user_id: str | None, action: str | None = None) -> None:
        """
        Raises:
            AuthorizationError: caller is anonymous, not an admin, or the
                role could not be verified
        """
        if not user_id:
            raise AuthorizationError("Não autorizado", code="UNAUTHENTICATED")

        try:
            allowed = await self.directory.is_admin(user_id)
        except DirectoryError as e:
            logger.error(f"Admin check failed: {e}", extra={"user_id": user_id, "action": action})
            raise AuthorizationError(
                "Não foi possível verificar permissões",
                code="ROLE_CHECK_FAILED",
                details={"action": action},
                retryable=e.retryable,
            )

        if not allowed:
            logger.warning(
                "Admin action denied",
                extra={"user_id": user_id, "action": action},
            )
            raise AuthorizationError(
                "Acesso restrito a administradores",
                details={"action": action},
            )

    async def require_admin_action(self, user_id: str | None, action: str) -> None:
        """Check a user-management action by name."""
        if action not in ADMIN_ACTIONS:
            raise AuthorizationError(
                "Ação não encontrada",
                code="UNKNOWN_ACTION",
                details={"action": action},
            )
        await self.require_admin(user_id, action=action)

    async def can_manage_store(self, user_id: str | None, store: Store) -> bool:
        """Owners manage their own stores; admins manage every store."""
        if not user_id:
            return False
        if store.owner_id == user_id:
            return True
        try:
            return await self.directory.is_admin(user_id)
        except DirectoryError as e:
            logger.error(f"Admin check failed: {e}", extra={"user_id": user_id, "store_id": store.id})
            return False
