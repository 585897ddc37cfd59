"""
REST Store Directory

Reads stores and roles from the hosted backend's PostgREST API
(``/rest/v1/<table>``). Row-level security is enforced by the backend
using the viewer's access token.
"""

import logging
from typing import Any

import httpx

from plazoo_base.settings import get_settings
from plazoo_core.errors import DirectoryError
from plazoo_core.tenancy.directory import StoreDirectory
from plazoo_core.tenancy.models import Store, ViewerRole

logger = logging.getLogger(__name__)

STORE_COLUMNS = "id,name,slug,logo_url,primary_color,secondary_color,is_food_business,owner_id"


class RestStoreDirectory(StoreDirectory):
    """Store directory backed by the hosted REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.BACKEND_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.BACKEND_ANON_KEY
        self.access_token = access_token
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"apikey": self.api_key, "Accept": "application/json"}
            headers["Authorization"] = f"Bearer {self.access_token or self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/rest/v1",
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _select(self, table: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        client = await self._get_client()

        try:
            response = await client.get(f"/{table}", params=params)
        except httpx.RequestError as e:
            logger.error(f"Backend request failed: {e}", extra={"table": table})
            raise DirectoryError(
                message=f"Backend request failed: {e}",
                code="HTTP_ERROR",
                retryable=True,
            )

        if response.status_code >= 400:
            try:
                error = response.json()
            except ValueError:
                error = {"message": response.text}
            if not isinstance(error, dict):
                error = {"message": str(error)}
            raise DirectoryError(
                message=error.get("message", "Unknown error"),
                code=str(error.get("code") or response.status_code),
                details={"table": table, "status": response.status_code, **error},
                retryable=response.status_code >= 500,
            )

        return response.json()

    async def list_owned_stores(self, user_id: str) -> list[Store]:
        rows = await self._select(
            "stores",
            {"select": STORE_COLUMNS, "owner_id": f"eq.{user_id}", "order": "name"},
        )
        return [Store.from_dict(row) for row in rows]

    async def list_all_stores(self) -> list[Store]:
        rows = await self._select("stores", {"select": STORE_COLUMNS, "order": "name"})
        return [Store.from_dict(row) for row in rows]

    async def is_admin(self, user_id: str) -> bool:
        rows = await self._select(
            "user_roles",
            {
                "select": "role",
                "user_id": f"eq.{user_id}",
                "role": f"eq.{ViewerRole.ADMIN.value}",
                "store_id": "is.null",
                "limit": "1",
            },
        )
        return len(rows) > 0
