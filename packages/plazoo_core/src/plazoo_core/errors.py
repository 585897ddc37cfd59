"""
Plazoo errors.

Every error carries a code and optional details, and says whether a caller
may retry the operation.
"""

from typing import Any


class PlazooError(Exception):
    """Base error for storefront logic."""

    default_code = "PLAZOO_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        self.retryable = retryable


class PricingError(PlazooError):
    """Invalid pricing input (negative discount, unknown discount type)."""

    default_code = "PRICING_ERROR"


class VariantError(PlazooError):
    """Invalid variant axis or selection."""

    default_code = "VARIANT_ERROR"


class StoreNotVisibleError(PlazooError):
    """The viewer tried to select a store outside their visible set."""

    default_code = "STORE_NOT_VISIBLE"


class DirectoryError(PlazooError):
    """The tenant data source failed."""

    default_code = "DIRECTORY_ERROR"


class AuthorizationError(PlazooError):
    """The caller lacks the role required for a privileged action."""

    default_code = "FORBIDDEN"


class OrderWriteError(PlazooError):
    """An order could not be written. Safe to retry with the same key."""

    default_code = "ORDER_WRITE_FAILED"

    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)
