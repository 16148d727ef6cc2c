"""
Error types raised by the marketplace client.

Every error carries a message that is safe to show to an end user.  The
message for a failed HTTP call is picked by :func:`error_message` from a
per-operation table of status codes, falling back to the ``error`` field
returned by the server and finally to the operation's default message.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


SERVER_ERROR = "Server error. Please try again later"


class MarketplaceError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ValidationError(MarketplaceError):
    """Input rejected before any request was sent."""


class ApiError(MarketplaceError):
    """The backend answered with an error status, or the call failed."""


class NetworkError(ApiError):
    """No response was received (timeout or connection failure)."""


def error_message(
    error: Mapping[str, Any],
    status_messages: Mapping[int, str],
    default: str,
) -> str:
    """Translate an error dictionary produced by the client into a message.

    ``error`` is the second element of the ``(data, error)`` tuple returned
    by :meth:`PlotMarketAPI._request`.  A known status code wins over the
    server's own ``error`` text, which in turn wins over ``default``.
    """
    status = error.get("status_code")
    if isinstance(status, int) and status in status_messages:
        return status_messages[status]
    return error.get("detail") or default


def raise_api_error(
    error: Dict[str, Any],
    status_messages: Optional[Mapping[int, str]] = None,
    default: str = "Request failed",
    *,
    network_message: Optional[str] = None,
) -> None:
    """Raise :class:`ApiError` (or :class:`NetworkError`) for ``error``."""
    status = error.get("status_code")
    if status is None and error.get("code") in {"timeout", "network"}:
        raise NetworkError(network_message or default)
    raise ApiError(error_message(error, status_messages or {}, default), status_code=status)
