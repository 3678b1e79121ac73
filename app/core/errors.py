# app/core/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException


class MarketplaceError(Exception):
    """Base for every error a marketplace service raises on purpose."""

    code = "MARKETPLACE_ERROR"
    status_code = 400

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class NotFoundError(MarketplaceError, LookupError):
    code = "NOT_FOUND"
    status_code = 404


class AuthorizationError(MarketplaceError, PermissionError):
    code = "FORBIDDEN"
    status_code = 403


class StateError(MarketplaceError):
    """Illegal transition from the entity's current status."""

    code = "INVALID_STATE"
    status_code = 409

    def __init__(self, message: str, *, current_status: Optional[str] = None, **context: Any):
        super().__init__(message, current_status=current_status, **context)
        self.current_status = current_status


class ValidationError(MarketplaceError, ValueError):
    code = "INVALID_REQUEST"
    status_code = 400


class InternalError(MarketplaceError):
    """Invariant violated mid-operation. Never retried."""

    code = "INTERNAL_ERROR"
    status_code = 500


def http_error(exc: MarketplaceError) -> HTTPException:
    detail: Dict[str, Any] = {
        "code": exc.context.get("reason") or exc.code,
        "message": exc.message,
    }
    if isinstance(exc, StateError) and exc.current_status:
        detail["currentStatus"] = exc.current_status
    return HTTPException(status_code=exc.status_code, detail=detail)
