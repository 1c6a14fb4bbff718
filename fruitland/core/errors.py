"""
Domain errors for tenant scoping and order handling.

Raised deep in the call chain and turned into JSON responses by the
handlers registered in ``fruitland.main``. Nothing below the route layer
catches these.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class TenancyError(Exception):
    status_code = 400
    default_message = "Tenant error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TenantRequired(TenancyError):
    status_code = 400
    default_message = "Tenant is required for this operation"


class TenantNotFound(TenancyError):
    status_code = 404
    default_message = "Tenant not found"


class TenantInactive(TenancyError):
    status_code = 403
    default_message = "Tenant is not active"


class TenantAccessForbidden(TenancyError):
    status_code = 403
    default_message = "Access denied"


class Unauthenticated(TenancyError):
    status_code = 401
    default_message = "Not authenticated"


class TransientStoreError(TenancyError):
    status_code = 503
    default_message = "Datastore temporarily unavailable"


class OrderError(Exception):
    """Business-rule rejection while building or updating an order."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InsufficientStock(OrderError):
    def __init__(self, message: str = "Not enough stock available"):
        super().__init__(message, status_code=409)


async def tenancy_error_handler(request: Request, exc: TenancyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def order_error_handler(request: Request, exc: OrderError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
