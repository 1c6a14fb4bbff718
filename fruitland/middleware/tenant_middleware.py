from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from fruitland.utils.tenant import extract_tenant_hint


class TenantMiddleware(BaseHTTPMiddleware):
    """Parses the per-request tenant hint once; resolution happens in the route dependencies."""

    async def dispatch(self, request: Request, call_next):
        request.state.tenant_hint = extract_tenant_hint(request)
        request.state.tenant_id = None
        return await call_next(request)
