"""Tenant context middleware."""

import logging
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..core.shared import CurrentTenant, current_tenant

logger = logging.getLogger(__name__)


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Runs each request inside the tenant named by the tenant header.
    
    Requests without the header run in the host scope (tenant ``None``).
    """
    
    def __init__(
        self,
        app,
        tenant_header: str = "TenantId",
        tenant: Optional[CurrentTenant] = None,
    ):
        super().__init__(app)
        self.tenant_header = tenant_header
        self.tenant = tenant or current_tenant
    
    async def dispatch(self, request: Request, call_next) -> Response:
        tenant_id = request.headers.get(self.tenant_header) or None
        request.state.tenant_id = tenant_id
        
        with self.tenant.change(tenant_id):
            logger.debug(f"Tenant context set: tenant_id={tenant_id}, path={request.url.path}")
            return await call_next(request)
