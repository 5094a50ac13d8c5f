"""Exception handlers mapping permission errors to JSON responses."""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import NeoPermissionsError, get_http_status_code

logger = logging.getLogger(__name__)


def error_response_body(exc: NeoPermissionsError) -> Dict[str, Any]:
    return {"error": exc.to_dict()}


async def neo_permissions_exception_handler(request: Request, exc: NeoPermissionsError) -> JSONResponse:
    status_code = get_http_status_code(exc)
    if status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    
    return JSONResponse(status_code=status_code, content=error_response_body(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Register the permission error handler on ``app``."""
    app.add_exception_handler(NeoPermissionsError, neo_permissions_exception_handler)
