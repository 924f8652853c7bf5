"""
Gateway error handling

Every failure leaving the gateway uses one JSON envelope:
``{statusCode, message, timestamp, path, errors?}``.
"""

from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.utils.rpc import RpcFault

logger = structlog.get_logger(__name__)

# Backend fault status -> gateway HTTP status; anything else is a generic failure
FAULT_STATUS_MAP = {
    # 400 is a payload a backend rejected, kept as a client error
    status.HTTP_400_BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    status.HTTP_409_CONFLICT: status.HTTP_409_CONFLICT,
}


def http_status_for_fault(fault: RpcFault) -> int:
    return FAULT_STATUS_MAP.get(fault.status, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_envelope(
    request: Request,
    status_code: int,
    message: Any,
    errors: Optional[List[Dict[str, Any]]] = None
) -> JSONResponse:
    """Build the uniform error response"""
    content = {
        "statusCode": status_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
    }
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def format_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Group pydantic errors per field as ``{field, messages, value}``"""
    fields: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        entry = fields.setdefault(field, {
            "field": field,
            "messages": [],
            "value": None if error.get("type") == "missing" else error.get("input"),
        })
        entry["messages"].append(error.get("msg"))
    return list(fields.values())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on the gateway app"""

    @app.exception_handler(RpcFault)
    async def rpc_fault_handler(request: Request, exc: RpcFault):
        status_code = http_status_for_fault(exc)
        logger.info(
            "Backend fault",
            path=request.url.path,
            fault_status=exc.status,
            status_code=status_code,
            message=exc.message
        )
        return error_envelope(request, status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        errors = None
        if isinstance(detail, dict):
            errors = detail.get("errors")
            detail = detail.get("message") or "An error occurred"
        response = error_envelope(request, exc.status_code, detail, errors)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc)
        logger.info("Request validation failed", path=request.url.path, fields=[e["field"] for e in errors])
        return error_envelope(request, status.HTTP_400_BAD_REQUEST, "Validation failed", errors)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            method=request.method,
            path=request.url.path,
            exc_info=True
        )
        return error_envelope(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
