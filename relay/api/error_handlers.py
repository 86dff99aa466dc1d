"""
Centralized API error handling.

Goals:
- consistent error response shape
- include request_id for correlation
- avoid leaking internal exception details on 500
- broker failures surface as 503, never as a silent success
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from relay.shared.exceptions import BrokerUnavailableError, InvalidMessageError
from relay.utility.logging_client import get_request_id, set_request_id


def _ensure_request_id() -> str:
    rid = get_request_id()
    if rid:
        return rid
    return set_request_id()


def _error_payload(
    *,
    code: str,
    message: str,
    request_id: str,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": "error",
        "error": {
            "code": code,
            "message": message,
            "request_id": request_id,
        },
    }
    if details is not None:
        payload["error"]["details"] = details
    return payload


def _error_response(
    status_code: int, *, code: str, message: str, details: Optional[Any] = None
) -> JSONResponse:
    rid = _ensure_request_id()
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(code=code, message=message, request_id=rid, details=details),
        headers={"X-Request-ID": rid},
    )


def install_error_handlers(app: FastAPI) -> None:
    """
    Attach consistent error handlers to a FastAPI app.
    """

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        code = "http_error"
        details: Optional[Any] = None
        if isinstance(exc.detail, dict):
            code = str(exc.detail.get("code") or code)
            message = str(exc.detail.get("message") or "Request failed")
            details = exc.detail.get("details")
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error_response(exc.status_code, code=code, message=message, details=details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            422,
            code="validation_error",
            message="Validation error",
            details=exc.errors(),
        )

    @app.exception_handler(InvalidMessageError)
    async def invalid_message_handler(request: Request, exc: InvalidMessageError) -> JSONResponse:
        return _error_response(
            422,
            code="invalid_message",
            message=exc.message,
            details=exc.details or None,
        )

    @app.exception_handler(BrokerUnavailableError)
    async def broker_unavailable_handler(request: Request, exc: BrokerUnavailableError) -> JSONResponse:
        request.app.state.logger.log_exception(
            exc,
            component="http",
            context={
                "path": str(request.url.path),
                "method": request.method,
                "destination": exc.destination,
            },
        )
        return _error_response(
            503,
            code="broker_unavailable",
            message="Message broker unavailable",
            details={"destination": exc.destination},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request.app.state.logger.log_exception(
            exc,
            component="http",
            context={
                "path": str(request.url.path),
                "method": request.method,
            },
        )
        return _error_response(500, code="internal_error", message="Internal server error")
