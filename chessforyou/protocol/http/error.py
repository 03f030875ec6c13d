from __future__ import annotations

import logging
from typing import Any, Dict, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...application.errors import AlreadyExistsError, NotFoundError
from ...engine.errors import InvalidPromotionError, MoveError, PromotionError


logger = logging.getLogger(__name__)

HTTP_422 = 422


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: list[dict[str, str]] | None = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "type": err_type,
            "request_id": request_id,
        }
    }
    if field_errors:
        payload["error"]["field_errors"] = field_errors
    return payload


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


def _client_error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    payload = error_envelope(
        code=code,
        message=message,
        err_type="client_error",
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=payload)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    status_code = http_exc.status_code
    payload = error_envelope(
        code=_status_to_code(status_code),
        message=http_exc.detail if isinstance(http_exc.detail, str) else str(http_exc.detail),
        err_type="client_error" if 400 <= status_code < 500 else "server_error",
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=payload)


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return _client_error(request, status.HTTP_404_NOT_FOUND, "not_found", str(exc))


async def conflict_handler(request: Request, exc: Exception) -> JSONResponse:
    return _client_error(request, status.HTTP_409_CONFLICT, "conflict", str(exc))


async def bad_request_handler(request: Request, exc: Exception) -> JSONResponse:
    """Malformed input (bad ids, squares, promotion names) and illegal moves."""
    if isinstance(exc, InvalidPromotionError):
        code = "invalid_promotion"
    elif isinstance(exc, PromotionError):
        code = "promotion_required"
    elif isinstance(exc, MoveError):
        code = "illegal_move"
    else:
        code = "bad_request"
    return _client_error(request, status.HTTP_400_BAD_REQUEST, code, str(exc))


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id(request)
    logger.exception("Unhandled exception", extra={"request_id": request_id})
    payload = error_envelope(
        code="internal_error",
        message="Internal Server Error",
        err_type="server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    payload = error_envelope(
        code="unprocessable_entity",
        message="Validation error",
        err_type="client_error",
        request_id=_request_id(request),
        field_errors=_field_errors(cast(RequestValidationError, exc)) or None,
    )
    return JSONResponse(status_code=HTTP_422, content=payload)


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    # loc looks like ("body", "user_name"); joined into "body.user_name"
    return [
        {
            "field": ".".join(str(part) for part in e.get("loc", ()) if part is not None),
            "code": e.get("type", "value_error"),
            "message": e.get("msg", "invalid value"),
        }
        for e in exc.errors()
    ]


_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
    HTTP_422: "unprocessable_entity",
}


def _status_to_code(status_code: int) -> str:
    if 500 <= status_code < 600:
        return "internal_error"
    return _STATUS_CODES.get(status_code, "error")


def register_error_handlers(app: Any) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(AlreadyExistsError, conflict_handler)
    app.add_exception_handler(ValueError, bad_request_handler)
    app.add_exception_handler(Exception, exception_handler)
