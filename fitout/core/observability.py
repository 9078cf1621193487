import json
import logging
import time
import traceback
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
# Ledger context collected while a request runs, flushed into its access line.
request_fields_ctx: ContextVar[dict[str, Any] | None] = ContextVar("request_fields", default=None)
logger = logging.getLogger("fitout.api")

# Event fields that also describe the request as a whole.
REQUEST_CONTEXT_KEYS = ("inventory_id", "part_id", "ignored_entries", "current_stock")


def setup_observability() -> None:
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


def get_request_id() -> str:
    return request_id_ctx.get()


def _emit(level: int, event: str, **fields: Any) -> None:
    payload = {"event": event, "request_id": fields.pop("request_id", None) or get_request_id()}
    payload.update(fields)
    logger.log(level, json.dumps(payload, default=str))


def bind_request_fields(**fields: Any) -> None:
    """Attach fields to the access log line of the request being served."""
    bound = request_fields_ctx.get()
    if bound is not None:
        bound.update(fields)


def log_event(event: str, **fields: Any) -> None:
    bind_request_fields(**{key: fields[key] for key in REQUEST_CONTEXT_KEYS if key in fields})
    _emit(logging.INFO, event, **fields)


def _request_id_for(request: Request) -> str:
    return (
        getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id")
        or get_request_id()
    )


def _error_response(
    *,
    status_code: int,
    request: Request,
    code: str,
    message: str,
    details: list[dict] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": _request_id_for(request),
                "path": request.url.path,
                "details": details,
            }
        },
    )


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid4())
    request.state.request_id = request_id
    id_token = request_id_ctx.set(request_id)
    fields_token = request_fields_ctx.set({})
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        _emit(
            logging.INFO,
            "request",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            **(request_fields_ctx.get() or {}),
        )
        request_fields_ctx.reset(fields_token)
        request_id_ctx.reset(id_token)

    response.headers["X-Request-ID"] = request_id
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    _emit(
        logging.ERROR,
        "unhandled_exception",
        request_id=_request_id_for(request),
        path=request.url.path,
        error=str(exc),
        traceback=traceback.format_exc(limit=10),
    )
    return _error_response(
        status_code=500,
        request=request,
        code="internal_error",
        message="Internal server error",
    )


_STATUS_CODE_MAP = {
    404: "not_found",
    422: "validation_error",
}


async def http_exception_handler(request: Request, exc: HTTPException):
    code = _STATUS_CODE_MAP.get(exc.status_code, "http_error")
    if isinstance(exc.detail, str):
        message, details = exc.detail, None
    else:
        # Ledger validation hands over a list of field errors.
        message, details = "Validation failed", exc.detail
        if isinstance(details, list):
            bind_request_fields(
                rejected_fields=[item.get("field") for item in details if isinstance(item, dict)]
            )
    return _error_response(
        status_code=exc.status_code,
        request=request,
        code=code,
        message=message,
        details=details,
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", []) if part != "body"]
        details.append(
            {
                "field": ".".join(location) if location else "body",
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type"),
            }
        )
    bind_request_fields(rejected_fields=[item["field"] for item in details])

    return _error_response(
        status_code=422,
        request=request,
        code="validation_error",
        message="Validation failed",
        details=details,
    )
