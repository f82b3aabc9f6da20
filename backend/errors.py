# Comment: JSON error envelopes shared by every route.
#          Shape: {"success": false, "message": ..., [errors | availableRoutes]}.

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.pinyin_scorer import FIELD_MESSAGES, ScoreValidationError


logger = logging.getLogger(__name__)

PYDANTIC_REASONS = {
    "missing": "missing",
    "string_type": "not_a_string",
    "string_too_short": "empty",
    "string_too_long": "too_long",
}

# Reasons that carry the per-field "is required" message.
REQUIRED_REASONS = {"missing", "not_a_string", "empty"}

HTTP_METHODS = {"get", "post", "put", "patch", "delete", "head", "options"}


def _field_error_from_pydantic(error: Dict[str, Any]) -> Dict[str, str]:
    loc = tuple(error.get("loc") or ())
    reason = PYDANTIC_REASONS.get(error.get("type", ""), "invalid")
    # JSON null means the field was not supplied, same as a direct call with None.
    if reason == "not_a_string" and error.get("input") is None:
        reason = "missing"

    if len(loc) >= 2 and loc[0] == "body" and isinstance(loc[1], str):
        path = loc[1]
    else:
        path = "body"

    message = FIELD_MESSAGES.get(path) if reason in REQUIRED_REASONS else None
    return {
        "type": "field",
        "location": "body",
        "path": path,
        "reason": reason,
        "msg": message or error.get("msg", "Invalid value"),
    }


def validation_failed(errors: List[Dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


def available_routes(app: FastAPI) -> List[str]:
    routes = []
    for path, operations in app.openapi().get("paths", {}).items():
        for method in sorted(operations):
            if method in HTTP_METHODS:
                routes.append(f"{method.upper()} {path}")
    return routes


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_field_error_from_pydantic(error) for error in exc.errors()]
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, [e["path"] for e in errors])
    return validation_failed(errors)


async def score_validation_handler(request: Request, exc: ScoreValidationError) -> JSONResponse:
    return validation_failed([error.to_response() for error in exc.errors])


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": f"Route {request.url.path} not found",
                "availableRoutes": available_routes(request.app),
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ScoreValidationError, score_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
