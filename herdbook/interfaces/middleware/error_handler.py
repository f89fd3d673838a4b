from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from herdbook.application.errors import AppError, DependencyError, InfrastructureError

logger = logging.getLogger(__name__)


def _body(status_code: int, message: str, error: str, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"statusCode": status_code, "message": message, "error": error}
    body.update({key: value for key, value in extra.items() if value is not None})
    return jsonable_encoder(body)


def _camel_details(details) -> dict[str, Any] | None:
    if details is None:
        return None
    return {to_camel(key): value for key, value in details.items()}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:  # noqa: WPS430
        logger.info(
            "Application error handled: %s - %s (status: %d)",
            exc.code,
            exc.message,
            exc.status_code,
            extra={"path": request.url.path, "method": request.method},
        )
        dependencies = exc.dependencies if isinstance(exc, DependencyError) else None
        payload = _body(
            exc.status_code,
            exc.message,
            exc.code,
            details=_camel_details(exc.details),
            dependencies=_camel_details(dependencies),
        )
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(  # noqa: WPS430
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
            for err in exc.errors()
        ]
        payload = _body(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Request validation failed",
            "validation_error",
            details={"errors": errors},
        )
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=payload)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(  # noqa: WPS430
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        payload = _body(exc.status_code, str(exc.detail), "http_error")
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        logger.error(
            "Unexpected error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        error = InfrastructureError("Unexpected server error")
        payload = _body(error.status_code, error.message, error.code)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
