"""Payload responses and exception handler registration."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from error_payload.core.config import get_payload_settings
from error_payload.core.exceptions import InvalidMessageKind
from error_payload.core.exceptions import PayloadError
from error_payload.parsing.pydantic_errors import extract_validation_errors
from error_payload.schemas.payload import Payload
from error_payload.schemas.validation_message import ValidationMessage
from error_payload.services.payload import ErrorResult
from error_payload.services.payload import convert_to_payload
from error_payload.services.payload import error_payload
from error_payload.services.payload import generic_validation_message

logger = logging.getLogger(__name__)


def payload_response(payload: Payload[Any], *, status_code: int | None = None) -> JSONResponse:
    """Serialize a payload; failed payloads use the configured error status."""
    if status_code is None:
        status_code = status.HTTP_200_OK if payload.successful else get_payload_settings().error_status_code
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def _internal_error_payload() -> Payload[Any]:
    message = "Internal server error"
    return error_payload(ValidationMessage(code="internal_error", template=message, message=message))


async def payload_error_handler(_: Request, exc: PayloadError) -> JSONResponse:
    """Answer an explicitly raised payload error with an error payload."""

    return payload_response(convert_to_payload(ErrorResult(exc.reason)))


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI request validation errors to an error payload."""

    messages = extract_validation_errors(exc.errors())
    return payload_response(error_payload(messages))


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap HTTP exceptions in an error payload, keeping their status."""

    message = str(exc.detail) if isinstance(exc.detail, str) and exc.detail else "Request failed"
    payload = error_payload(generic_validation_message(message))
    return payload_response(payload, status_code=exc.status_code)


async def invalid_message_kind_handler(_: Request, exc: InvalidMessageKind) -> JSONResponse:
    """Report unsupported resolver outcomes without leaking them to clients."""

    logger.exception("Resolver returned an unsupported message value=%r", exc.value, exc_info=exc)
    return payload_response(_internal_error_payload(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions while keeping response shape stable."""

    logger.exception("Unhandled error while building response", exc_info=exc)
    return payload_response(_internal_error_payload(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all payload error handlers to a FastAPI app instance."""

    app.add_exception_handler(PayloadError, payload_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(InvalidMessageKind, invalid_message_kind_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
