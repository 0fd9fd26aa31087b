"""Endpoint decorator that answers every call with a result payload."""

from __future__ import annotations

from collections.abc import Callable
import functools
import inspect
from typing import Any

from fastapi.responses import JSONResponse

from error_payload.core.errors import payload_response
from error_payload.core.exceptions import PayloadError
from error_payload.services.payload import ErrorResult
from error_payload.services.payload import Resolution
from error_payload.services.payload import build_payload


def payload_endpoint(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a FastAPI endpoint so its outcome is converted to a payload.

    Place it below the route decorator. Whatever the endpoint returns goes
    through :func:`build_payload`; raising :class:`PayloadError` is the same
    as returning an error result. Works for sync and async endpoints and keeps
    the endpoint parameters visible to FastAPI.
    """

    signature = inspect.signature(endpoint, eval_str=True).replace(return_annotation=JSONResponse)

    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def async_wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
            try:
                resolution = Resolution(value=await endpoint(*args, **kwargs))
            except PayloadError as exc:
                resolution = Resolution(value=ErrorResult(exc.reason))
            return payload_response(build_payload(resolution).value)

        async_wrapper.__signature__ = signature  # type: ignore[attr-defined]
        return async_wrapper

    @functools.wraps(endpoint)
    def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
        try:
            resolution = Resolution(value=endpoint(*args, **kwargs))
        except PayloadError as exc:
            resolution = Resolution(value=ErrorResult(exc.reason))
        return payload_response(build_payload(resolution).value)

    wrapper.__signature__ = signature  # type: ignore[attr-defined]
    return wrapper
