"""Validation error responses."""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def format_validation_errors(errors: Sequence[Any]) -> list[dict[str, str]]:
    """Turn pydantic errors into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        formatted.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return formatted


def join_validation_errors(errors: list[dict[str, str]]) -> str:
    """Single human-readable message, e.g. ``title: too short, email: invalid``."""
    return ", ".join(
        f"{error['field']}: {error['message']}" if error["field"] else error["message"]
        for error in errors
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject invalid input with 400 and field-level details."""
    errors = format_validation_errors(exc.errors())
    detail = join_validation_errors(errors)
    logger.warning(f"Rejected {request.method} {request.url.path}: {detail}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail, "errors": errors},
    )
