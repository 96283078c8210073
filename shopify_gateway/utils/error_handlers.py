"""
Global exception handlers for FastAPI application.
"""

import logging
from typing import Union

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopify_gateway.integrations.shopify.exceptions import ShopifyError, ShopifyRateLimitError
from shopify_gateway.utils.exceptions import GatewayException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Upstream statuses that make no sense to relay as an error response.
UPSTREAM_FALLBACK_STATUS = 502


async def gateway_exception_handler(
    request: Request, exc: GatewayException
) -> JSONResponse:
    """Handle custom gateway exceptions."""
    status_code = 500
    if exc.error_code == "AUTHENTICATION_ERROR":
        status_code = 401

    if status_code == 500:
        logger.error(
            f"Gateway Exception: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "url": str(request.url),
                "method": request.method,
            }
        )
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    logger.warning(
        f"Gateway Exception: {exc.message}",
        extra={
            "error_code": exc.error_code,
            "details": exc.details,
            "url": str(request.url),
            "method": request.method,
        }
    )
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def shopify_exception_handler(
    request: Request, exc: ShopifyError
) -> JSONResponse:
    """Relay a normalized upstream failure with its status and message."""
    status_code = exc.status_code if exc.status_code >= 400 else UPSTREAM_FALLBACK_STATUS

    logger.warning(
        f"Shopify Error: {exc.status_code} - {exc}",
        extra={
            "status_code": exc.status_code,
            "response": exc.response,
            "url": str(request.url),
            "method": request.method,
        }
    )

    headers = None
    if isinstance(exc, ShopifyRateLimitError) and exc.retry_after is not None:
        headers = {"Retry-After": f"{exc.retry_after:g}"}

    return JSONResponse(status_code=status_code, content={"error": exc.message}, headers=headers)


async def http_exception_handler(
    request: Request, exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "url": str(request.url),
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation exceptions."""
    logger.warning(
        f"Validation Error: {exc.errors()}",
        extra={
            "url": str(request.url),
            "method": request.method,
        }
    )

    # Format validation errors
    formatted_errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        formatted_errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation failed",
            "details": formatted_errors,
        }
    )


async def general_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle anything the other handlers did not claim."""
    logger.exception(
        f"Unexpected Error: {type(exc).__name__}: {exc}",
        extra={
            "url": str(request.url),
            "method": request.method,
        }
    )

    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
