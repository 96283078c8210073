"""
Shopify-specific exception handling and error classes.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

import httpx

from shopify_gateway.utils.exceptions import AuthenticationError

# Shopify reports errors either as a plain string or as structured field errors.
ErrorMessage = Union[str, List[Any], Dict[str, Any]]

DEFAULT_ERROR_STATUS = 500


class ShopifyError(Exception):
    """Normalized failure of a call to the Shopify Admin API."""

    def __init__(
        self,
        message: ErrorMessage,
        status_code: int = DEFAULT_ERROR_STATUS,
        response: Optional[Any] = None,
    ):
        super().__init__(message if isinstance(message, str) else str(message))
        self.message = message
        self.status_code = status_code
        self.response = response


class ShopifyAuthenticationError(ShopifyError):
    """Error raised when Shopify rejects the access token."""

    def __init__(self, message: ErrorMessage, **kwargs):
        super().__init__(message, 401, **kwargs)


class ShopifyPermissionError(ShopifyError):
    """Error raised when the access token lacks a required scope."""

    def __init__(self, message: ErrorMessage, **kwargs):
        super().__init__(message, 403, **kwargs)


class ShopifyNotFoundError(ShopifyError):
    """Error raised when Shopify resource is not found."""

    def __init__(self, message: ErrorMessage, **kwargs):
        super().__init__(message, 404, **kwargs)


class ShopifyValidationError(ShopifyError):
    """Error raised when Shopify rejects the request payload."""

    def __init__(self, message: ErrorMessage, **kwargs):
        super().__init__(message, 422, **kwargs)


class ShopifyRateLimitError(ShopifyError):
    """Error raised when Shopify API rate limit is exceeded."""

    def __init__(self, message: ErrorMessage, retry_after: Optional[float] = None, **kwargs):
        super().__init__(message, 429, **kwargs)
        self.retry_after = retry_after


class ShopifyServerError(ShopifyError):
    """Error raised when Shopify answers with a 5xx status."""


class ShopifyTimeoutError(ShopifyError):
    """Error raised when the request times out before Shopify answers."""


class ShopifyConnectionError(ShopifyError):
    """Error raised when Shopify cannot be reached at all."""


class WebhookRejection(str, Enum):
    """Why an inbound webhook was refused."""
    MISSING_HEADERS = "missing_headers"
    BAD_SIGNATURE = "bad_signature"


class WebhookVerificationError(AuthenticationError):
    """Raised when an inbound webhook fails the authenticity gate."""

    def __init__(
        self,
        reason: WebhookRejection,
        topic: Optional[str] = None,
        shop_domain: Optional[str] = None,
        missing_headers: Optional[List[str]] = None,
    ):
        super().__init__(details={"reason": reason.value})
        self.reason = reason
        self.topic = topic
        self.shop_domain = shop_domain
        self.missing_headers = missing_headers or []


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _decode_error_body(response: httpx.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def shopify_error_from_response(response: httpx.Response, fallback_message: str) -> ShopifyError:
    """
    Create appropriate ShopifyError from a non-2xx HTTP response.

    Args:
        response: The upstream response
        fallback_message: Transport-level error text, used when the body
            carries no ``errors`` entry

    Returns:
        Appropriate ShopifyError subclass
    """
    response_data = _decode_error_body(response)

    message: ErrorMessage = fallback_message
    if isinstance(response_data, dict) and response_data.get("errors"):
        message = response_data["errors"]

    status_code = response.status_code
    if status_code == 401:
        return ShopifyAuthenticationError(message, response=response_data)
    elif status_code == 403:
        return ShopifyPermissionError(message, response=response_data)
    elif status_code == 404:
        return ShopifyNotFoundError(message, response=response_data)
    elif status_code == 422:
        return ShopifyValidationError(message, response=response_data)
    elif status_code == 429:
        retry_after = _parse_retry_after(response.headers.get("Retry-After"))
        return ShopifyRateLimitError(message, retry_after, response=response_data)
    elif status_code >= 500:
        return ShopifyServerError(message, status_code, response_data)
    else:
        return ShopifyError(message, status_code, response_data)


def shopify_error_from_transport(error: httpx.RequestError) -> ShopifyError:
    """
    Create ShopifyError for a request that never got a response.

    Args:
        error: The httpx transport error

    Returns:
        ShopifyTimeoutError or ShopifyConnectionError, both with status 500
    """
    message = str(error) or type(error).__name__
    if isinstance(error, httpx.TimeoutException):
        return ShopifyTimeoutError(message)
    return ShopifyConnectionError(message)
