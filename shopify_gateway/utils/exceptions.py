"""
Custom exception classes for the application.
"""

from typing import Any, Dict, Optional


class GatewayException(Exception):
    """Base exception class for Shopify Gateway."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class AuthenticationError(GatewayException):
    """Exception raised for authentication errors."""

    def __init__(self, message: str = "Unauthorized", **kwargs):
        super().__init__(message, error_code="AUTHENTICATION_ERROR", **kwargs)


class ConfigurationError(GatewayException):
    """Exception raised when required configuration is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration", **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)
