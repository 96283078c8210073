"""
Pytest configuration and shared fixtures for Shopify Gateway testing.
"""

import base64
import hashlib
import hmac
import os
from typing import Generator
from unittest.mock import AsyncMock

import pytest

# Settings are read at import time, so the test store must be configured first.
os.environ["SHOPIFY_STORE_URL"] = "test-shop.myshopify.com"
os.environ["SHOPIFY_ACCESS_TOKEN"] = "shpat_test_token"
os.environ["SHOPIFY_API_VERSION"] = "2024-01"
os.environ["SHOPIFY_WEBHOOK_SECRET"] = "shhh"

from fastapi.testclient import TestClient  # noqa: E402

from shopify_gateway.main import app  # noqa: E402
from shopify_gateway.core.dependencies import get_shopify_client  # noqa: E402
from shopify_gateway.integrations.shopify.client import ShopifyClient  # noqa: E402
from shopify_gateway.integrations.shopify.models import ShopifyConfig  # noqa: E402

WEBHOOK_SECRET = "shhh"


def sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
    """Compute a Shopify-style base64 HMAC-SHA256 signature for testing."""
    return base64.b64encode(hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()).decode("utf-8")


@pytest.fixture
def shopify_config() -> ShopifyConfig:
    """Store configuration pointing at the test shop."""
    return ShopifyConfig(
        store_url="test-shop.myshopify.com",
        access_token="shpat_test_token",
        api_version="2024-01",
    )


@pytest.fixture
def mock_shopify_client() -> AsyncMock:
    """Create a mock Shopify client."""
    return AsyncMock(spec=ShopifyClient)


@pytest.fixture
def test_client(mock_shopify_client) -> Generator[TestClient, None, None]:
    """Create a test client with the Shopify client dependency overridden."""
    app.dependency_overrides[get_shopify_client] = lambda: mock_shopify_client

    yield TestClient(app, raise_server_exceptions=False)

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def webhook_headers():
    """Build signed webhook headers for a body and topic."""
    def _build(body: bytes, topic: str = "orders/create", signature: str = None):
        return {
            "X-Shopify-Hmac-Sha256": signature if signature is not None else sign(body),
            "X-Shopify-Topic": topic,
            "X-Shopify-Shop-Domain": "test-shop.myshopify.com",
            "Content-Type": "application/json",
        }
    return _build
