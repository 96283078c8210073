"""
FastAPI dependency functions.
"""

from fastapi import Depends, Request

from shopify_gateway.core.config import Settings, get_settings
from shopify_gateway.integrations.shopify.client import ShopifyClient
from shopify_gateway.integrations.shopify.webhooks import WebhookDispatcher


def get_shopify_client(request: Request) -> ShopifyClient:
    """
    Dependency to get the Shopify client.

    The client is built once at startup from the store configuration and
    shared read-only by every request.
    """
    return request.app.state.shopify_client


def get_webhook_dispatcher(request: Request) -> WebhookDispatcher:
    """Dependency to get the webhook topic dispatcher."""
    return request.app.state.webhook_dispatcher


def get_webhook_secret(settings: Settings = Depends(get_settings)) -> str:
    """Dependency to get the shared webhook secret."""
    return settings.SHOPIFY_WEBHOOK_SECRET
