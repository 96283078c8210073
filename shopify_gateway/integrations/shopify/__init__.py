"""
Shopify integration package.
"""

from .client import ShopifyClient
from .models import ShopifyConfig, WebhookEnvelope, WebhookSubscription
from .exceptions import ShopifyError, WebhookRejection, WebhookVerificationError
from .webhooks import WebhookDispatcher, authenticate_webhook, verify_webhook

__all__ = [
    "ShopifyClient",
    "ShopifyConfig",
    "WebhookEnvelope",
    "WebhookSubscription",
    "ShopifyError",
    "WebhookRejection",
    "WebhookVerificationError",
    "WebhookDispatcher",
    "authenticate_webhook",
    "verify_webhook",
]
