"""
Shopify data models.
"""

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def normalize_shop_domain(store_url: str) -> str:
    """Strip scheme and trailing slashes from a store URL."""
    return (store_url or "").replace("https://", "").replace("http://", "").strip().strip("/")


class ShopifyConfig(BaseModel):
    """Store connection settings, fixed for the lifetime of the process."""
    store_url: str
    access_token: str
    api_version: str = "2024-01"
    timeout: float = 30.0

    model_config = ConfigDict(frozen=True)

    @property
    def shop_domain(self) -> str:
        return normalize_shop_domain(self.store_url)

    @property
    def endpoint(self) -> str:
        """Base URL of the Admin REST API for this store."""
        return f"https://{self.shop_domain}/admin/api/{self.api_version}"


class WebhookSubscription(BaseModel):
    """Webhook subscription to register with the store."""
    topic: str = Field(..., description="Webhook topic, e.g. orders/create")
    address: str = Field(..., description="Callback URL Shopify delivers to")
    format: str = Field("json", description="Payload format")


class WebhookEnvelope(BaseModel):
    """An authenticated-or-not inbound webhook, exactly as received."""
    topic: str
    shop_domain: str
    hmac_signature: str
    raw_body: bytes
    webhook_id: Optional[str] = None
    api_version: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def payload(self) -> Any:
        """Decode the raw body as JSON."""
        return json.loads(self.raw_body)
