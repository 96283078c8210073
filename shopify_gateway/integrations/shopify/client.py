"""
Shopify Admin REST API client.
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from shopify_gateway.utils.exceptions import ConfigurationError
from .models import ShopifyConfig, WebhookSubscription
from .exceptions import shopify_error_from_response, shopify_error_from_transport

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


class ShopifyClient:
    """Client for forwarding calls to a single store's Admin REST API."""

    def __init__(self, config: ShopifyConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the Shopify client."""
        if not config.shop_domain:
            raise ConfigurationError("Shopify store URL is required")
        if not config.access_token:
            raise ConfigurationError("Shopify access token is required")

        self.config = config
        self.endpoint = config.endpoint
        self.headers = {
            "X-Shopify-Access-Token": config.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "ShopifyGateway/1.0",
        }

        self.client = httpx.AsyncClient(
            headers=self.headers,
            timeout=config.timeout,
            transport=transport,
        )

        logger.info(f"Initialized Shopify client for store: {config.shop_domain}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def send(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Forward a single request to the store and return the decoded payload.

        Args:
            method: One of GET, POST, PUT, DELETE
            path: Resource path relative to the API endpoint, e.g. ``/products.json``
            body: Optional JSON body

        Returns:
            Decoded JSON payload, or an empty dict for empty responses

        Raises:
            ShopifyError: The upstream answered with a non-2xx status or could
                not be reached. Any other failure propagates unchanged.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = f"{self.endpoint}/{path.lstrip('/')}"

        try:
            logger.debug(f"Making {method} request to {url}")
            response = await self.client.request(method, url, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Shopify request failed: {method} {path} - {e.response.status_code}")
            raise shopify_error_from_response(e.response, str(e)) from e
        except httpx.RequestError as e:
            logger.error(f"Network error during Shopify request: {method} {path} - {e!r}")
            raise shopify_error_from_transport(e) from e

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    # Product Methods

    async def get_products(self) -> Dict[str, Any]:
        """Get products from Shopify."""
        return await self.send("GET", "/products.json")

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        """Get a specific product by ID."""
        return await self.send("GET", f"/products/{product_id}.json")

    async def create_product(self, product_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a product from the given fields."""
        return await self.send("POST", "/products.json", {"product": product_data})

    # Order Methods

    async def get_orders(self) -> Dict[str, Any]:
        return await self.send("GET", "/orders.json")

    async def get_order(self, order_id: int) -> Dict[str, Any]:
        return await self.send("GET", f"/orders/{order_id}.json")

    # Customer Methods

    async def get_customers(self) -> Dict[str, Any]:
        return await self.send("GET", "/customers.json")

    async def get_customer(self, customer_id: int) -> Dict[str, Any]:
        return await self.send("GET", f"/customers/{customer_id}.json")

    # Webhook Methods

    async def create_webhook(self, webhook: WebhookSubscription) -> Dict[str, Any]:
        """Register a webhook subscription with the store."""
        return await self.send("POST", "/webhooks.json", {"webhook": webhook.model_dump()})

    async def get_webhooks(self) -> Dict[str, Any]:
        """List the store's webhook subscriptions."""
        return await self.send("GET", "/webhooks.json")

    async def delete_webhook(self, webhook_id: int) -> None:
        """Delete a webhook subscription."""
        await self.send("DELETE", f"/webhooks/{webhook_id}.json")
