"""
Shopify webhook verification and topic dispatch.
"""

import base64
import hashlib
import hmac
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Union

from loguru import logger

from shopify_gateway.utils.exceptions import ConfigurationError
from .exceptions import WebhookRejection, WebhookVerificationError
from .models import WebhookEnvelope

HMAC_HEADER = "X-Shopify-Hmac-Sha256"
TOPIC_HEADER = "X-Shopify-Topic"
SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"
WEBHOOK_ID_HEADER = "X-Shopify-Webhook-Id"
API_VERSION_HEADER = "X-Shopify-Api-Version"

REQUIRED_HEADERS = (HMAC_HEADER, TOPIC_HEADER, SHOP_DOMAIN_HEADER)


class WebhookTopic(str, Enum):
    """Shopify webhook topics with built-in handlers."""
    PRODUCTS_CREATE = "products/create"
    ORDERS_CREATE = "orders/create"


WebhookCallback = Callable[[WebhookEnvelope], Awaitable[None]]


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Base64-encoded HMAC-SHA256 of the raw body, as Shopify sends it."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def verify_webhook(raw_body: bytes, signature: str, secret: str) -> bool:
    """
    Check a claimed webhook signature against the raw request body.

    Args:
        raw_body: The exact bytes received, never a re-serialized payload
        signature: Value of the X-Shopify-Hmac-Sha256 header
        secret: Shared webhook secret

    Returns:
        True if the signature matches, False otherwise
    """
    if not signature:
        return False

    expected = compute_signature(raw_body, secret)
    # compare_digest rejects non-ASCII str, so compare bytes
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


def authenticate_webhook(headers: Mapping[str, str], raw_body: bytes, secret: str) -> WebhookEnvelope:
    """
    Gate an inbound webhook request.

    Required headers are checked before any signature work is done.

    Args:
        headers: Request headers (matched case-insensitively)
        raw_body: The exact request body bytes
        secret: Shared webhook secret

    Returns:
        The accepted WebhookEnvelope

    Raises:
        WebhookVerificationError: Missing headers or bad signature
        ConfigurationError: No webhook secret is configured
    """
    received = {name.lower(): value for name, value in headers.items()}

    missing = [name for name in REQUIRED_HEADERS if not received.get(name.lower())]
    if missing:
        logger.warning(f"Webhook rejected ({WebhookRejection.MISSING_HEADERS.value}): missing {', '.join(missing)}")
        raise WebhookVerificationError(WebhookRejection.MISSING_HEADERS, missing_headers=missing)

    if not secret:
        raise ConfigurationError("Shopify webhook secret is not configured")

    envelope = WebhookEnvelope(
        topic=received[TOPIC_HEADER.lower()],
        shop_domain=received[SHOP_DOMAIN_HEADER.lower()],
        hmac_signature=received[HMAC_HEADER.lower()],
        raw_body=raw_body,
        webhook_id=received.get(WEBHOOK_ID_HEADER.lower()),
        api_version=received.get(API_VERSION_HEADER.lower()),
    )

    if not verify_webhook(envelope.raw_body, envelope.hmac_signature, secret):
        logger.warning(
            f"Webhook rejected ({WebhookRejection.BAD_SIGNATURE.value}): "
            f"topic={envelope.topic} shop={envelope.shop_domain}"
        )
        raise WebhookVerificationError(
            WebhookRejection.BAD_SIGNATURE,
            topic=envelope.topic,
            shop_domain=envelope.shop_domain,
        )

    logger.info(f"Webhook accepted: {envelope.topic} from {envelope.shop_domain}")
    return envelope


async def _ignore(envelope: WebhookEnvelope) -> None:
    logger.info(f"No handler registered for webhook topic: {envelope.topic}")


class WebhookDispatcher:
    """Routes accepted webhooks to a handler by topic."""

    def __init__(self):
        self._handlers: Dict[str, WebhookCallback] = {}

    def register(self, topic: Union[WebhookTopic, str], handler: WebhookCallback):
        """Register the handler for a topic, replacing any previous one."""
        key = topic.value if isinstance(topic, WebhookTopic) else topic
        if key in self._handlers:
            logger.warning(f"Replacing handler for webhook topic: {key}")
        self._handlers[key] = handler
        logger.info(f"Registered handler for topic: {key}")

    def handler_for(self, topic: str) -> WebhookCallback:
        """Handler for a topic, or a no-op for unknown topics."""
        return self._handlers.get(topic, _ignore)

    @property
    def topics(self):
        return sorted(self._handlers)

    async def dispatch(self, envelope: WebhookEnvelope) -> str:
        """Run the topic handler and return the acknowledgement message."""
        await self.handler_for(envelope.topic)(envelope)
        return f"Webhook {envelope.topic} processed"


def _payload_fields(envelope: WebhookEnvelope) -> Dict[str, Any]:
    """Decoded body as a dict, or {} when the body is not a JSON object."""
    try:
        payload = envelope.payload()
    except ValueError as e:
        logger.warning(f"Webhook {envelope.topic} body is not valid JSON: {e}")
        return {}

    if not isinstance(payload, dict):
        logger.warning(f"Webhook {envelope.topic} body is not a JSON object")
        return {}
    return payload


async def _handle_product_create(envelope: WebhookEnvelope):
    """Handle product creation webhook."""
    payload = _payload_fields(envelope)
    logger.info(f"Product created: {payload.get('id')} ({payload.get('title', 'Unknown')}) on {envelope.shop_domain}")


async def _handle_order_create(envelope: WebhookEnvelope):
    """Handle order creation webhook."""
    payload = _payload_fields(envelope)
    logger.info(f"Order created: #{payload.get('order_number')} ({payload.get('id')}) on {envelope.shop_domain}")


def build_default_dispatcher() -> WebhookDispatcher:
    """Dispatcher with the built-in topic handlers registered."""
    dispatcher = WebhookDispatcher()
    dispatcher.register(WebhookTopic.PRODUCTS_CREATE, _handle_product_create)
    dispatcher.register(WebhookTopic.ORDERS_CREATE, _handle_order_create)
    return dispatcher
