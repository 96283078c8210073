"""
Tests for webhook signature verification, the header gate and topic dispatch.
"""

import base64
import hashlib
import hmac
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from shopify_gateway.integrations.shopify import webhooks
from shopify_gateway.integrations.shopify.exceptions import WebhookRejection, WebhookVerificationError
from shopify_gateway.integrations.shopify.models import WebhookEnvelope
from shopify_gateway.integrations.shopify.webhooks import (
    WebhookDispatcher,
    WebhookTopic,
    authenticate_webhook,
    build_default_dispatcher,
    compute_signature,
    verify_webhook,
)
from shopify_gateway.utils.exceptions import ConfigurationError

SECRET = "shhh"


def _compute_hmac(body: bytes, secret: str) -> str:
    """Compute a valid Shopify-style HMAC-SHA256 for testing."""
    return base64.b64encode(
        hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    ).decode("utf-8")


def _headers(body: bytes, **overrides):
    headers = {
        "X-Shopify-Hmac-Sha256": _compute_hmac(body, SECRET),
        "X-Shopify-Topic": "orders/create",
        "X-Shopify-Shop-Domain": "test-shop.myshopify.com",
    }
    headers.update(overrides)
    return {name: value for name, value in headers.items() if value is not None}


class TestVerifyWebhook:
    """Tests for verify_webhook()."""

    def test_example_signature_verifies(self):
        body = b'{"id":1}'
        assert verify_webhook(body, _compute_hmac(body, SECRET), SECRET) is True

    def test_same_signature_rejected_for_other_body(self):
        signature = _compute_hmac(b'{"id":1}', SECRET)
        assert verify_webhook(b'{"id":2}', signature, SECRET) is False

    def test_compute_signature_matches_reference(self):
        body = b'{"id": 12345, "title": "Test Product"}'
        assert compute_signature(body, SECRET) == _compute_hmac(body, SECRET)

    @pytest.mark.parametrize("position", [0, 5, -1])
    def test_single_byte_mutation_rejected(self, position):
        body = bytearray(b'{"id": 12345, "title": "Test Product"}')
        signature = _compute_hmac(bytes(body), SECRET)
        body[position] ^= 0x01
        assert verify_webhook(bytes(body), signature, SECRET) is False

    def test_wrong_secret_rejected(self):
        body = b'{"id": 12345}'
        assert verify_webhook(body, _compute_hmac(body, SECRET), "wrong-secret") is False

    def test_truncated_signature_rejected(self):
        body = b'{"id": 12345}'
        assert verify_webhook(body, _compute_hmac(body, SECRET)[:-4], SECRET) is False

    @pytest.mark.parametrize("signature", ["", "not-valid-base64!", "héllo"])
    def test_malformed_signature_rejected(self, signature):
        assert verify_webhook(b'{"id": 12345}', signature, SECRET) is False

    def test_empty_body(self):
        assert verify_webhook(b"", _compute_hmac(b"", SECRET), SECRET) is True

    def test_unicode_payload(self):
        body = '{"name": "café résumé"}'.encode("utf-8")
        assert verify_webhook(body, _compute_hmac(body, SECRET), SECRET) is True


class TestAuthenticateWebhook:
    """Tests for the header and signature gate."""

    def test_accepts_valid_request(self):
        body = b'{"id": 1, "order_number": 1001}'
        headers = _headers(body, **{"X-Shopify-Webhook-Id": "abc", "X-Shopify-Api-Version": "2024-01"})

        envelope = authenticate_webhook(headers, body, SECRET)

        assert envelope.topic == "orders/create"
        assert envelope.shop_domain == "test-shop.myshopify.com"
        assert envelope.raw_body == body
        assert envelope.webhook_id == "abc"
        assert envelope.api_version == "2024-01"
        assert envelope.payload() == {"id": 1, "order_number": 1001}

    def test_header_names_are_case_insensitive(self):
        body = b'{"id": 1}'
        headers = {name.lower(): value for name, value in _headers(body).items()}

        assert authenticate_webhook(headers, body, SECRET).topic == "orders/create"

    @pytest.mark.parametrize("missing", ["X-Shopify-Hmac-Sha256", "X-Shopify-Topic", "X-Shopify-Shop-Domain"])
    def test_missing_header_rejected_before_signature_check(self, monkeypatch, missing):
        body = b'{"id": 1}'
        headers = _headers(body, **{missing: None})
        signer = MagicMock(side_effect=AssertionError("signature must not be computed"))
        monkeypatch.setattr(webhooks, "compute_signature", signer)

        with pytest.raises(WebhookVerificationError) as exc_info:
            authenticate_webhook(headers, body, SECRET)

        assert exc_info.value.reason is WebhookRejection.MISSING_HEADERS
        assert exc_info.value.missing_headers == [missing]
        signer.assert_not_called()

    def test_empty_header_counts_as_missing(self):
        body = b'{"id": 1}'

        with pytest.raises(WebhookVerificationError) as exc_info:
            authenticate_webhook(_headers(body, **{"X-Shopify-Topic": ""}), body, SECRET)

        assert exc_info.value.reason is WebhookRejection.MISSING_HEADERS

    def test_bad_signature_rejected(self):
        body = b'{"id": 1}'
        headers = _headers(b'{"id": 2}')

        with pytest.raises(WebhookVerificationError) as exc_info:
            authenticate_webhook(headers, body, SECRET)

        error = exc_info.value
        assert error.reason is WebhookRejection.BAD_SIGNATURE
        assert error.topic == "orders/create"
        assert error.message == "Unauthorized"
        assert error.details == {"reason": "bad_signature"}

    def test_missing_secret_is_a_configuration_fault(self):
        body = b'{"id": 1}'

        with pytest.raises(ConfigurationError):
            authenticate_webhook(_headers(body), body, "")


def _envelope(topic: str, body: bytes = b'{"id": 1}') -> WebhookEnvelope:
    return WebhookEnvelope(
        topic=topic,
        shop_domain="test-shop.myshopify.com",
        hmac_signature=_compute_hmac(body, SECRET),
        raw_body=body,
    )


class TestWebhookDispatcher:
    """Tests for topic dispatch."""

    @pytest.mark.asyncio
    async def test_registered_handler_receives_envelope(self):
        dispatcher = WebhookDispatcher()
        handler = AsyncMock()
        dispatcher.register("products/update", handler)
        envelope = _envelope("products/update")

        message = await dispatcher.dispatch(envelope)

        handler.assert_awaited_once_with(envelope)
        assert message == "Webhook products/update processed"

    @pytest.mark.asyncio
    async def test_unknown_topic_is_acknowledged(self):
        dispatcher = WebhookDispatcher()

        assert await dispatcher.dispatch(_envelope("shop/update")) == "Webhook shop/update processed"

    def test_register_accepts_enum_and_replaces(self):
        dispatcher = WebhookDispatcher()
        first, second = AsyncMock(), AsyncMock()
        dispatcher.register(WebhookTopic.ORDERS_CREATE, first)
        dispatcher.register("orders/create", second)

        assert dispatcher.handler_for("orders/create") is second
        assert dispatcher.topics == ["orders/create"]

    @pytest.mark.asyncio
    async def test_handler_errors_propagate(self):
        dispatcher = WebhookDispatcher()
        dispatcher.register("orders/create", AsyncMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            await dispatcher.dispatch(_envelope("orders/create"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic, body", [
        ("products/create", b'{"id": 10, "title": "Hat"}'),
        ("orders/create", b'{"id": 20, "order_number": 1001}'),
    ])
    async def test_default_dispatcher_handles_builtin_topics(self, topic, body):
        dispatcher = build_default_dispatcher()

        assert dispatcher.topics == ["orders/create", "products/create"]
        assert await dispatcher.dispatch(_envelope(topic, body)) == f"Webhook {topic} processed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic", ["products/create", "orders/create"])
    @pytest.mark.parametrize("body", [b"", b"[1, 2]", b"null", b"{broken"])
    async def test_builtin_handlers_tolerate_non_object_bodies(self, topic, body):
        dispatcher = build_default_dispatcher()

        assert await dispatcher.dispatch(_envelope(topic, body)) == f"Webhook {topic} processed"

    def test_envelope_is_immutable(self):
        envelope = _envelope("orders/create")

        with pytest.raises(ValidationError):
            envelope.topic = "products/create"
