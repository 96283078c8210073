"""
Shopify webhooks API endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from shopify_gateway.core.dependencies import (
    get_shopify_client,
    get_webhook_dispatcher,
    get_webhook_secret,
)
from shopify_gateway.integrations.shopify.client import ShopifyClient
from shopify_gateway.integrations.shopify.models import WebhookSubscription
from shopify_gateway.integrations.shopify.webhooks import WebhookDispatcher, authenticate_webhook

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("")
async def receive_webhook(
    request: Request,
    secret: str = Depends(get_webhook_secret),
    dispatcher: WebhookDispatcher = Depends(get_webhook_dispatcher),
):
    """
    Receive, verify and acknowledge a webhook from Shopify.

    The signature is checked against the raw request body before the payload
    is looked at. Requests missing the signature, topic or shop domain header,
    or carrying a bad signature, are answered with 401.
    """
    raw_body = await request.body()
    envelope = authenticate_webhook(request.headers, raw_body, secret)

    message = await dispatcher.dispatch(envelope)
    return {"success": True, "message": message}


@router.get("")
async def list_webhooks(shopify: ShopifyClient = Depends(get_shopify_client)):
    """List webhook subscriptions registered with the store."""
    return await shopify.get_webhooks()


@router.post("/subscriptions", status_code=status.HTTP_201_CREATED)
async def create_webhook_subscription(
    subscription: WebhookSubscription,
    shopify: ShopifyClient = Depends(get_shopify_client),
):
    """Register a webhook subscription with the store."""
    return await shopify.create_webhook(subscription)


@router.delete("/subscriptions/{webhook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_webhook_subscription(
    webhook_id: int,
    shopify: ShopifyClient = Depends(get_shopify_client),
):
    """Delete a webhook subscription."""
    await shopify.delete_webhook(webhook_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
