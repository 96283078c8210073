"""
Shopify orders API endpoints.
"""

from fastapi import APIRouter, Depends

from shopify_gateway.core.dependencies import get_shopify_client
from shopify_gateway.integrations.shopify.client import ShopifyClient

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("")
async def list_orders(shopify: ShopifyClient = Depends(get_shopify_client)):
    """List the store's orders."""
    return await shopify.get_orders()


@router.get("/{order_id}")
async def get_order(order_id: int, shopify: ShopifyClient = Depends(get_shopify_client)):
    """Get a specific order by ID."""
    return await shopify.get_order(order_id)
