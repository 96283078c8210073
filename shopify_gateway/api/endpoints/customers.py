"""
Shopify customers API endpoints.
"""

from fastapi import APIRouter, Depends

from shopify_gateway.core.dependencies import get_shopify_client
from shopify_gateway.integrations.shopify.client import ShopifyClient

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("")
async def list_customers(shopify: ShopifyClient = Depends(get_shopify_client)):
    return await shopify.get_customers()


@router.get("/{customer_id}")
async def get_customer(customer_id: int, shopify: ShopifyClient = Depends(get_shopify_client)):
    return await shopify.get_customer(customer_id)
