"""
Shopify products API endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from shopify_gateway.core.dependencies import get_shopify_client
from shopify_gateway.integrations.shopify.client import ShopifyClient

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def list_products(shopify: ShopifyClient = Depends(get_shopify_client)):
    """List the store's products."""
    return await shopify.get_products()


@router.get("/{product_id}")
async def get_product(product_id: int, shopify: ShopifyClient = Depends(get_shopify_client)):
    """Get a specific product by ID."""
    return await shopify.get_product(product_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    product: Dict[str, Any] = Body(..., description="Product fields, e.g. title and vendor"),
    shopify: ShopifyClient = Depends(get_shopify_client),
):
    """
    Create a product.

    The request body holds the product fields; they are wrapped under a
    ``product`` key before being forwarded to Shopify.
    """
    return await shopify.create_product(product)
