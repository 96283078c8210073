"""
Main API router.
"""

from fastapi import APIRouter

from shopify_gateway.api.endpoints import (
    products_router,
    orders_router,
    customers_router,
    webhooks_router,
)

api_router = APIRouter()

api_router.include_router(products_router)
api_router.include_router(orders_router)
api_router.include_router(customers_router)
api_router.include_router(webhooks_router)
