"""
Shopify API endpoints package.
"""

from .products import router as products_router
from .orders import router as orders_router
from .customers import router as customers_router
from .webhooks import router as webhooks_router

__all__ = ["products_router", "orders_router", "customers_router", "webhooks_router"]
