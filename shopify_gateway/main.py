"""
Shopify Gateway - Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopify_gateway.api.router import api_router
from shopify_gateway.core.config import settings
from shopify_gateway.integrations.shopify.client import ShopifyClient
from shopify_gateway.integrations.shopify.exceptions import ShopifyError
from shopify_gateway.integrations.shopify.webhooks import build_default_dispatcher
from shopify_gateway.middleware.logging import RequestLoggingMiddleware
from shopify_gateway.utils.error_handlers import (
    gateway_exception_handler,
    shopify_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from shopify_gateway.utils.exceptions import GatewayException

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format=settings.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Shopify Gateway...")
    async with ShopifyClient(settings.shopify_config()) as client:
        app.state.shopify_client = client
        yield
    logger.info("Shutting down Shopify Gateway...")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="REST gateway to the Shopify Admin API with verified webhooks",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

app.state.webhook_dispatcher = build_default_dispatcher()

# Add exception handlers
app.add_exception_handler(GatewayException, gateway_exception_handler)
app.add_exception_handler(ShopifyError, shopify_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_hosts_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/")
async def root():
    return {"hello": "world"}


@app.get("/health")
async def health():
    """Liveness check; does not call Shopify."""
    return {"status": "healthy", "service": settings.PROJECT_NAME, "version": settings.VERSION}


app.include_router(api_router, prefix=settings.API_PREFIX)
