"""
Shopify Gateway: REST proxy to the Shopify Admin API with verified webhooks.
"""

__version__ = "0.1.0"
