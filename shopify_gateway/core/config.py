"""
Application configuration settings.
"""

from typing import List

from pydantic_settings import BaseSettings

from shopify_gateway.integrations.shopify.models import ShopifyConfig


class Settings(BaseSettings):
    """Application settings."""

    # Project settings
    PROJECT_NAME: str = "Shopify Gateway"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    # CORS settings
    ALLOWED_HOSTS: str = "*"

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Parse ALLOWED_HOSTS from comma-separated string to list."""
        if self.ALLOWED_HOSTS == "*":
            return ["*"]
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Development settings
    DEBUG: bool = False

    # Shopify settings
    SHOPIFY_STORE_URL: str = ""
    SHOPIFY_ACCESS_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2024-01"
    SHOPIFY_WEBHOOK_SECRET: str = ""
    SHOPIFY_TIMEOUT_SECONDS: float = 30.0

    def shopify_config(self) -> ShopifyConfig:
        """Build the immutable store configuration handed to the Shopify client."""
        return ShopifyConfig(
            store_url=self.SHOPIFY_STORE_URL,
            access_token=self.SHOPIFY_ACCESS_TOKEN,
            api_version=self.SHOPIFY_API_VERSION,
            timeout=self.SHOPIFY_TIMEOUT_SECONDS,
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
