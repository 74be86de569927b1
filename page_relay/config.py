"""
Configuration settings for the Page Relay service.

All environment variables are read once at process start into a Settings
object, which the application factory stores on app.state and hands to the
webhook router and the responder.
"""

import os
from dataclasses import dataclass
from typing import List, Optional
from dotenv import load_dotenv

from page_relay.utils.logging_config import get_app_logger

logger = get_app_logger()

APPLICATION_VERSION = "1.0.0"

# Required Environment Variables (only enforced in production)
REQUIRED_ENV_VARS = [
    "WEBHOOK_VERIFY_TOKEN",  # Required for the webhook handshake
    "FACEBOOK_PAGE_ACCESS_TOKEN",  # Required for the Send API
    "GEMINI_API_KEY",  # Required for reply generation
]


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, constructed once at startup"""

    verify_token: Optional[str] = None
    page_access_token: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    graph_api_version: str = "v19.0"
    graph_api_timeout: float = 10.0
    port: int = 3000
    environment: str = "development"
    dry_run: bool = False
    version: str = APPLICATION_VERSION

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and a .env file if present)"""
        load_dotenv()

        environment = os.getenv("ENVIRONMENT", "development")
        return cls(
            verify_token=os.getenv("WEBHOOK_VERIFY_TOKEN"),
            page_access_token=os.getenv("FACEBOOK_PAGE_ACCESS_TOKEN"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
            graph_api_version=os.getenv("GRAPH_API_VERSION", "v19.0"),
            graph_api_timeout=float(os.getenv("GRAPH_API_TIMEOUT", "10")),
            port=int(os.getenv("PORT", "3000")),
            environment=environment,
            dry_run=_env_bool("MESSENGER_DRY_RUN", environment == "test"),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def send_api_url(self) -> str:
        return f"https://graph.facebook.com/{self.graph_api_version}/me/messages"

    def missing_vars(self) -> List[str]:
        values = {
            "WEBHOOK_VERIFY_TOKEN": self.verify_token,
            "FACEBOOK_PAGE_ACCESS_TOKEN": self.page_access_token,
            "GEMINI_API_KEY": self.gemini_api_key,
        }
        return [var for var in REQUIRED_ENV_VARS if not values[var]]

    def validate(self) -> None:
        """
        Validate configuration settings.

        In development: missing credentials are logged as warnings
        In production: missing credentials raise ValueError
        """
        missing = self.missing_vars()
        if not missing:
            return

        if self.is_production:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}\n"
                "Please set these variables in your .env file."
            )

        for var in missing:
            logger.warning(f"{var} not set in environment variables")
