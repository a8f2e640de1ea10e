"""
GPay Client Configuration Module

Loads client configuration from GPAY_* environment variables (or a .env file).
"""
import logging
from typing import Literal, Optional

from pydantic_settings import BaseSettings


STAGING_BASE_URL = "https://gpay-staging.libyaguide.net/banking/api/onlinewallet/v1"
PRODUCTION_BASE_URL = "https://gpay.ly/banking/api/onlinewallet/v1"

BASE_URLS = {
    "staging": STAGING_BASE_URL,
    "production": PRODUCTION_BASE_URL,
}

DEFAULT_LANGUAGE = "en"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Notes:
    - secret_key and password are only required when a client is built
      from settings; they are never logged
    - Signature encodings are chosen per direction and must match what
      the wallet server expects and emits
    """

    # Credentials
    api_key: str = ""
    secret_key: str = ""
    password: str = ""

    # Endpoint selection
    environment: Literal["staging", "production"] = "staging"
    base_url: Optional[str] = None  # Overrides environment when set

    # Request behaviour
    language: str = DEFAULT_LANGUAGE
    timeout_seconds: float = 30.0

    # Signature wire encodings
    request_signature_encoding: Literal["base64", "hex"] = "base64"
    response_signature_encoding: Literal["base64", "hex"] = "hex"

    # Unknown server status codes raise instead of degrading to UNKNOWN
    strict_enums: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    class Config:
        env_prefix = "GPAY_"
        env_file = ".env"
        case_sensitive = False

    def resolved_base_url(self) -> str:
        """Explicit base_url wins over the environment's default URL."""
        return (self.base_url or BASE_URLS[self.environment]).rstrip("/")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the client (defaults to settings.log_level)."""
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level),
        format=LOG_FORMAT
    )


# Global settings instance
settings = Settings()
