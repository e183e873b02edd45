"""
Configuration Management
Environment-based configuration for credentials, upstream hosts and server settings
"""

import logging
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Relay configuration, loaded once at startup and never mutated"""

    # Agora RTC signing credentials (optional, checked per request)
    agora_app_id: Optional[str] = None
    agora_app_cert: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Upstream providers
    google_maps_base_url: str = "https://maps.googleapis.com/maps/api"
    # app-sandbox.paydunya.com does not resolve everywhere; sandbox keys work on the main host
    paydunya_base_url: str = "https://app.paydunya.com"
    upstream_timeout_seconds: Optional[float] = None

    # CORS
    cors_allowed_origins: str = "*"

    # Logging
    log_level: str = "INFO"
    log_format: str = "default"
    logging_config_path: Optional[str] = None

    class Config:
        env_prefix = ""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
        frozen = True

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError('Port must be between 1 and 65535')
        return v

    @field_validator('upstream_timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError('Upstream timeout must be positive')
        return v

    def has_agora_app_id(self) -> bool:
        return bool(self.agora_app_id)

    def has_agora_app_cert(self) -> bool:
        return bool(self.agora_app_cert)

    def has_agora_credentials(self) -> bool:
        """Both signing credentials are present and non-empty"""
        return self.has_agora_app_id() and self.has_agora_app_cert()

    def get_cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        return origins or ["*"]

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Listening on: {self.host}:{self.port}")
        logger.info(
            f"Agora credentials: app_id={'set' if self.has_agora_app_id() else 'missing'}, "
            f"app_cert={'set' if self.has_agora_app_cert() else 'missing'}"
        )
        logger.info(f"Google Maps upstream: {self.google_maps_base_url}")
        logger.info(f"PayDunya upstream: {self.paydunya_base_url}")
        logger.info(f"Upstream timeout: {self.upstream_timeout_seconds or 'none'}")
        logger.info(f"CORS origins: {', '.join(self.get_cors_origins())}")


def get_settings() -> Settings:
    """Build settings from the environment (and .env when present)"""
    return Settings()
