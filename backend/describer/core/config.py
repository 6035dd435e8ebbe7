"""
Describer Configuration
=======================

Centralized application settings.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App info
    app_name: str = "Product Describer"
    app_version: str = "1.0.0"

    # Enrichment gate: attribute on the master variant that opts a product in
    generate_description_attribute: str = "generateDescription"

    # OpenAI (description generation)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.7
    llm_top_p: float = 0.95
    llm_max_tokens: int = 1024

    # Google Cloud Vision (image analysis)
    vision_pid: Optional[str] = None
    vision_location: Optional[str] = None

    # commercetools (description persistence)
    ctp_project_key: str = ""
    ctp_client_id: str = ""
    ctp_client_secret: str = ""
    ctp_scope: str = ""
    ctp_auth_url: str = "https://auth.europe-west1.gcp.commercetools.com"
    ctp_api_url: str = "https://api.europe-west1.gcp.commercetools.com"
    description_locale: str = "en"

    # Outbound HTTP
    http_timeout: float = 30.0

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    debug: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def commercetools_configured(self) -> bool:
        return bool(self.ctp_project_key and self.ctp_client_id and self.ctp_client_secret)

    @property
    def vision_endpoint(self) -> Optional[str]:
        """Regional Vision endpoint (e.g. eu-vision.googleapis.com), if a location is set."""
        if not self.vision_location or self.vision_location == "global":
            return None
        return f"{self.vision_location}-vision.googleapis.com"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
