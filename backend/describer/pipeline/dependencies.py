"""
Collaborators the pipeline runs against.

Built once at startup (see main.lifespan) and handed to each request; tests
swap in fakes through FastAPI dependency overrides.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from ..core.config import Settings
from ..llm.description_generator import DescriptionGenerator, DescriptionWriter
from ..services.commercetools import ProductRepository, ProductStore
from ..services.vision import ImageAnalyzer, VisionImageAnalyzer, vision_credentials_available

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentDependencies:
    image_analyzer: ImageAnalyzer
    description_generator: DescriptionWriter
    product_repository: ProductStore
    flag_attribute: str = "generateDescription"
    http_client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def missing_configuration(settings: Settings) -> List[str]:
    """Names of settings whose absence will make a pipeline stage fail."""
    missing = []
    if not settings.openai_api_key:
        missing.append("OPENAI_API_KEY")
    if not settings.ctp_project_key:
        missing.append("CTP_PROJECT_KEY")
    if not settings.ctp_client_id:
        missing.append("CTP_CLIENT_ID")
    if not settings.ctp_client_secret:
        missing.append("CTP_CLIENT_SECRET")
    if not vision_credentials_available():
        missing.append("GOOGLE_APPLICATION_CREDENTIALS")
    return missing


def build_dependencies(settings: Settings) -> EnrichmentDependencies:
    """Construct the real Vision / OpenAI / commercetools collaborators."""
    for name in missing_configuration(settings):
        logger.warning("%s not configured - enrichment requests will fail", name)

    http_client = httpx.AsyncClient(timeout=settings.http_timeout)

    return EnrichmentDependencies(
        image_analyzer=VisionImageAnalyzer.from_settings(
            project_id=settings.vision_pid,
            api_endpoint=settings.vision_endpoint,
        ),
        description_generator=DescriptionGenerator(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.llm_temperature,
            top_p=settings.llm_top_p,
            max_tokens=settings.llm_max_tokens,
        ),
        product_repository=ProductRepository(
            http_client,
            project_key=settings.ctp_project_key,
            client_id=settings.ctp_client_id,
            client_secret=settings.ctp_client_secret,
            auth_url=settings.ctp_auth_url,
            api_url=settings.ctp_api_url,
            scope=settings.ctp_scope,
            locale=settings.description_locale,
        ),
        flag_attribute=settings.generate_description_attribute,
        http_client=http_client,
    )
