"""
Product Describer API
=====================

Main entry point for the catalog description enrichment service.

Features:
- Pub/Sub push endpoint for commercetools product messages
- Vision image analysis -> LLM copywriting -> commercetools write-back
- Opt-in per product through a variant attribute
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from describer.api.webhook import router as event_router
from describer.core.config import get_settings
from describer.pipeline.dependencies import build_dependencies

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Description model: {settings.openai_model}")
    logger.info(f"Flag attribute: {settings.generate_description_attribute}")

    app.state.dependencies = build_dependencies(settings)
    logger.info("Enrichment collaborators ready.")

    yield

    await app.state.dependencies.aclose()
    logger.info("Shutting down Product Describer.")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Generates catalog product descriptions from product images",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url=None,
)

app.include_router(event_router)


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "name": settings.app_name,
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
