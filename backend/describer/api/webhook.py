"""
Product Event Webhook
=====================

Endpoint receiving Pub/Sub push notifications for catalog product changes.

Flow:
  1. Pub/Sub POSTs { "message": { "data": "<base64 JSON>" } } to /event
  2. The product message is decoded and the product id / primary image read
  3. If the product's generateDescription attribute is "true":
       Vision analysis -> LLM description -> commercetools setDescription
  4. The outcome is returned as JSON

Status codes:
  200: enriched, skipped (flag off) or accepted as a no-op (missing ids)
  400: no message / no data in the envelope
  500: unparseable data or any stage failure (details carry the cause)

Payload data format (commercetools product message):
  {
    "resource": { "typeId": "product" },
    "productProjection": {
      "id": "...",
      "masterVariant": {
        "images": [{ "url": "https://..." }],
        "attributes": [{ "name": "generateDescription", "value": "true" }]
      }
    }
  }
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.config import get_settings
from ..pipeline.dependencies import EnrichmentDependencies, missing_configuration
from ..pipeline.orchestrator import EnrichmentPipeline
from ..pipeline.response_mapper import build_response, error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/event", tags=["event"])


def get_dependencies(request: Request) -> EnrichmentDependencies:
    """Collaborators built at startup and stored on the app state."""
    deps = getattr(request.app.state, "dependencies", None)
    if deps is None:
        raise RuntimeError("Enrichment dependencies are not initialized")
    return deps


@router.post("")
async def receive_event(
    request: Request,
    deps: EnrichmentDependencies = Depends(get_dependencies),
):
    """
    Handle one product notification.

    The body is read raw rather than through a pydantic model so that a
    missing or malformed envelope maps to our 400 body instead of FastAPI's
    422 validation error.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    try:
        outcome = await EnrichmentPipeline(deps).process(body)
        status_code, payload = build_response(outcome)
    except Exception as e:
        logger.error("Error processing request: %s", e, exc_info=True)
        status_code, payload = error_response(str(e))

    return JSONResponse(status_code=status_code, content=payload)


@router.get("/health")
async def event_health():
    """Event endpoint health check."""
    settings = get_settings()
    return {
        "status": "ready",
        "flag_attribute": settings.generate_description_attribute,
        "openai_configured": bool(settings.openai_api_key),
        "commercetools_configured": settings.commercetools_configured,
        "missing": missing_configuration(settings),
    }
