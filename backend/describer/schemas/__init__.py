"""
Describer Schemas
=================

Pydantic schemas for structured data.

- events: Pub/Sub envelope, commercetools product message, ProductEvent
- analysis: ImageAnalysis produced by the vision stage
- responses: bodies returned by the event endpoint
"""

from .analysis import ImageAnalysis
from .events import (
    ProductAttribute,
    ProductEvent,
    ProductMessage,
    PubSubEnvelope,
    PubSubMessage,
)
from .responses import (
    EnrichmentCompleted,
    EnrichmentSkipped,
    ErrorBody,
    EventAccepted,
)

__all__ = [
    "ImageAnalysis",
    "ProductAttribute",
    "ProductEvent",
    "ProductMessage",
    "PubSubEnvelope",
    "PubSubMessage",
    "EnrichmentCompleted",
    "EnrichmentSkipped",
    "ErrorBody",
    "EventAccepted",
]
