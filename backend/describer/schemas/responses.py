"""
Response Schemas
================

Bodies returned by POST /event. Field names are camelCase on the wire to
match what the message-delivery side and the catalog tooling expect.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

MISSING_MESSAGE = "No Pub/Sub message received."
MISSING_DATA = "No data found in Pub/Sub message."
NOOP_MESSAGE = "Event accepted. productId or imageUrl is missing, no description generated."
SKIPPED_MESSAGE = "The option for automatic description generation is not enabled."
INTERNAL_ERROR = "Internal server error. Failed to process request."
UNKNOWN_ERROR = "Internal server error."
UNKNOWN_DETAILS = "Unknown error occurred"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EventAccepted(_WireModel):
    """Request acknowledged, nothing to enrich."""

    message: str = NOOP_MESSAGE


class EnrichmentSkipped(_WireModel):
    """Product found but the enrichment flag is off."""

    message: str = SKIPPED_MESSAGE
    product_id: str = Field(alias="productId")
    image_url: str = Field(alias="imageUrl")


class EnrichmentCompleted(_WireModel):
    """All three stages succeeded."""

    product_id: str = Field(alias="productId")
    image_url: str = Field(alias="imageUrl")
    description: str
    product_analysis: Any = Field(alias="productAnalysis")
    commerce_tools_update: Any = Field(alias="commerceToolsUpdate")


class ErrorBody(_WireModel):
    error: str
    details: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
