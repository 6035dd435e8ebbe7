"""
Event Schemas
=============

Typed views over the inbound notification.

Two layers:
- PubSubEnvelope: the push-subscription wrapper POSTed to /event
- ProductMessage: the commercetools message carried base64-encoded in
  ``message.data`` (ProductPublished / ProductCreated style payloads)

ProductEvent is the flattened result the gate and pipeline work with.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# PUB/SUB ENVELOPE
# ============================================================================


class PubSubMessage(BaseModel):
    """
    Inner Pub/Sub message. ``data`` is base64-encoded JSON.

    Only ``data`` is typed strictly; the delivery metadata is informational
    and never decides whether a payload is usable.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: Optional[str] = None
    message_id: Any = Field(default=None, alias="messageId")
    attributes: Optional[Dict[str, Any]] = None
    publish_time: Any = Field(default=None, alias="publishTime")


class PubSubEnvelope(BaseModel):
    """Push subscription request body: ``{"message": {"data": "..."}}``."""

    model_config = ConfigDict(extra="ignore")

    message: Optional[PubSubMessage] = None
    subscription: Any = None


# ============================================================================
# COMMERCETOOLS PRODUCT MESSAGE
# ============================================================================


class ProductAttribute(BaseModel):
    name: Optional[str] = None
    value: Any = None


class ProductImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None


class ProductVariant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # null entries are tolerated and read as absent
    images: Optional[List[Optional[ProductImage]]] = None
    attributes: Optional[List[Optional[ProductAttribute]]] = None


class ProductProjection(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    master_variant: Optional[ProductVariant] = Field(default=None, alias="masterVariant")


class ResourceReference(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type_id: Optional[str] = Field(default=None, alias="typeId")
    id: Optional[str] = None


class ProductMessage(BaseModel):
    """The subset of a commercetools product message we read."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resource: Optional[ResourceReference] = None
    product_projection: Optional[ProductProjection] = Field(
        default=None, alias="productProjection"
    )


# ============================================================================
# FLATTENED EVENT
# ============================================================================


class ProductEvent(BaseModel):
    """Product identifier, primary image and attributes pulled from a message."""

    resource_type: Optional[str] = None
    product_id: Optional[str] = None
    image_url: Optional[str] = None
    attributes: List[ProductAttribute] = Field(default_factory=list)

    @classmethod
    def from_message(cls, message: ProductMessage) -> "ProductEvent":
        projection = message.product_projection
        variant = projection.master_variant if projection else None

        images = (variant.images if variant else None) or []
        image_url = images[0].url if images and images[0] else None

        attributes = (variant.attributes if variant else None) or []

        return cls(
            resource_type=message.resource.type_id if message.resource else None,
            product_id=projection.id if projection else None,
            image_url=image_url,
            attributes=[a for a in attributes if a is not None],
        )

    @property
    def has_identity(self) -> bool:
        """Both a product id and an image URL are present (empty strings count as absent)."""
        return bool(self.product_id) and bool(self.image_url)

    def attribute_value(self, name: str) -> Any:
        """Value of the first attribute called ``name``, or None."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return None
