"""
Image Analysis Schema
=====================

Output of the vision stage and input of the description prompt.
Every field always holds something: detectors that find nothing produce the
fallback strings below.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

NO_LABELS = "No labels detected"
NO_OBJECTS = "No objects detected"
NO_COLORS = "No colors detected"
NO_TEXT = "No text detected"
NO_WEB_ENTITIES = "No web entities detected"

MAX_COLORS = 3
MAX_WEB_ENTITIES = 5


class ImageAnalysis(BaseModel):
    """Five independent findings about a product image."""

    model_config = ConfigDict(populate_by_name=True)

    labels: str = Field(default=NO_LABELS, description="Comma-separated label descriptions")
    objects: str = Field(default=NO_OBJECTS, description="Comma-separated localized object names")
    colors: List[str] = Field(
        default_factory=lambda: [NO_COLORS],
        description="Up to three dominant colors as 'R, G, B' strings",
    )
    detected_text: str = Field(default=NO_TEXT, alias="detectedText")
    web_entities: str = Field(default=NO_WEB_ENTITIES, alias="webEntities")

    def to_payload(self) -> dict:
        """Camel-cased dict, as returned to the caller under ``productAnalysis``."""
        return self.model_dump(by_alias=True)
