"""
Product image analysis backed by Google Cloud Vision.

One batch_annotate_images call per image, requesting every feature the
description prompt needs. Empty detectors fall back to fixed strings so the
prompt never sees a blank field.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

import google.auth
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import vision

from ..core.errors import ImageAnalysisError
from ..schemas.analysis import (
    MAX_COLORS,
    MAX_WEB_ENTITIES,
    NO_COLORS,
    NO_LABELS,
    NO_OBJECTS,
    NO_TEXT,
    NO_WEB_ENTITIES,
    ImageAnalysis,
)

logger = logging.getLogger(__name__)

FEATURES = [
    vision.Feature.Type.LABEL_DETECTION,
    vision.Feature.Type.OBJECT_LOCALIZATION,
    vision.Feature.Type.IMAGE_PROPERTIES,
    vision.Feature.Type.TEXT_DETECTION,
    vision.Feature.Type.WEB_DETECTION,
]


def vision_credentials_available() -> bool:
    """Whether Application Default Credentials can be resolved for Vision."""
    try:
        google.auth.default()
    except DefaultCredentialsError:
        return False
    return True


class ImageAnalyzer(ABC):
    """Turns an image URL into an ImageAnalysis."""

    @abstractmethod
    async def analyze(self, image_url: str) -> ImageAnalysis:
        raise NotImplementedError


def _join(values: Iterable[str]) -> str:
    return ", ".join(v for v in values if v)


def _channel(value: float) -> int:
    # round half up (not banker's rounding)
    return int(math.floor(value + 0.5))


def _format_color(color_info) -> str:
    rgb = color_info.color
    return f"{_channel(rgb.red)}, {_channel(rgb.green)}, {_channel(rgb.blue)}"


def summarize_annotations(result: vision.AnnotateImageResponse) -> ImageAnalysis:
    """Reduce a raw Vision response to the five fields the prompt uses."""
    labels = _join(label.description for label in result.label_annotations)
    objects = _join(obj.name for obj in result.localized_object_annotations)

    dominant = list(result.image_properties_annotation.dominant_colors.colors)[:MAX_COLORS]
    colors: List[str] = [_format_color(c) for c in dominant]

    detected_text = (
        result.text_annotations[0].description if result.text_annotations else ""
    )

    entities = list(result.web_detection.web_entities)[:MAX_WEB_ENTITIES]
    web_entities = _join(entity.description for entity in entities)

    return ImageAnalysis(
        labels=labels or NO_LABELS,
        objects=objects or NO_OBJECTS,
        colors=colors or [NO_COLORS],
        detected_text=detected_text or NO_TEXT,
        web_entities=web_entities or NO_WEB_ENTITIES,
    )


class VisionImageAnalyzer(ImageAnalyzer):
    """
    Image analyzer using the Vision async client.

    The client is created on first use: its constructor resolves Google
    credentials, and the service must start without them.

    Usage:
        analyzer = VisionImageAnalyzer(vision.ImageAnnotatorAsyncClient())
        analysis = await analyzer.analyze("https://.../shirt.jpg")
    """

    def __init__(self, client=None, client_options: Optional[dict] = None):
        self._client = client
        self.client_options = client_options

    @property
    def client(self):
        if self._client is None:
            self._client = vision.ImageAnnotatorAsyncClient(client_options=self.client_options)
        return self._client

    @classmethod
    def from_settings(
        cls, project_id: Optional[str] = None, api_endpoint: Optional[str] = None
    ) -> "VisionImageAnalyzer":
        client_options = {}
        if project_id:
            client_options["quota_project_id"] = project_id
        if api_endpoint:
            client_options["api_endpoint"] = api_endpoint
        return cls(client_options=client_options or None)

    async def analyze(self, image_url: str) -> ImageAnalysis:
        logger.info("Starting Vision analysis for %s", image_url)

        request = vision.AnnotateImageRequest(
            image=vision.Image(source=vision.ImageSource(image_uri=image_url)),
            features=[vision.Feature(type_=feature) for feature in FEATURES],
        )

        try:
            response = await self.client.batch_annotate_images(requests=[request])
        except Exception as e:
            logger.error("Error during Vision analysis of %s: %s", image_url, e)
            raise ImageAnalysisError(str(e) or "Vision analysis failed") from e

        if not response.responses:
            raise ImageAnalysisError("Vision returned no annotation result")

        result = response.responses[0]
        if result.error.message:
            logger.error("Vision could not annotate %s: %s", image_url, result.error.message)
            raise ImageAnalysisError(result.error.message)

        analysis = summarize_annotations(result)
        logger.info("Vision analysis completed for %s", image_url)
        return analysis
