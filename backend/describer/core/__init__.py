"""
Describer Core
==============

Core configuration, settings and error types.
"""

from .config import Settings, get_settings
from .errors import (
    CollaboratorError,
    DescriberError,
    DescriptionGenerationError,
    ImageAnalysisError,
    MalformedPayloadError,
    MissingPayloadError,
    ProductUpdateError,
)

__all__ = [
    "Settings",
    "get_settings",
    "DescriberError",
    "MissingPayloadError",
    "MalformedPayloadError",
    "CollaboratorError",
    "ImageAnalysisError",
    "DescriptionGenerationError",
    "ProductUpdateError",
]
