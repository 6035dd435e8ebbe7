"""
Error types raised along the event pipeline.

The webhook maps MissingPayloadError to 400; everything else ends up as a 500
with the error message as ``details``.
"""

from __future__ import annotations


class DescriberError(Exception):
    """Base class for all describer errors."""


class MissingPayloadError(DescriberError):
    """The Pub/Sub envelope carries no decodable content."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.message = message
        # no_message | absent | empty
        self.reason = reason


class MalformedPayloadError(DescriberError):
    """The decoded message data is not a usable product event."""


class CollaboratorError(DescriberError):
    """An external capability (vision, LLM, catalog) failed."""


class ImageAnalysisError(CollaboratorError):
    pass


class DescriptionGenerationError(CollaboratorError):
    pass


class ProductUpdateError(CollaboratorError):
    pass
