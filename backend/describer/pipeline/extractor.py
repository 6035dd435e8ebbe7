"""
Event extraction: decoded text -> ProductEvent.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from ..core.errors import MalformedPayloadError
from ..schemas.events import ProductEvent, ProductMessage

logger = logging.getLogger(__name__)


def extract_product_event(text: str) -> ProductEvent:
    """
    Parse decoded message data into a ProductEvent.

    Missing nested fields are fine (they come back as None / empty). What is
    not fine is text that is not JSON, JSON that is not an object, or fields
    of the wrong type: those raise MalformedPayloadError.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse message data as JSON: %s", exc)
        raise MalformedPayloadError(f"Message data is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"Message data must be a JSON object, got {type(data).__name__}"
        )

    try:
        message = ProductMessage.model_validate(data)
    except ValidationError as exc:
        raise MalformedPayloadError(f"Unexpected product message shape: {exc}") from exc

    return ProductEvent.from_message(message)
