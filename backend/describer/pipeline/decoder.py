"""
Payload decoding: Pub/Sub push body -> trimmed UTF-8 text.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from pydantic import ValidationError

from ..core.errors import MalformedPayloadError, MissingPayloadError
from ..schemas.events import PubSubEnvelope
from ..schemas.responses import MISSING_DATA, MISSING_MESSAGE

logger = logging.getLogger(__name__)


def parse_envelope(body: Any) -> PubSubEnvelope:
    """
    Validate the raw request body as a Pub/Sub envelope.

    Anything that does not carry a usable ``message`` object is a
    MissingPayloadError, never a 500: the caller sent us nothing to work on.
    """
    if not isinstance(body, dict):
        raise MissingPayloadError(MISSING_MESSAGE, reason="no_message")

    try:
        return PubSubEnvelope.model_validate(body)
    except ValidationError as exc:
        logger.warning("Invalid Pub/Sub envelope: %s", exc.errors()[:3])
        if isinstance(body.get("message"), dict):
            raise MissingPayloadError(MISSING_DATA, reason="absent") from exc
        raise MissingPayloadError(MISSING_MESSAGE, reason="no_message") from exc


def decode_message_data(envelope: PubSubEnvelope) -> str:
    """
    Base64-decode ``message.data`` and strip surrounding whitespace.

    Raises:
        MissingPayloadError: no message, no data field, or data decoding to
            an empty string (``reason`` tells which)
        MalformedPayloadError: data is not base64 at all
    """
    if envelope.message is None:
        raise MissingPayloadError(MISSING_MESSAGE, reason="no_message")

    data = envelope.message.data
    if data is None:
        raise MissingPayloadError(MISSING_DATA, reason="absent")

    try:
        raw = base64.b64decode(data)
    except (binascii.Error, ValueError) as exc:
        raise MalformedPayloadError(f"Message data is not valid base64: {exc}") from exc

    text = raw.decode("utf-8", errors="replace").strip()
    if not text:
        raise MissingPayloadError(MISSING_DATA, reason="empty")

    return text
