"""
Outcome -> (status code, JSON body).
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel

from ..schemas.responses import (
    INTERNAL_ERROR,
    UNKNOWN_DETAILS,
    UNKNOWN_ERROR,
    EnrichmentCompleted,
    EnrichmentSkipped,
    ErrorBody,
    EventAccepted,
)
from .outcomes import Enriched, Failed, NoOp, Outcome, Rejected, Skipped


def _as_payload(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    return value


def error_response(message: str | None) -> Tuple[int, Dict[str, Any]]:
    """Generic 500. Falls back to the 'unknown error' shape when there is no message."""
    if message:
        body = ErrorBody(error=INTERNAL_ERROR, details=message)
    else:
        body = ErrorBody(error=UNKNOWN_ERROR, details=UNKNOWN_DETAILS)
    return 500, body.to_payload()


def build_response(outcome: Outcome) -> Tuple[int, Dict[str, Any]]:
    if isinstance(outcome, Rejected):
        return 400, ErrorBody(error=outcome.message).to_payload()

    if isinstance(outcome, NoOp):
        return 200, EventAccepted().model_dump(by_alias=True)

    if isinstance(outcome, Skipped):
        body = EnrichmentSkipped(product_id=outcome.product_id, image_url=outcome.image_url)
        return 200, body.model_dump(by_alias=True)

    if isinstance(outcome, Enriched):
        body = EnrichmentCompleted(
            product_id=outcome.product_id,
            image_url=outcome.image_url,
            description=outcome.description,
            product_analysis=_as_payload(outcome.analysis),
            commerce_tools_update=_as_payload(outcome.update),
        )
        return 200, body.model_dump(by_alias=True)

    if isinstance(outcome, Failed):
        return error_response(outcome.failure.message)

    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")
