"""
Enrichment gate.

Order matters: identity is checked before the flag, so a product without an
image is a no-op even when the flag is on.
"""

from __future__ import annotations

from enum import Enum

from ..schemas.events import ProductEvent

ENABLED_VALUE = "true"


class GateDecision(str, Enum):
    NOOP = "noop"
    SKIP = "skip"
    ENRICH = "enrich"


def is_enrichment_enabled(value: object) -> bool:
    """Only the exact string "true" turns enrichment on (boolean True does not)."""
    return isinstance(value, str) and value == ENABLED_VALUE


def evaluate_gate(event: ProductEvent, flag_attribute: str) -> GateDecision:
    if not event.has_identity:
        return GateDecision.NOOP
    if not is_enrichment_enabled(event.attribute_value(flag_attribute)):
        return GateDecision.SKIP
    return GateDecision.ENRICH
