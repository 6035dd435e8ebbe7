"""
Event Pipeline
==============

Pub/Sub notification in, enriched catalog product out.
"""

from .decoder import decode_message_data, parse_envelope
from .dependencies import EnrichmentDependencies, build_dependencies
from .extractor import extract_product_event
from .gate import GateDecision, evaluate_gate
from .orchestrator import EnrichmentPipeline
from .response_mapper import build_response

__all__ = [
    "EnrichmentDependencies",
    "EnrichmentPipeline",
    "GateDecision",
    "build_dependencies",
    "build_response",
    "decode_message_data",
    "evaluate_gate",
    "extract_product_event",
    "parse_envelope",
]
