"""
Enrichment Pipeline
===================

decode -> extract -> gate -> analyze -> generate -> persist

Each collaborator call goes through run_stage and yields a StageResult; the
first StageFailure ends the request. Nothing is retried and nothing is
compensated (persistence is the last stage, so there is nothing to undo).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..core.errors import MalformedPayloadError, MissingPayloadError
from .decoder import decode_message_data, parse_envelope
from .dependencies import EnrichmentDependencies
from .extractor import extract_product_event
from .gate import GateDecision, evaluate_gate
from .outcomes import (
    Enriched,
    Failed,
    NoOp,
    Outcome,
    Rejected,
    Skipped,
    Stage,
    StageFailure,
    failure_from_exception,
    run_stage,
)

logger = logging.getLogger(__name__)


def log_event(product_id: Optional[str], event: str, details: Optional[dict] = None) -> None:
    """One JSON line per pipeline milestone."""
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "product_id": product_id,
        "details": details or {},
    }
    logger.info("[EVENT] %s", json.dumps(entry, ensure_ascii=False, default=str))


class EnrichmentPipeline:
    """
    Runs one notification through the pipeline.

    Usage:
        pipeline = EnrichmentPipeline(dependencies)
        outcome = await pipeline.process(request_body)
    """

    def __init__(self, dependencies: EnrichmentDependencies):
        self.deps = dependencies

    async def process(self, body: Any) -> Outcome:
        # RECEIVED -> DECODED -> PARSED
        try:
            envelope = parse_envelope(body)
            text = decode_message_data(envelope)
            event = extract_product_event(text)
        except MissingPayloadError as e:
            logger.error("%s (reason=%s)", e.message, e.reason)
            return Rejected(message=e.message, reason=e.reason)
        except MalformedPayloadError as e:
            log_event(None, "failed", {"stage": Stage.PARSING.value, "error": str(e)})
            return Failed(failure_from_exception(Stage.PARSING, e))

        # GATED
        decision = evaluate_gate(event, self.deps.flag_attribute)
        log_event(
            event.product_id,
            "received",
            {"resource_type": event.resource_type, "decision": decision.value},
        )

        if decision is GateDecision.NOOP:
            logger.warning("productId or imageUrl is missing from the message data")
            log_event(
                event.product_id,
                "noop",
                {"has_product_id": bool(event.product_id), "has_image_url": bool(event.image_url)},
            )
            return NoOp(product_id=event.product_id, image_url=event.image_url)

        if decision is GateDecision.SKIP:
            logger.info("Automatic description generation is not enabled for %s", event.product_id)
            flag = self.deps.flag_attribute
            log_event(
                event.product_id,
                "skipped",
                {"flag": flag, "value": event.attribute_value(flag)},
            )
            return Skipped(product_id=event.product_id, image_url=event.image_url)

        logger.info("Processing product ID: %s", event.product_id)
        logger.info("Product image URL: %s", event.image_url)
        return await self.enrich(event.product_id, event.image_url)

    async def enrich(self, product_id: str, image_url: str) -> Outcome:
        """ANALYZING -> GENERATING -> PERSISTING, stopping at the first failure."""
        analysis = await run_stage(
            Stage.ANALYZING, self.deps.image_analyzer.analyze, image_url
        )
        if isinstance(analysis, StageFailure):
            return self._failed(product_id, analysis)
        log_event(product_id, "analyzed")

        description = await run_stage(
            Stage.GENERATING, self.deps.description_generator.generate, analysis.value
        )
        if isinstance(description, StageFailure):
            return self._failed(product_id, description)
        log_event(product_id, "generated", {"length": len(description.value or "")})

        update = await run_stage(
            Stage.PERSISTING,
            self.deps.product_repository.update_description,
            product_id,
            description.value,
        )
        if isinstance(update, StageFailure):
            return self._failed(product_id, update)
        log_event(product_id, "updated")

        return Enriched(
            product_id=product_id,
            image_url=image_url,
            analysis=analysis.value,
            description=description.value,
            update=update.value,
        )

    def _failed(self, product_id: str, failure: StageFailure) -> Failed:
        log_event(
            product_id,
            "failed",
            {"stage": failure.stage.value, "error": failure.message, "type": failure.error_type},
        )
        return Failed(failure)
