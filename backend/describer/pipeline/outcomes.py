"""
Result types threaded through the pipeline.

Stage level:  StageSuccess | StageFailure  (one per collaborator call)
Request level: Rejected | NoOp | Skipped | Enriched | Failed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Stage(str, Enum):
    PARSING = "parsing"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    PERSISTING = "persisting"


@dataclass(frozen=True)
class StageSuccess(Generic[T]):
    value: T


@dataclass(frozen=True)
class StageFailure:
    stage: Stage
    # None when the error carried no usable message
    message: Optional[str]
    error_type: str = "Exception"


StageResult = Union[StageSuccess[T], StageFailure]


def failure_from_exception(stage: Stage, exc: BaseException) -> StageFailure:
    message = str(exc).strip() or None
    return StageFailure(stage=stage, message=message, error_type=type(exc).__name__)


async def run_stage(
    stage: Stage, call: Callable[..., Awaitable[T]], *args: Any
) -> StageResult[T]:
    """Await one collaborator call and fold any exception into a StageFailure."""
    try:
        return StageSuccess(await call(*args))
    except Exception as exc:
        logger.error("Stage %s failed: %s", stage.value, exc, exc_info=True)
        return failure_from_exception(stage, exc)


# ============================================================================
# REQUEST OUTCOMES
# ============================================================================


@dataclass(frozen=True)
class Rejected:
    """Envelope carried nothing to decode."""

    message: str
    reason: str


@dataclass(frozen=True)
class NoOp:
    """Accepted, but productId or imageUrl was missing."""

    product_id: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class Skipped:
    """Accepted, enrichment flag is off."""

    product_id: str
    image_url: str


@dataclass(frozen=True)
class Enriched:
    product_id: str
    image_url: str
    analysis: Any
    description: str
    update: Any


@dataclass(frozen=True)
class Failed:
    failure: StageFailure


Outcome = Union[Rejected, NoOp, Skipped, Enriched, Failed]
