"""
Describer LLM Components
========================

LLM-based description generation.
"""

from .description_generator import (
    DESCRIPTION_PROMPT,
    DescriptionGenerator,
    DescriptionWriter,
    build_prompt,
)

__all__ = [
    "DESCRIPTION_PROMPT",
    "DescriptionGenerator",
    "DescriptionWriter",
    "build_prompt",
]
