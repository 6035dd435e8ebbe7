"""
Description Generator
=====================

Turns an ImageAnalysis into e-commerce copy for an apparel item.

The prompt embeds all five analysis fields and a fixed set of guidelines:
target category, confident fabric wording, occasions, styling, care,
100-150 words, a 'Key Features' section, and no markdown emphasis.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import AsyncOpenAI

from ..core.errors import DescriptionGenerationError
from ..schemas.analysis import ImageAnalysis

logger = logging.getLogger(__name__)


DESCRIPTION_PROMPT = """As an expert e-commerce product copywriter, craft a captivating product description based on the following image analysis for an apparel item:
Labels: {labels}
Objects detected: {objects}
Dominant colors: {colors}
Text detected: {detected_text}
Web entities: {web_entities}

Guidelines:
1. Use a professional, engaging tone suitable for e-commerce.
2. Specify the target category of the apparel (e.g., men's, women's, kids', boys', or girls').
3. Highlight the apparel's key features, such as style, fit, and comfort, and how they cater to the target category.
4. Describe the fabric confidently, focusing on its smoothness, breathability, or comfort (avoid uncertain phrases like "while not specified").
5. If colors are not properly detected, describe them in an appealing way (e.g., 'a crisp light color' or 'a subtle neutral tone'). If colors are detected, focus on other attributes of the apparel.
6. Suggest suitable occasions for wearing the item, such as casual outings, formal events, or workouts, and how it fits within the lifestyle of the target category.
7. Emphasize any unique styling possibilities, such as pairing with accessories or layering options.
8. Include care instructions if relevant (e.g., machine washable, hand wash recommended).
9. Keep the description concise but descriptive, within 100-150 words.
10. Include relevant sizing, fit information, or recommendations based on the detected elements, if available.
11. Additionally, generate a 'Key Features' section summarizing the apparel's key attributes, focusing on fabric, fit, and versatility.

Please ensure no text styling such as bold (**), italics (*), or underlining (_) is used in the description or key features section."""

NO_RESPONSE = "No valid response received from the model"


def build_prompt(analysis: ImageAnalysis) -> str:
    return DESCRIPTION_PROMPT.format(
        labels=analysis.labels,
        objects=analysis.objects,
        colors=", ".join(analysis.colors),
        detected_text=analysis.detected_text,
        web_entities=analysis.web_entities,
    )


class DescriptionWriter(ABC):
    """Writes a product description from an image analysis."""

    @abstractmethod
    async def generate(self, analysis: ImageAnalysis) -> str:
        raise NotImplementedError


class DescriptionGenerator(DescriptionWriter):
    """
    Generates product descriptions via OpenAI chat completions.

    Usage:
        generator = DescriptionGenerator(api_key="sk-...")
        description = await generator.generate(analysis)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        *,
        temperature: float = 0.7,
        top_p: float = 0.95,
        max_tokens: int = 1024,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

    async def generate(self, analysis: ImageAnalysis) -> str:
        logger.info("Sending description prompt to %s", self.model)
        prompt = build_prompt(analysis)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error("Description generation failed (model=%s): %s", self.model, e)
            raise DescriptionGenerationError(str(e) or NO_RESPONSE) from e

        text = None
        if response.choices:
            text = response.choices[0].message.content

        if not text or not text.strip():
            raise DescriptionGenerationError(NO_RESPONSE)

        logger.info("Description generation completed (%d chars)", len(text))
        return text.strip()
