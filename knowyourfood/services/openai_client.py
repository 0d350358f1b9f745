# knowyourfood/services/openai_client.py
from __future__ import annotations

import logging
from typing import Any, Dict

from openai import AsyncOpenAI, OpenAIError

from knowyourfood.config import Settings
from knowyourfood.errors import UpstreamFailure
from knowyourfood.services.response_parser import parse_analysis
from knowyourfood.utils.data_url import preview

logger = logging.getLogger(__name__)

# === Prompt: one dish, strict JSON in the AnalysisResult shape ===
ANALYSIS_PROMPT = (
    "You are a food expert. Analyze the food in this image and return a JSON object "
    "containing the following keys:\n"
    '- "foodName": string (the name of the food)\n'
    '- "calories": number (estimated calories in kcal)\n'
    '- "nutrition": object with keys "carbs" (number in grams), "protein" (number in grams), '
    'and "fat" (number in grams)\n'
    '- "healthiness": string, one of "good", "okay", or "bad"\n'
    '- "suggestions": string[] (an array of 2-3 health suggestions related to the food)\n'
    "\n"
    "Return ONLY the JSON object, no other text or markdown. If you cannot identify a value, "
    "use null for strings/numbers or an empty array for suggestions."
)


def build_messages(image: str) -> list:
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": ANALYSIS_PROMPT},
                {"type": "image_url", "image_url": {"url": image}},
            ],
        }
    ]


async def _call_model(settings: Settings, image: str) -> str:
    """One chat completion, returns the raw reply text. No retry."""
    try:
        # Built per request: a missing key surfaces here as the SDK's auth error
        client = AsyncOpenAI(api_key=settings.openai_api_key)
        resp = await client.chat.completions.create(
            model=settings.vision_model,
            messages=build_messages(image),
            max_tokens=settings.max_tokens,
        )
    except OpenAIError as e:
        raise UpstreamFailure(str(e)) from e

    txt = resp.choices[0].message.content if resp.choices else None
    if not txt:
        logger.error("no analysis received from model. response=%r", resp)
        raise UpstreamFailure("No analysis received from model")
    return txt


async def analyze_food_image(settings: Settings, image: str) -> Dict[str, Any]:
    """
    data URL -> validated AnalysisResult dict.
    Raises UpstreamFailure when the call fails, MalformedModelResponse when
    the reply cannot be read as an analysis.
    """
    logger.info("received image string (first 100 chars): %s", preview(image))
    txt = await _call_model(settings, image)
    return parse_analysis(txt)
