# knowyourfood/services/response_parser.py
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from knowyourfood.errors import MalformedModelResponse
from knowyourfood.models import AnalysisResult

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*([\s\S]+?)\s*```", re.IGNORECASE)
_decoder = json.JSONDecoder()


def find_json_candidate(text: str) -> Optional[str]:
    """
    Locate the JSON part of a free-form model reply.
    1) a ```json fenced block wins
    2) otherwise the first top-level {...} object
    Returns None when there is nothing that looks like JSON.
    """
    if not text:
        return None

    m = _FENCED_JSON.search(text)
    if m:
        return m.group(1)

    start = text.find("{")
    if start < 0:
        return None
    try:
        _, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError:
        # unbalanced or broken object: hand back the widest {...} span and
        # let the parse step report it
        end = text.rfind("}") + 1
        if end <= start:
            return None
    return text[start:end]


def extract_json(text: str) -> Any:
    candidate = find_json_candidate(text)
    if candidate is None:
        logger.error("no JSON found in model output. raw=%r", text)
        raise MalformedModelResponse(text)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("model output is not valid JSON (%s). raw=%r", e, text)
        raise MalformedModelResponse(text) from e


def parse_analysis(text: str) -> Dict[str, Any]:
    """
    Model reply -> AnalysisResult-shaped dict.

    Fields that already conform come back unchanged (extra keys included);
    healthiness is folded to lower case. Anything that does not fit the
    shape is reported as a malformed response together with the raw text.
    """
    data = extract_json(text)
    if not isinstance(data, dict):
        logger.error("model output is JSON but not an object. raw=%r", text)
        raise MalformedModelResponse(text)
    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as e:
        logger.error("model output does not match the analysis shape: %s. raw=%r", e, text)
        raise MalformedModelResponse(text) from e
    return result.model_dump(mode="json")
