"""Model call: prompt, budget, upstream failures"""
import logging

import pytest
from openai import OpenAIError

from conftest import APPLE, PNG_DATA_URL, completion
from knowyourfood.config import Settings
from knowyourfood.errors import MalformedModelResponse, UpstreamFailure
from knowyourfood.services.openai_client import ANALYSIS_PROMPT, analyze_food_image, build_messages


def test_prompt_asks_for_every_result_field():
    for key in ("foodName", "calories", "nutrition", "healthiness", "suggestions"):
        assert f'"{key}"' in ANALYSIS_PROMPT


def test_messages_carry_prompt_then_image():
    content = build_messages(PNG_DATA_URL)[0]["content"]

    assert content[0] == {"type": "text", "text": ANALYSIS_PROMPT}
    assert content[1] == {"type": "image_url", "image_url": {"url": PNG_DATA_URL}}


async def test_analyze_returns_parsed_result(settings, mock_openai):
    result = await analyze_food_image(settings, PNG_DATA_URL)

    assert result == APPLE


async def test_single_attempt_on_failure(settings, mock_openai):
    mock_openai.chat.completions.create.side_effect = OpenAIError("API down")

    with pytest.raises(UpstreamFailure, match="API down"):
        await analyze_food_image(settings, PNG_DATA_URL)

    assert mock_openai.chat.completions.create.call_count == 1


async def test_custom_model_and_budget(mock_openai):
    settings = Settings(openai_api_key="k", vision_model="gpt-4o-mini", max_tokens=300)

    await analyze_food_image(settings, PNG_DATA_URL)

    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["max_tokens"] == 300


async def test_missing_key_surfaces_as_upstream_failure(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(UpstreamFailure):
        await analyze_food_image(Settings(openai_api_key=None), PNG_DATA_URL)


async def test_logs_image_prefix(settings, mock_openai, caplog):
    image = "data:image/jpeg;base64," + "A" * 500

    with caplog.at_level(logging.INFO, logger="knowyourfood.services.openai_client"):
        await analyze_food_image(settings, image)

    assert image[:100] in caplog.text
    assert image[:101] not in caplog.text


async def test_logs_raw_output_on_parse_failure(settings, mock_openai, caplog):
    mock_openai.chat.completions.create.return_value = completion("no idea, sorry")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(MalformedModelResponse):
            await analyze_food_image(settings, PNG_DATA_URL)

    assert "no idea, sorry" in caplog.text
