from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from knowyourfood.config import Settings
from knowyourfood.main import create_app

PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"

APPLE_REPLY = (
    "```json\n"
    '{"foodName":"Apple","calories":95,"nutrition":{"carbs":25,"protein":0,"fat":0},'
    '"healthiness":"good","suggestions":["Eat the skin for fiber"]}\n'
    "```"
)

APPLE = {
    "foodName": "Apple",
    "calories": 95,
    "nutrition": {"carbs": 25, "protein": 0, "fat": 0},
    "healthiness": "good",
    "suggestions": ["Eat the skin for fiber"],
}


def completion(content):
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture
def settings():
    return Settings(openai_api_key="test-key", allowed_origins=("http://localhost:3000",))


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def mock_openai():
    """Patches the SDK class; set `.reply` / `.create.side_effect` per test."""
    with patch("knowyourfood.services.openai_client.AsyncOpenAI") as mock_cls:
        mock_sdk = AsyncMock()
        mock_sdk.chat.completions.create = AsyncMock(return_value=completion(APPLE_REPLY))
        mock_cls.return_value = mock_sdk
        mock_sdk.cls = mock_cls
        yield mock_sdk
