# knowyourfood/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_VISION_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 500
DEFAULT_ALLOWED_ORIGINS = "http://localhost:3000"
DEFAULT_ANALYZE_URL = "http://localhost:8000/api/analyze"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a valid integer") from None


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, resolved once at startup."""

    openai_api_key: Optional[str]
    vision_model: str = DEFAULT_VISION_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    log_level: str = "INFO"
    allowed_origins: Tuple[str, ...] = (DEFAULT_ALLOWED_ORIGINS,)
    analyze_url: str = DEFAULT_ANALYZE_URL
    camera_device: int = 0

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        # The key is not checked here: a missing key shows up as the
        # provider's authentication error on the first analysis.
        api_key = os.getenv("OPENAI_API_KEY") or None
        raw_origins = os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
        origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())

        max_tokens = _int_env("VISION_MAX_TOKENS", DEFAULT_MAX_TOKENS)
        if max_tokens <= 0:
            raise ValueError("VISION_MAX_TOKENS must be greater than 0")

        return cls(
            openai_api_key=api_key,
            vision_model=os.getenv("VISION_MODEL") or DEFAULT_VISION_MODEL,
            max_tokens=max_tokens,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            allowed_origins=origins,
            analyze_url=os.getenv("ANALYZE_URL") or DEFAULT_ANALYZE_URL,
            camera_device=_int_env("CAMERA_DEVICE", 0),
        )
