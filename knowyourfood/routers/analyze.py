# knowyourfood/routers/analyze.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from knowyourfood.config import Settings
from knowyourfood.errors import MalformedModelResponse, MissingImage
from knowyourfood.services.openai_client import analyze_food_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


def _image_from_body(data: Any) -> str:
    image = data.get("image") if isinstance(data, dict) else None
    if not isinstance(image, str) or not image.strip():
        raise MissingImage()
    return image


@router.get("/analyze/ping")
async def ping():
    return {"ok": True, "route": "/api/analyze"}


@router.post("/analyze")
async def analyze(request: Request) -> JSONResponse:
    settings: Settings = request.app.state.settings

    try:
        data = await request.json()
        image = _image_from_body(data)
        result = await analyze_food_image(settings, image)
        return JSONResponse(result, status_code=200)

    except MissingImage:
        logger.error("no image provided in request body")
        return JSONResponse({"error": "No image provided"}, status_code=400)

    except MalformedModelResponse as e:
        return JSONResponse(
            {"error": "Failed to parse analysis response", "raw": e.raw},
            status_code=500,
        )

    except Exception as e:
        logger.exception("error analyzing food")
        return JSONResponse(
            {"error": "Failed to analyze food image", "details": str(e)},
            status_code=500,
        )
