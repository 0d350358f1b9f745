# knowyourfood/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from knowyourfood.config import Settings
from knowyourfood.routers import analyze

LOG_FORMAT = "%(asctime)s %(levelname)s :: %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Know Your Food", version="1.0.0")
    app.state.settings = settings

    # --------------------------
    # CORS
    # --------------------------
    logger.info("[CORS] allowed origins=%s", list(settings.allowed_origins))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins) or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    # --------------------------
    # Unhandled errors -> JSON 500
    # --------------------------
    @app.middleware("http")
    async def json_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("middleware_unhandled %s", request.url.path)
            return JSONResponse(status_code=500, content={"error": "internal error", "details": str(e)})

    # --------------------------
    # Health check
    # --------------------------
    @app.get("/")
    async def root():
        return {"status": "ok", "service": "know-your-food"}

    app.include_router(analyze.router)
    return app
