# knowyourfood/client/session.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import httpx
from pydantic import ValidationError

from knowyourfood.client.camera import Camera
from knowyourfood.client.capture import CapturedImage, load_image_file
from knowyourfood.config import DEFAULT_ANALYZE_URL
from knowyourfood.errors import CaptureError
from knowyourfood.models import AnalysisResult

logger = logging.getLogger(__name__)

MSG_ANALYZE_FAILED = "Failed to analyze image"
MSG_TRY_AGAIN = "Failed to analyze the image. Please try again."


class State(str, Enum):
    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    ANALYZING = "analyzing"
    RESULT_READY = "result_ready"
    ERROR = "error"


class AnalyzeFailed(Exception):
    pass


class CaptureSession:
    """
    One user's capture -> analyze -> show loop.

    Every capture bumps a generation counter: a response that comes back for
    an older capture is dropped. While a request is in flight the analyze
    trigger does nothing.
    """

    def __init__(self, analyze_url: str = DEFAULT_ANALYZE_URL, http: Optional[httpx.AsyncClient] = None):
        self.analyze_url = analyze_url
        self._http = http
        self.image: Optional[CapturedImage] = None
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self._generation = 0
        self._in_flight: Optional[int] = None

    # --------------------------
    # state
    # --------------------------
    @property
    def analyzing(self) -> bool:
        return self._in_flight is not None

    @property
    def can_analyze(self) -> bool:
        return self.image is not None and not self.analyzing

    @property
    def state(self) -> State:
        if self._in_flight is not None and self._in_flight == self._generation:
            return State.ANALYZING
        if self.error:
            return State.ERROR
        if self.result is not None:
            return State.RESULT_READY
        if self.image is not None:
            return State.IMAGE_SELECTED
        return State.IDLE

    # --------------------------
    # capture
    # --------------------------
    def accept(self, image: CapturedImage) -> None:
        self._generation += 1
        self.image = image
        self.result = None
        self.error = None

    async def select_file(self, path: str) -> bool:
        try:
            image = await load_image_file(path)
        except CaptureError as e:
            self.error = str(e)
            return False
        self.accept(image)
        return True

    def capture_from_camera(self, camera: Camera) -> None:
        self.accept(camera.snapshot())

    # --------------------------
    # analyze
    # --------------------------
    async def analyze(self) -> bool:
        """Returns True when a fresh result was stored."""
        if not self.can_analyze:
            return False

        generation = self._generation
        image = self.image
        self._in_flight = generation
        self.error = None
        try:
            result = await self._request(image)
            failure = None
        except AnalyzeFailed as e:
            result, failure = None, str(e)
        finally:
            self._in_flight = None

        if generation != self._generation:
            logger.info("dropping analysis for a superseded capture")
            return False
        if failure is not None:
            self.error = failure
            return False
        self.result = result
        return True

    async def _request(self, image: CapturedImage) -> AnalysisResult:
        try:
            if self._http is not None:
                resp = await self._http.post(self.analyze_url, json={"image": image.data_url})
            else:
                # no client timeout: the bridge call takes as long as the model does
                async with httpx.AsyncClient(timeout=None) as http:
                    resp = await http.post(self.analyze_url, json={"image": image.data_url})
        except httpx.HTTPError as e:
            logger.error("error analyzing image: %s", e)
            raise AnalyzeFailed(str(e) or MSG_TRY_AGAIN) from e

        if resp.is_error:
            raise AnalyzeFailed(_error_message(resp))
        try:
            return AnalysisResult.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            logger.error("unexpected analysis payload: %s", e)
            raise AnalyzeFailed(MSG_TRY_AGAIN) from e


def _error_message(resp: httpx.Response) -> str:
    if "application/json" not in resp.headers.get("content-type", ""):
        return MSG_ANALYZE_FAILED
    try:
        body = resp.json()
    except ValueError:
        return MSG_ANALYZE_FAILED
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return MSG_ANALYZE_FAILED
