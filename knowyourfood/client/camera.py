# knowyourfood/client/camera.py
from __future__ import annotations

import logging
from typing import Optional

import cv2

from knowyourfood.client.capture import CapturedImage
from knowyourfood.utils.data_url import to_data_url

logger = logging.getLogger(__name__)

IDEAL_WIDTH = 1920
IDEAL_HEIGHT = 1080
JPEG_MIME = "image/jpeg"


class CameraError(RuntimeError):
    pass


class Camera:
    """
    Live feed from one OpenCV device. Pick the rear camera through the device
    index (CAMERA_DEVICE); the resolution is a request, the driver may
    deliver something smaller.
    """

    def __init__(self, device: int = 0):
        self.device = device
        self._cap: Optional[cv2.VideoCapture] = None

    def open(self) -> "Camera":
        cap = cv2.VideoCapture(self.device)
        if not cap.isOpened():
            cap.release()
            raise CameraError(f"Could not open camera {self.device}")
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, IDEAL_WIDTH)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, IDEAL_HEIGHT)
        self._cap = cap
        logger.info("camera %s opened", self.device)
        return self

    def snapshot(self) -> CapturedImage:
        """Grab one still frame as a JPEG data URL."""
        if self._cap is None:
            raise CameraError("Camera is not open")
        ok, frame = self._cap.read()
        if not ok or frame is None:
            raise CameraError("Could not read a frame from the camera")
        ok, buf = cv2.imencode(".jpg", frame)
        if not ok:
            raise CameraError("Could not encode the frame as JPEG")
        return CapturedImage(to_data_url(buf.tobytes(), JPEG_MIME))

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def __enter__(self) -> "Camera":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()
