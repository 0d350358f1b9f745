# knowyourfood/errors.py
from __future__ import annotations


class CaptureError(Exception):
    """Client-side pre-flight failure. Never reaches the bridge."""

    message = "Could not use this image"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidType(CaptureError):
    message = "Please select an image file"


class TooLarge(CaptureError):
    message = "Image size should be less than 5MB"


class AnalysisError(Exception):
    """Base for everything the analysis bridge can report."""


class MissingImage(AnalysisError):
    def __init__(self):
        super().__init__("No image provided")


class MalformedModelResponse(AnalysisError):
    """The model answered, but no usable JSON object could be read from it."""

    def __init__(self, raw: str, reason: str = "Failed to parse analysis response"):
        super().__init__(reason)
        self.raw = raw
        self.reason = reason


class UpstreamFailure(AnalysisError):
    """The model call itself failed (network, auth, quota, empty reply)."""
