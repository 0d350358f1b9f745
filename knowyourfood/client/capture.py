# knowyourfood/client/capture.py
from __future__ import annotations

import asyncio
import mimetypes
import os
from dataclasses import dataclass

from knowyourfood.errors import CaptureError, InvalidType, TooLarge
from knowyourfood.utils.data_url import split_data_url, to_data_url

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5 MiB


@dataclass(frozen=True)
class CapturedImage:
    data_url: str

    @property
    def mime_type(self) -> str:
        return split_data_url(self.data_url)[0]


def guess_mime_type(path: str) -> str:
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or ""


def check_image_file(path: str) -> str:
    """
    Pre-flight checks for a picked file, in the same order a browser upload
    runs them: type first, then size. Returns the MIME type.
    """
    mime_type = guess_mime_type(path)
    if not mime_type.startswith("image/"):
        raise InvalidType()
    if os.path.getsize(path) > MAX_IMAGE_BYTES:
        raise TooLarge()
    return mime_type


def _read(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


async def load_image_file(path: str) -> CapturedImage:
    try:
        mime_type = check_image_file(path)
        raw = await asyncio.to_thread(_read, path)
    except OSError as e:
        raise CaptureError(f"Could not read the selected file: {e.strerror or e}") from e
    return CapturedImage(to_data_url(raw, mime_type))
