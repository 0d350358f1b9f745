# knowyourfood/utils/data_url.py
from __future__ import annotations

import base64
from typing import Tuple


def to_data_url(raw: bytes, mime_type: str) -> str:
    """bytes -> data:<mime>;base64,<payload>"""
    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def split_data_url(data_url: str) -> Tuple[str, str]:
    """
    Split a data URL into (mime_type, base64 payload).
    data:image/jpeg;base64,/9j/4AAQSk... -> ("image/jpeg", "/9j/4AAQSk...")
    Anything without a data: header is treated as a bare payload with an empty type.
    """
    s = (data_url or "").strip()
    if not s.startswith("data:") or "," not in s:
        return "", s
    header, payload = s.split(",", 1)
    mime_type = header[len("data:"):].split(";", 1)[0].strip()
    return mime_type, payload.strip()


def preview(data_url: str, limit: int = 100) -> str:
    """First `limit` characters, for logs."""
    return (data_url or "")[:limit]
