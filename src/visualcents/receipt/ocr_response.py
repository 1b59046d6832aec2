"""Helpers for turning OCR service payloads into plain text."""

from __future__ import annotations

import json
from typing import Any

from visualcents.exceptions import OCRResponseError


def _load_payload(payload: bytes | str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(payload, dict):
        return payload

    try:
        obj = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise OCRResponseError(f"OCR response is not valid JSON: {exc}") from exc

    if not isinstance(obj, dict):
        raise OCRResponseError("OCR response JSON was not an object")
    return obj


def decode_ocr_response(payload: bytes | str | dict[str, Any]) -> str:
    """Extract the recognized text from an advanced-OCR response.

    Word-level results (``prism_wordsInfo``) are preferred and joined with
    single spaces; otherwise the flat ``content`` string is used.

    Args:
        payload: Raw response body or an already decoded JSON object.

    Returns:
        The recognized text, possibly empty.

    Raises:
        OCRResponseError: If the payload is not a JSON object.
    """

    obj = _load_payload(payload)

    words = obj.get("prism_wordsInfo")
    if isinstance(words, list):
        return " ".join(
            w["word"] for w in words if isinstance(w, dict) and isinstance(w.get("word"), str)
        )

    content = obj.get("content")
    if isinstance(content, str):
        return content

    return ""
