"""Cheap structural check for Harmony-formatted text."""

from __future__ import annotations

from typing import Any

from .config import CHANNEL_MARKER
from .models import DEFAULT_DELIMITERS, Delimiters


def is_harmony_format(text: Any = None, delimiters: Delimiters | None = None) -> bool:
    """Return True if text looks like (possibly partial) Harmony output.

    Requires a channel declaration plus a message or end marker. Headerless
    fragments such as ``<|channel|>final<|message|>...`` pass; bare role
    announcements without a channel do not. Non-string input returns False.
    """
    if not isinstance(text, str) or not text:
        return False

    delims = delimiters or DEFAULT_DELIMITERS
    has_start = delims.start in text
    has_channel = CHANNEL_MARKER in text
    has_message = delims.message in text
    has_end = delims.end in text
    return (has_start or has_channel) and has_channel and (has_message or has_end)
