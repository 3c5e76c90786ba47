"""Best-effort channel extraction from whole Harmony strings."""

from __future__ import annotations

import re

from .config import CHANNEL_MARKER, END_MARKER, MESSAGE_MARKER, START_MARKER
from .detect import is_harmony_format

# Complete markers that slipped into a body
_MARKER_RE = re.compile(r"<\|(?:start|message|end|channel)\|>")
# Cut-off marker at the very end of a body, e.g. "<|", "<|ch"
_PARTIAL_MARKER_RE = re.compile(r"<\|[a-zA-Z]*\Z")


def clean_channel_text(text: str) -> str:
    """Strip embedded markers and a trailing partial marker, then trim."""
    text = _MARKER_RE.sub("", text)
    text = _PARTIAL_MARKER_RE.sub("", text)
    return text.strip()


def _extract_last_channel(text: str, channel: str) -> str:
    """Body of the last ``<|channel|>{channel}`` declaration in text."""
    idx_channel = text.rfind(CHANNEL_MARKER + channel)
    if idx_channel < 0:
        return ""
    idx_message = text.find(MESSAGE_MARKER, idx_channel)
    if idx_message < 0:
        return ""

    start = idx_message + len(MESSAGE_MARKER)
    end = len(text)
    for marker in (END_MARKER, START_MARKER, CHANNEL_MARKER):
        idx = text.find(marker, start)
        if idx >= 0:
            end = min(end, idx)
    return clean_channel_text(text[start:end])


def extract_reasoning_content(text: str) -> str:
    """Latest ``analysis`` text, or "" for non-Harmony input."""
    if not is_harmony_format(text):
        return ""
    return _extract_last_channel(text, "analysis")


def extract_final_content(text: str) -> str:
    """Latest ``final`` text, falling back to ``commentary``.

    Non-Harmony input is returned unchanged, so plain completions pass through.
    """
    if not is_harmony_format(text):
        return text
    final_text = _extract_last_channel(text, "final")
    if final_text:
        return final_text
    return _extract_last_channel(text, "commentary")


def extract_commentary_content(text: str) -> str:
    """Latest ``commentary`` text, or "" for non-Harmony input."""
    if not is_harmony_format(text):
        return ""
    return _extract_last_channel(text, "commentary")
