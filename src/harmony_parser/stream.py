"""Incremental extraction of channel text from a growing Harmony stream."""

from __future__ import annotations

import logging
import re

from .config import (
    CHANNEL_MARKER,
    END_MARKER,
    MESSAGE_MARKER,
    START_MARKER,
    STREAM_CHANNELS,
)
from .extract import clean_channel_text
from .models import StreamSnapshot

logger = logging.getLogger(__name__)

_CHANNEL_NAME_RE = re.compile(re.escape(CHANNEL_MARKER) + r"([^<\s]+)")


def _channel_body_re(channel: str) -> re.Pattern[str]:
    """Body after ``<|channel|>{channel}<|message|>``, up to the next channel, end, or EOS."""
    return re.compile(
        re.escape(CHANNEL_MARKER + channel + MESSAGE_MARKER)
        + r"(.*?)(?:(?="
        + re.escape(CHANNEL_MARKER)
        + r")|"
        + re.escape(END_MARKER)
        + r"|\Z)",
        re.DOTALL,
    )


def _channel_bodies(window: str, channel: str) -> list[str]:
    bodies = (clean_channel_text(m.group(1)) for m in _channel_body_re(channel).finditer(window))
    return [body for body in bodies if body]


def _trailing_body(window: str) -> str:
    """Text after the last message marker, if no end marker has closed it yet."""
    idx = window.rfind(MESSAGE_MARKER)
    if idx < 0:
        return ""
    after = window[idx + len(MESSAGE_MARKER):]
    if END_MARKER in after:
        return ""
    return clean_channel_text(after)


class HarmonyStreamParser:
    """Accumulates streamed chunks and recomputes channel snapshots.

    Every call to add_content re-derives the whole snapshot from the raw
    buffer, so chunk boundaries (even inside a marker) never matter. This
    never raises; malformed input degrades to empty or partial text.

    Not safe for concurrent use; give each stream its own instance, and call
    reset() between turns to bound the buffer.
    """

    def __init__(self):
        self._buffer = ""
        self._current_channel: str | None = None

    def add_content(self, content: str) -> StreamSnapshot:
        """Append a chunk and return the snapshot for the whole buffer."""
        self._buffer += content
        return self._parse_buffer()

    def reset(self) -> None:
        self._buffer = ""
        self._current_channel = None

    def get_buffer(self) -> str:
        return self._buffer

    @property
    def current_channel(self) -> str | None:
        return self._current_channel

    def _parse_buffer(self) -> StreamSnapshot:
        buffer = self._buffer

        if not any(m in buffer for m in (START_MARKER, CHANNEL_MARKER, MESSAGE_MARKER)):
            return StreamSnapshot(current_final=buffer, buffer_content=buffer)

        self._detect_current_channel()

        # Only the last message (complete or in progress) contributes text
        window_start = max(buffer.rfind(START_MARKER), 0)
        end_idx = buffer.find(END_MARKER, window_start)
        window_end = end_idx + len(END_MARKER) if end_idx >= 0 else len(buffer)
        window = buffer[window_start:window_end]

        texts = {channel: "\n".join(_channel_bodies(window, channel)) for channel in STREAM_CHANNELS}
        active = self._current_channel

        if active in texts:
            trailing = _trailing_body(window)
            if trailing:
                texts[active] = f"{texts[active]}\n{trailing}" if texts[active] else trailing

            # The latest segment of the active channel replaces what was accumulated
            bodies = _channel_bodies(window, active)
            if bodies:
                texts[active] = bodies[-1]

        start_count = buffer.count(START_MARKER)
        is_complete = start_count > 0 and start_count == buffer.count(END_MARKER)

        logger.debug(
            "Stream snapshot: %d chars buffered, channel=%s, complete=%s",
            len(buffer),
            active,
            is_complete,
        )
        return StreamSnapshot(
            is_complete=is_complete,
            current_analysis=texts["analysis"],
            current_final=texts["final"],
            current_commentary=texts["commentary"],
            last_channel_detected=active,
            buffer_content=buffer,
        )

    def _detect_current_channel(self) -> None:
        names = _CHANNEL_NAME_RE.findall(self._buffer)
        if names:
            self._current_channel = names[-1]
