"""Render structured conversations into Harmony tokens."""

from __future__ import annotations

import json

from .config import PAYLOAD_SEPARATOR, TEXT_PREFIX, TOOL_PREFIX
from .models import DEFAULT_DELIMITERS, Conversation, Delimiters, TextChunk


def render_conversation(
    conversation: Conversation, delimiters: Delimiters | None = None
) -> list[str]:
    """Render a conversation into tokens the strict parser reads back losslessly."""
    delims = delimiters or DEFAULT_DELIMITERS
    tokens: list[str] = []

    for message in conversation.messages:
        tokens.append(delims.start + message.role)
        for chunk in message.content:
            tokens.append(delims.message)
            if isinstance(chunk, TextChunk):
                tokens.append(TEXT_PREFIX + chunk.channel + PAYLOAD_SEPARATOR + chunk.text)
            else:
                args = json.dumps(
                    chunk.call.arguments,
                    separators=(",", ":"),
                    ensure_ascii=False,
                    allow_nan=False,
                )
                tokens.append(
                    TOOL_PREFIX
                    + PAYLOAD_SEPARATOR.join((chunk.call.namespace, chunk.call.name, args))
                )
        tokens.append(delims.end)

    return tokens
