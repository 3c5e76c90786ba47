"""Registry of supported Harmony encodings."""

from __future__ import annotations

import logging
from enum import Enum

from .config import DEFAULT_ENCODING
from .errors import UnknownEncodingError
from .models import Conversation, Role
from .parser import parse_tokens
from .render import render_conversation

logger = logging.getLogger(__name__)


class HarmonyEncodingName(str, Enum):
    HARMONY_GPT_OSS = DEFAULT_ENCODING


class HarmonyEncoding:
    """Render/parse pair for one encoding profile.

    The ``role`` arguments are accepted for API compatibility and do not change the output.
    """

    def __init__(self, name: str):
        self.name = name

    def render_conversation_for_completion(
        self, conversation: Conversation, role: Role | None = None
    ) -> list[str]:
        return render_conversation(conversation)

    def parse_messages_from_completion_tokens(
        self, tokens: list[str], role: Role | None = None
    ) -> Conversation:
        return parse_tokens(tokens)

    def __repr__(self) -> str:
        return f"HarmonyEncoding({self.name!r})"


def load_harmony_encoding(name: str | HarmonyEncodingName = DEFAULT_ENCODING) -> HarmonyEncoding:
    """Return the encoding registered under name.

    Raises UnknownEncodingError for anything but HARMONY_GPT_OSS.
    """
    key = name.value if isinstance(name, HarmonyEncodingName) else name
    try:
        encoding_name = HarmonyEncodingName(key)
    except ValueError:
        raise UnknownEncodingError(f"Unknown encoding: {key}", {"name": key}) from None

    logger.debug("Loaded encoding %s", encoding_name.value)
    return HarmonyEncoding(encoding_name.value)
