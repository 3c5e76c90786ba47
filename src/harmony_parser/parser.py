"""Strict parser turning Harmony token streams into structured conversations."""

from __future__ import annotations

import json
import logging

from .config import CHANNEL_MARKER, PAYLOAD_SEPARATOR, TEXT_PREFIX, TOOL_PREFIX
from .errors import (
    ContentOutsideMessageError,
    HarmonyError,
    InvalidChannelError,
    InvalidRoleError,
    InvalidToolArgsError,
    MalformedToolError,
    MissingChannelError,
    UnknownTokenPrefixError,
)
from .models import (
    CHANNELS,
    DEFAULT_DELIMITERS,
    ROLES,
    Conversation,
    Delimiters,
    Message,
    ParseOutcome,
    TextChunk,
    ToolCall,
    ToolCallChunk,
)
from .tokenizer import tokenize_completion_string

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    """NaN and Infinity are not JSON."""
    raise ValueError(f"Invalid JSON constant: {name}")


class TokenParser:
    """Incremental parser fed one token at a time.

    At most one message is open at any point; a new start token closes the
    previous one. The first grammar violation raises a HarmonyError subclass
    and the parser should then be discarded.
    """

    def __init__(self, delimiters: Delimiters | None = None):
        self.delimiters = delimiters or DEFAULT_DELIMITERS
        self.messages: list[Message] = []
        self.current: Message | None = None
        # Bookkeeping for channel/message sequences emitted by streaming output
        self.last_streaming_channel: str | None = None
        self.expecting_payload = False

    def push(self, token: str) -> None:
        delims = self.delimiters

        if token.startswith(delims.start):
            self._open_message(token, token[len(delims.start):])
            return

        if token.startswith(CHANNEL_MARKER):
            channel_name = token[len(CHANNEL_MARKER):]
            if channel_name:
                self.last_streaming_channel = channel_name
            return

        if token == delims.message:
            self.expecting_payload = True
            return

        if token == delims.end:
            self._close_message()
            self._clear_bookkeeping()
            return

        if self.current is None:
            raise ContentOutsideMessageError(
                f"Content outside of a message: {token}", {"token": token}
            )

        if token.startswith(TEXT_PREFIX):
            self.current.content.append(self._parse_text(token))
            self.expecting_payload = False
            return

        if token.startswith(TOOL_PREFIX):
            self.current.content.append(self._parse_tool(token))
            self.expecting_payload = False
            return

        # Raw payload right after <|channel|>NAME<|message|> is dropped
        if self.expecting_payload and self.last_streaming_channel is not None:
            logger.debug(
                "Ignoring raw payload on streaming channel '%s'", self.last_streaming_channel
            )
            self.expecting_payload = False
            return

        raise UnknownTokenPrefixError(f"Unknown token prefix: {token}", {"token": token})

    def finish(self) -> Conversation:
        """Close any open message and return everything parsed so far."""
        self._close_message()
        return Conversation(messages=list(self.messages))

    def _open_message(self, token: str, role: str) -> None:
        if role not in ROLES:
            raise InvalidRoleError(f"Unknown role: {role}", {"token": token, "role": role})
        if self.current is not None:
            logger.debug("Start token implicitly closes open '%s' message", self.current.role)
        self._close_message()
        self.current = Message(role=role)
        self._clear_bookkeeping()

    def _close_message(self) -> None:
        if self.current is not None:
            self.messages.append(self.current)
            self.current = None

    def _clear_bookkeeping(self) -> None:
        self.last_streaming_channel = None
        self.expecting_payload = False

    @staticmethod
    def _parse_text(token: str) -> TextChunk:
        channel, sep, text = token[len(TEXT_PREFIX):].partition(PAYLOAD_SEPARATOR)
        if not sep:
            raise MissingChannelError("Missing channel in text token", {"token": token})
        if channel not in CHANNELS:
            raise InvalidChannelError(
                f"Unknown channel: {channel}", {"token": token, "channel": channel}
            )
        return TextChunk(channel=channel, text=text)

    @staticmethod
    def _parse_tool(token: str) -> ToolCallChunk:
        parts = token[len(TOOL_PREFIX):].split(PAYLOAD_SEPARATOR, 2)
        if len(parts) < 3:
            raise MalformedToolError(
                "Malformed tool token: missing separators", {"token": token}
            )
        namespace, name, args_raw = parts
        try:
            arguments = json.loads(args_raw, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise InvalidToolArgsError(
                "Invalid JSON args", {"token": token, "args": args_raw}
            ) from exc
        return ToolCallChunk(call=ToolCall(namespace=namespace, name=name, arguments=arguments))


def parse_tokens(tokens: list[str], delimiters: Delimiters | None = None) -> Conversation:
    """Parse a full token list into a Conversation, raising on the first error."""
    parser = TokenParser(delimiters)
    for token in tokens:
        parser.push(token)
    return parser.finish()


def try_parse_tokens(tokens: list[str], delimiters: Delimiters | None = None) -> ParseOutcome:
    """Same as parse_tokens, but report HarmonyErrors in the returned outcome."""
    try:
        return ParseOutcome(ok=True, value=parse_tokens(tokens, delimiters))
    except HarmonyError as err:
        logger.debug("Token parse failed [%s]: %s", err.code, err)
        return ParseOutcome(ok=False, error=err)


def parse_conversation_from_string(
    text: str, delimiters: Delimiters | None = None
) -> Conversation:
    """Tokenize a raw completion string and parse it strictly."""
    return parse_tokens(tokenize_completion_string(text, delimiters), delimiters)
