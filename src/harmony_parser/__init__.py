"""Strict and streaming parsers for the Harmony chat format."""

from .detect import is_harmony_format
from .encoding import HarmonyEncoding, HarmonyEncodingName, load_harmony_encoding
from .errors import (
    ContentOutsideMessageError,
    HarmonyError,
    InvalidChannelError,
    InvalidRoleError,
    InvalidToolArgsError,
    MalformedToolError,
    MissingChannelError,
    UnknownEncodingError,
    UnknownTokenPrefixError,
)
from .extract import extract_commentary_content, extract_final_content, extract_reasoning_content
from .models import (
    CHANNELS,
    DEFAULT_DELIMITERS,
    ROLES,
    Channel,
    ContentChunk,
    Conversation,
    Delimiters,
    Message,
    ParseOutcome,
    Role,
    StreamSnapshot,
    TextChunk,
    ToolCall,
    ToolCallChunk,
)
from .parser import TokenParser, parse_conversation_from_string, parse_tokens, try_parse_tokens
from .render import render_conversation
from .stream import HarmonyStreamParser
from .tokenizer import tokenize_completion_string

__version__ = "0.1.0"

__all__ = [
    "CHANNELS",
    "DEFAULT_DELIMITERS",
    "ROLES",
    "Channel",
    "ContentChunk",
    "ContentOutsideMessageError",
    "Conversation",
    "Delimiters",
    "HarmonyEncoding",
    "HarmonyEncodingName",
    "HarmonyError",
    "HarmonyStreamParser",
    "InvalidChannelError",
    "InvalidRoleError",
    "InvalidToolArgsError",
    "MalformedToolError",
    "Message",
    "MissingChannelError",
    "ParseOutcome",
    "Role",
    "StreamSnapshot",
    "TextChunk",
    "TokenParser",
    "ToolCall",
    "ToolCallChunk",
    "UnknownEncodingError",
    "UnknownTokenPrefixError",
    "extract_commentary_content",
    "extract_final_content",
    "extract_reasoning_content",
    "is_harmony_format",
    "load_harmony_encoding",
    "parse_conversation_from_string",
    "parse_tokens",
    "render_conversation",
    "tokenize_completion_string",
    "try_parse_tokens",
]
