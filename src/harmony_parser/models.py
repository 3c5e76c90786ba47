"""Data models for Harmony conversations and stream snapshots."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import CHANNEL_MARKER, END_MARKER, MESSAGE_MARKER, START_MARKER
from .errors import HarmonyError

Role = Literal["system", "developer", "user", "assistant", "tool"]
Channel = Literal["message", "reasoning", "tool", "function", "error"]

ROLES: tuple[str, ...] = get_args(Role)
CHANNELS: tuple[str, ...] = get_args(Channel)


class Delimiters(BaseModel):
    """Marker strings bounding a message: start (followed by the role), message, end."""

    model_config = ConfigDict(frozen=True)

    start: str = START_MARKER
    message: str = MESSAGE_MARKER
    end: str = END_MARKER

    @model_validator(mode="after")
    def _check_distinct(self) -> Delimiters:
        markers = (self.start, self.message, self.end)
        if not all(markers):
            raise ValueError("delimiters must be non-empty strings")
        if len(set(markers)) != len(markers):
            raise ValueError("delimiters must be mutually distinct")
        for marker in markers:
            if marker.startswith(CHANNEL_MARKER) or CHANNEL_MARKER.startswith(marker):
                raise ValueError(f"delimiter {marker!r} overlaps the channel marker")
        return self


DEFAULT_DELIMITERS = Delimiters()


class ToolCall(BaseModel):
    namespace: str
    name: str
    arguments: Any = None


class TextChunk(BaseModel):
    type: Literal["text"] = "text"
    channel: Channel
    text: str


class ToolCallChunk(BaseModel):
    type: Literal["tool_call"] = "tool_call"
    channel: Literal["tool"] = "tool"
    call: ToolCall


ContentChunk = Annotated[Union[TextChunk, ToolCallChunk], Field(discriminator="type")]


class Message(BaseModel):
    role: Role
    content: list[ContentChunk] = []

    @classmethod
    def from_role_and_content(
        cls,
        role: Role,
        content: str | TextChunk | ToolCallChunk | list[TextChunk | ToolCallChunk],
    ) -> Message:
        """Build a message from a plain string, a single chunk, or a list of chunks.

        A plain string becomes one text chunk on the ``message`` channel.
        """
        if isinstance(content, str):
            chunks = [TextChunk(channel="message", text=content)]
        elif isinstance(content, list):
            chunks = list(content)
        else:
            chunks = [content]
        return cls(role=role, content=chunks)


class Conversation(BaseModel):
    messages: list[Message] = []

    @classmethod
    def from_messages(cls, messages: list[Message]) -> Conversation:
        return cls(messages=list(messages))


class StreamSnapshot(BaseModel):
    is_complete: bool = False
    current_analysis: str = ""
    current_final: str = ""
    current_commentary: str = ""
    last_channel_detected: str | None = None
    buffer_content: str = ""


class ParseOutcome(BaseModel):
    """Tagged result of a non-throwing parse: ``value`` when ok, else ``error``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    value: Conversation | None = None
    error: HarmonyError | None = None
