"""Shared fixtures for harmony_parser tests."""

import pytest

from harmony_parser import (
    Conversation,
    Delimiters,
    HarmonyStreamParser,
    Message,
    TextChunk,
    ToolCall,
    ToolCallChunk,
)


@pytest.fixture()
def stream_parser():
    return HarmonyStreamParser()


@pytest.fixture()
def custom_delimiters():
    return Delimiters(start="<<S>>", message="<<M>>", end="<<E>>")


@pytest.fixture()
def tool_conversation():
    """A conversation mixing plain, reasoning, tool call and tool response messages."""
    return Conversation.from_messages(
        [
            Message.from_role_and_content("user", "Calculate 15 * 23 for me"),
            Message.from_role_and_content(
                "assistant",
                [
                    TextChunk(channel="reasoning", text="I'll use the calculator tool"),
                    ToolCallChunk(
                        call=ToolCall(
                            namespace="calculator", name="multiply", arguments={"x": 15, "y": 23}
                        )
                    ),
                ],
            ),
            Message.from_role_and_content("tool", "345"),
            Message.from_role_and_content("assistant", "15 × 23 = 345"),
        ]
    )
