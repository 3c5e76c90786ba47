"""Unit tests for the one-shot channel extraction helpers."""

from harmony_parser import (
    extract_commentary_content,
    extract_final_content,
    extract_reasoning_content,
)
from harmony_parser.extract import clean_channel_text


class TestCleanChannelText:
    def test_strips_complete_markers(self):
        assert clean_channel_text("a<|message|>b<|end|>") == "ab"

    def test_strips_trailing_partial_marker(self):
        assert clean_channel_text("Thinking<|ch") == "Thinking"
        assert clean_channel_text("Thinking<|") == "Thinking"

    def test_keeps_unknown_markers(self):
        assert clean_channel_text(" Text with <fake> <|x|> ") == "Text with <fake> <|x|>"

    def test_trims_whitespace(self):
        assert clean_channel_text("\n  Spaced content  \n") == "Spaced content"


class TestExtractReasoningContent:
    def test_analysis(self):
        text = "<|start|>assistant<|channel|>analysis<|message|>Let me think about this<|end|>"
        assert extract_reasoning_content(text) == "Let me think about this"

    def test_stops_at_next_channel(self):
        text = (
            "<|start|>assistant"
            "<|channel|>analysis<|message|>First, I need to understand..."
            "<|channel|>final<|message|>The answer is 42"
            "<|end|>"
        )
        assert extract_reasoning_content(text) == "First, I need to understand..."

    def test_partial_stream(self):
        text = "<|start|>assistant<|channel|>analysis<|message|>Thinking about"
        assert extract_reasoning_content(text) == "Thinking about"

    def test_uses_last_occurrence(self):
        text = (
            "<|start|>assistant<|channel|>analysis<|message|>First thought<|end|>"
            "<|start|>assistant<|channel|>analysis<|message|>Updated thought"
        )
        assert extract_reasoning_content(text) == "Updated thought"

    def test_multiple_blocks_in_one_message(self):
        text = (
            "<|start|>assistant"
            "<|channel|>analysis<|message|>First analysis"
            "<|channel|>final<|message|>Answer"
            "<|channel|>analysis<|message|>Second analysis"
            "<|end|>"
        )
        assert extract_reasoning_content(text) == "Second analysis"

    def test_stops_at_start_marker(self):
        text = "<|start|>assistant<|channel|>analysis<|message|>Thinking<|start|>about<|end|>"
        assert extract_reasoning_content(text) == "Thinking"

    def test_removes_partial_marker_at_end(self):
        text = "<|start|>assistant<|channel|>analysis<|message|>Thinking<|ch"
        assert extract_reasoning_content(text) == "Thinking"

    def test_plain_text(self):
        assert extract_reasoning_content("Plain text") == ""

    def test_no_analysis_channel(self):
        text = "<|start|>assistant<|channel|>final<|message|>Just the answer<|end|>"
        assert extract_reasoning_content(text) == ""

    def test_channel_without_message_marker(self):
        assert extract_reasoning_content("<|channel|>final<|message|>x<|channel|>analysis") == ""


class TestExtractFinalContent:
    def test_final(self):
        text = "<|start|>assistant<|channel|>final<|message|>The answer is 42<|end|>"
        assert extract_final_content(text) == "The answer is 42"

    def test_prefers_final_over_commentary(self):
        text = (
            "<|start|>assistant"
            "<|channel|>commentary<|message|>Some commentary"
            "<|channel|>final<|message|>The final answer"
            "<|end|>"
        )
        assert extract_final_content(text) == "The final answer"

    def test_falls_back_to_commentary(self):
        text = "<|start|>assistant<|channel|>commentary<|message|>Commentary text<|end|>"
        assert extract_final_content(text) == "Commentary text"

    def test_plain_text_returned_verbatim(self):
        text = "  Plain text answer\n"
        assert extract_final_content(text) == text

    def test_no_final_or_commentary(self):
        text = "<|start|>assistant<|channel|>analysis<|message|>Just thinking<|end|>"
        assert extract_final_content(text) == ""

    def test_streaming(self):
        assert extract_final_content("<|start|>assistant<|channel|>final<|message|>The answer is") == (
            "The answer is"
        )

    def test_last_occurrence(self):
        text = (
            "<|start|>assistant<|channel|>final<|message|>First answer<|end|>"
            "<|start|>assistant<|channel|>final<|message|>Updated answer"
        )
        assert extract_final_content(text) == "Updated answer"

    def test_embedded_markers(self):
        text = "<|start|>assistant<|channel|>final<|message|>Answer<|channel|>with<|message|>embedded<|end|>"
        assert extract_final_content(text) == "Answer"

    def test_empty_channel(self):
        assert extract_final_content("<|start|>assistant<|channel|>final<|message|><|end|>") == ""

    def test_corrupted_token_between_channels(self):
        text = (
            "<|start|>assistant"
            "<|channel|>analysis<|message|>Good analysis"
            "<|CORRUPTED_TOKEN|>"
            "<|channel|>final<|message|>Still got final content"
            "<|end|>"
        )
        assert "Good analysis" in extract_reasoning_content(text)
        assert extract_final_content(text) == "Still got final content"


class TestExtractCommentaryContent:
    def test_commentary(self):
        text = (
            "<|start|>assistant"
            "<|channel|>commentary<|message|>This is interesting because..."
            "<|channel|>final<|message|>42"
            "<|end|>"
        )
        assert extract_commentary_content(text) == "This is interesting because..."

    def test_plain_text(self):
        assert extract_commentary_content("Plain text") == ""
