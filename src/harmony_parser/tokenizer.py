"""Split raw Harmony completion strings into token units."""

from __future__ import annotations

from .models import DEFAULT_DELIMITERS, Delimiters


def _read_role(text: str, pos: int) -> int:
    """Return the index just past the run of lowercase ASCII letters at pos."""
    while pos < len(text) and "a" <= text[pos] <= "z":
        pos += 1
    return pos


def _next_delimiter_index(text: str, pos: int, delimiters: Delimiters) -> int:
    """Index of the earliest delimiter at or after pos, or len(text) if none."""
    hits = [
        idx
        for idx in (
            text.find(delimiters.start, pos),
            text.find(delimiters.message, pos),
            text.find(delimiters.end, pos),
        )
        if idx >= 0
    ]
    return min(hits) if hits else len(text)


def tokenize_completion_string(text: str, delimiters: Delimiters | None = None) -> list[str]:
    """Tokenize a completion string into start+role tokens, bare markers and payloads.

    Never fails: anything that is not a recognized marker (including unknown
    ``<|...|>`` sequences and channel declarations) becomes part of a payload token.

    >>> tokenize_completion_string("<|start|>user<|message|>Hello<|end|>")
    ['<|start|>user', '<|message|>', 'Hello', '<|end|>']
    """
    delims = delimiters or DEFAULT_DELIMITERS
    tokens: list[str] = []
    i = 0

    while i < len(text):
        if text.startswith(delims.start, i):
            j = _read_role(text, i + len(delims.start))
            tokens.append(text[i:j])
            i = j
            continue
        if text.startswith(delims.message, i):
            tokens.append(delims.message)
            i += len(delims.message)
            continue
        if text.startswith(delims.end, i):
            tokens.append(delims.end)
            i += len(delims.end)
            continue

        next_idx = _next_delimiter_index(text, i, delims)
        # next_idx > i here, since no delimiter starts at i
        tokens.append(text[i:next_idx])
        i = next_idx

    return tokens
