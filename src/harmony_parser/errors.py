"""Harmony exception hierarchy.

Every error raised by the strict parser or the encoding registry is a
HarmonyError carrying a machine-readable ``code`` and a ``details`` dict
with the offending token and kind-specific context.

Usage:
    from harmony_parser.errors import HarmonyError, InvalidRoleError

    try:
        conversation = parse_tokens(tokens)
    except InvalidRoleError as e:
        logger.warning("Bad role %s in %s", e.details["role"], e.details["token"])
    except HarmonyError as e:
        logger.warning("Parse failed [%s]: %s", e.code, e)
"""

from __future__ import annotations

from typing import Any


class HarmonyError(Exception):
    """Base exception for all Harmony parsing errors."""

    code = "HARMONY_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.details = details or {}
        super().__init__(message)

    @property
    def token(self) -> str | None:
        return self.details.get("token")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={str(self)!r})"


class InvalidRoleError(HarmonyError):
    """A start token names a role outside the supported set."""

    code = "INVALID_ROLE"


class InvalidChannelError(HarmonyError):
    """A text payload names a channel outside the supported set."""

    code = "INVALID_CHANNEL"


class MissingChannelError(HarmonyError):
    code = "MISSING_CHANNEL"


class MalformedToolError(HarmonyError):
    code = "MALFORMED_TOOL"


class InvalidToolArgsError(HarmonyError):
    """The argument segment of a tool payload is not valid JSON."""

    code = "INVALID_TOOL_ARGS"


class ContentOutsideMessageError(HarmonyError):
    code = "CONTENT_OUTSIDE_MESSAGE"


class UnknownTokenPrefixError(HarmonyError):
    code = "UNKNOWN_TOKEN"


class UnknownEncodingError(HarmonyError):
    code = "UNKNOWN_ENCODING"
