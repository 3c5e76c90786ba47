"""Central configuration for markers and constants."""

import os

# Default delimiters, overridable per call through models.Delimiters
START_MARKER = "<|start|>"
MESSAGE_MARKER = "<|message|>"
END_MARKER = "<|end|>"

# Channel declarations always use this marker, whatever the delimiters
CHANNEL_MARKER = "<|channel|>"

# Structured payload grammar
TEXT_PREFIX = "text:"
TOOL_PREFIX = "tool:"
PAYLOAD_SEPARATOR = ":"

# Channels tracked by the streaming extractor
STREAM_CHANNELS = ("analysis", "final", "commentary")

# Encodings
DEFAULT_ENCODING = "HARMONY_GPT_OSS"

# Logging level for the CLI, override with HARMONY_LOG_LEVEL env var
LOG_LEVEL = os.environ.get("HARMONY_LOG_LEVEL", "WARNING").upper()

# Characters per chunk when the CLI simulates a stream, override with
# HARMONY_STREAM_CHUNK_SIZE env var (read by the CLI option)
CHUNK_SIZE_ENVVAR = "HARMONY_STREAM_CHUNK_SIZE"
DEFAULT_CHUNK_SIZE = 16
