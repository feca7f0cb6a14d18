"""Streaming-response decoding for chat replies.

Turns a chunked HTTP response body into ordered stream events, whatever
the chunk boundaries.

Responsibilities:
    - Byte-to-text decoding that survives split UTF-8 sequences
    - Line framing that survives split lines
    - Event parsing with an explicit, fail-soft policy for bad lines
    - Session orchestration with a single guaranteed terminal event
"""

from streamchat.stream.decoding import ByteToTextDecoder, LineFramer
from streamchat.stream.parser import (
    DATA_PREFIX,
    EventParseError,
    EventParser,
    StreamDecoder,
)
from streamchat.stream.session import StreamSession

__all__ = [
    "DATA_PREFIX",
    "ByteToTextDecoder",
    "EventParseError",
    "EventParser",
    "LineFramer",
    "StreamDecoder",
    "StreamSession",
]
