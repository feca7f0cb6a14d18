"""Event-line parsing for the chat streaming protocol.

The response body is line-oriented. Lines starting with ``data: `` carry a
JSON payload whose ``type`` field selects a stream event. Every other line
(blank keep-alives, comments, other fields) is ignored.

Parse failures raise EventParseError and the caller decides the policy.
StreamDecoder, the byte-to-event pipeline used by stream sessions, drops
the offending line and keeps going, because one bad line must not lose the
rest of a long reply.
"""

import json
import logging

from pydantic import ValidationError

from streamchat.models.events import EVENT_TYPES, StreamEvent, stream_event_adapter
from streamchat.stream.decoding import DEFAULT_ENCODING, ByteToTextDecoder, LineFramer

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "


class EventParseError(Exception):
    """Raised when an event-data line carries a payload that cannot be decoded.

    Attributes:
        line: The offending line.
        truncated: True if the payload was cut off mid-structure rather than
            malformed.
    """

    def __init__(self, message: str, line: str, truncated: bool = False) -> None:
        super().__init__(message)
        self.line = line
        self.truncated = truncated


def is_truncated_json(payload: str) -> bool:
    """Check whether ``payload`` ends inside an open JSON object, array or string.

    Brackets inside string literals are skipped. A closing bracket without
    a matching opener means the payload is malformed, not truncated.
    """
    depth = 0
    in_string = False
    escaped = False
    for ch in payload:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
            if depth < 0:
                return False
    return in_string or depth > 0


class EventParser:
    """Turns single lines into stream events."""

    def __init__(self, prefix: str = DATA_PREFIX) -> None:
        self.prefix = prefix

    def parse(self, line: str) -> StreamEvent | None:
        """Parse one line of the response body.

        Trailing whitespace is ignored when matching the prefix but left in
        the payload, where JSON decoding tolerates it.

        Args:
            line: A complete line without its separator.

        Returns:
            The decoded event, or None for lines that carry no event
            (no prefix, non-object payload, unknown ``type``).

        Raises:
            EventParseError: If the payload is not valid JSON or does not
                match the schema of its event type.
        """
        if not line.rstrip().startswith(self.prefix):
            return None

        payload = line[len(self.prefix) :]
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise EventParseError(
                f"Invalid JSON payload: {e.msg}",
                line,
                truncated=is_truncated_json(payload),
            ) from e

        kind = data.get("type") if isinstance(data, dict) else None
        if not isinstance(kind, str) or kind not in EVENT_TYPES:
            logger.debug(f"Ignoring event line with unknown type: {payload[:200]}")
            return None

        try:
            return stream_event_adapter.validate_python(data)
        except ValidationError as e:
            raise EventParseError(
                f"Invalid '{kind}' event: {e.error_count()} validation error(s)",
                line,
            ) from e


class StreamDecoder:
    """Byte chunks in, stream events out.

    Chains ByteToTextDecoder, LineFramer and EventParser for one session.
    Feeding the same bytes in any chunking yields the same events.
    """

    def __init__(
        self,
        parser: EventParser | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._text = ByteToTextDecoder(encoding)
        self._lines = LineFramer()
        self._parser = parser or EventParser()
        self.dropped_lines = 0

    def feed(self, chunk: bytes) -> list[StreamEvent]:
        """Decode one chunk and return the events it completed."""
        return self._parse_lines(self._lines.feed(self._text.decode(chunk)))

    def close(self) -> list[StreamEvent]:
        """Flush retained bytes, then the unterminated last line."""
        lines = self._lines.feed(self._text.flush())
        lines.extend(self._lines.flush())
        return self._parse_lines(lines)

    def reset(self) -> None:
        self._text.reset()
        self._lines.reset()
        self.dropped_lines = 0

    def _parse_lines(self, lines: list[str]) -> list[StreamEvent]:
        events: list[StreamEvent] = []
        for line in lines:
            try:
                event = self._parser.parse(line)
            except EventParseError as e:
                self.dropped_lines += 1
                if e.truncated:
                    logger.debug(f"Dropping truncated event line: {line[:200]!r}")
                else:
                    logger.warning(f"Dropping malformed event line ({e}): {line[:200]!r}")
                continue
            if event is not None:
                events.append(event)
        return events
