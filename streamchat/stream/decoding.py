"""Chunk-boundary-safe text decoding and line framing.

Chunks read from the transport are cut at arbitrary byte offsets, so a
chunk may end inside a UTF-8 sequence or inside a line. Both classes here
keep the unfinished tail and prepend it to the next input.
"""

import codecs

DEFAULT_ENCODING = "utf-8"
LINE_SEPARATOR = "\n"


class ByteToTextDecoder:
    """Stateful byte-to-text decoder for one stream session.

    Wraps an incremental codec decoder: bytes of an incomplete trailing
    code point are held back until the next call. On the final call they
    are decoded lossily (as U+FFFD) instead of being dropped.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)("replace")

    def decode(self, data: bytes, final: bool = False) -> str:
        """Decode ``data`` and return every character completed so far.

        Args:
            data: Next chunk of bytes. May be empty.
            final: True at end of stream to flush any retained bytes.

        Returns:
            The decoded text, possibly empty.
        """
        return self._decoder.decode(data, final)

    def flush(self) -> str:
        return self.decode(b"", final=True)

    def reset(self) -> None:
        self._decoder.reset()


class LineFramer:
    """Accumulates text and hands out complete lines.

    Lines are split on ``\\n`` only. JSON payloads may legally contain raw
    U+2028/U+2029 in strings, which ``str.splitlines`` would break on.
    Separators are not included in the returned lines.
    """

    def __init__(self) -> None:
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending

    def feed(self, text: str) -> list[str]:
        """Add ``text`` and return the lines it completed, in order."""
        if not text:
            return []
        fragments = (self._pending + text).split(LINE_SEPARATOR)
        self._pending = fragments.pop()
        return fragments

    def flush(self) -> list[str]:
        """Return the unterminated trailing line, if any, and clear it."""
        if not self._pending:
            return []
        line, self._pending = self._pending, ""
        return [line]

    def reset(self) -> None:
        self._pending = ""
