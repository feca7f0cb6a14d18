"""Unit tests for byte-to-text decoding and line framing."""

import pytest
import pytest_check as check

from streamchat.stream.decoding import ByteToTextDecoder, LineFramer


class TestByteToTextDecoder:
    """Tests for chunk-boundary-safe UTF-8 decoding."""

    def test_decodes_ascii_chunk(self) -> None:
        """Complete ASCII input is returned as-is."""
        decoder = ByteToTextDecoder()

        assert decoder.decode(b"data: hello\n") == "data: hello\n"

    @pytest.mark.parametrize("char", ["é", "€", "中", "😀"])
    def test_multibyte_char_split_at_every_offset(self, char: str) -> None:
        """A code point split across two chunks is emitted once, whole."""
        encoded = char.encode()

        for offset in range(1, len(encoded)):
            decoder = ByteToTextDecoder()
            first = decoder.decode(b"a" + encoded[:offset])
            second = decoder.decode(encoded[offset:] + b"b")

            check.equal(first, "a")
            check.equal(second, f"{char}b")

    def test_byte_at_a_time(self) -> None:
        """Feeding one byte per call reproduces the whole text."""
        text = "Grüße, 世界 🌍"
        decoder = ByteToTextDecoder()

        decoded = "".join(decoder.decode(bytes([b])) for b in text.encode())

        assert decoded == text

    def test_empty_input_returns_empty_string(self) -> None:
        """Empty input produces no text."""
        decoder = ByteToTextDecoder()

        assert decoder.decode(b"") == ""

    def test_flush_decodes_incomplete_tail_lossily(self) -> None:
        """Retained bytes of an unfinished character become U+FFFD on flush."""
        decoder = ByteToTextDecoder()

        check.equal(decoder.decode("ok€".encode()[:-1]), "ok")
        check.equal(decoder.flush(), "\ufffd")
        check.equal(decoder.flush(), "")

    def test_invalid_bytes_replaced_without_raising(self) -> None:
        """Bytes that can never form a character are replaced, not fatal."""
        decoder = ByteToTextDecoder()

        assert decoder.decode(b"a\xffb") == "a\ufffdb"

    def test_reset_discards_retained_bytes(self) -> None:
        """Reset forgets a pending partial character."""
        decoder = ByteToTextDecoder()
        decoder.decode("é".encode()[:1])

        decoder.reset()

        check.equal(decoder.decode(b"x"), "x")
        check.equal(decoder.flush(), "")


class TestLineFramer:
    """Tests for newline framing with a pending partial line."""

    def test_returns_complete_lines(self) -> None:
        """Every newline-terminated line is returned without its separator."""
        framer = LineFramer()

        check.equal(framer.feed("one\ntwo\n"), ["one", "two"])
        check.equal(framer.pending, "")

    def test_retains_partial_line(self) -> None:
        """An unterminated tail is held until its newline arrives."""
        framer = LineFramer()

        check.equal(framer.feed("data: {\"a\""), [])
        check.equal(framer.pending, 'data: {"a"')
        check.equal(framer.feed(":1}\nnext"), ['data: {"a":1}'])
        check.equal(framer.pending, "next")

    def test_blank_lines_are_emitted(self) -> None:
        """Blank separator lines are passed through for the parser to ignore."""
        framer = LineFramer()

        assert framer.feed("a\n\nb\n") == ["a", "", "b"]

    def test_newline_split_from_its_line(self) -> None:
        """A line whose newline arrives in the next chunk is emitted once."""
        framer = LineFramer()

        check.equal(framer.feed("abc"), [])
        check.equal(framer.feed("\n"), ["abc"])

    def test_carriage_return_kept_on_line(self) -> None:
        """CRLF endings leave the CR on the line; the parser trims it."""
        framer = LineFramer()

        assert framer.feed("data: x\r\n") == ["data: x\r"]

    def test_unicode_line_separators_do_not_split(self) -> None:
        """U+2028 inside a payload is content, not a line break."""
        framer = LineFramer()

        assert framer.feed("a\u2028b\u2029c\n") == ["a\u2028b\u2029c"]

    def test_flush_emits_pending_line(self) -> None:
        """Flush returns the unterminated last line and clears it."""
        framer = LineFramer()
        framer.feed("first\nlast")

        check.equal(framer.flush(), ["last"])
        check.equal(framer.pending, "")
        check.equal(framer.flush(), [])

    def test_flush_with_nothing_pending(self) -> None:
        """Flushing an empty framer returns no lines."""
        assert LineFramer().flush() == []

    def test_empty_feed_after_flush_is_idempotent(self) -> None:
        """An already-flushed framer fed nothing yields nothing and does not raise."""
        framer = LineFramer()
        framer.feed("line\npartial")
        framer.flush()

        check.equal(framer.feed(""), [])
        check.equal(framer.flush(), [])

    def test_reset_discards_pending(self) -> None:
        """Reset drops the pending fragment."""
        framer = LineFramer()
        framer.feed("stale")

        framer.reset()

        assert framer.feed("fresh\n") == ["fresh"]
