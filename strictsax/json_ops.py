"""
JSON Ops - Character-level scanning primitives.

All tokenization is built from peek/advance plus a predicate and an
action. No operation looks ahead more than one character and none
backtracks; a mismatch is reported to the caller immediately.
"""

from typing import Callable

from .buffers import CharBuffer
from .errors import JsonErrc, ensure, make_error
from .stream_buffer import StreamBuffer

WHITESPACE = " \t\n\r"


def _do_nothing(char: str) -> None:
    pass


class JsonOps:
    """Lexical operations over a StreamBuffer."""

    def __init__(self, buffer: StreamBuffer):
        self._buffer = buffer

    def is_end_of_stream(self, step: int = 0) -> bool:
        return self._buffer.is_end_of_stream(step)

    def check_no_end_of_stream(self, step: int = 0) -> None:
        """Fail with UNEXPECTED_EOF at end of stream, chained to a failed read if there was one."""
        if self.is_end_of_stream(step):
            raise make_error(JsonErrc.UNEXPECTED_EOF, "Stream ended unexpectedly") from self._buffer.error

    def peek(self) -> str:
        """Return the next character; IndexError at end of stream."""
        return self._buffer.peek()

    def take(self) -> str:
        """Consume and return the next character."""
        char = self._buffer.peek()
        self.move()
        return char

    def try_take(self) -> str:
        """Like take(), but end of stream is an UNEXPECTED_EOF failure."""
        self.check_no_end_of_stream()
        return self.take()

    def move(self) -> None:
        """Advance by one character; a failing stream read is an UNEXPECTED_EOF failure."""
        if not self._buffer.advance():
            error = make_error(JsonErrc.UNEXPECTED_EOF, "Reading from the input stream failed")
            raise error from self._buffer.error

    def tell(self) -> int:
        return self._buffer.tell()

    def scan_if(self, predicate: Callable[[str], bool], action: Callable[[str], None]) -> bool:
        """Consume the next character if it satisfies predicate, passing it to action."""
        if self.is_end_of_stream():
            return False
        char = self._buffer.peek()
        if not predicate(char):
            return False
        action(char)
        self.move()
        return True

    def push_if_any(self, buffer: CharBuffer, chars: str) -> bool:
        """Consume the next character into buffer if it is one of chars."""
        return self.scan_if(lambda char: char in chars, buffer.append)

    def skip(self, expected: str) -> bool:
        return self.scan_if(lambda char: char == expected, _do_nothing)

    def skip_string(self, literal: str, error_message: str) -> None:
        """Consume literal character by character; fail on the first mismatch."""
        ensure(bool(literal), JsonErrc.INVALID_STRING, "Cannot skip empty string")
        for expected in literal:
            if self.try_take() != expected:
                raise make_error(JsonErrc.INVALID_STRING, error_message)

    def scan_while(self, predicate: Callable[[str], bool], action: Callable[[str], None]) -> None:
        """Consume characters while predicate holds, passing each to action."""
        while not self.is_end_of_stream():
            char = self._buffer.peek()
            if not predicate(char):
                break
            action(char)
            self.move()

    def skip_whitespace(self) -> None:
        self.scan_while(lambda char: char in WHITESPACE, _do_nothing)
