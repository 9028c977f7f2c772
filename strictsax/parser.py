"""
Parser - Event core of the streaming JSON reader.

Recognizes one JSON value per loop iteration, validates it against the
document's stack tracker and reports it to one of the event hooks. Hooks
are plain methods: subclasses override the events they care about and
every hook they leave alone ends up in on_unexpected_event().
"""

import logging
from typing import IO, Optional, Union

from .config import ReaderConfig
from .document import JsonDocument
from .errors import JsonErrc, JsonError, make_error
from .json_ops import JsonOps
from .number import JsonNumber, NumberBase, is_digit
from .states import ParserState

logger = logging.getLogger(__name__)

_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Characters that may follow the digits of a number.
_NUMBER_EXTRA_CHARS = ".Ee-+"


class Parser:
    """
    Lenient SAX-style parser.

    Every event is accepted and parsing runs until the document ends.
    Subclasses override on_* hooks to receive events; hooks return a
    ParserState or raise JsonError to stop parsing.
    """

    def __init__(self, document: JsonDocument):
        self._document = document
        self._ops = JsonOps(document.stream_buffer)

    @property
    def document(self) -> JsonDocument:
        return self._document

    @property
    def current_key(self) -> str:
        """The most recent key read from the document."""
        return self._document.current_key

    @property
    def depth(self) -> int:
        return self._document.state.depth

    # ========================================================================
    # ENTRY POINTS
    # ========================================================================

    def parse(self) -> ParserState:
        """
        Parse values until a hook reports FINISHED or the document ends.

        A failure is raised as JsonError carrying the stream offset at
        which parsing stopped.
        """
        try:
            self._ops.skip_whitespace()
            self._ops.check_no_end_of_stream()
            state = ParserState.RUNNING
            while state is ParserState.RUNNING:
                state = self._parse_value()
            return state
        except JsonError as exc:
            exc.attach_offset(self._ops.tell())
            logger.debug("%s failed: %s", type(self).__name__, exc)
            raise

    def sub_parse(self) -> ParserState:
        """Parse like parse(), but never end the caller's loop."""
        self.parse()
        return ParserState.RUNNING

    # ========================================================================
    # EVENT HOOKS
    # ========================================================================

    def on_null(self) -> ParserState:
        return self.on_unexpected_event()

    def on_bool(self, value: bool) -> ParserState:
        return self.on_unexpected_event()

    def on_number(self, number: JsonNumber) -> ParserState:
        return self.on_unexpected_event()

    def on_string(self, value: str) -> ParserState:
        return self.on_unexpected_event()

    def on_key(self, key: str) -> ParserState:
        return self.on_unexpected_event()

    def on_start_object(self) -> ParserState:
        return self.on_unexpected_event()

    def on_end_object(self, count: int) -> ParserState:
        return self.on_unexpected_event()

    def on_start_array(self) -> ParserState:
        return self.on_unexpected_event()

    def on_end_array(self, count: int) -> ParserState:
        return self.on_unexpected_event()

    def on_comma(self) -> ParserState:
        return ParserState.RUNNING

    def on_unexpected_event(self) -> ParserState:
        """Called by every hook a subclass does not override."""
        return ParserState.RUNNING

    # ========================================================================
    # VALUE RECOGNITION
    # ========================================================================

    def _parse_value(self) -> ParserState:
        ops = self._ops
        ops.skip_whitespace()
        if ops.is_end_of_stream():
            self._document.state.check_end_of_stream()
            return ParserState.FINISHED

        self._document.cleared_string_buffer()
        char = ops.peek()
        if char == "n":
            return self._parse_literal("null", None)
        if char == "t":
            return self._parse_literal("true", True)
        if char == "f":
            return self._parse_literal("false", False)
        if char == '"':
            return self._parse_string()
        if char == "{":
            return self._parse_start_object()
        if char == "}":
            return self._parse_end_object()
        if char == "[":
            return self._parse_start_array()
        if char == "]":
            return self._parse_end_array()
        if char == ",":
            return self._parse_comma()
        if char == "-":
            self._document.string_buffer.append(char)
            ops.move()
            return self._parse_number(self._parse_number_base())
        if char == "0":
            return self._parse_number(self._parse_number_base())
        if char in "123456789":
            return self._parse_number(NumberBase.DECIMAL)
        raise make_error(JsonErrc.INVALID_TYPE, "Expected a valid JSON token")

    def _parse_literal(self, literal: str, value: Optional[bool]) -> ParserState:
        self._ops.skip_string(literal, f"Expected '{literal}'")
        self._document.state.add_value()
        if value is None:
            return self.on_null()
        return self.on_bool(value)

    def _parse_string(self) -> ParserState:
        string = self._unescaped_string()
        self._ops.skip_whitespace()
        if self._ops.skip(":"):
            self._document.state.add_key()
            self._document.store_current_key(string)
            return self.on_key(string)
        self._document.state.add_value()
        return self.on_string(string)

    def _unescaped_string(self) -> str:
        ops = self._ops
        buffer = self._document.cleared_string_buffer()
        ops.move()  # opening quote
        while True:
            char = ops.try_take()
            if char == '"':
                return buffer.value()
            if char == "\\":
                char = ops.try_take()
                if char == "u":
                    raise make_error(JsonErrc.UNICODE_ESCAPE, "\\u notation is not supported")
                buffer.append(_ESCAPES.get(char, char))
            else:
                buffer.append(char)

    def _parse_start_object(self) -> ParserState:
        state = self._document.state
        state.add_value()
        state.push_object()
        self._ops.move()
        return self.on_start_object()

    def _parse_end_object(self) -> ParserState:
        count = self._document.state.pop_object()
        self._ops.move()
        return self.on_end_object(count)

    def _parse_start_array(self) -> ParserState:
        state = self._document.state
        state.add_value()
        state.push_array()
        self._ops.move()
        return self.on_start_array()

    def _parse_end_array(self) -> ParserState:
        count = self._document.state.pop_array()
        self._ops.move()
        return self.on_end_array(count)

    def _parse_comma(self) -> ParserState:
        self._document.state.check_non_empty()
        self._ops.move()
        return self.on_comma()

    # ========================================================================
    # NUMBERS
    # ========================================================================

    def _parse_number(self, base: NumberBase) -> ParserState:
        self._document.state.add_value()
        if base is not NumberBase.ZERO_ONLY:
            self._scan_number_chars(base)
        return self.on_number(JsonNumber(self._document.current_string, base))

    def _scan_number_chars(self, base: NumberBase) -> None:
        buffer = self._document.string_buffer

        def predicate(char: str) -> bool:
            return is_digit(char, base) or char in _NUMBER_EXTRA_CHARS

        self._ops.scan_while(predicate, buffer.append)

    def _parse_number_base(self) -> NumberBase:
        """Consume a leading zero and the character after it, if they decide the radix."""
        ops = self._ops
        buffer = self._document.string_buffer
        if ops.is_end_of_stream() or ops.peek() != "0":
            return NumberBase.DECIMAL

        buffer.append("0")
        ops.move()
        if ops.push_if_any(buffer, "xX"):
            return NumberBase.HEX
        if ops.push_if_any(buffer, ".eE"):
            # floats may start with 0 but are always decimal
            return NumberBase.DECIMAL
        if ops.push_if_any(buffer, "1234567"):
            return NumberBase.OCTAL
        return NumberBase.ZERO_ONLY


def validate(source: Union[str, bytes, IO], config: Optional[ReaderConfig] = None) -> ParserState:
    """Check that source is structurally valid JSON without keeping any value."""
    return Parser(JsonDocument.from_source(source, config)).parse()
