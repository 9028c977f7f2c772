"""
Single Parsers - Strict parsers for exactly one object or one array.

A SingleObjectParser consumes one object and hands each key to on_key();
a SingleArrayParser consumes one array and calls on_element() once per
element. Both refuse nested containers of their own kind that the
subclass did not consume itself, and call finalize() after the closing
bracket so subclasses can validate what they collected.
"""

from .errors import JsonErrc, make_error
from .states import ParserState
from .strict_parser import StrictParser


class LevelValidator:
    """Tracks whether a single container level has been entered."""

    def __init__(self):
        self._entered = False

    def enter(self) -> ParserState:
        if self._entered:
            raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Did not expect nested elements")
        self._entered = True
        return ParserState.RUNNING

    def leave(self) -> ParserState:
        if not self._entered:
            raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Cannot leave level")
        self._entered = False
        return ParserState.FINISHED

    def is_entered(self) -> bool:
        return self._entered


class SingleObjectParser(StrictParser):
    """
    Parser for one JSON object.

    Override on_key() and use the parse_* helpers to read the value that
    follows each key.
    """

    def __init__(self, document):
        super().__init__(document)
        self._validator = LevelValidator()

    def on_start_object(self) -> ParserState:
        return self._validator.enter()

    def on_end_object(self, count: int) -> ParserState:
        state = self._validator.leave()
        self.finalize()
        return state

    def on_start_array(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "SingleObjectParser: Did not expect start of array.")

    def on_end_array(self, count: int) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "SingleObjectParser: Did not expect end of array.")

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Expected to parse an object.")

    def finalize(self) -> None:
        """Validate the complete object; raise JsonError to reject it."""


class SingleArrayParser(StrictParser):
    """
    Parser for one JSON array.

    Override on_element() to consume exactly one element per call; index
    holds the number of elements processed so far.
    """

    def __init__(self, document):
        super().__init__(document)
        self._validator = LevelValidator()
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def on_start_object(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "SingleArrayParser: Did not expect start of object.")

    def on_end_object(self, count: int) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "SingleArrayParser: Did not expect end of object.")

    def on_start_array(self) -> ParserState:
        state = self._validator.enter()
        self._ops.skip_whitespace()
        if not self._ops.is_end_of_stream() and self._ops.peek() == "]":
            return state
        return self._process_element()

    def on_comma(self) -> ParserState:
        return self._process_element()

    def on_end_array(self, count: int) -> ParserState:
        state = self._validator.leave()
        self.finalize()
        return state

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Expected to parse an array of elements.")

    def on_element(self) -> ParserState:
        return self.on_unexpected_event()

    def finalize(self) -> None:
        """Validate the complete array; raise JsonError to reject it."""

    def _process_element(self) -> ParserState:
        try:
            return self.on_element()
        finally:
            self._index += 1
