"""
Strict Parser - Parser that rejects every event it does not handle.

Subclasses implement only the hooks they expect; anything else in the
document fails with USER_VALIDATION_FAILED. The parse_* helpers run a
typed sub-parser on the same document, so a hook can pull the value that
belongs to the key it just received.
"""

from typing import Callable

from .errors import JsonErrc, make_error
from .number import Target
from .parser import Parser
from .states import ParserState


class StrictParser(Parser):
    """Base class of all validating parsers."""

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Use of default method not allowed in this context.")

    def parse_key(self, fn: Callable[[str], None]) -> ParserState:
        from .parsers import KeyParser
        return KeyParser(self.document, fn).sub_parse()

    def check_key(self, expected: str) -> ParserState:
        """Read the next key and require it to equal expected."""

        def compare(key: str) -> None:
            if key != expected:
                raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Incorrect key received")

        return self.parse_key(compare)

    def parse_bool(self, fn: Callable[[bool], None]) -> ParserState:
        from .parsers import BoolParser
        return BoolParser(self.document, fn).sub_parse()

    def parse_number(self, target: Target, fn: Callable) -> ParserState:
        from .parsers import NumberParser
        return NumberParser(self.document, target, fn).sub_parse()

    def parse_string(self, fn: Callable[[str], None]) -> ParserState:
        from .parsers import StringParser
        return StringParser(self.document, fn).sub_parse()

    def parse_array(self, fn: Callable[[int], None]) -> ParserState:
        """Parse an array, calling fn(index) once per element."""
        from .parsers import ArrayParser
        return ArrayParser(self.document, fn).sub_parse()

    def parse_number_array(self, target: Target, fn: Callable) -> ParserState:
        return self.parse_array(lambda index: self.parse_number(target, fn))

    def parse_string_array(self, fn: Callable[[str], None]) -> ParserState:
        return self.parse_array(lambda index: self.parse_string(fn))

    def parse_bool_array(self, fn: Callable[[bool], None]) -> ParserState:
        return self.parse_array(lambda index: self.parse_bool(fn))
