"""
Typed Parsers - Single-purpose strict parsers.

Each parser accepts exactly one kind of event, hands the value to a
callback and finishes. They are the building blocks of StrictParser's
parse_* helpers and of the fluent JsonParser.
"""

from typing import Callable

from .errors import JsonErrc, make_error
from .number import JsonNumber, Target, resolve_type
from .single_parsers import SingleArrayParser
from .states import ParserState
from .strict_parser import StrictParser


class KeyParser(StrictParser):
    def __init__(self, document, fn: Callable[[str], None]):
        super().__init__(document)
        self._fn = fn

    def on_key(self, key: str) -> ParserState:
        self._fn(key)
        return ParserState.FINISHED

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Expected to parse a key.")


class BoolParser(StrictParser):
    def __init__(self, document, fn: Callable[[bool], None]):
        super().__init__(document)
        self._fn = fn

    def on_bool(self, value: bool) -> ParserState:
        self._fn(value)
        return ParserState.FINISHED

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Expected to parse a bool.")


class NumberParser(StrictParser):
    """Reads one number and converts it to target before calling fn."""

    def __init__(self, document, target: Target, fn: Callable):
        super().__init__(document)
        self._target = resolve_type(target)
        self._fn = fn

    def on_number(self, number: JsonNumber) -> ParserState:
        self._fn(number.try_as_type(self._target))
        return ParserState.FINISHED

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Expected to parse a number.")


class StringParser(StrictParser):
    def __init__(self, document, fn: Callable[[str], None]):
        super().__init__(document)
        self._fn = fn

    def on_string(self, value: str) -> ParserState:
        self._fn(value)
        return ParserState.FINISHED

    def on_unexpected_event(self) -> ParserState:
        raise make_error(JsonErrc.USER_VALIDATION_FAILED, "Expected to parse a string.")


class ArrayParser(SingleArrayParser):
    """Calls fn(index) once per element; fn must consume that element."""

    def __init__(self, document, fn: Callable[[int], None]):
        super().__init__(document)
        self._fn = fn

    def on_element(self) -> ParserState:
        self._fn(self.index)
        return ParserState.RUNNING


# ============================================================================
# COMPOSITION PARSERS
# ============================================================================

class StartObjectParser(StrictParser):
    def on_start_object(self) -> ParserState:
        return ParserState.FINISHED


class EndObjectParser(StrictParser):
    def on_end_object(self, count: int) -> ParserState:
        return ParserState.FINISHED


class StartArrayParser(StrictParser):
    def on_start_array(self) -> ParserState:
        return ParserState.FINISHED


class EndArrayParser(StrictParser):
    def on_end_array(self, count: int) -> ParserState:
        return ParserState.FINISHED


class CompositionParser(StrictParser):
    """Plain strict parser whose parse_* helpers drive the fluent JsonParser."""
