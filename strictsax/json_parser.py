"""
JSON Parser - Fluent interface for reading documents of a known shape.

Each chained call reads the next piece of the document. The first failure
is stored and turns every later call into a no-op; finish() then raises
it. This keeps call sites linear:

    JsonParser(document).start_object() \\
        .key("a").number(int, values.append) \\
        .end_object() \\
        .finish()
"""

import logging
from typing import Callable, Optional, Union

from .document import JsonDocument
from .errors import JsonErrc, JsonError
from .number import Target
from .parsers import (
    CompositionParser,
    EndArrayParser,
    EndObjectParser,
    StartArrayParser,
    StartObjectParser,
)
from .states import ParserState

logger = logging.getLogger(__name__)


class JsonParser:
    def __init__(self, document: JsonDocument):
        self._document = document
        self._parser = CompositionParser(document)
        self._error: Optional[JsonError] = None
        self._customized = False

    @property
    def ok(self) -> bool:
        return self._error is None

    @property
    def error(self) -> Optional[JsonError]:
        """The first failure met so far, if any."""
        return self._error

    def finish(self, state: ParserState = ParserState.FINISHED) -> ParserState:
        """Return state, or raise the stored failure."""
        if self._error is not None:
            raise self._error
        return state

    # ========================================================================
    # CHAINED READS
    # ========================================================================

    def key(self, key: Union[str, Callable[[str], None]]) -> "JsonParser":
        """Read a key; a string must match exactly, a callable receives it."""
        if isinstance(key, str):
            return self._if_valid(lambda: self._parser.check_key(key))
        return self._if_valid(lambda: self._parser.parse_key(key))

    def start_object(self) -> "JsonParser":
        return self._if_valid(lambda: StartObjectParser(self._document).parse())

    def end_object(self) -> "JsonParser":
        return self._if_valid(lambda: EndObjectParser(self._document).parse())

    def start_array(self) -> "JsonParser":
        return self._if_valid(lambda: StartArrayParser(self._document).parse())

    def end_array(self) -> "JsonParser":
        return self._if_valid(lambda: EndArrayParser(self._document).parse())

    def boolean(self, fn: Callable[[bool], None]) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_bool(fn))

    def number(self, target: Target, fn: Callable) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_number(target, fn))

    def string(self, fn: Callable[[str], None]) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_string(fn))

    def array(self, fn: Callable[[int], None]) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_array(fn))

    def string_array(self, fn: Callable[[str], None]) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_string_array(fn))

    def number_array(self, target: Target, fn: Callable) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_number_array(target, fn))

    def bool_array(self, fn: Callable[[bool], None]) -> "JsonParser":
        return self._if_valid(lambda: self._parser.parse_bool_array(fn))

    # ========================================================================
    # ERRORS
    # ========================================================================

    def add_error_info(self, *args) -> "JsonParser":
        """
        Add context to the stored failure.

        add_error_info(message) attaches a user message to the failure;
        add_error_info(code, message) replaces it with a new one at the
        same offset. Only the first call after a failure has any effect.
        """
        if len(args) not in (1, 2):
            raise TypeError("add_error_info() takes a message or a code and a message")
        if self._customized or self._error is None:
            return self
        if len(args) == 1:
            self._error = self._error.with_user_message(args[0])
        else:
            code, message = args
            self._error = JsonError(JsonErrc(code), message, offset=self._error.offset)
        self._customized = True
        return self

    def _if_valid(self, step: Callable[[], ParserState]) -> "JsonParser":
        if self._error is None:
            try:
                step()
            except JsonError as exc:
                logger.debug("Fluent read stopped: %s", exc)
                self._error = exc
            except Exception as exc:
                logger.debug("Fluent read stopped by callback: %r", exc)
                self._error = self._callback_error(exc)
        return self

    def _callback_error(self, exc: Exception) -> JsonError:
        """Wrap a failure raised by a user callback, keeping it as the cause."""
        error = JsonError(
            JsonErrc.USER_VALIDATION_FAILED,
            f"Callback raised {type(exc).__name__}: {exc}",
            offset=self._document.tell(),
        )
        error.__cause__ = exc
        return error
