"""
JSON Errors - Error codes and the exception raised by the reader.

Every failure of the reader is a JsonError carrying a machine-readable
code, the message of the place that raised it and, once it has left a
parse loop, the stream offset at which parsing stopped.
"""

from enum import Enum, IntEnum
from typing import Optional

DOMAIN_NAME = "Json"


class JsonErrc(IntEnum):
    """
    Error codes of the JSON domain.

    Values are fixed so that codes can be exchanged numerically. Codes the
    reader never raises are reserved.
    """

    NOT_INITIALIZED = 0
    UNEXPECTED_EOF = 1
    INVALID_STATE = 2
    KEY_TOO_LONG = 3
    STRING_TOO_LONG = 4
    TREE_DEPTH_ERROR = 5
    UNEXPECTED_OPENING_BRACKETS = 6
    UNEXPECTED_CLOSING_BRACKETS = 7
    EXPECTED_CLOSING_BRACKETS = 8
    UNEXPECTED_OPENING_BRACES = 9
    UNEXPECTED_CLOSING_BRACES = 10
    EXPECTED_CLOSING_BRACES = 11
    EXPECTED_KEY = 12
    EXPECTED_VALUE = 13
    INVALID_NULL_LITERAL = 14  # reserved
    INVALID_TRUE_LITERAL = 15  # reserved
    INVALID_FALSE_LITERAL = 16  # reserved
    INVALID_NUMBER = 17
    INVALID_STRING = 18
    INVALID_TYPE = 19
    NOT_IN_OBJECT = 20
    NOT_IN_ARRAY = 21
    CANNOT_EXIT_OBJECT = 22  # reserved
    CANNOT_EXIT_ARRAY = 23  # reserved
    UNEXPECTED_ON_TOP_LEVEL = 24
    UNICODE_ESCAPE = 25
    USER_VALIDATION_FAILED = 26


class ErrorCategory(str, Enum):
    """
    Coarse classification of error codes.

    STREAM: the input ended or could not be read.
    LEXICAL: a literal, string or escape is malformed.
    STRUCTURAL: braces, brackets, keys or commas are misplaced.
    SEMANTIC: a value is well-formed but not acceptable to the handler.
    OTHER: reserved codes.
    """

    STREAM = "stream"
    LEXICAL = "lexical"
    STRUCTURAL = "structural"
    SEMANTIC = "semantic"
    OTHER = "other"


_MESSAGES = {
    JsonErrc.NOT_INITIALIZED: "Not initialized",
    JsonErrc.UNEXPECTED_EOF: "Unexpected end of stream",
    JsonErrc.INVALID_STATE: "Invalid state",
    JsonErrc.KEY_TOO_LONG: "Key too long",
    JsonErrc.STRING_TOO_LONG: "String too long",
    JsonErrc.TREE_DEPTH_ERROR: "Maximum tree depth exceeded",
    JsonErrc.UNEXPECTED_OPENING_BRACKETS: "Unexpected opening bracket",
    JsonErrc.UNEXPECTED_CLOSING_BRACKETS: "Unexpected closing bracket",
    JsonErrc.EXPECTED_CLOSING_BRACKETS: "Expected closing bracket",
    JsonErrc.UNEXPECTED_OPENING_BRACES: "Unexpected opening brace",
    JsonErrc.UNEXPECTED_CLOSING_BRACES: "Unexpected closing brace",
    JsonErrc.EXPECTED_CLOSING_BRACES: "Expected closing brace",
    JsonErrc.EXPECTED_KEY: "Expected key",
    JsonErrc.EXPECTED_VALUE: "Expected value",
    JsonErrc.INVALID_NULL_LITERAL: "Invalid null literal",
    JsonErrc.INVALID_TRUE_LITERAL: "Invalid true literal",
    JsonErrc.INVALID_FALSE_LITERAL: "Invalid false literal",
    JsonErrc.INVALID_NUMBER: "Invalid number",
    JsonErrc.INVALID_STRING: "Invalid string",
    JsonErrc.INVALID_TYPE: "Invalid type",
    JsonErrc.NOT_IN_OBJECT: "Not in object",
    JsonErrc.NOT_IN_ARRAY: "Not in array",
    JsonErrc.CANNOT_EXIT_OBJECT: "Cannot exit object",
    JsonErrc.CANNOT_EXIT_ARRAY: "Cannot exit array",
    JsonErrc.UNEXPECTED_ON_TOP_LEVEL: "Unexpected token at top level",
    JsonErrc.UNICODE_ESCAPE: "Unicode escape sequences are not supported",
    JsonErrc.USER_VALIDATION_FAILED: "User validation failed",
}

_CATEGORIES = {
    JsonErrc.UNEXPECTED_EOF: ErrorCategory.STREAM,
    JsonErrc.INVALID_STRING: ErrorCategory.LEXICAL,
    JsonErrc.INVALID_TYPE: ErrorCategory.LEXICAL,
    JsonErrc.UNICODE_ESCAPE: ErrorCategory.LEXICAL,
    JsonErrc.UNEXPECTED_OPENING_BRACKETS: ErrorCategory.STRUCTURAL,
    JsonErrc.EXPECTED_CLOSING_BRACKETS: ErrorCategory.STRUCTURAL,
    JsonErrc.UNEXPECTED_OPENING_BRACES: ErrorCategory.STRUCTURAL,
    JsonErrc.EXPECTED_CLOSING_BRACES: ErrorCategory.STRUCTURAL,
    JsonErrc.EXPECTED_KEY: ErrorCategory.STRUCTURAL,
    JsonErrc.EXPECTED_VALUE: ErrorCategory.STRUCTURAL,
    JsonErrc.NOT_IN_OBJECT: ErrorCategory.STRUCTURAL,
    JsonErrc.NOT_IN_ARRAY: ErrorCategory.STRUCTURAL,
    JsonErrc.UNEXPECTED_ON_TOP_LEVEL: ErrorCategory.STRUCTURAL,
    JsonErrc.INVALID_NUMBER: ErrorCategory.SEMANTIC,
    JsonErrc.USER_VALIDATION_FAILED: ErrorCategory.SEMANTIC,
}


def error_message(code: JsonErrc) -> str:
    """Return the human-readable message of an error code."""
    return _MESSAGES.get(code, "Unknown error")


class JsonError(ValueError):
    """
    Raised when reading JSON fails.

    Attributes:
        code: The JsonErrc of the failure.
        message: Message of the place that raised the error.
        user_message: Context added by the caller, if any.
        offset: Characters consumed from the stream when parsing stopped;
            None until a parse loop has attached it.
    """

    def __init__(
        self,
        code: JsonErrc,
        message: str = "",
        offset: Optional[int] = None,
        user_message: Optional[str] = None,
    ) -> None:
        self.code = JsonErrc(code)
        self.message = message
        self.offset = offset
        self.user_message = user_message
        super().__init__(code, message, offset, user_message)

    @property
    def domain(self) -> str:
        return DOMAIN_NAME

    @property
    def domain_message(self) -> str:
        """Human-readable text of the error code."""
        return error_message(self.code)

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES.get(self.code, ErrorCategory.OTHER)

    def attach_offset(self, offset: int) -> None:
        """Record the stream offset unless an inner parse already did."""
        if self.offset is None:
            self.offset = offset

    def with_user_message(self, user_message: str) -> "JsonError":
        """Return a copy of this error annotated with a user message."""
        annotated = JsonError(self.code, self.message, self.offset, user_message)
        annotated.__cause__ = self.__cause__
        return annotated

    def __str__(self) -> str:
        text = self.domain_message
        if self.message:
            text += f": {self.message}"
        if self.user_message:
            text += f" ({self.user_message})"
        if self.offset is not None:
            text += f" at offset {self.offset}"
        return text

    def __repr__(self) -> str:
        return f"JsonError({self.code.name}, {self.message!r}, offset={self.offset})"


def make_error(code: JsonErrc, message: str = "") -> JsonError:
    """Build a JsonError without an offset."""
    return JsonError(code, message)


def ensure(condition: bool, code: JsonErrc, message: str = "") -> None:
    """Raise a JsonError with the given code unless condition holds."""
    if not condition:
        raise make_error(code, message)
