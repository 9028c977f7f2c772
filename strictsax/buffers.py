"""
Buffers - Manages the reusable lexeme buffers.

This class holds the buffers used during JSON parsing for accumulating
the current key and the current string or number lexeme.
"""

from typing import List

from .config import KEY_BUFFER_SIZE, STRING_BUFFER_SIZE


class CharBuffer:
    """
    Growable character buffer that keeps its storage between tokens.

    Slots are reserved up front and reused after clear(), so filling the
    buffer with a token no longer than the reserve allocates nothing.
    value() returns a copy; the buffer itself is overwritten by the next
    token written into it.
    """

    def __init__(self, reserve: int = 0):
        self._chars: List[str] = [""] * reserve
        self._length: int = 0

    def append(self, char: str) -> None:
        """Add a character to the buffer."""
        if self._length < len(self._chars):
            self._chars[self._length] = char
        else:
            self._chars.append(char)
        self._length += 1

    def assign(self, text: str) -> None:
        """Replace the buffer content with text."""
        self.clear()
        for char in text:
            self.append(char)

    def clear(self) -> None:
        self._length = 0

    def value(self) -> str:
        """Return the current content as a new string."""
        return "".join(self._chars[:self._length])

    @property
    def capacity(self) -> int:
        return len(self._chars)

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.value()

    def __repr__(self) -> str:
        return f"CharBuffer({self._length} chars, capacity {len(self._chars)})"


class Buffers:
    """
    Manages the lexeme buffers of a document.

    The key buffer stores the most recent object key. The string buffer is
    cleared before every value and filled by the lexer with the characters
    of the current string or number.
    """

    def __init__(self, key_reserve: int = KEY_BUFFER_SIZE, string_reserve: int = STRING_BUFFER_SIZE):
        self._key = CharBuffer(key_reserve)
        self._string = CharBuffer(string_reserve)

    @property
    def key_buffer(self) -> CharBuffer:
        """Get the key buffer."""
        return self._key

    @property
    def string_buffer(self) -> CharBuffer:
        """Get the string/number buffer (for direct access)."""
        return self._string

    @property
    def current_key(self) -> str:
        """Copy of the most recent key."""
        return self._key.value()

    @property
    def current_string(self) -> str:
        """Copy of the current string or number lexeme."""
        return self._string.value()

    def store_current_key(self, key: str) -> None:
        """Remember key as the current key."""
        self._key.assign(key)

    def cleared_string_buffer(self) -> CharBuffer:
        """Clear the string buffer and return it."""
        self._string.clear()
        return self._string

    def clear_all(self) -> None:
        """Clear all buffers."""
        self._key.clear()
        self._string.clear()
