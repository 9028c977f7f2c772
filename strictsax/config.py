"""
Reader Config - Construction-time limits of the JSON reader.

All limits are fixed once a document is created; there is no global state.
"""

from dataclasses import dataclass

# Maximum nesting depth of objects and arrays.
MAX_DEPTH = 0x20

# Number of characters reserved for the current key.
KEY_BUFFER_SIZE = 1024

# Number of characters reserved for the current string or number.
STRING_BUFFER_SIZE = 1024

# Size of the stream read window. One slot is kept free, so each refill
# reads at most BUFFER_SIZE - 1 characters.
BUFFER_SIZE = 4096


@dataclass(frozen=True)
class ReaderConfig:
    """
    Immutable reader configuration.

    Attributes:
        max_depth: Capacity of the container stack.
        key_buffer_size: Reserve of the key buffer.
        string_buffer_size: Reserve of the string/number buffer.
        buffer_size: Size of the stream read window.
    """

    max_depth: int = MAX_DEPTH
    key_buffer_size: int = KEY_BUFFER_SIZE
    string_buffer_size: int = STRING_BUFFER_SIZE
    buffer_size: int = BUFFER_SIZE

    def __post_init__(self) -> None:
        for name, minimum in (
            ("max_depth", 0),
            ("key_buffer_size", 0),
            ("string_buffer_size", 0),
            ("buffer_size", 2),
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if value < minimum:
                raise ValueError(f"{name} must be at least {minimum}")

    @property
    def read_size(self) -> int:
        """Number of characters requested per refill."""
        return self.buffer_size - 1


DEFAULT_CONFIG = ReaderConfig()
