"""
Stream Buffer - Buffered cursor over a character or byte stream.

The buffer keeps a fixed-size window of the input in memory and refills it
from the underlying stream whenever the cursor runs past its end.
"""

import codecs
import logging
from typing import IO, Optional, Union

from .config import BUFFER_SIZE

logger = logging.getLogger(__name__)


class StreamBuffer:
    """
    Cursor over a stream with a refillable read window.

    The stream only needs a read(size) method returning str or bytes.
    Bytes are decoded as UTF-8; a multi-byte sequence may be split across
    two reads. A StreamBuffer is a unique resource and cannot be copied.
    """

    def __init__(self, stream: IO, buffer_size: int = BUFFER_SIZE):
        if buffer_size < 2:
            raise ValueError("buffer_size must be at least 2")
        self._stream = stream
        self._read_size = buffer_size - 1
        self._decoder = None

        self._window: str = ""
        self._position: int = 0
        self._valid_length: int = 0
        self._generation: int = 0
        self._window_start: int = 0
        self._eof: bool = False
        self.error: Optional[BaseException] = None

        self._fill()

    def __copy__(self):
        raise TypeError("StreamBuffer cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("StreamBuffer cannot be copied")

    @property
    def generation(self) -> int:
        """Number of refills since construction."""
        return self._generation

    def peek(self) -> str:
        """Return the character at the cursor without consuming it."""
        if self._position >= self._valid_length:
            raise IndexError("peek past the end of the stream")
        return self._window[self._position]

    def advance(self) -> bool:
        """
        Consume one character.

        Returns False if the window had to be refilled and reading from the
        stream failed. Reaching the end of the stream is not a failure.
        """
        self._position += 1
        if self._position < self._valid_length:
            return True
        self._generation += 1
        return self._fill()

    def is_end_of_stream(self, lookahead: int = 0) -> bool:
        """True if the window is exhausted at lookahead and the stream hit EOF."""
        return (self._position + lookahead) >= self._valid_length and self._eof

    def tell(self) -> int:
        """Absolute number of characters consumed since construction."""
        return self._window_start + self._position

    def _fill(self) -> bool:
        if self._eof:
            self._window_start += min(self._position, self._valid_length)
            self._window, self._position, self._valid_length = "", 0, 0
            return self.error is None

        self._window_start += self._valid_length
        self._position = 0
        try:
            chunk = self._read_chunk()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Reading from JSON input stream failed: %s", exc)
            self.error = exc
            self._eof = True
            chunk = ""

        self._window = chunk
        self._valid_length = len(chunk)
        if chunk:
            logger.debug("Refilled stream window %d with %d characters", self._generation, len(chunk))
        return self.error is None

    def _read_chunk(self) -> str:
        while True:
            data: Union[str, bytes] = self._stream.read(self._read_size)
            if isinstance(data, str):
                if not data:
                    self._eof = True
                return data

            if self._decoder is None:
                self._decoder = codecs.getincrementaldecoder("utf-8")()
            text = self._decoder.decode(data, final=not data)
            if not data:
                self._eof = True
                return text
            if text:
                return text

    def __repr__(self) -> str:
        return f"StreamBuffer(offset={self.tell()}, generation={self._generation}, eof={self._eof})"
