"""
JSON Document - Everything a parse needs to know about one input.

A document owns the stream cursor, the structural validator and the
lexeme buffers. Parsers borrow the document, so any number of parsers
may work on the same input one after another.
"""

import io
from pathlib import Path
from typing import IO, Optional, Union

from .buffers import Buffers, CharBuffer
from .config import DEFAULT_CONFIG, ReaderConfig
from .stack_tracker import StackTracker
from .stream_buffer import StreamBuffer


class JsonDocument:
    """
    Per-input parse state.

    Documents are unique resources: copying one raises TypeError.
    """

    def __init__(self, stream: IO, config: Optional[ReaderConfig] = None):
        self._config = config or DEFAULT_CONFIG
        self._stream_buffer = StreamBuffer(stream, self._config.buffer_size)
        self._tracker = StackTracker(self._config.max_depth)
        self._buffers = Buffers(self._config.key_buffer_size, self._config.string_buffer_size)

    @classmethod
    def from_string(cls, text: str, config: Optional[ReaderConfig] = None) -> "JsonDocument":
        return cls(io.StringIO(text), config)

    @classmethod
    def from_bytes(cls, data: bytes, config: Optional[ReaderConfig] = None) -> "JsonDocument":
        return cls(io.BytesIO(data), config)

    @classmethod
    def from_source(cls, source: Union[str, bytes, IO], config: Optional[ReaderConfig] = None) -> "JsonDocument":
        """Build a document from text, bytes or an already open stream."""
        if isinstance(source, str):
            return cls.from_string(source, config)
        if isinstance(source, (bytes, bytearray)):
            return cls.from_bytes(bytes(source), config)
        return cls(source, config)

    @classmethod
    def from_path(cls, path: Union[str, Path], config: Optional[ReaderConfig] = None) -> "JsonDocument":
        """Read a whole file into a document; the file is closed on return."""
        return cls.from_bytes(Path(path).read_bytes(), config)

    def __copy__(self):
        raise TypeError("JsonDocument cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("JsonDocument cannot be copied")

    @property
    def config(self) -> ReaderConfig:
        return self._config

    @property
    def state(self) -> StackTracker:
        """Structural validator of this document."""
        return self._tracker

    @property
    def stream_buffer(self) -> StreamBuffer:
        return self._stream_buffer

    @property
    def buffers(self) -> Buffers:
        return self._buffers

    @property
    def current_key(self) -> str:
        return self._buffers.current_key

    @property
    def current_string(self) -> str:
        return self._buffers.current_string

    def store_current_key(self, key: str) -> None:
        self._buffers.store_current_key(key)

    def cleared_string_buffer(self) -> CharBuffer:
        return self._buffers.cleared_string_buffer()

    @property
    def string_buffer(self) -> CharBuffer:
        return self._buffers.string_buffer

    def tell(self) -> int:
        return self._stream_buffer.tell()

    def __repr__(self) -> str:
        return f"JsonDocument(offset={self.tell()}, depth={self._tracker.depth})"
