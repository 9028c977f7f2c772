"""
Stack Tracker - Validates the nesting structure of the JSON being parsed.

The tracker holds one frame per open object or array. Each frame counts
its elements and knows whether the next token must be a key or may be a
value. The stack has a fixed capacity; going deeper is an error.
"""

from enum import Enum
from typing import List, Tuple

from .config import MAX_DEPTH
from .errors import JsonErrc, ensure, make_error


class ContainerType(Enum):
    OBJECT = "{"
    ARRAY = "["


class Expectation(Enum):
    KEY = "key"
    VALUE = "value"


class ItemFrame:
    """
    One open container.

    Object frames alternate KEY -> VALUE -> KEY; array frames always
    expect a VALUE.
    """

    __slots__ = ("type", "count", "expectation")

    def __init__(self, container_type: ContainerType, expectation: Expectation):
        self.type = container_type
        self.count = 0
        self.expectation = expectation

    @classmethod
    def object(cls) -> "ItemFrame":
        return cls(ContainerType.OBJECT, Expectation.KEY)

    @classmethod
    def array(cls) -> "ItemFrame":
        return cls(ContainerType.ARRAY, Expectation.VALUE)

    def add_value(self) -> bool:
        """Count a value. False if an object frame was waiting for a key."""
        self.count += 1
        if self.type is ContainerType.OBJECT:
            expected = self.expects_value()
            self.expectation = Expectation.KEY
            return expected
        return True

    def add_key(self) -> bool:
        """Record a key. False if the frame was not waiting for one."""
        expected = self.expects_key()
        self.expectation = Expectation.VALUE
        return expected

    def expects_key(self) -> bool:
        return self.expectation is Expectation.KEY

    def expects_value(self) -> bool:
        return self.expectation is Expectation.VALUE

    def __repr__(self) -> str:
        return f"ItemFrame({self.type.value}, count={self.count}, expect={self.expectation.value})"


class StackTracker:
    """
    Bounded stack of container frames.

    Every operation either succeeds or raises a JsonError with the code
    describing the structural violation.
    """

    def __init__(self, max_depth: int = MAX_DEPTH):
        self._max_depth = max_depth
        self._frames: List[ItemFrame] = []

    @property
    def frames(self) -> Tuple[ItemFrame, ...]:
        """Snapshot of the open frames, outermost first."""
        return tuple(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def is_empty(self) -> bool:
        return not self._frames

    def is_full(self) -> bool:
        return len(self._frames) >= self._max_depth

    def in_array(self) -> bool:
        """Check if we're currently inside an array."""
        return bool(self._frames) and self._frames[-1].type is ContainerType.ARRAY

    def in_object(self) -> bool:
        """Check if we're currently inside an object."""
        return bool(self._frames) and self._frames[-1].type is ContainerType.OBJECT

    def current_count(self) -> int:
        """Element count of the innermost container."""
        return self._frames[-1].count if self._frames else 0

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def check_end_of_stream(self) -> None:
        """The stream may only end once every container is closed."""
        if self._frames:
            if self._frames[-1].type is ContainerType.ARRAY:
                raise make_error(JsonErrc.EXPECTED_CLOSING_BRACKETS, "Stream ended inside an array")
            raise make_error(JsonErrc.EXPECTED_CLOSING_BRACES, "Stream ended inside an object")

    def check_non_empty(self) -> None:
        ensure(bool(self._frames), JsonErrc.UNEXPECTED_ON_TOP_LEVEL, "Separator outside of any container")

    def push_array(self) -> None:
        ensure(self._push(ItemFrame.array()), JsonErrc.UNEXPECTED_OPENING_BRACKETS, "Maximum depth reached")

    def push_object(self) -> None:
        ensure(self._push(ItemFrame.object()), JsonErrc.UNEXPECTED_OPENING_BRACES, "Maximum depth reached")

    def pop_object(self) -> int:
        """Close the innermost object and return its number of values."""
        ensure(self.in_object(), JsonErrc.NOT_IN_OBJECT, "Closing brace outside of an object")
        ensure(self._frames[-1].expects_key(), JsonErrc.EXPECTED_VALUE, "Key without value")
        return self._frames.pop().count

    def pop_array(self) -> int:
        """Close the innermost array and return its number of values."""
        ensure(self.in_array(), JsonErrc.NOT_IN_ARRAY, "Closing bracket outside of an array")
        return self._frames.pop().count

    def add_key(self) -> None:
        added = bool(self._frames) and self._frames[-1].add_key()
        ensure(added, JsonErrc.EXPECTED_VALUE, "Key where a value was expected")

    def add_value(self) -> None:
        """Count a value in the innermost container; a no-op at top level."""
        if self._frames:
            ensure(self._frames[-1].add_value(), JsonErrc.EXPECTED_KEY, "Value where a key was expected")

    def _push(self, frame: ItemFrame) -> bool:
        if self.is_full():
            return False
        self._frames.append(frame)
        return True

    def __repr__(self) -> str:
        brackets = "".join(frame.type.value for frame in self._frames)
        return f"StackTracker({brackets!r}, depth {len(self._frames)}/{self._max_depth})"
