"""Test the structural validator's frame state machine."""

import pytest

from strictsax.errors import JsonErrc, JsonError
from strictsax.stack_tracker import ContainerType, Expectation, ItemFrame, StackTracker


def assert_fails(code, operation, *args):
    with pytest.raises(JsonError) as exc_info:
        operation(*args)
    assert exc_info.value.code == code


class TestItemFrame:
    def test_object_alternates_key_and_value(self):
        frame = ItemFrame.object()

        assert frame.expects_key()
        assert frame.add_key()
        assert frame.expects_value()
        assert frame.add_value()
        assert frame.expects_key()
        assert frame.count == 1

    def test_object_value_without_key(self):
        frame = ItemFrame.object()

        assert not frame.add_value()

    def test_array_always_expects_value(self):
        frame = ItemFrame.array()

        assert frame.add_value()
        assert frame.add_value()
        assert frame.expectation is Expectation.VALUE
        assert frame.count == 2
        assert not frame.add_key()


class TestStackTracker:
    def test_empty_tracker(self):
        tracker = StackTracker()

        assert tracker.is_empty()
        assert tracker.depth == 0
        assert not tracker.in_array()
        assert not tracker.in_object()
        tracker.check_end_of_stream()

    def test_object_round_trip_returns_value_count(self):
        tracker = StackTracker()

        tracker.push_object()
        tracker.add_key()
        tracker.add_value()
        tracker.add_key()
        tracker.add_value()

        assert tracker.in_object()
        assert tracker.pop_object() == 2
        assert tracker.is_empty()

    def test_array_round_trip_returns_value_count(self):
        tracker = StackTracker()

        tracker.push_array()
        for _ in range(3):
            tracker.add_value()

        assert tracker.current_count() == 3
        assert tracker.pop_array() == 3

    def test_top_level_value_is_accepted(self):
        tracker = StackTracker()

        tracker.add_value()

        assert tracker.is_empty()

    def test_frames_snapshot(self):
        tracker = StackTracker()
        tracker.push_array()
        tracker.push_object()

        types = [frame.type for frame in tracker.frames]

        assert types == [ContainerType.ARRAY, ContainerType.OBJECT]

    def test_value_where_key_expected(self):
        tracker = StackTracker()
        tracker.push_object()

        assert_fails(JsonErrc.EXPECTED_KEY, tracker.add_value)

    def test_key_inside_array(self):
        tracker = StackTracker()
        tracker.push_array()

        assert_fails(JsonErrc.EXPECTED_VALUE, tracker.add_key)

    def test_key_at_top_level(self):
        assert_fails(JsonErrc.EXPECTED_VALUE, StackTracker().add_key)

    def test_key_after_key(self):
        tracker = StackTracker()
        tracker.push_object()
        tracker.add_key()

        assert_fails(JsonErrc.EXPECTED_VALUE, tracker.add_key)

    def test_closing_object_with_dangling_key(self):
        tracker = StackTracker()
        tracker.push_object()
        tracker.add_key()

        assert_fails(JsonErrc.EXPECTED_VALUE, tracker.pop_object)

    @pytest.mark.parametrize("setup", ["", "["])
    def test_closing_object_outside_object(self, setup):
        tracker = StackTracker()
        if setup:
            tracker.push_array()

        assert_fails(JsonErrc.NOT_IN_OBJECT, tracker.pop_object)

    @pytest.mark.parametrize("setup", ["", "{"])
    def test_closing_array_outside_array(self, setup):
        tracker = StackTracker()
        if setup:
            tracker.push_object()

        assert_fails(JsonErrc.NOT_IN_ARRAY, tracker.pop_array)

    def test_depth_limit(self):
        tracker = StackTracker(max_depth=2)
        tracker.push_array()
        tracker.push_object()

        assert tracker.is_full()
        assert_fails(JsonErrc.UNEXPECTED_OPENING_BRACKETS, tracker.push_array)
        assert_fails(JsonErrc.UNEXPECTED_OPENING_BRACES, tracker.push_object)
        assert tracker.depth == 2

    def test_end_of_stream_inside_array(self):
        tracker = StackTracker()
        tracker.push_object()
        tracker.add_key()
        tracker.add_value()
        tracker.push_array()

        assert_fails(JsonErrc.EXPECTED_CLOSING_BRACKETS, tracker.check_end_of_stream)

    def test_end_of_stream_inside_object(self):
        tracker = StackTracker()
        tracker.push_object()

        assert_fails(JsonErrc.EXPECTED_CLOSING_BRACES, tracker.check_end_of_stream)

    def test_separator_needs_a_container(self):
        tracker = StackTracker()

        assert_fails(JsonErrc.UNEXPECTED_ON_TOP_LEVEL, tracker.check_non_empty)
        tracker.push_array()
        tracker.check_non_empty()
