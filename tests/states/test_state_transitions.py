"""
State Transition Tests - Verify RUNNING/FINISHED transitions of the parse loop.

Tests that hooks drive the loop through their returned ParserState, that
sub-parses never end the caller's loop and that the stream cursor stays
where a finished or failed parse stopped.
"""

import pytest

from strictsax import JsonDocument, JsonErrc, JsonError, Parser, ParserState


class CaptureParser(Parser):
    """Parser that records hooks and finishes on a chosen event."""

    def __init__(self, document, finish_on=None):
        super().__init__(document)
        self.calls = []
        self.finish_on = finish_on

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name == self.finish_on:
            return ParserState.FINISHED
        return ParserState.RUNNING

    def on_start_object(self):
        return self._record('start_object')

    def on_end_object(self, count):
        return self._record('end_object', count)

    def on_start_array(self):
        return self._record('start_array')

    def on_end_array(self, count):
        return self._record('end_array', count)

    def on_key(self, key):
        return self._record('key', key)

    def on_string(self, value):
        return self._record('string', value)

    def on_comma(self):
        return self._record('comma')


def capture(text, finish_on=None):
    document = JsonDocument.from_string(text)
    parser = CaptureParser(document, finish_on)
    state = parser.parse()
    return document, parser, state


class TestRunningToFinished:
    """The loop runs until a hook finishes or the document ends."""

    def test_end_of_document_finishes(self):
        _, parser, state = capture('["a"]')

        assert state is ParserState.FINISHED
        assert parser.calls == [('start_array',), ('string', 'a'), ('end_array', 1)]

    def test_hook_finishes_before_document_ends(self):
        document, parser, state = capture('{"a": "x", "b": "y"}', finish_on='comma')

        assert state is ParserState.FINISHED
        assert parser.calls[-1] == ('comma',)
        assert document.tell() == 10
        assert document.state.depth == 1

    def test_parse_resumes_where_previous_parse_stopped(self):
        document, first, _ = capture('["a", "b"]', finish_on='string')

        second = CaptureParser(document, finish_on='string')
        second.parse()

        assert first.calls[-1] == ('string', 'a')
        assert second.calls == [('comma',), ('string', 'b')]

    def test_comma_is_reported_between_elements(self):
        _, parser, _ = capture('["a","b"]')

        assert [call[0] for call in parser.calls] == ['start_array', 'string', 'comma', 'string', 'end_array']


class TestSubParse:
    """A sub-parse always reports RUNNING to the caller."""

    def test_sub_parse_after_hook_finished(self):
        document = JsonDocument.from_string('"x"')

        assert CaptureParser(document, finish_on='string').sub_parse() is ParserState.RUNNING

    def test_sub_parse_inside_hook(self):
        class Outer(Parser):
            def __init__(self, document):
                super().__init__(document)
                self.inner_states = []

            def on_key(self, key):
                inner = CaptureParser(self.document, finish_on='string')
                self.inner_states.append(inner.sub_parse())
                return ParserState.RUNNING

        outer = Outer(JsonDocument.from_string('{"a": "x", "b": "y"}'))

        assert outer.parse() is ParserState.FINISHED
        assert outer.inner_states == [ParserState.RUNNING, ParserState.RUNNING]

    def test_sub_parse_failure_propagates(self):
        document = JsonDocument.from_string('{')

        with pytest.raises(JsonError) as exc_info:
            CaptureParser(document).sub_parse()

        assert exc_info.value.code == JsonErrc.EXPECTED_CLOSING_BRACES


class TestFailureStopsTheLoop:
    """A failing hook stops immediately; the cursor stays put."""

    def test_cursor_stays_at_failure(self):
        class RejectSecond(CaptureParser):
            def on_string(self, value):
                if value == "bad":
                    raise JsonError(JsonErrc.USER_VALIDATION_FAILED, "bad value")
                return super().on_string(value)

        document = JsonDocument.from_string('["ok", "bad", "never"]')
        parser = RejectSecond(document)

        with pytest.raises(JsonError) as exc_info:
            parser.parse()

        assert exc_info.value.offset == 12
        assert document.tell() == 12
        assert ('string', 'never') not in parser.calls
