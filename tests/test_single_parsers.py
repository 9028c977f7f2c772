"""Test the single-object and single-array parsers and their level validation."""

import pytest

from strictsax import JsonDocument, JsonErrc, JsonError, ParserState, SingleArrayParser, SingleObjectParser
from strictsax.errors import make_error
from strictsax.single_parsers import LevelValidator


class ServerConfigParser(SingleObjectParser):
    """Reads a flat server configuration object."""

    def __init__(self, document):
        super().__init__(document)
        self.settings = {}
        self.finalized = 0

    def on_key(self, key):
        if key == "host":
            return self.parse_string(lambda value: self.settings.update(host=value))
        if key == "port":
            return self.parse_number(int, lambda value: self.settings.update(port=value))
        if key == "debug":
            return self.parse_bool(lambda value: self.settings.update(debug=value))
        if key == "tags":
            self.settings["tags"] = []
            return self.parse_string_array(self.settings["tags"].append)
        return ParserState.RUNNING

    def finalize(self):
        self.finalized += 1
        if "host" not in self.settings:
            raise make_error(JsonErrc.USER_VALIDATION_FAILED, "host is required")


def run(parser_class, text):
    parser = parser_class(JsonDocument.from_string(text))
    state = parser.parse()
    return parser, state


def fails(parser_class, text):
    with pytest.raises(JsonError) as exc_info:
        run(parser_class, text)
    assert exc_info.value.code == JsonErrc.USER_VALIDATION_FAILED
    return exc_info.value


class TestLevelValidator:
    def test_enter_then_leave(self):
        validator = LevelValidator()

        assert validator.enter() is ParserState.RUNNING
        assert validator.is_entered()
        assert validator.leave() is ParserState.FINISHED
        assert not validator.is_entered()

    def test_nested_enter(self):
        validator = LevelValidator()
        validator.enter()

        with pytest.raises(JsonError) as exc_info:
            validator.enter()
        assert exc_info.value.message == "Did not expect nested elements"

    def test_leave_without_enter(self):
        with pytest.raises(JsonError) as exc_info:
            LevelValidator().leave()
        assert exc_info.value.message == "Cannot leave level"


class TestSingleObjectParser:
    def test_reads_all_keys(self):
        parser, state = run(
            ServerConfigParser,
            '{"host": "localhost", "port": 0x1F90, "debug": true, "tags": ["a", "b"]}',
        )

        assert state is ParserState.FINISHED
        assert parser.settings == {"host": "localhost", "port": 8080, "debug": True, "tags": ["a", "b"]}
        assert parser.finalized == 1

    def test_finalize_can_reject_the_object(self):
        error = fails(ServerConfigParser, '{"port": 1}')

        assert error.message == "host is required"

    def test_stops_after_the_object(self):
        document = JsonDocument.from_string('{"host": "a"} {"host": "b"}')

        first = ServerConfigParser(document)
        first.parse()
        second = ServerConfigParser(document)
        second.parse()

        assert first.settings == {"host": "a"}
        assert second.settings == {"host": "b"}

    def test_unconsumed_nested_object(self):
        error = fails(ServerConfigParser, '{"host": "x", "extra": {}}')

        assert error.message == "Did not expect nested elements"

    def test_unconsumed_value(self):
        error = fails(ServerConfigParser, '{"host": "x", "extra": 1}')

        assert error.message == "Expected to parse an object."

    def test_array_instead_of_object(self):
        error = fails(ServerConfigParser, '[1]')

        assert error.message == "SingleObjectParser: Did not expect start of array."

    def test_unconsumed_array_value(self):
        error = fails(ServerConfigParser, '{"host": "x", "extra": [1]}')

        assert error.message == "SingleObjectParser: Did not expect start of array."

    def test_wrong_value_type_for_key(self):
        with pytest.raises(JsonError) as exc_info:
            run(ServerConfigParser, '{"port": "8080"}')

        assert exc_info.value.message == "Expected to parse a number."


class NameListParser(SingleArrayParser):
    """Reads an array of at least two names."""

    def __init__(self, document):
        super().__init__(document)
        self.names = []
        self.indexes = []

    def on_element(self):
        self.indexes.append(self.index)
        return self.parse_string(self.names.append)

    def finalize(self):
        if self.index < 2:
            raise make_error(JsonErrc.USER_VALIDATION_FAILED, "need at least two names")


class TestSingleArrayParser:
    def test_reads_elements(self):
        parser, state = run(NameListParser, '["ada", "grace", "linus"]')

        assert state is ParserState.FINISHED
        assert parser.names == ["ada", "grace", "linus"]
        assert parser.indexes == [0, 1, 2]
        assert parser.index == 3

    def test_finalize_checks_minimum_count(self):
        error = fails(NameListParser, '["ada"]')

        assert error.message == "need at least two names"

    def test_empty_array_still_finalizes(self):
        error = fails(NameListParser, '[]')

        assert error.message == "need at least two names"

    def test_object_instead_of_array(self):
        error = fails(NameListParser, '{}')

        assert error.message == "SingleArrayParser: Did not expect start of object."

    def test_default_element_handler_rejects(self):
        error = fails(SingleArrayParser, '[1]')

        assert error.message == "Expected to parse an array of elements."

    def test_empty_array_without_element_handler(self):
        parser, state = run(SingleArrayParser, '[]')

        assert state is ParserState.FINISHED
        assert parser.index == 0
