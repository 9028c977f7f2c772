import sys
sys.path.insert(0, '..')

from strictsax import JsonDocument, JsonError, JsonParser, SingleObjectParser

config_message = '''
{
    "name": "gateway",
    "port": 0x1F90,
    "retries": 3,
    "verbose": false,
    "hosts": ["alpha", "beta"]
}
'''


class ServiceConfigParser(SingleObjectParser):
    def __init__(self, document):
        super().__init__(document)
        self.settings = {"hosts": []}

    def on_key(self, key):
        if key == "name":
            return self.parse_string(lambda value: self.settings.update(name=value))
        if key in ("port", "retries"):
            return self.parse_number(int, lambda value: self.settings.update({key: value}))
        if key == "verbose":
            return self.parse_bool(lambda value: self.settings.update(verbose=value))
        if key == "hosts":
            return self.parse_string_array(self.settings["hosts"].append)
        return self.on_unexpected_event()

    def finalize(self):
        print(f"read {len(self.settings)} settings")


parser = ServiceConfigParser(JsonDocument.from_string(config_message))
parser.parse()
print(parser.settings)

# Fluent style for small documents of a fixed shape
values = {}
JsonParser(JsonDocument.from_string('{"a": 1, "b": [true, false]}')) \
    .start_object() \
    .key("a").number(int, lambda value: values.update(a=value)) \
    .key("b").bool_array(lambda value: values.setdefault("b", []).append(value)) \
    .end_object() \
    .finish()
print(values)

try:
    JsonParser(JsonDocument.from_string('{"a": }')) \
        .start_object() \
        .key("a").number(int, print) \
        .add_error_info("while reading 'a'") \
        .finish()
except JsonError as exc:
    print(f"{exc.code.name}: {exc}")
