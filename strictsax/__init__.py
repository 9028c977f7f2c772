"""
strictsax - A strict, streaming SAX-style JSON reader.
"""

from .config import DEFAULT_CONFIG, ReaderConfig
from .document import JsonDocument
from .errors import ErrorCategory, JsonErrc, JsonError
from .json_parser import JsonParser
from .number import JsonNumber, NumberBase, NumericType
from .parser import Parser, validate
from .single_parsers import SingleArrayParser, SingleObjectParser
from .states import ParserState
from .strict_parser import StrictParser

__all__ = [
    'DEFAULT_CONFIG',
    'ErrorCategory',
    'JsonDocument',
    'JsonErrc',
    'JsonError',
    'JsonNumber',
    'JsonParser',
    'NumberBase',
    'NumericType',
    'Parser',
    'ParserState',
    'ReaderConfig',
    'SingleArrayParser',
    'SingleObjectParser',
    'StrictParser',
    'validate',
]
__version__ = '0.1.0'
