"""
Number - Radix-aware conversion of numeric lexemes.

A JsonNumber is an immutable view over the raw characters of a number
together with the radix detected while scanning it. Conversion to a
concrete numeric type happens on demand and yields None whenever the
lexeme is not fully consumed or the value does not fit the target.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Optional, Union

from .errors import JsonErrc, make_error


class NumberBase(Enum):
    """Radix of a numeric lexeme."""

    AUTO_DETECT = "auto_detect"
    ZERO_ONLY = "zero_only"
    BINARY = "binary"
    OCTAL = "octal"
    DECIMAL = "decimal"
    HEX = "hex"

    @property
    def radix(self) -> int:
        """Numeric radix; 0 for AUTO_DETECT and ZERO_ONLY."""
        return _RADIX[self]


_RADIX = {
    NumberBase.AUTO_DETECT: 0,
    NumberBase.ZERO_ONLY: 0,
    NumberBase.BINARY: 2,
    NumberBase.OCTAL: 8,
    NumberBase.DECIMAL: 10,
    NumberBase.HEX: 16,
}

OCTAL_DIGITS = "01234567"
DECIMAL_DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"

_DIGITS = {
    NumberBase.BINARY: "01",
    NumberBase.OCTAL: OCTAL_DIGITS,
    NumberBase.DECIMAL: DECIMAL_DIGITS,
    NumberBase.HEX: HEX_DIGITS,
}

_INTEGER_PATTERNS = {
    2: re.compile(r"[+-]?[01]+"),
    8: re.compile(r"[+-]?0[0-7]*"),
    10: re.compile(r"[+-]?[0-9]+"),
    16: re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+"),
}
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Range of the widest integer conversions (strtoll / strtoull).
_SIGNED_MIN = -(2 ** 63)
_SIGNED_MAX = 2 ** 63 - 1
_UNSIGNED_MAX = 2 ** 64 - 1


def is_digit(char: str, base: NumberBase) -> bool:
    """Check whether char is a digit of the given base."""
    digits = _DIGITS.get(base)
    return bool(char) and digits is not None and char in digits


def detect_base(lexeme: str) -> NumberBase:
    """
    Detect the radix of a numeric lexeme from its leading characters.

    0x/0X starts a hex number, 0 followed by '.', 'e' or 'E' a decimal
    float, 0 followed by an octal digit an octal number. A lone 0 is
    ZERO_ONLY. A leading sign is ignored.
    """
    body = lexeme[1:] if lexeme[:1] in "+-" else lexeme
    if body[:1] != "0":
        return NumberBase.DECIMAL
    follower = body[1:2]
    if not follower:
        return NumberBase.ZERO_ONLY
    if follower in "xX":
        return NumberBase.HEX
    if follower in ".eE":
        return NumberBase.DECIMAL
    if follower in OCTAL_DIGITS[1:]:
        return NumberBase.OCTAL
    return NumberBase.ZERO_ONLY


@dataclass(frozen=True)
class NumericType:
    """
    Target type of a number conversion.

    kind is one of "signed", "unsigned", "float" or "bool".
    """

    name: str
    kind: str
    minimum: Union[int, float] = 0
    maximum: Union[int, float] = 0

    def contains(self, value: Union[int, float]) -> bool:
        return self.minimum <= value <= self.maximum


INT8 = NumericType("int8", "signed", -(2 ** 7), 2 ** 7 - 1)
INT16 = NumericType("int16", "signed", -(2 ** 15), 2 ** 15 - 1)
INT32 = NumericType("int32", "signed", -(2 ** 31), 2 ** 31 - 1)
INT64 = NumericType("int64", "signed", _SIGNED_MIN, _SIGNED_MAX)
UINT8 = NumericType("uint8", "unsigned", 0, 2 ** 8 - 1)
UINT16 = NumericType("uint16", "unsigned", 0, 2 ** 16 - 1)
UINT32 = NumericType("uint32", "unsigned", 0, 2 ** 32 - 1)
UINT64 = NumericType("uint64", "unsigned", 0, _UNSIGNED_MAX)
FLOAT32 = NumericType("float32", "float", -3.4028234663852886e38, 3.4028234663852886e38)
FLOAT64 = NumericType("float64", "float", -math.inf, math.inf)
BOOL = NumericType("bool", "bool", 0, 1)

_BUILTIN_TYPES = {int: INT64, float: FLOAT64, bool: BOOL}

Target = Union[NumericType, type]


def resolve_type(target: Target) -> NumericType:
    """Map int, float and bool to their NumericType; pass NumericType through."""
    if isinstance(target, NumericType):
        return target
    try:
        return _BUILTIN_TYPES[target]
    except (KeyError, TypeError):
        raise TypeError(f"Unsupported number target: {target!r}") from None


@dataclass(frozen=True)
class JsonNumber:
    """
    Raw numeric lexeme plus its radix.

    Attributes:
        lexeme: The characters of the number exactly as read.
        base: Radix detected while scanning; AUTO_DETECT detects it here.
    """

    lexeme: str
    base: NumberBase = NumberBase.AUTO_DETECT

    def __post_init__(self) -> None:
        if not self.lexeme:
            raise ValueError("A number needs at least one character")

    @property
    def effective_base(self) -> NumberBase:
        if self.base is NumberBase.AUTO_DETECT:
            return detect_base(self.lexeme)
        return self.base

    def as_type(self, target: Target) -> Optional[Any]:
        """Convert to target; None if the lexeme does not represent such a value."""
        numeric_type = resolve_type(target)
        if numeric_type.kind == "bool":
            return self._as_bool()
        if numeric_type.kind == "float":
            return self._as_float(numeric_type)
        return self._as_integer(numeric_type)

    def try_as_type(self, target: Target) -> Any:
        """Convert to target or raise INVALID_NUMBER."""
        value = self.as_type(target)
        if value is None:
            raise make_error(JsonErrc.INVALID_NUMBER, f"Could not convert {self.lexeme!r} to {resolve_type(target).name}")
        return value

    def convert(self, parser: Callable[[str], Any]) -> Any:
        """Apply a custom conversion to the raw lexeme."""
        return parser(self.lexeme)

    def _as_bool(self) -> Optional[bool]:
        if self.lexeme == "1":
            return True
        if self.lexeme == "0":
            return False
        return None

    def _as_integer(self, numeric_type: NumericType) -> Optional[int]:
        signed = numeric_type.kind == "signed"
        if not signed and self.lexeme.startswith("-"):
            return None

        value = self._integer_value()
        if value is None:
            return None
        if signed and not _SIGNED_MIN <= value <= _SIGNED_MAX:
            return None
        if not signed and not 0 <= value <= _UNSIGNED_MAX:
            return None
        return value if numeric_type.contains(value) else None

    def _integer_value(self) -> Optional[int]:
        base = self.effective_base
        radix = base.radix or 10
        if _INTEGER_PATTERNS[radix].fullmatch(self.lexeme):
            # int() refuses very long decimal strings; such values are out of range anyway.
            if radix == 10:
                digits = self.lexeme.lstrip("+-").lstrip("0") or "0"
                if len(digits) > len(str(_UNSIGNED_MAX)):
                    return None
                return -int(digits) if self.lexeme.startswith("-") else int(digits)
            return int(self.lexeme, radix)

        # A decimal lexeme with fraction or exponent converts if its exact
        # value is integral.
        if base in (NumberBase.DECIMAL, NumberBase.ZERO_ONLY) and _FLOAT_PATTERN.fullmatch(self.lexeme):
            try:
                exact = Decimal(self.lexeme)
            except InvalidOperation:
                return None
            if exact.is_finite() and exact == exact.to_integral_value():
                if exact.adjusted() > len(str(_UNSIGNED_MAX)):
                    return None
                return int(exact)
        return None

    def _as_float(self, numeric_type: NumericType) -> Optional[float]:
        if self.effective_base not in (NumberBase.DECIMAL, NumberBase.ZERO_ONLY):
            return None
        if not _FLOAT_PATTERN.fullmatch(self.lexeme):
            return None

        value = float(self.lexeme)
        if math.isinf(value):
            return None
        if value == 0.0 and Decimal(self.lexeme) != 0:
            return None
        return value if numeric_type.contains(value) else None

    def __str__(self) -> str:
        return self.lexeme
