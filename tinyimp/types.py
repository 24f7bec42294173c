"""Runtime value helpers for Tinyimp.

Tinyimp values are plain Python objects: ``int`` (kept within the signed
64-bit range), ``float``, ``bool``, ``str`` and ``None`` for the absence of a
value. This module names those types, renders them as text and provides the
numeric helpers shared by the interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any
import math
import struct


INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1


@dataclass
class ErrorVal:
    """Payload of a Tinyimp runtime error.

    `name` is the error kind (for example 'UndefinedVariable') and
    `message` is a human readable description.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


def wrap_int(n: int) -> int:
    """Fold an arbitrary Python int into the signed 64-bit range."""
    return ((n - INT_MIN) % (1 << 64)) + INT_MIN


def is_int(value: Any) -> bool:
    # bool is a subclass of int; Tinyimp keeps them apart
    return isinstance(value, int) and not isinstance(value, bool)


def is_float(value: Any) -> bool:
    return isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the Tinyimp type name of a runtime value."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, int):
        return 'int'
    if isinstance(value, float):
        return 'float'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def _shortest_digits(text: str):
    digits_tuple, exponent = Decimal(text).as_tuple()[1:]
    digits = ''.join(str(d) for d in digits_tuple)
    stripped = digits.rstrip('0')
    return stripped, exponent + len(digits) - len(stripped)


def format_double(x: float) -> str:
    """Render a float the way the JVM's ``Double.toString`` does.

    Magnitudes in [1e-3, 1e7) use plain decimal notation with at least one
    fractional digit; everything else uses ``d.dddE<exp>``. The digits are
    the shortest ones that round-trip, which is what ``repr`` produces,
    except that a single digit is replaced by the closest two digit
    decimal, so ``5e-324`` renders as ``4.9E-324``.
    """
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'Infinity' if x > 0 else '-Infinity'
    sign = '-' if math.copysign(1.0, x) < 0 else ''
    if x == 0.0:
        return sign + '0.0'
    digits, exponent = _shortest_digits(repr(abs(x)))
    if len(digits) == 1:
        digits, exponent = _shortest_digits(f"{abs(x):.1e}")
    # decimal exponent of the leading digit
    sci_exp = len(digits) - 1 + exponent
    if 1e-3 <= abs(x) < 1e7:
        point = sci_exp + 1
        if point <= 0:
            text = '0.' + '0' * (-point) + digits
        elif point >= len(digits):
            text = digits + '0' * (point - len(digits)) + '.0'
        else:
            text = digits[:point] + '.' + digits[point:]
        return sign + text
    mantissa = digits[0] + '.' + (digits[1:] or '0')
    return f"{sign}{mantissa}E{sci_exp}"


def to_string(value: Any) -> str:
    """Convert a Tinyimp value to its printed form."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_double(value)
    if isinstance(value, str):
        return value
    return str(value)


def values_equal(a: Any, b: Any) -> bool:
    """Equality without coercion.

    Values of different runtime types are never equal. Floats compare by
    bit pattern with NaN canonicalised, so NaN equals NaN and 0.0 does not
    equal -0.0.
    """
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, float):
        if math.isnan(a) and math.isnan(b):
            return True
        return struct.pack('>d', a) == struct.pack('>d', b)
    return a == b
