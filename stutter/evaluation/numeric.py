"""Numeric coercion and the binary operator table.

Values are typed by their exact Python type: `bool` is a subclass of `int`
in Python but a separate Stutter type, so membership checks use `type(x) is`
rather than isinstance.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from stutter import LispValue
from stutter.errors import StutterArithmeticError, StutterTypeError
from stutter.printer import to_string
from stutter.reader.parser import Op

# Largest exponent accepted by pow on two Ints, and largest range span
# (unsigned 64-bit size type).
SIZE_MAX = 2**64 - 1

# Range endpoints must fit a signed 64-bit integer.
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


def is_int(value: LispValue) -> bool:
    return type(value) is int


def is_dec(value: LispValue) -> bool:
    return type(value) is float


def is_bool(value: LispValue) -> bool:
    return type(value) is bool


def is_list(value: LispValue) -> bool:
    return type(value) is list


def to_dec(n: int) -> float:
    try:
        return float(n)
    except OverflowError:
        raise StutterArithmeticError("failed to represent Int as Dec") from None


def to_size(n: int) -> int:
    if n < 0 or n > SIZE_MAX:
        raise StutterArithmeticError(f"failed to represent Int as size: {n}")
    return n


def to_i64(n: int) -> int:
    if n < I64_MIN or n > I64_MAX:
        raise StutterArithmeticError(f"failed to represent Int as i64: {n}")
    return n


def _int_div(a: int, b: int) -> float:
    if b == 0:
        raise StutterArithmeticError("division by zero")
    return to_dec(a) / to_dec(b)


def _int_mod(a: int, b: int) -> int:
    # Truncated remainder: the sign follows the dividend.
    if b == 0:
        raise StutterArithmeticError("modulo by zero")
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def _int_pow(a: int, b: int) -> int:
    return a ** to_size(b)


def _finite(name: str, fn: Callable[[float, float], float]) -> Callable[[float, float], float]:
    """Dec results that overflow from finite operands are errors, not IEEE inf."""

    def checked(a: float, b: float) -> float:
        result = fn(a, b)
        if not math.isfinite(result) and math.isfinite(a) and math.isfinite(b):
            raise StutterArithmeticError(f"{name} {a!r} {b!r}: Dec overflow")
        return result

    return checked


def _dec_div(a: float, b: float) -> float:
    if b == 0.0:
        raise StutterArithmeticError("division by zero")
    return a / b


def _dec_mod(a: float, b: float) -> float:
    if b == 0.0:
        raise StutterArithmeticError("modulo by zero")
    return math.fmod(a, b)


def _dec_pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except (OverflowError, ValueError) as exc:
        raise StutterArithmeticError(f"pow {a} {b}: {exc}") from None


_COMPARISONS: dict[Op, Callable] = {
    Op.GT: operator.gt,
    Op.LT: operator.lt,
    Op.EQ: operator.eq,
    Op.GTE: operator.ge,
    Op.LTE: operator.le,
}

INT_OPS: dict[Op, Callable[[int, int], LispValue]] = {
    Op.ADD: operator.add,
    Op.SUB: operator.sub,
    Op.MUL: operator.mul,
    Op.DIV: _int_div,
    Op.MOD: _int_mod,
    Op.POW: _int_pow,
    **_COMPARISONS,
}

DEC_OPS: dict[Op, Callable[[float, float], LispValue]] = {
    Op.ADD: _finite("+", operator.add),
    Op.SUB: _finite("-", operator.sub),
    Op.MUL: _finite("*", operator.mul),
    Op.DIV: _finite("/", _dec_div),
    Op.MOD: _dec_mod,
    Op.POW: _dec_pow,
    **_COMPARISONS,
}

ARITHMETIC_OPS = frozenset(INT_OPS)


def apply_binary(op: Op, left: LispValue, right: LispValue) -> LispValue:
    """Apply one arithmetic/comparison step, promoting Int to Dec when mixed."""
    if is_int(left) and is_int(right):
        return INT_OPS[op](left, right)
    if is_dec(left) and is_dec(right):
        return DEC_OPS[op](left, right)
    if is_int(left) and is_dec(right):
        return DEC_OPS[op](to_dec(left), right)
    if is_dec(left) and is_int(right):
        return DEC_OPS[op](left, to_dec(right))

    raise StutterTypeError(
        f"incompatible types: ({op} {to_string(left)} {to_string(right)}) not supported"
    )
