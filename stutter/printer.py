"""Rendering of evaluated values as Stutter source-like text."""

from __future__ import annotations

from io import StringIO

from stutter import LispValue
from stutter.config import unlimited_int_digits
from stutter.types.lambda_fn import Lambda
from stutter.types.nil import NilType
from stutter.types.symbol import Symbol


def _write(value: LispValue, buffer: StringIO) -> None:
    if isinstance(value, NilType):
        buffer.write("Nil")
    elif type(value) is bool:
        buffer.write("True" if value else "False")
    elif type(value) is int:
        buffer.write(str(value))
    elif type(value) is float:
        buffer.write(repr(value))
    elif isinstance(value, Lambda):
        buffer.write("<lambda>")
    elif isinstance(value, list):
        buffer.write("(")
        for i, item in enumerate(value):
            if i:
                buffer.write(" ")
            _write(item, buffer)
        buffer.write(")")
    elif isinstance(value, Symbol):
        buffer.write(value.id)
    else:
        raise TypeError(f"not a Stutter value: {value!r}")


def to_string(value: LispValue) -> str:
    """Render `value`: Nil, digits, repr(float), True/False, (a b c), <lambda>."""
    with StringIO() as buffer, unlimited_int_digits():
        _write(value, buffer)
        return buffer.getvalue()
