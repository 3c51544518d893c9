"""Decimal vectors: finite numbers displayed with a fixed number of decimals.

The number of decimals is a parameter of the tag, so ``decimal[2]`` and
``decimal[4]`` are different dtypes. Concatenating them keeps the larger one.
"""

from __future__ import annotations

import re
from typing import Any

import numpy as np
from pandas.api.extensions import register_extension_dtype

from tagvec.base import ValidatedArray, ValidatedDtype
from tagvec.config import get_settings
from tagvec.schema import DisplaySettings


_NAME_RE = re.compile(r"^decimal(?:\[(?P<digits>\d+)\])?$")


@register_extension_dtype
class DecimalDtype(ValidatedDtype):
    """Tag of decimal vectors, parameterised by ``digits``."""

    tag = "decimal"
    abbr = "dec"
    _metadata = ("digits",)

    def __init__(self, digits: int | None = None) -> None:
        if digits is None:
            digits = get_settings().decimal_digits
        digits = int(digits)
        if digits < 0:
            raise ValueError(f"digits must be >= 0, got {digits}")
        self.digits = digits

    @property
    def name(self) -> str:
        return f"decimal[{self.digits}]"

    @classmethod
    def construct_from_string(cls, string: str) -> "DecimalDtype":
        if not isinstance(string, str):
            raise TypeError(f"'construct_from_string' expects a string, got {type(string)}")
        m = _NAME_RE.match(string)
        if m is None:
            raise TypeError(f"Cannot construct a 'DecimalDtype' from '{string}'")
        digits = m.group("digits")
        return cls(int(digits) if digits is not None else None)

    def format_scalar(self, value: float, settings: DisplaySettings) -> str:
        # round first so small negatives print as 0.00, not -0.00
        return f"{round(value, self.digits) + 0.0:.{self.digits}f}"

    @classmethod
    def construct_array_type(cls) -> type["DecimalArray"]:
        return DecimalArray

    def _get_common_dtype(self, dtypes: list) -> Any:
        if all(isinstance(d, DecimalDtype) for d in dtypes):
            return DecimalDtype(max(d.digits for d in dtypes))
        return super()._get_common_dtype(dtypes)


class DecimalArray(ValidatedArray):
    """Validated vector of finite numbers, missing elements allowed."""

    _dtype_cls = DecimalDtype


def new_decimal(values: np.ndarray | None = None, digits: int | None = None) -> DecimalArray:
    return DecimalArray._simple_new(values, dtype=DecimalDtype(digits))


def decimal(values: Any = (), digits: int | None = None) -> DecimalArray:
    return DecimalArray(values, dtype=DecimalDtype(digits))


def is_decimal(x: Any) -> bool:
    return isinstance(x, DecimalArray)


def as_decimal(x: Any, digits: int | None = None) -> DecimalArray:
    """Cast ``x`` to a decimal vector; text cells (``"1.25"``, ``"NA"``) are parsed."""
    if isinstance(x, DecimalArray) and (digits is None or x.dtype.digits == digits):
        return x
    if digits is None and isinstance(x, DecimalArray):
        digits = x.dtype.digits
    if isinstance(x, str):
        x = [x]
    if isinstance(x, (list, tuple)) and any(isinstance(v, str) for v in x):
        return DecimalArray._from_sequence_of_strings(list(x), dtype=DecimalDtype(digits))
    return decimal(x, digits=digits)
