"""Boxed vector element handed out by object-dtype conversions."""

from __future__ import annotations

import functools
import numbers
from typing import Any

import numpy as np

from tagvec.config import get_settings


@functools.total_ordering
class VectorScalar:
    """One non-missing element together with its tag.

    ``str()`` renders through the kind's display rule, so object arrays and
    the pandas table printer show ``33.3%`` rather than ``0.333``. Compares
    like the underlying float; no arithmetic.
    """

    __slots__ = ("value", "dtype")

    def __init__(self, value: float, dtype: Any) -> None:
        self.value = float(value)
        self.dtype = dtype

    def __float__(self) -> float:
        return self.value

    @staticmethod
    def _other(other: Any) -> float | None:
        if isinstance(other, VectorScalar):
            return other.value
        if isinstance(other, (bool, np.bool_)) or not isinstance(other, numbers.Real):
            return None
        return float(other)

    def __eq__(self, other: Any) -> bool:
        v = self._other(other)
        return NotImplemented if v is None else self.value == v

    def __lt__(self, other: Any) -> bool:
        v = self._other(other)
        return NotImplemented if v is None else self.value < v

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.dtype.format_scalar(self.value, get_settings())

    def __repr__(self) -> str:
        return f"{self.dtype.tag}({self.value!r})"
