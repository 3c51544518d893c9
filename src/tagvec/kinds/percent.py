"""Percent vectors: proportions in ``[0, 1]`` displayed as ``33.3%``.

``new_percent`` is the low-level constructor (representation check only),
``percent`` the user-facing one (numeric + range check, names/shape dropped).

Example:
    >>> x = percent([0, 1 / 3, 2 / 3, 1, None])
    >>> x.format()
    ['0%', '33.3%', '66.7%', '100%', '<NA>']
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pandas.api.extensions import register_extension_dtype
from rich.text import Text

from tagvec.base import ValidatedArray, ValidatedDtype
from tagvec.contracts.units import percent_from_text
from tagvec.schema import DisplaySettings


@register_extension_dtype
class PercentDtype(ValidatedDtype):
    """Tag of percent vectors."""

    name = "percent"
    tag = "percent"
    abbr = "pct"
    lower = 0.0
    upper = 1.0

    def format_scalar(self, value: float, settings: DisplaySettings) -> str:
        # + 0.0 turns -0.0 into 0.0
        return f"{value * 100 + 0.0:.{settings.percent_digits}g}{settings.percent_suffix}"

    @classmethod
    def construct_array_type(cls) -> type["PercentArray"]:
        return PercentArray


class PercentArray(ValidatedArray):
    """Validated vector of proportions, missing elements allowed."""

    _dtype_cls = PercentDtype

    def rich_cell(self, text: str, value: Any) -> Text:
        if value is None or value is self.dtype.na_value:
            return Text(text, style="dim red")
        return Text(text, style="cyan")

    @classmethod
    def _parse_text(cls, text: str | None, settings: DisplaySettings) -> float:
        # "12.5%" is a display value, "0.125" a proportion
        return percent_from_text(text, suffix=settings.percent_suffix)


def new_percent(values: np.ndarray | None = None) -> PercentArray:
    """Low-level constructor: ``values`` must be a 1-D float64 ndarray; no range check."""
    return PercentArray._simple_new(values)


def percent(values: Any = ()) -> PercentArray:
    """User-facing constructor.

    Raises :class:`~tagvec.errors.VectorTypeError` for non-numeric input and
    :class:`~tagvec.errors.DomainError` for non-missing values outside
    ``[0, 1]``. Element names (Series index, mapping keys) and shape are
    dropped.
    """
    return PercentArray(values)


def is_percent(x: Any) -> bool:
    return isinstance(x, PercentArray)


def as_percent(x: Any) -> PercentArray:
    """Cast ``x`` to a percent vector.

    Percent vectors are returned as-is; text (``"33.3%"``) is parsed; anything
    else goes through :func:`percent`.
    """
    if isinstance(x, PercentArray):
        return x
    if isinstance(x, str):
        return PercentArray._from_sequence_of_strings([x])
    if isinstance(x, (list, tuple)) and any(isinstance(v, str) for v in x):
        return PercentArray._from_sequence_of_strings(list(x))
    return percent(x)
