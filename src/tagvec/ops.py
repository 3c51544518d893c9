"""Module-level operations on validated vectors.

These are thin functions over :class:`~tagvec.base.ValidatedArray` methods,
plus the two that need an outside collaborator: printing (rich console) and
coercion to a one-column :class:`pandas.DataFrame`.
"""

from __future__ import annotations

import inspect
from typing import Any

import pandas as pd
from rich.console import Console

from tagvec.base import ValidatedArray, ValidatedDtype
from tagvec.errors import VectorTypeError


def _require_vector(x: Any, op: str) -> ValidatedArray:
    if isinstance(x, pd.Series):
        x = x.array
    if not isinstance(x, ValidatedArray):
        raise VectorTypeError(f"{op}: expected a validated vector, got {type(x).__name__}", code="NOT_VECTOR")
    return x


def subset_read(x: ValidatedArray, indices: Any) -> ValidatedArray:
    return _require_vector(x, "subset_read").subset_read(indices)


def subset_write(x: ValidatedArray, indices: Any, value: Any) -> ValidatedArray:
    return _require_vector(x, "subset_write").subset_write(indices, value)


def format_vector(x: ValidatedArray) -> list[str]:
    return _require_vector(x, "format").format()


def type_summary(x: Any) -> str:
    """Short column tag (``"pct"``), also accepted: a Series or a dtype."""
    if isinstance(x, ValidatedDtype):
        return x.abbr
    return _require_vector(x, "type_summary").type_summary()


def print_vector(x: ValidatedArray, *, console: Console | None = None) -> ValidatedArray:
    """Write the type banner, then the formatted values (skipped when empty).

    Returns ``x`` unchanged so calls can be chained.
    """
    vec = _require_vector(x, "print")
    console = console or Console()
    console.print(vec.banner(), markup=False, highlight=False, soft_wrap=True)
    if len(vec):
        console.print(" ".join(vec.format()), markup=False, highlight=False, soft_wrap=True)
    return x


def _bound_name(obj: Any, depth: int) -> str | None:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                return None
            frame = frame.f_back
        if frame is None:
            return None
        for scope in (frame.f_locals, frame.f_globals):
            names = sorted(n for n, v in scope.items() if v is obj and not n.startswith("_"))
            if names:
                return names[0]
        return None
    finally:
        del frame


def as_data_frame(x: ValidatedArray, column_name: str | None = None, *, _depth: int = 1) -> pd.DataFrame:
    """Wrap ``x`` as the single column of a data frame.

    ``column_name=None`` names the column after the caller's variable holding
    ``x``, falling back to the tag; ``column_name=""`` gives an anonymous
    column. Local variables are searched before module globals; when several
    names in the same scope refer to ``x`` (``a = b = percent(...)``) the
    alphabetically first one is used.
    """
    vec = _require_vector(x, "as_data_frame")
    if column_name is None:
        column_name = _bound_name(x, _depth) or vec.dtype.tag
    return pd.DataFrame({column_name: pd.Series(vec, copy=False)})
