"""Payload validators for validated vectors.

These validators are called at the two construction boundaries:

- :func:`require_raw_payload` guards the low-level constructor. It checks the
  representation only (1-D ``float64`` ndarray) and never looks at values.
- :func:`coerce_numeric` + :func:`require_in_range` guard the user-facing
  constructor and every replacement value on write.

Hard-fail policy
----------------
Violations raise :class:`~tagvec.errors.VectorTypeError` or
:class:`~tagvec.errors.DomainError`. Nothing is written before validation
succeeds.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import math
import numbers
from typing import Any

import numpy as np
import pandas as pd
from pandas.api.extensions import ExtensionArray
from pandas.api.types import is_bool_dtype, is_list_like, is_numeric_dtype, is_object_dtype, is_scalar

from tagvec.errors import DomainError, VectorTypeError
from tagvec.scalar import VectorScalar


log = logging.getLogger(__name__)


def empty_payload() -> np.ndarray:
    return np.empty(0, dtype=np.float64)


def is_missing_scalar(value: Any) -> bool:
    """True for the scalars accepted as the missing marker."""
    if value is None or value is pd.NA:
        return True
    return isinstance(value, float) and math.isnan(value)


def require_raw_payload(values: Any, *, kind: str) -> np.ndarray:
    """Check the representation handed to a low-level constructor."""

    if values is None:
        return empty_payload()
    if not isinstance(values, np.ndarray):
        raise VectorTypeError(
            f"{kind}: raw payload must be a numpy ndarray, got {type(values).__name__}",
            code="RAW_TYPE",
        )
    if values.dtype != np.float64:
        raise VectorTypeError(
            f"{kind}: raw payload dtype must be float64, got {values.dtype}",
            code="RAW_DTYPE",
        )
    if values.ndim != 1:
        raise VectorTypeError(
            f"{kind}: raw payload must be 1-dimensional, got ndim={values.ndim}",
            code="RAW_NDIM",
        )
    return values


def _strip_labels(values: Any) -> Any:
    # Series/Index labels and mapping keys play the role of element names.
    if isinstance(values, (pd.Series, pd.Index)):
        return values.array
    if isinstance(values, pd.DataFrame):
        return values.to_numpy()
    if isinstance(values, Mapping):
        return list(values.values())
    return values


def _not_numeric(kind: str, what: str) -> VectorTypeError:
    log.debug("%s: rejected non-numeric input (%s)", kind, what)
    return VectorTypeError(f"{kind}: values must be numeric, got {what}", code="NOT_NUMERIC")


def _coerce_object(arr: np.ndarray, *, kind: str) -> np.ndarray:
    out = np.empty(arr.size, dtype=np.float64)
    for i, v in enumerate(arr.ravel()):
        if is_missing_scalar(v):
            out[i] = np.nan
        elif isinstance(v, VectorScalar):
            out[i] = v.value
        elif isinstance(v, numbers.Real) and not isinstance(v, (bool, np.bool_)):
            out[i] = float(v)
        else:
            raise _not_numeric(kind, f"element {v!r} of type {type(v).__name__}")
    return out


def coerce_numeric(values: Any, *, kind: str) -> np.ndarray:
    """Return a fresh 1-D float64 payload, stripped of names and shape.

    Accepted: numbers, numeric sequences/arrays (any shape, flattened),
    numeric pandas arrays/Series (labels dropped), mappings (keys dropped).
    ``None``/``NaN``/``pd.NA`` are kept as the missing marker (NaN).
    Booleans, strings, complex numbers and other objects are rejected.
    """

    values = _strip_labels(values)

    if values is None or is_scalar(values) or isinstance(values, VectorScalar):
        values = [values]
    elif isinstance(values, np.ndarray):
        pass
    elif not is_list_like(values):
        raise _not_numeric(kind, type(values).__name__)
    elif not hasattr(values, "__len__"):
        values = list(values)

    if isinstance(values, ExtensionArray):
        if is_object_dtype(values.dtype):
            return _coerce_object(np.asarray(values, dtype=object), kind=kind)
        if is_bool_dtype(values.dtype) or not is_numeric_dtype(values.dtype):
            raise _not_numeric(kind, f"dtype {values.dtype}")
        # to_numpy may hand back a view of the caller's buffer
        return values.to_numpy(dtype=np.float64, na_value=np.nan, copy=True).ravel()

    try:
        arr = np.asarray(values)
    except ValueError as e:
        raise _not_numeric(kind, f"ragged input ({e})") from e
    if arr.dtype.kind in "iuf":
        return arr.astype(np.float64).ravel()
    if arr.dtype.kind == "O":
        return _coerce_object(arr, kind=kind)
    raise _not_numeric(kind, f"dtype {arr.dtype}")


def require_in_range(
    data: np.ndarray,
    *,
    kind: str,
    lower: float = -np.inf,
    upper: float = np.inf,
) -> np.ndarray:
    """Reject non-missing values outside ``[lower, upper]`` or non-finite."""

    present = data[~np.isnan(data)]
    bad = ~np.isfinite(present) | (present < lower) | (present > upper)
    if bad.any():
        sample = ", ".join(f"{v:g}" for v in present[bad][:3])
        n_bad = int(bad.sum())
        log.debug("%s: rejected %d out-of-range value(s): %s", kind, n_bad, sample)
        if np.isfinite(lower) or np.isfinite(upper):
            rule = f"within [{lower:g}, {upper:g}]"
        else:
            rule = "finite"
        raise DomainError(
            f"{kind}: values must be {rule}; got {n_bad} invalid value(s): {sample}",
            code="OUT_OF_RANGE",
        )
    return data
