"""Validated, tagged 1-D vectors (pandas extension arrays).

A vector kind is a pair of classes:

- a :class:`ValidatedDtype` subclass: the *tag*. It names the kind, carries
  the validity range, the display rule (:meth:`ValidatedDtype.format_scalar`)
  and the short column summary used by table viewers;
- a :class:`ValidatedArray` subclass: the payload holder. It implements the
  optional :meth:`ValidatedArray.rich_cell` hook.

Construction
------------
- ``cls._simple_new(values)`` is the low-level constructor. It asserts the
  representation (1-D ``float64`` ndarray) and tags it, nothing else.
- ``cls(values)`` is the checked constructor: numeric check, range check,
  names/shape stripped, then ``_simple_new``.

Every partial replacement (``x[i] = v``, :meth:`ValidatedArray.subset_write`)
runs the replacement through the checked constructor before any write.
The payload never carries names or more than one dimension.
"""

from __future__ import annotations

import logging
import numbers
import operator
from typing import Any, Callable, ClassVar

import numpy as np
import pandas as pd
from pandas.api.extensions import ExtensionArray, ExtensionDtype, take
from pandas.api.indexers import check_array_indexer
from pandas.api.types import is_integer, is_list_like, is_scalar, pandas_dtype

from tagvec.config import get_settings
from tagvec.schema import DisplaySettings
from tagvec.contracts.validators import (
    coerce_numeric,
    is_missing_scalar,
    require_in_range,
    require_raw_payload,
)
from tagvec.contracts.units import parse_token
from tagvec.scalar import VectorScalar
from tagvec.errors import NAMELESS_MSG, ONE_DIM_MSG, InvariantError, VectorTypeError


log = logging.getLogger(__name__)

MISSING_TOKEN = str(pd.NA)  # "<NA>"; pandas renders missing cells the same way


class ValidatedDtype(ExtensionDtype):
    """Tag shared by every vector of one kind."""

    tag: ClassVar[str] = "vector"
    abbr: ClassVar[str] = "vec"
    lower: ClassVar[float] = -np.inf
    upper: ClassVar[float] = np.inf

    type = float
    na_value = pd.NA

    def format_scalar(self, value: float, settings: DisplaySettings) -> str:
        """Render one non-missing payload value (kind hook)."""
        raise NotImplementedError

    @property
    def _is_numeric(self) -> bool:
        return True

    def _get_common_dtype(self, dtypes: list) -> Any:
        # same kind keeps the tag, anything else numeric degrades to float64
        if all(d == self for d in dtypes):
            return self
        for d in dtypes:
            if isinstance(d, ValidatedDtype):
                continue
            if isinstance(d, np.dtype) and d.kind in "iuf":
                continue
            return None
        return np.dtype(np.float64)


class ValidatedArray(ExtensionArray):
    """Base class for validated vector kinds."""

    _dtype_cls: ClassVar[type[ValidatedDtype]] = ValidatedDtype

    _data: np.ndarray
    _dtype: ValidatedDtype

    # ------------------------------------------------------------------
    # construction

    def __init__(self, values: Any = (), dtype: Any = None, copy: bool = False) -> None:
        dtype = self._resolve_dtype(dtype)
        self._data = self._validate(values, dtype)
        self._dtype = dtype

    @classmethod
    def _default_dtype(cls) -> ValidatedDtype:
        return cls._dtype_cls()

    @classmethod
    def _resolve_dtype(cls, dtype: Any) -> ValidatedDtype:
        if dtype is None:
            return cls._default_dtype()
        if isinstance(dtype, str):
            dtype = pandas_dtype(dtype)
        if not isinstance(dtype, cls._dtype_cls):
            raise VectorTypeError(
                f"{cls.__name__} cannot hold dtype {dtype!r}",
                code="DTYPE_MISMATCH",
            )
        return dtype

    @classmethod
    def _simple_new(cls, values: np.ndarray | None = None, dtype: ValidatedDtype | None = None):
        dtype = cls._resolve_dtype(dtype)
        obj = cls.__new__(cls)
        obj._data = require_raw_payload(values, kind=dtype.tag)
        obj._dtype = dtype
        return obj

    @classmethod
    def _validate(cls, values: Any, dtype: ValidatedDtype) -> np.ndarray:
        data = coerce_numeric(values, kind=dtype.tag)
        return require_in_range(data, kind=dtype.tag, lower=dtype.lower, upper=dtype.upper)

    @classmethod
    def _from_sequence(cls, scalars: Any, *, dtype: Any = None, copy: bool = False):
        return cls(scalars, dtype=dtype)

    @classmethod
    def _parse_text(cls, text: str | None, settings: DisplaySettings) -> float:
        return parse_token(text).value

    @classmethod
    def _from_sequence_of_strings(cls, strings: Any, *, dtype: Any = None, copy: bool = False):
        """Parse text cells (e.g. from ``read_csv``) into a vector of this kind."""
        settings = get_settings()
        values = []
        for s in strings:
            text = None if s is None or is_missing_scalar(s) else str(s)
            try:
                values.append(cls._parse_text(text, settings))
            except ValueError as e:
                raise VectorTypeError(f"cannot parse {s!r} as a number", code="NOT_NUMERIC") from e
        return cls(np.asarray(values, dtype=np.float64), dtype=dtype)

    @classmethod
    def _from_factorized(cls, values: np.ndarray, original: "ValidatedArray"):
        return cls._simple_new(np.asarray(values, dtype=np.float64), dtype=original.dtype)

    @classmethod
    def _concat_same_type(cls, to_concat):
        to_concat = list(to_concat)
        if not to_concat:
            return cls._simple_new()
        data = np.concatenate([x._data for x in to_concat])
        return cls._simple_new(data, dtype=to_concat[0].dtype)

    # ------------------------------------------------------------------
    # basic protocol

    @property
    def dtype(self) -> ValidatedDtype:
        return self._dtype

    def __len__(self) -> int:
        return len(self._data)

    @property
    def nbytes(self) -> int:
        return self._data.nbytes

    def isna(self) -> np.ndarray:
        return np.isnan(self._data)

    def copy(self):
        return self._simple_new(self._data.copy(), dtype=self.dtype)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> np.ndarray:
        if dtype is not None and np.dtype(dtype) == np.dtype(object):
            out = np.empty(len(self), dtype=object)
            for i, v in enumerate(self._data):
                out[i] = self.dtype.na_value if np.isnan(v) else VectorScalar(v, self.dtype)
            return out
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        return np.asarray(self._data, dtype=dtype)

    def unique(self):
        return self._simple_new(np.asarray(pd.unique(self._data), dtype=np.float64), dtype=self.dtype)

    def _values_for_factorize(self) -> tuple[np.ndarray, float]:
        return self._data, np.nan

    def _values_for_argsort(self) -> np.ndarray:
        return self._data

    # ------------------------------------------------------------------
    # shape and names: never attachable

    @property
    def shape(self) -> tuple[int]:
        return (len(self._data),)

    @shape.setter
    def shape(self, value: Any) -> None:
        raise InvariantError(ONE_DIM_MSG, code="DIM")

    @property
    def names(self) -> None:
        return None

    @names.setter
    def names(self, value: Any) -> None:
        if value is not None:
            raise InvariantError(NAMELESS_MSG, code="NAMES")

    def set_names(self, names: Any):
        """Return a copy with ``names`` attached; only ``None`` is accepted."""
        if names is not None:
            raise InvariantError(NAMELESS_MSG, code="NAMES")
        return self.copy()

    def set_dim(self, dim: Any):
        """Return a copy with dimensions ``dim``; only ``None``/``(len,)`` is accepted."""
        if dim is None:
            return self.copy()
        shape = tuple(int(d) for d in np.atleast_1d(dim))
        if shape in {(len(self),), (-1,)}:
            return self.copy()
        raise InvariantError(ONE_DIM_MSG, code="DIM")

    def reshape(self, *shape: Any):
        if len(shape) == 1 and isinstance(shape[0], tuple):
            shape = shape[0]
        return self.set_dim(shape)

    # ------------------------------------------------------------------
    # indexing

    @staticmethod
    def _unpack_key(key: Any) -> Any:
        if len(key) == 1:
            return key[0]
        if len(key) == 2 and key[0] is Ellipsis:
            return key[1]
        if len(key) == 2 and key[1] is Ellipsis:
            return key[0]
        raise IndexError("too many indices for a 1-dimensional vector")

    def _box_scalar(self, value: float) -> Any:
        return self.dtype.na_value if np.isnan(value) else float(value)

    def __getitem__(self, item: Any) -> Any:
        if isinstance(item, tuple):
            item = self._unpack_key(item)
        if is_integer(item):
            return self._box_scalar(self._data[item])
        if item is None:
            raise InvariantError(ONE_DIM_MSG, code="DIM")
        item = check_array_indexer(self, item)
        return self._simple_new(self._data[item], dtype=self.dtype)

    def _validate_setitem_value(self, value: Any) -> Any:
        if isinstance(value, ValidatedArray) and value.dtype == self.dtype:
            return value._data
        data = self._validate(value, self.dtype)
        if value is None or is_scalar(value) or isinstance(value, VectorScalar):
            return data[0]
        return data

    def __setitem__(self, key: Any, value: Any) -> None:
        if isinstance(key, tuple):
            key = self._unpack_key(key)
        key = check_array_indexer(self, key)
        payload = self._validate_setitem_value(value)
        if is_integer(key) and isinstance(payload, np.ndarray):
            if payload.size != 1:
                raise ValueError("setting an array element with a sequence")
            payload = payload[0]
        self._data[key] = payload

    def take(self, indices: Any, *, allow_fill: bool = False, fill_value: Any = None):
        if allow_fill:
            if fill_value is None or is_missing_scalar(fill_value):
                fill_value = np.nan
            else:
                fill_value = self._validate([fill_value], self.dtype)[0]
        result = take(self._data, indices, allow_fill=allow_fill, fill_value=fill_value)
        return self._simple_new(np.asarray(result, dtype=np.float64), dtype=self.dtype)

    def subset_read(self, indices: Any):
        """Return the elements at ``indices`` as a new vector of the same kind.

        Integer positions are 0-based; negative positions count from the end.
        Repeated positions repeat elements, an empty selection gives an empty
        vector, and positions outside the vector give missing elements.
        Boolean masks and slices follow ordinary ``x[...]`` semantics.
        """

        if isinstance(indices, slice) or indices is Ellipsis:
            return self[indices].copy()
        if is_integer(indices):
            indices = [indices]
        if not is_list_like(indices):
            raise TypeError(f"invalid index type {type(indices).__name__}")

        idx = np.asarray(indices)
        if idx.dtype == bool:
            return self[idx].copy()
        if idx.size == 0:
            return self._simple_new(np.empty(0, dtype=np.float64), dtype=self.dtype)
        if idx.dtype.kind not in "iu":
            raise TypeError(f"indices must be integers, got dtype {idx.dtype}")

        n = len(self)
        idx = idx.astype(np.intp).ravel()
        inside = (idx < n) & (idx >= -n)
        out = np.full(idx.shape, np.nan, dtype=np.float64)
        out[inside] = self._data[idx[inside]]
        return self._simple_new(out, dtype=self.dtype)

    def subset_write(self, indices: Any, value: Any):
        """Return a copy with ``value`` written at ``indices``.

        ``value`` is validated exactly like a fresh construction before any
        write; ``self`` is never modified.
        """

        out = self.copy()
        out[indices] = value
        return out

    # ------------------------------------------------------------------
    # comparison and reductions

    def _operand(self, other: Any) -> Any:
        if isinstance(other, ValidatedArray):
            rhs = other._data
        elif is_missing_scalar(other):
            return np.nan
        elif isinstance(other, VectorScalar):
            return other.value
        elif isinstance(other, numbers.Real) and not isinstance(other, (bool, np.bool_)):
            return float(other)
        elif is_scalar(other):
            raise VectorTypeError(f"cannot compare with {type(other).__name__}", code="NOT_NUMERIC")
        else:
            rhs = coerce_numeric(other, kind=self.dtype.tag)
        if len(rhs) != len(self):
            raise ValueError(f"Lengths must match: {len(self)} != {len(rhs)}")
        return rhs

    def _cmp(self, other: Any, op: Callable) -> Any:
        if isinstance(other, (pd.Series, pd.Index, pd.DataFrame)):
            return NotImplemented
        try:
            rhs = self._operand(other)
        except VectorTypeError:
            if op is operator.eq:
                return np.zeros(len(self), dtype=bool)
            if op is operator.ne:
                return np.ones(len(self), dtype=bool)
            raise
        with np.errstate(invalid="ignore"):
            return op(self._data, rhs)

    def __eq__(self, other: Any) -> Any:  # type: ignore[override]
        return self._cmp(other, operator.eq)

    def __ne__(self, other: Any) -> Any:  # type: ignore[override]
        return self._cmp(other, operator.ne)

    def __lt__(self, other: Any) -> Any:
        return self._cmp(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._cmp(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._cmp(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._cmp(other, operator.ge)

    _REDUCTIONS: ClassVar[frozenset[str]] = frozenset({"min", "max", "sum", "mean", "median", "std", "var"})

    def _reduce(self, name: str, *, skipna: bool = True, keepdims: bool = False, **kwargs: Any) -> Any:
        if name not in self._REDUCTIONS:
            raise TypeError(f"{type(self).__name__} does not support reduction '{name}'")

        values = self._data[~self.isna()] if skipna else self._data
        if name == "sum":
            result = float(np.sum(values))
        elif values.size == 0:
            result = np.nan
        elif name in ("std", "var"):
            result = float(getattr(np, name)(values, ddof=kwargs.get("ddof", 1)))
        else:
            result = float(getattr(np, name)(values))

        if keepdims:
            if name in ("min", "max"):
                return self._simple_new(np.array([result], dtype=np.float64), dtype=self.dtype)
            return np.array([result], dtype=np.float64)
        return self._box_scalar(result)

    # ------------------------------------------------------------------
    # display

    def _format_boxed(self, value: Any) -> str:
        if is_missing_scalar(value):
            return MISSING_TOKEN
        return self.dtype.format_scalar(float(value), get_settings())

    def format(self) -> list[str]:
        """Display strings, one per element; missing elements render as ``<NA>``."""
        settings = get_settings()
        return [
            MISSING_TOKEN if np.isnan(v) else self.dtype.format_scalar(float(v), settings)
            for v in self._data
        ]

    def _formatter(self, boxed: bool = False) -> Callable[[Any], str | None]:
        return self._format_boxed

    def type_summary(self) -> str:
        return self.dtype.abbr

    def banner(self) -> str:
        return f"<{self.dtype.tag}[{len(self)}]>"

    def print(self, console: Any = None):
        """Print banner + formatted values; returns ``self``."""
        from tagvec.ops import print_vector

        return print_vector(self, console=console)

    def to_frame(self, name: str | None = None) -> pd.DataFrame:
        from tagvec.ops import as_data_frame

        return as_data_frame(self, column_name=name, _depth=2)

    rich_cell: ClassVar[Callable[..., Any] | None] = None
