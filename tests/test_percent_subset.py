from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tagvec import DomainError, InvariantError, VectorTypeError, percent, subset_read, subset_write
from tagvec.kinds.percent import PercentArray, PercentDtype


VALUES = [0.0, 0.25, 0.5, 0.75, 1.0, None]


def _fmt_at(x, idx):
    full = x.format()
    return [full[i] for i in idx]


@pytest.mark.parametrize("idx", [[0], [4, 0, 4], [5, 1], [], [-1, -2]])
def test_subset_read_keeps_tag_and_format(idx):
    x = percent(VALUES)
    out = subset_read(x, idx)
    assert isinstance(out, PercentArray)
    assert out.dtype == PercentDtype()
    assert len(out) == len(idx)
    assert out.format() == _fmt_at(x, idx)


def test_subset_read_out_of_range_gives_missing():
    x = percent([0.1, 0.2])
    out = x.subset_read([1, 5, -7])
    assert out.format() == ["20%", "<NA>", "<NA>"]

    empty = percent()
    assert empty.subset_read([0, 1]).format() == ["<NA>", "<NA>"]


def test_subset_read_mask_and_slice():
    x = percent([0.1, 0.2, 0.3])
    assert x.subset_read([True, False, True]).format() == ["10%", "30%"]
    assert x.subset_read(slice(1, None)).format() == ["20%", "30%"]
    assert x.subset_read(2).format() == ["30%"]


def test_subset_read_rejects_non_integer_indices():
    x = percent([0.1, 0.2])
    with pytest.raises(TypeError):
        x.subset_read([0.5])
    with pytest.raises(TypeError):
        x.subset_read("a")


def test_getitem_returns_tagged_vector_or_scalar():
    x = percent([0.1, None, 0.3])
    assert isinstance(x[[0, 2]], PercentArray)
    assert isinstance(x[1:], PercentArray)
    assert isinstance(x[x.isna()], PercentArray)
    assert len(x[[]]) == 0
    assert x[0] == pytest.approx(0.1)
    assert x[1] is pd.NA
    with pytest.raises(IndexError):
        x[10]


def test_subset_write_validates_and_copies():
    x = percent([0.1, 0.2, 0.3])
    y = subset_write(x, [0, 1], 0.5)
    assert y.format()[:2] == ["50%", "50%"]
    assert isinstance(y, PercentArray)
    # original untouched
    assert x.format() == ["10%", "20%", "30%"]


def test_subset_write_rejects_text_and_leaves_input_unchanged():
    x = percent([0.1, 0.2, 0.3])
    with pytest.raises(VectorTypeError):
        subset_write(x, 0, "a")
    assert x.format() == ["10%", "20%", "30%"]


def test_setitem_is_all_or_nothing():
    x = percent([0.1, 0.2, 0.3])
    with pytest.raises(DomainError):
        x[[0, 1]] = [0.5, 1.5]
    assert x.format() == ["10%", "20%", "30%"]

    x[[0, 1]] = [0.5, None]
    assert x.format() == ["50%", "<NA>", "30%"]

    x[2] = percent([1.0])
    assert x.format()[2] == "100%"


def test_tag_survives_empty_results():
    x = percent([0.1])
    assert x.subset_read([]).type_summary() == "pct"
    assert x[:0].type_summary() == "pct"
    assert percent().subset_write([], 0.5).type_summary() == "pct"


def test_names_are_rejected():
    x = percent([0.1, 0.2])
    with pytest.raises(InvariantError) as e:
        x.names = ["a", "b"]
    assert str(e.value) == "vector must be nameless"
    with pytest.raises(InvariantError):
        x.set_names(["a", "b"])
    assert x.names is None
    assert x.format() == ["10%", "20%"]
    # clearing names is a no-op
    x.names = None
    assert x.set_names(None).format() == ["10%", "20%"]


def test_shape_is_rejected():
    x = percent([0.1, 0.2, 0.3, 0.4])
    with pytest.raises(InvariantError) as e:
        x.shape = (2, 2)
    assert str(e.value) == "vector must be 1-dimensional"
    with pytest.raises(InvariantError):
        x.set_dim((2, 2))
    with pytest.raises(InvariantError):
        x.reshape(2, 2)
    assert x.shape == (4,)
    assert x.reshape(-1).shape == (4,)
    assert x.format() == ["10%", "20%", "30%", "40%"]


def test_take_with_fill():
    x = percent([0.1, 0.2])
    out = x.take([0, -1], allow_fill=True)
    assert out.format() == ["10%", "<NA>"]
    out = x.take([1, -1], allow_fill=True, fill_value=0.5)
    assert out.format() == ["20%", "50%"]
    with pytest.raises(DomainError):
        x.take([-1], allow_fill=True, fill_value=2.0)


def test_comparisons():
    x = percent([0.1, None, 0.5])
    assert list(x == 0.5) == [False, False, True]
    assert list(x != 0.5) == [True, True, False]
    assert list(x > 0.2) == [False, False, True]
    assert list(x == "a") == [False, False, False]
    assert np.array_equal(x <= percent([0.1, 0.1, 0.1]), [True, False, False])
    with pytest.raises(ValueError):
        x == [0.1, 0.2]
