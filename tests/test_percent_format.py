from __future__ import annotations

import io

import numpy as np
import pandas as pd
from rich.console import Console

from tagvec import MISSING_TOKEN, format_vector, percent, print_vector
from tagvec.config import settings_context


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=120, color_system=None), buf


def test_format_concrete_scenario():
    x = percent([0, 1 / 3, 2 / 3, 1, None])
    assert format_vector(x) == ["0%", "33.3%", "66.7%", "100%", MISSING_TOKEN]
    assert MISSING_TOKEN == "<NA>"


def test_format_is_elementwise():
    x = percent([0.5, 0.125, 0.0001, -0.0])
    assert x.format() == ["50%", "12.5%", "0.01%", "0%"]
    assert len(x.format()) == len(x)


def test_format_follows_settings():
    x = percent([1 / 3])
    with settings_context(percent_digits=5, percent_suffix=" pct"):
        assert x.format() == ["33.333 pct"]
    assert x.format() == ["33.3%"]


def test_print_writes_banner_and_values_and_returns_input():
    x = percent([0.5, None])
    console, buf = _console()
    out = print_vector(x, console=console)
    assert out is x
    assert buf.getvalue().splitlines() == ["<percent[2]>", "50% <NA>"]


def test_print_empty_vector_only_banner():
    console, buf = _console()
    x = percent()
    assert x.print(console=console) is x
    assert buf.getvalue().splitlines() == ["<percent[0]>"]


def test_repr_uses_format():
    r = repr(percent([0.5, None]))
    assert "50%" in r
    assert "<NA>" in r
    assert "percent" in r


def test_object_conversion_renders_with_format():
    objs = np.asarray(percent([0.25, None]), dtype=object)
    assert str(objs[0]) == "25%"
    assert objs[0] == 0.25
    assert objs[1] is pd.NA
    # float conversion stays numeric
    assert np.asarray(percent([0.25]), dtype=float)[0] == 0.25


def test_object_boxes_feed_back_into_constructor():
    objs = np.asarray(percent([0.25, None]), dtype=object)
    again = percent(objs)
    assert again.format() == ["25%", "<NA>"]
    assert percent(objs[0]).format() == ["25%"]
    assert objs[0] < 0.5
    assert objs[0] == np.asarray(percent([0.25]), dtype=object)[0]

    x = percent([0.1, 0.2])
    x[0] = objs[0]
    assert x.format() == ["25%", "20%"]
