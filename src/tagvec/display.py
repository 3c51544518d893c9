"""Rich table viewer for data frames holding validated vectors.

Each column header shows the column name and a short type summary
(``<pct>``, ``<dbl>``, ``<chr>``...). Cells of validated vectors come from the
vector's own ``format``; a kind may add a ``rich_cell(text, value)`` hook to
style its cells.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd
from pandas.api.types import (
    infer_dtype,
    is_bool_dtype,
    is_datetime64_any_dtype,
    is_float_dtype,
    is_integer_dtype,
    is_timedelta64_dtype,
)
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tagvec.base import MISSING_TOKEN, ValidatedArray, ValidatedDtype
from tagvec.config import get_settings


log = logging.getLogger(__name__)


def column_summary(values: Any) -> str:
    """Short type tag of a column (tibble-style abbreviations)."""

    dtype = getattr(values, "dtype", None)
    if isinstance(dtype, ValidatedDtype):
        return dtype.abbr
    if dtype is None:
        return "obj"
    if isinstance(dtype, pd.CategoricalDtype):
        return "fct"
    if is_bool_dtype(dtype):
        return "lgl"
    if is_integer_dtype(dtype):
        return "int"
    if is_float_dtype(dtype):
        return "dbl"
    if is_datetime64_any_dtype(dtype):
        return "dttm"
    if is_timedelta64_dtype(dtype):
        return "drtn"
    inferred = infer_dtype(values, skipna=True)
    if inferred in {"string", "empty"}:
        return "chr"
    return "obj"


def _plain_cell(v: Any) -> str:
    if v is None or (pd.api.types.is_scalar(v) and pd.isna(v)):
        return MISSING_TOKEN
    if isinstance(v, float):
        return f"{v:.6g}"
    return str(v)


def column_cells(values: pd.Series) -> list[Text]:
    """Render one column, using the vector's ``format`` and ``rich_cell`` hook."""

    arr = values.array
    if isinstance(arr, ValidatedArray):
        texts = arr.format()
        hook = getattr(arr, "rich_cell", None)
        if callable(hook):
            return [hook(t, arr[i]) for i, t in enumerate(texts)]
        return [Text(t) for t in texts]
    return [Text(_plain_cell(v)) for v in values]


def table_summary(df: pd.DataFrame, *, max_rows: int | None = None) -> str:
    """One-line summary printed above the table (``# A table: 3 × 2``)."""

    if max_rows is None:
        max_rows = get_settings().max_rows
    n_rows, n_cols = df.shape
    text = f"# A table: {n_rows} × {n_cols}"
    hidden = n_rows - min(n_rows, max_rows)
    if hidden > 0:
        text += f" ({hidden} more rows)"
    return text


def render_table(df: pd.DataFrame, *, max_rows: int | None = None, title: str | None = None) -> Table:
    """Build a :class:`rich.table.Table` for the first ``max_rows`` rows of ``df``."""

    if max_rows is None:
        max_rows = get_settings().max_rows
    n_rows, n_cols = df.shape
    shown = df.iloc[:max_rows]
    table = Table(title=title, show_lines=False)

    columns = []
    for j, name in enumerate(shown.columns):
        col = shown.iloc[:, j]
        header = Text(f"{name}\n<{column_summary(col)}>")
        table.add_column(header, justify="right", no_wrap=True)
        columns.append(column_cells(col))

    for row in zip(*columns):
        table.add_row(*row)
    if n_rows > len(shown):
        table.add_row(*(["…"] * n_cols))

    log.debug("rendered table %d x %d (shown rows: %d)", n_rows, n_cols, len(shown))
    return table


def print_table(df: pd.DataFrame, *, console: Console | None = None, max_rows: int | None = None) -> pd.DataFrame:
    console = console or Console()
    console.print(Text(table_summary(df, max_rows=max_rows)))
    console.print(render_table(df, max_rows=max_rows))
    return df
