"""tagvec package.

Validated, tagged numeric vectors that embed in pandas data frames and render
through a rich table viewer.
"""

from .version import __version__
from .errors import DomainError, InvariantError, VectorContractError, VectorTypeError
from .base import MISSING_TOKEN, ValidatedArray, ValidatedDtype
from .kinds.percent import PercentArray, PercentDtype, as_percent, is_percent, new_percent, percent
from .kinds.decimal import DecimalArray, DecimalDtype, as_decimal, decimal, is_decimal, new_decimal
from .ops import (
    as_data_frame,
    format_vector,
    print_vector,
    subset_read,
    subset_write,
    type_summary,
)

__all__ = [
    "__version__",
    "MISSING_TOKEN",
    "VectorContractError",
    "VectorTypeError",
    "DomainError",
    "InvariantError",
    "ValidatedArray",
    "ValidatedDtype",
    "PercentArray",
    "PercentDtype",
    "new_percent",
    "percent",
    "is_percent",
    "as_percent",
    "DecimalArray",
    "DecimalDtype",
    "new_decimal",
    "decimal",
    "is_decimal",
    "as_decimal",
    "subset_read",
    "subset_write",
    "format_vector",
    "print_vector",
    "as_data_frame",
    "type_summary",
]
