"""Error taxonomy for validated vectors.

Every failure carries a short machine-readable ``code`` next to the
human-readable ``message``. The concrete classes also derive from the builtin
exception a Python caller would expect (``TypeError``, ``ValueError``,
``AttributeError``), so ``except TypeError`` keeps working.
"""

from __future__ import annotations


class VectorContractError(Exception):
    """Base class for validated-vector contract violations."""

    def __init__(self, message: str, *, code: str = "CONTRACT") -> None:
        self.code = str(code)
        self.message = str(message)
        super().__init__(self.message)


class VectorTypeError(VectorContractError, TypeError):
    """Input is not numeric or not the expected primitive representation."""


class DomainError(VectorContractError, ValueError):
    """Non-missing value(s) outside the validity range of the vector kind."""


class InvariantError(VectorContractError, AttributeError):
    """Attempt to attach names or multi-dimensional shape to a vector."""


NAMELESS_MSG = "vector must be nameless"
ONE_DIM_MSG = "vector must be 1-dimensional"
