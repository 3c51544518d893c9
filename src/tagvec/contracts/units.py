"""Text rules for vector display units.

This module provides:
- Normalization + recognition of the missing-value tokens used in text input.
- Deterministic parsing of display strings back to payload numbers
  (``"33.3%"`` -> ``0.333``), used when reading CSV columns.

We keep the allowed vocabulary intentionally small, but accept common aliases
(e.g. "NA" / "<NA>" / "nan" / empty cell).
"""

from __future__ import annotations

from dataclasses import dataclass
import math


MISSING_TOKENS = frozenset({"", "na", "<na>", "nan", "none", "null"})


@dataclass(frozen=True)
class ParsedToken:
    """Parsed text cell."""

    value: float  # NaN for missing
    suffix: str  # unit suffix found at the end ('' if none)


def _norm(s: str) -> str:
    return str(s if s is not None else "").strip().replace(" ", "")


def is_missing_token(text: str | None) -> bool:
    return text is None or _norm(text).lower() in MISSING_TOKENS


def parse_token(text: str | None, *, suffix: str = "") -> ParsedToken:
    """Parse one text cell into a number and its unit suffix.

    Examples
    --------
    - "33.3%" (suffix="%") -> (33.3, "%")
    - "0.25"  (suffix="%") -> (0.25, "")
    - "NA"                 -> (nan, "")

    Raises ``ValueError`` for text that is not a number.
    """

    if is_missing_token(text):
        return ParsedToken(value=math.nan, suffix="")
    t = _norm(text)
    sfx = _norm(suffix)
    found = ""
    if sfx and t.endswith(sfx):
        t = t[: -len(sfx)]
        found = suffix
    return ParsedToken(value=float(t), suffix=found)


def percent_from_text(text: str | None, *, suffix: str = "%") -> float:
    """Return the payload number for a percent cell.

    Policy
    ------
    A cell carrying the suffix is a display value and is divided by 100.
    A bare number is already a proportion and is returned unchanged.
    """

    tok = parse_token(text, suffix=suffix)
    if tok.suffix:
        return tok.value / 100.0
    return tok.value
