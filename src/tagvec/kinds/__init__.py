"""Concrete vector kinds.

Each module registers its dtype with pandas on import:

- :mod:`tagvec.kinds.percent`: ``percent`` (``[0, 1]``, shown as ``33.3%``)
- :mod:`tagvec.kinds.decimal`: ``decimal[<digits>]`` (finite, fixed decimals)
"""

from __future__ import annotations

__all__ = ["percent", "decimal"]
