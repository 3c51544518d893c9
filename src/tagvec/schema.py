"""Pydantic schema for tagvec.yaml.

The active settings control how vectors render (significant figures, unit
suffix, table truncation). They are validated here and held by
:mod:`tagvec.config`.

Notes
-----
- We intentionally allow extra keys (forward compatibility).
- `find_unknown_keys()` provides user-facing warnings about typos.
- `schema_validate()` returns a small report object (ok/errors/warnings).
"""


from __future__ import annotations


from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------- report objects ----------------------------


@dataclass(frozen=True)
class SchemaIssue:
    code: str
    message: str
    hint: str = ""


@dataclass(frozen=True)
class SchemaReport:
    ok: bool
    errors: List[SchemaIssue]
    warnings: List[SchemaIssue]


# ------------------------------ pydantic ------------------------------


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class DisplaySettings(BaseModel):
    """Display configuration.

    percent_digits: significant figures of ``v * 100`` in percent cells.
    percent_suffix: unit suffix appended to percent cells.
    decimal_digits: default number of decimals for new decimal vectors.
    max_rows: rows shown by the rich table viewer before truncation.
    log_level: optional default for the CLI logger.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    percent_digits: int = Field(default=3, ge=1, le=15)
    percent_suffix: str = "%"
    decimal_digits: int = Field(default=2, ge=0, le=15)
    max_rows: int = Field(default=20, ge=1)
    log_level: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        lvl = str(v).upper().strip()
        if lvl not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return lvl


_TOP_KEYS = set(DisplaySettings.model_fields)


def find_unknown_keys(cfg: Dict[str, Any]) -> List[str]:
    """Return unknown top-level keys (likely typos)."""

    return sorted(str(k) for k in cfg.keys() if str(k) not in _TOP_KEYS)


def schema_validate(cfg: Dict[str, Any]) -> SchemaReport:
    """Validate config dict against the pydantic schema."""

    try:
        DisplaySettings.model_validate(cfg)
    except Exception as e:
        # Keep it human-readable; detailed trace is not useful for users.
        msg = str(e)
        if len(msg) > 2000:
            msg = msg[:2000] + "…"
        return SchemaReport(
            ok=False,
            errors=[SchemaIssue(code="SCHEMA", message=msg, hint="Check config types")],
            warnings=[],
        )

    unknown = find_unknown_keys(cfg)
    if unknown:
        msg = "Unknown config keys (ignored): " + ", ".join(unknown)
        return SchemaReport(
            ok=True,
            errors=[],
            warnings=[SchemaIssue(code="UNKNOWN_KEYS", message=msg, hint="Remove/rename unknown keys")],
        )
    return SchemaReport(ok=True, errors=[], warnings=[])
