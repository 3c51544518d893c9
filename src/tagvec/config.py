from __future__ import annotations

from contextlib import contextmanager
import logging
import os
from pathlib import Path
from typing import Any, Iterator

import yaml

from tagvec.schema import DisplaySettings, schema_validate


log = logging.getLogger(__name__)

CONFIG_ENV = "TAGVEC_CONFIG"

_ACTIVE = DisplaySettings()


def load_config(cfg_path: str | Path) -> DisplaySettings:
    """Load YAML config and validate it.

    Unknown keys are reported as warnings; schema errors raise ``ValueError``.
    """
    cfg_path = Path(cfg_path).expanduser().resolve()
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{cfg_path}: top level must be a mapping, got {type(cfg).__name__}")

    report = schema_validate(cfg)
    for w in report.warnings:
        log.warning("%s: %s", cfg_path.name, w.message)
    if not report.ok:
        raise ValueError("; ".join(f"{e.code}: {e.message}" for e in report.errors))
    return DisplaySettings.model_validate(cfg)


def load_config_any(cfg: Any) -> DisplaySettings:
    """Load settings from path/dict/settings objects, or from ``TAGVEC_CONFIG``."""
    if cfg is None:
        env = os.environ.get(CONFIG_ENV)
        return load_config(env) if env else DisplaySettings()
    if isinstance(cfg, DisplaySettings):
        return cfg
    if isinstance(cfg, (str, Path)):
        return load_config(cfg)
    if isinstance(cfg, dict):
        return DisplaySettings.model_validate(cfg)

    raise TypeError(f"Unsupported config type: {type(cfg)}")


def write_config(settings: DisplaySettings, out_path: str | Path) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(settings.model_dump(exclude_none=True), f, sort_keys=False, allow_unicode=True)


def get_settings() -> DisplaySettings:
    return _ACTIVE


def set_settings(settings: DisplaySettings | dict[str, Any]) -> DisplaySettings:
    """Replace the active settings; returns the previous ones."""
    global _ACTIVE
    prev = _ACTIVE
    _ACTIVE = load_config_any(settings)
    return prev


@contextmanager
def settings_context(**overrides: Any) -> Iterator[DisplaySettings]:
    """Temporarily override individual display settings.

    Example:
        with settings_context(percent_digits=4):
            x.format()
    """
    merged = {**_ACTIVE.model_dump(), **overrides}
    prev = set_settings(merged)
    try:
        yield _ACTIVE
    finally:
        set_settings(prev)
