from __future__ import annotations

import pytest

from tagvec import percent
from tagvec.config import (
    CONFIG_ENV,
    get_settings,
    load_config,
    load_config_any,
    set_settings,
    settings_context,
    write_config,
)
from tagvec.schema import DisplaySettings, find_unknown_keys, schema_validate


def test_defaults():
    s = DisplaySettings()
    assert s.percent_digits == 3
    assert s.percent_suffix == "%"
    assert s.decimal_digits == 2
    assert s.max_rows == 20
    assert s.log_level is None


def test_schema_validate_reports():
    assert schema_validate({"percent_digits": 4}).ok

    bad = schema_validate({"percent_digits": 0})
    assert not bad.ok
    assert bad.errors[0].code == "SCHEMA"

    typo = schema_validate({"percent_digit": 4})
    assert typo.ok
    assert typo.warnings[0].code == "UNKNOWN_KEYS"
    assert find_unknown_keys({"percent_digit": 4, "max_rows": 5}) == ["percent_digit"]


def test_log_level_is_normalised():
    assert DisplaySettings(log_level=" debug ").log_level == "DEBUG"
    with pytest.raises(ValueError):
        DisplaySettings(log_level="LOUD")


def test_load_config_yaml(tmp_path):
    p = tmp_path / "tagvec.yaml"
    p.write_text("percent_digits: 5\nmax_rows: 3\n", encoding="utf-8")
    s = load_config(p)
    assert s.percent_digits == 5
    assert s.max_rows == 3

    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)

    p.write_text("percent_digits: zero\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)


def test_write_then_load(tmp_path):
    out = tmp_path / "cfg" / "tagvec.yaml"
    write_config(DisplaySettings(percent_suffix=" pct"), out)
    assert load_config(out).percent_suffix == " pct"


def test_load_config_any(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    assert load_config_any(None) == DisplaySettings()
    assert load_config_any({"decimal_digits": 4}).decimal_digits == 4

    p = tmp_path / "env.yaml"
    p.write_text("percent_digits: 2\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(p))
    assert load_config_any(None).percent_digits == 2

    with pytest.raises(TypeError):
        load_config_any(42)


def test_set_settings_returns_previous():
    before = get_settings()
    prev = set_settings({"percent_digits": 2})
    try:
        assert prev is before
        assert percent([1 / 3]).format() == ["33%"]
    finally:
        set_settings(prev)
    assert get_settings() is before


def test_settings_context_restores_on_error():
    before = get_settings()
    with pytest.raises(RuntimeError):
        with settings_context(percent_suffix=" pct"):
            assert percent([0.5]).format() == ["50 pct"]
            raise RuntimeError("boom")
    assert get_settings() is before


def test_log_level_resolution(monkeypatch):
    from tagvec.log import LOG_LEVEL_ENV, resolve_level

    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert resolve_level() == "INFO"
    assert resolve_level("debug") == "DEBUG"
    assert resolve_level("chatty") == "INFO"
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    assert resolve_level() == "WARNING"


def test_setup_logging_writes_to_given_console():
    import io
    import logging

    from rich.console import Console

    from tagvec.log import setup_logging

    buf = io.StringIO()
    logger = setup_logging("INFO", console=Console(file=buf, width=120, color_system=None))
    try:
        setup_logging("INFO", console=Console(file=buf, width=120, color_system=None))
        assert len(logger.handlers) == 1
        logging.getLogger("tagvec.config").info("settings loaded")
        assert buf.getvalue().count("settings loaded") == 1
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
