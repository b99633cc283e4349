"""Environment loader adapter tests clarifying namespace handling and coercion."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_struct_logger.adapters.env import EnvSettingsLoader, assign_nested, default_env_prefix


def test_default_env_prefix() -> None:
    """Slug values should become upper snake-case prefixes."""

    assert default_env_prefix("lib-struct-logger") == "LIB_STRUCT_LOGGER"


def test_loader_reads_renderer_separator_and_context() -> None:
    environ = {
        "LIB_STRUCT_LOGGER_RENDERER": "json",
        "LIB_STRUCT_LOGGER_SEPARATOR": " | ",
        "LIB_STRUCT_LOGGER_CONTEXT__ENV": "prod",
        "LIB_STRUCT_LOGGER_CONTEXT__SERVICE__NAME": "billing",
        "LIB_STRUCT_LOGGER_CONTEXT__DEBUG": "false",
        "LIB_STRUCT_LOGGER_OTHER": "ignored",
        "OTHER": "ignored",
    }
    settings = EnvSettingsLoader(environ=environ).load("LIB_STRUCT_LOGGER")
    assert settings.renderer == "json"
    assert settings.separator == " | "
    assert settings.context == {"env": "prod", "service": {"name": "billing"}, "debug": False}


def test_separator_is_not_coerced() -> None:
    settings = EnvSettingsLoader(environ={"DEMO_SEPARATOR": "1"}).load("DEMO_")
    assert settings.separator == "1"


def test_empty_context_key_is_ignored() -> None:
    settings = EnvSettingsLoader(environ={"DEMO_CONTEXT__": "x"}).load("DEMO")
    assert settings.is_empty()


def test_loader_emits_debug_event(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_struct_logger")
    EnvSettingsLoader(environ={"DEMO_CONTEXT__B": "1", "DEMO_CONTEXT__A": "2"}).load("DEMO")
    record = [record for record in caplog.records if record.getMessage() == "env_settings_loaded"][-1]
    assert getattr(record, "context")["context_keys"] == ["a", "b"]


def test_assign_nested_overwrites_scalar_raises() -> None:
    """Protect existing scalar values from being replaced by new nested assignments."""

    container: dict[str, object] = {"a": "value"}
    with pytest.raises(ValueError, match="Cannot override scalar"):
        assign_nested(container, "A__B", 1)


SCALAR_VALUES = st.sampled_from(["0", "1", "-4", "true", "FALSE", "3.5", "none", "null", "debug"])
CONTEXT_KEYS = st.sampled_from(["ENV", "REGION", "REPLICA", "FEATURE"])


@given(st.dictionaries(CONTEXT_KEYS, SCALAR_VALUES, max_size=4))
def test_context_values_are_coerced(entries: dict[str, str]) -> None:
    """Randomised context inputs should map to consistently coerced values."""

    environ = {f"DEMO_CONTEXT__{key}": value for key, value in entries.items()}
    environ["IGNORED"] = "1"
    context = EnvSettingsLoader(environ=environ).load("DEMO").context

    def _expect(value: str) -> object:
        lowered = value.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered in {"none", "null"}:
            return None
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            return value

    assert context == {key.lower(): _expect(value) for key, value in entries.items()}
