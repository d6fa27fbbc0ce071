#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

import strictdto.core.settings as settings_mod
from strictdto.core.exceptions import ConfigError
from strictdto.core.settings import EngineSettings, get_settings


# --- EngineSettings --- #

def test_defaults():
    s = EngineSettings()
    assert s.max_depth == 100
    assert s.cache_schemas is True
    assert s.log_level == "WARNING"
    assert s.log_json is False


def test_from_config_coerces_and_normalizes():
    s = EngineSettings.from_config({"max_depth": "7", "logging": {"level": " debug ", "json": True}, "extra": 1})
    assert s.max_depth == 7
    assert s.log_level == "DEBUG"
    assert s.log_json is True


@pytest.mark.parametrize("config,match", [
    ({"max_depth": 0}, r"max_depth"),
    ({"max_depth": "deep"}, r"max_depth"),
    ({"logging": {"level": "LOUD"}}, r"logging\.level"),
    ({"cache_schemas": "maybe"}, r"cache_schemas"),
])
def test_from_config_rejects_bad_values(config, match):
    with pytest.raises(ConfigError, match=match) as excinfo:
        EngineSettings.from_config(config)
    assert excinfo.value.errors


def test_settings_are_frozen():
    s = EngineSettings()
    with pytest.raises(ValidationError):
        s.max_depth = 5  # type: ignore[misc]


# --- get_settings --- #

def test_get_settings_caches_and_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings_mod, "_SETTINGS", None)
    monkeypatch.setattr(settings_mod, "load_config", lambda: {"max_depth": 3})

    first = get_settings()
    assert first.max_depth == 3
    assert get_settings() is first

    overridden = get_settings(config_override={"max_depth": 9})
    assert overridden.max_depth == 9
    assert get_settings() is overridden

    reloaded = get_settings(force_reload=True)
    assert reloaded.max_depth == 3
