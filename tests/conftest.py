#!/usr/bin/env python3
import pytest

import strictdto.core.settings as settings_mod
from strictdto.core.schema.schema import clear_schema_cache


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    # Every test starts from default settings and an empty schema cache
    monkeypatch.setattr(settings_mod, "_SETTINGS", settings_mod.EngineSettings())
    clear_schema_cache()
    yield
    clear_schema_cache()
