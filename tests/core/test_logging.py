#!/usr/bin/env python3
import json
import logging

import structlog

from strictdto.core.logging import _rename_event_key, build_processors, get_logger
from strictdto.core.settings import EngineSettings


def test_rename_event_key():
    out = _rename_event_key(None, "info", {"event": "schema.compiled", "schema": "x"})
    assert out == {"message": "schema.compiled", "schema": "x"}
    assert _rename_event_key(None, "info", {"other": 1}) == {"other": 1}


def test_build_processors_renderer_follows_settings():
    json_settings = EngineSettings.from_config({"logging": {"json": True}})
    console_settings = EngineSettings()

    assert isinstance(build_processors(json_settings)[-1], structlog.processors.JSONRenderer)
    assert isinstance(build_processors(console_settings)[-1], structlog.dev.ConsoleRenderer)
    assert _rename_event_key in build_processors(console_settings)


def test_get_logger_emits_json_to_the_stdlib_logger(caplog):
    settings = EngineSettings.from_config({"logging": {"level": "DEBUG", "json": True}})
    logger = get_logger("test", settings=settings)

    with caplog.at_level(logging.DEBUG, logger="strictdto.test"):
        logger.debug("schema.compiled", schema="pkg.Dto")

    records = [r for r in caplog.records if r.name == "strictdto.test"]
    assert len(records) == 1
    payload = json.loads(records[0].getMessage())
    assert payload["message"] == "schema.compiled"
    assert payload["schema"] == "pkg.Dto"
    assert payload["level"] == "debug"


def test_get_logger_filters_below_the_configured_level(caplog):
    logger = get_logger("quiet", settings=EngineSettings())

    with caplog.at_level(logging.DEBUG, logger="strictdto.quiet"):
        logger.debug("schema.compiled")

    assert not [r for r in caplog.records if r.name == "strictdto.quiet"]
