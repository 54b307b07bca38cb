import json

import pytest

from cbdvr.utils import Logger


def test_text_format(capsys):
    log = Logger(name="cbdvr.test.text")
    log.info("Open file", {"username": "tester", "filename": "a.ts"})
    out = capsys.readouterr().out
    assert "INFO" in out
    assert "Open file | username=tester filename=a.ts" in out


def test_json_format(capsys):
    log = Logger(name="cbdvr.test.json", is_prod=True)
    log.error("Failed to request", {"status": 503, "stacktrace": "Traceback"})
    record = json.loads(capsys.readouterr().out)
    assert record["level"] == "ERROR"
    assert record["message"] == "Failed to request"
    assert record["status"] == 503
    assert record["stacktrace"] == "Traceback"


def test_level_filter(capsys):
    log = Logger(name="cbdvr.test.level")
    log.debug("hidden")
    assert capsys.readouterr().out == ""

    log.set_level("DEBUG")
    log.debug("shown")
    assert "shown" in capsys.readouterr().out


def test_level_names_ignore_global_registry(capsys):
    # streamlink registers lowercase names for the standard levels
    import streamlink.logger  # noqa: F401

    log = Logger(name="cbdvr.test.registry")
    log.info("Open file")
    assert " INFO " in capsys.readouterr().out

    log.is_prod = True
    log.warn("Edge region unreachable")
    assert json.loads(capsys.readouterr().out)["level"] == "WARN"


def test_set_level_by_name():
    log = Logger(name="cbdvr.test.set_level")
    log.set_level("warning")
    log.set_level("DEBUG")
    with pytest.raises(ValueError):
        log.set_level("verbose")
