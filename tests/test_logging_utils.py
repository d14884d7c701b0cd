from __future__ import annotations

import io
import json
import logging
import sys

import pytest
from formula_kit.utils.logging_utils import JsonLogFormatter, setup_logging


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger("formula_kit")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging_json_lines(restore_package_logger):
    stream = io.StringIO()
    setup_logging("info", json_format=True, stream=stream)
    logging.getLogger("formula_kit.harness").info("evaluated %d formulas", 3)

    payload = json.loads(stream.getvalue().strip())
    assert payload["level"] == "INFO"
    assert payload["logger"] == "formula_kit.harness"
    assert payload["message"] == "evaluated 3 formulas"


def test_setup_logging_respects_level(restore_package_logger):
    stream = io.StringIO()
    logger = setup_logging("WARNING", stream=stream)
    logging.getLogger("formula_kit.tokenizer").info("hidden")
    logging.getLogger("formula_kit.tokenizer").warning("shown")
    assert logger.level == logging.WARNING
    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


def test_setup_logging_rejects_unknown_level(restore_package_logger):
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("formula_kit", logging.ERROR, __file__, 1, "failed", (), None)
        record.exc_info = sys.exc_info()
    payload = json.loads(JsonLogFormatter().format(record))
    assert "boom" in payload["exc_info"]
