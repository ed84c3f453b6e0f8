"""Test unified logging configuration.

Tests for colordist.utils.logging_config:
    - setup_logging() is idempotent (no duplicate handlers)
    - File handler writes JSON lines with context fields
    - Human format includes level, context and message
    - push_context / pop_context / get_context, set_level
    - Unknown level or format mode → ValueError

Run:
    pytest tests/test_logging.py -v
"""

import json
import logging

import pytest

from colordist.utils import logging_config


@pytest.fixture(autouse=True)
def restore_logging():
    """Detach installed handlers and clear context after each test."""
    level = logging.getLogger().level
    yield
    logging_config.setup_logging(to_stderr=False, capture_warnings=False)
    logging_config.pop_context()
    logging.captureWarnings(False)
    logging.getLogger().setLevel(level)


def _record(msg, level=logging.INFO):
    return logging.LogRecord("colordist.test", level, __file__, 1, msg, None, None)


# ============================================================================
# SETUP
# ============================================================================

def test_setup_logging_idempotent():
    """Test repeated calls replace handlers instead of stacking them."""
    root = logging.getLogger()
    logging_config.setup_logging(to_stderr=False, capture_warnings=False)
    before = len(root.handlers)

    first = logging_config.setup_logging(log_level="DEBUG", capture_warnings=False)
    second = logging_config.setup_logging(log_level="DEBUG", capture_warnings=False)

    assert len(first) == len(second) == 1
    assert len(root.handlers) == before + 1
    assert first[0] not in root.handlers
    assert root.level == logging.DEBUG


def test_setup_logging_unknown_level():
    """Test level names are validated."""
    with pytest.raises(ValueError, match="Unknown log level"):
        logging_config.setup_logging(log_level="LOUD")


def test_set_level():
    """Test runtime level changes accept names case-insensitively."""
    logging_config.set_level("warning")
    assert logging.getLogger().level == logging.WARNING


def test_set_level_unknown():
    """Test unknown names raise ValueError and leave the level alone."""
    logging_config.set_level("INFO")
    with pytest.raises(ValueError, match="Unknown log level"):
        logging_config.set_level("LOUD")
    assert logging.getLogger().level == logging.INFO


def test_file_handler_json_lines(tmp_path):
    """Test JSON lines carry message, level and context."""
    log_file = tmp_path / "logs" / "run.jsonl"
    handlers = logging_config.setup_logging(
        log_level="INFO",
        log_file=str(log_file),
        json=True,
        to_stderr=False,
        capture_warnings=False,
        context={"app": "compare"},
    )
    logging_config.get_logger("colordist.test").info("ΔE00=%.2f", 86.61)
    for handler in handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["lvl"] == "INFO"
    assert entry["msg"] == "ΔE00=86.61"
    assert entry["app"] == "compare"
    assert entry["name"] == "colordist.test"


def test_debug_filtered_at_info(tmp_path):
    """Test records below the root level are dropped."""
    log_file = tmp_path / "run.log"
    handlers = logging_config.setup_logging(
        log_level="INFO", log_file=str(log_file), to_stderr=False, capture_warnings=False
    )
    logging_config.get_logger("colordist.test").debug("hidden")
    for handler in handlers:
        handler.flush()
    assert "hidden" not in log_file.read_text(encoding="utf-8")


# ============================================================================
# FORMATTER
# ============================================================================

def test_human_format_with_context():
    """Test human lines: timestamp | level | context | message."""
    logging_config.push_context(app="compare", metric="oklab")
    formatter = logging_config.ContextFormatter("human", use_color=False)
    line = formatter.format(_record("hello"))

    parts = [p.strip() for p in line.split("|")]
    assert parts[0].endswith("Z")
    assert parts[1] == "INFO"
    assert parts[2] == "app=compare metric=oklab"
    assert parts[3] == "hello"


def test_human_format_without_context():
    """Test no empty context column when nothing is pushed."""
    formatter = logging_config.ContextFormatter("human", use_color=False)
    assert formatter.format(_record("plain")).count("|") == 2


def test_unknown_format_mode():
    """Test only 'human' and 'json' are accepted."""
    with pytest.raises(ValueError, match="Unknown format mode"):
        logging_config.ContextFormatter("xml")


# ============================================================================
# CONTEXT
# ============================================================================

def test_push_pop_context():
    """Test fields accumulate and can be removed individually or all at once."""
    logging_config.push_context(app="compare")
    logging_config.push_context(metric="cie2000")
    assert logging_config.get_context() == {"app": "compare", "metric": "cie2000"}

    logging_config.pop_context(["metric", "absent"])
    assert logging_config.get_context() == {"app": "compare"}

    logging_config.pop_context()
    assert logging_config.get_context() == {}


def test_get_context_returns_copy():
    """Test mutating the returned dict does not leak into records."""
    logging_config.push_context(app="compare")
    ctx = logging_config.get_context()
    ctx["app"] = "other"
    assert logging_config.get_context() == {"app": "compare"}
