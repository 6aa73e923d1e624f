import logging
import re

import pytest

from matissehal.log_util import (
    DEFAULT_DEBUG_LEVEL,
    LocLogger,
    LogLevel,
    get_logger,
    get_timestamp,
    loc_logger_init,
)


def _field_widths(text):
    return [len(part) for part in re.split(r"[:.]", text)]


@pytest.fixture(autouse=True)
def _restore_shared_logger():
    logger = get_logger()
    saved = (logger.debug_level, logger.timestamp)
    yield
    logger.debug_level, logger.timestamp = saved


def test_default_level_enables_everything():
    logger = LocLogger()
    assert all(logger.enabled(level) for level in LogLevel)


@pytest.mark.parametrize("threshold", [1, 2, 3, 4, 5])
def test_threshold_filters_higher_levels(threshold):
    logger = LocLogger(debug_level=threshold)
    for level in LogLevel:
        assert logger.enabled(level) == (level <= threshold)


@pytest.mark.parametrize("threshold", [0, 6, 100])
def test_out_of_range_level_disables_all(threshold):
    logger = LocLogger(debug_level=threshold)
    assert not any(logger.enabled(level) for level in LogLevel)
    assert logger.emit(LogLevel.ERROR, "x") is None


def test_emit_prefixes():
    logger = LocLogger()
    assert logger.emit(LogLevel.ERROR, "e") == "W/e"
    assert logger.emit(LogLevel.WARNING, "w") == "W/w"
    assert logger.emit(LogLevel.INFO, "i") == "I/i"
    assert logger.emit(LogLevel.DEBUG, "d") == "D/d"
    assert logger.emit(LogLevel.VERBOSE, "v") == "V/v"


def test_emit_filtered_message_returns_none():
    logger = LocLogger(debug_level=2)
    assert logger.emit(LogLevel.DEBUG, "hidden") is None


def test_configured_level_logs_at_error_severity(caplog):
    logger = LocLogger(debug_level=5)
    with caplog.at_level(logging.DEBUG, logger="matissehal"):
        logger.emit(LogLevel.DEBUG, "msg")
    assert [r.levelno for r in caplog.records] == [logging.ERROR]
    assert caplog.records[0].getMessage() == "D/msg"


def test_default_level_logs_at_native_severity(caplog):
    logger = LocLogger()
    with caplog.at_level(logging.DEBUG, logger="matissehal"):
        logger.emit(LogLevel.INFO, "a")
        logger.emit(LogLevel.WARNING, "b")
    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.WARNING]


def test_timestamp_prefix():
    logger = LocLogger(timestamp=1)
    line = logger.emit(LogLevel.INFO, "hello")
    assert line[:3] == "I/["
    assert line[-7:] == "] hello"
    stamp = line[3:-7]
    assert _field_widths(stamp) == [2, 2, 2, 6]
    assert stamp.replace(":", "").replace(".", "").isdigit() is True


def test_loc_logger_init_updates_shared_logger():
    result = loc_logger_init(3, 1)
    assert result is get_logger()
    assert get_logger().debug_level == 3
    assert get_logger().timestamp == 1
    assert get_logger().enabled(LogLevel.INFO)
    assert not get_logger().enabled(LogLevel.DEBUG)


def test_shared_logger_default_level():
    loc_logger_init(DEFAULT_DEBUG_LEVEL, 0)
    assert get_logger().debug_level == 0xFF


def test_get_timestamp_epoch():
    assert get_timestamp(0) == "00:00:00.000000"


def test_get_timestamp_fraction():
    assert get_timestamp(3661.5) == "01:01:01.500000"


def test_get_timestamp_wraps_day():
    assert get_timestamp(86400 + 12.25) == get_timestamp(12.25)


def test_get_timestamp_current_format():
    text = get_timestamp()
    assert _field_widths(text) == [2, 2, 2, 6]
    assert text.replace(":", "").replace(".", "").isdigit() is True
    assert int(text[:2]) < 24