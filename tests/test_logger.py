"""
Tests for the structured logger: level filtering, detail tree, tracebacks
"""

import io

from models.enums import LogCategory, LogLevel
from utils.logger import Logger, configure_logger, get_logger


def make_logger(level=LogLevel.DEBUG):
    stream = io.StringIO()
    return Logger(min_level=level, use_colors=False, stream=stream), stream


def test_message_and_details():
    logger, stream = make_logger()

    logger.for_category(LogCategory.ACTION).info("Activating scene", scene="s2", index=1)

    lines = stream.getvalue().splitlines()
    assert "ACTION" in lines[0] and "✓ Activating scene" in lines[0]
    assert lines[1].strip() == "├─ scene: s2"
    assert lines[2].strip() == "└─ index: 1"


def test_none_details_are_skipped():
    logger, stream = make_logger()

    logger.info(LogCategory.BRIDGE, "Bridge adapter created", group=None)

    assert len(stream.getvalue().splitlines()) == 1


def test_level_filtering():
    logger, stream = make_logger(LogLevel.WARN)
    bound = logger.for_category(LogCategory.INPUT)

    bound.debug("Key event")
    bound.info("Key pressed")
    bound.warn("Error reading events")

    output = stream.getvalue()
    assert "Key event" not in output
    assert "Key pressed" not in output
    assert "⚠ Error reading events" in output


def test_exc_info_appends_traceback():
    logger, stream = make_logger()

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.error(LogCategory.SYSTEM, "Unexpected error", exc_info=True)

    assert "RuntimeError: boom" in stream.getvalue()


def test_with_category_rebinds():
    logger, stream = make_logger()

    logger.for_category(LogCategory.INPUT).with_category(LogCategory.SHUTDOWN).info("Closing")

    assert "SHUTDOWN" in stream.getvalue()


def test_configure_logger_updates_singleton_in_place():
    singleton = get_logger()
    stream = io.StringIO()
    try:
        configure_logger(LogLevel.ERROR, use_colors=False, stream=stream)
        assert get_logger() is singleton
        singleton.info(LogCategory.SYSTEM, "hidden")
        singleton.error(LogCategory.SYSTEM, "shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()
    finally:
        configure_logger(LogLevel.INFO, use_colors=True, stream=None)
