import io
import logging

from create_package.log import LOGGER_NAME, MARKER, highlight, setup_logging


def _handlers() -> list[logging.Handler]:
    logger = logging.getLogger(LOGGER_NAME)
    return [h for h in logger.handlers if getattr(h, "_create_package_console", False)]


def test_headline_detail_and_warning_formats() -> None:
    stream = io.StringIO()
    setup_logging(logging.INFO, stream=stream)
    log = logging.getLogger(f"{LOGGER_NAME}.test")
    log.info("Setting up", extra={"headline": True})
    log.info("  Copied “index.js”")
    log.warning("Template file not found")
    log.debug("hidden")
    assert stream.getvalue().splitlines() == [
        f"{MARKER}Setting up",
        "  Copied “index.js”",
        "  warning: Template file not found",
    ]


def test_setup_twice_keeps_one_handler() -> None:
    setup_logging(stream=io.StringIO())
    setup_logging(stream=io.StringIO())
    assert len(_handlers()) == 1


def test_level_names_accepted() -> None:
    setup_logging("DEBUG", stream=io.StringIO())
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    setup_logging(logging.INFO, stream=io.StringIO())


def test_highlight_styles() -> None:
    assert highlight("x", color=False) == f"{MARKER}x"
    styled = highlight("x")
    assert styled.startswith("\x1b[1m") and styled.endswith("x\x1b[22m")
