import logging
import logging.handlers

import pytest

from skybox import log


@pytest.fixture
def logfile(tmp_path):
    path = tmp_path / "test.log"
    log.init_log(str(path))
    yield path
    log.shutdown_log()


def test_init_sets_info_and_two_handlers(tmp_path):
    log.init_log(str(tmp_path / "init.log"))
    try:
        logger = logging.getLogger(log.LOGGER_NAME)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 2
    finally:
        log.shutdown_log()


def test_rotating_file_limits(tmp_path):
    log.init_log(str(tmp_path / "rotate.log"))
    try:
        logger = logging.getLogger(log.LOGGER_NAME)
        rotating = [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].maxBytes == 50 * 1024 * 1024
        assert rotating[0].backupCount == 5
    finally:
        log.shutdown_log()


@pytest.mark.parametrize(
    "name, level",
    [
        ("debug", logging.DEBUG),
        ("warn", logging.WARNING),
        ("warning", logging.WARNING),
        ("err", logging.ERROR),
        ("error", logging.ERROR),
        ("trace", log.TRACE),
        ("info", logging.INFO),
        ("bogus", logging.INFO),
    ],
)
def test_set_log_level(logfile, name, level):
    log.set_log_level(name)
    assert logging.getLogger(log.LOGGER_NAME).level == level


def test_records_written_with_short_level(logfile):
    log.set_log_level("debug")
    logging.getLogger("skybox.sample").debug("hello %s", "world")
    log.shutdown_log()
    content = logfile.read_text(encoding="utf-8")
    assert "hello world" in content
    assert " DBG " in content


def test_level_filters_records(logfile):
    log.set_log_level("error")
    logger = logging.getLogger(log.LOGGER_NAME)
    logger.info("quiet message")
    logger.error("loud message")
    log.shutdown_log()
    content = logfile.read_text(encoding="utf-8")
    assert "quiet message" not in content
    assert "loud message" in content
    assert " ERR " in content


def test_shutdown_flushes_and_removes_handlers(tmp_path):
    path = tmp_path / "shutdown.log"
    log.init_log(str(path))
    logging.getLogger(log.LOGGER_NAME).warning("before shutdown")
    log.shutdown_log()
    assert "before shutdown" in path.read_text(encoding="utf-8")
    assert logging.getLogger(log.LOGGER_NAME).handlers == []


def test_init_twice_does_not_duplicate(tmp_path):
    log.init_log(str(tmp_path / "a.log"))
    log.init_log(str(tmp_path / "b.log"))
    try:
        assert len(logging.getLogger(log.LOGGER_NAME).handlers) == 2
    finally:
        log.shutdown_log()