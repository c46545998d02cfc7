from loguru import logger

from grabberconf.util import (
    clear_log,
    get_log_filename,
    log_default_path,
    shutdown_log,
    start_log,
)


def test_default_path(tmp_home):
    assert log_default_path() == str(tmp_home / ".grabberconf" / "grabberconf.log")


def test_log_to_file(tmp_path):
    log_path = tmp_path / "logs" / "test.log"
    start_log(log_path=str(log_path), log_level="DEBUG")
    try:
        assert get_log_filename() == str(log_path)
        logger.debug("written to the file")
        logger.trace("below the level")
    finally:
        shutdown_log()

    text = log_path.read_text()
    assert "Log started at" in text
    assert "written to the file" in text
    assert "below the level" not in text
    assert get_log_filename() == ""


def test_previous_log_cleared(tmp_path):
    log_path = tmp_path / "test.log"
    log_path.write_text("old run\n")

    start_log(log_path=str(log_path))
    shutdown_log()
    assert "old run" not in log_path.read_text()

    start_log(log_path=str(log_path), clear_prev=False)
    logger.info("second run")
    shutdown_log()
    assert "second run" in log_path.read_text()


def test_no_file(tmp_home):
    start_log(log_to_file=False)
    shutdown_log()

    assert get_log_filename() == ""
    assert not (tmp_home / ".grabberconf" / "grabberconf.log").exists()


def test_clear_missing_file(tmp_path):
    clear_log(str(tmp_path / "nothing.log"))
