# -*- coding: utf-8 -*-
"""
Log setup for scripts and the command line.

Everything in the package logs through the loguru `logger`; these helpers only
decide where the records go.
"""

import os
import pathlib
import sys
import traceback

from loguru import logger

from .defaults import (
    CONFIG_DIR_NAME,
    DEFAULT_LOGLEVEL,
    LOG_FILE_NAME,
    SINGLE_LINE_ERR_LOG,
)

_log_path = ""


def format_error_response():
    err_str = traceback.format_exc()
    if SINGLE_LINE_ERR_LOG:
        return "\t".join(line.strip() for line in err_str.splitlines())
    else:
        return err_str


def start_log(
    log_to_file=True,
    log_to_stdout=False,
    log_path=None,
    clear_prev=True,
    log_level=DEFAULT_LOGLEVEL,
):
    global _log_path

    if log_path is None or log_path == "":
        log_path = log_default_path()
    else:
        log_path = os.path.abspath(log_path)

    if clear_prev:
        clear_log(log_path)

    # first remove (default) stderr output
    logger.remove()

    if log_to_file:
        pathlib.Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_path, level=log_level, enqueue=True, colorize=False)
        _log_path = log_path
    if log_to_stdout:
        logger.add(sys.stderr, level=log_level, enqueue=True, colorize=True)
    if log_to_file:
        logger.info("Log started at {}", log_path)
    else:
        logger.info("Log started.")


def log_default_path() -> str:
    return str(pathlib.Path.home().joinpath(CONFIG_DIR_NAME, LOG_FILE_NAME))


def clear_log(log_path: str):
    """
    Clear the log file at the given path, if there is one.

    Arguments
    ---------
    log_path : str
        The path to the log file. The default is given by log_default_path().
    """
    if os.path.exists(log_path):
        try:
            os.remove(log_path)
        except PermissionError:
            logger.error(
                f"Could not clear log file {log_path}. Permission denied. Continuing."
            )


def shutdown_log():
    global _log_path
    try:
        logger.info("Closing down log.")
        logger.complete()
        logger.remove()
    except Exception:
        logger.exception("Error shutting down log - skipping.")
    _log_path = ""


def get_log_filename() -> str:
    """Path of the file currently logged to, empty if not logging to a file."""
    return _log_path
