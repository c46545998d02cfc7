# -*- coding: utf-8 -*-
"""
Defaults and logging helpers.

Examples
--------
Logging to the console while scripting:
```python
from grabberconf.util import start_log
start_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")
```

See Also
--------
grabberconf.util.logging : Logging configuration
grabberconf.util.defaults : Package-wide defaults
"""

from .defaults import (
    CONFIG_DIR_NAME,
    DEFAULT_GRABBER_INDEX,
    DEFAULT_LOGLEVEL,
    DEFAULT_PROFILE,
    LOG_FILE_NAME,
    PROFILES_FILE_NAME,
    SCRIPT_SUFFIX,
    SINGLE_LINE_ERR_LOG,
    TEST_LOGLEVEL,
)
from .logging import (
    clear_log,
    format_error_response,
    get_log_filename,
    log_default_path,
    shutdown_log,
    start_log,
)

__all__ = [
    "CONFIG_DIR_NAME",
    "DEFAULT_GRABBER_INDEX",
    "DEFAULT_LOGLEVEL",
    "DEFAULT_PROFILE",
    "LOG_FILE_NAME",
    "PROFILES_FILE_NAME",
    "SCRIPT_SUFFIX",
    "SINGLE_LINE_ERR_LOG",
    "TEST_LOGLEVEL",
    "clear_log",
    "format_error_response",
    "get_log_filename",
    "log_default_path",
    "shutdown_log",
    "start_log",
]
