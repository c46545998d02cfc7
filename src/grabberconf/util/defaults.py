# -*- coding: utf-8 -*-

CONFIG_DIR_NAME = ".grabberconf"  # under the user's home directory
PROFILES_FILE_NAME = "profiles.ini"
LOG_FILE_NAME = "grabberconf.log"
DEFAULT_PROFILE = "line_trigger_strobe"
DEFAULT_GRABBER_INDEX = 0  # grabbers[0] unless told otherwise
DEFAULT_LOGLEVEL = "INFO"
TEST_LOGLEVEL = "TRACE"
SINGLE_LINE_ERR_LOG = False  # reformat tracebacks into a single line
SCRIPT_SUFFIX = ".js"  # eGrabber only runs javascript config scripts
