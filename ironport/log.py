#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys
from typing import TextIO

# The monitoring core reads the check result from stdout, so all log output
# goes to stderr.

# Additional level between INFO and DEBUG for the "-V" output
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("ironport")


def get_formatter(format_str: str = "%(asctime)s [%(levelno)s] [%(name)s] %(message)s") -> logging.Formatter:
    return logging.Formatter(format_str)


def clear_console_logging() -> None:
    logger.handlers[:] = []
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.INFO)


# Set default logging handler to avoid "No handler found" warnings.
clear_console_logging()


def setup_logging_handler(stream: TextIO, formatter: logging.Formatter | None = None) -> None:
    if formatter is None:
        formatter = get_formatter()

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)

    del logger.handlers[:]  # Remove all previously existing handlers
    logger.addHandler(handler)


def setup_stderr_logging(verbosity: int) -> None:
    """Enable log output on stderr for "-V", "-VV"

    Without any verbosity the NullHandler stays in place."""
    if not verbosity:
        return
    setup_logging_handler(sys.stderr, get_formatter("%(levelname)s: %(message)s"))
    logger.setLevel(verbosity_to_log_level(verbosity))


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: enables INFO and above
      1: enables VERBOSE and above
      2: enables DEBUG and above (ALL messages)

    >>> verbosity_to_log_level(1)
    15
    >>> verbosity_to_log_level(5) == logging.DEBUG
    True
    """
    if verbosity <= 0:
        return logging.INFO
    if verbosity == 1:
        return VERBOSE
    return logging.DEBUG
