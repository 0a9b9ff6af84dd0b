#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Exceptions of the IronPort check

Every exception listed here ends the check run with state UNKNOWN. The
message of the exception is what the monitoring core gets to see, so keep it
short and on one line.
"""

__all__ = [
    "ConfigurationError",
    "EvaluationError",
    "MKException",
    "MKFetcherError",
    "MKSNMPError",
    "UnknownCheckType",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class MKException(Exception):
    pass


class ConfigurationError(MKException):
    """Invalid command line or threshold configuration.

    Raised before anything is fetched from the device.
    """


class UnknownCheckType(ConfigurationError):
    pass


class MKFetcherError(MKException):
    """An exception common to the fetchers."""


class MKSNMPError(MKFetcherError):
    pass


class EvaluationError(MKException):
    """The device answered, but the answer cannot be interpreted"""
