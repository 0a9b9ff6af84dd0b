#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import enum


class State(enum.IntEnum):
    """Monitoring state of a check result

    The values are the exit codes of the monitoring plug-in API. Note that
    the integer order does not reflect "badness": see
    :func:`ironport.aggregate.aggregate_states`.

    >>> int(State.CRITICAL)
    2
    >>> str(State.UNKNOWN)
    'UNKNOWN'
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    def __str__(self) -> str:
        return self.name
