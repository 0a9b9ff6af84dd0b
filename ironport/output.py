#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Rendering of check results according to the monitoring plug-in API

A check writes exactly one line to stdout:

    <header> <STATE> - <details>[ | <perfdata>]

and exits with the numeric value of the state.
"""

from dataclasses import dataclass

from ironport.state import State


@dataclass(frozen=True)
class CheckOutcome:
    state: State
    message: str
    perfdata: str = ""


def render(outcome: CheckOutcome) -> tuple[str, int]:
    """
    >>> render(CheckOutcome(State.WARNING, "Memory WARNING - Memory utilization: 95%", "'Memory utilization'=95%;90;98"))
    ("Memory WARNING - Memory utilization: 95% | 'Memory utilization'=95%;90;98", 1)
    >>> render(CheckOutcome(State.CRITICAL, "Queue availability CRITICAL - Full"))
    ('Queue availability CRITICAL - Full', 2)
    """
    if outcome.perfdata:
        return f"{outcome.message} | {outcome.perfdata}", int(outcome.state)
    return outcome.message, int(outcome.state)


def render_summary(header: str, state: State, details: str) -> str:
    return f"{header} {state} - {details}"


def render_perfdata(
    label: str,
    value: float,
    levels: tuple[float, float] | None = None,
    uom: str = "",
) -> str:
    """
    >>> render_perfdata("Fan1", 1200, (3000, 5000.0))
    "'Fan1'=1200;3000;5000"
    >>> render_perfdata("CPU utilization", 12.5, uom="%")
    "'CPU utilization'=12.5%"
    """
    perfdata = f"'{label}'={render_number(value)}{uom}"
    if levels is None:
        return perfdata
    return perfdata + "".join(f";{render_number(level)}" for level in levels)


def render_number(value: float) -> str:
    """Integral values are rendered without a fractional part

    >>> render_number(95.0), render_number(12.5), render_number(4000)
    ('95', '12.5', '4000')
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
