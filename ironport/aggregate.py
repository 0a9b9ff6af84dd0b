#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ironport.output import CheckOutcome, render_summary
from ironport.state import State


@dataclass(frozen=True)
class InstanceResult:
    index: int
    state: State
    label: str
    perfdata: str | None = None


def aggregate_states(states: Iterable[State]) -> State:
    """Fold the states of several instances into one

    CRITICAL always wins. Otherwise the first WARNING or UNKNOWN seen sets
    the overall state; the two are not ranked against each other. So this
    is neither `max` nor the usual "worst state" of a monitoring core.

    >>> aggregate_states([State.OK, State.UNKNOWN, State.WARNING])
    <State.UNKNOWN: 3>
    >>> aggregate_states([State.WARNING, State.UNKNOWN])
    <State.WARNING: 1>
    >>> aggregate_states([State.WARNING, State.UNKNOWN, State.CRITICAL])
    <State.CRITICAL: 2>
    >>> aggregate_states([])
    <State.OK: 0>
    """
    first_anomaly: State | None = None
    for state in states:
        if state is State.CRITICAL:
            return State.CRITICAL
        if first_anomaly is None and state in (State.WARNING, State.UNKNOWN):
            first_anomaly = state
    return State.OK if first_anomaly is None else first_anomaly


def combine(header: str, results: Sequence[InstanceResult]) -> CheckOutcome:
    state = aggregate_states(result.state for result in results)
    return CheckOutcome(
        state,
        render_summary(header, state, " ".join(result.label for result in results)),
        " ".join(result.perfdata for result in results if result.perfdata),
    )
