#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Sequence

import pytest

from ironport.aggregate import aggregate_states, combine, InstanceResult
from ironport.output import CheckOutcome
from ironport.state import State

OK, WARN, CRIT, UNKN = State.OK, State.WARNING, State.CRITICAL, State.UNKNOWN


@pytest.mark.parametrize(
    "states, expected",
    [
        ([], OK),
        ([OK], OK),
        ([OK, OK, OK], OK),
        ([WARN], WARN),
        ([UNKN], UNKN),
        ([OK, WARN, UNKN], WARN),
        ([OK, UNKN, WARN], UNKN),
        ([UNKN, WARN, WARN], UNKN),
        ([CRIT], CRIT),
        ([WARN, UNKN, CRIT], CRIT),
        ([CRIT, WARN], CRIT),
        ([OK, OK, CRIT, OK], CRIT),
    ],
)
def test_aggregate_states(states: Sequence[State], expected: State) -> None:
    assert aggregate_states(states) is expected


def test_aggregate_states_is_not_max() -> None:
    # max() would rank UNKNOWN above WARNING
    assert aggregate_states([WARN, UNKN]) is WARN
    assert max([WARN, UNKN]) is UNKN


def test_aggregate_states_consumes_iterators() -> None:
    assert aggregate_states(iter([OK, WARN])) is WARN


def test_combine() -> None:
    assert combine(
        "Fan status",
        [
            InstanceResult(1, OK, "Fan1=1200 RPM (OK)", "'Fan1'=1200;3000;5000"),
            InstanceResult(2, WARN, "Fan2=4000 RPM (WARNING)", "'Fan2'=4000;3000;5000"),
        ],
    ) == CheckOutcome(
        WARN,
        "Fan status WARNING - Fan1=1200 RPM (OK) Fan2=4000 RPM (WARNING)",
        "'Fan1'=1200;3000;5000 'Fan2'=4000;3000;5000",
    )


def test_combine_without_perfdata() -> None:
    outcome = combine(
        "RAID status",
        [
            InstanceResult(1, OK, "Drive1=Healthy (OK)"),
            InstanceResult(2, UNKN, "Drive2=Unknown (UNKNOWN)"),
            InstanceResult(3, WARN, "Drive3=Rebuilding (WARNING)"),
        ],
    )
    assert outcome.state is UNKN
    assert outcome.message == (
        "RAID status UNKNOWN - Drive1=Healthy (OK) Drive2=Unknown (UNKNOWN) Drive3=Rebuilding (WARNING)"
    )
    assert outcome.perfdata == ""
