#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Interpretation of the values fetched from the device

All functions in here are pure: the same sample and thresholds always give
the same outcome.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

from ironport.aggregate import combine, InstanceResult
from ironport.catalog import CodeTable, Kind, MetricSpec, UNKNOWN_CODE
from ironport.exceptions import ConfigurationError, EvaluationError
from ironport.output import CheckOutcome, render_number, render_perfdata, render_summary
from ironport.snmplib import SNMPRawValue
from ironport.state import State

RawSample = SNMPRawValue | Sequence[SNMPRawValue]


@dataclass(frozen=True)
class Thresholds:
    warning: float
    critical: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.warning) and math.isfinite(self.critical)):
            raise ConfigurationError(
                "Thresholds must be finite numbers (got %s and %s)" % (self.warning, self.critical)
            )
        if self.critical <= self.warning:
            raise ConfigurationError(
                "Critical threshold (%s) must be greater than warning threshold (%s)"
                % (render_number(self.critical), render_number(self.warning))
            )

    @property
    def levels(self) -> tuple[float, float]:
        return self.warning, self.critical


def parse_number(raw: SNMPRawValue) -> int | float:
    """
    >>> parse_number("42"), parse_number(" 4.5 ")
    (42, 4.5)
    >>> parse_number("Timeticks: (12)")
    Traceback (most recent call last):
      ...
    ironport.exceptions.EvaluationError: Non-numeric value 'Timeticks: (12)'
    >>> parse_number("nan")
    Traceback (most recent call last):
      ...
    ironport.exceptions.EvaluationError: Non-numeric value 'nan'
    """
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        value = float(raw)
    except ValueError:
        raise EvaluationError("Non-numeric value %r" % raw) from None
    # float() also accepts "nan" and "inf"
    if not math.isfinite(value):
        raise EvaluationError("Non-numeric value %r" % raw)
    return value


def check_levels(value: float, thresholds: Thresholds) -> State:
    """Upper levels, both exclusive

    >>> [check_levels(v, Thresholds(90, 98)) for v in (90, 90.5, 98, 99)]
    [<State.OK: 0>, <State.WARNING: 1>, <State.WARNING: 1>, <State.CRITICAL: 2>]
    """
    if value > thresholds.critical:
        return State.CRITICAL
    if value > thresholds.warning:
        return State.WARNING
    return State.OK


def lookup_code(codes: CodeTable, raw: SNMPRawValue) -> tuple[State, str]:
    try:
        code = int(raw)
    except ValueError:
        return UNKNOWN_CODE
    return codes.get(code, UNKNOWN_CODE)


def check_scalar(spec: MetricSpec, raw: SNMPRawValue, thresholds: Thresholds) -> CheckOutcome:
    value = parse_number(raw)
    state = check_levels(value, thresholds)
    label = spec.labels[0]
    return CheckOutcome(
        state,
        render_summary(spec.header, state, f"{label}: {render_number(value)}{spec.unit}"),
        render_perfdata(label, value, thresholds.levels, spec.perf_uom),
    )


def check_enumerated(spec: MetricSpec, raw: SNMPRawValue) -> CheckOutcome:
    state, text = lookup_code(spec.codes, raw)
    return CheckOutcome(state, render_summary(spec.header, state, text))


def check_dual(
    spec: MetricSpec, raws: Sequence[SNMPRawValue], thresholds: Thresholds
) -> CheckOutcome:
    values = [parse_number(raw) for raw in raws]
    results = []
    for index, (label, value) in enumerate(zip(spec.labels, values, strict=True), 1):
        state = check_levels(value, thresholds)
        results.append(
            InstanceResult(
                index,
                state,
                f"{label}={render_number(value)} ({state})",
                render_perfdata(label, value, thresholds.levels),
            )
        )
    return combine(spec.header, results)


def check_enumerated_table(spec: MetricSpec, raws: Sequence[SNMPRawValue]) -> CheckOutcome:
    _ensure_instances(spec, raws)
    prefix = spec.labels[0]
    results = []
    for index, raw in enumerate(raws, 1):
        state, text = lookup_code(spec.codes, raw)
        results.append(InstanceResult(index, state, f"{prefix}{index}={text} ({state})"))
    return combine(spec.header, results)


def check_raw_table(
    spec: MetricSpec, raws: Sequence[SNMPRawValue], thresholds: Thresholds
) -> CheckOutcome:
    _ensure_instances(spec, raws)
    # A single garbled value spoils the whole table
    values = [parse_number(raw) for raw in raws]
    prefix = spec.labels[0]
    results = []
    for index, value in enumerate(values, 1):
        state = check_levels(value, thresholds)
        results.append(
            InstanceResult(
                index,
                state,
                f"{prefix}{index}={render_number(value)}{spec.unit} ({state})",
                render_perfdata(f"{prefix}{index}", value, thresholds.levels, spec.perf_uom),
            )
        )
    return combine(spec.header, results)


def evaluate(spec: MetricSpec, sample: RawSample, thresholds: Thresholds | None) -> CheckOutcome:
    match spec.kind:
        case Kind.RAW_PERCENTAGE | Kind.RAW_COUNT:
            return check_scalar(spec, _scalar(sample), _require(spec, thresholds))
        case Kind.ENUMERATED_STATUS:
            return check_enumerated(spec, _scalar(sample))
        case Kind.DUAL_RAW_COUNT:
            return check_dual(spec, _sequence(sample), _require(spec, thresholds))
        case Kind.TABLE_OF_ENUMERATED_STATUS:
            return check_enumerated_table(spec, _sequence(sample))
        case Kind.TABLE_OF_RAW_VALUE:
            return check_raw_table(spec, _sequence(sample), _require(spec, thresholds))
        case _:
            assert_never(spec.kind)


def _ensure_instances(spec: MetricSpec, raws: Sequence[SNMPRawValue]) -> None:
    if not raws:
        raise EvaluationError(f"No instances found below {spec.oids[0]}")


def _require(spec: MetricSpec, thresholds: Thresholds | None) -> Thresholds:
    if thresholds is None:
        raise ConfigurationError(
            f"Warning and critical thresholds are required for check type '{spec.check_type}'"
        )
    return thresholds


def _scalar(sample: RawSample) -> SNMPRawValue:
    if not isinstance(sample, str):
        raise TypeError(f"Expected a single value, got {sample!r}")
    return sample


def _sequence(sample: RawSample) -> Sequence[SNMPRawValue]:
    if isinstance(sample, str):
        raise TypeError(f"Expected a sequence of values, got {sample!r}")
    return sample
