#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""The metrics an AsyncOS mail appliance offers via SNMP

All OIDs live below ASYNCOS-MAIL-MIB::asyncOSMailObjects
(.1.3.6.1.4.1.15497.1.1.1). They are defined by the device and must not be
changed.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ironport.exceptions import UnknownCheckType
from ironport.snmplib import OID
from ironport.state import State

_BASE = ".1.3.6.1.4.1.15497.1.1.1"


class Kind(enum.Enum):
    RAW_PERCENTAGE = "raw-percentage"
    RAW_COUNT = "raw-count"
    ENUMERATED_STATUS = "enumerated-status"
    TABLE_OF_ENUMERATED_STATUS = "table-of-enumerated-status"
    TABLE_OF_RAW_VALUE = "table-of-raw-value"
    DUAL_RAW_COUNT = "dual-raw-count"


_KINDS_WITH_THRESHOLDS = frozenset(
    {Kind.RAW_PERCENTAGE, Kind.RAW_COUNT, Kind.DUAL_RAW_COUNT, Kind.TABLE_OF_RAW_VALUE}
)

CodeTable = Mapping[int, tuple[State, str]]

UNKNOWN_CODE = (State.UNKNOWN, "Unknown")


@dataclass(frozen=True, kw_only=True)
class MetricSpec:
    """How to fetch and interpret one check type

    labels: one label per OID for scalar kinds, the instance prefix for
    table kinds ("Fan" -> "Fan1", "Fan2", ...).
    """

    check_type: str
    header: str
    oids: tuple[OID, ...]
    kind: Kind
    labels: tuple[str, ...]
    unit: str = ""
    codes: CodeTable = field(default_factory=lambda: MappingProxyType({}))

    @property
    def requires_thresholds(self) -> bool:
        return self.kind in _KINDS_WITH_THRESHOLDS

    @property
    def perf_uom(self) -> str:
        return "%" if self.kind is Kind.RAW_PERCENTAGE else ""


QUEUE_AVAILABILITY: CodeTable = MappingProxyType(
    {
        1: (State.OK, "Space available"),
        2: (State.WARNING, "Space shortage"),
        3: (State.CRITICAL, "Full"),
    }
)

MEMORY_AVAILABILITY: CodeTable = MappingProxyType(
    {
        1: (State.OK, "Memory available"),
        2: (State.WARNING, "Memory shortage"),
        3: (State.CRITICAL, "Memory full"),
    }
)

RESOURCE_CONSERVATION: CodeTable = MappingProxyType(
    {
        1: (State.OK, "No resource conservation"),
        2: (State.WARNING, "Memory shortage"),
        3: (State.WARNING, "Queue space shortage"),
        4: (State.CRITICAL, "Queue full"),
    }
)

POWER_SUPPLY_STATUS: CodeTable = MappingProxyType(
    {
        1: (State.WARNING, "Not installed"),
        2: (State.OK, "Healthy"),
        3: (State.CRITICAL, "No AC"),
        4: (State.CRITICAL, "Faulty"),
    }
)

POWER_SUPPLY_REDUNDANCY: CodeTable = MappingProxyType(
    {
        1: (State.OK, "Redundancy OK"),
        2: (State.CRITICAL, "Redundancy lost"),
    }
)

RAID_STATUS: CodeTable = MappingProxyType(
    {
        1: (State.OK, "Healthy"),
        2: (State.CRITICAL, "Failure"),
        3: (State.WARNING, "Rebuilding"),
    }
)


_CATALOG: Mapping[str, MetricSpec] = MappingProxyType(
    {
        spec.check_type: spec
        for spec in (
            MetricSpec(
                check_type="cpu",
                header="CPU",
                oids=(f"{_BASE}.2.0",),
                kind=Kind.RAW_PERCENTAGE,
                labels=("CPU utilization",),
                unit="%",
            ),
            MetricSpec(
                check_type="mem",
                header="Memory",
                oids=(f"{_BASE}.1.0",),
                kind=Kind.RAW_PERCENTAGE,
                labels=("Memory utilization",),
                unit="%",
            ),
            MetricSpec(
                check_type="memoryavail",
                header="Memory availability",
                oids=(f"{_BASE}.7.0",),
                kind=Kind.ENUMERATED_STATUS,
                labels=("Memory availability",),
                codes=MEMORY_AVAILABILITY,
            ),
            MetricSpec(
                check_type="diskio",
                header="Disk I/O",
                oids=(f"{_BASE}.3.0",),
                kind=Kind.RAW_PERCENTAGE,
                labels=("Disk I/O utilization",),
                unit="%",
            ),
            MetricSpec(
                check_type="queue",
                header="Queue",
                oids=(f"{_BASE}.4.0",),
                kind=Kind.RAW_PERCENTAGE,
                labels=("Queue utilization",),
                unit="%",
            ),
            MetricSpec(
                check_type="queueavail",
                header="Queue availability",
                oids=(f"{_BASE}.5.0",),
                kind=Kind.ENUMERATED_STATUS,
                labels=("Queue availability",),
                codes=QUEUE_AVAILABILITY,
            ),
            MetricSpec(
                check_type="workqueue",
                header="Work queue",
                oids=(f"{_BASE}.11.0",),
                kind=Kind.RAW_COUNT,
                labels=("Messages in work queue",),
            ),
            MetricSpec(
                check_type="resourceconservation",
                header="Resource conservation",
                oids=(f"{_BASE}.6.0",),
                kind=Kind.ENUMERATED_STATUS,
                labels=("Resource conservation",),
                codes=RESOURCE_CONSERVATION,
            ),
            MetricSpec(
                check_type="temperature",
                header="Temperature",
                oids=(f"{_BASE}.9.1.2.1",),
                kind=Kind.RAW_COUNT,
                labels=("Temperature",),
                unit=" °C",
            ),
            MetricSpec(
                check_type="raid",
                header="RAID status",
                oids=(f"{_BASE}.18.1.2",),
                kind=Kind.TABLE_OF_ENUMERATED_STATUS,
                labels=("Drive",),
                codes=RAID_STATUS,
            ),
            MetricSpec(
                check_type="fan",
                header="Fan status",
                oids=(f"{_BASE}.10.1.2",),
                kind=Kind.TABLE_OF_RAW_VALUE,
                labels=("Fan",),
                unit=" RPM",
            ),
            MetricSpec(
                check_type="psstatus",
                header="Power Supply status",
                oids=(f"{_BASE}.8.1.2",),
                kind=Kind.TABLE_OF_ENUMERATED_STATUS,
                labels=("PS ",),
                codes=POWER_SUPPLY_STATUS,
            ),
            MetricSpec(
                check_type="psredundancy",
                header="Power Supply redundancy",
                oids=(f"{_BASE}.8.1.3",),
                kind=Kind.TABLE_OF_ENUMERATED_STATUS,
                labels=("PS ",),
                codes=POWER_SUPPLY_REDUNDANCY,
            ),
            MetricSpec(
                check_type="openfiles",
                header="Open files",
                oids=(f"{_BASE}.19.0",),
                kind=Kind.RAW_COUNT,
                labels=("Open files or sockets",),
            ),
            MetricSpec(
                check_type="mailtransferthreads",
                header="Mail transfer threads",
                oids=(f"{_BASE}.20.0",),
                kind=Kind.RAW_COUNT,
                labels=("Mail transfer threads",),
            ),
            MetricSpec(
                check_type="dns",
                header="DNS requests",
                # pendingDNSRequests, outstandingDNSRequests
                oids=(f"{_BASE}.16.0", f"{_BASE}.15.0"),
                kind=Kind.DUAL_RAW_COUNT,
                labels=("Pending DNS requests", "Outstanding DNS requests"),
            ),
        )
    }
)

CHECK_TYPES = tuple(_CATALOG)


def resolve(check_type: str) -> MetricSpec:
    """
    >>> resolve("queueavail").oids
    ('.1.3.6.1.4.1.15497.1.1.1.5.0',)
    >>> resolve("fan").requires_thresholds
    True
    >>> resolve("raid").requires_thresholds
    False
    """
    try:
        return _CATALOG[check_type]
    except KeyError:
        raise UnknownCheckType(
            "Unknown check type '%s' (choose from: %s)" % (check_type, ", ".join(CHECK_TYPES))
        ) from None
