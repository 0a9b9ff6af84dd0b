#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import abc
import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Self

OID = str
SNMPRawValue = str
SNMPRowInfo = list[tuple[OID, SNMPRawValue]]

# if the credentials are a string, we use that as community,
# if it is a four-tuple, we use it as V3 auth parameters:
# (1) security level (-l)
# (2) auth protocol (-a, e.g. 'SHA')
# (3) security name (-u)
# (4) auth password (-A)
SNMPCommunity = str
SNMPv3AuthNoPriv = tuple[str, str, str, str]
SNMPCredentials = SNMPCommunity | SNMPv3AuthNoPriv
SNMPTiming = Mapping[str, float]


class SNMPVersion(enum.Enum):
    V1 = "1"
    V2C = "2c"
    V3 = "3"

    @classmethod
    def from_cli(cls, value: str) -> Self:
        """
        >>> SNMPVersion.from_cli("2C")
        <SNMPVersion.V2C: '2c'>
        """
        return cls(value.lower())


# Wraps the configuration of a host into a single object for the SNMP code
@dataclass(frozen=True, kw_only=True)
class SNMPHostConfig:
    ipaddress: str
    credentials: SNMPCredentials
    snmp_version: SNMPVersion = SNMPVersion.V2C
    port: int = 161
    timing: SNMPTiming = field(default_factory=dict)

    @property
    def is_ipv6_primary(self) -> bool:
        return ":" in self.ipaddress

    @property
    def is_snmpv3_host(self) -> bool:
        return self.snmp_version is SNMPVersion.V3


class SNMPBackend(abc.ABC):
    def __init__(self, snmp_config: SNMPHostConfig, logger: logging.Logger) -> None:
        super().__init__()
        self._logger = logger
        self.config = snmp_config

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def address(self) -> str:
        return self.config.ipaddress

    @abc.abstractmethod
    def get(self, /, oid: OID) -> SNMPRawValue | None:
        """Fetch a single OID from the host

        Returns None if the device does not know the object.
        Raises MKSNMPError on transport or authentication errors.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def walk(self, /, oid: OID) -> SNMPRowInfo:
        """Fetch all OIDs below the given one, in walk order"""
        raise NotImplementedError()
