#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
from collections.abc import Mapping, Sequence

import pytest

from ironport.exceptions import MKSNMPError
from ironport.snmplib import OID, SNMPBackend, SNMPHostConfig, SNMPRawValue, SNMPRowInfo


class FakeSNMPBackend(SNMPBackend):
    """Answers from a dict instead of asking a device"""

    def __init__(
        self,
        snmp_config: SNMPHostConfig,
        logger: logging.Logger,
        *,
        scalars: Mapping[OID, SNMPRawValue],
        tables: Mapping[OID, Sequence[SNMPRawValue]],
        error: str | None,
        calls: list[tuple[str, OID]],
    ) -> None:
        super().__init__(snmp_config, logger)
        self._scalars = scalars
        self._tables = tables
        self._error = error
        self.calls = calls

    def get(self, /, oid: OID) -> SNMPRawValue | None:
        self.calls.append(("get", oid))
        if self._error is not None:
            raise MKSNMPError(self._error)
        return self._scalars.get(oid)

    def walk(self, /, oid: OID) -> SNMPRowInfo:
        self.calls.append(("walk", oid))
        if self._error is not None:
            raise MKSNMPError(self._error)
        return [(f"{oid}.{idx}", value) for idx, value in enumerate(self._tables.get(oid, ()), 1)]


class FakeBackendFactory:
    def __init__(
        self,
        scalars: Mapping[OID, SNMPRawValue] | None = None,
        tables: Mapping[OID, Sequence[SNMPRawValue]] | None = None,
        error: str | None = None,
    ) -> None:
        self.scalars = scalars or {}
        self.tables = tables or {}
        self.error = error
        self.calls: list[tuple[str, OID]] = []
        self.configs: list[SNMPHostConfig] = []

    def __call__(self, snmp_config: SNMPHostConfig, logger: logging.Logger) -> FakeSNMPBackend:
        self.configs.append(snmp_config)
        return FakeSNMPBackend(
            snmp_config,
            logger,
            scalars=self.scalars,
            tables=self.tables,
            error=self.error,
            calls=self.calls,
        )


@pytest.fixture(name="host_config")
def fixture_host_config() -> SNMPHostConfig:
    return SNMPHostConfig(ipaddress="10.1.1.25", credentials="public")


@pytest.fixture(name="fake_backend_factory")
def fixture_fake_backend_factory() -> type[FakeBackendFactory]:
    return FakeBackendFactory
