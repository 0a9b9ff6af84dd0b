#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, FiniteFloat, ValidationError

from ironport.catalog import MetricSpec, resolve
from ironport.evaluate import Thresholds
from ironport.exceptions import ConfigurationError
from ironport.snmplib import SNMPCredentials, SNMPHostConfig, SNMPTiming, SNMPVersion

SNMP_VERSIONS = tuple(version.value for version in SNMPVersion)


class CheckArgs(BaseModel):
    host: str
    community: str
    version: str
    passphrase: None | str
    check_type: str
    warning: None | FiniteFloat
    critical: None | FiniteFloat
    port: int
    timeout: None | float
    retries: None | int
    auth_protocol: str
    verbose: int
    debug: bool

    @property
    def snmp_version(self) -> SNMPVersion:
        try:
            return SNMPVersion.from_cli(self.version)
        except ValueError:
            raise ConfigurationError(
                "Unknown SNMP version '%s' (choose from: %s)"
                % (self.version, ", ".join(SNMP_VERSIONS))
            ) from None

    def credentials(self) -> SNMPCredentials:
        if self.snmp_version is not SNMPVersion.V3:
            return self.community
        if not self.passphrase:
            raise ConfigurationError("SNMP version 3 requires a passphrase (-P)")
        return ("authNoPriv", self.auth_protocol.upper(), self.community, self.passphrase)

    def timing(self) -> SNMPTiming:
        timing: dict[str, float] = {}
        if self.timeout is not None:
            timing["timeout"] = self.timeout
        if self.retries is not None:
            timing["retries"] = self.retries
        return timing

    def snmp_config(self) -> SNMPHostConfig:
        return SNMPHostConfig(
            ipaddress=self.host,
            credentials=self.credentials(),
            snmp_version=self.snmp_version,
            port=self.port,
            timing=self.timing(),
        )

    def thresholds(self, spec: MetricSpec) -> Thresholds | None:
        """Thresholds are only used if the metric needs them, but checked whenever given"""
        if self.warning is not None and self.critical is not None:
            thresholds = Thresholds(self.warning, self.critical)
            return thresholds if spec.requires_thresholds else None
        if not spec.requires_thresholds:
            return None
        raise ConfigurationError(
            "Check type '%s' requires a warning (-w) and a critical (-c) threshold"
            % spec.check_type
        )


@dataclass(frozen=True)
class CheckConfig:
    """Everything needed for one check run, validated up front"""

    spec: MetricSpec
    snmp_config: SNMPHostConfig
    thresholds: None | Thresholds


def load_args(namespace: Mapping[str, Any]) -> CheckArgs:
    try:
        return CheckArgs.model_validate(dict(namespace))
    except ValidationError as e:
        raise ConfigurationError(_first_error(e)) from e


def validate(args: CheckArgs, spec: MetricSpec | None = None) -> CheckConfig:
    """Check the configuration before anything is sent to the device"""
    if spec is None:
        spec = resolve(args.check_type)
    return CheckConfig(
        spec=spec,
        snmp_config=args.snmp_config(),
        thresholds=args.thresholds(spec),
    )


def _first_error(error: ValidationError) -> str:
    details = error.errors()[0]
    location = ".".join(str(part) for part in details["loc"])
    return f"Invalid value for {location}: {details['msg']}"
