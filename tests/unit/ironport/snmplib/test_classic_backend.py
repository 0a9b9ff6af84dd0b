#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import subprocess
from collections.abc import Sequence
from typing import Any

import pytest

from ironport.exceptions import MKSNMPError
from ironport.snmplib import ClassicSNMPBackend, SNMPHostConfig, SNMPVersion, strip_snmp_value

_LOGGER = logging.getLogger("test")


class _FakeRun:
    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.commands: list[Sequence[str]] = []

    def __call__(self, command: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.commands.append(command)
        return subprocess.CompletedProcess(command, self.returncode, self.stdout, self.stderr)


@pytest.fixture(name="fake_run")
def fixture_fake_run(monkeypatch: pytest.MonkeyPatch) -> _FakeRun:
    fake_run = _FakeRun()
    monkeypatch.setattr(subprocess, "run", fake_run)
    return fake_run


def _backend(**kwargs: Any) -> ClassicSNMPBackend:
    return ClassicSNMPBackend(
        SNMPHostConfig(**({"ipaddress": "10.1.1.25", "credentials": "public"} | kwargs)),
        _LOGGER,
    )


def test_get(fake_run: _FakeRun) -> None:
    fake_run.stdout = ".1.3.6.1.4.1.15497.1.1.1.1.0 = 95\n"
    assert _backend().get(".1.3.6.1.4.1.15497.1.1.1.1.0") == "95"
    assert fake_run.commands == [
        [
            "snmpget",
            "-v2c",
            "-c",
            "public",
            "-m",
            "",
            "-M",
            "",
            "-On",
            "-OQ",
            "-Oe",
            "-Ot",
            "10.1.1.25",
            ".1.3.6.1.4.1.15497.1.1.1.1.0",
        ]
    ]


@pytest.mark.parametrize(
    "answer",
    [
        "No Such Object available on this agent at this OID",
        "No Such Instance currently exists at this OID",
    ],
)
def test_get_no_such_object(fake_run: _FakeRun, answer: str) -> None:
    fake_run.stdout = f".1.3.6.1.4.1.15497.1.1.1.1.0 = {answer}\n"
    assert _backend().get(".1.3.6.1.4.1.15497.1.1.1.1.0") is None


def test_get_strips_quotes(fake_run: _FakeRun) -> None:
    fake_run.stdout = '.1.3.6.1.4.1.15497.1.1.1.9.1.3.1 = "FP Temp"\n'
    assert _backend().get(".1.3.6.1.4.1.15497.1.1.1.9.1.3.1") == "FP Temp"


def test_get_transport_error_verbatim(fake_run: _FakeRun) -> None:
    fake_run.returncode = 1
    fake_run.stderr = "Timeout: No Response from 10.1.1.25.\n"
    with pytest.raises(MKSNMPError) as excinfo:
        _backend().get(".1.3.6.1.4.1.15497.1.1.1.1.0")
    assert str(excinfo.value) == "Timeout: No Response from 10.1.1.25."


def test_error_without_stderr(fake_run: _FakeRun) -> None:
    fake_run.returncode = 2
    with pytest.raises(MKSNMPError, match="snmpwalk exited with code 2"):
        _backend().walk(".1.3.6.1.4.1.15497.1.1.1.10.1.2")


def test_missing_tools(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(*args: Any, **kwargs: Any) -> None:
        raise FileNotFoundError(2, "No such file or directory", "snmpget")

    monkeypatch.setattr(subprocess, "run", _raise)
    with pytest.raises(MKSNMPError, match="Cannot execute snmpget"):
        _backend().get(".1.3.6.1.4.1.15497.1.1.1.1.0")


def test_empty_get_response(fake_run: _FakeRun) -> None:
    with pytest.raises(MKSNMPError, match="Empty response"):
        _backend().get(".1.3.6.1.4.1.15497.1.1.1.1.0")


def test_walk(fake_run: _FakeRun) -> None:
    fake_run.stdout = (
        ".1.3.6.1.4.1.15497.1.1.1.10.1.2.1 = 4500\n"
        ".1.3.6.1.4.1.15497.1.1.1.10.1.2.2 = 4620\n"
        ".1.3.6.1.4.1.15497.1.1.1.10.1.2.3 = 4380\n"
    )
    assert _backend().walk(".1.3.6.1.4.1.15497.1.1.1.10.1.2") == [
        (".1.3.6.1.4.1.15497.1.1.1.10.1.2.1", "4500"),
        (".1.3.6.1.4.1.15497.1.1.1.10.1.2.2", "4620"),
        (".1.3.6.1.4.1.15497.1.1.1.10.1.2.3", "4380"),
    ]
    assert fake_run.commands[0][0] == "snmpwalk"
    assert fake_run.commands[0][-3:] == ["-Ot", "10.1.1.25", ".1.3.6.1.4.1.15497.1.1.1.10.1.2"]


def test_snmpv1_command(fake_run: _FakeRun) -> None:
    fake_run.stdout = ".1.3.6.1.4.1.15497.1.1.1.2.0 = 5\n"
    _backend(snmp_version=SNMPVersion.V1, credentials="secret").get(".1.3.6.1.4.1.15497.1.1.1.2.0")
    assert fake_run.commands[0][1:4] == ["-v1", "-c", "secret"]


def test_snmpv3_command(fake_run: _FakeRun) -> None:
    fake_run.stdout = ".1.3.6.1.4.1.15497.1.1.1.2.0 = 5\n"
    _backend(
        snmp_version=SNMPVersion.V3,
        credentials=("authNoPriv", "SHA", "monitor", "s3cr3t"),
    ).get(".1.3.6.1.4.1.15497.1.1.1.2.0")
    assert fake_run.commands[0][1:10] == [
        "-v3",
        "-l",
        "authNoPriv",
        "-a",
        "SHA",
        "-u",
        "monitor",
        "-A",
        "s3cr3t",
    ]


def test_snmpv3_with_community_credentials(fake_run: _FakeRun) -> None:
    with pytest.raises(MKSNMPError, match="must be a 4-tuple"):
        _backend(snmp_version=SNMPVersion.V3).get(".1.3.6.1.4.1.15497.1.1.1.2.0")
    assert not fake_run.commands


def test_timing_and_port(fake_run: _FakeRun) -> None:
    fake_run.stdout = ".1.3.6.1.4.1.15497.1.1.1.2.0 = 5\n"
    _backend(port=1161, timing={"timeout": 2, "retries": 0}).get(".1.3.6.1.4.1.15497.1.1.1.2.0")
    command = fake_run.commands[0]
    assert command[command.index("-t") + 1] == "2.00"
    assert command[command.index("-r") + 1] == "0"
    assert "10.1.1.25:1161" in command


def test_ipv6_target(fake_run: _FakeRun) -> None:
    fake_run.stdout = ".1.3.6.1.4.1.15497.1.1.1.2.0 = 5\n"
    _backend(ipaddress="2001:db8::25").get(".1.3.6.1.4.1.15497.1.1.1.2.0")
    assert "udp6:[2001:db8::25]" in fake_run.commands[0]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", "42"),
        ('"Healthy"', "Healthy"),
        ('"50 53 31 "', "PS1"),
        ('""', ""),
    ],
)
def test_strip_snmp_value(raw: str, expected: str) -> None:
    assert strip_snmp_value(raw) == expected
