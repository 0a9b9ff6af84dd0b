#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import string
import subprocess
from collections.abc import Iterator, Sequence

from ironport.exceptions import MKSNMPError
from ironport.log import VERBOSE

from ._typedefs import OID, SNMPBackend, SNMPRawValue, SNMPRowInfo, SNMPVersion

_NO_VALUE_ANSWERS = (
    "No more variables",
    "End of MIB",
    "No Such Object available",
    "No Such Instance currently exists",
)


class ClassicSNMPBackend(SNMPBackend):
    """Uses the net-snmp command line tools (snmpget, snmpwalk)"""

    def get(self, /, oid: OID) -> SNMPRawValue | None:
        command = self._snmp_base_command("get") + ["-On", "-OQ", "-Oe", "-Ot", self._target(), oid]
        stdout = self._run(command)

        line = stdout.splitlines()[0].strip() if stdout.strip() else ""
        if not line:
            raise MKSNMPError("Empty response to snmpget for %s" % oid)

        if "=" not in line:
            raise MKSNMPError(line)
        _item, value = line.split("=", 1)
        value = value.strip()
        self.logger.log(VERBOSE, "SNMP answer: ==> [%s]", value)
        if value.startswith(_NO_VALUE_ANSWERS):
            return None

        return strip_snmp_value(value)

    def walk(self, /, oid: OID) -> SNMPRowInfo:
        command = self._snmp_base_command("walk") + [
            "-Cc",
            "-OQ",
            "-OU",
            "-On",
            "-Ot",
            self._target(),
            oid,
        ]
        rowinfo = list(self._parse_walk_lines(self._run(command).splitlines()))
        self.logger.log(VERBOSE, "SNMP walk of %s: %d rows", oid, len(rowinfo))
        return rowinfo

    def _run(self, command: Sequence[str]) -> str:
        self.logger.debug("Running '%s'", subprocess.list2cmdline(command))
        try:
            completed_process = subprocess.run(
                command,
                capture_output=True,
                encoding="utf8",
                errors="replace",
                stdin=subprocess.DEVNULL,
                close_fds=True,
                check=False,
            )
        except OSError as e:
            raise MKSNMPError(f"Cannot execute {command[0]}: {e}") from e

        if completed_process.returncode:
            error = completed_process.stderr.strip()
            self.logger.log(VERBOSE, "SNMP error: %s", error)
            raise MKSNMPError(
                error
                or "%s exited with code %d" % (command[0], completed_process.returncode)
            )
        return completed_process.stdout

    @staticmethod
    def _parse_walk_lines(lines: Sequence[str]) -> Iterator[tuple[OID, SNMPRawValue]]:
        """
        >>> list(ClassicSNMPBackend._parse_walk_lines([
        ...     '.1.3.6.1.4.1.15497.1.1.1.10.1.2.1 = 4500',
        ...     '.1.3.6.1.4.1.15497.1.1.1.10.1.2.2 = "FAN',
        ...     ' 2"',
        ...     'garbage',
        ...     '.1.3.6.1.4.1.15497.1.1.1.10.1.2.3 = No more variables left in this MIB View',
        ... ]))
        [('.1.3.6.1.4.1.15497.1.1.1.10.1.2.1', '4500'), ('.1.3.6.1.4.1.15497.1.1.1.10.1.2.2', 'FAN 2')]
        """
        # snmpwalk wraps long quoted values (e.g. hex dumps) over several
        # lines. An opening quote without a closing one means the value
        # continues on the next line(s).
        line_iter = iter(lines)
        for raw_line in line_iter:
            parts = raw_line.strip().split("=", 1)
            if len(parts) < 2:
                continue
            oid = parts[0].strip()
            value = parts[1].strip()
            if value.startswith(_NO_VALUE_ANSWERS):
                continue

            if value == '"' or (len(value) > 1 and value[0] == '"' and value[-1] != '"'):
                for nextline in line_iter:
                    value += " " + nextline.strip()
                    if value[-1] == '"':
                        break
            yield oid, strip_snmp_value(value)

    def _target(self) -> str:
        ipaddress = self.config.ipaddress
        protospec = ""
        if self.config.is_ipv6_primary:
            protospec = "udp6:"
            ipaddress = "[" + ipaddress + "]"
        portspec = "" if self.config.port == 161 else ":%d" % self.config.port
        return f"{protospec}{ipaddress}{portspec}"

    def _snmp_base_command(self, what: str) -> list[str]:
        command = ["snmpget"] if what == "get" else ["snmpwalk"]
        options: list[str] = []

        credentials = self.config.credentials
        if not self.config.is_snmpv3_host:
            if not isinstance(credentials, str):
                raise MKSNMPError("Invalid SNMP credentials for %s: expected a community" % self.address)
            options += ["-v1" if self.config.snmp_version is SNMPVersion.V1 else "-v2c"]
            options += ["-c", credentials]
        else:
            if isinstance(credentials, str) or len(credentials) != 4:
                raise MKSNMPError("Invalid SNMP credentials for %s: must be a 4-tuple" % self.address)
            options += [
                "-v3",
                "-l",
                credentials[0],
                "-a",
                credentials[1],
                "-u",
                credentials[2],
                "-A",
                credentials[3],
            ]

        # No MIB files, all OIDs are numeric
        options += ["-m", "", "-M", ""]

        settings = self.config.timing
        if "timeout" in settings:
            options += ["-t", "%0.2f" % settings["timeout"]]
        if "retries" in settings:
            options += ["-r", "%d" % settings["retries"]]

        return command + options


def strip_snmp_value(value: str) -> str:
    """
    >>> strip_snmp_value('"c:\\\\\\\\ Label"')
    'c:\\\\ Label'
    >>> strip_snmp_value('"41 42 43 "')
    'ABC'
    >>> strip_snmp_value(' 42 ')
    '42'
    """
    v = value.strip()
    if v.startswith('"'):
        v = v[1:-1]
        if len(v) > 2 and _is_hex_string(v):
            return _convert_from_hex(v)
        # net-snmp escapes backslashes in plain strings
        return v.strip().replace("\\\\", "\\")
    return v


def _is_hex_string(value: str) -> bool:
    """Hex-STRING values look like "41 42 43 ", note the trailing space

    >>> _is_hex_string("41 42 43 "), _is_hex_string("4142 "), _is_hex_string("41 42 43")
    (True, False, False)
    """
    if not value.endswith(" "):
        return False
    return all(
        len(octet) == 2 and all(c in string.hexdigits for c in octet)
        for octet in value[:-1].split(" ")
    )


def _convert_from_hex(value: str) -> str:
    return "".join(chr(int(hx, 16)) for hx in value.split())
