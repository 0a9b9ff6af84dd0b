#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

# This check queries a Cisco IronPort (AsyncOS) mail appliance via SNMP
# for one health metric and reports it as a monitoring plug-in:
#
#   check_ironport -H 10.1.1.25 -C public -t mem -w 90 -c 98
#   Memory WARNING - Memory utilization: 95% | 'Memory utilization'=95%;90;98
#
# The net-snmp command line tools (snmpget, snmpwalk) are expected to be
# in the search path.

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from typing import assert_never, NoReturn

from ironport.catalog import CHECK_TYPES, Kind, MetricSpec, resolve
from ironport.config import load_args, SNMP_VERSIONS, validate
from ironport.evaluate import evaluate, RawSample
from ironport.exceptions import ConfigurationError, MKException
from ironport.log import logger, setup_stderr_logging, VERBOSE
from ironport.output import CheckOutcome, render, render_summary
from ironport.snmplib import (
    ClassicSNMPBackend,
    get_single_oid,
    get_snmp_column,
    SNMPBackend,
    SNMPHostConfig,
)
from ironport.state import State

BackendFactory = Callable[[SNMPHostConfig, logging.Logger], SNMPBackend]

_DEFAULT_HEADER = "IronPort"


def main(
    argv: Sequence[str] | None = None,
    backend_factory: BackendFactory | None = None,
) -> int:
    exitcode, info = _check_ironport_main(
        sys.argv[1:] if argv is None else argv,
        backend_factory or ClassicSNMPBackend,
    )
    _output_check_result(info)
    return exitcode


def _output_check_result(s: str) -> None:
    sys.stdout.write("%s\n" % s)


class _ArgumentParser(argparse.ArgumentParser):
    # argparse exits with 2 on errors, which would read as CRITICAL
    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def _parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    return _make_parser().parse_args(argv)


def _parse_early_options(argv: Sequence[str]) -> argparse.Namespace | None:
    """Find --help and --debug even if the rest of the command line is incomplete"""
    try:
        namespace, _unknown_args = _make_parser(strict=False).parse_known_args(argv)
    except ConfigurationError:
        return None
    return namespace


def _make_parser(strict: bool = True) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="check_ironport",
        description="Check a Cisco IronPort mail appliance via SNMP.",
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="Show this help message and exit (with state UNKNOWN).",
    )
    parser.add_argument(
        "-H",
        "--hostname",
        dest="host",
        required=strict,
        metavar="HOST",
        help="Host name or IP address of the appliance.",
    )
    parser.add_argument(
        "-C",
        "--community",
        default="public",
        metavar="COMMUNITY",
        help="SNMP community, or the security name for SNMP version 3 (Default: public).",
    )
    parser.add_argument(
        "-v",
        "--snmp-version",
        dest="version",
        default="2c",
        metavar="VERSION",
        help="SNMP version, one of %s (Default: 2c)." % ", ".join(SNMP_VERSIONS),
    )
    parser.add_argument(
        "-P",
        "--passphrase",
        default=None,
        metavar="PASSPHRASE",
        help="Authentication passphrase, required for SNMP version 3.",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="check_type",
        required=strict,
        metavar="TYPE",
        help="Check type, one of: %s." % ", ".join(CHECK_TYPES),
    )
    parser.add_argument(
        "-w",
        "--warning",
        default=None,
        metavar="WARNING",
        help="Warning threshold. Values above it are WARNING.",
    )
    parser.add_argument(
        "-c",
        "--critical",
        default=None,
        metavar="CRITICAL",
        help="Critical threshold. Values above it are CRITICAL. Must be greater than WARNING.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=161,
        help="SNMP port (Default: 161).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Timeout of a single SNMP request (Default: net-snmp default).",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Number of SNMP retries (Default: net-snmp default).",
    )
    parser.add_argument(
        "--auth-protocol",
        choices=("md5", "sha"),
        default="sha",
        help="Authentication protocol for SNMP version 3 (Default: sha).",
    )
    parser.add_argument(
        "-V",
        "--verbose",
        action="count",
        default=0,
        help="Verbose mode, log to stderr (repeat for debug output).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: let Python exceptions come through.",
    )
    return parser


def _check_ironport_main(
    argv: Sequence[str],
    backend_factory: BackendFactory,
) -> tuple[int, str]:
    early_options = _parse_early_options(argv)
    if not argv or (early_options is not None and early_options.help):
        return int(State.UNKNOWN), _make_parser().format_help().rstrip()

    header = _DEFAULT_HEADER
    debug = early_options is not None and early_options.debug
    try:
        args = load_args(vars(_parse_arguments(argv)))
        setup_stderr_logging(args.verbose)

        spec = resolve(args.check_type)
        header = spec.header
        config = validate(args, spec)
        logger.log(VERBOSE, "Checking %s on %s", spec.check_type, config.snmp_config.ipaddress)

        backend = backend_factory(config.snmp_config, logger.getChild("snmp"))
        outcome = evaluate(config.spec, fetch_sample(config.spec, backend), config.thresholds)

    except MKException as e:
        logger.debug("Check failed: %r", e)
        if debug:
            raise
        outcome = _unknown(header, str(e))

    except Exception as e:
        if debug:
            raise
        outcome = _unknown(header, f"Unhandled exception: {e}")

    info, exitcode = render(outcome)
    return exitcode, info


def fetch_sample(spec: MetricSpec, backend: SNMPBackend) -> RawSample:
    match spec.kind:
        case Kind.RAW_PERCENTAGE | Kind.RAW_COUNT | Kind.ENUMERATED_STATUS:
            return get_single_oid(spec.oids[0], backend=backend)
        case Kind.DUAL_RAW_COUNT:
            return tuple(get_single_oid(oid, backend=backend) for oid in spec.oids)
        case Kind.TABLE_OF_ENUMERATED_STATUS | Kind.TABLE_OF_RAW_VALUE:
            return get_snmp_column(spec.oids[0], backend=backend)
        case _:
            assert_never(spec.kind)


def _unknown(header: str, text: str) -> CheckOutcome:
    # one line of output only
    summary = " ".join(line.strip() for line in text.splitlines() if line.strip())
    return CheckOutcome(State.UNKNOWN, render_summary(header, State.UNKNOWN, summary or "Unknown error"))
