#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Sequence

from ._typedefs import OID, SNMPBackend, SNMPRawValue


def get_snmp_column(oid: OID, *, backend: SNMPBackend) -> Sequence[SNMPRawValue]:
    """Walk one table column and return its values in walk order

    Rows that do not belong to the column (e.g. the walk ran past the end
    of the table on a broken agent) are dropped.
    """
    if oid[0] != ".":
        oid = "." + oid

    backend.logger.debug("Walking %s...", oid)
    return tuple(
        value for row_oid, value in backend.walk(oid) if _is_below(row_oid, oid)
    )


def _is_below(row_oid: OID, base_oid: OID) -> bool:
    """
    >>> _is_below(".1.3.6.1.4.1.15497.1.1.1.10.1.2.1", ".1.3.6.1.4.1.15497.1.1.1.10.1.2")
    True
    >>> _is_below(".1.3.6.1.4.1.15497.1.1.1.10.1.20.1", ".1.3.6.1.4.1.15497.1.1.1.10.1.2")
    False
    >>> _is_below("1.3.6.1.4.1.15497.1.1.1.10.1.2.1", ".1.3.6.1.4.1.15497.1.1.1.10.1.2")
    True
    """
    return ("." + row_oid.lstrip(".")).startswith(base_oid + ".")
