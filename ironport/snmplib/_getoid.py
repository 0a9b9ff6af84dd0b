#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from ironport.exceptions import MKSNMPError

from ._typedefs import OID, SNMPBackend, SNMPRawValue


def get_single_oid(oid: OID, *, backend: SNMPBackend) -> SNMPRawValue:
    if oid[0] != ".":
        oid = "." + oid

    backend.logger.debug("Getting OID %s...", oid)
    value = backend.get(oid)
    if value is None:
        raise MKSNMPError(f"No such object on {backend.address}: {oid}")

    backend.logger.debug("Got OID %s: %r", oid, value)
    return value
