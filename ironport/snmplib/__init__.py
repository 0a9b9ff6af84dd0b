#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Package with our SNMP stuff."""

from ._classic import ClassicSNMPBackend as ClassicSNMPBackend
from ._classic import strip_snmp_value as strip_snmp_value
from ._getoid import get_single_oid as get_single_oid
from ._table import get_snmp_column as get_snmp_column
from ._typedefs import OID as OID
from ._typedefs import SNMPBackend as SNMPBackend
from ._typedefs import SNMPCredentials as SNMPCredentials
from ._typedefs import SNMPHostConfig as SNMPHostConfig
from ._typedefs import SNMPRawValue as SNMPRawValue
from ._typedefs import SNMPRowInfo as SNMPRowInfo
from ._typedefs import SNMPTiming as SNMPTiming
from ._typedefs import SNMPVersion as SNMPVersion
