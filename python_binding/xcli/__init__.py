# SPDX-License-Identifier: LGPL-2.1-or-later
#
# Copyright (C) 2026 python-xcli contributors

from xcli.version import VERSION

from xcli._common import error, info, XcliError, ErrorNumber, \
    ConfigurationError, ProbeError, ExecutionError, ValidationError, \
    uri_parse

from xcli._data import (Configuration, Host, Volume, Mirror, Mapping,
                        MissingHostname, MAPPING_LIST_NO_HOST, DataEncoder,
                        split_fields)

from xcli._client import Client, validate

__all__ = []
