"""Utilities for the Oracle PDO driver

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ["parse_dsn"]

# A PDO data source name comes in one of three forms:
#
#   oci:dbname=//localhost:1521/xe;charset=AL32UTF8   driver invocation
#   uri:file:///etc/oracle.dsn                        the DSN is read from a file
#   mydb                                              alias, resolved through
#                                                     the ALIASES mapping
#
# Only the key=value pairs after the driver prefix are returned.

from typing import Dict, Iterable, Mapping, Optional  # pylint: disable=unused-import

from .exception import InterfaceError

_URI_PREFIX = 'uri:'
_FILE_PREFIX = 'file://'


def _read_uri(uri):
    # type: (str) -> str
    if not uri.startswith(_FILE_PREFIX):
        raise InterfaceError("Unsupported DSN URI: %s" % (uri))
    path = uri[len(_FILE_PREFIX):]
    try:
        with open(path) as f:
            return f.read().strip()
    except (IOError, OSError) as e:
        raise InterfaceError("Cannot read DSN from %s: %s" % (path, e))


def parse_dsn(dsn, params, aliases=None):
    # type: (str, Iterable[str], Optional[Mapping[str, str]]) -> Dict[str, Optional[str]]
    """Parse a PDO-style DSN.

    :param dsn: The data source name.
    :param params: Names of the parameters to extract.
    :param aliases: Mapping of alias name to DSN, for DSNs with no prefix.
    :returns: A dict holding every name in PARAMS; parameters missing from
              the DSN are None.
    :raises InterfaceError: If the DSN cannot be resolved.
    """
    if dsn is None:
        raise InterfaceError("No DSN provided.")
    dsn = dsn.strip()

    if dsn.startswith(_URI_PREFIX):
        dsn = _read_uri(dsn[len(_URI_PREFIX):])

    if ':' not in dsn:
        if aliases is None or dsn not in aliases:
            raise InterfaceError("Unknown DSN alias: %s" % (dsn))
        dsn = aliases[dsn]

    body = dsn.split(':', 1)[1]
    found = {}  # type: Dict[str, str]
    for pair in body.split(';'):
        if '=' not in pair:
            continue
        key, value = pair.split('=', 1)
        found[key.strip()] = value.strip()

    return dict((name, found.get(name)) for name in params)
