"""A module for housing the datatype classes.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Binary -- Class for a Binary object
Variable -- Holder for a value bound by reference.

Exported Functions:
DateFromTicks -- Converts ticks to a Date object.
TimeFromTicks -- Converts ticks to a Time object.
TimestampFromTicks -- Converts ticks to a Timestamp object.
TypeObjectFromOracle -- Converts an Oracle column type name to a TypeObject variable.

TypeObject Variables:
STRING -- TypeObject(str)
BINARY -- TypeObject(bytes)
NUMBER -- TypeObject(int, float, decimal.Decimal)
DATETIME -- TypeObject(datetime.datetime, datetime.date, datetime.time)
ROWID -- TypeObject()
"""

__all__ = ['Date', 'Time', 'Timestamp', 'DateFromTicks', 'TimeFromTicks',
           'TimestampFromTicks', 'Binary', 'Variable', 'STRING', 'BINARY',
           'NUMBER', 'DATETIME', 'ROWID', 'TypeObjectFromOracle']

import decimal
import re
from datetime import datetime as Timestamp, date as Date, time as Time
from datetime import tzinfo  # pylint: disable=unused-import

from typing import Any, Union  # pylint: disable=unused-import

import tzlocal
from .exception import DataError

LOCALZONE = tzlocal.get_localzone()
LOCALZONE_NAME = tzlocal.get_localzone_name()


class Binary(bytes):
    """A binary string.

    If passed a string we assume it's encoded as LATIN-1, which ensures that
    the characters 0-255 are considered single-character sequences.
    """

    def __new__(cls, data):
        # type: (Union[str, bytes, bytearray]) -> Binary
        if isinstance(data, str):
            return bytes.__new__(cls, data.encode('latin-1'))
        return bytes.__new__(cls, data)


class Variable(object):
    """A host variable bound by reference.

    Passing a Variable to Statement.bindParam() or Statement.bindColumn()
    lets the statement write back into it: OUT parameter values after
    execute, the LOB descriptor for LOB parameters, and column values after
    each fetch.
    """

    def __init__(self, value=None):
        # type: (Any) -> None
        self.value = value

    def __repr__(self):
        return 'Variable(%r)' % (self.value,)


def DateFromTicks(ticks, zoneinfo=LOCALZONE):
    # type: (float, tzinfo) -> Date
    """Convert ticks to a Date object."""
    return Timestamp.fromtimestamp(ticks, zoneinfo).date()


def TimeFromTicks(ticks, zoneinfo=LOCALZONE):
    # type: (float, tzinfo) -> Time
    """Convert ticks to a Time object."""
    return Timestamp.fromtimestamp(ticks, zoneinfo).time()


def TimestampFromTicks(ticks, zoneinfo=LOCALZONE):
    # type: (float, tzinfo) -> Timestamp
    """Convert ticks to a timezone-aware Timestamp object."""
    return Timestamp.fromtimestamp(ticks, zoneinfo)


_LEADING_NUMBER = re.compile(r'\s*([+-]?\d+)')


def coerce_int(value):
    # type: (Any) -> int
    """Convert a fetched column value to an integer.

    Strings convert from their leading digits, so decimal strings are
    truncated toward zero.  None and values without a leading number
    convert to 0.
    """
    if value is None:
        return 0
    if isinstance(value, (int, float, decimal.Decimal)):
        return int(value)
    if isinstance(value, bytes):
        value = value.decode('latin-1')
    m = _LEADING_NUMBER.match(str(value))
    if m is None:
        return 0
    return int(m.group(1))


class TypeObject(object):
    """A SQL type object."""

    def __init__(self, *values):
        self.values = values

    def __eq__(self, other):
        if isinstance(other, TypeObject):
            return self is other
        return other in self.values

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return id(self)


STRING = TypeObject(str)
BINARY = TypeObject(bytes)
NUMBER = TypeObject(int, float, decimal.Decimal)
DATETIME = TypeObject(Timestamp, Date, Time)
ROWID = TypeObject()
NULL = TypeObject(None)

TYPEMAP = {"<null>": NULL,
           "VARCHAR": STRING,
           "NVARCHAR": STRING,
           "CHAR": STRING,
           "NCHAR": STRING,
           "LONG": STRING,
           "CLOB": STRING,
           "NCLOB": STRING,
           "JSON": STRING,
           "XMLTYPE": STRING,
           "NUMBER": NUMBER,
           "BINARY_INTEGER": NUMBER,
           "BINARY_FLOAT": NUMBER,
           "BINARY_DOUBLE": NUMBER,
           "BOOLEAN": NUMBER,
           "DATE": DATETIME,
           "TIMESTAMP": DATETIME,
           "TIMESTAMP_TZ": DATETIME,
           "TIMESTAMP_LTZ": DATETIME,
           "INTERVAL_DS": DATETIME,
           "INTERVAL_YM": DATETIME,
           "RAW": BINARY,
           "LONG_RAW": BINARY,
           "BLOB": BINARY,
           "BFILE": BINARY,
           "VECTOR": BINARY,
           "ROWID": ROWID,
           "UROWID": ROWID,
           "CURSOR": ROWID,
           "OBJECT": ROWID,
           }


def TypeObjectFromOracle(oracle_type_name):
    # type: (str) -> TypeObject
    """Return a TypeObject based on the supplied Oracle column type name."""
    name = oracle_type_name.strip().upper()
    if name.startswith('DB_TYPE_'):
        name = name[len('DB_TYPE_'):]
    obj = TYPEMAP.get(name)
    if obj is None:
        raise DataError('received unknown column type "%s"' % (name))
    return obj
