"""
(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import decimal
import datetime

import pytest

import pyoci8pdo
from pyoci8pdo import datatype


def test_binary():
    assert pyoci8pdo.Binary('\xe9t\xe9') == b'\xe9t\xe9'
    assert pyoci8pdo.Binary(bytearray(b'\x00\x01')) == b'\x00\x01'


def test_variable():
    var = pyoci8pdo.Variable()
    assert var.value is None
    var.value = 3
    assert repr(var) == 'Variable(3)'


def test_ticks():
    ticks = 1700000000
    stamp = pyoci8pdo.TimestampFromTicks(ticks, datetime.timezone.utc)
    assert stamp == datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=datetime.timezone.utc)
    assert pyoci8pdo.DateFromTicks(ticks, datetime.timezone.utc) == datetime.date(2023, 11, 14)
    assert pyoci8pdo.TimeFromTicks(ticks, datetime.timezone.utc) == datetime.time(22, 13, 20)


@pytest.mark.parametrize('value, expected', [
    (None, 0),
    (7, 7),
    (7.9, 7),
    (decimal.Decimal('-3.5'), -3),
    ('42', 42),
    (' 12abc', 12),
    ('-2.75', -2),
    ('abc', 0),
    (b'15', 15),
])
def test_coerce_int(value, expected):
    assert datatype.coerce_int(value) == expected


def test_type_objects():
    assert pyoci8pdo.NUMBER == int
    assert pyoci8pdo.NUMBER == decimal.Decimal
    assert pyoci8pdo.STRING == str
    assert pyoci8pdo.STRING != pyoci8pdo.NUMBER

    assert pyoci8pdo.TypeObjectFromOracle('DB_TYPE_NUMBER') is pyoci8pdo.NUMBER
    assert pyoci8pdo.TypeObjectFromOracle('varchar') is pyoci8pdo.STRING
    assert pyoci8pdo.TypeObjectFromOracle('BLOB') is pyoci8pdo.BINARY
    assert pyoci8pdo.TypeObjectFromOracle('TIMESTAMP_TZ') is pyoci8pdo.DATETIME

    with pytest.raises(pyoci8pdo.DataError):
        pyoci8pdo.TypeObjectFromOracle('NO_SUCH_TYPE')
