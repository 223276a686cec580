"""
(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import collections

import pytest

from pyoci8pdo.materializer import AssociativeMap, NamedTuple, RowMaterializer, UserType

ROW = collections.OrderedDict([('ID', 1), ('NAME', 'alice'), ('TOTAL SPENT', 9.5)])


class Account(object):
    def __init__(self, kind='basic'):
        self.kind = kind


def test_base_is_abstract():
    with pytest.raises(NotImplementedError):
        RowMaterializer().materialize(ROW)


def test_associative_map():
    row = AssociativeMap().materialize(ROW)
    assert row == {'ID': 1, 'NAME': 'alice', 'TOTAL SPENT': 9.5}
    assert row is not ROW


def test_named_tuple():
    materializer = NamedTuple('Account')
    row = materializer.materialize(ROW)
    assert row == (1, 'alice', 9.5)
    assert row.ID == 1
    # Invalid identifiers are renamed by position
    assert row._2 == 9.5
    assert type(materializer.materialize(ROW)) is type(row)


def test_user_type_of_class():
    account = UserType.of_class(Account, ['gold']).materialize(ROW)
    assert account.kind == 'gold'
    assert account.NAME == 'alice'

    other = UserType.of_class(Account).materialize(ROW)
    assert other.kind == 'basic'


def test_user_type_into():
    target = Account()
    materializer = UserType.into(target)
    assert materializer.materialize(ROW) is target
    assert materializer.materialize({'ID': 2}) is target
    assert target.ID == 2


def test_user_type_field_setter():
    materializer = UserType(dict, lambda obj, name, value: obj.__setitem__(name.lower(), value))
    assert materializer.materialize(ROW) == {'id': 1, 'name': 'alice', 'total spent': 9.5}
