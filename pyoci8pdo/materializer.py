"""Turning fetched rows into caller-chosen objects.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

A RowMaterializer receives one row as an ordered mapping of column name to
value and returns whatever object the caller wants for that row.  The
FETCH_CLASS and FETCH_INTO fetch modes, and Statement.fetchObject(), are
implemented on top of UserType.

Exported Classes:
RowMaterializer -- Base class of all materializers.
AssociativeMap -- Returns the row as a dict.
NamedTuple -- Returns the row as a namedtuple.
UserType -- Builds an object with a factory and assigns its fields.
"""

__all__ = ['RowMaterializer', 'AssociativeMap', 'NamedTuple', 'UserType']

import collections

from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple  # pylint: disable=unused-import


class RowMaterializer(object):
    """Build one object from one row."""

    def materialize(self, row):
        # type: (Mapping[str, Any]) -> Any
        raise NotImplementedError


class AssociativeMap(RowMaterializer):
    def materialize(self, row):
        return dict(row)


class NamedTuple(RowMaterializer):
    """Return rows as namedtuples.

    Column names that are not valid identifiers are renamed positionally
    (_0, _1, ...), as collections.namedtuple(rename=True) does.
    """

    def __init__(self, typename='Row'):
        # type: (str) -> None
        self.typename = typename
        self.__types = {}  # type: Dict[Tuple[str, ...], Any]

    def materialize(self, row):
        fields = tuple(row.keys())
        row_type = self.__types.get(fields)
        if row_type is None:
            row_type = collections.namedtuple(self.typename, fields, rename=True)
            self.__types[fields] = row_type
        return row_type(*row.values())


class UserType(RowMaterializer):
    """Create an object with FACTORY, then assign each column to it.

    :param factory: Callable returning the object to fill for each row.
    :param field_setter: Callable (object, name, value) storing one column;
                         defaults to setattr.
    """

    def __init__(self, factory, field_setter=setattr):
        # type: (Callable[[], Any], Callable[[Any, str, Any], Any]) -> None
        self.factory = factory
        self.field_setter = field_setter

    @classmethod
    def of_class(cls, class_, ctor_args=None):
        # type: (Callable[..., Any], Optional[Sequence[Any]]) -> UserType
        """Instantiate CLASS_ with CTOR_ARGS (or no arguments) for each row."""
        if ctor_args:
            args = tuple(ctor_args)
            return cls(lambda: class_(*args))
        return cls(class_)

    @classmethod
    def into(cls, target):
        # type: (Any) -> UserType
        """Assign every row's columns onto the existing object TARGET."""
        return cls(lambda: target)

    def materialize(self, row):
        obj = self.factory()
        for field, value in row.items():
            self.field_setter(obj, field, value)
        return obj
