"""Fetching rows in the PDO fetch modes.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['FetchModeDescriptor', 'ResultFetcher']

import types

from typing import Any, Callable, Dict, List, Optional, Tuple  # pylint: disable=unused-import

from . import protocol
from .datatype import Variable, coerce_int  # pylint: disable=unused-import
from .errorstate import NativeError  # pylint: disable=unused-import
from .exception import NotSupportedError, ProgrammingError
from .materializer import RowMaterializer, UserType
from .native import NativeDriverError, NativeStatement  # pylint: disable=unused-import

OBJECT_MODES = (protocol.FETCH_OBJ, protocol.FETCH_CLASS, protocol.FETCH_INTO)


def _base_mode(mode):
    # type: (Any) -> Any
    if isinstance(mode, int) and not isinstance(mode, bool):
        return mode & ~protocol.FETCH_PROPS_LATE
    return mode


class FetchModeDescriptor(object):
    """The default fetch mode of a statement and its mode-specific payload.

    :ivar mode: A FETCH_* mode, or None to defer to the connection default.
    :ivar column: Zero-based column index for FETCH_COLUMN.
    :ivar materializer: RowMaterializer used by FETCH_CLASS and FETCH_INTO.
    :ivar into: The object FETCH_INTO assigns to.
    """

    def __init__(self, mode=None, column=0, materializer=None, into=None):
        # type: (Any, int, Optional[RowMaterializer], Any) -> None
        self.mode = mode
        self.column = column
        self.materializer = materializer
        self.into = into

    @classmethod
    def configure(cls, mode, col_class_or_obj=None, ctor_args=None):
        # type: (Any, Any, Any) -> FetchModeDescriptor
        """Build the descriptor for Statement.setFetchMode()."""
        base = _base_mode(mode)
        if base == protocol.FETCH_COLUMN:
            column = 0 if col_class_or_obj is None else col_class_or_obj
            if not isinstance(column, int) or column < 0 or ctor_args:
                raise ProgrammingError("FETCH_COLUMN takes a single column index")
            return cls(mode, column=column)
        if base == protocol.FETCH_CLASS:
            if isinstance(col_class_or_obj, RowMaterializer):
                if ctor_args:
                    raise ProgrammingError("constructor arguments cannot be "
                                           "combined with a RowMaterializer")
                return cls(mode, materializer=col_class_or_obj)
            class_ = col_class_or_obj
            if class_ is None:
                class_ = types.SimpleNamespace
            if not callable(class_):
                raise ProgrammingError("FETCH_CLASS requires a class or factory, "
                                       "got %r" % (class_,))
            return cls(mode, materializer=UserType.of_class(class_, ctor_args))
        if base == protocol.FETCH_INTO:
            if col_class_or_obj is None or ctor_args:
                raise ProgrammingError("FETCH_INTO requires the object to fetch into")
            return cls(mode, materializer=UserType.into(col_class_or_obj),
                       into=col_class_or_obj)
        if col_class_or_obj is not None or ctor_args:
            raise NotSupportedError("Second and third parameters are not "
                                    "implemented for fetch mode %r" % (mode,))
        return cls(mode)


def _fold_keys(row, case):
    # type: (Dict[Any, Any], Any) -> Dict[Any, Any]
    if case == protocol.CASE_LOWER:
        return dict((k.lower() if isinstance(k, str) else k, v) for k, v in row.items())
    if case == protocol.CASE_UPPER:
        return dict((k.upper() if isinstance(k, str) else k, v) for k, v in row.items())
    return row


class ResultFetcher(object):
    """Materialize the rows of an executed statement.

    Each fetch is independent: the fetch mode comes from the call, then the
    statement's FetchModeDescriptor, then the connection default.  Only
    forward, one-row-at-a-time navigation is supported.
    """

    def __init__(self, native, get_attribute, report):
        # type: (NativeStatement, Callable[[int], Any], Callable[[NativeError], None]) -> None
        self.__native = native
        self.__attribute = get_attribute
        self.__report = report
        self.descriptor = FetchModeDescriptor()
        self.bound_columns = []  # type: List[Tuple[Any, Variable, int]]

    def resolve(self, fetch_style):
        # type: (Any) -> Any
        if fetch_style is None:
            fetch_style = self.descriptor.mode
        if fetch_style is None:
            fetch_style = self.__attribute(protocol.ATTR_DEFAULT_FETCH_MODE)
        if fetch_style is None:
            fetch_style = protocol.FETCH_BOTH
        return fetch_style

    def _case(self):
        # type: () -> Any
        return self.__attribute(protocol.ATTR_CASE)

    def _check_nulls(self):
        # type: () -> None
        nulls = self.__attribute(protocol.ATTR_ORACLE_NULLS)
        if nulls not in (None, protocol.NULL_NATURAL):
            raise NotSupportedError("Statement does not support ATTR_ORACLE_NULLS "
                                    "other than NULL_NATURAL")

    def _next_row(self):
        # type: () -> Optional[Tuple[Any, ...]]
        try:
            return self.__native.fetch_row()
        except NativeDriverError as e:
            self.__report(e.error)
            return None

    def _all_rows(self):
        # type: () -> List[Tuple[Any, ...]]
        try:
            return self.__native.fetch_all()
        except NativeDriverError as e:
            self.__report(e.error)
            return []

    def _mapping(self, row):
        # type: (Tuple[Any, ...]) -> Dict[str, Any]
        return dict(zip(self.__native.column_names(), row))

    def _shape(self, mode, row):
        # type: (int, Tuple[Any, ...]) -> Any
        if mode == protocol.FETCH_NUM:
            return list(row)
        if mode == protocol.FETCH_ASSOC:
            return _fold_keys(self._mapping(row), self._case())
        # FETCH_BOTH
        both = {}  # type: Dict[Any, Any]
        for index, (name, value) in enumerate(zip(self.__native.column_names(), row)):
            both[index] = value
            both[name] = value
        return _fold_keys(both, self._case())

    def _materializer(self, mode):
        # type: (int) -> RowMaterializer
        descriptor = self.descriptor
        if mode == protocol.FETCH_INTO:
            if descriptor.into is None:
                raise ProgrammingError("No fetch-into object specified; "
                                       "call setFetchMode(FETCH_INTO, obj) first")
            return UserType.into(descriptor.into)
        if descriptor.materializer is not None and descriptor.into is None:
            return descriptor.materializer
        return UserType.of_class(types.SimpleNamespace)

    def fetch(self, fetch_style=None, cursor_orientation=protocol.FETCH_ORI_NEXT,
              cursor_offset=0):
        # type: (Any, int, int) -> Any
        """Return the next row in FETCH_STYLE, or False if there is none."""
        if cursor_orientation != protocol.FETCH_ORI_NEXT or cursor_offset != 0:
            raise NotSupportedError("cursor orientation other than FETCH_ORI_NEXT "
                                    "is not implemented for Statement.fetch()")
        fetch_style = self.resolve(fetch_style)
        self._check_nulls()
        mode = _base_mode(fetch_style)

        if mode in (protocol.FETCH_ASSOC, protocol.FETCH_BOTH, protocol.FETCH_NUM):
            row = self._next_row()
            result = False if row is None else self._shape(mode, row)
        elif mode == protocol.FETCH_COLUMN:
            row = self._next_row()
            column = self.descriptor.column
            if row is None or not 0 <= column < len(row):
                result = False
            else:
                result = row[column]
        elif mode == protocol.FETCH_OBJ:
            if self._case() not in (None, protocol.CASE_NATURAL):
                raise NotSupportedError("Statement does not support fetching objects "
                                        "with ATTR_CASE not set to CASE_NATURAL")
            row = self._next_row()
            result = False if row is None else types.SimpleNamespace(**self._mapping(row))
        elif mode in (protocol.FETCH_CLASS, protocol.FETCH_INTO):
            materializer = self._materializer(mode)
            row = self._next_row()
            if row is None:
                return False
            return materializer.materialize(_fold_keys(self._mapping(row), self._case()))
        else:
            raise NotSupportedError("Statement.fetch() does not implement fetch mode %r"
                                    % (fetch_style,))

        if row is not None:
            self.bind_to_columns(row)
        return result

    def bind_to_columns(self, row):
        # type: (Tuple[Any, ...]) -> None
        """Assign the columns of ROW to the variables given to bindColumn()."""
        names = None
        for column, variable, param_type in self.bound_columns:
            if isinstance(column, str):
                if names is None:
                    names = [n.upper() for n in self.__native.column_names()]
                index = names.index(column.upper()) if column.upper() in names else -1
            else:
                index = column - 1
            value = row[index] if 0 <= index < len(row) else None
            if param_type == protocol.PARAM_INT:
                variable.value = coerce_int(value)
            else:
                variable.value = value

    def fetch_all(self, fetch_style=None, fetch_argument=None, ctor_args=None):
        # type: (Any, Any, Any) -> List[Any]
        """Return every remaining row in FETCH_STYLE."""
        fetch_style = self.resolve(fetch_style)
        self._check_nulls()
        mode = _base_mode(fetch_style)

        if mode in OBJECT_MODES:
            if fetch_argument is not None or ctor_args:
                raise NotSupportedError("This fetch_style combination is not implemented "
                                        "for Statement.fetchAll(); use setFetchMode()")
            result = []
            while True:
                obj = self.fetch(fetch_style)
                if obj is False:
                    return result
                result.append(obj)

        if mode in (protocol.FETCH_ASSOC, protocol.FETCH_BOTH, protocol.FETCH_NUM):
            return [self._shape(mode, row) for row in self._all_rows()]

        if mode == protocol.FETCH_COLUMN:
            column = self.descriptor.column if fetch_argument is None else fetch_argument
            if ctor_args:
                raise NotSupportedError("constructor arguments are not implemented "
                                        "for FETCH_COLUMN")
            rows = self._all_rows()
            # Like fetch(), a column past the end of the row yields nothing
            if rows and not 0 <= column < len(rows[0]):
                return []
            return [row[column] for row in rows]

        raise NotSupportedError("Statement.fetchAll() does not implement fetch mode %r"
                                % (fetch_style,))

    def fetch_column(self, column_number=0):
        # type: (int) -> Any
        """Return one column of the next row, or False if it is absent or null."""
        row = self._next_row()
        if row is None or not 0 <= column_number < len(row) or row[column_number] is None:
            return False
        return row[column_number]

    def fetch_object(self, class_name=None, ctor_args=None):
        # type: (Any, Any) -> Any
        """Return the next row as an object of CLASS_NAME, or False."""
        row = self._next_row()
        if row is None:
            return False
        mapping = self._mapping(row)
        if class_name is None:
            return types.SimpleNamespace(**mapping)
        if isinstance(class_name, RowMaterializer):
            return class_name.materialize(mapping)
        return UserType.of_class(class_name, ctor_args).materialize(mapping)
