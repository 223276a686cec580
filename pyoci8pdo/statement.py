"""Oracle prepared statement with a PDOStatement-style interface.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['Statement']

import logging
import weakref

from typing import Any, Dict, Iterable, List, Optional, Tuple  # pylint: disable=unused-import

from . import protocol
from .binder import ParameterBinder
from .datatype import Variable
from .errorstate import ErrorState, NativeError  # pylint: disable=unused-import
from .exception import InterfaceError, NotSupportedError, ProgrammingError
from .native import NativeDriverError, NativeStatement
from .result_set import FetchModeDescriptor, ResultFetcher

_log = logging.getLogger('pyoci8pdo')


def _release_dropped(binder, native):
    # type: (ParameterBinder, NativeStatement) -> None
    try:
        binder.release()
    finally:
        try:
            native.free()
        except NativeDriverError as e:
            _log.debug("could not release dropped statement %r: %s",
                       native.sql, e.error.message)


class Statement(object):
    """A prepared SQL statement.

    Public Functions:
    bindParam -- Bind a variable (or value) to a named placeholder.
    bindValue -- Bind a value to a named placeholder.
    bindColumn -- Bind a result column to a Variable.
    execute -- Execute the statement.
    fetch -- Fetch the next row.
    fetchAll -- Fetch every remaining row.
    fetchColumn -- Fetch one column of the next row.
    fetchObject -- Fetch the next row as an object.
    setFetchMode -- Set the default fetch mode of the statement.
    rowCount -- Number of rows affected or fetched.
    columnCount -- Number of columns in the result set.
    getColumnMeta -- Metadata of a result column.
    errorCode -- SQLSTATE of the last error.
    errorInfo -- Details of the last error.
    closeCursor -- Release the statement.

    Every operation on a closed statement raises InterfaceError.  Native
    driver failures are recorded (see errorCode() and errorInfo()) and
    passed to the connection, which raises, warns or stays silent according
    to its ATTR_ERRMODE.
    """

    def __init__(self, native, connection, options=None):
        # type: (NativeStatement, Any, Optional[Dict[int, Any]]) -> None
        """Wrap a parsed native statement.

        :param native: Native statement handle, owned by this statement.
        :param connection: Connection that prepared the statement.
        :param options: Statement attributes.
        """
        if not isinstance(native, NativeStatement):
            raise InterfaceError("Native statement handle expected; %s received instead"
                                 % (type(native).__name__))
        self.__native = native
        self.__connection = connection
        self.__options = dict(options or {})  # type: Dict[int, Any]
        self.__error = ErrorState()
        self.__binder = ParameterBinder(native, connection.getNewDescriptor, self.__error)
        self.__fetcher = ResultFetcher(native, self.getAttribute, self._report)
        self.closed = False
        # A statement dropped without closeCursor() still frees its cursor
        self.__finalizer = weakref.finalize(self, _release_dropped, self.__binder, native)
        self.__finalizer.atexit = False
        connection._register(self)

    @property
    def queryString(self):
        # type: () -> Optional[str]
        return self.__native.sql

    def _check_closed(self):
        # type: () -> None
        if self.closed:
            raise InterfaceError("statement is closed")
        if self.__connection.closed:
            raise InterfaceError("connection is closed")

    def _report(self, error):
        # type: (NativeError) -> None
        self.__error.record(error)
        self.__connection.handle_error(error, self.__error.error_info())

    def _wrap_cursor(self, cursor):
        # type: (Any) -> Statement
        native = self.__connection.getConnectionHandler().wrap_cursor(cursor)
        return Statement(native, self.__connection)

    def execute(self, input_params=None):
        # type: (Optional[Any]) -> bool
        """Execute the statement.

        :param input_params: Mapping of placeholder name to value, bound by
                             value before executing.
        :returns: True on success, False if the native execute failed.
        :raises ProgrammingError: If one of INPUT_PARAMS cannot be bound; no
                                  binding made by this call is kept.
        """
        self._check_closed()
        binder = self.__binder
        connection = self.__connection

        if input_params is not None:
            self._bind_input(input_params)

        if not binder.refresh():
            self._report(self.__error.error)
            return False

        lobs_involved = binder.has_pending_lobs()
        mode = protocol.COMMIT_ON_SUCCESS
        if not connection.getAttribute(protocol.ATTR_AUTOCOMMIT) \
                or connection.inTransaction() or lobs_involved:
            mode = protocol.NO_AUTO_COMMIT
        _log.debug("executing %r (commit mode %d, %d pending LOBs)",
                   self.__native.sql, mode,
                   len(binder.save_lobs) + len(binder.write_lobs))

        try:
            for pending in binder.write_lobs.values():
                pending.flush()
            self.__native.execute(mode)
        except NativeDriverError as e:
            self._report(e.error)
            return False

        for pending in binder.write_lobs.values():
            pending.release()
        binder.write_lobs.clear()

        try:
            for name, pending in binder.save_lobs.items():
                _log.debug("saving LOB parameter %s", name)
                pending.flush()
        except NativeDriverError as e:
            self._report(e.error)
            return False
        finally:
            for pending in binder.save_lobs.values():
                pending.release()
            binder.save_lobs.clear()

        binder.collect(self._wrap_cursor)

        if not connection.inTransaction() and lobs_involved:
            try:
                connection.getConnectionHandler().commit()
            except NativeDriverError as e:
                self._report(e.error)
                return False
        return True

    def _bind_input(self, input_params):
        # type: (Any) -> None
        if hasattr(input_params, 'items'):
            items = list(input_params.items())
        else:
            items = list(enumerate(input_params))
        binder = self.__binder
        snapshot = binder.snapshot()
        try:
            for key, value in items:
                if isinstance(value, Variable):
                    value = value.value
                if not binder.bind(key, value):
                    raise ProgrammingError("%r could not be bound to %s with "
                                           "Statement.bindParam()" % (value, key),
                                           self.__error.error.code,
                                           self.__error.error_info())
        except Exception:
            binder.restore(snapshot)
            raise
        binder.drop_snapshot()

    def bindParam(self, parameter, variable, data_type=protocol.PARAM_STR,
                  length=-1, driver_options=None):
        # type: (str, Any, Any, int, Optional[Iterable[int]]) -> bool
        """Bind a Variable (by reference) or a value to a named placeholder.

        For PARAM_BLOB / PARAM_CLOB the Variable receives the LOB descriptor
        and the original value is written when the statement executes.
        DRIVER_OPTIONS selects LOB_SQL (the default: save into the locator
        returned by the statement) or LOB_PL_SQL (write a temporary LOB
        before executing).
        """
        self._check_closed()
        if self.__binder.bind(parameter, variable, data_type, length, driver_options):
            return True
        self.__connection.handle_error(self.__error.error, self.__error.error_info())
        return False

    def bindValue(self, parameter, value, data_type=protocol.PARAM_STR):
        # type: (str, Any, Any) -> bool
        if isinstance(value, Variable):
            value = value.value
        return self.bindParam(parameter, value, data_type)

    def bindColumn(self, column, param, type=protocol.PARAM_STR,  # pylint: disable=redefined-builtin
                   maxlen=None, driverdata=None):
        # type: (Any, Variable, int, Optional[int], Any) -> bool
        """Assign COLUMN (1-based index or name) to PARAM on every fetch."""
        self._check_closed()
        if maxlen is not None or driverdata is not None:
            raise NotSupportedError("maxlen and driverdata parameters are not "
                                    "implemented for Statement.bindColumn()")
        if type not in (protocol.PARAM_INT, protocol.PARAM_STR):
            raise NotSupportedError("Only PARAM_INT and PARAM_STR are implemented for "
                                    "the type parameter of Statement.bindColumn()")
        if not isinstance(param, Variable):
            raise ProgrammingError("Statement.bindColumn() requires a Variable")
        self.__fetcher.bound_columns.append((column, param, type))
        return True

    def fetch(self, fetch_style=None, cursor_orientation=protocol.FETCH_ORI_NEXT,
              cursor_offset=0):
        # type: (Any, int, int) -> Any
        self._check_closed()
        return self.__fetcher.fetch(fetch_style, cursor_orientation, cursor_offset)

    def fetchAll(self, fetch_style=None, fetch_argument=None, ctor_args=None):
        # type: (Any, Any, Any) -> List[Any]
        self._check_closed()
        return self.__fetcher.fetch_all(fetch_style, fetch_argument, ctor_args)

    def fetchColumn(self, column_number=0):
        # type: (int) -> Any
        self._check_closed()
        return self.__fetcher.fetch_column(column_number)

    def fetchObject(self, class_name=None, ctor_args=None):
        # type: (Any, Any) -> Any
        self._check_closed()
        return self.__fetcher.fetch_object(class_name, ctor_args)

    def setFetchMode(self, mode, col_class_or_obj=None, ctor_args=None):
        # type: (Any, Any, Any) -> bool
        """Replace the statement's default fetch mode.

        :param mode: A FETCH_* mode.
        :param col_class_or_obj: Column index for FETCH_COLUMN, a class or
                                 RowMaterializer for FETCH_CLASS, the target
                                 object for FETCH_INTO.
        :param ctor_args: Constructor arguments for FETCH_CLASS.
        """
        self._check_closed()
        self.__fetcher.descriptor = FetchModeDescriptor.configure(
            mode, col_class_or_obj, ctor_args)
        return True

    def rowCount(self):
        # type: () -> int
        self._check_closed()
        return self.__native.num_rows()

    def columnCount(self):
        # type: () -> int
        self._check_closed()
        return self.__native.num_fields()

    def getColumnMeta(self, column):
        # type: (Any) -> Any
        """Return metadata for COLUMN (zero-based index, or name).

        Keys: native_type, driver:decl_type, flags, name, table, len,
        precision, pdo_type, is_null.
        """
        self._check_closed()
        native = self.__native
        if isinstance(column, int):
            index = column + 1
        else:
            names = [n.upper() for n in native.column_names()]
            index = names.index(column.upper()) + 1 if column.upper() in names else 0
        try:
            return {'native_type': native.field_type(index),
                    'driver:decl_type': native.field_type_raw(index),
                    'flags': [],
                    'name': native.field_name(index),
                    'table': None,
                    'len': native.field_size(index),
                    'precision': native.field_precision(index),
                    'pdo_type': None,
                    'is_null': native.field_is_null(index)}
        except NativeDriverError as e:
            self._report(e.error)
            return False

    def errorCode(self):
        # type: () -> Optional[str]
        """Return 'HY000' if an error was recorded, else None.

        See errorInfo() for the actual Oracle error code and message.
        """
        return self.__error.error_code()

    def errorInfo(self):
        # type: () -> List[Any]
        return self.__error.error_info()

    def setAttribute(self, attribute, value):
        # type: (int, Any) -> bool
        self.__options[attribute] = value
        return True

    def getAttribute(self, attribute):
        # type: (int) -> Any
        """Return a statement attribute, falling back to the connection's."""
        if attribute in self.__options:
            return self.__options[attribute]
        return self.__connection.getAttribute(attribute)

    def nextRowset(self):
        raise NotSupportedError("nextRowset() method is not implemented for Statement")

    def debugDumpParams(self):
        raise NotSupportedError("debugDumpParams() method is not implemented for Statement")

    def closeCursor(self):
        # type: () -> bool
        """Release the native statement and any pending LOB descriptors."""
        self._check_closed()
        self._release()
        self.__connection._unregister(self)
        return True

    def _release(self):
        # type: () -> None
        if self.closed:
            return
        self.closed = True
        self.__finalizer.detach()
        try:
            self.__binder.release()
        finally:
            try:
                self.__native.free()
            except NativeDriverError as e:
                self.__error.record(e.error)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self.closed and not self.__connection.closed:
            self.closeCursor()
