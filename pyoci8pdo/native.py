"""Resource-style access to the Oracle database through python-oracledb.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

The classes here expose python-oracledb with the shape of the OCI8 client
API that the PDO layer was designed around: statement handles that are
parsed once, bound by name, executed under an explicit commit mode and
fetched row by row, plus LOB descriptors that are written separately from
the statement that binds them.  All driver failures surface as
NativeDriverError carrying a NativeError.

Exported Classes:
NativeConnection -- An open database connection.
NativeStatement -- A parsed statement (or ref cursor) handle.
LobDescriptor -- A LOB locator bound into a statement.
NativeDriverError -- A failure reported by the native driver.
"""

__all__ = ['NativeConnection', 'NativeStatement', 'LobDescriptor',
           'NativeDriverError', 'native_error']

import logging

from typing import Any, Dict, List, Optional, Sequence, Tuple  # pylint: disable=unused-import

import oracledb

from . import protocol
from .datatype import coerce_int
from .errorstate import NativeError
from .exception import InterfaceError

_log = logging.getLogger('pyoci8pdo')

_NATIVE_TYPES = {
    protocol.SQLT_CHR: oracledb.DB_TYPE_VARCHAR,
    protocol.SQLT_INT: oracledb.DB_TYPE_NUMBER,
    protocol.SQLT_RSET: oracledb.DB_TYPE_CURSOR,
    protocol.SQLT_NTY: oracledb.DB_TYPE_OBJECT,
    protocol.SQLT_CLOB: oracledb.DB_TYPE_CLOB,
    protocol.SQLT_BLOB: oracledb.DB_TYPE_BLOB,
}

_CHARACTER_LOBS = (oracledb.DB_TYPE_CLOB, oracledb.DB_TYPE_NCLOB)


class NativeDriverError(Exception):
    """An operation of the native driver failed."""

    def __init__(self, error):
        # type: (NativeError) -> None
        super(NativeDriverError, self).__init__(error.message)
        self.error = error


def native_error(exc, sqltext=None):
    # type: (Exception, Optional[str]) -> NativeError
    """Build a NativeError from a python-oracledb exception."""
    detail = exc.args[0] if exc.args else None
    code = getattr(detail, 'code', None)
    if not code:
        code = getattr(detail, 'full_code', None) or protocol.SQLSTATE_GENERAL_ERROR
    message = getattr(detail, 'message', None) or str(exc)
    offset = getattr(detail, 'offset', None)
    return NativeError(code, message, offset, sqltext)


def _output_type_handler(cursor, metadata):
    """Fetch LOB columns as str / bytes instead of LOB locators."""
    if metadata.type_code in _CHARACTER_LOBS:
        return cursor.var(oracledb.DB_TYPE_LONG, arraysize=cursor.arraysize)
    if metadata.type_code is oracledb.DB_TYPE_BLOB:
        return cursor.var(oracledb.DB_TYPE_LONG_RAW, arraysize=cursor.arraysize)
    return None


def _lob_data(kind, data):
    # type: (int, Any) -> Any
    if data is None:
        data = b'' if kind == protocol.SQLT_BLOB else ''
    if kind == protocol.SQLT_BLOB and isinstance(data, str):
        return data.encode('utf-8')
    if kind == protocol.SQLT_CLOB and isinstance(data, (bytes, bytearray)):
        return bytes(data).decode('utf-8')
    return data


class LobDescriptor(object):
    """A LOB locator, the counterpart of an OCI-Lob descriptor.

    The descriptor is bound into a statement as a LOB variable.  Its data is
    transferred separately, either into a temporary LOB before the statement
    runs (write_temporary) or into the locator the statement returned
    (save).
    """

    def __init__(self, connection, kind):
        # type: (Any, int) -> None
        self.__connection = connection
        self.kind = kind
        self.variable = None      # type: Any
        self.temporary = None     # type: Any
        self.freed = False

    def bind_to(self, cursor):
        # type: (Any) -> Any
        self.variable = cursor.var(_NATIVE_TYPES[self.kind])
        return self.variable

    def write_temporary(self, data):
        # type: (Any) -> None
        """Write DATA into a new temporary LOB and bind it in place."""
        if self.temporary is not None:
            self.temporary.close()
            self.temporary = None
        try:
            lob = self.__connection.createlob(_NATIVE_TYPES[self.kind])
            data = _lob_data(self.kind, data)
            if data:
                lob.write(data)
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))
        self.temporary = lob
        if self.variable is not None:
            self.variable.setvalue(0, lob)

    def save(self, data):
        # type: (Any) -> None
        """Store DATA into every locator the statement returned."""
        if self.variable is None:
            return
        value = self.variable.getvalue()
        locators = value if isinstance(value, list) else [value]
        data = _lob_data(self.kind, data)
        try:
            for lob in locators:
                if lob is None:
                    continue
                if data:
                    lob.write(data, 1)
                lob.trim(len(data))
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))

    def free(self):
        # type: () -> None
        if self.temporary is not None:
            self.temporary.close()
            self.temporary = None
        self.variable = None
        self.freed = True


class NativeStatement(object):
    """A parsed statement handle.

    A handle created from SQL text is prepared immediately.  A handle built
    around an existing cursor (a ref cursor returned by PL/SQL) is already
    executed and can only be fetched.
    """

    def __init__(self, connection, sql, cursor=None):
        # type: (NativeConnection, Optional[str], Any) -> None
        self.__connection = connection
        self.sql = sql
        self.__binds = {}          # type: Dict[str, Any]
        self.__bind_names = None   # type: Optional[set]
        self.__last_row = None     # type: Optional[Tuple[Any, ...]]
        self.freed = False

        try:
            self.__cursor = cursor if cursor is not None else connection.handle.cursor()
            self.__cursor.outputtypehandler = _output_type_handler
            if sql is not None:
                self.__cursor.prepare(sql)
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, sql))

    def _check_freed(self):
        # type: () -> None
        if self.freed:
            raise InterfaceError("statement handle has been released")

    @property
    def cursor(self):
        # type: () -> Any
        self._check_freed()
        return self.__cursor

    def _bind_names(self):
        # type: () -> set
        if self.__bind_names is None:
            if self.sql is None:
                self.__bind_names = set()
            else:
                self.__bind_names = set(n.upper() for n in self.__cursor.bindnames())
        return self.__bind_names

    def _check_bind_name(self, name):
        # type: (str) -> None
        if name.upper() not in self._bind_names():
            raise NativeDriverError(NativeError(
                protocol.ILLEGAL_VARIABLE_NAME,
                'ORA-01036: illegal variable name/number', None, self.sql))

    def bind_by_name(self, name, value, length, native_type):
        # type: (str, Any, int, int) -> Any
        """Bind VALUE to the placeholder NAME and return the bound variable."""
        self._check_freed()
        self._check_bind_name(name)
        cursor = self.__cursor
        try:
            if isinstance(value, LobDescriptor):
                var = value.bind_to(cursor)
            elif native_type == protocol.SQLT_RSET:
                var = cursor.var(oracledb.DB_TYPE_CURSOR)
            elif native_type == protocol.SQLT_NTY and hasattr(value, 'type'):
                var = cursor.var(value.type)
                var.setvalue(0, value)
            elif native_type == protocol.SQLT_INT:
                var = cursor.var(oracledb.DB_TYPE_NUMBER)
                var.setvalue(0, None if value is None else coerce_int(value))
            elif value is None or isinstance(value, str):
                var = cursor.var(oracledb.DB_TYPE_VARCHAR, max(length, 1))
                var.setvalue(0, value)
            else:
                var = cursor.var(type(value))
                var.setvalue(0, value)
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, self.sql))
        self.__binds[name] = var
        return var

    def bind_array_by_name(self, name, values, max_count, length, native_type):
        # type: (str, Sequence[Any], int, int, int) -> Any
        """Bind a PL/SQL index-by table of MAX_COUNT elements to NAME."""
        self._check_freed()
        self._check_bind_name(name)
        db_type = _NATIVE_TYPES.get(native_type, oracledb.DB_TYPE_VARCHAR)
        size = max(length, 1) if db_type is oracledb.DB_TYPE_VARCHAR else 0
        try:
            var = self.__cursor.arrayvar(db_type, list(values)[:max_count], size)
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, self.sql))
        self.__binds[name] = var
        return var

    def bound(self):
        # type: () -> Dict[str, Any]
        return dict(self.__binds)

    def restore_binds(self, binds):
        # type: (Dict[str, Any]) -> None
        self.__binds = dict(binds)

    def bound_value(self, name):
        # type: (str) -> Any
        var = self.__binds.get(name)
        if var is None:
            return None
        return var.getvalue()

    def execute(self, mode):
        # type: (int) -> None
        """Execute the statement, committing on success if MODE says so."""
        self._check_freed()
        if self.sql is None:
            raise NativeDriverError(NativeError(
                protocol.FETCH_WITHOUT_EXECUTE,
                'ORA-24374: a ref cursor cannot be executed again', None, None))
        self.__last_row = None
        try:
            self.__connection.handle.autocommit = (mode == protocol.COMMIT_ON_SUCCESS)
            self.__cursor.execute(None, self.__binds)
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, self.sql))

    @property
    def description(self):
        # type: () -> Optional[List[Tuple[Any, ...]]]
        self._check_freed()
        return self.__cursor.description

    def column_names(self):
        # type: () -> List[str]
        return [d[0] for d in (self.description or [])]

    def _check_result_set(self):
        # type: () -> None
        if self.description is None:
            raise NativeDriverError(NativeError(
                protocol.FETCH_WITHOUT_EXECUTE,
                'ORA-24374: define not done before fetch or execute and fetch',
                None, self.sql))

    def fetch_row(self):
        # type: () -> Optional[Tuple[Any, ...]]
        """Return the next row as a tuple, or None at the end of the rows."""
        self._check_result_set()
        try:
            row = self.__cursor.fetchone()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, self.sql))
        if row is not None:
            self.__last_row = tuple(row)
            return self.__last_row
        return None

    def fetch_all(self):
        # type: () -> List[Tuple[Any, ...]]
        """Return every remaining row."""
        self._check_result_set()
        try:
            rows = [tuple(row) for row in self.__cursor.fetchall()]
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, self.sql))
        if rows:
            self.__last_row = rows[-1]
        return rows

    def num_rows(self):
        # type: () -> int
        self._check_freed()
        return self.__cursor.rowcount

    def num_fields(self):
        # type: () -> int
        return len(self.description or [])

    def _field(self, index):
        # type: (int) -> Tuple[Any, ...]
        description = self.description or []
        if index < 1 or index > len(description):
            raise NativeDriverError(NativeError(
                protocol.INVALID_IDENTIFIER,
                'ORA-00904: invalid column index %d' % (index), None, self.sql))
        return description[index - 1]

    def field_name(self, index):
        # type: (int) -> str
        return self._field(index)[0]

    def field_type(self, index):
        # type: (int) -> str
        type_code = self._field(index)[1]
        name = getattr(type_code, 'name', str(type_code))
        if name.startswith('DB_TYPE_'):
            name = name[len('DB_TYPE_'):]
        return name

    def field_type_raw(self, index):
        # type: (int) -> Any
        type_code = self._field(index)[1]
        return getattr(type_code, 'num', None)

    def field_size(self, index):
        # type: (int) -> Optional[int]
        return self._field(index)[3]

    def field_precision(self, index):
        # type: (int) -> Optional[int]
        return self._field(index)[4]

    def field_is_null(self, index):
        # type: (int) -> bool
        self._field(index)
        return self.__last_row is not None and self.__last_row[index - 1] is None

    def free(self):
        # type: () -> None
        if self.freed:
            return
        try:
            self.__cursor.close()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e, self.sql))
        finally:
            self.freed = True
            self.__binds = {}
        _log.debug("released statement handle for %r", self.sql)


class NativeConnection(object):
    """An open python-oracledb connection."""

    def __init__(self, handle):
        # type: (Any) -> None
        self.handle = handle

    @classmethod
    def connect(cls, user, password, dsn, **params):
        # type: (Optional[str], Optional[str], Optional[str], Any) -> NativeConnection
        try:
            handle = oracledb.connect(user=user, password=password, dsn=dsn, **params)
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))
        return cls(handle)

    @staticmethod
    def client_version():
        # type: () -> str
        return oracledb.__version__

    @property
    def server_version(self):
        # type: () -> str
        return self.handle.version

    def parse(self, sql):
        # type: (str) -> NativeStatement
        return NativeStatement(self, sql)

    def wrap_cursor(self, cursor):
        # type: (Any) -> NativeStatement
        return NativeStatement(self, None, cursor=cursor)

    def new_cursor(self):
        # type: () -> NativeStatement
        try:
            cursor = self.handle.cursor()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))
        return self.wrap_cursor(cursor)

    def new_descriptor(self, kind):
        # type: (int) -> LobDescriptor
        return LobDescriptor(self.handle, kind)

    def new_collection(self, tdo, schema=None):
        # type: (str, Optional[str]) -> Any
        """Return an empty object of the named collection type."""
        name = tdo if schema is None else '%s.%s' % (schema, tdo)
        try:
            return self.handle.gettype(name.upper()).newobject()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))

    def commit(self):
        # type: () -> None
        try:
            self.handle.commit()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))

    def rollback(self):
        # type: () -> None
        try:
            self.handle.rollback()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))

    def close(self):
        # type: () -> None
        try:
            self.handle.close()
        except oracledb.Error as e:
            raise NativeDriverError(native_error(e))
