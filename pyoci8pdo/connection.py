"""A module for connecting to an Oracle database.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Connection -- Class for establishing connection with the database.

Exported Functions:
connect -- Creates a connection object.
"""

__all__ = ['apilevel', 'threadsafety', 'paramstyle', 'connect', 'Connection']

import copy
import logging
import re
import warnings
import weakref

from typing import Any, Dict, List, Mapping, Optional  # pylint: disable=unused-import

from . import __version__
from . import protocol
from .errorstate import ErrorState, NativeError
from .exception import InterfaceError, NotSupportedError, ProgrammingError
from .exception import db_error_handler
from .native import NativeConnection, NativeDriverError, NativeStatement  # pylint: disable=unused-import
from .statement import Statement
from .util import parse_dsn

apilevel = "2.0"
threadsafety = 1
paramstyle = "named"

_log = logging.getLogger('pyoci8pdo')

DEFAULT_ATTRIBUTES = {
    protocol.ATTR_AUTOCOMMIT: True,
    protocol.ATTR_CASE: protocol.CASE_NATURAL,
    protocol.ATTR_DEFAULT_FETCH_MODE: protocol.FETCH_BOTH,
    protocol.ATTR_DRIVER_NAME: 'oci',
    protocol.ATTR_ERRMODE: protocol.ERRMODE_EXCEPTION,
    protocol.ATTR_ORACLE_NULLS: protocol.NULL_NATURAL,
}  # type: Dict[int, Any]

_SEQUENCE_NAME = re.compile(r'^[A-Za-z][\w$#]*(\.[A-Za-z][\w$#]*)?$')


def connect(dsn=None,       # type: Optional[str]
            user=None,      # type: Optional[str]
            password=None,  # type: Optional[str]
            options=None,   # type: Optional[Mapping[int, Any]]
            **kwargs
            ):
    # type: (...) -> Connection
    """Return a new Oracle Connection object.

    :param dsn: PDO data source name (oci:dbname=...;charset=...) or an
                Oracle connect string.
    :param user: Username to connect with.
    :param password: Password to connect with.
    :param options: Connection attributes, keyed by ATTR_* constants.
    :returns: A new Connection object.
    """
    return Connection(dsn=dsn, user=user, password=password,
                      options=options, **kwargs)


class Connection(object):
    """An established connection with an Oracle database.

    Public Functions:
    prepare -- Prepare a statement for execution.
    exec -- Execute a statement and return the number of affected rows.
    query -- Execute a statement and return it for fetching.
    beginTransaction -- Start a transaction (suspends autocommit).
    commit -- Commit the current transaction.
    rollBack -- Roll back the current transaction.
    lastInsertId -- Current value of a sequence.
    quote -- Quote a string literal.
    setAttribute / getAttribute -- Connection attributes.
    errorCode / errorInfo -- Last error of the connection.
    close -- Close every open statement, then the connection.

    Non-PDO Functions:
    getConnectionHandler -- The native connection.
    getNewCursor -- A new native cursor handle.
    getNewDescriptor -- A new LOB descriptor.
    getNewCollection -- A new collection object.
    closeCursor -- Release a native cursor handle.
    """

    # PEP 249 recommends that all exceptions be exposed as attributes in the
    # Connection object.
    from .exception import Warning, Error, InterfaceError, DatabaseError
    from .exception import OperationalError, IntegrityError, InternalError
    from .exception import ProgrammingError, NotSupportedError, DataError

    __native = None           # type: NativeConnection
    __config = None           # type: Dict[str, Any]

    def __init__(self, dsn=None,       # type: Optional[str]
                 user=None,            # type: Optional[str]
                 password=None,        # type: Optional[str]
                 options=None,         # type: Optional[Mapping[int, Any]]
                 native=None,          # type: Any
                 **kwargs
                 ):
        # type: (...) -> None
        """Construct a Connection object.

        :param dsn: PDO data source name or Oracle connect string.
        :param user: Username to connect with.
        :param password: Password to connect with.
        :param options: Connection attributes.
        :param native: An open python-oracledb connection to use instead of
                       connecting.
        :param kwargs: Extra arguments to pass to oracledb.connect().
        """
        if dsn is None and native is None:
            raise InterfaceError("No DSN provided.")

        self.closed = False
        self.__error = ErrorState()
        self.__in_transaction = False
        self.__statements = weakref.WeakSet()  # type: weakref.WeakSet

        self.__attributes = dict(DEFAULT_ATTRIBUTES)
        self.__attributes[protocol.ATTR_CLIENT_VERSION] = NativeConnection.client_version()
        if options:
            self.__attributes.update(options)

        dbname, charset = self._resolve_dsn(dsn)
        self.__config = {'driver_version': __version__,
                         'dsn': dsn,
                         'dbname': dbname,
                         'charset': charset,
                         'user': user,
                         'options': copy.deepcopy(dict(options or {}))}

        if native is None:
            try:
                native = NativeConnection.connect(user, password, dbname, **kwargs)
            except NativeDriverError as e:
                self.__error.record(e.error)
                db_error_handler(e.error.code, e.error.message, self.errorInfo())
        elif not isinstance(native, NativeConnection):
            native = NativeConnection(native)
        self.__native = native
        _log.debug("connected to %s as %s", dbname, user)

    @staticmethod
    def _resolve_dsn(dsn):
        # type: (Optional[str]) -> tuple
        """Return (dbname, charset) for DSN.

        Anything that is not a PDO DSN is taken as a plain connect string.
        """
        if dsn is None:
            return (None, None)
        if '=' not in dsn and not dsn.startswith('uri:'):
            return (dsn, None)
        parsed = parse_dsn(dsn, ['dbname', 'charset'])
        return (parsed['dbname'], parsed['charset'])

    def _check_closed(self):
        # type: () -> None
        """Check if the connection is available.

        :raises InterfaceError: If the connection is closed.
        """
        if self.closed:
            raise InterfaceError("connection is closed")

    def _register(self, statement):
        # type: (Statement) -> None
        self.__statements.add(statement)

    def _unregister(self, statement):
        # type: (Statement) -> None
        self.__statements.discard(statement)

    def _fail(self, code, message):
        # type: (Any, str) -> None
        self.handle_error(self.__error.record(NativeError(code, message)))

    def handle_error(self, error, error_info=None):
        # type: (NativeError, Optional[List[Any]]) -> None
        """Act on ERROR as the ATTR_ERRMODE attribute says.

        ERRMODE_SILENT does nothing, ERRMODE_WARNING issues a RuntimeWarning
        and ERRMODE_EXCEPTION raises the DatabaseError subclass matching the
        error code.
        """
        mode = self.__attributes.get(protocol.ATTR_ERRMODE)
        if error_info is None:
            error_info = self.errorInfo()
        if mode == protocol.ERRMODE_EXCEPTION:
            db_error_handler(error.code, error.message, error_info)
        elif mode == protocol.ERRMODE_WARNING:
            warnings.warn(error.message, RuntimeWarning, stacklevel=3)

    def connection_config(self):
        # type: () -> Dict[str, Any]
        """Returns a copy of the connection configuration.

        Configuration:
          attributes     :dict: Effective connection attributes
          charset        :str:  Character set named in the DSN, if any
          connected      :bool: True if the connection is active
          dbname         :str:  Connect string of the database
          driver_version :str:  Version of this driver
          dsn            :str:  The DSN passed to connect()
          options        :dict: Attributes passed to connect()
          user           :str:  name of the connected user

        :returns: Copy of the connection config names and values.
                  Modifying these values has no effect on the connection.
        """
        config = copy.deepcopy(self.__config)
        config['attributes'] = dict(self.__attributes)
        config['connected'] = not self.closed
        return config

    def getConnectionHandler(self):
        # type: () -> NativeConnection
        return self.__native

    def prepare(self, statement, options=None):
        # type: (str, Optional[Dict[int, Any]]) -> Any
        """Prepare STATEMENT for execution.

        :returns: A Statement, or False if the SQL could not be parsed and
                  ATTR_ERRMODE does not raise.
        """
        self._check_closed()
        try:
            native = self.__native.parse(statement)
        except NativeDriverError as e:
            self.__error.record(e.error)
            self.handle_error(e.error)
            return False
        if not isinstance(options, dict):
            options = {}
        return Statement(native, self, options)

    def beginTransaction(self):
        # type: () -> bool
        """Begin a transaction, suspending autocommit until it ends."""
        self._check_closed()
        if self.__in_transaction:
            self._fail(protocol.SQLSTATE_SUCCESS, 'There is already an active transaction')
            return False
        self.__in_transaction = True
        return True

    def inTransaction(self):
        # type: () -> bool
        return self.__in_transaction

    isTransaction = inTransaction

    def commit(self):
        # type: () -> bool
        """Commit the current transaction."""
        return self._end_transaction(self.__native.commit)

    def rollBack(self):
        # type: () -> bool
        """Roll back the current transaction."""
        return self._end_transaction(self.__native.rollback)

    def _end_transaction(self, finish):
        self._check_closed()
        if not self.__in_transaction:
            self._fail(protocol.SQLSTATE_SUCCESS, 'There is no active transaction')
            return False
        try:
            finish()
        except NativeDriverError as e:
            self.__error.record(e.error)
            self.handle_error(e.error)
            return False
        self.__in_transaction = False
        return True

    def exec(self, statement):
        # type: (str) -> Any
        """Execute STATEMENT and return the number of rows it affected."""
        stmt = self.prepare(statement)
        if stmt is False:
            return False
        with stmt:
            if not stmt.execute():
                return False
            return stmt.rowCount()

    def query(self, statement, mode=None, type_arg=None, ctor_args=None):
        # type: (str, Any, Any, Any) -> Any
        """Execute STATEMENT and return it, ready to fetch.

        MODE, TYPE_ARG and CTOR_ARGS are passed to Statement.setFetchMode().
        """
        stmt = self.prepare(statement)
        if stmt is False:
            return False
        if mode is not None:
            stmt.setFetchMode(mode, type_arg, ctor_args)
        stmt.execute()
        return stmt

    def lastInsertId(self, name=None):
        # type: (Optional[str]) -> Any
        """Return the current value of the sequence NAME."""
        if name is None:
            self._fail(protocol.SQLSTATE_NOT_SUPPORTED,
                       'SQLSTATE[IM001]: Driver does not support this function: '
                       'driver does not support lastInsertId()')
            return None
        if not _SEQUENCE_NAME.match(name):
            raise ProgrammingError("Invalid sequence name: %r" % (name,))
        stmt = self.query("SELECT %s.CURRVAL FROM DUAL" % (name))
        if stmt is False:
            return None
        with stmt:
            row = stmt.fetch(protocol.FETCH_NUM)
        return row[0] if row else None

    def quote(self, string, parameter_type=protocol.PARAM_STR):
        # type: (Any, int) -> str
        if parameter_type != protocol.PARAM_STR:
            raise NotSupportedError("Only PARAM_STR is currently implemented for "
                                    "the parameter_type of Connection.quote()")
        return "'" + str(string).replace("'", "''") + "'"

    def setAttribute(self, attribute, value):
        # type: (int, Any) -> bool
        self.__attributes[attribute] = value
        return True

    def getAttribute(self, attribute):
        # type: (int) -> Any
        if attribute == protocol.ATTR_SERVER_VERSION \
                and attribute not in self.__attributes:
            self._check_closed()
            self.__attributes[attribute] = self.__native.server_version
        return self.__attributes.get(attribute)

    def errorCode(self):
        # type: () -> Optional[str]
        """Return 'HY000' if an error was recorded, else None.

        See errorInfo() for the actual Oracle error code and message.
        """
        return self.__error.error_code()

    def errorInfo(self):
        # type: () -> List[Any]
        return self.__error.error_info()

    def getNewCursor(self):
        # type: () -> Any
        """Return a new native cursor handle, or False on error.

        Release it with closeCursor().
        """
        self._check_closed()
        try:
            return self.__native.new_cursor()
        except NativeDriverError as e:
            self.__error.record(e.error)
            self.handle_error(e.error)
            return False

    def getNewDescriptor(self, kind=protocol.PARAM_BLOB):
        # type: (int) -> Any
        """Return a new LOB descriptor of KIND (PARAM_BLOB or PARAM_CLOB)."""
        self._check_closed()
        if kind == protocol.PARAM_LOB:
            kind = protocol.PARAM_BLOB
        return self.__native.new_descriptor(kind)

    def getNewCollection(self, tdo, schema=None):
        # type: (str, Optional[str]) -> Any
        """Return a new, empty object of the collection type TDO."""
        self._check_closed()
        try:
            return self.__native.new_collection(tdo, schema)
        except NativeDriverError as e:
            self.__error.record(e.error)
            self.handle_error(e.error)
            return False

    def closeCursor(self, cursor):
        # type: (Any) -> bool
        """Release a cursor from getNewCursor() or a ref cursor Statement."""
        if isinstance(cursor, Statement):
            return cursor.closeCursor()
        try:
            cursor.free()
        except NativeDriverError as e:
            self.__error.record(e.error)
            self.handle_error(e.error)
            return False
        return True

    def close(self):
        # type: () -> None
        """Close every open statement, then the connection."""
        self._check_closed()
        statements = list(self.__statements)
        self.__statements.clear()
        for stmt in statements:
            stmt._release()
        self.closed = True
        try:
            self.__native.close()
        except NativeDriverError as e:
            self.__error.record(e.error)
            self.handle_error(e.error)
        _log.debug("closed connection to %s", self.__config['dbname'])

    def __enter__(self):
        # Return self to allow use within the 'with' block
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # exc_type is None if the block completed normally.
        try:
            if self.__in_transaction and not self.closed:
                if exc_type is None:
                    self.commit()
                else:
                    self.rollBack()
        finally:
            if not self.closed:
                self.close()
