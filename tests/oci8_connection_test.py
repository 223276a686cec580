"""
(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import gc

import pytest

import oracledb

import pyoci8pdo
from pyoci8pdo.native import NativeStatement

from . import oci8_base
from .fakes import FakeConnection, db_error


def test_module_globals():
    assert pyoci8pdo.apilevel == '2.0'
    assert pyoci8pdo.threadsafety == 1
    assert pyoci8pdo.paramstyle == 'named'


def test_connect_requires_dsn():
    with pytest.raises(pyoci8pdo.InterfaceError):
        pyoci8pdo.connect(user='scott', password='tiger')


class TestOci8Connect(object):
    @pytest.fixture(autouse=True)
    def _oracledb(self, monkeypatch):
        self.calls = []
        self.failure = None

        def connect(**kwargs):
            self.calls.append(kwargs)
            if self.failure is not None:
                raise self.failure
            return FakeConnection()

        monkeypatch.setattr(oracledb, 'connect', connect)

    def test_pdo_dsn(self):
        con = pyoci8pdo.connect('oci:dbname=//localhost:1521/xe;charset=AL32UTF8',
                                'scott', 'tiger')
        assert self.calls == [{'user': 'scott', 'password': 'tiger',
                               'dsn': '//localhost:1521/xe'}]

        config = con.connection_config()
        assert config['dbname'] == '//localhost:1521/xe'
        assert config['charset'] == 'AL32UTF8'
        assert config['user'] == 'scott'
        assert config['connected'] is True
        assert config['driver_version'] == pyoci8pdo.__version__

    def test_connect_string(self):
        pyoci8pdo.connect('dbhost.example.com/orclpdb1', 'scott', 'tiger',
                          tcp_connect_timeout=5)
        assert self.calls == [{'user': 'scott', 'password': 'tiger',
                               'dsn': 'dbhost.example.com/orclpdb1',
                               'tcp_connect_timeout': 5}]

    def test_connect_failure(self):
        self.failure = db_error(1017, 'ORA-01017: invalid username/password; logon denied')

        with pytest.raises(pyoci8pdo.OperationalError) as ex:
            pyoci8pdo.connect('oci:dbname=xe', 'scott', 'wrong')
        assert ex.value.code == 1017
        assert ex.value.errorInfo == ['HY000', 1017,
                                      'ORA-01017: invalid username/password; logon denied']

    def test_connect_failure_silent(self):
        self.failure = db_error(12541, 'ORA-12541: TNS:no listener')

        # A connection that could not be opened always raises
        with pytest.raises(pyoci8pdo.OperationalError):
            pyoci8pdo.connect('oci:dbname=xe', 'scott', 'tiger',
                              {pyoci8pdo.ATTR_ERRMODE: pyoci8pdo.ERRMODE_SILENT})


class TestOci8Connection(oci8_base.Oci8Base):
    def test_default_attributes(self):
        con = self._connect()

        assert con.getAttribute(pyoci8pdo.ATTR_AUTOCOMMIT) is True
        assert con.getAttribute(pyoci8pdo.ATTR_CASE) == pyoci8pdo.CASE_NATURAL
        assert con.getAttribute(pyoci8pdo.ATTR_DEFAULT_FETCH_MODE) == pyoci8pdo.FETCH_BOTH
        assert con.getAttribute(pyoci8pdo.ATTR_DRIVER_NAME) == 'oci'
        assert con.getAttribute(pyoci8pdo.ATTR_ERRMODE) == pyoci8pdo.ERRMODE_EXCEPTION
        assert con.getAttribute(pyoci8pdo.ATTR_ORACLE_NULLS) == pyoci8pdo.NULL_NATURAL
        assert con.getAttribute(pyoci8pdo.ATTR_CLIENT_VERSION) == oracledb.__version__
        assert con.getAttribute(pyoci8pdo.ATTR_SERVER_VERSION) == '19.3.0.0.0'
        assert con.getAttribute(12345) is None

    def test_options_override_defaults(self):
        con = self._connect({pyoci8pdo.ATTR_CASE: pyoci8pdo.CASE_LOWER})
        assert con.getAttribute(pyoci8pdo.ATTR_CASE) == pyoci8pdo.CASE_LOWER

        assert con.setAttribute(pyoci8pdo.ATTR_CASE, pyoci8pdo.CASE_UPPER)
        assert con.getAttribute(pyoci8pdo.ATTR_CASE) == pyoci8pdo.CASE_UPPER

    def test_connection_config_is_a_copy(self):
        con = self._connect({pyoci8pdo.ATTR_CASE: pyoci8pdo.CASE_LOWER})

        config = con.connection_config()
        assert config['options'] == {pyoci8pdo.ATTR_CASE: pyoci8pdo.CASE_LOWER}
        assert config['attributes'][pyoci8pdo.ATTR_CASE] == pyoci8pdo.CASE_LOWER
        config['options'].clear()
        assert con.connection_config()['options'] == {pyoci8pdo.ATTR_CASE: pyoci8pdo.CASE_LOWER}

    def test_exceptions_as_attributes(self):
        con = self._connect()
        assert con.Error is pyoci8pdo.Error
        assert con.ProgrammingError is pyoci8pdo.ProgrammingError
        assert con.NotSupportedError is pyoci8pdo.NotSupportedError

    def test_transactions(self):
        con = self._connect()

        assert not con.inTransaction()
        assert con.beginTransaction()
        assert con.inTransaction()
        assert con.isTransaction()

        with pytest.raises(pyoci8pdo.DatabaseError) as ex:
            con.beginTransaction()
        assert ex.value.message == 'There is already an active transaction'
        assert con.inTransaction()

        assert con.rollBack()
        assert self.handle.rollbacks == 1
        assert not con.inTransaction()

        assert con.beginTransaction()
        assert con.commit()
        assert self.handle.commits == 1

    def test_transaction_errors_silent(self):
        con = self._silent()

        assert con.commit() is False
        assert con.errorCode() == 'HY000'
        assert con.errorInfo() == ['HY000', '00000', 'There is no active transaction']

        assert con.rollBack() is False
        assert con.beginTransaction()
        assert con.beginTransaction() is False
        assert con.errorInfo()[2] == 'There is already an active transaction'
        assert self.handle.commits == 0
        assert self.handle.rollbacks == 0

    def test_transaction_errors_warning(self):
        con = self._connect({pyoci8pdo.ATTR_ERRMODE: pyoci8pdo.ERRMODE_WARNING})

        with pytest.warns(RuntimeWarning, match='no active transaction'):
            assert con.commit() is False

    def test_error_info_default(self):
        con = self._connect()
        assert con.errorCode() is None
        assert con.errorInfo() == ['00000', None, None]

        stmt = con.prepare("SELECT 1 FROM dual")
        assert stmt.errorCode() is None
        assert stmt.errorInfo() == ['00000', None, None]

    def test_prepare_error(self):
        self.handle.on("SELEC ", prepare_error=(900, 'ORA-00900: invalid SQL statement'))
        con = self._connect()

        with pytest.raises(pyoci8pdo.ProgrammingError):
            con.prepare("SELEC 1 FROM dual")

        con = self._silent()
        assert con.prepare("SELEC 1 FROM dual") is False
        assert con.errorInfo()[1] == 900

    def test_prepare_options(self):
        con = self._connect()
        stmt = con.prepare("SELECT 1 FROM dual", {pyoci8pdo.ATTR_CASE: pyoci8pdo.CASE_LOWER})
        assert stmt.getAttribute(pyoci8pdo.ATTR_CASE) == pyoci8pdo.CASE_LOWER
        assert stmt.getAttribute(pyoci8pdo.ATTR_DRIVER_NAME) == 'oci'

    def test_exec(self):
        self.handle.on("DELETE", rowcount=3)
        con = self._connect()

        assert con.exec("DELETE FROM people") == 3
        assert self.handle.cursors[0].closed

    def test_exec_error_silent(self):
        self.handle.on("DELETE", error=(942, 'ORA-00942: table or view does not exist'))
        con = self._silent()
        assert con.exec("DELETE FROM people") is False

    def test_query(self):
        self.handle.on("FROM people", columns=['ID', 'NAME'], rows=[(1, 'alice')])
        con = self._connect()

        stmt = con.query("SELECT id, name FROM people")
        assert stmt.fetch(pyoci8pdo.FETCH_ASSOC) == {'ID': 1, 'NAME': 'alice'}

        stmt = con.query("SELECT id, name FROM people", pyoci8pdo.FETCH_COLUMN, 1)
        assert stmt.fetch() == 'alice'

    def test_last_insert_id(self):
        self.handle.on("CURRVAL", columns=['CURRVAL'], rows=[(42,)])
        con = self._connect()

        assert con.lastInsertId('people_seq') == 42
        assert self.handle.executed[-1].sql == "SELECT people_seq.CURRVAL FROM DUAL"

        with pytest.raises(pyoci8pdo.NotSupportedError):
            con.lastInsertId()
        with pytest.raises(pyoci8pdo.ProgrammingError):
            con.lastInsertId("x FROM dual; --")

    def test_last_insert_id_silent(self):
        con = self._silent()
        assert con.lastInsertId() is None
        assert con.errorInfo()[1] == 'IM001'

    def test_quote(self):
        con = self._connect()
        assert con.quote("O'Reilly") == "'O''Reilly'"
        assert con.quote('') == "''"
        with pytest.raises(pyoci8pdo.NotSupportedError):
            con.quote(1, pyoci8pdo.PARAM_INT)

    def test_native_helpers(self):
        con = self._connect()

        assert con.getConnectionHandler().handle is self.handle

        cursor = con.getNewCursor()
        assert isinstance(cursor, NativeStatement)
        assert con.closeCursor(cursor)
        assert cursor.freed

        assert con.getNewDescriptor().kind == pyoci8pdo.PARAM_BLOB
        assert con.getNewDescriptor(pyoci8pdo.PARAM_CLOB).kind == pyoci8pdo.PARAM_CLOB
        assert con.getNewDescriptor(pyoci8pdo.PARAM_LOB).kind == pyoci8pdo.PARAM_BLOB

    def test_close(self):
        con = self._connect()
        stmt = con.prepare("SELECT 1 FROM dual")
        other = con.prepare("SELECT 2 FROM dual")
        other.closeCursor()

        con.close()
        assert con.closed
        assert self.handle.closed
        assert stmt.closed
        assert con.connection_config()['connected'] is False

        with pytest.raises(pyoci8pdo.InterfaceError):
            stmt.fetch()
        with pytest.raises(pyoci8pdo.InterfaceError):
            con.prepare("SELECT 1 FROM dual")
        with pytest.raises(pyoci8pdo.InterfaceError):
            con.commit()
        with pytest.raises(pyoci8pdo.InterfaceError):
            con.close()

    def test_dropped_statements_release_cursors(self):
        con = self._connect()
        results = []
        for i in range(5):
            stmt = con.prepare("SELECT %d FROM dual" % (i))
            results.append(stmt.execute())
        del stmt
        gc.collect()

        assert results == [True] * 5

        assert len(self.handle.cursors) == 5
        assert all(cursor.closed for cursor in self.handle.cursors)

        # Nothing is left for close() to release
        con.close()
        assert self.handle.closed

    def test_dropped_statement_releases_pending_lobs(self):
        con = self._connect()
        stmt = con.prepare("INSERT INTO files (body) VALUES (EMPTY_BLOB()) "
                           "RETURNING body INTO :body")
        body = pyoci8pdo.Variable(b'never written')
        stmt.bindParam(':body', body, pyoci8pdo.PARAM_BLOB)

        del stmt
        gc.collect()
        assert body.value.freed
        assert self.handle.cursors[0].closed

    def test_context_manager_commit(self):
        with self._connect() as con:
            con.beginTransaction()
        assert self.handle.commits == 1
        assert self.handle.rollbacks == 0
        assert con.closed

    def test_context_manager_rollback(self):
        with pytest.raises(RuntimeError):
            with self._connect() as con:
                con.beginTransaction()
                raise RuntimeError("boom")
        assert self.handle.commits == 0
        assert self.handle.rollbacks == 1
        assert con.closed
