"""Classes containing the exceptions for reporting errors.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

from typing import Any, List, Optional  # pylint: disable=unused-import

from . import protocol

__all__ = ['Warning', 'Error', 'InterfaceError', 'DatabaseError',
           'DataError', 'OperationalError', 'IntegrityError', 'InternalError',
           'ProgrammingError', 'NotSupportedError', 'db_error_handler']


class Warning(Exception):
    def __init__(self, value):
        self.__value = value

    def __str__(self):
        return repr(self.__value)


class Error(Exception):
    """Base of all driver errors.

    :ivar code: The native (Oracle) error code, if any.
    :ivar errorInfo: The [SQLSTATE, native code, native message] triple of
                     the object that reported the error, if any.
    """

    def __init__(self, value, code=None, error_info=None):
        # type: (str, Any, Optional[List[Any]]) -> None
        self.__value = value
        self.code = code
        self.errorInfo = error_info

    @property
    def message(self):
        # type: () -> str
        return self.__value

    def __str__(self):
        return repr(self.__value)


class InterfaceError(Error):
    def __init__(self, value, code=None, error_info=None):
        Error.__init__(self, value, code, error_info)


class DatabaseError(Error):
    def __init__(self, value, code=None, error_info=None):
        Error.__init__(self, value, code, error_info)


class DataError(DatabaseError):
    def __init__(self, value, code=None, error_info=None):
        DatabaseError.__init__(self, value, code, error_info)


class OperationalError(DatabaseError):
    def __init__(self, value, code=None, error_info=None):
        DatabaseError.__init__(self, value, code, error_info)


class IntegrityError(DatabaseError):
    def __init__(self, value, code=None, error_info=None):
        DatabaseError.__init__(self, value, code, error_info)


class InternalError(DatabaseError):
    def __init__(self, value, code=None, error_info=None):
        DatabaseError.__init__(self, value, code, error_info)


class ProgrammingError(DatabaseError):
    def __init__(self, value, code=None, error_info=None):
        DatabaseError.__init__(self, value, code, error_info)


class NotSupportedError(DatabaseError):
    def __init__(self, value, code=None, error_info=None):
        DatabaseError.__init__(self, value, code, error_info)


def db_error_handler(error_code, error_string, error_info=None):
    """
    :type error_code int
    :type error_string str
    :type error_info list
    """
    error_code_string = protocol.ora_code(error_code)
    message = error_string
    if isinstance(error_code, int) and not message.startswith(error_code_string):
        message = error_code_string + ': ' + error_string
    if error_code in protocol.DATA_ERRORS:
        raise DataError(message, error_code, error_info)
    elif error_code in protocol.OPERATIONAL_ERRORS:
        raise OperationalError(message, error_code, error_info)
    elif error_code in protocol.INTEGRITY_ERRORS:
        raise IntegrityError(message, error_code, error_info)
    elif error_code in protocol.INTERNAL_ERRORS:
        raise InternalError(message, error_code, error_info)
    elif error_code in protocol.PROGRAMMING_ERRORS:
        raise ProgrammingError(message, error_code, error_info)
    elif error_code == protocol.SQLSTATE_NOT_SUPPORTED:
        raise NotSupportedError(message, error_code, error_info)
    elif error_code in protocol.NOT_SUPPORTED_ERRORS:
        raise NotSupportedError(message, error_code, error_info)
    else:
        raise DatabaseError(message, error_code, error_info)
