"""Last-error bookkeeping for connections and statements.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
NativeError -- A single error reported by the native driver.
ErrorState -- The last error recorded by a connection or statement.
"""

__all__ = ['NativeError', 'ErrorState']

from collections import namedtuple

from typing import Any, List, Optional  # pylint: disable=unused-import

from . import protocol


class NativeError(namedtuple('NativeError', ['code', 'message', 'offset', 'sqltext'])):
    """An error reported by the native driver.

    :ivar code: Oracle error number (or a SQLSTATE string for errors raised
                by the driver itself).
    :ivar message: Error text.
    :ivar offset: Offset into the SQL text where the error was detected.
    :ivar sqltext: The SQL text being processed, if any.
    """

    __slots__ = ()

    def __new__(cls, code, message, offset=None, sqltext=None):
        return super(NativeError, cls).__new__(cls, code, message, offset, sqltext)


class ErrorState(object):
    """The last error seen by a connection or statement.

    The state starts out as "no error".  Recording a new error replaces the
    previous one; successful operations leave it untouched.
    """

    def __init__(self):
        # type: () -> None
        self.__error = None  # type: Optional[NativeError]

    @property
    def error(self):
        # type: () -> Optional[NativeError]
        return self.__error

    def record(self, error):
        # type: (NativeError) -> NativeError
        self.__error = error
        return error

    def error_code(self):
        # type: () -> Optional[str]
        """Return the generic failure SQLSTATE, or None if nothing failed."""
        if self.__error is not None:
            return protocol.SQLSTATE_GENERAL_ERROR
        return None

    def error_info(self):
        # type: () -> List[Any]
        """Return [SQLSTATE, native code, native message]."""
        if self.__error is not None:
            return [protocol.SQLSTATE_GENERAL_ERROR,
                    self.__error.code, self.__error.message]
        return [protocol.SQLSTATE_SUCCESS, None, None]
