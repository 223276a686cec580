"""Named parameter binding for prepared statements.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
ParameterBinder -- Binds host values and variables to named placeholders.

Exported Functions:
native_type_for -- Map a PARAM_* type to its native bind type.
"""

__all__ = ['ParameterBinder', 'native_type_for']

import collections

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple  # pylint: disable=unused-import

from . import protocol
from .datatype import Variable
from .errorstate import ErrorState  # pylint: disable=unused-import
from .exception import NotSupportedError
from .lob import PendingLob
from .native import NativeDriverError, NativeStatement  # pylint: disable=unused-import

LOB_TYPES = (protocol.PARAM_BLOB, protocol.PARAM_CLOB)

# Anything not listed binds as a character string.
_TYPE_MAP = {
    protocol.PARAM_BOOL: protocol.SQLT_INT,
    protocol.PARAM_NULL: protocol.SQLT_CHR,
    protocol.PARAM_INT: protocol.SQLT_INT,
    protocol.PARAM_STR: protocol.SQLT_CHR,
    protocol.PARAM_STMT: protocol.SQLT_RSET,
    protocol.SQLT_NTY: protocol.SQLT_NTY,
}


def native_type_for(data_type):
    # type: (Any) -> int
    """Return the native bind type for a PARAM_* data type."""
    return _TYPE_MAP.get(data_type, protocol.SQLT_CHR)


def _strlen(value):
    # type: (Any) -> int
    if value is None or value is False:
        return 0
    if value is True:
        return 1
    if isinstance(value, (str, bytes, bytearray)):
        return len(value)
    return len(str(value))


def _is_numeric_name(name):
    # type: (Any) -> bool
    if isinstance(name, bool):
        return False
    if isinstance(name, int):
        return True
    return isinstance(name, str) and name.strip().lstrip('+-').isdigit()


class ParameterBinder(object):
    """Bind values to the named placeholders of one statement.

    LOB parameters are not transferred when bound: a LOB descriptor takes
    the place of the value and a PendingLob records what to write when the
    statement executes.  The pending LOBs are kept in two ordered maps, one
    per strategy, and a name is filed under at most one of them.
    """

    def __init__(self, native, new_descriptor, error_state):
        # type: (NativeStatement, Callable[[int], Any], ErrorState) -> None
        self.__native = native
        self.__new_descriptor = new_descriptor
        self.__error = error_state
        # LOBs displaced while a snapshot is open; freed when it is dropped
        self.__displaced = None  # type: Optional[List[PendingLob]]
        self.save_lobs = collections.OrderedDict()   # type: Dict[str, PendingLob]
        self.write_lobs = collections.OrderedDict()  # type: Dict[str, PendingLob]
        # name -> (variable, data_type, length) for parameters bound by reference
        self.__refs = collections.OrderedDict()      # type: Dict[str, Tuple[Variable, Any, int]]

    @property
    def lobs_value(self):
        # type: () -> Dict[str, Any]
        """The raw values captured for every pending LOB parameter."""
        values = collections.OrderedDict()  # type: Dict[str, Any]
        for name, pending in self.save_lobs.items():
            values[name] = pending.value
        for name, pending in self.write_lobs.items():
            values[name] = pending.value
        return values

    def has_pending_lobs(self):
        # type: () -> bool
        return bool(self.save_lobs) or bool(self.write_lobs)

    def bind(self, name, variable, data_type=protocol.PARAM_STR, length=-1,
             driver_options=None):
        # type: (Any, Any, Any, int, Optional[Iterable[int]]) -> bool
        """Bind VARIABLE to the placeholder NAME.

        :param name: Placeholder name, with or without the leading colon.
        :param variable: A Variable to bind by reference, or a plain value.
        :param data_type: One of the PARAM_* types.
        :param length: Maximum length, or -1 to use the value's length.
        :param driver_options: LOB_SQL or LOB_PL_SQL for LOB parameters.
        :returns: True if the native bind succeeded.
        :raises NotSupportedError: If NAME is a positional placeholder.
        """
        if _is_numeric_name(name):
            raise NotSupportedError("Statement.bindParam() does not implement "
                                    "binding numerical params.")
        key = str(name)
        if key.startswith(":"):
            key = key[1:]
        requested_length = length
        by_ref = isinstance(variable, Variable)
        value = variable.value if by_ref else variable

        if isinstance(value, (list, tuple)):
            try:
                self.__native.bind_array_by_name(key, value, len(value), length,
                                                 native_type_for(data_type))
            except NativeDriverError as e:
                self.__error.record(e.error)
                return False
            self._remember(key, variable if by_ref else None, data_type, requested_length)
            return True

        if data_type == protocol.PARAM_LOB:
            data_type = protocol.PARAM_BLOB
        if length == -1:
            length = _strlen(value)

        if data_type in LOB_TYPES:
            self._discard_lob(key)
            descriptor = self.__new_descriptor(data_type)
            if by_ref:
                variable.value = descriptor
            strategy = protocol.LOB_SQL
            if driver_options and protocol.LOB_PL_SQL in driver_options \
                    and protocol.LOB_SQL not in driver_options:
                strategy = protocol.LOB_PL_SQL
            pending = PendingLob(data_type, descriptor, strategy, value)
            try:
                self.__native.bind_by_name(key, descriptor, length, data_type)
            except NativeDriverError as e:
                descriptor.free()
                self.__error.record(e.error)
                return False
            if strategy == protocol.LOB_PL_SQL:
                self.write_lobs[key] = pending
            else:
                self.save_lobs[key] = pending
            self.__refs.pop(key, None)
            return True

        try:
            self.__native.bind_by_name(key, value, length, native_type_for(data_type))
        except NativeDriverError as e:
            self.__error.record(e.error)
            return False
        self._discard_lob(key)
        self._remember(key, variable if by_ref else None, data_type, requested_length)
        return True

    def _remember(self, key, variable, data_type, length):
        # type: (str, Optional[Variable], Any, int) -> None
        if variable is None:
            self.__refs.pop(key, None)
        else:
            self.__refs[key] = (variable, data_type, length)

    def _discard_lob(self, key):
        # type: (str) -> None
        for pending_lobs in (self.save_lobs, self.write_lobs):
            pending = pending_lobs.pop(key, None)
            if pending is None:
                continue
            if self.__displaced is not None:
                self.__displaced.append(pending)
            else:
                pending.release()

    def refresh(self):
        # type: () -> bool
        """Re-read the current value of every by-reference variable."""
        for key, (variable, data_type, length) in list(self.__refs.items()):
            if not self.bind(key, variable, data_type, length):
                return False
        return True

    def collect(self, wrap_cursor=None):
        # type: (Optional[Callable[[Any], Any]]) -> None
        """Copy OUT values back into the by-reference variables.

        Ref cursors are passed through WRAP_CURSOR when it is given.
        """
        for key, (variable, data_type, _) in self.__refs.items():
            value = self.__native.bound_value(key)
            if data_type == protocol.PARAM_STMT and value is not None \
                    and wrap_cursor is not None:
                value = wrap_cursor(value)
            variable.value = value

    def snapshot(self):
        # type: () -> Tuple[Any, ...]
        """Record the current bindings so that restore() can return to them.

        Until the snapshot is restored or dropped, LOBs displaced by a new
        binding are kept instead of being freed.
        """
        self.__displaced = []
        return (self.__native.bound(), collections.OrderedDict(self.__refs),
                collections.OrderedDict(self.save_lobs),
                collections.OrderedDict(self.write_lobs))

    def restore(self, snapshot):
        # type: (Tuple[Any, ...]) -> None
        """Undo every binding made since SNAPSHOT was taken."""
        binds, refs, save_lobs, write_lobs = snapshot
        kept = set(id(p) for p in save_lobs.values())
        kept.update(id(p) for p in write_lobs.values())
        current = list(self.save_lobs.values()) + list(self.write_lobs.values())
        current.extend(self.__displaced or [])
        self.__displaced = None
        for pending in current:
            if id(pending) not in kept:
                pending.release()
        self.__native.restore_binds(binds)
        self.__refs = refs
        self.save_lobs = save_lobs
        self.write_lobs = write_lobs

    def drop_snapshot(self):
        # type: () -> None
        """Keep the bindings made since the last snapshot."""
        displaced, self.__displaced = self.__displaced or [], None
        for pending in displaced:
            pending.release()

    def release(self):
        # type: () -> None
        """Free every pending LOB descriptor."""
        for pending_lobs in (self.save_lobs, self.write_lobs):
            for pending in pending_lobs.values():
                pending.release()
            pending_lobs.clear()
        self.__refs.clear()
