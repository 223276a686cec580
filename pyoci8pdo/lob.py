"""Large object handles.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['Lob', 'PendingLob']

from typing import Any  # pylint: disable=unused-import

from . import protocol


class Lob(object):
    """A large object kind paired with its native LOB handle.

    :ivar type: PARAM_CLOB or PARAM_BLOB.
    :ivar object: The native LOB descriptor.
    """

    def __init__(self, type=None, object=None):  # pylint: disable=redefined-builtin
        # type: (Any, Any) -> None
        self.type = type
        self.object = object


class PendingLob(Lob):
    """A LOB parameter whose data is transferred when the statement runs.

    With LOB_SQL the value is saved into the locator after execute; with
    LOB_PL_SQL it is written into a temporary LOB before execute.
    """

    def __init__(self, type, object, strategy=protocol.LOB_SQL, value=None):  # pylint: disable=redefined-builtin
        # type: (int, Any, int, Any) -> None
        super(PendingLob, self).__init__(type, object)
        if strategy not in (protocol.LOB_SQL, protocol.LOB_PL_SQL):
            raise ValueError("unknown LOB strategy %r" % (strategy,))
        self.strategy = strategy
        self.value = value

    def flush(self):
        # type: () -> None
        """Transfer the captured value through the native descriptor."""
        if self.strategy == protocol.LOB_PL_SQL:
            self.object.write_temporary(self.value)
        else:
            self.object.save(self.value)

    def release(self):
        # type: () -> None
        self.object.free()
