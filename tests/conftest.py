"""
(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import logging
import pytest

from .fakes import FakeConnection

_log = logging.getLogger("pyoci8pdotest")


@pytest.fixture
def handle():
    # type: () -> FakeConnection
    """An in-memory python-oracledb connection."""
    fake = FakeConnection()
    _log.debug("Created in-memory connection %r", fake)
    return fake

