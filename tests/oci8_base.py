"""
(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

from typing import Any, Optional  # pylint: disable=unused-import

import pyoci8pdo

from .fakes import FakeConnection


class Oci8Base(object):
    longMessage = True

    # Set the driver module for the imported test suites
    driver = pyoci8pdo  # type: Any

    handle = None  # type: Optional[FakeConnection]

    @pytest.fixture(autouse=True)
    def _setup(self, handle):
        self.handle = handle

    def _connect(self, options=None):
        return pyoci8pdo.connect(native=self.handle, options=options)

    def _silent(self):
        return self._connect({pyoci8pdo.ATTR_ERRMODE: pyoci8pdo.ERRMODE_SILENT})
