"""A PDO-style database interface for Oracle, built on python-oracledb.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__version__ = '1.0.0'

from .connection import *   # pylint: disable=wildcard-import
from .datatype import *     # pylint: disable=wildcard-import
from .exception import *    # pylint: disable=wildcard-import, redefined-builtin
from .materializer import *  # pylint: disable=wildcard-import
from .protocol import *     # pylint: disable=wildcard-import
from .statement import Statement
