"""Constants shared by the PDO-style API and the Oracle native layer.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

# pylint: disable=bad-whitespace

# Parameter types
PARAM_NULL                        = 0
PARAM_INT                         = 1
PARAM_STR                         = 2
PARAM_LOB                         = 3
PARAM_STMT                        = 4
PARAM_BOOL                        = 5

# Large object parameter types (same values as the OCI bind types)
PARAM_CLOB                        = 112
PARAM_BLOB                        = 113

# Large object write-through strategies
LOB_SQL                           = 0      # save into the locator after execute
LOB_PL_SQL                        = 1      # write a temporary LOB before execute

# Fetch modes
FETCH_LAZY                        = 1
FETCH_ASSOC                       = 2
FETCH_NUM                         = 3
FETCH_BOTH                        = 4
FETCH_OBJ                         = 5
FETCH_BOUND                       = 6
FETCH_COLUMN                      = 7
FETCH_CLASS                       = 8
FETCH_INTO                        = 9
FETCH_PROPS_LATE                  = 1048576

# Cursor orientations
FETCH_ORI_NEXT                    = 0
FETCH_ORI_PRIOR                   = 1
FETCH_ORI_FIRST                   = 2
FETCH_ORI_LAST                    = 3
FETCH_ORI_ABS                     = 4
FETCH_ORI_REL                     = 5

# Attributes
ATTR_AUTOCOMMIT                   = 0
ATTR_ERRMODE                      = 3
ATTR_SERVER_VERSION               = 4
ATTR_CLIENT_VERSION               = 5
ATTR_CASE                         = 8
ATTR_ORACLE_NULLS                 = 11
ATTR_PERSISTENT                   = 12
ATTR_DRIVER_NAME                  = 16
ATTR_DEFAULT_FETCH_MODE           = 19

CASE_NATURAL                      = 0
CASE_UPPER                        = 1
CASE_LOWER                        = 2

ERRMODE_SILENT                    = 0
ERRMODE_WARNING                   = 1
ERRMODE_EXCEPTION                 = 2

NULL_NATURAL                      = 0
NULL_EMPTY_STRING                 = 1
NULL_TO_STRING                    = 2

# Native bind types
SQLT_CHR                          = 1
SQLT_INT                          = 3
SQLT_NTY                          = 108
SQLT_CLOB                         = PARAM_CLOB
SQLT_BLOB                         = PARAM_BLOB
SQLT_RSET                         = 116

# Native execute modes
NO_AUTO_COMMIT                    = 0
COMMIT_ON_SUCCESS                 = 32

# SQLSTATE values reported by errorCode() and errorInfo()
SQLSTATE_SUCCESS                  = '00000'
SQLSTATE_GENERAL_ERROR            = 'HY000'
SQLSTATE_NOT_SUPPORTED            = 'IM001'

# Oracle error code values
UNIQUE_CONSTRAINT                 = 1
DEADLOCK                          = 60
INTERNAL_ERROR                    = 600
INVALID_SQL_STATEMENT             = 900
INVALID_IDENTIFIER                = 904
MISSING_EXPRESSION                = 936
NO_SUCH_TABLE                     = 942
NAME_ALREADY_USED                 = 955
NOT_ALL_VARIABLES_BOUND           = 1008
INVALID_LOGON                     = 1017
ILLEGAL_VARIABLE_NAME             = 1036
NOT_LOGGED_ON                     = 1012
SHUTDOWN_IN_PROGRESS              = 1089
CANNOT_INSERT_NULL                = 1400
VALUE_TOO_LARGE_OLD               = 1401
FETCH_OUT_OF_SEQUENCE             = 1002
PRECISION_EXCEEDED                = 1438
DIVISOR_IS_ZERO                   = 1476
INVALID_NUMBER                    = 1722
DATE_FORMAT_ERROR                 = 1830
INVALID_MONTH                     = 1843
CHECK_CONSTRAINT                  = 2290
PARENT_KEY_NOT_FOUND              = 2291
CHILD_RECORD_FOUND                = 2292
FEATURE_NOT_IMPLEMENTED           = 3001
END_OF_FILE_ON_CHANNEL            = 3113
NOT_CONNECTED                     = 3114
CONNECTION_LOST                   = 3135
PLSQL_COMPILE_ERROR               = 6550
ACCESS_VIOLATION                  = 7445
CONNECT_TIMEOUT                   = 12170
SERVICE_UNKNOWN                   = 12514
NO_LISTENER                       = 12541
VALUE_TOO_LARGE                   = 12899
FETCH_WITHOUT_EXECUTE             = 24374


DATA_ERRORS = {VALUE_TOO_LARGE_OLD,
               PRECISION_EXCEEDED,
               DIVISOR_IS_ZERO,
               INVALID_NUMBER,
               DATE_FORMAT_ERROR,
               INVALID_MONTH,
               VALUE_TOO_LARGE}

OPERATIONAL_ERRORS = {INVALID_LOGON,
                      NOT_LOGGED_ON,
                      SHUTDOWN_IN_PROGRESS,
                      END_OF_FILE_ON_CHANNEL,
                      NOT_CONNECTED,
                      CONNECTION_LOST,
                      CONNECT_TIMEOUT,
                      SERVICE_UNKNOWN,
                      NO_LISTENER}

INTERNAL_ERRORS = {DEADLOCK,
                   INTERNAL_ERROR,
                   ACCESS_VIOLATION}

INTEGRITY_ERRORS = {UNIQUE_CONSTRAINT,
                    CANNOT_INSERT_NULL,
                    CHECK_CONSTRAINT,
                    PARENT_KEY_NOT_FOUND,
                    CHILD_RECORD_FOUND}

PROGRAMMING_ERRORS = {INVALID_SQL_STATEMENT,
                      INVALID_IDENTIFIER,
                      MISSING_EXPRESSION,
                      NO_SUCH_TABLE,
                      NAME_ALREADY_USED,
                      NOT_ALL_VARIABLES_BOUND,
                      ILLEGAL_VARIABLE_NAME,
                      FETCH_OUT_OF_SEQUENCE,
                      PLSQL_COMPILE_ERROR,
                      FETCH_WITHOUT_EXECUTE}

NOT_SUPPORTED_ERRORS = {FEATURE_NOT_IMPLEMENTED}


def ora_code(error_code):
    # type: (object) -> str
    """Return the ORA-nnnnn form of a native error code."""
    if isinstance(error_code, int):
        return 'ORA-%05d' % (error_code)
    return str(error_code)
