"""Common utilities and exceptions for surrealkit.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    SurrealKitError and include structured error information.
"""

from surrealkit.common.exceptions import (
    ConfigurationError,
    ErrorCode,
    InvalidSequenceError,
    QueryError,
    SurrealConnectionError,
    SurrealKitError,
    # Helper functions
    config_missing_error,
    connection_error,
    invalid_sequence_error,
    query_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SurrealKitError",
    "ErrorCode",
    "ConfigurationError",
    "SurrealConnectionError",
    "InvalidSequenceError",
    "QueryError",
    # Helper functions
    "config_missing_error",
    "connection_error",
    "invalid_sequence_error",
    "query_error",
]
