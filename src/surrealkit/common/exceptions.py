from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for surrealkit operations.

    This enum provides categorized error codes that can be used
    to identify error types without creating numerous exception classes.

    Attributes:
        CONFIG_*: Required connection settings are missing
        VALIDATION_*: Builder methods called out of order
        CONNECTION_*: Network, authentication and session errors
        EXECUTION_*: Errors reported while running a statement
    """
    # Configuration errors
    CONFIG_MISSING = "CONFIG_001"

    # Validation errors
    INVALID_SEQUENCE = "VALIDATION_001"

    # Connection errors
    CONNECTION_ERROR = "CONNECTION_001"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"


class SurrealKitError(Exception):
    """Base exception for all surrealkit errors.

    Uses error codes for categorization instead of a deep hierarchy of
    exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    default_code: ErrorCode = ErrorCode.EXECUTION_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize surrealkit error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum, defaults to the
                class's ``default_code``
            details: Additional error details
            cause: Optional underlying exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from surrealkit.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": self.error_code.value,
                "details": self.details,
            },
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


class ConfigurationError(SurrealKitError, ValueError):
    """A setting needed to reach SurrealDB is not configured."""

    default_code = ErrorCode.CONFIG_MISSING


class SurrealConnectionError(SurrealKitError, ConnectionError):
    """Establishing a session with SurrealDB failed.

    Also a builtin ``ConnectionError`` so generic network handlers catch it.
    """

    default_code = ErrorCode.CONNECTION_ERROR


class InvalidSequenceError(SurrealKitError):
    """A builder method was called out of order (``or_()`` before ``where()``)."""

    default_code = ErrorCode.INVALID_SEQUENCE


class QueryError(SurrealKitError):
    """SurrealDB reported an error status for a statement."""

    default_code = ErrorCode.QUERY_EXECUTION_ERROR


# Helper functions for common error scenarios
def connection_error(
    message: str,
    host: Optional[str] = None,
    namespace: Optional[str] = None,
    database: Optional[str] = None,
    **kwargs
) -> SurrealConnectionError:
    """Create a connection error.

    Args:
        message: Error message
        host: Host/endpoint that failed
        namespace: Namespace the session was opened for
        database: Database the session was opened for
        **kwargs: Additional error details

    Returns:
        SurrealConnectionError with CONNECTION_ERROR code
    """
    details = kwargs.pop('details', None) or {}
    if host:
        details["host"] = host
    if namespace:
        details["namespace"] = namespace
    if database:
        details["database"] = database

    return SurrealConnectionError(message=message, details=details, **kwargs)


def config_missing_error(setting: str, message: Optional[str] = None, **kwargs) -> ConfigurationError:
    """Create an error for a setting that has no value.

    Args:
        setting: Environment variable that would provide the value
        message: Error message, defaults to naming the setting

    Returns:
        ConfigurationError with CONFIG_MISSING code
    """
    details = kwargs.pop('details', None) or {}
    details["setting"] = setting

    return ConfigurationError(
        message=f"{message or 'Missing setting'} ({setting})",
        details=details,
        **kwargs
    )


def invalid_sequence_error(
    method: str,
    expected: str,
    **kwargs
) -> InvalidSequenceError:
    """Create an invalid call sequence error.

    Args:
        method: Builder method that was called
        expected: Method that has to be called first

    Returns:
        InvalidSequenceError with INVALID_SEQUENCE code
    """
    details = kwargs.pop('details', None) or {}
    details["method"] = method
    details["expected"] = expected

    return InvalidSequenceError(
        message=f"{method}() must be preceded by {expected}()",
        details=details,
        **kwargs
    )


def query_error(
    query: str,
    detail: Any,
    statement: Optional[int] = None,
    **kwargs
) -> QueryError:
    """Create a query error for a failed statement.

    Args:
        query: Query text that was sent
        detail: Error payload reported by SurrealDB
        statement: Index of the failing statement in a multi-statement script

    Returns:
        QueryError with QUERY_EXECUTION_ERROR code
    """
    details = kwargs.pop('details', None) or {}
    # Truncate long queries to keep log entries bounded
    details["query"] = query[:500] + "..." if len(query) > 500 else query
    if statement is not None:
        details["statement"] = statement

    return QueryError(
        message=f"Query execution failed: {detail}",
        details=details,
        **kwargs
    )
